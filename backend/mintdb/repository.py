"""
DbHelper - data access for users, tokens and collections.

Every method is a single request against MongoDB through one shared
client opened by connect() and released by close(). Create operations
check for an existing record before inserting; that check and the insert
are two separate requests, so concurrent creates can both pass the check
unless the unique indexes from create_indexes() are in place.
"""
import logging
import time
from typing import Any, Optional

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)
from pymongo.errors import DuplicateKeyError
from pymongo.results import InsertOneResult, UpdateResult

from mintdb.config import Settings, get_settings
from mintdb.core.errors import (
    AlreadyExistsError,
    MissingEnvVarError,
    NotFoundError,
    ThrottledError,
)
from mintdb.database.connections import create_mongo_client
from mintdb.database.layout import Collections, create_indexes
from mintdb.models.base import utc_now
from mintdb.models.collection import Collection
from mintdb.models.token import Token
from mintdb.models.user import User
from mintdb.schemas.queries import (
    ByContract,
    ByUUID,
    CollectionQuery,
    TokenQuery,
)

logger = logging.getLogger(__name__)


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)


class DbHelper:
    """
    Repository facade over one MongoDB database.

    Usage:
        db = await DbHelper().connect()
        try:
            user = await db.get_user_by_uuid(uuid)
        finally:
            await db.close()
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Validate configuration. No network activity happens here.

        Raises:
            MissingEnvVarError: If MONGO_URI or MONGO_DATABASE is empty
        """
        self.settings = settings or get_settings()

        if not self.settings.mongo_uri:
            raise MissingEnvVarError("MONGO_URI is not defined. Check your .env file.")
        if not self.settings.mongo_database:
            raise MissingEnvVarError("MONGO_DATABASE is not defined. Check your .env file.")

        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None

    # ==================== Connection ====================

    async def connect(self) -> "DbHelper":
        """Open the client and select the configured database."""
        if self.client is not None:
            return self

        self.client = create_mongo_client(
            self.settings.mongo_uri,
            self.settings.mongo_server_api_version,
        )
        self.db = self.client[self.settings.mongo_database]
        logger.info(f"Connected to MongoDB database {self.settings.mongo_database}")
        return self

    async def close(self) -> None:
        """
        Close the client.

        Raises:
            NotFoundError: If connect() was never called
        """
        if self.client is None:
            raise NotFoundError("Cannot close uninitialized connection")

        self.client.close()
        self.client = None
        self.db = None
        logger.info("MongoDB connection closed")

    async def __aenter__(self) -> "DbHelper":
        return await self.connect()

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def create_indexes(self) -> list[str]:
        """Create the unique indexes that back the create-time checks."""
        if self.db is None:
            raise NotFoundError("Database not connected, call connect() first")
        return await create_indexes(self.db)

    def _collection(self, name: str) -> AsyncIOMotorCollection:
        if self.db is None:
            raise NotFoundError("Database not connected, call connect() first")
        return self.db[name]

    async def _insert(self, name: str, doc: dict[str, Any], kind: str) -> InsertOneResult:
        try:
            result = await self._collection(name).insert_one(doc)
        except DuplicateKeyError as e:
            logger.warning(f"Duplicate {kind} rejected by unique index")
            raise AlreadyExistsError(f"{kind} already exists") from e
        logger.debug(f"Inserted {kind} {doc.get('uuid')}")
        return result

    # ==================== Users ====================

    async def create_user(self, user: User) -> InsertOneResult:
        """
        Insert a new user.

        Args:
            user: User to store; date_created and id are stamped on it

        Returns:
            Driver insert result

        Raises:
            AlreadyExistsError: If a user with the same phone exists
        """
        existing = await self.get_user_by_phone(user.phone)
        if existing is not None:
            logger.warning("User create rejected, phone already registered")
            raise AlreadyExistsError("user already exists")

        user.date_created = utc_now()
        result = await self._insert(Collections.USERS, user.to_document(), "user")
        user.id = str(result.inserted_id)
        return result

    async def update_user(self, user: User) -> UpdateResult:
        """
        Replace a stored user's fields, keyed by uuid.

        Strict policy: the user must already exist. The lookup and the
        write are one conditional request. dateCreated is never rewritten.

        Raises:
            NotFoundError: If no user has this uuid
        """
        fields = user.to_document()
        fields.pop("dateCreated")

        result = await self._collection(Collections.USERS).update_one(
            {"uuid": user.uuid},
            {"$set": fields},
            upsert=False,
        )
        if result.matched_count == 0:
            raise NotFoundError("user does not exist")

        logger.debug(f"Updated user {user.uuid}")
        return result

    async def get_user_by_phone(self, phone: str) -> Optional[User]:
        """Get a user by phone number, or None."""
        user_doc = await self._collection(Collections.USERS).find_one({"phone": phone})
        if not user_doc:
            return None
        return User.from_database(user_doc)

    async def get_user_by_uuid(self, uuid: str) -> User:
        """
        Get a user by uuid.

        Raises:
            NotFoundError: If no user has this uuid
        """
        user_doc = await self._collection(Collections.USERS).find_one({"uuid": uuid})
        if not user_doc:
            raise NotFoundError(f"Specified user UUID {uuid} does not exist")
        return User.from_database(user_doc)

    # ==================== SMS Verification ====================

    async def create_sms_token_for(self, phone: str, pending_code: str, code_hash: str) -> User:
        """
        Record a newly sent SMS verification code for a phone number.

        Creates the user on first use. Any previous pending code is
        overwritten.

        Args:
            phone: Destination phone number
            pending_code: Code sent to the user
            code_hash: SHA256 hex of pending_code

        Returns:
            The updated user

        Raises:
            ThrottledError: If the last code went out less than
                sms_resend_interval_seconds ago
        """
        user = await self.get_user_by_phone(phone)
        if user is None:
            user = User(uuid=User.generate_uuid(), phone=phone)
            await self.create_user(user)

        now = now_ms()
        window_ms = self.settings.sms_resend_interval_seconds * 1000
        elapsed = now - user.last_sent_code
        if elapsed < window_ms:
            logger.warning(f"SMS code for user {user.uuid} throttled")
            raise ThrottledError(
                f"last sent code less than {self.settings.sms_resend_interval_seconds} "
                "seconds, wait before sending",
                retry_after=(window_ms - elapsed) / 1000,
            )

        user.pending_code = pending_code
        user.code_hash = code_hash
        user.last_sent_code = now

        await self.update_user(user)
        return user

    async def verify_sms_code(self, phone: str, code: str) -> bool:
        """Check a submitted code for a phone number. False if no such user."""
        user = await self.get_user_by_phone(phone)
        if user is None:
            return False
        return user.verify(code)

    # ==================== Tokens ====================

    async def get_token(self, query: TokenQuery) -> Token:
        """
        Get a single token.

        Args:
            query: ByUUID or ByContract

        Raises:
            NotFoundError: If nothing matches
        """
        token_doc = await self._collection(Collections.TOKENS).find_one(query.to_filter())
        if not token_doc:
            raise NotFoundError("Specified token filter found no match")
        return Token.from_database(token_doc)

    async def get_token_by_uuid(self, uuid: str) -> Token:
        return await self.get_token(ByUUID(uuid=uuid))

    async def create_token(self, token: Token) -> InsertOneResult:
        """
        Insert a new token.

        The sequence is stored as text. When token.id is set it becomes the
        document _id.

        Raises:
            AlreadyExistsError: If a token with the same contract address
                and id exists
        """
        probe = ByContract(contract_address=token.contract_address, token_id=token.id)
        try:
            existing = await self.get_token(probe)
        except NotFoundError:
            existing = None

        if existing is not None:
            logger.warning(f"Token create rejected, {token.contract_address}/{token.id} exists")
            raise AlreadyExistsError("token already exists")

        token.date_created = utc_now()
        token_doc = token.to_document()
        if token.id is not None:
            token_doc["_id"] = probe.to_filter()["_id"]

        result = await self._insert(Collections.TOKENS, token_doc, "token")
        token.id = str(result.inserted_id)
        return result

    async def update_token(self, token: Token) -> UpdateResult:
        """
        Write a token's fields, keyed by uuid.

        Upsert policy: a token with an unknown uuid is created, with
        dateCreated set on insert only.
        """
        fields = token.to_document()
        fields.pop("dateCreated")

        result = await self._collection(Collections.TOKENS).update_one(
            {"uuid": token.uuid},
            {
                "$set": fields,
                "$setOnInsert": {"dateCreated": utc_now()},
            },
            upsert=True,
        )
        logger.debug(f"Upserted token {token.uuid}")
        return result

    # ==================== Collections ====================

    async def create_collection(self, collection: Collection) -> InsertOneResult:
        """
        Insert a new collection, stamping a uuid if it has none.

        Raises:
            AlreadyExistsError: If a collection with the uuid exists
        """
        if not collection.uuid:
            collection.add_uuid_stamp()

        existing = await self.get_collection_by_uuid(collection.uuid)
        if existing is not None:
            logger.warning(f"Collection create rejected, {collection.uuid} exists")
            raise AlreadyExistsError("collection already exists")

        collection.date_created = utc_now()
        result = await self._insert(Collections.COLLECTIONS, collection.to_document(), "collection")
        collection.id = str(result.inserted_id)
        return result

    async def get_collection_by_uuid(self, uuid: str) -> Optional[Collection]:
        """Get a collection by uuid, or None."""
        collection_doc = await self._collection(Collections.COLLECTIONS).find_one({"uuid": uuid})
        if not collection_doc:
            return None
        return Collection.from_database(collection_doc)

    async def get_collections_by_filter(self, query: CollectionQuery) -> list[Collection]:
        """
        Get every collection matching the query.

        No limit is applied; the full result set is materialized.
        """
        cursor = self._collection(Collections.COLLECTIONS).find(query.to_filter())
        collection_docs = await cursor.to_list(length=None)
        return [Collection.from_database(doc) for doc in collection_docs]
