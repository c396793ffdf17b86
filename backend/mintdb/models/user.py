"""
User model for the users collection.
"""
import secrets
from typing import Any

from pydantic import Field, field_validator

from mintdb.core.security import hash_code
from mintdb.models.base import Record, new_uuid


class User(Record):
    """
    User document, keyed by uuid and looked up by phone.
    
    Holds at most one in-flight SMS verification code.
    """
    uuid: str = Field(default_factory=new_uuid, description="Unique user identifier")
    phone: str = Field("", description="Phone number, secondary lookup key")
    pending_code: str = Field("", alias="pendingCode", description="Last code sent by SMS")
    code_hash: str = Field("", alias="codeHash", description="SHA256 hex of pending_code")
    last_sent_code: int = Field(
        0,
        alias="lastSentCode",
        description="When the last code was sent (epoch milliseconds)"
    )

    @field_validator("uuid", mode="before")
    @classmethod
    def _fill_uuid(cls, value: Any) -> Any:
        return value or new_uuid()

    def verify(self, code: str) -> bool:
        """
        Check a submitted code against the pending one.
        
        Both the raw pending code and its stored hash must match.
        """
        if not self.pending_code:
            return False
        hash_matches = secrets.compare_digest(self.code_hash.encode(), hash_code(code).encode())
        return self.pending_code == code and hash_matches

    def to_document(self) -> dict[str, Any]:
        return {
            "uuid": self.uuid,
            "phone": self.phone,
            "pendingCode": self.pending_code,
            "codeHash": self.code_hash,
            "lastSentCode": self.last_sent_code,
            "dateCreated": self.date_created,
        }
