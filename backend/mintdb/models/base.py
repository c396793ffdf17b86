"""
Shared base for stored records.
"""
from abc import abstractmethod
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, TypeVar
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

RecordT = TypeVar("RecordT", bound="Record")


def new_uuid() -> str:
    """Random UUID4 as a string."""
    return str(uuid4())


def utc_now() -> datetime:
    """Current UTC time at the millisecond precision MongoDB stores."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class Record(BaseModel):
    """
    Base for documents stored by DbHelper.
    
    Records are detached values: they hold no reference to the database.
    """
    id: Optional[str] = Field(None, alias="_id", description="MongoDB ObjectId as string")
    date_created: Optional[datetime] = Field(
        None,
        alias="dateCreated",
        description="Set once by DbHelper on insert (UTC)"
    )

    class Config:
        populate_by_name = True

    @field_validator("date_created")
    @classmethod
    def _as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Naive datetimes read from MongoDB are UTC
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @staticmethod
    def generate_uuid() -> str:
        """Generate a fresh record UUID."""
        return new_uuid()

    @classmethod
    def from_database(cls: type[RecordT], raw: Mapping[str, Any]) -> RecordT:
        """
        Build a record from a raw stored document.
        
        The document's shape is trusted: absent or null fields take the
        model default instead of failing.
        """
        doc = {key: value for key, value in raw.items() if value is not None}
        if "_id" in doc:
            doc["_id"] = str(doc["_id"])
        return cls.model_validate(doc)

    @abstractmethod
    def to_document(self) -> dict[str, Any]:
        """Map to the stored document. Never includes _id."""
