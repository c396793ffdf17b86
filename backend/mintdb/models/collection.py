"""
Collection model for the collections collection.
"""
from typing import Any, Optional

from pydantic import Field

from mintdb.models.base import Record

# Fields owned by DbHelper; caller extras cannot override them
RESERVED_FIELDS = frozenset({"_id", "id", "uuid", "dateCreated", "date_created"})


class Collection(Record):
    """
    Caller-defined collection document.
    
    Only uuid and dateCreated are managed; any other keyword passed in is
    stored as-is.
    """
    uuid: Optional[str] = Field(None, description="Unique collection identifier, stamped on create")

    class Config:
        extra = "allow"

    def add_uuid_stamp(self) -> str:
        """Assign a fresh uuid and return it."""
        self.uuid = self.generate_uuid()
        return self.uuid

    @property
    def extra_fields(self) -> dict[str, Any]:
        """Caller-supplied fields."""
        return {
            key: value
            for key, value in (self.model_extra or {}).items()
            if key not in RESERVED_FIELDS
        }

    def to_document(self) -> dict[str, Any]:
        return {
            **self.extra_fields,
            "uuid": self.uuid,
            "dateCreated": self.date_created,
        }
