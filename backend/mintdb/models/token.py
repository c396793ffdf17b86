"""
Token model for the tokens collection.
"""
from typing import Any, Optional

from pydantic import Field, field_validator

from mintdb.models.base import Record, new_uuid


class Token(Record):
    """
    Minted token document.
    
    The sequence number is stored as text so values beyond 2**53 survive
    clients that read numbers as doubles.
    """
    uuid: str = Field(default_factory=new_uuid, description="Unique token identifier")
    contract_address: str = Field("", alias="contractAddress", description="Issuing contract")
    sequence: Optional[int] = Field(None, description="Token sequence number within the contract")
    owner: Optional[str] = Field(None, description="Owning user uuid")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Caller token metadata")

    @field_validator("uuid", mode="before")
    @classmethod
    def _fill_uuid(cls, value: Any) -> Any:
        return value or new_uuid()

    @field_validator("sequence", mode="before")
    @classmethod
    def _parse_sequence(cls, value: Any) -> Any:
        # Stored text that is not a number reads back as no sequence
        if isinstance(value, str):
            text = value.strip()
            for base in (10, 0):
                try:
                    return int(text, base)
                except ValueError:
                    continue
            return None
        return value

    def to_document(self) -> dict[str, Any]:
        return {
            "uuid": self.uuid,
            "contractAddress": self.contract_address,
            "sequence": str(self.sequence) if self.sequence is not None else None,
            "owner": self.owner,
            "metadata": dict(self.metadata),
            "dateCreated": self.date_created,
        }
