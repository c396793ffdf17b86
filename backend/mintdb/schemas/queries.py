"""
Named lookup variants accepted by DbHelper.

Tokens can be fetched by uuid or by (contractAddress, _id); collections by
uuid or by equality on caller fields.
"""
from typing import Any, Optional, Union

from bson import ObjectId
from pydantic import BaseModel, Field


class ByUUID(BaseModel):
    """Match a single record by uuid."""
    uuid: str = Field(..., description="Record uuid")

    class Config:
        frozen = True

    def to_filter(self) -> dict[str, Any]:
        return {"uuid": self.uuid}


class ByContract(BaseModel):
    """Match a token by issuing contract and database id."""
    contract_address: str = Field(..., description="Issuing contract address")
    token_id: Optional[str] = Field(None, description="MongoDB _id of the token")

    class Config:
        frozen = True

    def to_filter(self) -> dict[str, Any]:
        token_id: Any = self.token_id
        if token_id is not None and ObjectId.is_valid(token_id):
            token_id = ObjectId(token_id)
        return {"contractAddress": self.contract_address, "_id": token_id}


class ByFields(BaseModel):
    """Match collections whose caller fields equal every given value."""
    conditions: dict[str, Any] = Field(default_factory=dict, description="Field equality conditions")

    class Config:
        frozen = True

    def to_filter(self) -> dict[str, Any]:
        return dict(self.conditions)


TokenQuery = Union[ByUUID, ByContract]
CollectionQuery = Union[ByUUID, ByFields]
