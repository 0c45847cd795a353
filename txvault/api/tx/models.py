"""Transaction API request/response models."""
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class EncryptRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    party_id: Any = Field(default=None, alias="partyId")
    payload: Any = None


class EncryptResponse(BaseModel):
    id: str
    message: str = "Transaction encrypted and stored successfully"


class DecryptResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    party_id: str = Field(..., alias="partyId")
    created_at: str = Field(..., alias="createdAt")
    payload: Any


class RecordSummary(BaseModel):
    id: str
    partyId: str
    createdAt: str
    alg: str
    mk_version: int


class RecordListResponse(BaseModel):
    records: List[RecordSummary]
    count: int


def summarize(record) -> Dict[str, Any]:
    return {
        "id": record.id,
        "partyId": record.owner_tag,
        "createdAt": record.created_at,
        "alg": record.algorithm,
        "mk_version": record.key_version,
    }
