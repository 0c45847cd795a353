"""Envelope Domain Models."""
from datetime import datetime, timezone
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

from .aead import ALGORITHM_AES_256_GCM, KEY_SIZE, NONCE_SIZE, TAG_SIZE
from .master_key import MASTER_KEY_VERSION


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


# attribute -> expected decoded length, in validation order
FIXED_LENGTH_FIELDS: Dict[str, int] = {
    "payload_nonce": NONCE_SIZE,
    "payload_tag": TAG_SIZE,
    "wrapped_key_nonce": NONCE_SIZE,
    "wrapped_key_ciphertext": KEY_SIZE,
    "wrapped_key_tag": TAG_SIZE,
}


class SealedRecord(BaseModel):
    """
    Envelope-encrypted transaction record.

    All binary fields are hex strings (emitted lowercase). Wire names follow
    the transaction API; attribute names may also be used on input. The model
    does not check hex or lengths itself: a corrupted stored record must still
    load so that opening it can report which field is wrong.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    owner_tag: str = Field(..., alias="partyId")
    created_at: str = Field(default_factory=utc_timestamp, alias="createdAt")

    payload_nonce: str                                 # 12 bytes (24 hex chars)
    payload_ciphertext: str = Field(..., alias="payload_ct")  # variable length
    payload_tag: str                                   # 16 bytes (32 hex chars)

    wrapped_key_nonce: str = Field(..., alias="dek_wrap_nonce")    # 12 bytes
    wrapped_key_ciphertext: str = Field(..., alias="dek_wrapped")  # 32 bytes
    wrapped_key_tag: str = Field(..., alias="dek_wrap_tag")        # 16 bytes

    algorithm: str = Field(default=ALGORITHM_AES_256_GCM, alias="alg")
    key_version: int = Field(default=MASTER_KEY_VERSION, alias="mk_version")

    @classmethod
    def wire_name(cls, attribute: str) -> str:
        info = cls.model_fields[attribute]
        return info.alias or attribute

    def to_dict(self) -> Dict[str, Any]:
        """Wire form, as stored and returned by the API."""
        return self.model_dump(by_alias=True)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "SealedRecord":
        return SealedRecord.model_validate(data)
