"""Transaction Router: encrypt, fetch and decrypt sealed records."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from txvault.api.tx.models import (
    DecryptResponse,
    EncryptRequest,
    EncryptResponse,
    RecordListResponse,
    summarize,
)
from txvault.dependencies import get_cipher, get_record_store
from txvault.domain.envelope.cipher import EnvelopeCipher
from txvault.domain.envelope.errors import EnvelopeError
from txvault.domain.envelope.models import SealedRecord
from txvault.domain.envelope.ports import RecordStore
from txvault.errors import raise_envelope_error, raise_vault_error

router = APIRouter()
logger = logging.getLogger(__name__)


def _fetch_or_404(store: RecordStore, record_id: str) -> SealedRecord:
    record = store.get(record_id)
    if record is None:
        raise_vault_error("NOT_FOUND", 404, "Transaction not found")
    return record


@router.post("/encrypt", response_model=EncryptResponse)
def encrypt_transaction(
    body: EncryptRequest,
    cipher: EnvelopeCipher = Depends(get_cipher),
    store: RecordStore = Depends(get_record_store),
):
    """Seal a JSON payload and store the resulting record."""
    if not body.party_id or not isinstance(body.party_id, str):
        raise_vault_error("INVALID_REQUEST", 400, "partyId is required and must be a string")
    if not isinstance(body.payload, dict):
        raise_vault_error("INVALID_REQUEST", 400, "payload is required and must be an object")

    try:
        record = cipher.seal(body.party_id, body.payload)
    except EnvelopeError as e:
        logger.error(f"Encryption failed for party {body.party_id}: {e.code}")
        raise_envelope_error(e)

    store.save(record)
    logger.info(f"Encrypted transaction {record.id} for party {body.party_id}")
    return EncryptResponse(id=record.id)


@router.get("", response_model=RecordListResponse)
def list_transactions(
    party_id: Optional[str] = Query(default=None, alias="partyId"),
    limit: int = Query(default=50, ge=1, le=500),
    store: RecordStore = Depends(get_record_store),
):
    """List record metadata, newest first. No ciphertext is returned."""
    records = store.list_recent(limit=limit, owner_tag=party_id)
    summaries = [summarize(r) for r in records]
    return {"records": summaries, "count": len(summaries)}


@router.get("/{record_id}")
def get_transaction(record_id: str, store: RecordStore = Depends(get_record_store)):
    """Return the sealed record verbatim, without decrypting."""
    record = _fetch_or_404(store, record_id)
    logger.info(f"Retrieved encrypted transaction {record_id}")
    return record.to_dict()


@router.post("/{record_id}/decrypt", response_model=DecryptResponse)
def decrypt_transaction(
    record_id: str,
    cipher: EnvelopeCipher = Depends(get_cipher),
    store: RecordStore = Depends(get_record_store),
):
    """Open a stored record and return its payload."""
    record = _fetch_or_404(store, record_id)

    try:
        payload = cipher.open(record)
    except EnvelopeError as e:
        logger.error(f"Decryption failed for transaction {record_id}: {e.code}")
        raise_envelope_error(e)

    logger.info(f"Decrypted transaction {record_id}")
    return DecryptResponse(
        id=record.id,
        party_id=record.owner_tag,
        created_at=record.created_at,
        payload=payload,
    )
