from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from txvault.dependencies import get_key_handle, get_record_store
from txvault.domain.envelope.errors import ConfigError
from txvault.domain.envelope.master_key import MasterKeyHandle
from txvault.domain.envelope.ports import RecordStore
import logging

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
def health(
    store: RecordStore = Depends(get_record_store),
    key_handle: MasterKeyHandle = Depends(get_key_handle),
):
    """Health check: storage reachability and master key presence."""
    health = {
        "status": "ok",
        "database": "connected" if store.ping() else "disconnected",
    }

    try:
        key_handle.get()
        health["master_key"] = "loaded"
    except ConfigError as e:
        logger.error(f"Health check: master key unavailable ({e.code})")
        health["master_key"] = "missing"
        health["status"] = "degraded"

    health["timestamp"] = datetime.now(timezone.utc).isoformat()
    return health
