"""Dependency Injection Module."""
import logging
from typing import Generator

from txvault.settings import settings
from txvault.domain.envelope.cipher import EnvelopeCipher, get_envelope_cipher
from txvault.domain.envelope.master_key import MasterKeyHandle, get_master_key_handle
from txvault.domain.envelope.ports import RecordStore

logger = logging.getLogger(__name__)

STORE_BACKENDS = ("postgres", "memory")


def get_cipher() -> EnvelopeCipher:
    return get_envelope_cipher()


def get_key_handle() -> MasterKeyHandle:
    return get_master_key_handle()


def get_record_store() -> Generator[RecordStore, None, None]:
    """Yield the configured record store for one request."""
    backend = settings.STORE_BACKEND.lower()
    if backend == "memory":
        from txvault.adapters.memory_store.stores import get_memory_record_store
        yield get_memory_record_store()
        return
    if backend != "postgres":
        raise RuntimeError(f"STORE_BACKEND must be one of {STORE_BACKENDS}, got '{backend}'")

    from txvault.adapters.postgres.record_store import PostgresRecordStore
    from txvault.adapters.postgres.session import session_scope
    with session_scope() as db:
        yield PostgresRecordStore(db)
