"""Memory Store Implementations."""
import logging
import threading
from typing import Dict, List, Optional

from txvault.domain.envelope.models import SealedRecord
from txvault.domain.envelope.ports import RecordStore

logger = logging.getLogger(__name__)


class MemoryRecordStore(RecordStore):
    """Process-local record store for dev mode and tests."""

    def __init__(self):
        self._records: Dict[str, SealedRecord] = {}
        self._lock = threading.Lock()

    def save(self, record: SealedRecord) -> None:
        with self._lock:
            if record.id in self._records:
                raise ValueError(f"Record {record.id} already exists")
            self._records[record.id] = record

    def get(self, record_id: str) -> Optional[SealedRecord]:
        return self._records.get(record_id)

    def delete(self, record_id: str) -> bool:
        with self._lock:
            return self._records.pop(record_id, None) is not None

    def list_recent(self, limit: int = 50, owner_tag: Optional[str] = None) -> List[SealedRecord]:
        with self._lock:
            records = list(self._records.values())
        if owner_tag is not None:
            records = [r for r in records if r.owner_tag == owner_tag]
        records.sort(key=lambda r: r.created_at, reverse=True)
        return records[:limit]

    def clear(self) -> None:
        with self._lock:
            self._records.clear()


_MEMORY_RECORD_STORE = MemoryRecordStore()


def get_memory_record_store() -> MemoryRecordStore:
    return _MEMORY_RECORD_STORE
