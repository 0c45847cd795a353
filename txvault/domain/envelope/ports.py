"""Envelope Domain Ports (Interfaces)."""
from abc import ABC, abstractmethod
from typing import List, Optional
from .models import SealedRecord


class RecordStore(ABC):
    """Abstract Port for sealed record persistence.

    Stores hold records exactly as sealed; they never see plaintext or keys.
    """

    @abstractmethod
    def save(self, record: SealedRecord) -> None:
        """Persist a newly sealed record."""
        ...

    @abstractmethod
    def get(self, record_id: str) -> Optional[SealedRecord]:
        """Fetch a record by id, or None if absent."""
        ...

    @abstractmethod
    def delete(self, record_id: str) -> bool:
        """Delete a record. Returns True if it existed."""
        ...

    @abstractmethod
    def list_recent(self, limit: int = 50, owner_tag: Optional[str] = None) -> List[SealedRecord]:
        """List records newest first, optionally filtered by owner tag."""
        ...

    def ping(self) -> bool:
        """Return True if the backing storage is reachable."""
        return True
