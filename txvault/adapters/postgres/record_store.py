"""PostgresRecordStore - Database-backed storage for sealed transaction records."""
import logging
from typing import List, Optional

from sqlalchemy import text
from sqlalchemy.orm import Session

from txvault.adapters.postgres.models import TxSecureRecord
from txvault.domain.envelope.models import SealedRecord
from txvault.domain.envelope.ports import RecordStore

logger = logging.getLogger(__name__)


def _to_row(record: SealedRecord) -> TxSecureRecord:
    return TxSecureRecord(
        id=record.id,
        party_id=record.owner_tag,
        payload_nonce=record.payload_nonce,
        payload_ct=record.payload_ciphertext,
        payload_tag=record.payload_tag,
        dek_wrap_nonce=record.wrapped_key_nonce,
        dek_wrapped=record.wrapped_key_ciphertext,
        dek_wrap_tag=record.wrapped_key_tag,
        alg=record.algorithm,
        mk_version=record.key_version,
        created_at=record.created_at,
    )


def _from_row(row: TxSecureRecord) -> SealedRecord:
    return SealedRecord(
        id=row.id,
        owner_tag=row.party_id,
        created_at=row.created_at,
        payload_nonce=row.payload_nonce,
        payload_ciphertext=row.payload_ct,
        payload_tag=row.payload_tag,
        wrapped_key_nonce=row.dek_wrap_nonce,
        wrapped_key_ciphertext=row.dek_wrapped,
        wrapped_key_tag=row.dek_wrap_tag,
        algorithm=row.alg,
        key_version=row.mk_version,
    )


class PostgresRecordStore(RecordStore):
    """SQLAlchemy-backed record store (Postgres in production, SQLite in tests)."""

    def __init__(self, db: Session):
        self._db = db

    def save(self, record: SealedRecord) -> None:
        self._db.add(_to_row(record))
        try:
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise
        logger.info(f"Stored record {record.id}")

    def get(self, record_id: str) -> Optional[SealedRecord]:
        row = self._db.query(TxSecureRecord).filter(TxSecureRecord.id == record_id).first()
        if not row:
            return None
        return _from_row(row)

    def delete(self, record_id: str) -> bool:
        row = self._db.query(TxSecureRecord).filter(TxSecureRecord.id == record_id).first()
        if not row:
            return False
        self._db.delete(row)
        try:
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise
        logger.info(f"Deleted record {record_id}")
        return True

    def list_recent(self, limit: int = 50, owner_tag: Optional[str] = None) -> List[SealedRecord]:
        query = self._db.query(TxSecureRecord)
        if owner_tag is not None:
            query = query.filter(TxSecureRecord.party_id == owner_tag)
        rows = query.order_by(TxSecureRecord.created_at.desc()).limit(limit).all()
        return [_from_row(r) for r in rows]

    def ping(self) -> bool:
        try:
            self._db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Health check failed (database): {e}")
            return False
