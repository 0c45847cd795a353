"""SQLAlchemy Models for the Transaction Vault."""
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class TxSecureRecord(Base):
    """Envelope-encrypted transaction. All binary columns are hex."""
    __tablename__ = "tx_secure_records"
    id = Column(String(36), primary_key=True)  # UUID4, assigned at seal time
    party_id = Column(String(255), nullable=False)

    payload_nonce = Column(String(64), nullable=False)   # 12 bytes
    payload_ct = Column(Text, nullable=False)            # variable
    payload_tag = Column(String(64), nullable=False)     # 16 bytes

    dek_wrap_nonce = Column(String(64), nullable=False)  # 12 bytes
    dek_wrapped = Column(String(128), nullable=False)    # 32 bytes
    dek_wrap_tag = Column(String(64), nullable=False)    # 16 bytes

    alg = Column(String(32), nullable=False, default="AES-256-GCM")
    mk_version = Column(Integer, nullable=False, default=1)

    # ISO-8601 string as produced at seal time, kept verbatim
    created_at = Column(String(32), nullable=False)
    stored_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("idx_tx_party_created", "party_id", "created_at"),
    )
