"""Initial schema - sealed transaction records

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('tx_secure_records',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('party_id', sa.String(255), nullable=False),
        sa.Column('payload_nonce', sa.String(64), nullable=False),
        sa.Column('payload_ct', sa.Text(), nullable=False),
        sa.Column('payload_tag', sa.String(64), nullable=False),
        sa.Column('dek_wrap_nonce', sa.String(64), nullable=False),
        sa.Column('dek_wrapped', sa.String(128), nullable=False),
        sa.Column('dek_wrap_tag', sa.String(64), nullable=False),
        sa.Column('alg', sa.String(32), nullable=False, server_default='AES-256-GCM'),
        sa.Column('mk_version', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('created_at', sa.String(32), nullable=False),
        sa.Column('stored_at', sa.DateTime(), nullable=True),
    )
    op.create_index('idx_tx_party_created', 'tx_secure_records', ['party_id', 'created_at'])


def downgrade() -> None:
    op.drop_index('idx_tx_party_created', table_name='tx_secure_records')
    op.drop_table('tx_secure_records')
