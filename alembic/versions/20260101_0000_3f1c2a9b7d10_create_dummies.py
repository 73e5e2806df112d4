"""create dummies

Revision ID: 3f1c2a9b7d10
Revises:
Create Date: 2026-01-01 00:00:00.000000+00:00

"""
from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9b7d10'
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade database schema."""
    op.create_table(
        'dummies',
        sa.Column('id', sa.Uuid(), nullable=False, comment='UUID v4 primary key'),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('CURRENT_TIMESTAMP'),
            nullable=False,
            comment='Timestamp of record creation',
        ),
        sa.Column(
            'updated_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('CURRENT_TIMESTAMP'),
            nullable=False,
            comment='Timestamp of last update',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_dummies')),
    )
    op.create_index(op.f('ix_dummies_name'), 'dummies', ['name'], unique=False)
    # Backs the default listing order (created_at desc, id asc)
    op.create_index('ix_dummies_created_at_id', 'dummies', ['created_at', 'id'], unique=False)


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_index('ix_dummies_created_at_id', table_name='dummies')
    op.drop_index(op.f('ix_dummies_name'), table_name='dummies')
    op.drop_table('dummies')
