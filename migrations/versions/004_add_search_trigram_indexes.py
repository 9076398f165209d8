"""Add trigram indexes for asset search

Revision ID: 004
Revises: 003
Create Date: 2026-10-14 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = '004'
down_revision: Union[str, None] = '003'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SEARCH_COLUMNS = ['name', 'project_name', 'client_name']


def upgrade() -> None:
    # ILIKE '%term%' can only use an index through pg_trgm
    if op.get_bind().dialect.name != 'postgresql':
        return

    op.execute("CREATE EXTENSION IF NOT EXISTS pg_trgm;")
    for column in SEARCH_COLUMNS:
        op.execute(
            f"CREATE INDEX IF NOT EXISTS ix_assets_{column}_trgm "
            f"ON assets USING gin ({column} gin_trgm_ops);"
        )


def downgrade() -> None:
    if op.get_bind().dialect.name != 'postgresql':
        return

    for column in SEARCH_COLUMNS:
        op.execute(f"DROP INDEX IF EXISTS ix_assets_{column}_trgm;")
