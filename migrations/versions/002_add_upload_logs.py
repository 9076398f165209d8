"""Add upload_logs audit table

Revision ID: 002
Revises: 001
Create Date: 2026-10-08

"""
from alembic import op
import sqlalchemy as sa


revision = "002"
down_revision = "001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "upload_logs",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("asset_id", sa.String(length=36), nullable=True),
        sa.Column("status", sa.String(length=50), nullable=False),
        sa.Column("timestamp", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_upload_logs_asset_id", "upload_logs", ["asset_id"], unique=False)
    op.create_index("ix_upload_logs_timestamp", "upload_logs", ["timestamp"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_upload_logs_timestamp", table_name="upload_logs")
    op.drop_index("ix_upload_logs_asset_id", table_name="upload_logs")
    op.drop_table("upload_logs")
