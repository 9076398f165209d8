"""Add secondary_image_url for high-resolution TIFF uploads

Revision ID: 003
Revises: 002
Create Date: 2026-10-12

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '003'
down_revision = '002'
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Add secondary_image_url column to assets table."""
    with op.batch_alter_table('assets') as batch_op:
        batch_op.add_column(sa.Column('secondary_image_url', sa.String(length=1000), nullable=True))


def downgrade() -> None:
    """Remove secondary_image_url column from assets table."""
    with op.batch_alter_table('assets') as batch_op:
        batch_op.drop_column('secondary_image_url')
