"""add_deleted_users

Revision ID: 9e5b3f17c6d2
Revises: 4c1d7e2a9b30
Create Date: 2026-10-18 14:37:05.902117

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '9e5b3f17c6d2'
down_revision: Union[str, Sequence[str], None] = '4c1d7e2a9b30'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Keep a record of deleted accounts so they are not provisioned again."""
    op.create_table('deleted_users',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('deleted_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_deleted_users_email', 'deleted_users', ['email'], unique=False)


def downgrade() -> None:
    """Drop deleted_users."""
    op.drop_index('ix_deleted_users_email', table_name='deleted_users')
    op.drop_table('deleted_users')
