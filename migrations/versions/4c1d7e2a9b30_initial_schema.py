"""initial_schema

Revision ID: 4c1d7e2a9b30
Revises:
Create Date: 2026-10-18 09:12:44.518302

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4c1d7e2a9b30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, projects, collaboration_requests and project_messages."""
    op.create_table('users',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False, server_default=''),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='user'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('avatar_url', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint("role IN ('user', 'admin')", name='ck_users_role'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )
    op.create_index('ix_users_role_active', 'users', ['role', 'is_active'], unique=False)

    op.create_table('projects',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('category', sa.String(length=50), nullable=False, server_default='General'),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='active'),
        sa.Column('owner_id', sa.UUID(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint(
            "status IN ('active', 'completed', 'archived', 'pending')",
            name='ck_projects_status',
        ),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_projects_owner_id', 'projects', ['owner_id'], unique=False)

    op.create_table('collaboration_requests',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('project_id', sa.UUID(), nullable=False),
        sa.Column('sender_id', sa.UUID(), nullable=False),
        sa.Column('receiver_id', sa.UUID(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='editor'),
        sa.Column('can_edit', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('can_delete', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('can_invite', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('can_upload', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('message', sa.String(length=500), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected', 'removed')",
            name='ck_collaboration_requests_status',
        ),
        sa.CheckConstraint(
            "role IN ('viewer', 'editor', 'admin')",
            name='ck_collaboration_requests_role',
        ),
        sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['sender_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['receiver_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_collaboration_requests_receiver_id',
        'collaboration_requests',
        ['receiver_id'],
        unique=False,
    )
    op.create_index(
        'ix_collaboration_requests_project_receiver',
        'collaboration_requests',
        ['project_id', 'receiver_id'],
        unique=False,
    )
    # At most one pending or accepted request per project and receiver
    op.create_index(
        'uq_collaboration_requests_active',
        'collaboration_requests',
        ['project_id', 'receiver_id'],
        unique=True,
        postgresql_where=sa.text("status IN ('pending', 'accepted')"),
    )

    op.create_table('project_messages',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('project_id', sa.UUID(), nullable=False),
        sa.Column('sender_id', sa.UUID(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['sender_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_project_messages_project_created',
        'project_messages',
        ['project_id', 'created_at'],
        unique=False,
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index('ix_project_messages_project_created', table_name='project_messages')
    op.drop_table('project_messages')
    op.drop_index('uq_collaboration_requests_active', table_name='collaboration_requests')
    op.drop_index('ix_collaboration_requests_project_receiver', table_name='collaboration_requests')
    op.drop_index('ix_collaboration_requests_receiver_id', table_name='collaboration_requests')
    op.drop_table('collaboration_requests')
    op.drop_index('ix_projects_owner_id', table_name='projects')
    op.drop_table('projects')
    op.drop_index('ix_users_role_active', table_name='users')
    op.drop_table('users')
