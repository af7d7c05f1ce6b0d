"""Create tasks table

Revision ID: b7d90c3e5a12
Revises: a1c4e2f09b31
Create Date: 2026-09-02

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = 'b7d90c3e5a12'
down_revision: Union[str, Sequence[str], None] = 'a1c4e2f09b31'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'tasks',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True),
                  sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('time', sa.String(length=5), nullable=False),
        sa.Column('date', sa.String(length=10), nullable=False),
        sa.Column('deadline', sa.String(length=16), nullable=False),
        sa.Column('progress', sa.Integer(), server_default=sa.text('0'), nullable=False),
        sa.Column('completed', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('icon', sa.Text(), nullable=False),
        sa.Column('color', sa.String(length=16), server_default='purple', nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.TIMESTAMP(), server_default=sa.text('now()'), nullable=True),
    )
    op.create_index('ix_tasks_user_created', 'tasks', ['user_id', 'created_at'])
    op.create_index('ix_tasks_user_completed', 'tasks', ['user_id', 'completed'])


def downgrade() -> None:
    op.drop_index('ix_tasks_user_completed', table_name='tasks')
    op.drop_index('ix_tasks_user_created', table_name='tasks')
    op.drop_table('tasks')
