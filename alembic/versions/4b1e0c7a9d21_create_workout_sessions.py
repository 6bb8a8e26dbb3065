"""create workout_sessions

Revision ID: 4b1e0c7a9d21
Revises:
Create Date: 2026-10-19 10:12:31.482211

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4b1e0c7a9d21'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'workout_sessions',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('owner_id', sa.String(length=255), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('exercises', sa.JSON(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=True),
        sa.Column('routine_id', sa.String(length=64), nullable=True),
        sa.Column('intensity', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    )
    # every read is owner-scoped and date-ordered
    op.create_index('ix_workout_sessions_owner_date', 'workout_sessions', ['owner_id', 'date'])


def downgrade() -> None:
    op.drop_index('ix_workout_sessions_owner_date', table_name='workout_sessions')
    op.drop_table('workout_sessions')
