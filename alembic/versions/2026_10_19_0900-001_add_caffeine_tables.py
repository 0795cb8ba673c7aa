"""Add consumption, sleep check-in and preferences tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
import sqlmodel
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create consumption_events, sleep_checkins and user_preferences tables."""
    op.create_table('consumption_events', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('substance_id', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('display_name', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('caffeine_mg', sa.Float(), nullable=False),
        sa.Column('consumed_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('logged_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_consumption_events_substance_id'), 'consumption_events', ['substance_id'])
    op.create_index(op.f('ix_consumption_events_consumed_at'), 'consumption_events', ['consumed_at'])

    op.create_table('sleep_checkins', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('quality', sqlmodel.sql.sqltypes.AutoString(length=10), nullable=False),
        sa.Column('yesterday_caffeine_mg', sa.Float(), nullable=False, server_default='0'),
        sa.Column('yesterday_last_coffee_hour', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('recorded_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('date', name='uq_sleep_checkin_date'))
    op.create_index(op.f('ix_sleep_checkins_date'), 'sleep_checkins', ['date'])

    op.create_table('user_preferences', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('bedtime', sa.Time(), nullable=False, server_default='23:00'),
        sa.Column('daily_limit_mg', sa.Float(), nullable=False, server_default='400'),
        sa.Column('sensitivity', sqlmodel.sql.sqltypes.AutoString(length=10), nullable=False,
                  server_default='auto'),
        sa.Column('timezone', sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False,
                  server_default='UTC'),
        sa.Column('seen_badge_ids', postgresql.JSON(astext_type=sa.Text()), nullable=False,
                  server_default='[]'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.PrimaryKeyConstraint('id'))


def downgrade() -> None:
    """Drop caffeine tables."""
    op.drop_table('user_preferences')
    op.drop_index(op.f('ix_sleep_checkins_date'), table_name='sleep_checkins')
    op.drop_table('sleep_checkins')
    op.drop_index(op.f('ix_consumption_events_consumed_at'), table_name='consumption_events')
    op.drop_index(op.f('ix_consumption_events_substance_id'), table_name='consumption_events')
    op.drop_table('consumption_events')
