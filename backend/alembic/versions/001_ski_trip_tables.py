"""Trips, guests and recommendation results

Revision ID: 001_ski_trip_tables
Revises:
Create Date: 2026-03-02
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = '001_ski_trip_tables'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- Trips ---
    op.create_table('trips',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('user_id', sa.String(length=64), nullable=True),
        sa.Column('trip_name', sa.String(length=255), nullable=False),
        sa.Column('organizer_name', sa.String(length=100), nullable=True),
        sa.Column('date_start', sa.Date(), nullable=True),
        sa.Column('date_end', sa.Date(), nullable=True),
        sa.Column('group_size', sa.Integer(), nullable=False, server_default='4'),
        sa.Column('geography', postgresql.ARRAY(sa.String(length=50)), nullable=True),
        sa.Column('budget_amount', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('budget_type', sa.String(length=20), nullable=True),
        sa.Column('pass_types', postgresql.ARRAY(sa.String(length=30)), nullable=True),
        sa.Column('lodging_preference', sa.String(length=50), nullable=True),
        sa.Column('skill_min', sa.String(length=30), nullable=True),
        sa.Column('skill_max', sa.String(length=30), nullable=True),
        sa.Column('vibe', sa.Text(), nullable=True),
        sa.Column('has_non_skiers', sa.Boolean(), nullable=True),
        sa.Column('non_skier_importance', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint('group_size >= 1', name='ck_trips_group_size'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_trips_user', 'trips', ['user_id'])

    # --- Guests ---
    op.create_table('guests',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('trip_id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('origin_city', sa.String(length=100), nullable=True),
        sa.Column('airport_code', sa.String(length=20), nullable=True),
        sa.Column('skill_level', sa.String(length=30), nullable=True),
        sa.Column('budget_min', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('budget_max', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=True, server_default='pending'),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['trip_id'], ['trips.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_guests_trip', 'guests', ['trip_id'])

    # --- Recommendation results ---
    op.create_table('recommendations',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('trip_id', sa.UUID(), nullable=False),
        sa.Column('results', postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['trip_id'], ['trips.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_recommendations_trip', 'recommendations', ['trip_id', 'created_at'])


def downgrade() -> None:
    op.drop_index('idx_recommendations_trip', table_name='recommendations')
    op.drop_table('recommendations')
    op.drop_index('idx_guests_trip', table_name='guests')
    op.drop_table('guests')
    op.drop_index('idx_trips_user', table_name='trips')
    op.drop_table('trips')
