"""Locations, favorites and visit history

Revision ID: 001_locations
Revises:
Create Date: 2026-10-16

Creates:
1. locations - canonical points, unique on (lat, lon)
2. favorite_locations - (location, user) favorites
3. location_history - (location, user) visit counters

favorite_locations and location_history carry two partial unique indexes
each: one for named users and one for the anonymous (NULL user_id) scope.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = '001_locations'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _per_user_unique_indexes(table: str) -> None:
    op.create_index(
        f'uq_{table}_user', table, ['location_id', 'user_id'],
        unique=True,
        postgresql_where=sa.text('user_id IS NOT NULL'),
        sqlite_where=sa.text('user_id IS NOT NULL'),
    )
    op.create_index(
        f'uq_{table}_anonymous', table, ['location_id'],
        unique=True,
        postgresql_where=sa.text('user_id IS NULL'),
        sqlite_where=sa.text('user_id IS NULL'),
    )


def upgrade() -> None:
    # 1. locations
    op.create_table(
        'locations',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('country', sa.String(100), nullable=False, server_default='Unknown'),
        sa.Column('state', sa.String(100), nullable=True),
        sa.Column('lat', sa.Float(), nullable=False),
        sa.Column('lon', sa.Float(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('lat', 'lon', name='uq_locations_coords'),
    )
    op.create_index('locations_coord_idx', 'locations', ['lat', 'lon'])
    op.create_index('locations_name_idx', 'locations', ['name'])

    # 2. favorite_locations
    op.create_table(
        'favorite_locations',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('location_id', sa.Integer(), sa.ForeignKey('locations.id'), nullable=False),
        sa.Column('user_id', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('favorite_locations_location_idx', 'favorite_locations', ['location_id'])
    op.create_index('favorite_locations_user_idx', 'favorite_locations', ['user_id'])
    _per_user_unique_indexes('favorite_locations')

    # 3. location_history
    op.create_table(
        'location_history',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('location_id', sa.Integer(), sa.ForeignKey('locations.id'), nullable=False),
        sa.Column('user_id', sa.String(255), nullable=True),
        sa.Column('visit_count', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('last_visited', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('visit_count >= 1', name='ck_location_history_visit_count'),
    )
    op.create_index('location_history_location_idx', 'location_history', ['location_id'])
    op.create_index('location_history_user_idx', 'location_history', ['user_id'])
    op.create_index('location_history_last_visited_idx', 'location_history', ['last_visited'])
    _per_user_unique_indexes('location_history')


def downgrade() -> None:
    op.drop_table('location_history')
    op.drop_table('favorite_locations')
    op.drop_index('locations_name_idx', table_name='locations')
    op.drop_index('locations_coord_idx', table_name='locations')
    op.drop_table('locations')
