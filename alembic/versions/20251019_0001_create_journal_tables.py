"""create journal tables

Revision ID: 20251019_0001_create_journal_tables
Revises:
Create Date: 2025-10-19 00:01:00
"""
from alembic import op
import sqlalchemy as sa

revision = '20251019_0001_create_journal_tables'
down_revision = None
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.create_table(
        'places',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('visitlater', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('liked', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('dd', sa.String(), nullable=True),
        sa.Column('createdAt', sa.String(), nullable=False),
    )
    op.create_table(
        'trips',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('startDate', sa.String(), nullable=True),
        sa.Column('endDate', sa.String(), nullable=True),
        sa.Column('current', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('createdAt', sa.String(), nullable=False),
    )
    op.create_table(
        'trip_places',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('tripId', sa.String(), sa.ForeignKey('trips.id', ondelete='CASCADE'), nullable=False),
        sa.Column('placeId', sa.String(), sa.ForeignKey('places.id', ondelete='CASCADE'), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.Column('visited', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('visitDate', sa.String(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
    )
    op.create_table(
        'place_photos',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('placeId', sa.String(), sa.ForeignKey('places.id', ondelete='CASCADE'), nullable=False),
        sa.Column('tripPlaceId', sa.String(), sa.ForeignKey('trip_places.id', ondelete='CASCADE'), nullable=True),
        sa.Column('filePath', sa.String(), nullable=False),
        sa.Column('createdAt', sa.String(), nullable=False),
    )
    op.create_index('idx_trip_places_tripId', 'trip_places', ['tripId'])
    op.create_index('idx_trip_places_placeId', 'trip_places', ['placeId'])
    op.create_index('idx_trip_places_order', 'trip_places', ['tripId', 'order'])
    op.create_index('idx_place_photos_placeId', 'place_photos', ['placeId'])
    op.create_index('idx_place_photos_tripPlaceId', 'place_photos', ['tripPlaceId'])
    op.create_index('idx_trips_current', 'trips', ['current'])

def downgrade() -> None:
    op.drop_table('place_photos')
    op.drop_table('trip_places')
    op.drop_table('trips')
    op.drop_table('places')
