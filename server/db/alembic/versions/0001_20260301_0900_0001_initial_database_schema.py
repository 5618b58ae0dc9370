"""Initial database schema

Revision ID: 0001
Revises:
Create Date: 2026-03-01 09:00:00.000000

"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def _soft_delete() -> list[sa.Column]:
    return [sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True)]


def _ordering(order_column: str = 'display_order') -> list[sa.Column]:
    return [
        sa.Column(order_column, sa.Integer(), server_default='0', nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
    ]


def _index_common(table: str) -> None:
    op.create_index(op.f(f'ix_{table}_created_at'), table, ['created_at'], unique=False)
    op.create_index(op.f(f'ix_{table}_deleted_at'), table, ['deleted_at'], unique=False)


def upgrade() -> None:
    """Upgrade database schema."""
    # Accounts
    op.create_table('users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('role', sa.String(length=32), server_default='admin', nullable=False),
        *_timestamps(),
        *_soft_delete(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email')
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=False)
    _index_common('users')

    # Catalogue
    op.create_table('tour_packages',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('short_description', sa.Text(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price_from', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('duration_days', sa.Integer(), nullable=True),
        sa.Column('max_participants', sa.Integer(), nullable=True),
        sa.Column('is_featured', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('display_order', sa.Integer(), server_default='0', nullable=False),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        *_soft_delete(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug')
    )
    op.create_index(op.f('ix_tour_packages_slug'), 'tour_packages', ['slug'], unique=False)
    _index_common('tour_packages')

    op.create_table('itineraries',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('summary', sa.Text(), nullable=True),
        sa.Column('badge', sa.String(length=120), nullable=True),
        sa.Column('image_base64', sa.Text(), nullable=True),
        sa.Column('duration_days', sa.Integer(), nullable=True),
        sa.Column('price_from', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('difficulty', sa.String(length=64), nullable=True),
        *_ordering(),
        *_timestamps(),
        *_soft_delete(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug')
    )
    op.create_index(op.f('ix_itineraries_slug'), 'itineraries', ['slug'], unique=False)
    _index_common('itineraries')

    op.create_table('destinations',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('region', sa.String(length=120), nullable=True),
        sa.Column('teaser', sa.Text(), nullable=True),
        sa.Column('tag', sa.String(length=120), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('image_base64', sa.Text(), nullable=True),
        *_ordering(),
        *_timestamps(),
        *_soft_delete(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug')
    )
    op.create_index(op.f('ix_destinations_slug'), 'destinations', ['slug'], unique=False)
    _index_common('destinations')

    op.create_table('lodges',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('type', sa.String(length=120), nullable=True),
        sa.Column('mood', sa.String(length=120), nullable=True),
        sa.Column('short_description', sa.Text(), nullable=True),
        sa.Column('image_base64', sa.Text(), nullable=True),
        sa.Column('price_from', sa.Numeric(precision=12, scale=2), nullable=True),
        *_ordering(),
        *_timestamps(),
        *_soft_delete(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug')
    )
    op.create_index(op.f('ix_lodges_slug'), 'lodges', ['slug'], unique=False)
    _index_common('lodges')

    # Page sections
    op.create_table('hero_slides',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('label', sa.String(length=255), nullable=True),
        sa.Column('subtitle', sa.String(length=255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('image_base64', sa.Text(), nullable=True),
        sa.Column('cta_label', sa.String(length=120), nullable=True),
        sa.Column('cta_url', sa.String(length=500), nullable=True),
        *_ordering('position'),
        *_timestamps(),
        *_soft_delete(),
        sa.PrimaryKeyConstraint('id')
    )
    _index_common('hero_slides')

    op.create_table('feature_cards',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('icon', sa.String(length=120), nullable=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('headline', sa.String(length=255), nullable=True),
        sa.Column('copy', sa.Text(), nullable=True),
        sa.Column('count_value', sa.Integer(), nullable=True),
        *_ordering(),
        *_timestamps(),
        *_soft_delete(),
        sa.PrimaryKeyConstraint('id')
    )
    _index_common('feature_cards')

    op.create_table('about_stats',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('value', sa.String(length=120), nullable=False),
        sa.Column('label', sa.String(length=255), nullable=False),
        *_ordering(),
        *_timestamps(),
        *_soft_delete(),
        sa.PrimaryKeyConstraint('id')
    )
    _index_common('about_stats')

    op.create_table('about_highlights',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('copy', sa.Text(), nullable=False),
        *_ordering(),
        *_timestamps(),
        *_soft_delete(),
        sa.PrimaryKeyConstraint('id')
    )
    _index_common('about_highlights')

    op.create_table('contact_channels',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('label', sa.String(length=120), nullable=False),
        sa.Column('value', sa.String(length=255), nullable=False),
        sa.Column('detail', sa.Text(), nullable=True),
        *_ordering(),
        *_timestamps(),
        *_soft_delete(),
        sa.PrimaryKeyConstraint('id')
    )
    _index_common('contact_channels')

    op.create_table('contact_quick_facts',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('fact', sa.Text(), nullable=False),
        *_ordering(),
        *_timestamps(),
        *_soft_delete(),
        sa.PrimaryKeyConstraint('id')
    )
    _index_common('contact_quick_facts')

    # Submissions
    op.create_table('bookings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('tour_package_id', sa.Integer(), nullable=True),
        sa.Column('full_name', sa.Text(), nullable=False),
        sa.Column('email', sa.Text(), nullable=False),
        sa.Column('phone', sa.Text(), nullable=False),
        sa.Column('whatsapp', sa.Text(), nullable=True),
        sa.Column('travel_date', sa.Date(), nullable=True),
        sa.Column('number_of_travelers', sa.Integer(), nullable=False),
        sa.Column('customization_data', sa.JSON(), nullable=True),
        sa.Column('special_requests', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('admin_notes', sa.Text(), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            'number_of_travelers >= 1 AND number_of_travelers <= 100',
            name='ck_booking_travelers_range'
        ),
        sa.ForeignKeyConstraint(['tour_package_id'], ['tour_packages.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_bookings_created_at'), 'bookings', ['created_at'], unique=False)
    op.create_index(op.f('ix_bookings_email'), 'bookings', ['email'], unique=False)
    op.create_index(op.f('ix_bookings_status'), 'bookings', ['status'], unique=False)
    op.create_index(op.f('ix_bookings_tour_package_id'), 'bookings', ['tour_package_id'], unique=False)

    op.create_table('contact_messages',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('email', sa.String(length=160), nullable=False),
        sa.Column('phone', sa.String(length=40), nullable=True),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('resolved_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        *_soft_delete(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_contact_messages_email'), 'contact_messages', ['email'], unique=False)
    op.create_index(op.f('ix_contact_messages_status'), 'contact_messages', ['status'], unique=False)
    _index_common('contact_messages')


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_table('contact_messages')
    op.drop_table('bookings')
    op.drop_table('contact_quick_facts')
    op.drop_table('contact_channels')
    op.drop_table('about_highlights')
    op.drop_table('about_stats')
    op.drop_table('feature_cards')
    op.drop_table('hero_slides')
    op.drop_table('lodges')
    op.drop_table('destinations')
    op.drop_table('itineraries')
    op.drop_table('tour_packages')
    op.drop_table('users')
