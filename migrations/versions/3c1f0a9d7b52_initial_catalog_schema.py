"""initial catalog schema

Revision ID: 3c1f0a9d7b52
Revises:
Create Date: 2026-10-19 10:12:44.518203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1f0a9d7b52'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # reference data (read-only for the catalog)
    op.create_table(
        'marketplaces',
        sa.Column('id', sa.SmallInteger(), nullable=False),
        sa.Column('code', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('code'),
    )
    op.create_table(
        'product_types',
        sa.Column('id', sa.SmallInteger(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )
    op.create_table(
        'brands',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('normalized_name', sa.String(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )
    op.create_index(op.f('ix_brands_id'), 'brands', ['id'], unique=False)
    op.create_table(
        'profiles',
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('full_name', sa.String(), nullable=True),
        sa.Column('avatar_url', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('user_id'),
    )

    # products
    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('asin', sa.String(), nullable=False),
        sa.Column('marketplace_id', sa.SmallInteger(), nullable=False),
        sa.Column('product_type_id', sa.SmallInteger(), nullable=True),
        sa.Column('brand_id', sa.Integer(), nullable=True),
        sa.Column('title', sa.String(), nullable=True),
        sa.Column('description_text', sa.Text(), nullable=True),
        sa.Column('bullet_points', sa.JSON(), nullable=True),
        sa.Column('images', sa.JSON(), nullable=True),
        sa.Column('product_url', sa.String(), nullable=True),
        sa.Column('published_at', sa.Date(), nullable=True),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('currency_code', sa.String(), nullable=True),
        sa.Column('rating', sa.Numeric(precision=3, scale=2), nullable=True),
        sa.Column('reviews_count', sa.Integer(), nullable=True),
        sa.Column('bsr', sa.Integer(), nullable=True),
        sa.Column('bsr_30_days_avg', sa.Integer(), nullable=True),
        sa.Column('deleted', sa.Boolean(), nullable=True),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('discovery_query', sa.String(), nullable=True),
        sa.Column('source_type', sa.String(), nullable=True),
        sa.Column('raw_data', sa.JSON(), nullable=True),
        sa.Column('first_seen_at', sa.DateTime(), nullable=True),
        sa.Column('last_scraped_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['brand_id'], ['brands.id']),
        sa.ForeignKeyConstraint(['marketplace_id'], ['marketplaces.id']),
        sa.ForeignKeyConstraint(['product_type_id'], ['product_types.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('asin', 'marketplace_id', name='uq_products_asin_marketplace'),
    )
    for column in (
        'id', 'asin', 'marketplace_id', 'product_type_id', 'brand_id', 'published_at',
        'price', 'rating', 'reviews_count', 'bsr', 'bsr_30_days_avg', 'deleted',
        'first_seen_at', 'last_scraped_at',
    ):
        op.create_index(op.f(f'ix_products_{column}'), 'products', [column], unique=False)

    op.create_table(
        'product_keywords',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('keyword', sa.String(), nullable=False),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_product_keywords_id'), 'product_keywords', ['id'], unique=False)
    op.create_index(op.f('ix_product_keywords_product_id'), 'product_keywords', ['product_id'], unique=False)
    op.create_index(op.f('ix_product_keywords_keyword'), 'product_keywords', ['keyword'], unique=False)

    # append-only history
    op.create_table(
        'bsr_history',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('bsr', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_bsr_history_id'), 'bsr_history', ['id'], unique=False)
    op.create_index('idx_bsr_history_product_date', 'bsr_history', ['product_id', 'date'], unique=False)

    op.create_table(
        'price_history',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('currency_code', sa.String(), nullable=False),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_price_history_id'), 'price_history', ['id'], unique=False)
    op.create_index('idx_price_history_product_date', 'price_history', ['product_id', 'date'], unique=False)

    op.create_table(
        'review_history',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('rating', sa.Numeric(precision=3, scale=2), nullable=True),
        sa.Column('reviews_count', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_review_history_id'), 'review_history', ['id'], unique=False)
    op.create_index('idx_review_history_product_date', 'review_history', ['product_id', 'date'], unique=False)

    # rollups
    op.create_table(
        'daily_product_stats',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('avg_bsr_7', sa.Float(), nullable=True),
        sa.Column('avg_bsr_30', sa.Float(), nullable=True),
        sa.Column('avg_bsr_90', sa.Float(), nullable=True),
        sa.Column('computed_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('product_id', 'date', name='uq_daily_product_stats_product_date'),
    )
    op.create_index(op.f('ix_daily_product_stats_id'), 'daily_product_stats', ['id'], unique=False)
    op.create_index(op.f('ix_daily_product_stats_product_id'), 'daily_product_stats', ['product_id'], unique=False)
    op.create_index(op.f('ix_daily_product_stats_date'), 'daily_product_stats', ['date'], unique=False)

    # user preferences
    op.create_table(
        'excluded_brands',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('brand_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['brand_id'], ['brands.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['profiles.user_id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'brand_id', name='uq_excluded_brands_user_brand'),
    )
    op.create_index(op.f('ix_excluded_brands_id'), 'excluded_brands', ['id'], unique=False)
    op.create_index(op.f('ix_excluded_brands_user_id'), 'excluded_brands', ['user_id'], unique=False)

    op.create_table(
        'excluded_keywords',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('keyword', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['profiles.user_id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_excluded_keywords_id'), 'excluded_keywords', ['id'], unique=False)
    op.create_index(op.f('ix_excluded_keywords_user_id'), 'excluded_keywords', ['user_id'], unique=False)

    op.create_table(
        'favorite_groups',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['profiles.user_id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_favorite_groups_id'), 'favorite_groups', ['id'], unique=False)
    op.create_index(op.f('ix_favorite_groups_user_id'), 'favorite_groups', ['user_id'], unique=False)

    op.create_table(
        'user_favorite_products_groups',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('group_id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['group_id'], ['favorite_groups.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['profiles.user_id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('group_id', 'product_id', name='uq_favorite_group_product'),
    )
    op.create_index(op.f('ix_user_favorite_products_groups_id'), 'user_favorite_products_groups', ['id'], unique=False)
    op.create_index(op.f('ix_user_favorite_products_groups_group_id'), 'user_favorite_products_groups', ['group_id'], unique=False)

    op.create_table(
        'saved_products',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['profiles.user_id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'product_id', name='uq_saved_products_user_product'),
    )
    op.create_index(op.f('ix_saved_products_id'), 'saved_products', ['id'], unique=False)
    op.create_index(op.f('ix_saved_products_user_id'), 'saved_products', ['user_id'], unique=False)


def downgrade() -> None:
    for table in (
        'saved_products',
        'user_favorite_products_groups',
        'favorite_groups',
        'excluded_keywords',
        'excluded_brands',
        'daily_product_stats',
        'review_history',
        'price_history',
        'bsr_history',
        'product_keywords',
        'products',
        'profiles',
        'brands',
        'product_types',
        'marketplaces',
    ):
        op.drop_table(table)
