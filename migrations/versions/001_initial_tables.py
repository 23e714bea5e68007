"""Create marketplace tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, restaurants, menu, delivery partner and order tables"""

    # 1. Users
    op.create_table('users',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('role', sa.String(20), nullable=False, server_default='customer'),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('address', sa.JSON(), nullable=True),
        sa.Column('avatar', sa.String(500), nullable=True),
        sa.Column('total_orders', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_spent', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),

        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint("role IN ('customer', 'restaurant', 'delivery', 'admin')", name='ck_users_role'),
        sa.CheckConstraint("status IN ('active', 'inactive', 'suspended')", name='ck_users_status'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'])

    # 2. Restaurants
    op.create_table('restaurants',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('owner_id', sa.String(36), nullable=False),
        sa.Column('name', sa.String(150), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('cuisine', sa.String(100), nullable=False),
        sa.Column('address', sa.JSON(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('contact_phone', sa.String(20), nullable=False),
        sa.Column('contact_email', sa.String(255), nullable=False),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('logo', sa.String(500), nullable=True),
        sa.Column('opening_hours', sa.JSON(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('is_open', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('minimum_order', sa.Numeric(12, 2), nullable=False),
        sa.Column('delivery_fee', sa.Numeric(12, 2), nullable=False),
        sa.Column('commission', sa.Numeric(5, 2), nullable=False, server_default='10'),
        sa.Column('rating', sa.Float(), nullable=False, server_default='0'),
        sa.Column('total_ratings', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_orders', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_revenue', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('total_earnings', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('average_preparation_time', sa.Float(), nullable=False, server_default='0'),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),

        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id']),
        sa.UniqueConstraint('owner_id'),
        sa.CheckConstraint("status IN ('pending', 'active', 'suspended', 'rejected')", name='ck_restaurants_status'),
        sa.CheckConstraint('commission >= 0 AND commission <= 100', name='ck_restaurants_commission'),
        sa.CheckConstraint('minimum_order >= 0', name='ck_restaurants_minimum_order'),
        sa.CheckConstraint('delivery_fee >= 0', name='ck_restaurants_delivery_fee'),
    )
    op.create_index('ix_restaurants_name', 'restaurants', ['name'])
    op.create_index('ix_restaurants_cuisine', 'restaurants', ['cuisine'])
    op.create_index('ix_restaurants_status', 'restaurants', ['status'])

    # 3. Menu items
    op.create_table('menu_items',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('restaurant_id', sa.String(36), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('name', sa.String(150), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('price', sa.Numeric(12, 2), nullable=False),
        sa.Column('category', sa.String(20), nullable=False),
        sa.Column('image', sa.String(500), nullable=True),
        sa.Column('is_available', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('preparation_time', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),

        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['restaurant_id'], ['restaurants.id'], ondelete='CASCADE'),
        sa.CheckConstraint('price >= 0', name='ck_menu_items_price'),
        sa.CheckConstraint('preparation_time >= 0', name='ck_menu_items_preparation_time'),
    )
    op.create_index('ix_menu_items_restaurant_id', 'menu_items', ['restaurant_id'])

    # 4. Delivery partners
    op.create_table('delivery_partners',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('vehicle', sa.JSON(), nullable=False),
        sa.Column('documents', sa.JSON(), nullable=False),
        sa.Column('bank_details', sa.JSON(), nullable=True),
        sa.Column('preferred_zones', sa.JSON(), nullable=False),
        sa.Column('working_hours', sa.JSON(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('is_online', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('current_order_id', sa.String(36), nullable=True),
        sa.Column('last_active', sa.DateTime(timezone=True), nullable=False),
        sa.Column('commission', sa.Numeric(5, 2), nullable=False, server_default='80'),
        sa.Column('rating', sa.Float(), nullable=False, server_default='0'),
        sa.Column('total_ratings', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_deliveries', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_earnings', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('average_delivery_time', sa.Float(), nullable=False, server_default='0'),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),

        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.UniqueConstraint('user_id'),
        sa.CheckConstraint("status IN ('pending', 'active', 'suspended', 'offline')", name='ck_delivery_partners_status'),
    )
    op.create_index('ix_delivery_partners_status', 'delivery_partners', ['status'])

    # 5. Orders
    op.create_table('orders',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('order_number', sa.String(32), nullable=False),
        sa.Column('customer_id', sa.String(36), nullable=False),
        sa.Column('restaurant_id', sa.String(36), nullable=False),
        sa.Column('delivery_partner_id', sa.String(36), nullable=True),
        sa.Column('subtotal', sa.Numeric(12, 2), nullable=False),
        sa.Column('delivery_fee', sa.Numeric(12, 2), nullable=False),
        sa.Column('tax', sa.Numeric(12, 2), nullable=False),
        sa.Column('total', sa.Numeric(12, 2), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('payment_status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('payment_method', sa.String(20), nullable=False),
        sa.Column('gateway_order_id', sa.String(100), nullable=True),
        sa.Column('payment_transaction_id', sa.String(100), nullable=True),
        sa.Column('payment_signature', sa.String(255), nullable=True),
        sa.Column('delivery_address', sa.JSON(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('estimated_delivery_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('actual_delivery_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('delivery_time', sa.Float(), nullable=True),
        sa.Column('cancellation_reason', sa.String(500), nullable=True),
        sa.Column('rating', sa.Integer(), nullable=True),
        sa.Column('review', sa.Text(), nullable=True),
        sa.Column('rated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('commission', sa.Numeric(5, 2), nullable=True),
        sa.Column('delivery_partner_earnings', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('restaurant_earnings', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('platform_earnings', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('settled_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),

        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['customer_id'], ['users.id']),
        sa.ForeignKeyConstraint(['restaurant_id'], ['restaurants.id']),
        sa.ForeignKeyConstraint(['delivery_partner_id'], ['delivery_partners.id']),
        sa.UniqueConstraint('order_number'),
        sa.UniqueConstraint('gateway_order_id'),
        sa.CheckConstraint(
            "status IN ('pending', 'confirmed', 'preparing', 'ready', 'picked-up', "
            "'delivering', 'delivered', 'cancelled', 'rejected')",
            name='ck_orders_status',
        ),
        sa.CheckConstraint(
            "payment_status IN ('pending', 'paid', 'failed', 'refunded')",
            name='ck_orders_payment_status',
        ),
        sa.CheckConstraint('rating IS NULL OR (rating >= 1 AND rating <= 5)', name='ck_orders_rating'),
        sa.CheckConstraint('total >= 0', name='ck_orders_total'),
    )
    op.create_index('ix_orders_customer_id', 'orders', ['customer_id'])
    op.create_index('ix_orders_restaurant_id', 'orders', ['restaurant_id'])
    op.create_index('ix_orders_delivery_partner_id', 'orders', ['delivery_partner_id'])
    op.create_index('ix_orders_status', 'orders', ['status'])
    op.create_index('ix_orders_created_at', 'orders', ['created_at'])

    # 6. Order items
    op.create_table('order_items',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('order_id', sa.String(36), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('menu_item_id', sa.String(36), nullable=False),
        sa.Column('name', sa.String(150), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('price', sa.Numeric(12, 2), nullable=False),
        sa.Column('special_instructions', sa.String(500), nullable=True),

        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id'], ondelete='CASCADE'),
        sa.CheckConstraint('quantity >= 1', name='ck_order_items_quantity'),
    )
    op.create_index('ix_order_items_order_id', 'order_items', ['order_id'])

    # 7. Order tracking
    op.create_table('order_tracking',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('order_id', sa.String(36), nullable=False),
        sa.Column('sequence', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('longitude', sa.Float(), nullable=False),
        sa.Column('latitude', sa.Float(), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),

        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('order_id', 'sequence'),
    )
    op.create_index('ix_order_tracking_order_id', 'order_tracking', ['order_id'])


def downgrade() -> None:
    """Drop marketplace tables"""
    op.drop_table('order_tracking')
    op.drop_table('order_items')
    op.drop_table('orders')
    op.drop_table('delivery_partners')
    op.drop_table('menu_items')
    op.drop_table('restaurants')
    op.drop_table('users')
