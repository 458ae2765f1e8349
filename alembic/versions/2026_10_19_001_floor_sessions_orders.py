"""Floor plan, table sessions, orders and product catalog

Revision ID: 001_floor_sessions_orders
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_floor_sessions_orders'
down_revision = None
branch_labels = None
depends_on = None

table_status = sa.Enum('FREE', 'OCCUPIED', 'DISABLED', name='tablestatus')


def upgrade() -> None:
    # Product catalog
    op.create_table(
        'products',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_products_category', 'products', ['category'])
    op.create_index('ix_products_is_active', 'products', ['is_active'])

    # Tables; current_session_id is a lookup key without a foreign key
    op.create_table(
        'tables',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('number', sa.Integer(), nullable=False),
        sa.Column('status', table_status, nullable=False, server_default='FREE'),
        sa.Column('current_session_id', sa.Uuid(), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_tables_number', 'tables', ['number'])
    op.create_index(
        'uq_tables_live_number',
        'tables',
        ['number'],
        unique=True,
        sqlite_where=sa.text('deleted_at IS NULL'),
        postgresql_where=sa.text('deleted_at IS NULL'),
    )
    op.create_index('ix_tables_status', 'tables', ['status'])
    op.create_index('ix_tables_deleted_at', 'tables', ['deleted_at'])

    # Sessions
    op.create_table(
        'table_sessions',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('table_id', sa.Uuid(), sa.ForeignKey('tables.id'), nullable=False),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('end_time', sa.DateTime(), nullable=True),
        sa.Column('total_amount', sa.Numeric(12, 2), nullable=False, server_default='0'),
    )
    op.create_index('ix_table_sessions_table_id', 'table_sessions', ['table_id'])
    op.create_index('ix_table_sessions_start_time', 'table_sessions', ['start_time'])
    op.create_index('ix_table_sessions_end_time', 'table_sessions', ['end_time'])

    # Orders and items
    op.create_table(
        'orders',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('session_id', sa.Uuid(), sa.ForeignKey('table_sessions.id'), nullable=False),
        sa.Column('sequence', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_orders_session_id', 'orders', ['session_id'])

    op.create_table(
        'order_items',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('order_id', sa.Uuid(), sa.ForeignKey('orders.id'), nullable=False),
        sa.Column('product_id', sa.Uuid(), sa.ForeignKey('products.id'), nullable=False),
        sa.Column('product_name', sa.String(255), nullable=False),
        sa.Column('price_at_order', sa.Numeric(10, 2), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
    )
    op.create_index('ix_order_items_order_id', 'order_items', ['order_id'])
    op.create_index('ix_order_items_product_id', 'order_items', ['product_id'])


def downgrade() -> None:
    op.drop_index('ix_order_items_product_id', 'order_items')
    op.drop_index('ix_order_items_order_id', 'order_items')
    op.drop_table('order_items')

    op.drop_index('ix_orders_session_id', 'orders')
    op.drop_table('orders')

    op.drop_index('ix_table_sessions_end_time', 'table_sessions')
    op.drop_index('ix_table_sessions_start_time', 'table_sessions')
    op.drop_index('ix_table_sessions_table_id', 'table_sessions')
    op.drop_table('table_sessions')

    op.drop_index('ix_tables_deleted_at', 'tables')
    op.drop_index('ix_tables_status', 'tables')
    op.drop_index('uq_tables_live_number', 'tables')
    op.drop_index('ix_tables_number', 'tables')
    op.drop_table('tables')
    table_status.drop(op.get_bind(), checkfirst=True)

    op.drop_index('ix_products_is_active', 'products')
    op.drop_index('ix_products_category', 'products')
    op.drop_table('products')
