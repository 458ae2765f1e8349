from barpos.models.product import Product, ProductCategory
from barpos.models.table import Table, TableStatus, TABLE_TRANSITIONS
from barpos.models.table_session import TableSession
from barpos.models.order import Order
from barpos.models.order_item import OrderItem
