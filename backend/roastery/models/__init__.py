from .catalog import Product, Inventory
from .sales import Sale, SaleItem
from .auth import User

__all__ = [
    'Product', 'Inventory',
    'Sale', 'SaleItem',
    'User',
]
