"""
Repository Pattern for Database Operations

- ProductRepository: product catalog
- SaleRepository: point-of-sale tickets, stock decrements
- OrderRepository: storefront orders and order items
- SettingsRepository: key/value store settings
"""
from .product_repo import ProductRepository
from .sale_repo import SaleRepository
from .order_repo import OrderRepository
from .settings_repo import SettingsRepository

__all__ = [
    "ProductRepository",
    "SaleRepository",
    "OrderRepository",
    "SettingsRepository",
]
