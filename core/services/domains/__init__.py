"""Domain services wrapping repositories."""
from .products import ProductsDomain
from .sales import SalesDomain, prepare_sale_lines
from .orders import OnlineOrdersDomain
from .settings import SettingsDomain

__all__ = [
    "ProductsDomain",
    "SalesDomain",
    "OnlineOrdersDomain",
    "SettingsDomain",
    "prepare_sale_lines",
]
