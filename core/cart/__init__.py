"""Cart package: models, reducer, storage, and service facade."""
from .engine import AddItem, ClearCart, LoadCart, ProductSnapshot, RemoveItem, SetQuantity, reduce_cart
from .models import CartDecodeError, CartItem, CartState, calculate_total
from .service import CartService
from .storage import CartStore, MemoryCartStore, RedisCartStore, cart_key

__all__ = [
    "AddItem",
    "CartDecodeError",
    "CartItem",
    "CartService",
    "CartState",
    "CartStore",
    "ClearCart",
    "LoadCart",
    "MemoryCartStore",
    "ProductSnapshot",
    "RedisCartStore",
    "RemoveItem",
    "SetQuantity",
    "calculate_total",
    "cart_key",
    "reduce_cart",
]
