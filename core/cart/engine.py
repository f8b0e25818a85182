"""
Cart engine - pure reducer over CartState.

Every action returns a new CartState with a recomputed total. Unknown
product ids are no-ops; there are no error conditions. Prices are checked
once, when a ProductSnapshot is built.
"""
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any, Optional, Union

from core.errors import ERROR_INVALID_PRICE, ValidationError
from core.logging import get_logger
from core.services.money import parse_money
from .models import CartDecodeError, CartItem, CartState, ProductId

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProductSnapshot:
    """Fields copied from a product when it enters the cart."""
    id: ProductId
    name: str
    price: Decimal
    category: Optional[str] = None

    def __post_init__(self):
        try:
            price = parse_money(self.price)
        except ValueError as e:
            raise ValidationError(ERROR_INVALID_PRICE) from e
        object.__setattr__(self, "price", price)

    @classmethod
    def from_product(cls, product: Any) -> "ProductSnapshot":
        """Accepts a Product model, any object with the same attributes, or a dict."""
        if isinstance(product, dict):
            return cls(
                id=product["id"],
                name=product["name"],
                price=product["price"],
                category=product.get("category"),
            )
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            category=getattr(product, "category", None),
        )


@dataclass(frozen=True)
class AddItem:
    product: ProductSnapshot


@dataclass(frozen=True)
class RemoveItem:
    product_id: ProductId


@dataclass(frozen=True)
class SetQuantity:
    product_id: ProductId
    quantity: int


@dataclass(frozen=True)
class ClearCart:
    pass


@dataclass(frozen=True)
class LoadCart:
    payload: Any


CartAction = Union[AddItem, RemoveItem, SetQuantity, ClearCart, LoadCart]


def reduce_cart(state: CartState, action: CartAction) -> CartState:
    """Apply one action to the cart."""
    if isinstance(action, AddItem):
        return _add(state, action.product)

    if isinstance(action, RemoveItem):
        if state.find(action.product_id) is None:
            return state
        return CartState.of(item for item in state.items if item.id != action.product_id)

    if isinstance(action, SetQuantity):
        return _set_quantity(state, action.product_id, action.quantity)

    if isinstance(action, ClearCart):
        return CartState.empty()

    if isinstance(action, LoadCart):
        try:
            return CartState.from_dict(action.payload)
        except CartDecodeError as e:
            logger.warning(f"Discarding malformed cart payload: {e}")
            return CartState.empty()

    return state


def _add(state: CartState, product: ProductSnapshot) -> CartState:
    if state.find(product.id) is not None:
        items = (
            replace(item, quantity=item.quantity + 1) if item.id == product.id else item
            for item in state.items
        )
        return CartState.of(items)

    new_item = CartItem(
        id=product.id,
        name=product.name,
        price=product.price,
        quantity=1,
        category=product.category,
    )
    return CartState.of(state.items + (new_item,))


def _set_quantity(state: CartState, product_id: ProductId, quantity: int) -> CartState:
    if state.find(product_id) is None:
        return state

    quantity = max(0, int(quantity))
    if quantity == 0:
        return CartState.of(item for item in state.items if item.id != product_id)

    return CartState.of(
        replace(item, quantity=quantity) if item.id == product_id else item
        for item in state.items
    )
