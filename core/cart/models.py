"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Optional, Union

from core.services.money import parse_money, to_float

ProductId = Union[int, str]


class CartDecodeError(ValueError):
    """Stored cart payload does not have the expected shape."""


@dataclass(frozen=True)
class CartItem:
    """Snapshot of a product taken when it was added to the cart."""
    id: ProductId
    name: str
    price: Decimal
    quantity: int
    category: Optional[str] = None

    def __post_init__(self):
        # Same rule as from_dict so every stored cart loads back
        object.__setattr__(self, "price", parse_money(self.price))

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity

    def to_dict(self) -> dict:
        """Convert to the JSON shape kept in the cart store."""
        data = {
            "id": self.id,
            "name": self.name,
            "price": to_float(self.price),
            "quantity": self.quantity,
        }
        if self.category is not None:
            data["category"] = self.category
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "CartItem":
        """
        Create from a stored dictionary.

        Raises:
            CartDecodeError: missing keys, wrong types or quantity below 1
        """
        if not isinstance(data, dict):
            raise CartDecodeError(f"Cart item must be an object, got {type(data).__name__}")
        try:
            item_id = data["id"]
            name = data["name"]
            price = parse_money(data["price"])
            quantity = data["quantity"]
        except (KeyError, ValueError) as e:
            raise CartDecodeError(f"Invalid cart item: {e}") from e

        if isinstance(item_id, bool) or not isinstance(item_id, (int, str)):
            raise CartDecodeError(f"Invalid cart item id: {item_id!r}")
        if not isinstance(name, str):
            raise CartDecodeError(f"Invalid cart item name: {name!r}")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise CartDecodeError(f"Invalid cart item quantity: {quantity!r}")

        category = data.get("category")
        return cls(
            id=item_id,
            name=name,
            price=price,
            quantity=quantity,
            category=category if isinstance(category, str) else None,
        )


def calculate_total(items: tuple[CartItem, ...]) -> Decimal:
    """Sum of price * quantity over all items."""
    return sum((item.subtotal for item in items), Decimal("0"))


@dataclass(frozen=True)
class CartState:
    """
    Shopping cart contents.

    `total` is derived from `items`; build states through `CartState.of()`
    so the two can never disagree.
    """
    items: tuple[CartItem, ...] = ()
    total: Decimal = field(default=Decimal("0"))

    @classmethod
    def of(cls, items) -> "CartState":
        items = tuple(items)
        return cls(items=items, total=calculate_total(items))

    @classmethod
    def empty(cls) -> "CartState":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def item_count(self) -> int:
        """Total number of units in the cart."""
        return sum(item.quantity for item in self.items)

    def find(self, product_id: ProductId) -> Optional[CartItem]:
        return next((item for item in self.items if item.id == product_id), None)

    def to_dict(self) -> dict:
        """Convert to dictionary for the cart store: {"items": [...], "total": number}."""
        return {
            "items": [item.to_dict() for item in self.items],
            "total": to_float(self.total),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "CartState":
        """
        Create from a stored dictionary.

        The stored total is checked for presence only; the state total is
        always recomputed from the items.

        Raises:
            CartDecodeError: payload is not a cart
        """
        if not isinstance(data, dict):
            raise CartDecodeError("Cart payload must be an object")
        if "items" not in data or "total" not in data:
            raise CartDecodeError("Cart payload must contain items and total")
        raw_items = data["items"]
        if not isinstance(raw_items, list):
            raise CartDecodeError("Cart items must be a list")

        items = [CartItem.from_dict(raw) for raw in raw_items]
        ids = [item.id for item in items]
        if len(set(ids)) != len(ids):
            raise CartDecodeError("Cart items must have unique ids")
        return cls.of(items)
