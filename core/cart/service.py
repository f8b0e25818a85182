"""Cart service: the cart engine plus persistence and toasts."""
import json
from typing import Any

from core.errors import OutOfStockError
from core.logging import get_logger, sanitize_id_for_logging
from core.notifications import Notifier
from .engine import (
    AddItem,
    CartAction,
    ClearCart,
    LoadCart,
    ProductSnapshot,
    RemoveItem,
    SetQuantity,
    reduce_cart,
)
from .models import CartState, ProductId
from .storage import CartStore, cart_key

logger = get_logger(__name__)


class CartService:
    """
    Owns one visitor's cart.

    Features:
    - Rehydrates from the cart store on `initialize()`
    - Persists the new state before every mutating call returns
    - Emits success toasts through the request's Notifier

    Storage failures never reach the caller: a failed read leaves the cart
    empty, a failed write keeps the in-memory state.
    """

    def __init__(
        self,
        store: CartStore,
        notifier: Notifier,
        key: str | None = None,
        session_id: str | None = None,
    ):
        self.store = store
        self.notifier = notifier
        self.session_id = session_id
        self.key = key or cart_key(session_id)
        self._state = CartState.empty()

    @property
    def cart(self) -> CartState:
        return self._state

    async def initialize(self) -> CartState:
        """Load the persisted cart, if any."""
        try:
            raw = await self.store.get(self.key)
        except Exception as e:
            logger.error(f"Failed to read cart {sanitize_id_for_logging(self.key)}: {e}", exc_info=True)
            return self._state

        if not raw:
            return self._state

        try:
            payload = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Corrupted cart data under {sanitize_id_for_logging(self.key)}: {e}")
            return self._state

        self._state = reduce_cart(self._state, LoadCart(payload))
        return self._state

    async def _dispatch(self, action: CartAction) -> CartState:
        self._state = reduce_cart(self._state, action)
        await self._persist()
        return self._state

    async def _persist(self) -> bool:
        try:
            await self.store.set(self.key, json.dumps(self._state.to_dict()))
            return True
        except Exception as e:
            # In-memory cart stays authoritative; the next successful write catches up
            logger.error(f"Failed to persist cart {sanitize_id_for_logging(self.key)}: {e}", exc_info=True)
            return False

    async def add_to_cart(self, product: Any) -> CartState:
        """
        Add one unit of a product.

        Raises:
            ValidationError: product price is missing or negative
            OutOfStockError: product stock is exhausted, or the cart already
                holds every available unit
        """
        snapshot = ProductSnapshot.from_product(product)
        stock = product.get("stock") if isinstance(product, dict) else getattr(product, "stock", None)
        if stock is not None:
            if stock <= 0 or self.get_item_quantity(snapshot.id) >= stock:
                raise OutOfStockError(snapshot.name, stock)

        await self._dispatch(AddItem(snapshot))
        self.notifier.success(f"{snapshot.name} agregado al carrito")
        return self._state

    async def remove_from_cart(self, product_id: ProductId) -> CartState:
        item = self._state.find(product_id)
        if item is None:
            return self._state

        await self._dispatch(RemoveItem(product_id))
        self.notifier.success(f"{item.name} eliminado del carrito")
        return self._state

    async def update_quantity(self, product_id: ProductId, quantity: int) -> CartState:
        """Set an item's quantity. Zero or less drops the item without a toast."""
        if self._state.find(product_id) is None:
            return self._state
        return await self._dispatch(SetQuantity(product_id, quantity))

    async def clear_cart(self) -> CartState:
        await self._dispatch(ClearCart())
        self.notifier.success("Carrito vaciado")
        return self._state

    def get_item_count(self) -> int:
        return self._state.item_count

    def is_in_cart(self, product_id: ProductId) -> bool:
        return self._state.find(product_id) is not None

    def get_item_quantity(self, product_id: ProductId) -> int:
        item = self._state.find(product_id)
        return item.quantity if item else 0
