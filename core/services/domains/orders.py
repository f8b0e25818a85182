"""Online orders domain: admin order management and realtime sync."""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from core.errors import ERROR_INVALID_ORDER_STATUS, ERROR_ORDER_NOT_FOUND, ValidationError
from core.logging import get_logger, sanitize_id_for_logging
from core.services.models import ORDER_STATUSES, PENDING_STATUSES, OnlineOrder, OrderItem, ProductId
from core.services.repositories import OrderRepository
from core.services.result import Result

logger = get_logger(__name__)

REALTIME_CHANNEL = "online_orders_channel"


def _normalize_change(payload: Dict[str, Any]) -> tuple[str, Dict[str, Any], Dict[str, Any]]:
    """
    Reduce a realtime payload to (event_type, new_row, old_row).

    realtime-py nests the change under "data" with type/record/old_record;
    the JS-style shape uses eventType/new/old at the top level.
    """
    data = payload.get("data", payload)
    event_type = data.get("type") or data.get("eventType") or payload.get("eventType") or ""
    new_row = data.get("record") or data.get("new") or {}
    old_row = data.get("old_record") or data.get("old") or {}
    return str(event_type).upper(), new_row, old_row


class OnlineOrdersDomain:
    """
    Storefront orders as seen from the admin panel.

    `orders` is newest first; `pending_count` counts pending orders
    (including the legacy "nuevo" status) for the sidebar badge.
    """

    def __init__(self, repo: OrderRepository):
        self.repo = repo
        self.orders: List[OnlineOrder] = []
        self.pending_count = 0
        self._channel = None

    async def list(self, status: Optional[str] = None) -> Result[List[OnlineOrder]]:
        try:
            orders = await self.repo.get_all(status)
        except Exception as e:
            logger.error(f"Failed to load orders: {e}", exc_info=True)
            return Result.fail(str(e))
        self.orders = orders
        if status is None:
            self.pending_count = sum(1 for o in orders if o.is_pending)
        return Result.ok(orders)

    async def fetch_pending_count(self) -> Result[int]:
        try:
            self.pending_count = await self.repo.count_pending()
        except Exception as e:
            logger.error(f"Failed to count pending orders: {e}", exc_info=True)
            self.pending_count = 0
            return Result.fail(str(e))
        return Result.ok(self.pending_count)

    async def create(self, data: Dict[str, Any]) -> Result[OnlineOrder]:
        row = {
            **data,
            "status": "pending",
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            order = await self.repo.create(row)
        except Exception as e:
            logger.error(f"Failed to create order: {e}", exc_info=True)
            return Result.fail(str(e))
        self.orders = [order, *self.orders]
        self.pending_count += 1
        return Result.ok(order)

    async def add_items(self, rows: List[Dict[str, Any]]) -> Result[None]:
        try:
            await self.repo.add_items(rows)
        except Exception as e:
            logger.error(f"Failed to create order items: {e}", exc_info=True)
            return Result.fail(str(e))
        return Result.ok()

    async def update_status(self, order_id: ProductId, status: str) -> Result[OnlineOrder]:
        if status not in ORDER_STATUSES:
            raise ValidationError(ERROR_INVALID_ORDER_STATUS)

        previous = self.find(order_id)
        try:
            order = await self.repo.update(
                order_id,
                {"status": status, "updated_at": datetime.now(timezone.utc).isoformat()},
            )
        except Exception as e:
            logger.error(f"Failed to update order {sanitize_id_for_logging(order_id)}: {e}", exc_info=True)
            return Result.fail(str(e))
        if order is None:
            return Result.fail(ERROR_ORDER_NOT_FOUND)

        self._replace(order)
        if previous is not None and previous.is_pending and not order.is_pending:
            self.pending_count = max(0, self.pending_count - 1)
        return Result.ok(order)

    async def approve(self, order_id: ProductId) -> Result[Any]:
        """Promote the order into a sale on the backend."""
        previous = self.find(order_id)
        try:
            data = await self.repo.convert_to_sale(order_id)
        except Exception as e:
            logger.error(f"Failed to approve order {sanitize_id_for_logging(order_id)}: {e}", exc_info=True)
            return Result.fail(str(e))

        if previous is not None:
            self._replace(previous.model_copy(update={"status": "approved"}))
            if previous.is_pending:
                self.pending_count = max(0, self.pending_count - 1)
        logger.info(f"Order {sanitize_id_for_logging(order_id)} converted to sale")
        return Result.ok(data)

    async def reject(self, order_id: ProductId) -> Result[OnlineOrder]:
        return await self.update_status(order_id, "rejected")

    async def get_items(self, order_id: ProductId) -> Result[List[OrderItem]]:
        try:
            return Result.ok(await self.repo.get_items(order_id))
        except Exception as e:
            logger.error(f"Failed to load order items: {e}", exc_info=True)
            return Result.fail(str(e))

    def apply_change(self, payload: Dict[str, Any]) -> None:
        """Fold one realtime change on `online_orders` into the local list."""
        event_type, new_row, old_row = _normalize_change(payload)

        if event_type == "INSERT" and new_row:
            order = OnlineOrder(**new_row)
            if self.find(order.id) is None:
                self.orders = [order, *self.orders]
                if order.is_pending:
                    self.pending_count += 1
        elif event_type == "UPDATE" and new_row:
            order = OnlineOrder(**new_row)
            previous = self.find(order.id)
            self._replace(order)
            if previous is not None and previous.is_pending != order.is_pending:
                self.pending_count = max(0, self.pending_count + (1 if order.is_pending else -1))
        elif event_type == "DELETE" and old_row.get("id") is not None:
            removed = self.find(old_row["id"])
            self.orders = [o for o in self.orders if o.id != old_row["id"]]
            status = removed.status if removed else old_row.get("status")
            if status in PENDING_STATUSES:
                self.pending_count = max(0, self.pending_count - 1)

    def _on_change(self, payload: Dict[str, Any]) -> None:
        try:
            self.apply_change(payload)
        except Exception as e:
            logger.warning(f"Ignoring realtime order change: {e}", exc_info=True)

    async def subscribe(self, client) -> bool:
        """Listen for order changes; False when the channel cannot be opened."""
        if self._channel is not None:
            return True
        try:
            channel = client.channel(REALTIME_CHANNEL)
            channel.on_postgres_changes(
                "*", schema="public", table="online_orders", callback=self._on_change
            )
            await channel.subscribe()
        except Exception as e:
            logger.error(f"Failed to subscribe to order changes: {e}", exc_info=True)
            return False
        self._channel = channel
        return True

    async def unsubscribe(self) -> None:
        if self._channel is None:
            return
        try:
            await self._channel.unsubscribe()
        except Exception as e:
            logger.warning(f"Failed to close order channel: {e}")
        self._channel = None

    def find(self, order_id: ProductId) -> Optional[OnlineOrder]:
        return next((o for o in self.orders if o.id == order_id), None)

    def _replace(self, order: OnlineOrder) -> None:
        self.orders = [order if o.id == order.id else o for o in self.orders]
