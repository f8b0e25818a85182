"""Order Repository - storefront orders and their items."""
from typing import Any, Dict, List, Optional

from core.db import Rpc, Tables
from core.services.models import OnlineOrder, OrderItem, PENDING_STATUSES, ProductId
from .base import BaseRepository


class OrderRepository(BaseRepository):
    """Online order database operations."""

    async def get_all(self, status: Optional[str] = None) -> List[OnlineOrder]:
        query = self.client.table(Tables.ONLINE_ORDERS).select("*").order("created_at", desc=True)
        if status:
            query = query.eq("status", status)
        result = await query.execute()
        return [OnlineOrder(**o) for o in result.data or []]

    async def count_pending(self) -> int:
        result = await (
            self.client.table(Tables.ONLINE_ORDERS)
            .select("id", count="exact")
            .in_("status", list(PENDING_STATUSES))
            .execute()
        )
        return result.count or 0

    async def create(self, data: Dict[str, Any]) -> OnlineOrder:
        result = await self.client.table(Tables.ONLINE_ORDERS).insert(data).execute()
        return OnlineOrder(**result.data[0])

    async def add_items(self, rows: List[Dict[str, Any]]) -> None:
        await self.client.table(Tables.ORDER_ITEMS).insert(rows).execute()

    async def update(self, order_id: ProductId, data: Dict[str, Any]) -> Optional[OnlineOrder]:
        result = await self.client.table(Tables.ONLINE_ORDERS).update(data).eq("id", order_id).execute()
        return OnlineOrder(**result.data[0]) if result.data else None

    async def get_items(self, order_id: ProductId) -> List[OrderItem]:
        result = await (
            self.client.table(Tables.ORDER_ITEMS)
            .select("*, products(name, code)")
            .eq("order_id", order_id)
            .execute()
        )
        return [OrderItem.from_row(row) for row in result.data or []]

    async def convert_to_sale(self, order_id: ProductId) -> Any:
        """Backend procedure: mark approved, create the sale, decrement stock."""
        result = await self.client.rpc(Rpc.CONVERT_ORDER_TO_SALE, {"order_id_param": order_id}).execute()
        return result.data
