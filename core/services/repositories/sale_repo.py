"""Sale Repository - point-of-sale tickets and stock decrements."""
from typing import Any, Dict, List, Optional

from core.db import Rpc, Tables
from core.services.models import Sale
from .base import BaseRepository


class SaleRepository(BaseRepository):
    """Sales database operations."""

    async def get_range(
        self,
        start: Optional[str] = None,
        end: Optional[str] = None,
        end_inclusive: bool = True,
    ) -> List[Sale]:
        """Get sales newest first, optionally bounded by ISO timestamps."""
        query = self.client.table(Tables.SALES).select("*").order("created_at", desc=True)
        if start:
            query = query.gte("created_at", start)
        if end:
            query = query.lte("created_at", end) if end_inclusive else query.lt("created_at", end)
        result = await query.execute()
        return [Sale(**s) for s in result.data or []]

    async def create(self, total: float, items: List[Dict[str, Any]]) -> Sale:
        result = await self.client.table(Tables.SALES).insert({"total": total, "items": items}).execute()
        return Sale(**result.data[0])

    async def add_items(self, rows: List[Dict[str, Any]]) -> None:
        await self.client.table(Tables.SALE_ITEMS).insert(rows).execute()

    async def decrement_stock(self, product_code: str, quantity_sold: int) -> None:
        """Backend procedure decrements stock in one transaction."""
        await self.client.rpc(
            Rpc.UPDATE_PRODUCT_STOCK,
            {"product_code": product_code, "quantity_sold": quantity_sold},
        ).execute()
