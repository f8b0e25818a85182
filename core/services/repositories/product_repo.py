"""Product Repository - Product catalog operations."""
from typing import Any, Dict, List, Optional

from core.db import Tables
from core.services.models import Product, ProductId
from .base import BaseRepository


class ProductRepository(BaseRepository):
    """Product database operations."""

    async def get_all(self) -> List[Product]:
        """Get all products ordered by name."""
        result = await self.client.table(Tables.PRODUCTS).select("*").order("name").execute()
        return [Product(**p) for p in result.data or []]

    async def get_by_id(self, product_id: ProductId) -> Optional[Product]:
        result = await self.client.table(Tables.PRODUCTS).select("*").eq("id", product_id).limit(1).execute()
        return Product(**result.data[0]) if result.data else None

    async def get_by_code(self, code: str) -> Optional[Product]:
        """Get product by its scanned/printed code."""
        result = await self.client.table(Tables.PRODUCTS).select("*").eq("code", code).limit(1).execute()
        return Product(**result.data[0]) if result.data else None

    async def create(self, data: Dict[str, Any]) -> Product:
        result = await self.client.table(Tables.PRODUCTS).insert(data).execute()
        return Product(**result.data[0])

    async def update(self, product_id: ProductId, data: Dict[str, Any]) -> Optional[Product]:
        result = await self.client.table(Tables.PRODUCTS).update(data).eq("id", product_id).execute()
        return Product(**result.data[0]) if result.data else None

    async def delete(self, product_id: ProductId) -> bool:
        """Delete product; False when no row matched."""
        result = await self.client.table(Tables.PRODUCTS).delete().eq("id", product_id).execute()
        return bool(result.data)
