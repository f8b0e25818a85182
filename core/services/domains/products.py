"""Product domain: inventory CRUD with a local product list."""
from typing import Any, Dict, List, Optional

from core.errors import ERROR_PRODUCT_NOT_FOUND
from core.logging import get_logger, sanitize_string_for_logging
from core.services.models import Product, ProductId
from core.services.repositories import ProductRepository
from core.services.result import Result

logger = get_logger(__name__)


class ProductsDomain:
    """
    Product operations for the inventory and storefront pages.

    `products` mirrors the table as last seen: mutations patch it with the
    row returned by Supabase instead of re-fetching the collection. A failed
    call leaves it as it was.
    """

    def __init__(self, repo: ProductRepository):
        self.repo = repo
        self.products: List[Product] = []

    async def list(self) -> Result[List[Product]]:
        try:
            self.products = await self.repo.get_all()
            return Result.ok(self.products)
        except Exception as e:
            logger.error(f"Failed to load products: {e}", exc_info=True)
            return Result.fail(str(e))

    async def create(self, data: Dict[str, Any]) -> Result[Product]:
        try:
            product = await self.repo.create(data)
        except Exception as e:
            logger.error(f"Failed to create product: {e}", exc_info=True)
            return Result.fail(str(e))
        self.products = [*self.products, product]
        logger.info(f"Product created: {sanitize_string_for_logging(product.name)}")
        return Result.ok(product)

    async def update(self, product_id: ProductId, data: Dict[str, Any]) -> Result[Product]:
        try:
            product = await self.repo.update(product_id, data)
        except Exception as e:
            logger.error(f"Failed to update product {product_id}: {e}", exc_info=True)
            return Result.fail(str(e))
        if product is None:
            return Result.fail(ERROR_PRODUCT_NOT_FOUND)
        self.products = [product if p.id == product_id else p for p in self.products]
        return Result.ok(product)

    async def delete(self, product_id: ProductId) -> Result[None]:
        try:
            deleted = await self.repo.delete(product_id)
        except Exception as e:
            logger.error(f"Failed to delete product {product_id}: {e}", exc_info=True)
            return Result.fail(str(e))
        if not deleted:
            return Result.fail(ERROR_PRODUCT_NOT_FOUND)
        self.products = [p for p in self.products if p.id != product_id]
        return Result.ok()

    async def get(self, product_id: ProductId) -> Optional[Product]:
        try:
            return await self.repo.get_by_id(product_id)
        except Exception as e:
            logger.error(f"Failed to get product {product_id}: {e}", exc_info=True)
            return None

    async def find_by_code(self, code: str) -> Optional[Product]:
        """Lookup used by the scanner on the sales page. None when missing or on error."""
        try:
            return await self.repo.get_by_code(code)
        except Exception as e:
            logger.error(f"Failed to find product by code: {e}", exc_info=True)
            return None

    def search(self, term: str) -> List[Product]:
        """Case-insensitive filter over name and category of the loaded products."""
        needle = term.strip().lower()
        if not needle:
            return list(self.products)
        return [
            p for p in self.products
            if needle in p.name.lower() or needle in p.category.lower()
        ]

    def low_stock(self) -> List[Product]:
        return [p for p in self.products if p.is_low_stock]
