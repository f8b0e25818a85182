"""Sales domain: point-of-sale tickets, stock decrements and dashboard stats."""
from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from core.errors import ERROR_PRODUCT_NOT_FOUND, EmptyCartError, OutOfStockError, ValidationError
from core.logging import get_logger, sanitize_string_for_logging
from core.services.models import Sale, SaleLine
from core.services.money import divide, to_float
from core.services.reports import date_range
from core.services.repositories import SaleRepository
from core.services.result import Result
from .products import ProductsDomain

logger = get_logger(__name__)


async def prepare_sale_lines(
    products: ProductsDomain, requested: Iterable[tuple[str, int]]
) -> List[SaleLine]:
    """
    Resolve scanned codes into sale lines, merging repeated codes.

    Raises:
        ValidationError: unknown code or non-positive quantity
        OutOfStockError: quantity above the product's stock
    """
    quantities: Dict[str, int] = {}
    for code, quantity in requested:
        if quantity < 1:
            raise ValidationError(f"Cantidad inválida para {code}")
        quantities[code] = quantities.get(code, 0) + quantity

    lines: List[SaleLine] = []
    for code, quantity in quantities.items():
        product = await products.find_by_code(code)
        if product is None:
            raise ValidationError(f"{ERROR_PRODUCT_NOT_FOUND}: {code}")
        if product.stock < quantity:
            raise OutOfStockError(product.name, product.stock)
        lines.append(SaleLine(code=code, name=product.name, price=product.price, quantity=quantity))
    return lines


class SalesDomain:
    """Sales operations; `sales` holds the last loaded list, newest first."""

    def __init__(self, repo: SaleRepository):
        self.repo = repo
        self.sales: List[Sale] = []

    async def list(self, start: Optional[str] = None, end: Optional[str] = None) -> Result[List[Sale]]:
        try:
            self.sales = await self.repo.get_range(start, end)
            return Result.ok(self.sales)
        except Exception as e:
            logger.error(f"Failed to load sales: {e}", exc_info=True)
            return Result.fail(str(e))

    async def process_sale(self, lines: List[SaleLine]) -> Result[Sale]:
        """
        Record a sale, its line items, then decrement stock per product.

        A failed stock decrement is logged and does not fail the sale: the
        ticket is already stored at that point.
        """
        if not lines:
            raise EmptyCartError()

        total = sum((line.subtotal for line in lines), Decimal("0"))
        snapshot = [
            {"code": line.code, "name": line.name, "price": to_float(line.price), "quantity": line.quantity}
            for line in lines
        ]

        try:
            sale = await self.repo.create(to_float(total), snapshot)
            await self.repo.add_items([
                {
                    "sale_id": sale.id,
                    "product_code": line.code,
                    "product_name": line.name,
                    "price": to_float(line.price),
                    "quantity": line.quantity,
                    "subtotal": to_float(line.subtotal),
                }
                for line in lines
            ])
        except Exception as e:
            logger.error(f"Failed to process sale: {e}", exc_info=True)
            return Result.fail(str(e))

        for line in lines:
            if not line.code:
                continue
            try:
                await self.repo.decrement_stock(line.code, line.quantity)
            except Exception as e:
                logger.warning(f"Stock update failed for {sanitize_string_for_logging(line.code)}: {e}")

        self.sales = [sale, *self.sales]
        logger.info(f"Sale {sale.id} recorded: {len(lines)} lines, total {total}")
        return Result.ok(sale)

    async def get_sales_stats(self, period: str = "today", now: Optional[datetime] = None) -> dict:
        """Totals for the dashboard cards; zeros when the query fails."""
        if period not in ("today", "week", "month"):
            period = "today"
        start, end = date_range(period, now=now)
        try:
            sales = await self.repo.get_range(start, end, end_inclusive=False)
        except Exception as e:
            logger.error(f"Failed to load sales stats: {e}", exc_info=True)
            return {"total_sales": 0.0, "total_transactions": 0, "average_ticket": 0.0}

        total = sum((s.total for s in sales), Decimal("0"))
        count = len(sales)
        return {
            "total_sales": to_float(total),
            "total_transactions": count,
            "average_ticket": to_float(divide(total, count)) if count else 0.0,
        }
