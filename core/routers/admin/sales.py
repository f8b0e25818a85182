"""
Admin Sales Router

Point-of-sale tickets and the dashboard figures.
"""
from typing import Optional

from fastapi import APIRouter, Depends

from core.notifications import Notifier
from core.routers.deps import get_context, get_notifier, require_ok
from core.routers.serializers import sale_to_dict
from core.services.domains import prepare_sale_lines
from core.services.reports import date_range
from .models import CreateSaleRequest

router = APIRouter(tags=["admin-sales"])


@router.get("/sales")
async def admin_get_sales(
    period: str = "today",
    start: Optional[str] = None,
    end: Optional[str] = None,
    ctx=Depends(get_context),
):
    """Sales in a period, newest first."""
    range_start, range_end = date_range(period, start=start, end=end)
    sales = require_ok(await ctx.db.sales.list(range_start, range_end))
    return {"sales": [sale_to_dict(s) for s in sales], "count": len(sales)}


@router.get("/sales/stats")
async def admin_get_sales_stats(period: str = "today", ctx=Depends(get_context)):
    """Dashboard cards: revenue, ticket count and average ticket."""
    return await ctx.db.sales.get_sales_stats(period)


@router.post("/sales")
async def admin_create_sale(
    request: CreateSaleRequest,
    ctx=Depends(get_context),
    notifier: Notifier = Depends(get_notifier),
):
    """Record a sale from scanned codes; stock is checked first."""
    lines = await prepare_sale_lines(
        ctx.db.products, ((line.code, line.quantity) for line in request.items)
    )
    sale = require_ok(await ctx.db.sales.process_sale(lines))
    notifier.success("Venta registrada correctamente")
    return {"success": True, "sale": sale_to_dict(sale), "notifications": notifier.drain()}
