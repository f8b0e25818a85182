"""
Admin Reports Router

Period statistics and the CSV export.
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from core.routers.deps import get_context, require_ok
from core.routers.serializers import sale_to_dict
from core.services.reports import calculate_stats, date_range, export_csv

router = APIRouter(tags=["admin-reports"])


async def _load_sales(ctx, period: str, start: Optional[str], end: Optional[str]):
    range_start, range_end = date_range(period, start=start, end=end)
    return require_ok(await ctx.db.sales.list(range_start, range_end))


@router.get("/reports")
async def admin_get_report(
    period: str = "today",
    start: Optional[str] = None,
    end: Optional[str] = None,
    ctx=Depends(get_context),
):
    sales = await _load_sales(ctx, period, start, end)
    return {
        "period": period,
        "stats": calculate_stats(sales),
        "sales": [sale_to_dict(s) for s in sales],
    }


@router.get("/reports/export")
async def admin_export_report(
    period: str = "today",
    start: Optional[str] = None,
    end: Optional[str] = None,
    ctx=Depends(get_context),
):
    sales = await _load_sales(ctx, period, start, end)
    body = export_csv(sales)
    filename = f"reporte-ventas-{date.today().isoformat()}.csv"
    return Response(
        content=body,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
