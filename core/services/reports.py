"""
Sales reports.

Period ranges shared with the dashboard stats, aggregate figures for the
reports page, and the CSV export.
"""
import csv
import io
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Iterable, Optional

from core.errors import ERROR_NO_REPORT_DATA, ValidationError
from core.services.money import divide, round_money, to_float

PERIODS = ("today", "yesterday", "week", "month", "custom", "all")
TOP_PRODUCTS_LIMIT = 5


def _parse_day(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError as e:
        raise ValidationError(f"Fecha inválida: {value}") from e


def date_range(
    period: str,
    now: Optional[datetime] = None,
    start: Optional[str] = None,
    end: Optional[str] = None,
) -> tuple[Optional[str], Optional[str]]:
    """
    ISO timestamp bounds for a report period.

    `today` and `yesterday` are whole days; `week` and `month` run from
    7/30 days before today's midnight up to now; `custom` takes
    YYYY-MM-DD bounds with the end day included. Unknown periods are
    unbounded.
    """
    now = now or datetime.now(timezone.utc)
    today = datetime.combine(now.date(), time.min, tzinfo=now.tzinfo)

    if period == "today":
        return today.isoformat(), (today + timedelta(days=1)).isoformat()
    if period == "yesterday":
        return (today - timedelta(days=1)).isoformat(), today.isoformat()
    if period == "week":
        return (today - timedelta(days=7)).isoformat(), now.isoformat()
    if period == "month":
        return (today - timedelta(days=30)).isoformat(), now.isoformat()
    if period == "custom":
        start_day = _parse_day(start)
        end_day = _parse_day(end)
        return (
            datetime.combine(start_day, time.min, tzinfo=now.tzinfo).isoformat() if start_day else None,
            datetime.combine(end_day, time(23, 59, 59), tzinfo=now.tzinfo).isoformat() if end_day else None,
        )
    return None, None


def calculate_stats(sales: Iterable) -> dict:
    """Totals, average ticket and the five best-selling products by units."""
    sales = list(sales)
    total = sum((s.total for s in sales), Decimal("0"))
    count = len(sales)

    by_product: dict[str, dict] = {}
    for sale in sales:
        for line in sale.items:
            entry = by_product.setdefault(line.name, {"quantity": 0, "revenue": Decimal("0")})
            entry["quantity"] += line.quantity
            entry["revenue"] += line.subtotal

    ranked = sorted(by_product.items(), key=lambda kv: kv[1]["quantity"], reverse=True)
    return {
        "total_sales": to_float(total),
        "total_transactions": count,
        "average_ticket": to_float(round_money(divide(total, count))) if count else 0.0,
        "top_products": [
            {"name": name, "quantity": data["quantity"], "revenue": to_float(data["revenue"])}
            for name, data in ranked[:TOP_PRODUCTS_LIMIT]
        ],
    }


def export_csv(sales: Iterable) -> str:
    """
    One row per sale: date, time, "name (qty)" list, total.

    Raises:
        ValidationError: nothing to export
    """
    sales = list(sales)
    if not sales:
        raise ValidationError(ERROR_NO_REPORT_DATA)

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(["Fecha", "Hora", "Productos", "Total"])
    for sale in sales:
        created = sale.created_at
        writer.writerow([
            created.date().isoformat() if created else "",
            created.strftime("%H:%M") if created else "",
            "; ".join(f"{line.name} ({line.quantity})" for line in sale.items),
            f"{round_money(sale.total):.2f}",
        ])
    return buffer.getvalue()
