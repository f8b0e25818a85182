"""Tests for report ranges, statistics and CSV export"""
import pytest
from datetime import datetime, timezone

from core.errors import ValidationError
from core.services.models import Sale
from core.services.reports import calculate_stats, date_range, export_csv

NOW = datetime(2025, 1, 15, 16, 45, tzinfo=timezone.utc)


class TestDateRange:

    def test_today(self):
        assert date_range("today", now=NOW) == (
            "2025-01-15T00:00:00+00:00",
            "2025-01-16T00:00:00+00:00",
        )

    def test_yesterday(self):
        assert date_range("yesterday", now=NOW) == (
            "2025-01-14T00:00:00+00:00",
            "2025-01-15T00:00:00+00:00",
        )

    def test_week_runs_until_now(self):
        start, end = date_range("week", now=NOW)

        assert start == "2025-01-08T00:00:00+00:00"
        assert end == NOW.isoformat()

    def test_custom_includes_end_day(self):
        assert date_range("custom", now=NOW, start="2025-01-01", end="2025-01-10") == (
            "2025-01-01T00:00:00+00:00",
            "2025-01-10T23:59:59+00:00",
        )

    def test_custom_bad_date(self):
        with pytest.raises(ValidationError):
            date_range("custom", now=NOW, start="01/01/2025")

    def test_unknown_period_is_unbounded(self):
        assert date_range("all", now=NOW) == (None, None)


def make_sales(sample_sale):
    return [
        Sale(**sample_sale),
        Sale(**{
            **sample_sale,
            "id": 8,
            "total": 5.0,
            "items": [{"code": "P003", "name": "Tornillo", "price": 0.5, "quantity": 10}],
            "created_at": "2025-01-15T09:05:00+00:00",
        }),
    ]


def test_calculate_stats(sample_sale):
    stats = calculate_stats(make_sales(sample_sale))

    assert stats["total_sales"] == 28.0
    assert stats["total_transactions"] == 2
    assert stats["average_ticket"] == 14.0
    assert [p["name"] for p in stats["top_products"]] == ["Tornillo", "Widget", "Gadget"]
    assert stats["top_products"][1] == {"name": "Widget", "quantity": 2, "revenue": 20.0}


def test_calculate_stats_empty():
    stats = calculate_stats([])

    assert stats["total_transactions"] == 0
    assert stats["average_ticket"] == 0.0
    assert stats["top_products"] == []


def test_top_products_limited_to_five(sample_sale):
    items = [{"code": f"C{i}", "name": f"P{i}", "price": 1, "quantity": i} for i in range(1, 8)]
    stats = calculate_stats([Sale(**{**sample_sale, "items": items})])

    assert [p["name"] for p in stats["top_products"]] == ["P7", "P6", "P5", "P4", "P3"]


def test_export_csv(sample_sale):
    body = export_csv(make_sales(sample_sale))

    lines = body.splitlines()
    assert lines[0] == "Fecha,Hora,Productos,Total"
    assert lines[1] == "2025-01-15,14:30,Widget (2); Gadget (1),23.00"
    assert lines[2] == "2025-01-15,09:05,Tornillo (10),5.00"


def test_export_csv_empty():
    with pytest.raises(ValidationError):
        export_csv([])
