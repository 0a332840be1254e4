"""
Analytics service (orchestration).

This is where we:
- validate the requested month before touching the store
- call the aggregate queries (repository)
- shape rows into the response payloads
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable

from core.db import STORE_ERRORS, Database
from core.errors import InvalidMonth, QueryFailure

from . import repository
from .ranges import label_for


def parse_month(raw: int | str) -> int:
    """
    Return `raw` as a month number 1..12, or raise InvalidMonth.

    Strings must be plain decimal digits ("3", "03", " 12 ").
    """
    if isinstance(raw, bool):
        raise InvalidMonth(raw)
    if isinstance(raw, int):
        month = raw
    elif isinstance(raw, str):
        text = raw.strip()
        if not text.isascii() or not text.isdigit():
            raise InvalidMonth(raw)
        month = int(text)
    else:
        raise InvalidMonth(raw)

    if month < 1 or month > 12:
        raise InvalidMonth(raw)
    return month


async def _run_query(
    name: str,
    query: Callable[..., Awaitable[Any]],
    db: Database,
    month: int,
) -> Any:
    try:
        return await query(db, month=month)
    except STORE_ERRORS as e:
        raise QueryFailure(f"{name} query failed for month={month}: {e}") from e


async def summary_statistics(db: Database, month: int | str) -> dict[str, Any]:
    m = parse_month(month)
    row = await _run_query("statistics", repository.sales_statistics, db, m)
    return {
        "totalSaleAmount": round(float(row["total_sale_amount"] or 0), 2),
        "totalItems": int(row["total_items"] or 0),
        "totalSoldItems": int(row["total_sold_items"] or 0),
        "totalUnsoldItems": int(row["total_unsold_items"] or 0),
    }


async def price_histogram(db: Database, month: int | str) -> list[dict[str, Any]]:
    m = parse_month(month)
    rows = await _run_query("bar_chart", repository.price_bucket_counts, db, m)
    rows = sorted(rows, key=lambda r: int(r["bucket"]))
    return [
        {"range": label_for(int(row["bucket"])), "itemCount": int(row["item_count"])}
        for row in rows
    ]


async def category_breakdown(db: Database, month: int | str) -> list[dict[str, Any]]:
    m = parse_month(month)
    rows = await _run_query("pie_chart", repository.category_counts, db, m)
    return [
        {"category": row["category"], "itemCount": int(row["item_count"])}
        for row in rows
    ]


async def combined_data(db: Database, month: int | str) -> dict[str, Any]:
    """
    All three views for one month. Each runs as its own read; if any fails,
    the whole call fails.
    """
    m = parse_month(month)
    statistics, bar_chart, pie_chart = await asyncio.gather(
        summary_statistics(db, m),
        price_histogram(db, m),
        category_breakdown(db, m),
    )
    return {
        "statistics": statistics,
        "barChart": bar_chart,
        "pieChart": pie_chart,
    }
