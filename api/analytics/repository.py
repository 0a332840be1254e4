"""
Aggregate SQL over `products` (raw).

Every query is scoped to one month of the year through the `sale_month`
column, which ingestion fills from `dateOfSale`. Years are not distinguished.
"""

from __future__ import annotations

from typing import Any

from core.db import Database

from .ranges import bucket_case_sql


async def sales_statistics(db: Database, *, month: int) -> dict[str, Any]:
    """
    Sale totals for one month. An empty month yields zeros, not NULLs.
    """
    row = await db.fetch_one(
        """
        SELECT
          COALESCE(sum(price), 0)::float8 AS total_sale_amount,
          count(*) AS total_items,
          count(*) FILTER (WHERE sold) AS total_sold_items,
          count(*) FILTER (WHERE NOT sold) AS total_unsold_items
        FROM products
        WHERE sale_month = $1
        """,
        month,
    )
    return row or {
        "total_sale_amount": 0.0,
        "total_items": 0,
        "total_sold_items": 0,
        "total_unsold_items": 0,
    }


async def price_bucket_counts(db: Database, *, month: int) -> list[dict[str, Any]]:
    """
    Item counts per price bucket index, only for buckets with matches.
    """
    return await db.fetch_all(
        f"""
        SELECT bucket, count(*) AS item_count
        FROM (
          SELECT {bucket_case_sql("price")} AS bucket
          FROM products
          WHERE sale_month = $1
        ) b
        GROUP BY bucket
        ORDER BY bucket
        """,
        month,
    )


async def category_counts(db: Database, *, month: int) -> list[dict[str, Any]]:
    """
    Item counts per category, only for categories with matches.
    """
    return await db.fetch_all(
        """
        SELECT category, count(*) AS item_count
        FROM products
        WHERE sale_month = $1
        GROUP BY category
        ORDER BY item_count DESC, category ASC NULLS LAST
        """,
        month,
    )
