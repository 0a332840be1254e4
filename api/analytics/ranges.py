"""
Price ranges used by the bar chart.

Each range is closed on both ends as labelled: 100 falls in "0 - 100",
anything above 100 up to 200 falls in "101 - 200", and so on. Prices above
900 land in the open-ended last range.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PriceRange:
    label: str
    upper: float | None  # inclusive; None means unbounded


PRICE_RANGES: tuple[PriceRange, ...] = (
    PriceRange("0 - 100", 100),
    PriceRange("101 - 200", 200),
    PriceRange("201 - 300", 300),
    PriceRange("301 - 400", 400),
    PriceRange("401 - 500", 500),
    PriceRange("501 - 600", 600),
    PriceRange("601 - 700", 700),
    PriceRange("701 - 800", 800),
    PriceRange("801 - 900", 900),
    PriceRange("901-above", None),
)


def bucket_case_sql(column: str = "price") -> str:
    """
    SQL CASE expression mapping `column` to its index in PRICE_RANGES.

    Conditions are tested in order, so every price (negative ones included)
    gets exactly one index.
    """
    whens = [
        f"WHEN {column} <= {r.upper} THEN {i}"
        for i, r in enumerate(PRICE_RANGES)
        if r.upper is not None
    ]
    last = len(PRICE_RANGES) - 1
    return "CASE " + " ".join(whens) + f" ELSE {last} END"


def label_for(index: int) -> str:
    return PRICE_RANGES[index].label
