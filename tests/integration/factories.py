from __future__ import annotations


def product(id: int, *, price: float, date: str | None, sold: bool = True, category: str | None = "misc") -> dict:
    """A feed-shaped record with only the fields a test cares about varied."""
    return {
        "id": id,
        "title": f"item {id}",
        "price": price,
        "description": "",
        "category": category,
        "image": f"https://example.com/{id}.jpg",
        "sold": sold,
        "dateOfSale": date,
    }
