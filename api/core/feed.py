"""
Transaction feed HTTP client.

The feed is a single JSON document: an array of product-sale objects.
"""

from __future__ import annotations

from typing import Any

import httpx

# Feed failures are explicit and separable from store errors.
class FeedError(RuntimeError):
    pass


async def fetch_transactions(
    url: str,
    *,
    timeout_s: float = 30.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[dict[str, Any]]:
    """
    Download the feed and return its records as raw dicts.
    """
    url = (url or "").strip()
    if not url:
        raise FeedError("Feed URL is empty.")

    try:
        async with httpx.AsyncClient(timeout=timeout_s, transport=transport) as client:
            resp = await client.get(url)
    except httpx.TimeoutException as e:
        raise FeedError(f"Feed request timed out after {timeout_s}s.") from e
    except httpx.HTTPError as e:
        raise FeedError(f"Feed request failed: {e}") from e

    if resp.status_code != 200:
        # Avoid dumping huge bodies; include a small snippet.
        body = resp.text[:500]
        raise FeedError(f"Feed request failed: {resp.status_code} {body}")

    try:
        data = resp.json()
    except ValueError as e:
        raise FeedError("Feed returned a non-JSON body.") from e

    if not isinstance(data, list):
        raise FeedError(f"Feed returned {type(data).__name__}, expected a JSON array.")

    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise FeedError(f"Feed item {i} is not an object.")

    return data
