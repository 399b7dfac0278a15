"""Response error extraction for load test observability.

Parses Storefront API error responses into human-readable messages.
Every error the API returns has the shape ``{"error": "msg"}``; anything
else is an upstream proxy or crash page.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response

INSUFFICIENT_STOCK_PREFIX = "Insufficient stock or product not found"


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response.

    Returns a compact string suitable for Locust failure messages and log lines.
    Gracefully handles unparseable bodies and missing fields.
    """
    try:
        body = response.json()
    except ValueError:
        # Not JSON, return raw text, truncated
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if isinstance(body, dict) and "error" in body:
        return str(body["error"])

    # Unknown shape, stringify and truncate
    return str(body)[:300]


def is_insufficient_stock(response: Response) -> bool:
    """True for the expected rejection when an order loses the race for stock."""
    return response.status_code == 500 and extract_error_detail(response).startswith(INSUFFICIENT_STOCK_PREFIX)
