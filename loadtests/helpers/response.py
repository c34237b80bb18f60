"""Response error extraction for load test observability.

Parses Storefront API error responses into human-readable messages. Every
error the API returns has the shape ``{"message": "..."}``; anything else is
stringified and truncated.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response

INSUFFICIENT_STOCK = "does not have the requested quantity in stock"


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response."""
    try:
        body = response.json()
    except ValueError:
        # Not JSON, return raw text, truncated
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if isinstance(body, dict) and "message" in body:
        return str(body["message"])

    return str(body)[:300]


def is_insufficient_stock(response: Response) -> bool:
    """True for the 400 a checkout returns when another buyer got there first."""
    return response.status_code == 400 and INSUFFICIENT_STOCK in extract_error_detail(response)
