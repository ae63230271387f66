"""Response error extraction for load test observability.

Parses checkout API error responses into human-readable messages.
Handles two response shapes:

- Checkout errors (400/500): {"error": "VALIDATION_ERROR", "message": "..."}
- Framework errors (404/405/422): {"detail": "..."} or {"detail": [{"loc": [...], "msg": "..."}]}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response.

    Returns a compact string suitable for Locust failure messages and log lines.
    Gracefully handles unparseable bodies and missing fields.
    """
    try:
        body = response.json()
    except ValueError:
        # Not JSON: return raw text, truncated
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if not isinstance(body, dict):
        return str(body)[:300]

    if "error" in body:
        message = body.get("message")
        return f"{body['error']}: {message}" if message else str(body["error"])

    detail = body.get("detail")
    if isinstance(detail, list):
        parts = []
        for err in detail:
            loc = ".".join(str(p) for p in err.get("loc", []))
            msg = err.get("msg", str(err))
            parts.append(f"{loc}: {msg}" if loc else msg)
        return " | ".join(parts)
    if detail is not None:
        return str(detail)

    # Unknown shape: stringify and truncate
    return str(body)[:300]
