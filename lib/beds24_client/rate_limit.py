from __future__ import annotations

from dataclasses import dataclass

import httpx

HEADER_LIMIT = "X-FiveMinCreditLimit"
HEADER_REMAINING = "X-FiveMinCreditLimit-Remaining"
HEADER_RESETS_IN = "X-FiveMinCreditLimit-ResetsIn"
HEADER_REQUEST_COST = "X-RequestCost"


@dataclass(frozen=True)
class RateLimit:
    """Five-minute credit budget reported by Beds24 on every response."""

    limit: int | None = None
    remaining: int | None = None
    resets_in: int | None = None
    request_cost: int | None = None


def _header_int(headers: httpx.Headers, name: str) -> int | None:
    raw = headers.get(name)
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def parse_rate_limit_headers(response: httpx.Response) -> RateLimit:
    headers = response.headers
    return RateLimit(
        limit=_header_int(headers, HEADER_LIMIT),
        remaining=_header_int(headers, HEADER_REMAINING),
        resets_in=_header_int(headers, HEADER_RESETS_IN),
        request_cost=_header_int(headers, HEADER_REQUEST_COST),
    )
