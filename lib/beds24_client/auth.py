from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from .errors import NetworkError, error_for_status
from .results import Result
from .transport import decode_body

TOKEN_PATH = "/authentication/token"
SETUP_PATH = "/authentication/setup"
DETAILS_PATH = "/authentication/details"


@dataclass(frozen=True)
class TokenGrant:
    token: str
    expires_in: int | None = None
    refresh_token: str | None = None


class SupportsGet(Protocol):
    async def get(self, path: str, **kwargs: Any) -> Result: ...


def _grant_from_payload(data: Any) -> TokenGrant | None:
    if not isinstance(data, dict):
        return None
    token = data.get("token")
    if not isinstance(token, str) or not token:
        return None
    expires_in = data.get("expiresIn")
    refresh_token = data.get("refreshToken")
    return TokenGrant(
        token=token,
        expires_in=int(expires_in) if isinstance(expires_in, (int, float)) else None,
        refresh_token=refresh_token if isinstance(refresh_token, str) and refresh_token else None,
    )


async def refresh_access_token(
        http: httpx.AsyncClient,
        base_url: str,
        refresh_token: str,
) -> TokenGrant | None:
    """Mint a new access token from a refresh token.

    Returns ``None`` when the endpoint answers with a non-2xx status or the body
    carries no ``token``. Transport and JSON decoding errors propagate.
    """
    r = await http.get(
        f"{base_url.rstrip('/')}{TOKEN_PATH}",
        headers={"refreshToken": refresh_token, "accept": "application/json"},
    )
    if not r.is_success:
        return None
    return _grant_from_payload(r.json())


async def setup_with_invite_code(
        http: httpx.AsyncClient,
        base_url: str,
        code: str,
        *,
        device_name: str | None = None,
) -> TokenGrant:
    headers = {"code": code, "accept": "application/json"}
    if device_name:
        headers["deviceName"] = device_name
    try:
        r = await http.get(f"{base_url.rstrip('/')}{SETUP_PATH}", headers=headers)
    except httpx.RequestError as e:
        raise NetworkError(str(e)) from e

    data = decode_body(r)
    if r.status_code >= 400:
        msg = f"GET {SETUP_PATH} failed with {r.status_code}"
        details = None
        if isinstance(data, dict):
            details = json.dumps(data, ensure_ascii=False)
            msg = str(data.get("error") or msg)
        elif data:
            details = str(data)[:1000]
        raise error_for_status(r.status_code, msg, details)

    grant = _grant_from_payload(data)
    if grant is None:
        raise error_for_status(500, "authentication setup returned no token")
    return grant


async def token_details(client: SupportsGet) -> Result:
    return await client.get(DETAILS_PATH)
