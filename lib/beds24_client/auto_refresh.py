from __future__ import annotations

import logging
from typing import Any, Callable

import httpx

from .auth import refresh_access_token
from .client import Beds24Client, ClientState
from .results import Result, is_auth_failure

logger = logging.getLogger(__name__)

TokenUpdateCallback = Callable[[str], None]


class AutoRefreshClient:
    """Wraps a ``Beds24Client`` and recovers once from an expired access token.

    When a verb call comes back with 401 or 403 the access token is refreshed
    with ``refresh_token``, pushed into the wrapped client, reported through
    ``on_token_update`` and the call is retried a single time. A refresh that
    fails for any reason yields the original error result.

    Concurrent calls are not coalesced: each one that sees an auth failure
    runs its own refresh and the last token written wins.
    """

    def __init__(
            self,
            client: Beds24Client,
            refresh_token: str,
            on_token_update: TokenUpdateCallback | None = None,
            *,
            refresh_http: httpx.AsyncClient | None = None,
    ):
        self._client = client
        self._refresh_token = refresh_token
        self._on_token_update = on_token_update
        self._refresh_http = refresh_http or client.http

    @property
    def client(self) -> Beds24Client:
        return self._client

    # --- delegated members ---
    @property
    def http(self) -> httpx.AsyncClient:
        return self._client.http

    @property
    def base_url(self) -> str:
        return self._client.base_url

    @property
    def state(self) -> ClientState:
        return self._client.state

    def set_token(self, token: str | None) -> None:
        self._client.set_token(token)

    def set_organization(self, organization: str | None) -> None:
        self._client.set_organization(organization)

    def set_auth(self, *, token: str | None = None, organization: str | None = None) -> None:
        self._client.set_auth(token=token, organization=organization)

    async def close(self) -> None:
        await self._client.close()

    async def __aenter__(self) -> AutoRefreshClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    # --- refresh ---
    async def _refresh(self) -> str | None:
        grant = await refresh_access_token(self._refresh_http, self._client.base_url, self._refresh_token)
        if grant is None:
            return None
        self._client.set_token(grant.token)
        if self._on_token_update:
            self._on_token_update(grant.token)
        return grant.token

    async def request(self, method: str, path: str, **kwargs: Any) -> Result:
        result = await self._client.request(method, path, **kwargs)
        if not is_auth_failure(result):
            return result

        logger.debug("%s %s returned %s, refreshing access token", method, path, result.status_code)
        try:
            new_token = await self._refresh()
        except Exception:
            logger.error("Auto-refresh token failed", exc_info=True)
            return result
        if not new_token:
            logger.info("Token refresh did not yield a new access token")
            return result

        return await self._client.request(method, path, **kwargs)

    # --- verbs ---
    async def get(self, path: str, **kwargs: Any) -> Result:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Result:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> Result:
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Result:
        return await self.request("DELETE", path, **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> Result:
        return await self.request("PATCH", path, **kwargs)

    async def head(self, path: str, **kwargs: Any) -> Result:
        return await self.request("HEAD", path, **kwargs)

    async def options(self, path: str, **kwargs: Any) -> Result:
        return await self.request("OPTIONS", path, **kwargs)

    async def trace(self, path: str, **kwargs: Any) -> Result:
        return await self.request("TRACE", path, **kwargs)


def create_auto_refresh_client(
        client: Beds24Client,
        refresh_token: str,
        on_token_update: TokenUpdateCallback | None = None,
) -> AutoRefreshClient:
    return AutoRefreshClient(client, refresh_token, on_token_update)
