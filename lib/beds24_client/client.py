from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from .config_types import DEFAULT_BASE_URL, ClientConfig
from .results import Result
from .transport import Transport

logger = logging.getLogger(__name__)

HTTP_VERBS = ("GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS", "TRACE")


@dataclass
class AuthState:
    token: str | None = None
    organization: str | None = None


@dataclass
class ClientState:
    base_url: str
    headers: dict[str, str] = field(default_factory=dict)
    auth: AuthState = field(default_factory=AuthState)


def normalize_verb(method: str) -> str:
    verb = str(method or "").upper()
    if verb not in HTTP_VERBS:
        raise ValueError(f"unsupported HTTP method: {method!r}")
    return verb


class Beds24Client:
    """Beds24 API v2 client.

    Every verb call returns a ``Result``: ``Ok`` for 2xx/3xx responses and
    ``Err`` carrying the decoded body and the ``httpx.Response`` otherwise.
    HTTP error statuses never raise; transport failures raise ``NetworkError``.
    """

    def __init__(self, cfg: ClientConfig, http: httpx.AsyncClient):
        self._t = Transport(http, timeout_s=cfg.timeout_s)
        self._state = ClientState(
            base_url=cfg.base_url.rstrip("/"),
            headers={"accept": "application/json", "user-agent": cfg.user_agent},
            auth=AuthState(token=cfg.token or None, organization=cfg.organization or None),
        )

    @property
    def http(self) -> httpx.AsyncClient:
        return self._t.http

    @property
    def base_url(self) -> str:
        return self._state.base_url

    @property
    def state(self) -> ClientState:
        """Snapshot of the current configuration; changing it has no effect on the client."""
        return copy.deepcopy(self._state)

    def set_token(self, token: str | None) -> None:
        self._state.auth.token = token or None

    def set_organization(self, organization: str | None) -> None:
        self._state.auth.organization = organization or None

    def set_auth(self, *, token: str | None = None, organization: str | None = None) -> None:
        self._state.auth = AuthState(token=token or None, organization=organization or None)

    def _headers(self, extra: dict[str, str] | None) -> dict[str, str]:
        headers = dict(self._state.headers)
        if self._state.auth.token:
            headers["token"] = self._state.auth.token
        if self._state.auth.organization:
            headers["organization"] = self._state.auth.organization
        if extra:
            headers.update(extra)
        return headers

    async def close(self) -> None:
        await self._t.close()

    async def __aenter__(self) -> Beds24Client:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def request(
            self,
            method: str,
            path: str,
            *,
            params: dict[str, Any] | None = None,
            json: Any | None = None,
            headers: dict[str, str] | None = None,
    ) -> Result:
        verb = normalize_verb(method)
        url = f"{self._state.base_url}/{path.lstrip('/')}"
        logger.debug("%s %s", verb, url)
        return await self._t.request(
            verb,
            url,
            headers=self._headers(headers),
            params=params,
            json_body=json,
        )

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


def create_beds24_client(
        http: httpx.AsyncClient,
        *,
        base_url: str | None = None,
        token: str | None = None,
        organization: str | None = None,
) -> Beds24Client:
    cfg = ClientConfig(base_url=base_url or DEFAULT_BASE_URL, token=token, organization=organization)
    return Beds24Client(cfg, http)
