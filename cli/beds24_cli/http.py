from __future__ import annotations

import httpx

from beds24_client import AutoRefreshClient, Beds24Client
from beds24_client.config_types import ClientConfig

from .config import AppConfig, persist_token, resolve_base_url

DEFAULT_TIMEOUT_S = 15.0


def make_http(timeout_s: float = DEFAULT_TIMEOUT_S) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=timeout_s, follow_redirects=True)


def make_client(
    cfg: AppConfig,
    *,
    base_url_override: str | None = None,
    organization: str | None = None,
) -> Beds24Client | AutoRefreshClient:
    """Build a client from the CLI config.

    With a stored refresh token the client is wrapped so an expired access token
    is renewed on the fly and written back to the config file.
    """
    client = Beds24Client(
        ClientConfig(
            base_url=resolve_base_url(cfg, base_url_override),
            token=cfg.auth.token or None,
            organization=organization or cfg.auth.organization or None,
            timeout_s=DEFAULT_TIMEOUT_S,
        ),
        make_http(),
    )
    if not cfg.auth.refresh_token:
        return client
    return AutoRefreshClient(client, cfg.auth.refresh_token, persist_token)
