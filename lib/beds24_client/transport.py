from __future__ import annotations

from typing import Any

import httpx

from .errors import NetworkError
from .results import Err, Ok, Result


def decode_body(r: httpx.Response) -> Any:
    if not r.content:
        return None
    try:
        return r.json()
    except ValueError:
        return r.text


class Transport:
    """Sends one request through the injected httpx client and wraps the outcome."""

    def __init__(self, http: httpx.AsyncClient, *, timeout_s: float | None = None):
        self._http = http
        self._timeout_s = timeout_s

    @property
    def http(self) -> httpx.AsyncClient:
        return self._http

    async def close(self) -> None:
        await self._http.aclose()

    async def request(
            self,
            method: str,
            url: str,
            *,
            headers: dict[str, str],
            params: dict[str, Any] | None = None,
            json_body: Any | None = None,
    ) -> Result:
        kwargs: dict[str, Any] = {"headers": headers}
        if params:
            kwargs["params"] = params
        if json_body is not None:
            kwargs["json"] = json_body
        if self._timeout_s is not None:
            kwargs["timeout"] = self._timeout_s
        try:
            r = await self._http.request(method, url, **kwargs)
        except httpx.RequestError as e:
            raise NetworkError(str(e)) from e

        data = decode_body(r)
        if r.status_code >= 400:
            return Err(error=data, response=r)
        return Ok(data=data, response=r)
