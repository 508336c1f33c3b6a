from __future__ import annotations

import asyncio
import json
from typing import Any

import typer

from beds24_client import Beds24ClientError
from beds24_client.client import normalize_verb

from .. import console
from ..config import load_config
from ..formatting import rate_limit_table
from ..http import make_client


def _parse_params(raw: list[str]) -> dict[str, Any]:
    params: dict[str, Any] = {}
    for item in raw:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"expected key=value, got {item!r}")
        # repeated keys become lists (e.g. propertyId=1 propertyId=2)
        if key in params:
            existing = params[key]
            params[key] = existing + [value] if isinstance(existing, list) else [existing, value]
        else:
            params[key] = value
    return params


async def _send(client, verb: str, path: str, params: dict[str, Any], body: Any):
    try:
        return await client.request(verb, path, params=params or None, json=body)
    finally:
        await client.close()


def request(
    method: str = typer.Argument(..., help="HTTP method (GET, POST, ...)."),
    path: str = typer.Argument(..., help="API path, e.g. /bookings."),
    param: list[str] = typer.Option([], "--param", "-p", help="Query parameter key=value (repeatable)."),
    data: str | None = typer.Option(None, "--data", "-d", help="JSON request body."),
    organization: str | None = typer.Option(None, "--organization", help="Override organization header."),
    base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
    show_credits: bool = typer.Option(True, "--credits/--no-credits", help="Show rate-limit credits."),
):
    try:
        verb = normalize_verb(method)
        params = _parse_params(param)
        body = json.loads(data) if data is not None else None
    except ValueError as e:
        console.err(str(e))
        raise typer.Exit(code=2)

    cfg = load_config()
    client = make_client(cfg, base_url_override=base_url, organization=organization)
    try:
        result = asyncio.run(_send(client, verb, path, params, body))
    except Beds24ClientError as e:
        console.err(f"Request failed: {e}")
        raise typer.Exit(code=2)

    if result.is_error:
        console.err(f"{verb} {path} failed with {result.status_code}")
        if result.error is not None:
            console.print_json(result.error)
    elif result.data is not None:
        console.print_json(result.data)

    if show_credits:
        console.console.print(rate_limit_table(result.rate_limit))
    if result.is_error:
        raise typer.Exit(code=2)
