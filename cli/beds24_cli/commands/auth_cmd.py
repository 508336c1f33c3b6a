from __future__ import annotations

import asyncio

import httpx
import typer

from beds24_client import Beds24ClientError
from beds24_client.auth import TokenGrant, refresh_access_token, setup_with_invite_code, token_details

from .. import console
from ..config import load_config, resolve_base_url, save_config
from ..http import make_client, make_http

app = typer.Typer(help="Auth commands.")


async def _setup(base_url: str, code: str, device_name: str | None) -> TokenGrant:
    async with make_http() as http:
        return await setup_with_invite_code(http, base_url, code, device_name=device_name)


async def _refresh(base_url: str, refresh_token: str) -> TokenGrant | None:
    async with make_http() as http:
        return await refresh_access_token(http, base_url, refresh_token)


async def _details(client):
    try:
        return await token_details(client)
    finally:
        await client.close()


@app.command("setup", help="Exchange an invite code for an access token and a refresh token.")
def setup(
    code: str = typer.Option(..., "--code", prompt="Invite code", hide_input=True, help="Invite code from Beds24."),
    device_name: str | None = typer.Option(None, "--device-name", help="Label shown in the Beds24 API settings."),
    base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    cfg = load_config()
    effective_base_url = resolve_base_url(cfg, base_url)
    try:
        grant = asyncio.run(_setup(effective_base_url, code, device_name))
    except Beds24ClientError as e:
        console.err(f"Setup failed: {e}")
        raise typer.Exit(code=2)

    if base_url:
        cfg.base_url = effective_base_url
    cfg.auth.token = grant.token
    cfg.auth.refresh_token = grant.refresh_token or cfg.auth.refresh_token
    cfg.auth.device_name = device_name or cfg.auth.device_name
    save_path = save_config(cfg)
    if not grant.refresh_token:
        console.warn("No refresh token returned; the access token will not be renewed automatically.")
    console.ok(f"Setup successful. Credentials saved to {save_path}.")


@app.command("details", help="Show details about the stored access token.")
def details(
    json_out: bool = typer.Option(False, "--json", help="Output raw JSON."),
    base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    cfg = load_config()
    if not cfg.auth.token and not cfg.auth.refresh_token:
        console.err("Not authenticated. Run: beds24 auth setup")
        raise typer.Exit(code=2)

    client = make_client(cfg, base_url_override=base_url)
    try:
        result = asyncio.run(_details(client))
    except Beds24ClientError as e:
        console.err(f"Request failed: {e}")
        raise typer.Exit(code=2)

    if result.is_error:
        console.err(f"Token details failed ({result.status_code}).")
        if result.error is not None:
            console.print_json(result.error)
        raise typer.Exit(code=2)

    if json_out or not isinstance(result.data, dict):
        console.print_json(result.data)
        return
    token_info = result.data.get("token") if isinstance(result.data.get("token"), dict) else {}
    console.info(f"valid={result.data.get('validToken')}")
    if token_info.get("expiresIn") is not None:
        console.info(f"expires_in={token_info.get('expiresIn')}s")
    scopes = token_info.get("scopes")
    if isinstance(scopes, list) and scopes:
        console.info("scopes=" + ", ".join(str(s) for s in scopes))


@app.command("refresh", help="Force a new access token using the stored refresh token.")
def refresh(
    base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    cfg = load_config()
    if not cfg.auth.refresh_token:
        console.err("No refresh token stored. Run: beds24 auth setup")
        raise typer.Exit(code=2)

    try:
        grant = asyncio.run(_refresh(resolve_base_url(cfg, base_url), cfg.auth.refresh_token))
    except (httpx.HTTPError, ValueError) as e:
        console.err(f"Refresh failed: {e}")
        raise typer.Exit(code=2)
    if grant is None:
        console.err("Refresh failed: the refresh token was rejected.")
        raise typer.Exit(code=2)

    cfg.auth.token = grant.token
    save_path = save_config(cfg)
    console.ok(f"Access token refreshed. Saved to {save_path}.")


@app.command("logout", help="Clear stored tokens.")
def logout():
    cfg = load_config()
    cfg.auth.token = ""
    cfg.auth.refresh_token = ""
    save_path = save_config(cfg)
    console.ok(f"Tokens cleared from {save_path}.")
