from __future__ import annotations

import typer

from .. import console
from ..config import config_path, load_config, normalize_base_url, save_config

app = typer.Typer(help="Local CLI configuration.")


@app.command("show")
def show_config() -> None:
    cfg = load_config()
    token_state = "(set)" if cfg.auth.token else "(empty)"
    refresh_state = "(set)" if cfg.auth.refresh_token else "(empty)"
    console.console.print(
        f"base_url={cfg.base_url} token={token_state} refresh_token={refresh_state} "
        f"organization={cfg.auth.organization or '-'}"
    )
    console.info(f"config file: {config_path()}")


@app.command("set")
def set_config_value(
        base_url: str | None = typer.Option(None, "--base-url", help="API base URL."),
        organization: str | None = typer.Option(None, "--organization", help="Default organization header."),
) -> None:
    cfg = load_config()

    if base_url is not None:
        cfg.base_url = normalize_base_url(base_url, warn=True)
    if organization is not None:
        cfg.auth.organization = organization.strip()

    save_config(cfg)
    console.ok("Config updated.")
