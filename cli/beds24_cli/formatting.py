from __future__ import annotations

from rich.table import Table

from beds24_client import RateLimit


def format_credits(value: int | None) -> str:
    if value is None:
        return "-"
    return str(value)


def format_resets_in(seconds: int | None) -> str:
    if seconds is None:
        return "-"
    if seconds < 60:
        return f"{seconds}s"
    minutes = seconds // 60
    secs = seconds % 60
    return f"{minutes}m{secs:02d}s"


def rate_limit_table(rl: RateLimit) -> Table:
    table = Table(title="Credits (5 min window)")
    table.add_column("limit")
    table.add_column("remaining")
    table.add_column("resets in")
    table.add_column("request cost")
    table.add_row(
        format_credits(rl.limit),
        format_credits(rl.remaining),
        format_resets_in(rl.resets_in),
        format_credits(rl.request_cost),
    )
    return table
