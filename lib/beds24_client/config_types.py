from __future__ import annotations
from dataclasses import dataclass

DEFAULT_BASE_URL = "https://beds24.com/api/v2"
DEFAULT_USER_AGENT = "beds24-client/0.1.0"


@dataclass(frozen=True)
class ClientConfig:
    base_url: str = DEFAULT_BASE_URL
    token: str | None = None
    organization: str | None = None
    timeout_s: float = 15.0
    user_agent: str = DEFAULT_USER_AGENT
