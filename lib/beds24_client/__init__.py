from .auto_refresh import AutoRefreshClient, create_auto_refresh_client
from .client import HTTP_VERBS, Beds24Client, ClientState, create_beds24_client
from .config_types import ClientConfig
from .errors import ApiError, AuthError, Beds24ClientError, NetworkError
from .rate_limit import RateLimit, parse_rate_limit_headers
from .results import Err, Ok, Result

__all__ = [
    "AutoRefreshClient",
    "create_auto_refresh_client",
    "Beds24Client",
    "ClientState",
    "create_beds24_client",
    "HTTP_VERBS",
    "ClientConfig",
    "ApiError",
    "AuthError",
    "Beds24ClientError",
    "NetworkError",
    "RateLimit",
    "parse_rate_limit_headers",
    "Err",
    "Ok",
    "Result",
]
