from __future__ import annotations


class Beds24ClientError(Exception):
    """Base client error."""


class NetworkError(Beds24ClientError):
    """Transport/network layer error."""


class ApiError(Beds24ClientError):
    def __init__(self, status_code: int, message: str, details: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class AuthError(ApiError):
    """Auth-related API error."""


AUTH_FAILURE_STATUSES = frozenset({401, 403})


def error_for_status(status_code: int, message: str, details: str | None = None) -> ApiError:
    if status_code in AUTH_FAILURE_STATUSES:
        return AuthError(status_code, message, details)
    return ApiError(status_code, message, details)
