from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

import httpx

from .errors import AUTH_FAILURE_STATUSES, error_for_status
from .rate_limit import RateLimit, parse_rate_limit_headers

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    data: T
    response: httpx.Response

    @property
    def is_error(self) -> bool:
        return False

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def rate_limit(self) -> RateLimit:
        return parse_rate_limit_headers(self.response)

    def unwrap(self) -> T:
        return self.data


@dataclass(frozen=True)
class Err:
    error: Any
    response: httpx.Response

    @property
    def is_error(self) -> bool:
        return True

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def rate_limit(self) -> RateLimit:
        return parse_rate_limit_headers(self.response)

    def unwrap(self):
        request = self.response.request
        msg = f"{request.method} {request.url.path} failed with {self.status_code}"
        details = None
        if isinstance(self.error, dict):
            details = json.dumps(self.error, ensure_ascii=False)
            msg = str(self.error.get("error") or self.error.get("message") or msg)
        elif self.error:
            details = str(self.error)[:1000]
        raise error_for_status(self.status_code, msg, details)


Result = Union[Ok[Any], Err]


def is_auth_failure(result: Result) -> bool:
    return result.is_error and result.status_code in AUTH_FAILURE_STATUSES
