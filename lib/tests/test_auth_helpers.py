from __future__ import annotations

import asyncio

import httpx
import pytest

from beds24_client import ApiError, AuthError, Beds24Client, ClientConfig, NetworkError
from beds24_client.auth import TokenGrant, refresh_access_token, setup_with_invite_code, token_details

BASE_URL = "https://api.test/api/v2"


def _http(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_setup_with_invite_code_returns_grant() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"token": "T1", "expiresIn": 86400, "refreshToken": "R1"})

    grant = asyncio.run(setup_with_invite_code(_http(handler), BASE_URL, "INVITE", device_name="laptop"))

    assert grant == TokenGrant(token="T1", expires_in=86400, refresh_token="R1")
    assert str(seen[0].url) == f"{BASE_URL}/authentication/setup"
    assert seen[0].headers["code"] == "INVITE"
    assert seen[0].headers["deviceName"] == "laptop"


def test_setup_with_invite_code_rejected() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"success": False, "error": "Invalid code"})

    with pytest.raises(ApiError) as exc:
        asyncio.run(setup_with_invite_code(_http(handler), BASE_URL, "bad"))

    assert exc.value.status_code == 400
    assert str(exc.value) == "Invalid code"


def test_setup_with_invite_code_unauthorized_is_auth_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text="nope")

    with pytest.raises(AuthError):
        asyncio.run(setup_with_invite_code(_http(handler), BASE_URL, "bad"))


def test_setup_with_invite_code_without_token() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"refreshToken": "R1"})

    with pytest.raises(ApiError):
        asyncio.run(setup_with_invite_code(_http(handler), BASE_URL, "code"))


def test_setup_with_invite_code_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(NetworkError):
        asyncio.run(setup_with_invite_code(_http(handler), BASE_URL, "code"))


def test_refresh_access_token_results() -> None:
    def ok(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"token": "T2", "expiresIn": 3600})

    def rejected(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": "bad refresh token"})

    def empty(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"token": ""})

    assert asyncio.run(refresh_access_token(_http(ok), BASE_URL + "/", "R1")) == TokenGrant("T2", 3600)
    assert asyncio.run(refresh_access_token(_http(rejected), BASE_URL, "R1")) is None
    assert asyncio.run(refresh_access_token(_http(empty), BASE_URL, "R1")) is None


def test_token_details_goes_through_client() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"validToken": True, "token": {"expiresIn": 100}})

    client = Beds24Client(ClientConfig(base_url=BASE_URL, token="T1"), _http(handler))

    result = asyncio.run(token_details(client))

    assert result.data["validToken"] is True
    assert seen[0].url.path == "/api/v2/authentication/details"
    assert seen[0].headers["token"] == "T1"
