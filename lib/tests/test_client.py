from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from beds24_client import (
    ApiError,
    AuthError,
    Beds24Client,
    ClientConfig,
    NetworkError,
    create_beds24_client,
    parse_rate_limit_headers,
)

BASE_URL = "https://api.test/api/v2"


def _client(handler, **cfg) -> Beds24Client:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return Beds24Client(ClientConfig(base_url=BASE_URL, **cfg), http)


def _recorder(response: httpx.Response | None = None):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return response if response is not None else httpx.Response(200, json={"success": True})

    return seen, handler


def test_credential_headers_sent() -> None:
    seen, handler = _recorder()
    client = _client(handler, token="tok", organization="org")

    asyncio.run(client.get("/properties"))

    req = seen[0]
    assert str(req.url) == f"{BASE_URL}/properties"
    assert req.headers["token"] == "tok"
    assert req.headers["organization"] == "org"
    assert req.headers["accept"] == "application/json"


def test_set_token_takes_effect_immediately_and_none_removes_header() -> None:
    seen, handler = _recorder()
    client = _client(handler, token="old")

    client.set_token("new")
    asyncio.run(client.get("bookings"))
    client.set_token(None)
    asyncio.run(client.get("bookings"))

    assert seen[0].headers["token"] == "new"
    assert "token" not in seen[1].headers
    assert str(seen[0].url) == f"{BASE_URL}/bookings"


def test_set_auth_replaces_both_credentials() -> None:
    _, handler = _recorder()
    client = _client(handler, token="a", organization="o1")

    client.set_auth(token="b")

    assert client.state.auth.token == "b"
    assert client.state.auth.organization is None


def test_state_is_a_snapshot() -> None:
    _, handler = _recorder()
    client = _client(handler, token="tok")

    snapshot = client.state
    snapshot.auth.token = "hijacked"
    snapshot.headers["x-extra"] = "1"

    assert client.state.auth.token == "tok"
    assert "x-extra" not in client.state.headers
    assert client.base_url == BASE_URL


def test_params_body_and_extra_headers_forwarded() -> None:
    seen, handler = _recorder()
    client = _client(handler, token="tok")

    asyncio.run(
        client.post(
            "/bookings",
            params={"propertyId": [1, 2]},
            json=[{"roomId": 7}],
            headers={"x-trace": "abc"},
        )
    )

    req = seen[0]
    assert req.method == "POST"
    assert req.url.params.get_list("propertyId") == ["1", "2"]
    assert json.loads(req.content) == [{"roomId": 7}]
    assert req.headers["x-trace"] == "abc"
    assert req.headers["token"] == "tok"


def test_error_status_returns_err_result() -> None:
    _, handler = _recorder(httpx.Response(404, json={"success": False, "error": "not found"}))
    client = _client(handler)

    result = asyncio.run(client.get("/bookings/9"))

    assert result.is_error
    assert result.status_code == 404
    assert result.error == {"success": False, "error": "not found"}
    with pytest.raises(ApiError) as exc:
        result.unwrap()
    assert not isinstance(exc.value, AuthError)
    assert exc.value.status_code == 404
    assert str(exc.value) == "not found"


@pytest.mark.parametrize("status", [401, 403])
def test_unwrap_raises_auth_error(status: int) -> None:
    _, handler = _recorder(httpx.Response(status, text="denied"))
    client = _client(handler)

    result = asyncio.run(client.get("/bookings"))

    with pytest.raises(AuthError) as exc:
        result.unwrap()
    assert exc.value.status_code == status
    assert exc.value.details == "denied"


def test_ok_result_bodies() -> None:
    _, handler = _recorder(httpx.Response(200, json={"data": []}))
    assert asyncio.run(_client(handler).get("/x")).unwrap() == {"data": []}

    _, handler = _recorder(httpx.Response(204))
    assert asyncio.run(_client(handler).delete("/x")).data is None

    _, handler = _recorder(httpx.Response(200, text="plain"))
    assert asyncio.run(_client(handler).get("/x")).data == "plain"


def test_transport_failure_raises_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    client = _client(handler)

    with pytest.raises(NetworkError):
        asyncio.run(client.get("/bookings"))


def test_unknown_method_rejected() -> None:
    _, handler = _recorder()
    client = _client(handler)

    with pytest.raises(ValueError):
        asyncio.run(client.request("FETCH", "/bookings"))


def test_request_method_is_case_insensitive() -> None:
    seen, handler = _recorder()
    client = _client(handler)

    asyncio.run(client.request("patch", "/bookings"))

    assert seen[0].method == "PATCH"


def test_rate_limit_headers_on_result() -> None:
    response = httpx.Response(
        200,
        json={},
        headers={
            "X-FiveMinCreditLimit": "100",
            "x-fivemincreditlimit-remaining": "97",
            "X-FiveMinCreditLimit-ResetsIn": "245",
            "X-RequestCost": "3",
        },
    )
    _, handler = _recorder(response)

    rl = asyncio.run(_client(handler).get("/bookings")).rate_limit

    assert (rl.limit, rl.remaining, rl.resets_in, rl.request_cost) == (100, 97, 245, 3)


def test_rate_limit_headers_missing_or_garbage() -> None:
    rl = parse_rate_limit_headers(httpx.Response(200, headers={"X-FiveMinCreditLimit": "lots"}))

    assert rl.limit is None
    assert rl.remaining is None
    assert rl.resets_in is None
    assert rl.request_cost is None


def test_create_beds24_client_defaults() -> None:
    http = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))

    client = create_beds24_client(http, token="tok")
    custom = create_beds24_client(http, base_url="https://beds24.test/api/v2/")

    assert client.base_url == "https://beds24.com/api/v2"
    assert client.state.auth.token == "tok"
    assert custom.base_url == "https://beds24.test/api/v2"
