# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import asyncio

import httpx

from availability_agent.config import AgentSettings
from availability_agent.errors import ErrorKind
from availability_agent.http.adapters import StubHttpClient
from availability_agent.http.client import create_default_http_client
from availability_agent.http.headers import has_header
from availability_agent.http.httpx_client import HttpxClient
from availability_agent.http.models import HttpRequest, HttpResponse


def _client(handler, settings=None):
    settings = settings or AgentSettings(user_agent="UA/1.0")
    return HttpxClient(settings, client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


def _send(client, request):
    async def run():
        try:
            return await client.request(request)
        finally:
            await client.aclose()

    return asyncio.run(run())


def test_httpx_client_returns_status_and_reason():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(404, headers={"X-Trace": "t1"})

    resp = _send(_client(handler), HttpRequest(url="https://example.com/health", method="HEAD", timeout=3.0))

    assert resp.ok is True
    assert resp.status_code == 404
    assert resp.reason_phrase == "Not Found"
    assert resp.headers["x-trace"] == "t1"
    assert resp.url == "https://example.com/health"
    assert seen[0].method == "HEAD"
    assert seen[0].headers["User-Agent"] == "UA/1.0"


def test_httpx_client_keeps_probe_supplied_user_agent_and_headers():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200)

    headers = {"user-agent": "Custom/2.0", "Authorization": "Bearer t"}
    _send(_client(handler), HttpRequest(url="https://example.com", headers=headers))

    assert seen[0].headers["User-Agent"] == "Custom/2.0"
    assert seen[0].headers.get_list("User-Agent") == ["Custom/2.0"]
    assert seen[0].headers["Authorization"] == "Bearer t"


def test_httpx_client_classifies_connect_errors_as_transport():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("[Errno 111] Connection refused", request=request)

    resp = _send(_client(handler), HttpRequest(url="https://down.example.com"))
    assert resp.ok is False
    assert resp.status_code is None
    assert resp.error_kind == ErrorKind.TRANSPORT_ERROR
    assert resp.error_type == "ConnectError"
    assert "Connection refused" in resp.error_message


def test_httpx_client_classifies_read_timeouts():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    resp = _send(_client(handler), HttpRequest(url="https://slow.example.com", timeout=1.0))
    assert resp.ok is False
    assert resp.error_kind == ErrorKind.TIMEOUT


def test_httpx_client_classifies_other_exceptions_as_unexpected():
    def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        raise ValueError("bad state")

    resp = _send(_client(handler), HttpRequest(url="https://example.com"))
    assert resp.ok is False
    assert resp.error_kind == ErrorKind.UNEXPECTED_ERROR
    assert resp.error_message == "bad state"


def test_httpx_client_stops_reading_large_bodies_at_the_limit():
    chunk = b"x" * (1024 * 1024)
    sent = []

    async def body():
        for _ in range(64):
            sent.append(len(chunk))
            yield chunk

    def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        return httpx.Response(200, content=body())

    settings = AgentSettings(user_agent="UA/1.0", max_body_bytes=1024)
    resp = _send(_client(handler, settings), HttpRequest(url="https://example.com/download"))

    assert resp.ok is True
    assert resp.status_code == 200
    assert len(sent) < 64
    assert resp.meta["body_truncated"] is True
    assert resp.meta["body_bytes_read"] == 1024


def test_httpx_client_drains_small_bodies_completely():
    def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        return httpx.Response(200, content=b"healthy")

    resp = _send(_client(handler), HttpRequest(url="https://example.com/health"))
    assert resp.meta == {"body_truncated": False, "body_bytes_read": 7, "body_bytes_limit": 64 * 1024}


def test_create_default_http_client_uses_settings():
    client = create_default_http_client(AgentSettings(default_timeout_seconds=9, verify_ssl=False))
    try:
        assert isinstance(client, HttpxClient)
        assert client.settings.default_timeout_seconds == 9
    finally:
        asyncio.run(client.aclose())


def test_stub_http_client_records_requests_and_defaults_to_transport_error():
    stub = StubHttpClient()
    stub.add("http://known", HttpResponse(ok=True, status_code=200))

    known = asyncio.run(stub.request(HttpRequest(url="http://known")))
    unknown = asyncio.run(stub.request(HttpRequest(url="http://unknown")))
    asyncio.run(stub.aclose())

    assert known.status_code == 200
    assert unknown.ok is False
    assert unknown.error_kind == ErrorKind.TRANSPORT_ERROR
    assert [r.url for r in stub.requests] == ["http://known", "http://unknown"]
    assert stub.closed is True


def test_has_header_is_case_insensitive():
    headers = {"x-api-key": "1", "Content-Type": "text/plain"}
    assert has_header(headers, "X-Api-Key")
    assert has_header(headers, "content-type")
    assert not has_header(headers, "User-Agent")
    assert not has_header(None, "User-Agent")
