# SPDX-FileCopyrightText: 2025 The requester authors
# SPDX-License-Identifier: AGPL-3.0-or-later

import gzip
import json
import logging
import time
from urllib.parse import urlencode

import anyio
import httpx
import pytest

from requester.client import Client
from requester.config import ClientSettings
from requester.errors import ErrorCategory, HttpError, InvalidUrlError, SerializationError, TransportError
from requester.http.models import RawResponse, RequestOptions
from requester.http.transport import HttpxTransport, StubTransport

pytestmark = pytest.mark.anyio


def reply(status_code: int, body: bytes = b"", headers: dict[str, str] | None = None) -> httpx.Response:
    return httpx.Response(status_code, headers=headers, stream=httpx.ByteStream(body))


def json_reply(status_code: int, value) -> httpx.Response:
    return reply(status_code, json.dumps(value).encode("utf-8"), {"content-type": "application/json; charset=utf-8"})


async def test_get_empty_response(mock_client):
    client = mock_client(lambda request: reply(204))
    response = await client.get("http://test/")
    assert response.ok is True
    assert response.status_code == 204
    assert response.body is None


async def test_get_text(mock_client):
    client = mock_client(lambda request: reply(200, b"test", {"content-type": "text/plain; charset=utf-8"}))
    response = await client.get("http://test/")
    assert response.ok is True
    assert response.status_code == 200
    assert response.body == "test"


async def test_get_json(mock_client):
    client = mock_client(lambda request: json_reply(200, {"message": "test"}))
    response = await client.get("http://test/")
    assert response.body == {"message": "test"}


async def test_post_json_echo(mock_client):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        payload = json.loads(request.content)
        return json_reply(201 if payload.get("chef") == "Sanchez" else 400, payload)

    client = mock_client(handler)
    response = await client.post("http://test/", body={"chef": "Sanchez"})
    assert response.ok is True
    assert response.status_code == 201
    assert response.body == {"chef": "Sanchez"}

    sent = seen[0]
    assert sent.method == "POST"
    assert sent.headers["content-type"] == "application/json"
    assert sent.headers["content-length"] == str(len(sent.content))


async def test_post_form_response(mock_client):
    body = {"artist": "Peter Bjorn and John", "song": "Music"}
    client = mock_client(
        lambda request: reply(200, urlencode(body).encode("ascii"), {"content-type": "application/x-www-form-urlencoded"})
    )
    response = await client.post("http://test/")
    assert response.ok is True
    assert response.body == body


async def test_unauthorized_raises_http_error(mock_client):
    client = mock_client(lambda request: reply(401, b"Unauthorized", {"content-type": "text/plain"}))
    with pytest.raises(HttpError) as excinfo:
        await client.get("http://test/")
    err = excinfo.value
    assert err.response.ok is False
    assert err.response.status_code == 401
    assert err.status_code == 401
    assert err.response.body == "Unauthorized"
    assert str(err) == "Unauthorized"


async def test_should_throw_false_returns_response(mock_client):
    client = mock_client(lambda request: reply(401))
    response = await client.get("http://test/", should_throw=False)
    assert response.ok is False
    assert response.status_code == 401


async def test_should_throw_false_on_instance(mock_client):
    body = {"message": "Ungodly gorgeous, buried in a chorus"}
    client = mock_client(lambda request: json_reply(400, body), should_throw=False)
    response = await client.get("http://test/")
    assert response.ok is False
    assert response.status_code == 400
    assert response.body == body


async def test_gzip_response_through_client(mock_client):
    payload = {"items": [{"id": i} for i in range(100)]}
    compressed = gzip.compress(json.dumps(payload).encode("utf-8"))
    client = mock_client(
        lambda request: reply(200, compressed, {"content-type": "application/json", "content-encoding": "gzip"})
    )
    response = await client.get("http://test/", headers={"accept-encoding": "gzip"})
    assert response.body == payload


async def test_redirects_are_not_followed(mock_client):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(str(request.url))
        if request.url.path == "/":
            return reply(301, headers={"location": "http://test/a"})
        return reply(200, b"Success!", {"content-type": "text/plain"})

    client = mock_client(handler)
    response = await client.get("http://test/")
    assert response.status_code == 301
    assert response.ok is True
    assert response.headers["location"] == "http://test/a"
    assert calls == ["http://test/"]


async def test_request_echo_carries_call_options(mock_client):
    client = mock_client(lambda request: reply(204))
    response = await client.get("http://test/", headers={"x-test": "123"})
    assert response.status_code == 204
    assert response.request.url == "http://test/"
    assert response.request.options.headers["x-test"] == "123"
    assert response.request.options.method == "GET"


async def test_headers_merge_key_wise_and_defaults_stay_untouched(mock_client):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return reply(204)

    client = mock_client(handler, headers={"Authorization": "Bearer abc", "X-Client": "1"})
    await client.put("http://test/", headers={"x-client": "2", "x-call": "yes"})
    await client.delete("http://test/")

    first, second = seen
    assert first.method == "PUT"
    assert first.headers["authorization"] == "Bearer abc"
    assert first.headers["x-client"] == "2"
    assert first.headers["x-call"] == "yes"
    assert second.method == "DELETE"
    assert second.headers["x-client"] == "1"
    assert "x-call" not in second.headers
    assert client.options.headers == {"authorization": "Bearer abc", "x-client": "1"}


async def test_base_url_and_camel_case_options(mock_client):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return reply(404)

    client = mock_client(handler, baseUrl="http://test/api/")
    response = await client.get("users", {"shouldThrow": False})
    assert response.status_code == 404
    assert seen == ["http://test/api/users"]


async def test_user_agent_from_settings():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.headers["user-agent"])
        return reply(204)

    transport = HttpxTransport(httpx.AsyncClient(transport=httpx.MockTransport(handler)))
    client = Client(settings=ClientSettings(user_agent="UA/1.0"), transport=transport)
    await client.get("http://test/")
    await client.get("http://test/", headers={"User-Agent": "Override/2"})
    assert seen == ["UA/1.0", "Override/2"]


async def test_transport_failures_propagate(mock_client):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    client = mock_client(handler)
    with pytest.raises(TransportError) as excinfo:
        await client.get("http://test/")
    assert excinfo.value.url == "http://test/"
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


async def test_timeout_is_classified(mock_client):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = mock_client(handler, timeout=0.5)
    with pytest.raises(TransportError) as excinfo:
        await client.get("http://test/")
    assert excinfo.value.is_timeout


class SlowDripStream(httpx.AsyncByteStream):
    """Body that keeps every read short but takes far longer than the timeout overall."""

    def __init__(self, chunks: int = 20, delay: float = 0.2) -> None:
        self.chunks = chunks
        self.delay = delay

    async def __aiter__(self):
        for _ in range(self.chunks):
            await anyio.sleep(self.delay)
            yield b"x"


async def test_timeout_bounds_the_whole_exchange(mock_client):
    client = mock_client(lambda request: httpx.Response(200, stream=SlowDripStream()), timeout=0.5)
    started = time.monotonic()
    with pytest.raises(TransportError) as excinfo:
        await client.get("http://test/slow")
    elapsed = time.monotonic() - started

    assert excinfo.value.is_timeout
    assert excinfo.value.category is ErrorCategory.TIMEOUT
    assert excinfo.value.url == "http://test/slow"
    assert elapsed < 2.0


async def test_serialization_error_happens_before_io(mock_client):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return reply(204)

    cyclic: list = []
    cyclic.append(cyclic)
    client = mock_client(handler)
    with pytest.raises(SerializationError):
        await client.post("http://test/", body=cyclic)
    with pytest.raises(InvalidUrlError):
        await client.get("/relative")
    assert calls == []


async def test_unknown_option_is_rejected(mock_client):
    client = mock_client(lambda request: reply(204))
    with pytest.raises(TypeError):
        await client.get("http://test/", retries=3)


async def test_stub_transport_and_options_object():
    stub = StubTransport({"http://stub/a": RawResponse(status_code=200, headers={"content-type": "application/json"}, body=b'{"a":1}')})
    client = Client(RequestOptions(timeout=5), settings=ClientSettings(), transport=stub)
    response = await client.request("http://stub/a", RequestOptions(method="post", body={"b": 2}))
    assert response.body == {"a": 1}
    sent = stub.requests[0]
    assert sent.method == "POST"
    assert sent.timeout == 5
    assert sent.body == b'{"b":2}'

    with pytest.raises(TransportError):
        await client.get("http://stub/missing")


async def test_log_level_gates_client_diagnostics(mock_client, caplog):
    caplog.set_level(logging.DEBUG, logger="requester")
    quiet = mock_client(lambda request: reply(204))
    await quiet.get("http://test/quiet")
    assert not [r for r in caplog.records if r.name == "requester.client"]

    chatty = mock_client(lambda request: reply(204), log_level="debug")
    await chatty.get("http://test/chatty")
    messages = [r.getMessage() for r in caplog.records if r.name == "requester.client"]
    assert any(m.startswith("Request: GET http://test/chatty") for m in messages)
    assert any(m.startswith("Response: GET http://test/chatty -> 204") for m in messages)


async def test_async_context_manager_closes_owned_transport():
    closed = []

    class ClosingStub(StubTransport):
        async def aclose(self) -> None:
            closed.append(True)

    async with Client(settings=ClientSettings(), transport=ClosingStub()) as client:
        assert isinstance(client, Client)
    assert closed == []

    client = Client(settings=ClientSettings())
    async with client:
        pass
    assert client.transport._client.is_closed
