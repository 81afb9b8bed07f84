"""
Tests for transports, responses and cancellation.
"""

import asyncio

import httpx
import pytest

from catapult.cancellation import CancellationToken
from catapult.exceptions import RequestCancelledError, SDKError, SerializationError, TransportError
from catapult.transport.base import ApiRequest, ApiResponse
from catapult.transport.http import HttpTransport
from catapult.transport.mock import MockTransport, json_response


class TestApiRequest:
    def test_path_and_query(self):
        request = ApiRequest(method="GET", url="https://api.example.com/v1/calls?page=1")
        assert request.path == "/v1/calls"
        assert request.query == "page=1"

    def test_json_of_empty_body(self):
        assert ApiRequest(method="GET", url="https://x/").json() is None


class TestApiResponse:
    def test_header_lookup_is_case_insensitive(self):
        response = ApiResponse(status_code=201, headers={"location": "/v1/calls/1"})
        assert response.header("Location") == "/v1/calls/1"
        assert response.location == "/v1/calls/1"
        assert response.header("Link") is None

    @pytest.mark.parametrize("status,ok", [(200, True), (201, True), (204, True), (302, False), (400, False), (500, False)])
    def test_is_success(self, status, ok):
        assert ApiResponse(status_code=status).is_success is ok

    def test_invalid_json(self):
        with pytest.raises(SerializationError):
            ApiResponse(status_code=200, content=b"<xml/>").json()

    @pytest.mark.asyncio
    async def test_scoped_release(self):
        closed = []

        async def on_close():
            closed.append(True)

        response = ApiResponse(status_code=200, content=b'{"a": 1}', on_close=on_close)
        async with response:
            assert response.json() == {"a": 1}
        assert closed == [True]
        with pytest.raises(SDKError):
            response.json()

    @pytest.mark.asyncio
    async def test_aclose_is_idempotent(self):
        calls = []

        async def on_close():
            calls.append(1)

        response = ApiResponse(status_code=200, on_close=on_close)
        await response.aclose()
        await response.aclose()
        assert calls == [1]


class TestMockTransport:
    @pytest.mark.asyncio
    async def test_returns_matched_response(self):
        transport = MockTransport({("POST", "/v1/calls"): json_response(201, {"ok": True})})
        response = await transport.send(ApiRequest(method="POST", url="https://x/v1/calls"))
        assert response.status_code == 201
        assert response.json() == {"ok": True}

    @pytest.mark.asyncio
    async def test_query_specific_route_wins(self):
        transport = MockTransport({
            ("GET", "/v1/calls"): json_response(200, ["bare"]),
            ("GET", "/v1/calls?page=2"): json_response(200, ["page2"]),
        })
        first = await transport.send(ApiRequest(method="GET", url="https://x/v1/calls?page=1"))
        second = await transport.send(ApiRequest(method="GET", url="https://x/v1/calls?page=2"))
        assert first.json() == ["bare"]
        assert second.json() == ["page2"]

    @pytest.mark.asyncio
    async def test_response_sequence(self):
        transport = MockTransport({
            ("GET", "/v1/calls"): [json_response(200, [1]), json_response(200, [2])],
        })
        request = ApiRequest(method="GET", url="https://x/v1/calls")
        assert (await transport.send(request)).json() == [1]
        assert (await transport.send(request)).json() == [2]
        # The last response keeps being served
        assert (await transport.send(request)).json() == [2]

    @pytest.mark.asyncio
    async def test_unmocked_is_404(self):
        response = await MockTransport().send(ApiRequest(method="GET", url="https://x/unknown"))
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_empty_response_list_is_unmocked(self):
        transport = MockTransport({("GET", "/v1/calls"): []})
        response = await transport.send(ApiRequest(method="GET", url="https://x/v1/calls"))
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_tracks_sent_requests(self):
        transport = MockTransport()
        await transport.send(ApiRequest(method="DELETE", url="https://x/v1/numbers/1"))
        assert len(transport.sent_requests) == 1
        assert transport.sent_requests[0].path == "/v1/numbers/1"

    @pytest.mark.asyncio
    async def test_cancelled_token(self):
        token = CancellationToken()
        token.cancel()
        with pytest.raises(RequestCancelledError):
            await MockTransport().send(ApiRequest(method="GET", url="https://x/"), token)


def _http_transport(handler) -> HttpTransport:
    return HttpTransport(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


class TestHttpTransport:
    @pytest.mark.asyncio
    async def test_sends_request(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("Authorization")
            seen["body"] = request.content
            return httpx.Response(201, headers={"Location": "/v1/calls/c-1"})

        transport = _http_transport(handler)
        response = await transport.send(ApiRequest(
            method="POST",
            url="https://api.example.com/v1/calls",
            headers={"Authorization": "Basic abc"},
            content=b'{"to": "+1"}',
        ))
        async with response:
            assert response.status_code == 201
            assert response.location == "/v1/calls/c-1"
        assert seen == {
            "method": "POST",
            "url": "https://api.example.com/v1/calls",
            "auth": "Basic abc",
            "body": b'{"to": "+1"}',
        }

    @pytest.mark.asyncio
    async def test_network_error_becomes_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        transport = _http_transport(handler)
        with pytest.raises(TransportError, match="connection refused"):
            await transport.send(ApiRequest(method="GET", url="https://api.example.com/v1/calls"))

    @pytest.mark.asyncio
    async def test_timeout_becomes_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("too slow", request=request)

        transport = _http_transport(handler)
        with pytest.raises(TransportError, match="timeout"):
            await transport.send(ApiRequest(method="GET", url="https://api.example.com/v1/calls"))

    @pytest.mark.asyncio
    async def test_cancellation_stops_waiting(self):
        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(10)
            return httpx.Response(200)

        transport = _http_transport(handler)
        token = CancellationToken()
        task = asyncio.ensure_future(
            transport.send(ApiRequest(method="GET", url="https://api.example.com/v1/calls"), token)
        )
        await asyncio.sleep(0.01)
        token.cancel()
        with pytest.raises(RequestCancelledError):
            await asyncio.wait_for(task, timeout=1)

    @pytest.mark.asyncio
    async def test_caller_task_cancellation_stops_request(self):
        handler_cancelled = []

        async def handler(request: httpx.Request) -> httpx.Response:
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                handler_cancelled.append(True)
                raise
            return httpx.Response(200)

        transport = _http_transport(handler)
        caller = asyncio.ensure_future(
            transport.send(ApiRequest(method="GET", url="https://api.example.com/v1/calls"), CancellationToken())
        )
        await asyncio.sleep(0.01)
        caller.cancel()
        with pytest.raises(asyncio.CancelledError):
            await caller
        assert handler_cancelled == [True]

    @pytest.mark.asyncio
    async def test_token_not_cancelled_returns_response(self):
        transport = _http_transport(lambda request: httpx.Response(200, json={"a": 1}))
        token = CancellationToken()
        response = await transport.send(
            ApiRequest(method="GET", url="https://api.example.com/v1/calls"), token
        )
        assert response.json() == {"a": 1}
        assert token.cancelled is False

    @pytest.mark.asyncio
    async def test_precancelled_token_sends_nothing(self):
        sent = []

        def handler(request: httpx.Request) -> httpx.Response:
            sent.append(request)
            return httpx.Response(200)

        transport = _http_transport(handler)
        token = CancellationToken()
        token.cancel()
        with pytest.raises(RequestCancelledError):
            await transport.send(ApiRequest(method="GET", url="https://api.example.com/"), token)
        assert sent == []

    @pytest.mark.asyncio
    async def test_injected_client_is_not_closed(self):
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        transport = HttpTransport(client=client)
        await transport.aclose()
        assert client.is_closed is False
        await client.aclose()

    @pytest.mark.asyncio
    async def test_owned_client_is_closed(self):
        transport = HttpTransport(timeout=5)
        client = transport._ensure_client()
        await transport.aclose()
        assert client.is_closed is True
