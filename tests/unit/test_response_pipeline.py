"""
Tests for sending requests and decoding responses.
"""

import asyncio

import pytest

from catapult.client import Client
from catapult.exceptions import ApiError, SerializationError, TransportError
from catapult.models import Call, CallState
from catapult.transport.base import ApiResponse, BaseTransport
from catapult.transport.mock import MockTransport, json_response


CALLS = "/v1/users/u-123/calls"


class TestSend:
    @pytest.mark.asyncio
    async def test_success_returns_open_response(self, client, transport):
        transport.add("GET", CALLS, json_response(200, []))
        response = await client.send(client.build_request("GET", "/users/u-123/calls"))
        async with response:
            assert response.status_code == 200
            assert response.json() == []
        assert response.closed is True

    @pytest.mark.asyncio
    async def test_non_success_raises_api_error(self, client, transport):
        transport.add(
            "GET", CALLS,
            json_response(400, {"code": "bad-request", "message": "x"}),
        )
        with pytest.raises(ApiError) as exc_info:
            await client.send(client.build_request("GET", "/users/u-123/calls"))
        error = exc_info.value
        assert error.status_code == 400
        assert error.code == "bad-request"
        assert error.message == "x"
        assert error.body == {"code": "bad-request", "message": "x"}

    @pytest.mark.asyncio
    async def test_non_json_error_body_uses_text(self, client, transport):
        transport.add("GET", CALLS, ApiResponse(status_code=502, content=b"Bad Gateway"))
        with pytest.raises(ApiError) as exc_info:
            await client.send(client.build_request("GET", "/users/u-123/calls"))
        assert exc_info.value.status_code == 502
        assert exc_info.value.code is None
        assert exc_info.value.message == "Bad Gateway"
        assert exc_info.value.body is None

    @pytest.mark.asyncio
    async def test_empty_error_body_uses_reason(self, client, transport):
        transport.add("DELETE", CALLS, ApiResponse(status_code=404, reason="Not Found"))
        with pytest.raises(ApiError, match="404"):
            await client.send(client.build_request("DELETE", "/users/u-123/calls"))


class TestSendJson:
    @pytest.mark.asyncio
    async def test_sets_json_headers_and_body(self, client, transport):
        transport.add("POST", CALLS, json_response(200, {"ok": True}))
        result = await client.send_json(
            "POST", "/users/u-123/calls", body={"from": "+1", "to": "+2"}
        )
        assert result == {"ok": True}
        sent = transport.sent_requests[0]
        assert sent.headers["Accept"] == "application/json"
        assert sent.headers["Content-Type"] == "application/json"
        assert sent.json() == {"from": "+1", "to": "+2"}

    @pytest.mark.asyncio
    async def test_model_body_is_camel_cased(self, client, transport):
        transport.add("POST", CALLS, json_response(200))
        await client.send_json(
            "POST", "/users/u-123/calls",
            body=Call(from_="+1", to="+2", callback_url="http://localhost/"),
        )
        assert transport.sent_requests[0].json() == {
            "from": "+1",
            "to": "+2",
            "callbackUrl": "http://localhost/",
        }

    @pytest.mark.asyncio
    async def test_no_body_has_no_content_type(self, client, transport):
        transport.add("GET", CALLS, json_response(200, []))
        await client.send_json("GET", "/users/u-123/calls")
        sent = transport.sent_requests[0]
        assert sent.content is None
        assert "Content-Type" not in sent.headers

    @pytest.mark.asyncio
    async def test_decodes_model(self, client, transport):
        transport.add(
            "GET", f"{CALLS}/c-1",
            json_response(200, {"id": "c-1", "state": "active", "from": "+1"}),
        )
        call = await client.send_json("GET", "/users/u-123/calls/c-1", model=Call)
        assert isinstance(call, Call)
        assert call.id == "c-1"
        assert call.state is CallState.ACTIVE
        assert call.from_ == "+1"

    @pytest.mark.asyncio
    async def test_decodes_model_list(self, client, transport):
        transport.add("GET", CALLS, json_response(200, [{"id": "c-1"}, {"id": "c-2"}]))
        calls = await client.send_json("GET", "/users/u-123/calls", model=Call)
        assert [c.id for c in calls] == ["c-1", "c-2"]

    @pytest.mark.asyncio
    async def test_empty_body_decodes_to_none(self, client, transport):
        transport.add("GET", CALLS, ApiResponse(status_code=200))
        assert await client.send_json("GET", "/users/u-123/calls", model=Call) is None

    @pytest.mark.asyncio
    async def test_malformed_json_raises_serialization_error(self, client, transport):
        transport.add("GET", CALLS, ApiResponse(status_code=200, content=b"{not json"))
        with pytest.raises(SerializationError):
            await client.send_json("GET", "/users/u-123/calls")

    @pytest.mark.asyncio
    async def test_wrong_shape_raises_serialization_error(self, client, transport):
        transport.add("GET", CALLS, json_response(200, "just a string"))
        with pytest.raises(SerializationError):
            await client.send_json("GET", "/users/u-123/calls", model=Call)

    @pytest.mark.asyncio
    async def test_unserializable_body(self, client):
        with pytest.raises(SerializationError):
            await client.send_json("POST", "/users/u-123/calls", body={"x": object()})

    @pytest.mark.asyncio
    async def test_error_payload(self, client, transport):
        transport.add(
            "GET", CALLS,
            json_response(400, {"code": "bad-request", "message": "x"}),
        )
        with pytest.raises(ApiError) as exc_info:
            await client.send_json("GET", "/users/u-123/calls")
        assert exc_info.value.code == "bad-request"
        assert exc_info.value.message == "x"

    @pytest.mark.asyncio
    async def test_no_result(self, client, transport):
        transport.add("POST", f"{CALLS}/c-1", ApiResponse(status_code=200))
        assert await client.send_json_no_result(
            "POST", "/users/u-123/calls/c-1", body={"state": "completed"}
        ) is None


class TestPostAndExtractId:
    @pytest.mark.asyncio
    async def test_extracts_last_segment(self, client, transport):
        transport.add(
            "POST", CALLS,
            ApiResponse(status_code=201, headers={"Location": "/v1/users/u/calls/abc123"}),
        )
        assert await client.post_and_extract_id("/users/u-123/calls", body={}) == "abc123"

    @pytest.mark.asyncio
    async def test_absolute_location(self, client, transport):
        transport.add(
            "POST", CALLS,
            ApiResponse(
                status_code=201,
                headers={"location": "https://api.example.com/v1/users/u/calls/c-77"},
            ),
        )
        assert await client.post_and_extract_id("/users/u-123/calls") == "c-77"

    @pytest.mark.asyncio
    async def test_missing_location_gives_empty_id(self, client, transport):
        transport.add("POST", CALLS, ApiResponse(status_code=201))
        assert await client.post_and_extract_id("/users/u-123/calls") == ""

    @pytest.mark.asyncio
    async def test_failure_raises(self, client, transport):
        transport.add("POST", CALLS, json_response(409, {"code": "conflict", "message": "dup"}))
        with pytest.raises(ApiError) as exc_info:
            await client.post_and_extract_id("/users/u-123/calls")
        assert exc_info.value.status_code == 409


class TestIterate:
    @pytest.mark.asyncio
    async def test_follows_next_links(self, client, transport):
        transport.add(
            "GET", CALLS,
            json_response(
                200, [{"id": "c-1"}, {"id": "c-2"}],
                headers={
                    "Link": '<https://api.example.com/v1/users/u-123/calls?page=0&size=2>; rel="first", '
                            '<https://api.example.com/v1/users/u-123/calls?page=1&size=2>; rel="next"'
                },
            ),
        )
        transport.add("GET", f"{CALLS}?page=1&size=2", json_response(200, [{"id": "c-3"}]))

        ids = [call.id async for call in client.iterate("/users/u-123/calls", Call)]

        assert ids == ["c-1", "c-2", "c-3"]
        assert len(transport.sent_requests) == 2
        assert transport.sent_requests[1].headers["Accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_empty_page(self, client, transport):
        transport.add("GET", CALLS, ApiResponse(status_code=200))
        assert [c async for c in client.iterate("/users/u-123/calls", Call)] == []

    @pytest.mark.asyncio
    async def test_object_instead_of_page(self, client, transport):
        transport.add("GET", CALLS, json_response(200, {"id": "c-1"}))
        with pytest.raises(SerializationError):
            [c async for c in client.iterate("/users/u-123/calls", Call)]


class TestConcurrency:
    @pytest.mark.asyncio
    async def test_concurrent_calls_do_not_interfere(self, client, transport):
        transport.add("GET", f"{CALLS}/c-1", json_response(200, {"id": "c-1", "to": "+1"}))
        transport.add("GET", f"{CALLS}/c-2", json_response(200, {"id": "c-2", "to": "+2"}))

        first, second = await asyncio.gather(
            client.send_json("GET", "/users/u-123/calls/c-1", model=Call),
            client.send_json("GET", "/users/u-123/calls/c-2", model=Call),
        )

        assert (first.id, first.to) == ("c-1", "+1")
        assert (second.id, second.to) == ("c-2", "+2")
        auth = {r.headers["Authorization"] for r in transport.sent_requests}
        assert len(auth) == 1


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_injected_transport_is_not_closed(self, client, transport):
        transport.add("GET", CALLS, json_response(200, []))
        async with client:
            pass
        assert await client.send_json("GET", "/users/u-123/calls") == []

    @pytest.mark.asyncio
    async def test_unmocked_route_is_api_error(self):
        client = Client("u", "t", "s", transport=MockTransport())
        with pytest.raises(ApiError) as exc_info:
            await client.send_json("GET", "/nowhere")
        assert exc_info.value.status_code == 404


class ProxyRefusedError(Exception):
    pass


class FailingTransport(BaseTransport):
    """Transport that fails every request with a preset error."""

    def __init__(self, error: Exception) -> None:
        self.error = error

    async def send(self, request, cancellation=None):
        raise self.error

    async def aclose(self) -> None:
        pass


class TestTransportErrors:
    @pytest.mark.asyncio
    async def test_custom_transport_error_is_propagated_unchanged(self):
        error = ProxyRefusedError("proxy refused the connection")
        client = Client("u", "t", "s", transport=FailingTransport(error))
        with pytest.raises(ProxyRefusedError) as exc_info:
            await client.send_json("GET", "/users/u/calls")
        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_transport_error_is_propagated_unchanged(self):
        error = TransportError("Request failed: connection refused")
        client = Client("u", "t", "s", transport=FailingTransport(error))
        with pytest.raises(TransportError) as exc_info:
            await client.calls.create(Call(to="+1"))
        assert exc_info.value is error
