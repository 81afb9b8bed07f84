"""
Mock transport for local testing.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Tuple

from catapult.cancellation import CancellationToken
from catapult.transport.base import ApiRequest, ApiResponse, BaseTransport


def json_response(
    status_code: int = 200,
    body: Any = None,
    headers: Optional[Dict[str, str]] = None,
) -> ApiResponse:
    """Build an ApiResponse with a JSON body."""
    all_headers = {"Content-Type": "application/json"}
    all_headers.update(headers or {})
    content = b"" if body is None else json.dumps(body).encode("utf-8")
    return ApiResponse(status_code=status_code, headers=all_headers, content=content)


class MockTransport(BaseTransport):
    """In-memory transport for unit tests.

    Args:
        responses: Mapping from ``(method, path)`` tuples to ``ApiResponse``
            instances. A key may also carry the query string
            (``"/v1/calls?page=1"``); such keys take precedence over the bare
            path. A list value is consumed one response per request; an
            empty list behaves like an unmocked route.

    Example::

        transport = MockTransport({
            ("GET", "/v1/users/u-1/calls/c-1"): json_response(200, {"id": "c-1"}),
        })
    """

    def __init__(
        self,
        responses: Optional[Dict[Tuple[str, str], Any]] = None,
    ) -> None:
        self._responses: Dict[Tuple[str, str], Any] = dict(responses or {})
        self._sent: List[ApiRequest] = []

    def add(self, method: str, path: str, response: ApiResponse) -> None:
        self._responses[(method.upper(), path)] = response

    async def send(
        self,
        request: ApiRequest,
        cancellation: Optional[CancellationToken] = None,
    ) -> ApiResponse:
        if cancellation is not None:
            cancellation.raise_if_cancelled()
        self._sent.append(request)

        method = request.method.upper()
        full_path = f"{request.path}?{request.query}" if request.query else request.path
        for key in ((method, full_path), (method, request.path)):
            # An empty response list counts as unmocked
            if self._responses.get(key, []) != []:
                return self._take(key)
        return ApiResponse(
            status_code=404,
            headers={"Content-Type": "application/json"},
            content=b'{"code": "not-mocked", "message": "not mocked"}',
        )

    def _take(self, key: Tuple[str, str]) -> ApiResponse:
        value = self._responses[key]
        if isinstance(value, list):
            response = value.pop(0) if len(value) > 1 else value[0]
        else:
            response = value
        # Hand out a fresh copy so a response can be served more than once
        return ApiResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            content=response.content,
            elapsed_ms=response.elapsed_ms,
            reason=response.reason,
        )

    async def aclose(self) -> None:
        self._responses.clear()

    @property
    def sent_requests(self) -> List[ApiRequest]:
        """All requests that have been sent through this transport."""
        return list(self._sent)
