"""
HTTP transport (default).
"""

from __future__ import annotations

import asyncio
import time
from typing import Optional

import httpx

from catapult.cancellation import CancellationToken
from catapult.exceptions import RequestCancelledError, TransportError
from catapult.logging_config import get_logger
from catapult.transport.base import ApiRequest, ApiResponse, BaseTransport

logger = get_logger(__name__)


class HttpTransport(BaseTransport):
    """Default HTTP transport using ``httpx.AsyncClient``.

    Connection pooling, TLS and proxies are left to httpx. No retries are
    performed here.

    Args:
        timeout: Request timeout in seconds.
        client: Optional preconfigured ``httpx.AsyncClient`` (e.g. with an
            ``httpx.MockTransport`` or a proxy). A client passed in is not
            closed by :meth:`aclose`.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def send(
        self,
        request: ApiRequest,
        cancellation: Optional[CancellationToken] = None,
    ) -> ApiResponse:
        if cancellation is None:
            return await self._send(request)

        cancellation.raise_if_cancelled()
        request_task = asyncio.ensure_future(self._send(request))
        cancel_task = asyncio.ensure_future(cancellation.wait())
        try:
            done, _ = await asyncio.wait(
                {request_task, cancel_task},
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            cancel_task.cancel()
            # Also reached when the caller's own task is cancelled
            if not request_task.done():
                request_task.cancel()
                try:
                    await request_task
                except asyncio.CancelledError:
                    pass

        if request_task in done:
            return request_task.result()

        logger.debug(f"Request cancelled: {request.method} {request.url}")
        raise RequestCancelledError(
            f"Request cancelled: {request.method} {request.url}"
        )

    async def _send(self, request: ApiRequest) -> ApiResponse:
        client = self._ensure_client()
        start = time.monotonic()

        try:
            resp = await client.request(
                method=request.method,
                url=request.url,
                headers=request.headers,
                content=request.content,
            )
        except httpx.TimeoutException as e:
            logger.error(f"Request timeout: {request.method} {request.url}", exc_info=True)
            raise TransportError(f"Request timeout: {e}") from e
        except httpx.HTTPError as e:
            logger.error(f"Request failed: {request.method} {request.url}", exc_info=True)
            raise TransportError(f"Request failed: {e}") from e

        elapsed = (time.monotonic() - start) * 1000

        return ApiResponse(
            status_code=resp.status_code,
            headers=dict(resp.headers),
            content=resp.content,
            elapsed_ms=round(elapsed, 2),
            reason=resp.reason_phrase,
            on_close=resp.aclose,
        )

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
