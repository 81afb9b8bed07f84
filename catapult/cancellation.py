"""
Cooperative cancellation for API calls.

A CancellationToken is created by the caller, passed to any public SDK
method, and threaded down to the transport, which stops waiting for the
response once the token fires.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from catapult.exceptions import RequestCancelledError


class CancellationToken:
    """Handle a caller uses to abandon in-flight requests.

    Example::

        token = CancellationToken()
        task = asyncio.create_task(client.calls.get("c-1", cancellation=token))
        token.cancel()
    """

    def __init__(self) -> None:
        self._event: Optional[asyncio.Event] = None
        self._cancelled = False

    def _get_event(self) -> asyncio.Event:
        if self._event is None:
            self._event = asyncio.Event()
            if self._cancelled:
                self._event.set()
        return self._event

    def cancel(self) -> None:
        """Signal cancellation to every request holding this token."""
        self._cancelled = True
        if self._event is not None:
            self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise RequestCancelledError("Request was cancelled")

    async def wait(self) -> None:
        """Block until the token is cancelled."""
        await self._get_event().wait()
