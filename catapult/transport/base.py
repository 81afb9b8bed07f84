"""
Transport base class and request/response data structures.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Dict, Optional
from urllib.parse import urlsplit

from catapult.exceptions import SerializationError, SDKError

if TYPE_CHECKING:
    from catapult.cancellation import CancellationToken


@dataclass
class ApiRequest:
    """Outbound request addressed to a fully qualified url."""
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    content: Optional[bytes] = None

    @property
    def path(self) -> str:
        """Path component of the url, without the query string."""
        return urlsplit(self.url).path

    @property
    def query(self) -> str:
        return urlsplit(self.url).query

    def json(self) -> Any:
        """Decode the request body (used by tests and transports that log)."""
        if not self.content:
            return None
        return json.loads(self.content)


@dataclass
class ApiResponse:
    """Inbound response.

    The body is read once. Use the response as an async context manager so
    the underlying connection is released when the block exits::

        async with response:
            data = response.json()
    """
    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    content: bytes = b""
    elapsed_ms: float = 0.0
    reason: str = ""
    on_close: Optional[Callable[[], Awaitable[None]]] = field(default=None, repr=False)
    closed: bool = field(default=False, repr=False)

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def location(self) -> Optional[str]:
        return self.header("Location")

    @property
    def text(self) -> str:
        self._ensure_open()
        return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """Decode the body as JSON; an empty body decodes to None."""
        self._ensure_open()
        if not self.content or not self.content.strip():
            return None
        try:
            return json.loads(self.content)
        except ValueError as e:
            raise SerializationError(f"Response body is not valid JSON: {e}") from e

    def _ensure_open(self) -> None:
        if self.closed:
            raise SDKError("Response has already been closed")

    async def aclose(self) -> None:
        if self.closed:
            return
        self.closed = True
        if self.on_close is not None:
            await self.on_close()

    async def __aenter__(self) -> ApiResponse:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


class BaseTransport(ABC):
    """Abstract base for everything that can deliver an ApiRequest."""

    @abstractmethod
    async def send(
        self,
        request: ApiRequest,
        cancellation: Optional[CancellationToken] = None,
    ) -> ApiResponse:
        """Send a request and return the response."""
        ...

    @abstractmethod
    async def aclose(self) -> None:
        """Release transport resources."""
        ...
