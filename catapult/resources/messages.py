"""
Message (SMS/MMS) operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, AsyncIterator, Optional

from catapult.logging_config import get_logger
from catapult.models.messages import Message, MessageQuery

if TYPE_CHECKING:
    from catapult.cancellation import CancellationToken
    from catapult.client import Client

logger = get_logger(__name__)


class MessageOperations:
    """Messages of the client's user: ``/users/<id>/messages``."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def _path(self, suffix: str = "") -> str:
        return self._client.user_path(f"/messages{suffix}")

    async def send(
        self,
        message: Message,
        cancellation: Optional[CancellationToken] = None,
    ) -> str:
        """Send a message and return its id."""
        message_id = await self._client.post_and_extract_id(
            self._path(), body=message, cancellation=cancellation
        )
        logger.info(f"Message sent: {message_id}")
        return message_id

    async def get(
        self,
        message_id: str,
        cancellation: Optional[CancellationToken] = None,
    ) -> Message:
        return await self._client.send_json(
            "GET", self._path(f"/{message_id}"), model=Message, cancellation=cancellation
        )

    def list(
        self,
        query: Optional[MessageQuery] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> AsyncIterator[Message]:
        """Iterate over messages, following pagination."""
        return self._client.iterate(
            self._path(), Message, query=query, cancellation=cancellation
        )
