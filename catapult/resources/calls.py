"""
Call operations.

Create outbound calls, inspect them and drive them while they are live
(answer, reject, hang up, play audio, send DTMF).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, AsyncIterator, List, Optional

from catapult.logging_config import get_logger
from catapult.models.audio import Audio
from catapult.models.calls import Call, CallEvent, CallQuery, CallState, Recording

if TYPE_CHECKING:
    from catapult.cancellation import CancellationToken
    from catapult.client import Client

logger = get_logger(__name__)


class CallOperations:
    """Calls of the client's user: ``/users/<id>/calls``."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def _path(self, suffix: str = "") -> str:
        return self._client.user_path(f"/calls{suffix}")

    # -- Public API --------------------------------------------------------

    async def create(
        self,
        call: Call,
        cancellation: Optional[CancellationToken] = None,
    ) -> str:
        """Start an outbound call and return its id."""
        call_id = await self._client.post_and_extract_id(
            self._path(), body=call, cancellation=cancellation
        )
        logger.info(f"Call created: {call_id}")
        return call_id

    def list(
        self,
        query: Optional[CallQuery] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> AsyncIterator[Call]:
        """Iterate over calls, following pagination."""
        return self._client.iterate(
            self._path(), Call, query=query, cancellation=cancellation
        )

    async def get(
        self,
        call_id: str,
        cancellation: Optional[CancellationToken] = None,
    ) -> Call:
        return await self._client.send_json(
            "GET", self._path(f"/{call_id}"), model=Call, cancellation=cancellation
        )

    async def update(
        self,
        call_id: str,
        changes: Any,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        """Change a live call (state, recording, transfer...).

        ``changes`` is a :class:`Call` or a mapping of camelCase fields.
        """
        await self._client.send_json_no_result(
            "POST", self._path(f"/{call_id}"), body=changes, cancellation=cancellation
        )

    async def answer(
        self,
        call_id: str,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        await self.update(call_id, {"state": CallState.ACTIVE}, cancellation)

    async def reject(
        self,
        call_id: str,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        await self.update(call_id, {"state": CallState.REJECTED}, cancellation)

    async def hangup(
        self,
        call_id: str,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        await self.update(call_id, {"state": CallState.COMPLETED}, cancellation)

    async def play_audio(
        self,
        call_id: str,
        audio: Audio,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        """Play a file or speak a sentence on the call."""
        await self._client.send_json_no_result(
            "POST", self._path(f"/{call_id}/audio"), body=audio, cancellation=cancellation
        )

    async def send_dtmf(
        self,
        call_id: str,
        digits: str,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        await self._client.send_json_no_result(
            "POST",
            self._path(f"/{call_id}/dtmf"),
            body={"dtmfOut": digits},
            cancellation=cancellation,
        )

    async def list_events(
        self,
        call_id: str,
        cancellation: Optional[CancellationToken] = None,
    ) -> List[CallEvent]:
        return await self._client.send_json(
            "GET", self._path(f"/{call_id}/events"), model=CallEvent, cancellation=cancellation
        ) or []

    async def list_recordings(
        self,
        call_id: str,
        cancellation: Optional[CancellationToken] = None,
    ) -> List[Recording]:
        return await self._client.send_json(
            "GET", self._path(f"/{call_id}/recordings"), model=Recording, cancellation=cancellation
        ) or []
