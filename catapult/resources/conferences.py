"""
Conference operations, including conference members.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional

from catapult.logging_config import get_logger
from catapult.models.audio import Audio
from catapult.models.conferences import (
    Conference,
    ConferenceMember,
    ConferenceMemberQuery,
    ConferenceState,
)

if TYPE_CHECKING:
    from catapult.cancellation import CancellationToken
    from catapult.client import Client

logger = get_logger(__name__)


class ConferenceOperations:
    """Conferences of the client's user: ``/users/<id>/conferences``."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def _path(self, suffix: str = "") -> str:
        return self._client.user_path(f"/conferences{suffix}")

    def _member_path(self, conference_id: str, member_id: str = "", suffix: str = "") -> str:
        member = f"/{member_id}" if member_id else ""
        return self._path(f"/{conference_id}/members{member}{suffix}")

    # -- Conferences -------------------------------------------------------

    async def create(
        self,
        conference: Conference,
        cancellation: Optional[CancellationToken] = None,
    ) -> str:
        """Create a conference and return its id."""
        conference_id = await self._client.post_and_extract_id(
            self._path(), body=conference, cancellation=cancellation
        )
        logger.info(f"Conference created: {conference_id}")
        return conference_id

    async def get(
        self,
        conference_id: str,
        cancellation: Optional[CancellationToken] = None,
    ) -> Conference:
        return await self._client.send_json(
            "GET", self._path(f"/{conference_id}"), model=Conference, cancellation=cancellation
        )

    async def update(
        self,
        conference_id: str,
        changes: Any,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        await self._client.send_json_no_result(
            "POST", self._path(f"/{conference_id}"), body=changes, cancellation=cancellation
        )

    async def terminate(
        self,
        conference_id: str,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        await self.update(conference_id, {"state": ConferenceState.COMPLETED}, cancellation)

    async def play_audio(
        self,
        conference_id: str,
        audio: Audio,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        await self._client.send_json_no_result(
            "POST",
            self._path(f"/{conference_id}/audio"),
            body=audio,
            cancellation=cancellation,
        )

    # -- Members -----------------------------------------------------------

    async def list_members(
        self,
        conference_id: str,
        query: Optional[ConferenceMemberQuery] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> List[ConferenceMember]:
        return await self._client.send_json(
            "GET",
            self._member_path(conference_id),
            query=query,
            model=ConferenceMember,
            cancellation=cancellation,
        ) or []

    async def create_member(
        self,
        conference_id: str,
        member: ConferenceMember,
        cancellation: Optional[CancellationToken] = None,
    ) -> str:
        """Add a call to the conference and return the member id."""
        return await self._client.post_and_extract_id(
            self._member_path(conference_id), body=member, cancellation=cancellation
        )

    async def get_member(
        self,
        conference_id: str,
        member_id: str,
        cancellation: Optional[CancellationToken] = None,
    ) -> ConferenceMember:
        return await self._client.send_json(
            "GET",
            self._member_path(conference_id, member_id),
            model=ConferenceMember,
            cancellation=cancellation,
        )

    async def update_member(
        self,
        conference_id: str,
        member_id: str,
        changes: Any,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        await self._client.send_json_no_result(
            "POST",
            self._member_path(conference_id, member_id),
            body=changes,
            cancellation=cancellation,
        )

    async def delete_member(
        self,
        conference_id: str,
        member_id: str,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        """Remove a member from the conference (its call is not hung up)."""
        await self.update_member(
            conference_id, member_id, {"state": "completed"}, cancellation
        )

    async def play_audio_to_member(
        self,
        conference_id: str,
        member_id: str,
        audio: Audio,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        await self._client.send_json_no_result(
            "POST",
            self._member_path(conference_id, member_id, "/audio"),
            body=audio,
            cancellation=cancellation,
        )
