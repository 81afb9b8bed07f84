"""
Phone number search and allocation.

Available number search is not user-scoped (``/availableNumbers``);
allocated numbers live under ``/users/<id>/phoneNumbers``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, AsyncIterator, List, Optional

from catapult.logging_config import get_logger
from catapult.models.numbers import (
    AvailableNumber,
    LocalNumberQuery,
    PhoneNumber,
    PhoneNumberQuery,
    TollFreeNumberQuery,
)

if TYPE_CHECKING:
    from catapult.cancellation import CancellationToken
    from catapult.client import Client

logger = get_logger(__name__)


class AvailableNumberOperations:
    def __init__(self, client: Client) -> None:
        self._client = client

    async def search_local(
        self,
        query: LocalNumberQuery,
        cancellation: Optional[CancellationToken] = None,
    ) -> List[AvailableNumber]:
        return await self._client.send_json(
            "GET",
            "/availableNumbers/local",
            query=query,
            model=AvailableNumber,
            cancellation=cancellation,
        ) or []

    async def search_toll_free(
        self,
        query: Optional[TollFreeNumberQuery] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> List[AvailableNumber]:
        return await self._client.send_json(
            "GET",
            "/availableNumbers/tollFree",
            query=query,
            model=AvailableNumber,
            cancellation=cancellation,
        ) or []


class PhoneNumberOperations:
    """Numbers allocated to the client's user."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def _path(self, suffix: str = "") -> str:
        return self._client.user_path(f"/phoneNumbers{suffix}")

    async def create(
        self,
        number: PhoneNumber,
        cancellation: Optional[CancellationToken] = None,
    ) -> str:
        """Allocate a number to the user and return its id."""
        number_id = await self._client.post_and_extract_id(
            self._path(), body=number, cancellation=cancellation
        )
        logger.info(f"Phone number allocated: {number_id}")
        return number_id

    async def get(
        self,
        number_id: str,
        cancellation: Optional[CancellationToken] = None,
    ) -> PhoneNumber:
        return await self._client.send_json(
            "GET", self._path(f"/{number_id}"), model=PhoneNumber, cancellation=cancellation
        )

    def list(
        self,
        query: Optional[PhoneNumberQuery] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> AsyncIterator[PhoneNumber]:
        return self._client.iterate(
            self._path(), PhoneNumber, query=query, cancellation=cancellation
        )

    async def update(
        self,
        number_id: str,
        changes: Any,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        await self._client.send_json_no_result(
            "POST", self._path(f"/{number_id}"), body=changes, cancellation=cancellation
        )

    async def delete(
        self,
        number_id: str,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        """Release the number from the user's account."""
        await self._client.send_json_no_result(
            "DELETE", self._path(f"/{number_id}"), cancellation=cancellation
        )
        logger.info(f"Phone number released: {number_id}")
