"""
Catapult API client.

Builds authenticated requests against the Catapult REST API, sends them
through a pluggable transport and decodes the JSON responses.

Quick start::

    async with Client("u-123", "t-abc", "s-xyz") as client:
        call_id = await client.calls.create(Call(from_="+19195551212", to="+19195551313"))
        call = await client.calls.get(call_id)
"""

from __future__ import annotations

import base64
import json
import re
from pathlib import Path
from typing import TYPE_CHECKING, Any, AsyncIterator, List, Optional, Type, Union
from urllib.parse import urlsplit

from catapult._version import __version__
from catapult.cancellation import CancellationToken
from catapult.config.settings import DEFAULT_BASE_URL, ClientConfig
from catapult.exceptions import (
    ApiError,
    InvalidBaseUrlError,
    MissingCredentialsError,
    SerializationError,
)
from catapult.logging_config import get_logger, log_api_error, log_api_request, setup_logging
from catapult.models.base import ApiModel, to_json_value
from catapult.query import encode_query
from catapult.transport.base import ApiRequest, ApiResponse, BaseTransport
from catapult.transport.http import HttpTransport

if TYPE_CHECKING:
    from catapult.resources.calls import CallOperations
    from catapult.resources.conferences import ConferenceOperations
    from catapult.resources.messages import MessageOperations
    from catapult.resources.numbers import AvailableNumberOperations, PhoneNumberOperations

logger = get_logger(__name__)

_LINK_NEXT_RE = re.compile(r'<([^>]+)>\s*;\s*rel="?next"?')


def _build_user_agent() -> str:
    major, _, rest = __version__.partition(".")
    minor = rest.partition(".")[0] or "0"
    return f"python-catapult/v{major}.{minor}"


USER_AGENT = _build_user_agent()


def _next_link(link_header: Optional[str]) -> Optional[str]:
    """Extract the ``rel="next"`` url from a Link header."""
    if not link_header:
        return None
    for part in link_header.split(","):
        match = _LINK_NEXT_RE.search(part)
        if match:
            return match.group(1)
    return None


def _serialize_body(body: Any) -> bytes:
    try:
        return json.dumps(to_json_value(body)).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Request body is not JSON serializable: {e}") from e


class Client:
    """Catapult API client.

    Args:
        user_id: Id of the user on the Catapult API.
        api_token: Authorization token of the Catapult API.
        api_secret: Authorization secret of the Catapult API.
        base_url: Base url of the Catapult API server.
        transport: Optional transport overriding the default HTTP processing
            (useful for tests, logging, proxying).
        timeout: Timeout in seconds of the default HTTP transport.

    Raises:
        MissingCredentialsError: If user_id, api_token or api_secret is empty.
        InvalidBaseUrlError: If base_url is empty or not an http(s) url.
    """

    def __init__(
        self,
        user_id: str,
        api_token: str,
        api_secret: str,
        base_url: str = DEFAULT_BASE_URL,
        transport: Optional[BaseTransport] = None,
        timeout: float = 30.0,
    ) -> None:
        if not user_id or not api_token or not api_secret:
            raise MissingCredentialsError()
        if not base_url:
            raise InvalidBaseUrlError()
        parts = urlsplit(base_url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise InvalidBaseUrlError(f"Invalid base url of the Catapult API: {base_url!r}")

        self._config = ClientConfig(
            user_id=user_id,
            api_token=api_token,
            api_secret=api_secret,
            base_url=base_url,
            timeout=timeout,
        )
        self._base_url = base_url.rstrip("/")
        self._owns_transport = transport is None
        self._transport = transport or HttpTransport(timeout=timeout)
        credentials = f"{api_token}:{api_secret}".encode("utf-8")
        self._authorization = f"Basic {base64.b64encode(credentials).decode('ascii')}"

        # Lazy singletons
        self._calls: Optional[CallOperations] = None
        self._conferences: Optional[ConferenceOperations] = None
        self._messages: Optional[MessageOperations] = None
        self._available_numbers: Optional[AvailableNumberOperations] = None
        self._phone_numbers: Optional[PhoneNumberOperations] = None

        logger.debug(f"Catapult client initialized for {self._base_url}")

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        transport: Optional[BaseTransport] = None,
    ) -> Client:
        """
        Create a client from a loaded :class:`ClientConfig`.

        When the config carries a logging section, SDK logging is set up
        from it (see :func:`catapult.logging_config.setup_logging`).
        """
        if config.logging is not None:
            setup_logging(
                level=config.logging.level,
                log_file=Path(config.logging.file) if config.logging.file else None,
                json_format=config.logging.format == "json",
            )
        client = cls(
            user_id=config.user_id,
            api_token=config.api_token,
            api_secret=config.api_secret,
            base_url=config.base_url,
            transport=transport,
            timeout=config.timeout,
        )
        client._config = config
        return client

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def user_id(self) -> str:
        return self._config.user_id

    def user_path(self, path: str) -> str:
        """Prefix a resource path with the user scope: ``/users/<id><path>``."""
        return f"/users/{self._config.user_id}{path}"

    # -- Request building --------------------------------------------------

    def _default_headers(self) -> dict:
        return {
            "User-Agent": USER_AGENT,
            "Authorization": self._authorization,
        }

    def build_request(
        self,
        method: str,
        path: str,
        query: Optional[Any] = None,
        version: str = "v1",
    ) -> ApiRequest:
        """
        Build an authenticated request for ``<base url>/<version><path>``.

        Args:
            method: HTTP method
            path: Absolute resource path (leading slash)
            query: Optional query dataclass or mapping
            version: API version segment

        Returns:
            ApiRequest ready to hand to the transport
        """
        url = f"{self._base_url}/{version}{path}"
        query_string = encode_query(query)
        if query_string:
            url = f"{url}?{query_string}"
        return ApiRequest(method=method.upper(), url=url, headers=self._default_headers())

    def build_get_request(self, url: str) -> ApiRequest:
        """Build an authenticated GET for an absolute url (e.g. a paging link)."""
        return ApiRequest(method="GET", url=url, headers=self._default_headers())

    def _build_json_request(
        self,
        method: str,
        path: str,
        query: Optional[Any] = None,
        body: Optional[Any] = None,
        version: str = "v1",
    ) -> ApiRequest:
        request = self.build_request(method, path, query, version)
        request.headers["Accept"] = "application/json"
        if body is not None:
            request.content = _serialize_body(body)
            request.headers["Content-Type"] = "application/json"
        return request

    # -- Response pipeline -------------------------------------------------

    async def send(
        self,
        request: ApiRequest,
        cancellation: Optional[CancellationToken] = None,
    ) -> ApiResponse:
        """
        Send a request and validate the response status.

        Returns:
            The response; the caller must close it (``async with response``).

        Raises:
            ApiError: If the API answers with a non-success status
            TransportError: If the API cannot be reached
            RequestCancelledError: If the cancellation token fires first
        """
        response = await self._transport.send(request, cancellation)
        log_api_request(
            logger,
            method=request.method,
            url=request.url,
            status_code=response.status_code,
            duration_ms=response.elapsed_ms,
        )
        await self._check_response(request, response)
        return response

    async def _check_response(self, request: ApiRequest, response: ApiResponse) -> None:
        if response.is_success:
            return
        async with response:
            try:
                body = response.json()
            except SerializationError:
                body = None
            code = None
            message = None
            if isinstance(body, dict):
                code = body.get("code")
                message = body.get("message")
            if not message:
                message = response.text.strip() or response.reason
        log_api_error(
            logger,
            method=request.method,
            url=request.url,
            status_code=response.status_code,
            code=code,
            message=message,
        )
        raise ApiError(
            status_code=response.status_code,
            message=message or "",
            code=code,
            body=body,
        )

    async def send_json(
        self,
        method: str,
        path: str,
        *,
        query: Optional[Any] = None,
        body: Optional[Any] = None,
        version: str = "v1",
        model: Optional[Type[ApiModel]] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> Any:
        """
        Send a JSON request and decode the JSON response.

        With ``model``, a JSON object is decoded into that model and a JSON
        array into a list of them. An empty body decodes to None.

        Raises:
            ApiError: If the API answers with a non-success status
            SerializationError: If the body cannot be decoded
        """
        request = self._build_json_request(method, path, query, body, version)
        response = await self.send(request, cancellation)
        async with response:
            data = response.json()
        return self._decode(data, model)

    async def send_json_no_result(
        self,
        method: str,
        path: str,
        *,
        query: Optional[Any] = None,
        body: Optional[Any] = None,
        version: str = "v1",
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        """Send a JSON request whose successful response carries no useful body."""
        request = self._build_json_request(method, path, query, body, version)
        response = await self.send(request, cancellation)
        await response.aclose()

    async def post_and_extract_id(
        self,
        path: str,
        body: Optional[Any] = None,
        version: str = "v1",
        cancellation: Optional[CancellationToken] = None,
    ) -> str:
        """
        POST a JSON body and return the id of the created resource.

        The API answers creation requests with a Location header pointing at
        the new resource; its last path segment is the id. Without a Location
        header the id is an empty string.
        """
        request = self._build_json_request("POST", path, body=body, version=version)
        response = await self.send(request, cancellation)
        async with response:
            location = response.location or "http://localhost"
        return urlsplit(location).path.split("/")[-1]

    async def iterate(
        self,
        path: str,
        model: Optional[Type[ApiModel]] = None,
        query: Optional[Any] = None,
        version: str = "v1",
        cancellation: Optional[CancellationToken] = None,
    ) -> AsyncIterator[Any]:
        """
        Iterate over a list endpoint, following ``Link: <...>; rel="next"`` pages.

        Example::

            async for call in client.iterate(client.user_path("/calls"), Call):
                ...
        """
        request: Optional[ApiRequest] = self._build_json_request("GET", path, query, version=version)
        while request is not None:
            response = await self.send(request, cancellation)
            async with response:
                data = response.json()
                next_url = _next_link(response.header("Link"))
            if data is None:
                data = []
            if not isinstance(data, list):
                raise SerializationError(
                    f"Expected a JSON array from {request.url}, got {type(data).__name__}"
                )
            for item in self._decode(data, model):
                yield item
            if next_url:
                request = self.build_get_request(next_url)
                request.headers["Accept"] = "application/json"
            else:
                request = None

    @staticmethod
    def _decode(data: Any, model: Optional[Type[ApiModel]]) -> Union[Any, List[Any]]:
        if model is None or data is None:
            return data
        if isinstance(data, list):
            return [model.from_dict(item) for item in data]
        return model.from_dict(data)

    # -- Resource accessors (lazy) ---------------------------------------------

    @property
    def calls(self) -> CallOperations:
        if self._calls is None:
            from catapult.resources.calls import CallOperations
            self._calls = CallOperations(client=self)
        return self._calls

    @property
    def conferences(self) -> ConferenceOperations:
        if self._conferences is None:
            from catapult.resources.conferences import ConferenceOperations
            self._conferences = ConferenceOperations(client=self)
        return self._conferences

    @property
    def messages(self) -> MessageOperations:
        if self._messages is None:
            from catapult.resources.messages import MessageOperations
            self._messages = MessageOperations(client=self)
        return self._messages

    @property
    def available_numbers(self) -> AvailableNumberOperations:
        if self._available_numbers is None:
            from catapult.resources.numbers import AvailableNumberOperations
            self._available_numbers = AvailableNumberOperations(client=self)
        return self._available_numbers

    @property
    def phone_numbers(self) -> PhoneNumberOperations:
        if self._phone_numbers is None:
            from catapult.resources.numbers import PhoneNumberOperations
            self._phone_numbers = PhoneNumberOperations(client=self)
        return self._phone_numbers

    # -- Lifecycle ---------------------------------------------------------

    async def aclose(self) -> None:
        """Release the transport if this client created it."""
        if self._owns_transport:
            await self._transport.aclose()

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
