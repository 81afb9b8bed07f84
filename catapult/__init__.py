"""
Catapult SDK - asyncio client for the Catapult (Bandwidth) telephony API.

Quick start::

    from catapult import Client
    async with Client("u-123", "t-abc", "s-xyz") as client:
        call = await client.calls.get("c-1")
"""

from catapult._version import __version__
from catapult.cancellation import CancellationToken
from catapult.client import USER_AGENT, Client
from catapult.config.settings import DEFAULT_BASE_URL, ClientConfig, load_config
from catapult.exceptions import (
    ApiError,
    CatapultError,
    ConfigurationError,
    InvalidBaseUrlError,
    InvalidConfigurationError,
    MissingCredentialsError,
    RequestCancelledError,
    SDKError,
    SerializationError,
    TransportError,
)
from catapult.query import encode_query
from catapult.transport import ApiRequest, ApiResponse, BaseTransport, HttpTransport, MockTransport

__all__ = [
    "__version__",
    # client
    "Client",
    "ClientConfig",
    "CancellationToken",
    "DEFAULT_BASE_URL",
    "USER_AGENT",
    "load_config",
    "encode_query",
    # transport
    "ApiRequest",
    "ApiResponse",
    "BaseTransport",
    "HttpTransport",
    "MockTransport",
    # errors
    "CatapultError",
    "ConfigurationError",
    "MissingCredentialsError",
    "InvalidBaseUrlError",
    "InvalidConfigurationError",
    "SDKError",
    "ApiError",
    "SerializationError",
    "TransportError",
    "RequestCancelledError",
]
