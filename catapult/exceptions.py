"""
Exception hierarchy for the Catapult SDK.

All custom exceptions inherit from CatapultError base class.
"""

from typing import Any, Optional


class CatapultError(Exception):
    """Base exception for all Catapult SDK errors."""
    pass


# Configuration Errors
class ConfigurationError(CatapultError):
    """Base exception for configuration-related errors."""
    pass


class MissingCredentialsError(ConfigurationError):
    """Raised when the user id, API token or API secret is empty."""

    def __init__(self, message: str = "User id, API token and API secret are required"):
        super().__init__(message)


class InvalidBaseUrlError(ConfigurationError):
    """Raised when the base url of the Catapult API is empty."""

    def __init__(self, message: str = "Base url of the Catapult API is required"):
        super().__init__(message)


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration is invalid or malformed."""
    pass


# SDK Errors
class SDKError(CatapultError):
    """Base exception for errors raised while talking to the API."""
    pass


class ApiError(SDKError):
    """
    Raised when the Catapult API answers with a non-success status.

    Attributes:
        status_code: HTTP status code of the response
        code: Error code reported by the API (if any)
        message: Error message reported by the API, or the raw body text
        body: Parsed JSON error payload, or None when the body was not JSON
    """

    def __init__(
        self,
        status_code: int,
        message: str = "",
        code: Optional[str] = None,
        body: Any = None,
    ):
        self.status_code = status_code
        self.code = code
        self.message = message
        self.body = body
        text = f"Catapult API request failed with status {status_code}"
        if code:
            text += f" ({code})"
        if message:
            text += f": {message}"
        super().__init__(text)


class SerializationError(SDKError):
    """Raised when a response body cannot be decoded into the requested type."""
    pass


class TransportError(SDKError):
    """Raised when the transport cannot reach the Catapult API."""
    pass


class RequestCancelledError(SDKError):
    """Raised when a cancellation token fires before the request completes."""
    pass
