"""
Transports that deliver requests to the Catapult API.
"""

from catapult.transport.base import ApiRequest, ApiResponse, BaseTransport
from catapult.transport.http import HttpTransport
from catapult.transport.mock import MockTransport, json_response

__all__ = [
    "ApiRequest",
    "ApiResponse",
    "BaseTransport",
    "HttpTransport",
    "MockTransport",
    "json_response",
]
