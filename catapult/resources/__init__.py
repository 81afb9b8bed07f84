"""
Per-resource operations of the Catapult API.
"""

from catapult.resources.calls import CallOperations
from catapult.resources.conferences import ConferenceOperations
from catapult.resources.messages import MessageOperations
from catapult.resources.numbers import AvailableNumberOperations, PhoneNumberOperations

__all__ = [
    "CallOperations",
    "ConferenceOperations",
    "MessageOperations",
    "AvailableNumberOperations",
    "PhoneNumberOperations",
]
