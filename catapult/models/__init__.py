"""
Resource models of the Catapult API.
"""

from catapult.models.audio import Audio
from catapult.models.base import ApiModel, parse_datetime, to_json_value
from catapult.models.calls import (
    Call,
    CallDirection,
    CallEvent,
    CallQuery,
    CallState,
    Recording,
    RecordingState,
)
from catapult.models.conferences import (
    Conference,
    ConferenceMember,
    ConferenceMemberQuery,
    ConferenceState,
    MemberState,
)
from catapult.models.messages import Message, MessageDirection, MessageQuery, MessageState
from catapult.models.numbers import (
    AvailableNumber,
    LocalNumberQuery,
    PhoneNumber,
    PhoneNumberQuery,
    TollFreeNumberQuery,
)

__all__ = [
    "ApiModel",
    "parse_datetime",
    "to_json_value",
    "Audio",
    "Call",
    "CallDirection",
    "CallEvent",
    "CallQuery",
    "CallState",
    "Recording",
    "RecordingState",
    "Conference",
    "ConferenceMember",
    "ConferenceMemberQuery",
    "ConferenceState",
    "MemberState",
    "Message",
    "MessageDirection",
    "MessageQuery",
    "MessageState",
    "AvailableNumber",
    "LocalNumberQuery",
    "PhoneNumber",
    "PhoneNumberQuery",
    "TollFreeNumberQuery",
]
