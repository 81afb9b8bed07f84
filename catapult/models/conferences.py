"""
Conference models.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from catapult.models.base import ApiModel


class ConferenceState(str, Enum):
    CREATED = "created"
    ACTIVE = "active"
    COMPLETED = "completed"


class MemberState(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"


@dataclass
class Conference(ApiModel):
    id: Optional[str] = None
    state: Optional[ConferenceState] = None
    from_: Optional[str] = None
    callback_url: Optional[str] = None
    callback_http_method: Optional[str] = None
    callback_timeout: Optional[int] = None
    fallback_url: Optional[str] = None
    active_members: Optional[int] = None
    created_time: Optional[datetime] = None
    completed_time: Optional[datetime] = None
    hold: Optional[bool] = None
    mute: Optional[bool] = None
    profile: Optional[str] = None
    tag: Optional[str] = None


@dataclass
class ConferenceMember(ApiModel):
    """A call taking part in a conference. ``call`` is the url of that call."""
    id: Optional[str] = None
    call: Optional[str] = None
    state: Optional[MemberState] = None
    added_time: Optional[datetime] = None
    removed_time: Optional[datetime] = None
    hold: Optional[bool] = None
    mute: Optional[bool] = None
    join_tone: Optional[bool] = None
    leaving_tone: Optional[bool] = None


@dataclass
class ConferenceMemberQuery:
    page: Optional[int] = None
    size: Optional[int] = None
