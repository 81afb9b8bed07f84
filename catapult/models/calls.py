"""
Call models and call list filters.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from catapult.models.base import ApiModel


class CallState(str, Enum):
    STARTED = "started"
    REJECTED = "rejected"
    ACTIVE = "active"
    COMPLETED = "completed"
    TRANSFERRING = "transferring"


class CallDirection(str, Enum):
    IN = "in"
    OUT = "out"


class RecordingState(str, Enum):
    RECORDING = "recording"
    COMPLETE = "complete"
    SAVING = "saving"
    ERROR = "error"


@dataclass
class Call(ApiModel):
    """A phone call, inbound or outbound."""
    id: Optional[str] = None
    direction: Optional[CallDirection] = None
    from_: Optional[str] = None
    to: Optional[str] = None
    state: Optional[CallState] = None
    start_time: Optional[datetime] = None
    active_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    chargeable_duration: Optional[int] = None
    callback_url: Optional[str] = None
    callback_http_method: Optional[str] = None
    callback_timeout: Optional[int] = None
    fallback_url: Optional[str] = None
    bridge_id: Optional[str] = None
    conference_id: Optional[str] = None
    recording_enabled: Optional[bool] = None
    recording_file_format: Optional[str] = None
    recording_max_duration: Optional[int] = None
    transcription_enabled: Optional[bool] = None
    call_timeout: Optional[int] = None
    tag: Optional[str] = None
    sip_headers: Optional[Dict[str, Any]] = None


@dataclass
class CallEvent(ApiModel):
    id: Optional[str] = None
    time: Optional[datetime] = None
    name: Optional[str] = None
    data: Optional[str] = None


@dataclass
class Recording(ApiModel):
    id: Optional[str] = None
    media: Optional[str] = None
    call: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    state: Optional[RecordingState] = None


@dataclass
class CallQuery:
    """Filters for listing calls."""
    bridge_id: Optional[str] = None
    conference_id: Optional[str] = None
    from_: Optional[str] = None
    to: Optional[str] = None
    sort_order: Optional[str] = None
    page: Optional[int] = None
    size: Optional[int] = None
