"""
Message (SMS/MMS) models and list filters.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Optional

from catapult.models.base import ApiModel


class MessageDirection(str, Enum):
    IN = "in"
    OUT = "out"


class MessageState(str, Enum):
    RECEIVED = "received"
    QUEUED = "queued"
    SENDING = "sending"
    SENT = "sent"
    ERROR = "error"


@dataclass
class Message(ApiModel):
    id: Optional[str] = None
    from_: Optional[str] = None
    to: Optional[str] = None
    text: Optional[str] = None
    media: Optional[List[str]] = None
    callback_url: Optional[str] = None
    callback_http_method: Optional[str] = None
    callback_timeout: Optional[int] = None
    fallback_url: Optional[str] = None
    direction: Optional[MessageDirection] = None
    state: Optional[MessageState] = None
    delivery_state: Optional[str] = None
    time: Optional[datetime] = None
    receipt_requested: Optional[str] = None
    tag: Optional[str] = None


@dataclass
class MessageQuery:
    """Filters for listing messages."""
    from_: Optional[str] = None
    to: Optional[str] = None
    from_date_time: Optional[datetime] = None
    to_date_time: Optional[datetime] = None
    direction: Optional[MessageDirection] = None
    state: Optional[MessageState] = None
    delivery_state: Optional[str] = None
    sort_order: Optional[str] = None
    size: Optional[int] = None
