"""
Audio playback request shared by calls, conferences and conference members.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from catapult.models.base import ApiModel


@dataclass
class Audio(ApiModel):
    """Either ``file_url`` or ``sentence`` (text to speech) is set."""
    file_url: Optional[str] = None
    sentence: Optional[str] = None
    gender: Optional[str] = None
    locale: Optional[str] = None
    voice: Optional[str] = None
    loop_enabled: Optional[bool] = None
    tag: Optional[str] = None
