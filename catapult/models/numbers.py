"""
Available number search results and allocated phone numbers.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from catapult.models.base import ApiModel


@dataclass
class AvailableNumber(ApiModel):
    number: Optional[str] = None
    national_number: Optional[str] = None
    city: Optional[str] = None
    rate_center: Optional[str] = None
    state: Optional[str] = None
    price: Optional[str] = None


@dataclass
class PhoneNumber(ApiModel):
    id: Optional[str] = None
    number: Optional[str] = None
    national_number: Optional[str] = None
    name: Optional[str] = None
    application: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    price: Optional[str] = None
    number_state: Optional[str] = None
    fallback_number: Optional[str] = None
    created_time: Optional[datetime] = None


@dataclass
class LocalNumberQuery:
    """Search criteria for local numbers. At least one location filter is expected by the API."""
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    area_code: Optional[str] = None
    local_number: Optional[str] = None
    in_local_calling_area: Optional[bool] = None
    quantity: Optional[int] = None
    pattern: Optional[str] = None


@dataclass
class TollFreeNumberQuery:
    quantity: Optional[int] = None
    pattern: Optional[str] = None


@dataclass
class PhoneNumberQuery:
    application_id: Optional[str] = None
    state: Optional[str] = None
    name: Optional[str] = None
    city: Optional[str] = None
    number_state: Optional[str] = None
    size: Optional[int] = None
