from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one check-in, optionally closed by a check-out."""

    record_id: int
    user_id: str
    username: str
    checkin_time: datetime
    checkout_time: Optional[datetime] = None


@dataclass(frozen=True)
class RecordListing:
    """Result of a bulk read: decoded records plus the count of unreadable documents."""

    records: list[AttendanceRecord] = field(default_factory=list)
    skipped: int = 0
