from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import AttendanceRecord, RecordListing


class AttendanceRepository(Protocol):
    def next_id(self, *, max_id: int) -> Optional[int]:
        """Reserve the next sequential record ID, or return None once ``max_id`` is used."""

        raise NotImplementedError

    def release_id(self, *, record_id: int) -> bool:
        """Undo a reservation, provided no later ID has been handed out since."""

        raise NotImplementedError

    def insert(self, record: AttendanceRecord) -> None:
        raise NotImplementedError

    def set_checkout(self, *, record_id: int, checkout_time: datetime) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_latest_for_user(self, user_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_all(self) -> RecordListing:
        raise NotImplementedError
