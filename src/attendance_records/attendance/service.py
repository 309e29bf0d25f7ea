from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence

from ..common.datetime_utils import now_utc, to_storage_precision
from ..common.validators import parse_record_id
from ..core.constants import MAX_RECORD_ID
from ..core.exceptions import InternalError, NotFoundError, ResourceExhaustedError
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Check-in/check-out lifecycle and read queries over the record store.

    Storage failures arrive from the repository as InternalError and are left
    to propagate; this layer raises the domain conditions.
    """

    def __init__(self, attendance: AttendanceRepository, *, max_record_id: int = MAX_RECORD_ID):
        self._attendance = attendance
        self._max_record_id = int(max_record_id)

    def _now(self, now: datetime | None) -> datetime:
        return to_storage_precision(now) if now is not None else now_utc()

    def check_in(self, user_id: str, username: str, *, now: datetime | None = None) -> AttendanceRecord:
        record_id = self._attendance.next_id(max_id=self._max_record_id)
        if record_id is None:
            raise ResourceExhaustedError(
                f"Cannot create new record, maximum ID of {self._max_record_id} reached"
            )

        record = AttendanceRecord(
            record_id=record_id,
            user_id=user_id,
            username=username,
            checkin_time=self._now(now),
        )
        try:
            self._attendance.insert(record)
        except InternalError:
            # Hand the reserved ID back so numbering stays gapless.
            try:
                self._attendance.release_id(record_id=record_id)
            except InternalError:
                logger.warning("Could not release record ID %d after failed insert", record_id)
            raise
        logger.info("Checked in user_id=%s as record %d", user_id, record_id)
        return record

    def check_out(self, record_id: str, *, now: datetime | None = None) -> AttendanceRecord:
        rid = parse_record_id(record_id)
        updated = self._attendance.set_checkout(record_id=rid, checkout_time=self._now(now))
        if updated is None:
            raise NotFoundError("Record not found")
        return updated

    def get_latest_for_user(self, user_id: str) -> AttendanceRecord:
        record = self._attendance.get_latest_for_user(user_id)
        if record is None:
            raise NotFoundError("No records found for this user")
        return record

    def list_all(self) -> Sequence[AttendanceRecord]:
        listing = self._attendance.list_all()
        if listing.skipped:
            logger.warning("Skipped %d unreadable record(s) while listing", listing.skipped)
        return listing.records
