from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import tzinfo

from ..common.datetime_utils import format_display
from .model import AttendanceRecord

CHECKED_IN = "User checked in successfully."
CHECKED_OUT = "User checked out successfully."
RECORD_FOUND = "Record found."
RECORD_RETRIEVED = "Record retrieved."


@dataclass(frozen=True)
class AttendanceRecordView:
    id: str
    user_id: str
    username: str
    checkin_time: str
    checkout_time: str
    status_message: str

    def to_dict(self) -> dict:
        return asdict(self)


class RecordPresenter:
    """Renders records for responses, with timestamps in the display timezone."""

    def __init__(self, tz: tzinfo, *, label: str = "IST"):
        self._tz = tz
        self._label = label

    def present(self, record: AttendanceRecord, status_message: str) -> AttendanceRecordView:
        checkout = ""
        if record.checkout_time is not None:
            checkout = format_display(record.checkout_time, self._tz, self._label)
        return AttendanceRecordView(
            id=str(record.record_id),
            user_id=record.user_id,
            username=record.username,
            checkin_time=format_display(record.checkin_time, self._tz, self._label),
            checkout_time=checkout,
            status_message=status_message,
        )
