from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo

from .attendance.mongo_attendance_repository import MongoAttendanceRepository
from .attendance.presenter import RecordPresenter
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import MongoConfig, MongoConnection


@dataclass(frozen=True)
class Container:
    conn: MongoConnection

    attendance_repo: AttendanceRepository

    attendance_service: AttendanceService
    presenter: RecordPresenter


def build_container(*, mongo_config: dict, display_tz: tzinfo, display_label: str = "IST") -> Container:
    config = MongoConfig(
        uri=str(mongo_config["uri"]),
        database=str(mongo_config.get("database", "attendance_db")),
        collection=str(mongo_config.get("collection", "records")),
        connect_timeout_ms=int(mongo_config.get("connect_timeout_ms", 10000)),
        operation_timeout=float(mongo_config.get("operation_timeout", 10)),
    )
    conn = MongoConnection(config)

    attendance_repo = MongoAttendanceRepository(conn)
    attendance_service = AttendanceService(attendance_repo)

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        attendance_service=attendance_service,
        presenter=RecordPresenter(display_tz, label=display_label),
    )
