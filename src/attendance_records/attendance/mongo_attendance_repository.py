from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from ..core.constants import ID_COUNTER_KEY
from ..core.exceptions import InternalError
from ..database.connection import MongoConnection
from ..database.mongo_base import storage_call
from .model import AttendanceRecord, RecordListing
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_DECODE_ERRORS = (KeyError, TypeError, ValueError)
_MISSING = object()


def _field(doc: Mapping[str, Any], key: str, kind: type, default: Any = _MISSING) -> Any:
    # Absent fields take their default when one is given; present ones must have the right type.
    if key not in doc and default is not _MISSING:
        return default
    value = doc[key]
    if not isinstance(value, kind) or isinstance(value, bool):
        raise TypeError(f"field {key!r} has type {type(value).__name__}, expected {kind.__name__}")
    return value


def _utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_record(doc: Mapping[str, Any]) -> AttendanceRecord:
    """Decode a stored document.

    Missing user_id/username read as empty strings. A missing _id or checkin_time,
    or any field of the wrong type, raises KeyError/TypeError/ValueError.
    """
    checkout = doc.get("checkout_time")
    return AttendanceRecord(
        record_id=_field(doc, "_id", int),
        user_id=_field(doc, "user_id", str, ""),
        username=_field(doc, "username", str, ""),
        checkin_time=_utc(_field(doc, "checkin_time", datetime)),
        checkout_time=_utc(_field(doc, "checkout_time", datetime)) if checkout is not None else None,
    )


def to_document(record: AttendanceRecord) -> dict[str, Any]:
    doc: dict[str, Any] = {
        "_id": record.record_id,
        "user_id": record.user_id,
        "username": record.username,
        "checkin_time": record.checkin_time,
    }
    if record.checkout_time is not None:
        doc["checkout_time"] = record.checkout_time
    return doc


class MongoAttendanceRepository(AttendanceRepository):
    def __init__(self, conn: MongoConnection, *, timeout: Optional[float] = None):
        self._conn = conn
        self._timeout = conn.config.operation_timeout if timeout is None else float(timeout)

    def _decode_one(self, doc: Mapping[str, Any]) -> AttendanceRecord:
        try:
            return to_record(doc)
        except _DECODE_ERRORS as exc:
            raise InternalError(f"Could not decode record {doc.get('_id')!r}: {exc}") from exc

    def _increment(self, counters: Collection, max_id: int) -> Optional[Mapping[str, Any]]:
        return counters.find_one_and_update(
            {"_id": ID_COUNTER_KEY, "seq": {"$lt": max_id}},
            {"$inc": {"seq": 1}},
            return_document=ReturnDocument.AFTER,
        )

    def _seed_counter(self, counters: Collection) -> None:
        # Start from the highest stored _id so existing numbering carries on.
        latest = self._conn.records().find_one(
            {"_id": {"$type": "number"}},
            projection={"_id": 1},
            sort=[("_id", DESCENDING)],
        )
        seed = int(latest["_id"]) if latest else 0
        try:
            counters.insert_one({"_id": ID_COUNTER_KEY, "seq": seed})
            logger.info("Seeded record ID counter at %d", seed)
        except DuplicateKeyError:
            # Another request seeded it first.
            pass

    def next_id(self, *, max_id: int) -> Optional[int]:
        counters = self._conn.counters()
        with storage_call("fetch latest record ID", timeout=self._timeout):
            doc = self._increment(counters, max_id)
            if doc is None and counters.find_one({"_id": ID_COUNTER_KEY}) is None:
                self._seed_counter(counters)
                doc = self._increment(counters, max_id)
        if doc is None:
            return None
        return int(doc["seq"])

    def release_id(self, *, record_id: int) -> bool:
        with storage_call("release record ID", timeout=self._timeout):
            doc = self._conn.counters().find_one_and_update(
                {"_id": ID_COUNTER_KEY, "seq": int(record_id)},
                {"$inc": {"seq": -1}},
            )
        return doc is not None

    def insert(self, record: AttendanceRecord) -> None:
        with storage_call("insert record", timeout=self._timeout):
            self._conn.records().insert_one(to_document(record))

    def set_checkout(self, *, record_id: int, checkout_time: datetime) -> Optional[AttendanceRecord]:
        with storage_call("update record", timeout=self._timeout):
            doc = self._conn.records().find_one_and_update(
                {"_id": int(record_id)},
                {"$set": {"checkout_time": checkout_time}},
                return_document=ReturnDocument.AFTER,
            )
        if doc is None:
            return None
        return self._decode_one(doc)

    def get_latest_for_user(self, user_id: str) -> Optional[AttendanceRecord]:
        with storage_call("fetch record", timeout=self._timeout):
            doc = self._conn.records().find_one(
                {"user_id": user_id},
                sort=[("checkin_time", DESCENDING), ("_id", DESCENDING)],
            )
        if doc is None:
            return None
        return self._decode_one(doc)

    def list_all(self) -> RecordListing:
        records: list[AttendanceRecord] = []
        skipped = 0
        with storage_call("fetch records", timeout=self._timeout):
            with self._conn.records().find({}) as cursor:
                for doc in cursor:
                    try:
                        records.append(to_record(doc))
                    except _DECODE_ERRORS as exc:
                        skipped += 1
                        logger.warning("Error decoding record %r: %s", doc.get("_id"), exc)
        return RecordListing(records=records, skipped=skipped)
