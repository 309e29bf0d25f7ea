from __future__ import annotations

import logging

from pymongo import ASCENDING, DESCENDING

from .connection import MongoConnection

logger = logging.getLogger(__name__)


def ping(conn: MongoConnection) -> None:
    conn.client().admin.command("ping")


def ensure_indexes(conn: MongoConnection) -> list[str]:
    """Create the index backing latest-record-per-user lookups (idempotent)."""
    name = conn.records().create_index(
        [("user_id", ASCENDING), ("checkin_time", DESCENDING), ("_id", DESCENDING)],
        name="user_latest_checkin",
    )
    logger.info("Index ready: %s.%s", conn.config.collection, name)
    return [name]


def list_collections(conn: MongoConnection) -> list[str]:
    return sorted(conn.database().list_collection_names())
