from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database


@dataclass(frozen=True)
class MongoConfig:
    uri: str
    database: str
    collection: str
    connect_timeout_ms: int = 10000
    operation_timeout: float = 10.0


class MongoConnection:
    """Lazily-created MongoClient shared by the repositories of one app.

    Note: MongoClient keeps its own connection pool, so one client per app is enough.
    """

    def __init__(self, config: MongoConfig):
        self._config = config
        self._client: Optional[MongoClient] = None

    @property
    def config(self) -> MongoConfig:
        return self._config

    def client(self) -> MongoClient:
        if self._client is None:
            self._client = MongoClient(
                self._config.uri,
                tz_aware=True,
                serverSelectionTimeoutMS=self._config.connect_timeout_ms,
                connectTimeoutMS=self._config.connect_timeout_ms,
            )
        return self._client

    def database(self) -> Database:
        return self.client()[self._config.database]

    def records(self) -> Collection:
        return self.database()[self._config.collection]

    def counters(self) -> Collection:
        return self.database()["counters"]
