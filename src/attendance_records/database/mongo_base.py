from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

import pymongo
from pymongo.errors import PyMongoError

from ..core.exceptions import InternalError

logger = logging.getLogger(__name__)


@contextmanager
def storage_call(action: str, *, timeout: float) -> Iterator[None]:
    """Run MongoDB operations under a deadline, surfacing failures as InternalError.

    ``action`` completes the message, e.g. "insert record" ->
    "Could not insert record: <driver error>".
    """
    try:
        with pymongo.timeout(timeout):
            yield
    except PyMongoError as exc:
        logger.exception("MongoDB call failed: %s", action)
        raise InternalError(f"Could not {action}: {exc}") from exc
