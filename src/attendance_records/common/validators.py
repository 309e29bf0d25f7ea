from __future__ import annotations

import re

from ..core.constants import MAX_STORABLE_INT
from ..core.exceptions import InvalidArgumentError

# Optional leading "+", then ASCII digits; no "-", spaces or underscores.
_DIGITS = re.compile(r"\+?[0-9]+")


def parse_record_id(value: str) -> int:
    """Parse a record identifier given as a non-negative base-10 string, e.g. "12" or "+12"."""
    if not isinstance(value, str) or not _DIGITS.fullmatch(value):
        raise InvalidArgumentError("Invalid record ID format")
    record_id = int(value)
    if record_id > MAX_STORABLE_INT:
        raise InvalidArgumentError("Invalid record ID format")
    return record_id
