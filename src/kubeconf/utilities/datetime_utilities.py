""" Collection of datetime utility functions """

import re
from datetime import datetime, timezone
from typing import Callable, Final, Optional

from kubeconf.common.error_types import DateParseError


def _parse_instant(value: str) -> Optional[datetime]:
    """RFC3339 instant in UTC, e.g. `2024-05-01T10:00:00Z` or `2024-05-01T10:00:00.123Z`"""
    if not value.endswith(("Z", "z")):
        return None
    parsed = datetime.fromisoformat(value[:-1])
    if parsed.tzinfo is not None:
        return None
    return parsed.replace(tzinfo=timezone.utc)


def _parse_offset_date_time(value: str) -> Optional[datetime]:
    """RFC3339 date-time with an explicit offset, e.g. `2024-05-01T12:00:00+02:00`"""
    parsed = datetime.fromisoformat(value)
    return parsed if parsed.tzinfo is not None else None


_RFC3339_DATE_TIME: Final = re.compile(r"\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})")
_RFC3339_PARSERS: Final[list[Callable[[str], Optional[datetime]]]] = [_parse_instant, _parse_offset_date_time]


def parse_rfc3339(value: str) -> datetime:
    """Parse a timezone-aware timestamp, trying the instant format first and the offset format next.

    Only the extended `date T time offset` form is accepted.
    Raise `DateParseError` if neither format matches.
    """
    value = value.strip()
    if not _RFC3339_DATE_TIME.fullmatch(value):
        raise DateParseError(value=value)
    for parser in _RFC3339_PARSERS:
        try:
            parsed = parser(value)
        except ValueError:
            continue
        if parsed is not None:
            return parsed
    raise DateParseError(value=value)


def as_aware(value: datetime) -> datetime:
    """YAML timestamps without an offset are UTC"""
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)
