"""Injectable clock for "now"-relative timestamp queries.

Every query that depends on the current time (``is_today``, ``is_past``,
``humanize`` without an explicit reference, fallback values) reads it through a
``Clock`` at call time. Tests and tools pin the clock with ``FixedClock``; the
``ORGTIME_NOW`` environment variable pins the default clock for a whole
process.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Optional, Protocol, Union, runtime_checkable

from dateutil import parser as dateutil_parser

logger = logging.getLogger(__name__)

NOW_ENV_VAR = "ORGTIME_NOW"


@runtime_checkable
class Clock(Protocol):
    """Source of the current local wall-clock time."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Reads the host's local wall-clock time on every call."""

    def now(self) -> datetime:
        return datetime.now()

    def __repr__(self) -> str:
        return "SystemClock()"


class FixedClock:
    """Always returns the same instant."""

    def __init__(self, instant: Union[datetime, str]) -> None:
        self._instant = parse_reference_time(instant)

    def now(self) -> datetime:
        return self._instant

    def __repr__(self) -> str:
        return f"FixedClock({self._instant.isoformat()!r})"


def parse_reference_time(value: Union[datetime, str]) -> datetime:
    """Parse a reference time into a naive local datetime.

    Accepts datetimes and anything ``dateutil`` understands
    (``2024-03-15``, ``2024-03-15T09:00``, ``March 15 2024 9am``).
    """
    if isinstance(value, datetime):
        timestamp = value
    else:
        timestamp = dateutil_parser.parse(value)
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone().replace(tzinfo=None)
    return timestamp


_default_clock: Optional[Clock] = None


def get_default_clock() -> Clock:
    """Return the process-wide clock, honouring ``ORGTIME_NOW`` if set."""
    if _default_clock is not None:
        return _default_clock
    pinned = os.getenv(NOW_ENV_VAR)
    if pinned:
        try:
            return FixedClock(pinned)
        except (ValueError, OverflowError) as exc:
            logger.warning("Ignoring unparseable %s=%r: %s", NOW_ENV_VAR, pinned, exc)
    return SystemClock()


def set_default_clock(clock: Optional[Clock]) -> None:
    """Install a process-wide clock; ``None`` restores the system clock."""
    global _default_clock
    _default_clock = clock


__all__ = [
    "Clock",
    "FixedClock",
    "NOW_ENV_VAR",
    "SystemClock",
    "get_default_clock",
    "parse_reference_time",
    "set_default_clock",
]
