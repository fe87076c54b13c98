"""Timestamp body grammar.

Recognizes the text between the ``<``/``>`` or ``[``/``]`` markers::

    DATE        := YYYY '-' M(1-2) '-' DD
    WEEKDAY     := 3+ letters (any casing)
    TIME        := H(1-2) ':' MM
    ADJUSTMENT  := [.+-]+ DIGITS [hdwmy]?
    BODY        := DATE (WEEKDAY | TIME | ADJUSTMENT)*

Tokens after the date are classified by the first shape found inside them,
checking weekday, then time, then adjustment, so the start of a time range
(``10:00-11:30``) still sets the time. Parsing never raises: a body that does
not start with a date yields a value for the current time carrying the
caller's context.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from orgtime.configuration.settings import TimestampSettings
from orgtime.timestamps.clock import Clock
from orgtime.timestamps.date import OrgDate
from orgtime.timestamps.models import DateKind, SourceRange

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Regular Expression Patterns
# ---------------------------------------------------------------------------

DATE_PATTERN = re.compile(r"^(\d{4})-(\d{1,2})-(\d{2})(?=\s|$)")
WEEKDAY_TOKEN = re.compile(r"[A-Za-z]{3,}")
TIME_TOKEN = re.compile(r"(\d{1,2}):(\d{2})")
ADJUSTMENT_TOKEN = re.compile(r"[.+-]+\d+[hdwmy]?")


def parse(
    text: Optional[str],
    *,
    kind: DateKind = DateKind.NONE,
    active: bool = False,
    source_range: Optional[SourceRange] = None,
    settings: Optional[TimestampSettings] = None,
    clock: Optional[Clock] = None,
) -> OrgDate:
    """Parse a timestamp body such as ``2024-03-15 Fri 09:00 +1w``.

    Args:
        text: Timestamp body without the enclosing markers
        kind: Semantic role of the timestamp in its source
        active: Whether the body was enclosed in ``<>``
        source_range: Where the timestamp was found
        settings: Calendar conventions (defaults to the process-wide ones)
        clock: Clock for the "now" fallback (defaults to the process-wide one)

    Returns:
        Parsed value, or the current time with the given context when the
        body does not start with a date.
    """
    context = {
        "kind": kind,
        "active": active,
        "source_range": source_range,
        "settings": settings,
        "clock": clock,
    }
    text = text or ""

    match = DATE_PATTERN.match(text)
    if not match:
        logger.debug("No date at start of %r, falling back to now", text)
        return OrgDate(**context)

    year, month, day = (int(group) for group in match.groups())
    weekday_name: Optional[str] = None
    time_match: Optional[re.Match] = None
    adjustments: List[str] = []

    for token in text.split()[1:]:
        token_time = TIME_TOKEN.search(token)
        if WEEKDAY_TOKEN.search(token):
            if weekday_name is None:
                weekday_name = token
        elif token_time:
            if time_match is None:
                time_match = token_time
        elif ADJUSTMENT_TOKEN.search(token):
            adjustments.append(token)
        else:
            logger.debug("Ignoring unrecognized token %r in %r", token, text)

    hour = minute = None
    if time_match is not None:
        hour, minute = (int(group) for group in time_match.groups())

    try:
        return OrgDate(
            year,
            month,
            day,
            hour,
            minute,
            weekday_name=weekday_name,
            adjustments=tuple(adjustments),
            **context,
        )
    except (ValueError, OverflowError) as exc:
        logger.debug("Date in %r is out of calendar range (%s), falling back to now", text, exc)
        return OrgDate(**context)


__all__ = [
    "ADJUSTMENT_TOKEN",
    "DATE_PATTERN",
    "TIME_TOKEN",
    "WEEKDAY_TOKEN",
    "parse",
]
