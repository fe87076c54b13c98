"""Find every timestamp on a line of text.

Active timestamps are enclosed in ``<...>``, inactive ones in ``[...]``. Each
occurrence is located by searching forward from the end of the previous one,
so repeated identical timestamps on one line get distinct positions.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Iterator, List, Optional, Tuple

from orgtime.configuration.settings import TimestampSettings
from orgtime.timestamps.clock import Clock
from orgtime.timestamps.date import OrgDate
from orgtime.timestamps.models import DateKind, SourceRange
from orgtime.timestamps.parser import parse

logger = logging.getLogger(__name__)


# Opening marker, body starting with a date, closing marker
TIMESTAMP_PATTERN = re.compile(r"([<\[])(\d{4}-\d{1,2}-\d{2}[^>\]]*)([>\]])")


def from_match(
    line: str,
    line_number: int,
    open_marker: str,
    body: str,
    close_marker: str,
    last_match: Optional[OrgDate] = None,
    *,
    kind: DateKind = DateKind.NONE,
    settings: Optional[TimestampSettings] = None,
    clock: Optional[Clock] = None,
) -> OrgDate:
    """Build a value for one pattern match, locating it on ``line``.

    The search starts at the end column of ``last_match`` (or the start of the
    line), which keeps positions distinct for identical timestamps.
    """
    cursor = 0
    if last_match is not None and last_match.source_range is not None:
        cursor = last_match.source_range.end_col

    matched = f"{open_marker}{body}{close_marker}"
    start_col = line.find(matched, cursor)
    source_range = SourceRange(
        start_line=line_number,
        end_line=line_number,
        start_col=start_col,
        end_col=start_col + len(matched),
    )
    return parse(
        body.strip(),
        kind=kind,
        active=open_marker == "<",
        source_range=source_range,
        settings=settings,
        clock=clock,
    )


def scan_line(
    line: str,
    line_number: int,
    *,
    kind: DateKind = DateKind.NONE,
    settings: Optional[TimestampSettings] = None,
    clock: Optional[Clock] = None,
) -> List[OrgDate]:
    """Return every timestamp on ``line`` in left-to-right order."""
    dates: List[OrgDate] = []
    for match in TIMESTAMP_PATTERN.finditer(line):
        open_marker, body, close_marker = match.groups()
        dates.append(
            from_match(
                line,
                line_number,
                open_marker,
                body,
                close_marker,
                dates[-1] if dates else None,
                kind=kind,
                settings=settings,
                clock=clock,
            )
        )
    return dates


def scan_lines(
    lines: Iterable[str],
    start: int = 1,
    *,
    kind: DateKind = DateKind.NONE,
    settings: Optional[TimestampSettings] = None,
    clock: Optional[Clock] = None,
) -> Iterator[Tuple[int, OrgDate]]:
    """Scan consecutive lines, yielding ``(line_number, value)`` pairs."""
    found = 0
    for line_number, line in enumerate(lines, start=start):
        for date in scan_line(
            line.rstrip("\r\n"), line_number, kind=kind, settings=settings, clock=clock
        ):
            found += 1
            yield line_number, date
    logger.debug("Scanned lines from %d, found %d timestamps", start, found)


__all__ = ["TIMESTAMP_PATTERN", "from_match", "scan_line", "scan_lines"]
