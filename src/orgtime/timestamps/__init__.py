"""Timestamp engine for ``<YYYY-MM-DD Www HH:MM +1w>`` style notation.

This package implements:
- Span vocabulary for adjustment tokens (``d``, ``w``, ``m``, ``y``, ``h``)
- ``OrgDate``, an immutable timestamp value with calendar arithmetic
- Body grammar parsing with a lenient "now" fallback
- Line scanning for active ``<...>`` and inactive ``[...]`` timestamps
- An injectable clock for "now"-relative queries
"""

from orgtime.timestamps.clock import (
    Clock,
    FixedClock,
    SystemClock,
    get_default_clock,
    set_default_clock,
)
from orgtime.timestamps.date import (
    OrgDate,
    now,
    today,
)
from orgtime.timestamps.models import (
    Adjustment,
    DateKind,
    SourceRange,
    SpanDelta,
)
from orgtime.timestamps.parser import parse
from orgtime.timestamps.scanner import (
    TIMESTAMP_PATTERN,
    from_match,
    scan_line,
    scan_lines,
)
from orgtime.timestamps.spans import (
    SPAN_CODES,
    Span,
    coerce_span,
    span_from_code,
)

__all__ = [
    # Values
    "OrgDate",
    "DateKind",
    "SourceRange",
    "Adjustment",
    "SpanDelta",
    # Spans
    "Span",
    "SPAN_CODES",
    "span_from_code",
    "coerce_span",
    # Parsing and scanning
    "parse",
    "now",
    "today",
    "TIMESTAMP_PATTERN",
    "from_match",
    "scan_line",
    "scan_lines",
    # Clock
    "Clock",
    "FixedClock",
    "SystemClock",
    "get_default_clock",
    "set_default_clock",
]
