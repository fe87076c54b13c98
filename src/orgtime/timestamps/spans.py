"""Calendar span vocabulary.

Maps the single-letter span codes used in adjustment tokens (``+1w``, ``-2d``)
to canonical span names.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Union


class Span(Enum):
    """Calendar granularity used for normalization and arithmetic."""

    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


SPAN_CODES: Dict[str, Span] = {
    "d": Span.DAY,
    "m": Span.MONTH,
    "y": Span.YEAR,
    "h": Span.HOUR,
    "w": Span.WEEK,
}

_SPAN_NAMES: Dict[str, Span] = {span.value: span for span in Span}


def span_from_code(code: str) -> Span:
    """Return the span for a one-letter code.

    Raises:
        KeyError: ``code`` is not one of ``d``, ``m``, ``y``, ``h``, ``w``.
    """
    return SPAN_CODES[code]


def coerce_span(value: Union[Span, str, None]) -> Optional[Span]:
    """Resolve a span, span name or one-letter code; ``None`` if unrecognized."""
    if isinstance(value, Span):
        return value
    if not value:
        return None
    if len(value) == 1:
        return SPAN_CODES.get(value)
    return _SPAN_NAMES.get(value.lower())


__all__ = ["Span", "SPAN_CODES", "span_from_code", "coerce_span"]
