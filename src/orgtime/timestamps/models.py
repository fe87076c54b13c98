"""Value types shared by the timestamp engine.

Defines:
- ``DateKind``: semantic role of a timestamp in its source context
- ``SourceRange``: where in the source text a timestamp was found
- ``Adjustment``: a parsed adjustment token (``+1w``, ``-2d``)
- ``SpanDelta``: closed record of signed span amounts for ``add``/``subtract``
"""

from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from orgtime.errors import UnknownSpanError
from orgtime.timestamps.spans import Span, span_from_code

logger = logging.getLogger(__name__)


# Sign, amount and optional span code at the start of an adjustment token
ADJUSTMENT_PATTERN = re.compile(r"^([+-])(\d+)([hdwmy]?)")


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class DateKind(Enum):
    """Semantic role of a timestamp within its originating context."""

    NONE = "NONE"
    SCHEDULED = "SCHEDULED"
    DEADLINE = "DEADLINE"
    CLOSED = "CLOSED"


# ---------------------------------------------------------------------------
# Core Value Types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SourceRange:
    """Location of a matched timestamp in source text.

    Columns follow slice conventions: ``line[start_col:end_col]`` is the
    matched text including its markers.
    """

    start_line: int
    end_line: int
    start_col: int
    end_col: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage."""
        return asdict(self)


@dataclass(frozen=True)
class SpanDelta:
    """Signed amounts per calendar span.

    Only the fields below are recognized; anything else is rejected with
    ``UnknownSpanError`` instead of being copied through silently.
    """

    year: int = 0
    month: int = 0
    week: int = 0
    day: int = 0
    hour: int = 0
    minute: int = 0

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_mapping(cls, values: Mapping[Union[str, Span], int]) -> "SpanDelta":
        """Build a delta from span names (or ``Span`` members) to amounts."""
        allowed = cls.field_names()
        amounts: Dict[str, int] = {}
        for key, amount in values.items():
            name = key.value if isinstance(key, Span) else key
            if name not in allowed:
                raise UnknownSpanError(str(name), allowed=allowed)
            amounts[name] = amounts.get(name, 0) + int(amount)
        return cls(**amounts)

    @classmethod
    def of(cls, span: Span, amount: int) -> "SpanDelta":
        return cls(**{span.value: amount})

    def __add__(self, other: "SpanDelta") -> "SpanDelta":
        if not isinstance(other, SpanDelta):
            return NotImplemented
        return SpanDelta(
            **{name: getattr(self, name) + getattr(other, name) for name in self.field_names()}
        )

    def negated(self) -> "SpanDelta":
        return SpanDelta(**{name: -value for name, value in asdict(self).items()})

    def normalized(self) -> "SpanDelta":
        """Fold weeks into days."""
        if not self.week:
            return self
        return SpanDelta(
            year=self.year,
            month=self.month,
            day=self.day + self.week * 7,
            hour=self.hour,
            minute=self.minute,
        )


@dataclass(frozen=True)
class Adjustment:
    """Parsed adjustment token.

    A token that fails to parse yields the zero-day adjustment, which applies
    as a no-op.
    """

    span: Span = Span.DAY
    amount: int = 0
    is_negative: bool = False

    @classmethod
    def parse(cls, value: Optional[str]) -> "Adjustment":
        match = ADJUSTMENT_PATTERN.match(value or "")
        if not match:
            logger.debug("Ignoring malformed adjustment token %r", value)
            return cls()
        operation, amount, code = match.groups()
        return cls(
            span=span_from_code(code or "d"),
            amount=int(amount),
            is_negative=operation == "-",
        )

    def to_delta(self) -> SpanDelta:
        """Signed delta this adjustment applies."""
        amount = -self.amount if self.is_negative else self.amount
        return SpanDelta.of(self.span, amount)


__all__ = [
    "ADJUSTMENT_PATTERN",
    "Adjustment",
    "DateKind",
    "SourceRange",
    "SpanDelta",
]
