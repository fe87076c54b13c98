"""Timestamp value type with calendar arithmetic.

``OrgDate`` is an immutable calendar point (year/month/day/hour/minute) plus
the metadata a timestamp carries in its source text: whether it is active,
its kind, whether a time of day was given, the weekday label, the raw
adjustment tokens and where it was found.

All arithmetic goes through the calendar fields and is then renormalized the
way ``mktime`` does: overflowing months carry into years, and overflowing
days, hours and minutes are counted forward from the first of the month.
Adding one month to January 31st therefore lands on March 2nd (leap year) or
March 3rd, not on the last day of February.

Example:
    >>> date = OrgDate(2024, 3, 15, weekday_name="Fri", adjustments=("+1w",))
    >>> date.adjust("+1w").to_string()
    '2024-03-22 Fri +1w'
"""

from __future__ import annotations

import calendar
import logging
import re
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from orgtime.configuration.settings import TimestampSettings, get_settings
from orgtime.errors import UnknownSpanError
from orgtime.timestamps.clock import Clock, get_default_clock
from orgtime.timestamps.models import Adjustment, DateKind, SourceRange, SpanDelta
from orgtime.timestamps.spans import Span, coerce_span

logger = logging.getLogger(__name__)


WEEKDAY_ABBREVIATIONS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
SECONDS_PER_DAY = 86400
SETTABLE_FIELDS = ("year", "month", "day", "hour", "minute")

# Representable range; arithmetic past either end stops there
EARLIEST_INSTANT = datetime.min
LATEST_INSTANT = datetime.max.replace(second=0, microsecond=0)

_REPEATER_PATTERN = re.compile(r"^\+\d+")
_NEGATIVE_PATTERN = re.compile(r"^-\d+")

_START_OF: Dict[Span, Dict[str, int]] = {
    Span.DAY: {"hour": 0, "minute": 0},
    Span.MONTH: {"day": 1, "hour": 0, "minute": 0},
    Span.YEAR: {"month": 1, "day": 1, "hour": 0, "minute": 0},
    Span.HOUR: {"minute": 0},
}

_END_OF: Dict[Span, Dict[str, int]] = {
    Span.DAY: {"hour": 23, "minute": 59},
    Span.YEAR: {"month": 12, "day": 31, "hour": 23, "minute": 59},
    Span.HOUR: {"minute": 59},
}

SpanLike = Union[Span, str]
DeltaLike = Union[SpanDelta, Mapping[Union[str, Span], int]]


def _to_instant(year: int, month: int, day: int, hour: int, minute: int) -> datetime:
    """Resolve possibly out-of-range calendar fields to a datetime."""
    extra_years, month_index = divmod(month - 1, 12)
    first_of_month = datetime(year + extra_years, month_index + 1, 1)
    return first_of_month + timedelta(days=day - 1, hours=hour, minutes=minute)


@dataclass(frozen=True)
class OrgDate:
    """Immutable timestamp value.

    When any of ``year``, ``month`` or ``day`` is missing the value defaults to
    the clock's current time. Out-of-range fields are carried into the next
    unit at construction, so the calendar fields always match ``instant``.

    ``settings`` and ``clock`` default to the process-wide ones and are passed
    on to every derived value.
    """

    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    hour: Optional[int] = None
    minute: Optional[int] = None
    kind: DateKind = DateKind.NONE
    active: bool = False
    date_only: bool = False
    weekday_name: Optional[str] = None
    adjustments: Tuple[str, ...] = ()
    source_range: Optional[SourceRange] = None
    settings: Optional[TimestampSettings] = field(default=None, compare=False, repr=False)
    clock: Optional[Clock] = field(default=None, compare=False, repr=False)
    instant: datetime = field(init=False, compare=False, repr=False)
    _is_today: Optional[bool] = field(default=None, init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        assign = object.__setattr__
        if self.settings is None:
            assign(self, "settings", get_settings())
        if self.clock is None:
            assign(self, "clock", get_default_clock())
        assign(self, "date_only", bool(self.date_only) or (self.hour is None and self.minute is None))
        assign(self, "adjustments", tuple(self.adjustments))

        if self.year is None or self.month is None or self.day is None:
            instant = self.clock.now().replace(second=0, microsecond=0)
            if self.weekday_name is None:
                assign(self, "weekday_name", WEEKDAY_ABBREVIATIONS[instant.weekday()])
        else:
            instant = _to_instant(self.year, self.month, self.day, self.hour or 0, self.minute or 0)

        assign(self, "instant", instant)
        for name in SETTABLE_FIELDS:
            assign(self, name, getattr(instant, name))

    # -----------------------------------------------------------------------
    # Derivation
    # -----------------------------------------------------------------------

    @property
    def timestamp(self) -> int:
        """Seconds since the epoch, reading the wall clock as UTC."""
        return calendar.timegm(self.instant.timetuple())

    def _from_fields(self, **fields: int) -> "OrgDate":
        values = {name: getattr(self, name) for name in SETTABLE_FIELDS}
        values.update(fields)
        return replace(self, **values)

    def set(self, **fields: int) -> "OrgDate":
        """Return a copy with calendar fields overridden, then renormalized.

        Raises:
            UnknownSpanError: a key is not one of year, month, day, hour, minute.
        """
        for name in fields:
            if name not in SETTABLE_FIELDS:
                raise UnknownSpanError(name, allowed=SETTABLE_FIELDS)
        return self._from_fields(**fields)

    def clone(self, **overrides: Any) -> "OrgDate":
        """Return a copy with metadata (or calendar fields) overridden."""
        return replace(self, **overrides)

    @staticmethod
    def _coerce_delta(delta: Optional[DeltaLike], spans: Mapping[str, int]) -> SpanDelta:
        if delta is None:
            resolved = SpanDelta()
        elif isinstance(delta, SpanDelta):
            resolved = delta
        else:
            resolved = SpanDelta.from_mapping(delta)
        if spans:
            resolved = resolved + SpanDelta.from_mapping(spans)
        return resolved

    def add(self, delta: Optional[DeltaLike] = None, **spans: int) -> "OrgDate":
        """Add signed amounts per span and renormalize.

        Args:
            delta: ``SpanDelta`` or mapping of span names to amounts
            **spans: Extra amounts, e.g. ``add(month=1, day=2)``

        Returns:
            New value; weeks count as seven days. A result outside the
            calendar (before year 1 or after 9999) is clamped to its nearest
            end.
        """
        step = self._coerce_delta(delta, spans).normalized()
        try:
            return self._from_fields(
                year=self.year + step.year,
                month=self.month + step.month,
                day=self.day + step.day,
                hour=self.hour + step.hour,
                minute=self.minute + step.minute,
            )
        except (ValueError, OverflowError):
            minutes = ((step.year * 12 + step.month) * 31 + step.day) * 1440 + step.hour * 60 + step.minute
            bound = LATEST_INSTANT if minutes >= 0 else EARLIEST_INSTANT
            logger.debug("%s plus %s is outside the calendar, clamping to %s", self, step, bound)
            return self._from_fields(**{name: getattr(bound, name) for name in SETTABLE_FIELDS})

    def subtract(self, delta: Optional[DeltaLike] = None, **spans: int) -> "OrgDate":
        """Inverse of :meth:`add`."""
        return self.add(self._coerce_delta(delta, spans).negated())

    def adjust(self, token: str) -> "OrgDate":
        """Apply one adjustment token such as ``+1w`` or ``-2d``.

        A token that does not parse leaves the value unchanged.
        """
        return self.add(Adjustment.parse(token).to_delta())

    def start_of(self, span: SpanLike) -> "OrgDate":
        resolved = coerce_span(span)
        if resolved in _START_OF:
            return self.set(**_START_OF[resolved])
        if resolved is Span.WEEK:
            current = self
            while current.get_isoweekday() != self.settings.week_start_day:
                previous = current.adjust("-1d")
                if previous.instant == current.instant:
                    break
                current = previous
            return current.set(**_START_OF[Span.DAY])
        logger.debug("start_of: unknown span %r, returning value unchanged", span)
        return self

    def end_of(self, span: SpanLike) -> "OrgDate":
        resolved = coerce_span(span)
        if resolved in _END_OF:
            return self.set(**_END_OF[resolved])
        if resolved is Span.WEEK:
            current = self
            while current.get_isoweekday() != self.settings.week_end_day:
                following = current.adjust("+1d")
                if following.instant == current.instant:
                    break
                current = following
            return current.set(**_END_OF[Span.DAY])
        if resolved is Span.MONTH:
            following = self.start_of(Span.MONTH).add(month=1)
            if following.month == self.month:
                # clamped at the end of the calendar
                return following.end_of(Span.DAY)
            return following.adjust("-1d").end_of(Span.DAY)
        logger.debug("end_of: unknown span %r, returning value unchanged", span)
        return self

    # -----------------------------------------------------------------------
    # Comparisons
    # -----------------------------------------------------------------------

    def _bucketed(self, other: "OrgDate", span: Optional[SpanLike]) -> Tuple[datetime, datetime]:
        if span is None:
            return self.instant, other.instant
        return self.start_of(span).instant, other.start_of(span).instant

    def is_same(self, other: "OrgDate", span: Optional[SpanLike] = None) -> bool:
        mine, theirs = self._bucketed(other, span)
        return mine == theirs

    def is_same_or_before(self, other: "OrgDate", span: Optional[SpanLike] = None) -> bool:
        mine, theirs = self._bucketed(other, span)
        return mine <= theirs

    def is_same_or_after(self, other: "OrgDate", span: Optional[SpanLike] = None) -> bool:
        mine, theirs = self._bucketed(other, span)
        return mine >= theirs

    def is_before(self, other: "OrgDate", span: Optional[SpanLike] = None) -> bool:
        return not self.is_same_or_after(other, span)

    def is_after(self, other: "OrgDate", span: Optional[SpanLike] = None) -> bool:
        return not self.is_same_or_before(other, span)

    def is_between(
        self,
        start: "OrgDate",
        end: "OrgDate",
        span: Optional[SpanLike] = None,
    ) -> bool:
        """Inclusive range check; with ``span`` the bounds widen to whole spans."""
        if span is not None:
            start = start.start_of(span)
            end = end.end_of(span)
        return start.instant <= self.instant <= end.instant

    # -----------------------------------------------------------------------
    # Now-relative queries
    # -----------------------------------------------------------------------

    def _now(self) -> "OrgDate":
        return now(settings=self.settings, clock=self.clock)

    def is_today(self) -> bool:
        """Whether the calendar date is the clock's current date (memoized)."""
        if self._is_today is None:
            current = self.clock.now()
            same_day = (self.year, self.month, self.day) == (current.year, current.month, current.day)
            object.__setattr__(self, "_is_today", same_day)
        return self._is_today

    def is_past(self, span: Optional[SpanLike] = None) -> bool:
        return self.is_before(self._now(), span)

    def is_today_or_past(self, span: Optional[SpanLike] = None) -> bool:
        return self.is_same_or_before(self._now(), span)

    def is_future(self, span: Optional[SpanLike] = None) -> bool:
        return self.is_after(self._now(), span)

    def is_today_or_future(self, span: Optional[SpanLike] = None) -> bool:
        return self.is_same_or_after(self._now(), span)

    def diff(self, other: "OrgDate") -> int:
        """Whole days from ``other`` to ``self``, floored."""
        delta = self.start_of(Span.DAY).instant - other.start_of(Span.DAY).instant
        return int(delta.total_seconds()) // SECONDS_PER_DAY

    def humanize(self, from_date: Optional["OrgDate"] = None) -> str:
        """Describe the distance in days, e.g. ``Today``, ``3 d. ago``, ``In 2 d.``."""
        from_date = from_date or self._now()
        days = self.diff(from_date)
        if days == 0:
            return "Today"
        if days < 0:
            return f"{abs(days)} d. ago"
        return f"In {days} d."

    def get_range_until(self, other: "OrgDate") -> List["OrgDate"]:
        """One value per day from ``self`` up to, but excluding, ``other``."""
        dates = []
        current = self
        while current.instant < other.instant:
            dates.append(current)
            current = current.add(day=1)
        return dates

    # -----------------------------------------------------------------------
    # Weekdays and weeks
    # -----------------------------------------------------------------------

    def get_isoweekday(self) -> int:
        return self.instant.isoweekday()

    def get_weekday(self) -> int:
        return self.instant.weekday()

    def set_isoweekday(self, isoweekday: int, future: bool = False) -> "OrgDate":
        """Move to ``isoweekday`` within the current or an adjacent week.

        Targets on or before the current weekday move back within the week.
        Later targets move forward when ``future`` is set, otherwise they land
        on that weekday of the previous week.
        """
        current = self.get_isoweekday()
        if isoweekday <= current:
            return self.subtract(day=current - isoweekday)
        if future:
            return self.add(day=isoweekday - current)
        return self.subtract(week=1).add(day=isoweekday - current)

    def is_weekend(self) -> bool:
        return self.get_isoweekday() >= 6

    def get_week_number(self) -> int:
        """Count weeks from the start of the year using this engine's week span."""
        current = self.start_of(Span.YEAR)
        week = 1
        while current.instant < self.instant:
            current = current.add(week=1)
            week += 1
        return week

    # -----------------------------------------------------------------------
    # Kinds, repeaters and adjusted dates
    # -----------------------------------------------------------------------

    def is_deadline(self) -> bool:
        return self.active and self.kind is DateKind.DEADLINE

    def is_scheduled(self) -> bool:
        return self.active and self.kind is DateKind.SCHEDULED

    def is_closed(self) -> bool:
        return self.active and self.kind is DateKind.CLOSED

    def is_none(self) -> bool:
        return self.active and self.kind is DateKind.NONE

    def get_negative_adjustment(self) -> Optional[str]:
        """Last adjustment token, if it is negative (``-2d``)."""
        if not self.adjustments:
            return None
        last = self.adjustments[-1]
        if not _NEGATIVE_PATTERN.match(last):
            return None
        return last

    def get_repeater(self) -> Optional[str]:
        """First positive adjustment token (``+1w``)."""
        for adjustment in self.adjustments:
            if _REPEATER_PATTERN.match(adjustment):
                return adjustment
        return None

    def repeats_on(self, other: "OrgDate") -> bool:
        """Whether stepping the repeater from this date lands on ``other``'s day."""
        repeater = self.get_repeater()
        if not repeater:
            return False
        current = self.start_of(Span.DAY)
        target = other.start_of(Span.DAY)
        while current.instant < target.instant:
            following = current.adjust(repeater)
            if following.instant <= current.instant:
                logger.debug("Repeater %r does not advance, stopping at %s", repeater, current)
                break
            current = following
        return current.is_same(other, Span.DAY)

    def get_adjusted_date(self) -> "OrgDate":
        """Date this timestamp starts showing up for deadline/scheduled views.

        Deadlines move back by their negative adjustment (in its span), or by
        the configured warning days. Scheduled timestamps move forward by the
        negative adjustment's amount in days. Anything else is returned as is.
        """
        if not self.is_deadline() and not self.is_scheduled():
            return self

        token = self.get_negative_adjustment()

        if self.is_deadline():
            if token:
                warning = Adjustment.parse(token)
                return self.subtract(SpanDelta.of(warning.span, warning.amount))
            return self.subtract(day=self.settings.deadline_warning_days)

        if not token:
            return self
        return self.add(day=Adjustment.parse(token).amount)

    # -----------------------------------------------------------------------
    # Formatting
    # -----------------------------------------------------------------------

    def to_string(self) -> str:
        """Timestamp body without markers, e.g. ``2024-03-15 Fri 09:00 +1w``."""
        text = f"{self.year:04d}-{self.month:02d}-{self.day:02d}"
        if self.weekday_name:
            text += f" {WEEKDAY_ABBREVIATIONS[self.instant.weekday()]}"
        if not self.date_only:
            text += f" {self.hour:02d}:{self.minute:02d}"
        if self.adjustments:
            text += " " + " ".join(self.adjustments)
        return text

    def to_marked_string(self) -> str:
        body = self.to_string()
        return f"<{body}>" if self.active else f"[{body}]"

    def format(self, fmt: str) -> str:
        return self.instant.strftime(fmt)

    def format_time(self) -> str:
        if self.date_only:
            return ""
        return f"{self.hour:02d}:{self.minute:02d}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "text": self.to_marked_string(),
            "kind": self.kind.value,
            "active": self.active,
            "date_only": self.date_only,
            "year": self.year,
            "month": self.month,
            "day": self.day,
            "hour": self.hour,
            "minute": self.minute,
            "weekday_name": self.weekday_name,
            "adjustments": list(self.adjustments),
            "instant": self.instant.isoformat(),
            "source_range": self.source_range.to_dict() if self.source_range else None,
        }

    def __str__(self) -> str:
        return self.to_marked_string()


def now(
    *,
    settings: Optional[TimestampSettings] = None,
    clock: Optional[Clock] = None,
) -> OrgDate:
    """Current date and time as an inactive value with a time of day."""
    current = (clock or get_default_clock()).now()
    return OrgDate(
        current.year,
        current.month,
        current.day,
        current.hour,
        current.minute,
        settings=settings,
        clock=clock,
    )


def today(
    *,
    settings: Optional[TimestampSettings] = None,
    clock: Optional[Clock] = None,
) -> OrgDate:
    """Current date as a date-only value labelled with its weekday."""
    return OrgDate(settings=settings, clock=clock)


__all__ = [
    "EARLIEST_INSTANT",
    "LATEST_INSTANT",
    "OrgDate",
    "SECONDS_PER_DAY",
    "WEEKDAY_ABBREVIATIONS",
    "now",
    "today",
]
