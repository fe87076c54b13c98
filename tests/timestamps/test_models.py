"""Unit tests for span vocabulary and shared value types."""

import pytest

from orgtime.errors import UnknownSpanError
from orgtime.timestamps import (
    Adjustment,
    SourceRange,
    Span,
    SpanDelta,
    coerce_span,
    span_from_code,
)


# ---------------------------------------------------------------------------
# Spans
# ---------------------------------------------------------------------------


class TestSpans:
    """Tests for span codes and names."""

    @pytest.mark.parametrize(
        "code,span",
        [("d", Span.DAY), ("m", Span.MONTH), ("y", Span.YEAR), ("h", Span.HOUR), ("w", Span.WEEK)],
    )
    def test_span_from_code(self, code, span):
        assert span_from_code(code) is span

    def test_unknown_code_raises(self):
        with pytest.raises(KeyError):
            span_from_code("s")

    def test_coerce_span(self):
        assert coerce_span(Span.WEEK) is Span.WEEK
        assert coerce_span("w") is Span.WEEK
        assert coerce_span("month") is Span.MONTH
        assert coerce_span("Year") is Span.YEAR
        assert coerce_span("minute") is None
        assert coerce_span("") is None
        assert coerce_span(None) is None


# ---------------------------------------------------------------------------
# Adjustment Tokens
# ---------------------------------------------------------------------------


class TestAdjustment:
    """Tests for parsing adjustment tokens."""

    def test_parse_positive(self):
        adjustment = Adjustment.parse("+1w")

        assert adjustment == Adjustment(span=Span.WEEK, amount=1, is_negative=False)
        assert adjustment.to_delta() == SpanDelta(week=1)

    def test_parse_negative(self):
        adjustment = Adjustment.parse("-12d")

        assert adjustment == Adjustment(span=Span.DAY, amount=12, is_negative=True)
        assert adjustment.to_delta() == SpanDelta(day=-12)

    def test_missing_span_defaults_to_day(self):
        assert Adjustment.parse("+3").span is Span.DAY

    @pytest.mark.parametrize("token", ["", None, "1w", ".+1w", "bogus", "+w"])
    def test_malformed_is_zero_day(self, token):
        adjustment = Adjustment.parse(token)

        assert adjustment == Adjustment()
        assert adjustment.to_delta() == SpanDelta()


# ---------------------------------------------------------------------------
# Span Deltas
# ---------------------------------------------------------------------------


class TestSpanDelta:
    """Tests for the closed record of span amounts."""

    def test_from_mapping(self):
        delta = SpanDelta.from_mapping({"month": 1, Span.DAY: 2})

        assert delta == SpanDelta(month=1, day=2)

    def test_from_mapping_rejects_unknown(self):
        with pytest.raises(UnknownSpanError) as exc_info:
            SpanDelta.from_mapping({"seconds": 1})

        assert exc_info.value.span == "seconds"
        assert "minute" in exc_info.value.details["allowed"]

    def test_add_and_negate(self):
        total = SpanDelta(day=1, hour=2) + SpanDelta(day=3)

        assert total == SpanDelta(day=4, hour=2)
        assert total.negated() == SpanDelta(day=-4, hour=-2)

    def test_normalized_folds_weeks(self):
        assert SpanDelta(week=2, day=1).normalized() == SpanDelta(day=15)
        assert SpanDelta(month=1).normalized() == SpanDelta(month=1)

    def test_field_names(self):
        assert SpanDelta.field_names() == ("year", "month", "week", "day", "hour", "minute")


class TestSourceRange:
    def test_to_dict(self):
        source = SourceRange(start_line=2, end_line=2, start_col=5, end_col=17)

        assert source.to_dict() == {"start_line": 2, "end_line": 2, "start_col": 5, "end_col": 17}
