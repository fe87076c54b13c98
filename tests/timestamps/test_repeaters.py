"""Tests for repeaters, warning adjustments and adjusted dates."""

import pytest

from orgtime.configuration.settings import TimestampSettings
from orgtime.timestamps import DateKind, OrgDate


def ymd(date: OrgDate) -> tuple:
    return (date.year, date.month, date.day)


def deadline(*adjustments, **kwargs) -> OrgDate:
    return OrgDate(2024, 5, 10, kind=DateKind.DEADLINE, active=True, adjustments=adjustments, **kwargs)


def scheduled(*adjustments, **kwargs) -> OrgDate:
    return OrgDate(2024, 5, 10, kind=DateKind.SCHEDULED, active=True, adjustments=adjustments, **kwargs)


# ---------------------------------------------------------------------------
# Token Lookup
# ---------------------------------------------------------------------------


class TestAdjustmentLookup:
    """Tests for get_repeater and get_negative_adjustment."""

    def test_repeater_is_first_positive_token(self):
        date = OrgDate(2024, 1, 1, adjustments=("-2d", "+1w", "+2d"))

        assert date.get_repeater() == "+1w"

    def test_no_repeater(self):
        assert OrgDate(2024, 1, 1).get_repeater() is None
        assert OrgDate(2024, 1, 1, adjustments=("-2d",)).get_repeater() is None

    def test_prefixed_repeaters_are_not_plain_repeaters(self):
        date = OrgDate(2024, 1, 1, adjustments=(".+1w", "++1d"))

        assert date.get_repeater() is None

    def test_negative_adjustment_must_be_last(self):
        assert OrgDate(2024, 1, 1, adjustments=("+1w", "-2d")).get_negative_adjustment() == "-2d"
        assert OrgDate(2024, 1, 1, adjustments=("-2d", "+1w")).get_negative_adjustment() is None
        assert OrgDate(2024, 1, 1).get_negative_adjustment() is None


# ---------------------------------------------------------------------------
# Repeats On
# ---------------------------------------------------------------------------


class TestRepeatsOn:
    """Tests for stepping a repeater forward to a target day."""

    def test_weekly_repeater(self):
        start = OrgDate(2024, 1, 1, adjustments=("+1w",))

        assert start.repeats_on(OrgDate(2024, 1, 15))
        assert not start.repeats_on(OrgDate(2024, 1, 10))

    def test_same_day_repeats(self):
        start = OrgDate(2024, 1, 1, adjustments=("+1w",))

        assert start.repeats_on(OrgDate(2024, 1, 1, 18, 0))

    def test_target_before_start_does_not_repeat(self):
        start = OrgDate(2024, 1, 1, adjustments=("+1w",))

        assert not start.repeats_on(OrgDate(2023, 12, 25))

    def test_comparison_ignores_time_of_day(self):
        start = OrgDate(2024, 1, 1, 10, 0, adjustments=("+2d",))

        assert start.repeats_on(OrgDate(2024, 1, 5, 8, 0))
        assert not start.repeats_on(OrgDate(2024, 1, 4, 8, 0))

    def test_monthly_repeater_carries_day_overflow(self):
        start = OrgDate(2024, 1, 31, adjustments=("+1m",))

        assert start.repeats_on(OrgDate(2024, 3, 2))
        assert not start.repeats_on(OrgDate(2024, 2, 29))

    def test_without_repeater(self):
        assert not OrgDate(2024, 1, 1).repeats_on(OrgDate(2024, 1, 1))

    def test_zero_repeater_stops(self):
        start = OrgDate(2024, 1, 1, adjustments=("+0d",))

        assert start.repeats_on(OrgDate(2024, 1, 1))
        assert not start.repeats_on(OrgDate(2024, 1, 8))


# ---------------------------------------------------------------------------
# Adjusted Dates
# ---------------------------------------------------------------------------


class TestAdjustedDate:
    """Tests for the date a deadline or scheduled entry starts showing up."""

    def test_deadline_uses_default_warning_days(self):
        assert ymd(deadline().get_adjusted_date()) == (2024, 4, 26)

    def test_deadline_uses_configured_warning_days(self):
        settings = TimestampSettings(deadline_warning_days=5)

        assert ymd(deadline(settings=settings).get_adjusted_date()) == (2024, 5, 5)

    def test_deadline_uses_negative_adjustment(self):
        assert ymd(deadline("-3d").get_adjusted_date()) == (2024, 5, 7)
        assert ymd(deadline("+1w", "-2d").get_adjusted_date()) == (2024, 5, 8)

    def test_deadline_warning_respects_span(self):
        assert ymd(deadline("-1w").get_adjusted_date()) == (2024, 5, 3)
        assert ymd(deadline("-1m").get_adjusted_date()) == (2024, 4, 10)

    def test_oversized_warning_stops_at_first_day(self):
        assert ymd(deadline("-999999999d").get_adjusted_date()) == (1, 1, 1)

    def test_deadline_with_negative_not_last_uses_default(self):
        assert ymd(deadline("-2d", "+1w").get_adjusted_date()) == (2024, 4, 26)

    def test_scheduled_moves_forward_in_days(self):
        assert ymd(scheduled("-2d").get_adjusted_date()) == (2024, 5, 12)
        assert ymd(scheduled("-1w").get_adjusted_date()) == (2024, 5, 11)

    def test_scheduled_without_negative_is_unchanged(self):
        date = scheduled("+1w")

        assert date.get_adjusted_date() is date

    @pytest.mark.parametrize(
        "date",
        [
            OrgDate(2024, 5, 10, kind=DateKind.DEADLINE, active=False),
            OrgDate(2024, 5, 10, kind=DateKind.NONE, active=True),
            OrgDate(2024, 5, 10, kind=DateKind.CLOSED, active=True, adjustments=("-2d",)),
        ],
    )
    def test_other_dates_are_unchanged(self, date):
        assert date.get_adjusted_date() is date

    def test_adjusted_date_keeps_metadata(self):
        adjusted = deadline("+1w", "-2d").get_adjusted_date()

        assert adjusted.kind is DateKind.DEADLINE
        assert adjusted.adjustments == ("+1w", "-2d")
        assert adjusted.to_string() == "2024-05-08 +1w -2d"
