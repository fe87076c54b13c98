"""Unit tests for scanning text lines for timestamps."""

from orgtime.timestamps import DateKind, SourceRange, from_match, scan_line, scan_lines


class TestScanLine:
    """Tests for finding every timestamp on a single line."""

    def test_active_and_inactive(self):
        line = "Meeting <2024-03-15 Fri 10:00> and [2024-03-16 Sat]"
        dates = scan_line(line, 4)

        assert len(dates) == 2
        first, second = dates
        assert first.active is True
        assert second.active is False
        assert (first.day, first.hour, first.minute) == (15, 10, 0)
        assert second.date_only is True

    def test_source_ranges_slice_the_match(self):
        line = "Meeting <2024-03-15 Fri 10:00> and [2024-03-16 Sat]"
        first, second = scan_line(line, 4)

        assert first.source_range == SourceRange(start_line=4, end_line=4, start_col=8, end_col=30)
        assert line[first.source_range.start_col:first.source_range.end_col] == "<2024-03-15 Fri 10:00>"
        assert line[second.source_range.start_col:second.source_range.end_col] == "[2024-03-16 Sat]"

    def test_identical_timestamps_get_distinct_positions(self):
        line = "<2024-03-15> <2024-03-15> <2024-03-15>"
        dates = scan_line(line, 1)

        assert [date.source_range.start_col for date in dates] == [0, 13, 26]
        assert [date.source_range.end_col for date in dates] == [12, 25, 38]

    def test_no_timestamps(self):
        assert scan_line("Nothing to see here", 1) == []
        assert scan_line("", 1) == []

    def test_body_must_start_with_date(self):
        assert scan_line("< 2024-03-15> [Fri 2024-03-15]", 1) == []

    def test_adjustments_and_trailing_space(self):
        (date,) = scan_line("DEADLINE: <2024-05-10 Fri +1w -3d >", 2)

        assert date.adjustments == ("+1w", "-3d")
        assert date.to_marked_string() == "<2024-05-10 Fri +1w -3d>"

    def test_time_range_start(self):
        line = "Call <2024-03-15 Fri 10:00-11:30>"
        (date,) = scan_line(line, 1)

        assert date.date_only is False
        assert (date.hour, date.minute) == (10, 0)
        assert line[date.source_range.start_col:date.source_range.end_col] == "<2024-03-15 Fri 10:00-11:30>"

    def test_kind_applies_to_every_match(self):
        dates = scan_line("<2024-05-10> <2024-05-11>", 1, kind=DateKind.DEADLINE)

        assert all(date.is_deadline() for date in dates)

    def test_settings_and_clock_passed_through(self, fixed_clock, sunday_week_settings):
        (date,) = scan_line("<2024-03-17>", 1, settings=sunday_week_settings, clock=fixed_clock)

        assert date.settings is sunday_week_settings
        assert date.clock is fixed_clock
        assert date.humanize() == "In 2 d."


class TestFromMatch:
    """Tests for building a value from one match."""

    def test_search_starts_after_previous_match(self):
        line = "[2024-01-01] then [2024-01-01]"
        first = from_match(line, 7, "[", "2024-01-01", "]")
        second = from_match(line, 7, "[", "2024-01-01", "]", first)

        assert first.source_range.start_col == 0
        assert second.source_range.start_col == 18
        assert second.source_range.end_col == len(line)
        assert second.active is False

    def test_body_is_stripped(self):
        date = from_match("<2024-01-01 Mon >", 1, "<", "2024-01-01 Mon ", ">")

        assert date.weekday_name == "Mon"
        assert date.source_range.end_col == 17


class TestScanLines:
    """Tests for scanning consecutive lines."""

    def test_yields_line_numbers(self):
        lines = ["a <2024-01-01>\n", "none\n", "[2024-02-02] [2024-02-03]\r\n"]
        found = list(scan_lines(lines))

        assert [number for number, _ in found] == [1, 3, 3]
        assert [date.day for _, date in found] == [1, 2, 3]
        assert found[2][1].source_range.end_col == len("[2024-02-02] [2024-02-03]")

    def test_custom_start(self):
        found = list(scan_lines(["<2024-01-01>"], start=10))

        assert found[0][0] == 10
        assert found[0][1].source_range.start_line == 10
