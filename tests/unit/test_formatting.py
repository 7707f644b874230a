"""Unit tests for timestamp display formatting."""

from datetime import datetime, timedelta, timezone

import pytest

from suggestion_board.utils.formatting import format_locale_datetime, format_timestamp


class TestFormatTimestamp:
    """Test cases for format_timestamp."""

    def test_after_midnight(self):
        assert format_timestamp("2024-01-05T00:30:00") == "2024-01-05 12:30 am"

    def test_afternoon(self):
        assert format_timestamp("2024-01-05T13:05:00") == "2024-01-05 1:05 pm"

    @pytest.mark.parametrize("value, expected", [
        (datetime(2024, 1, 5, 12, 0), "2024-01-05 12:00 pm"),
        (datetime(2024, 1, 5, 11, 59), "2024-01-05 11:59 am"),
        (datetime(2024, 12, 31, 23, 9), "2024-12-31 11:09 pm"),
        (datetime(2024, 3, 9, 0, 0), "2024-03-09 12:00 am"),
    ])
    def test_datetime_input(self, value, expected):
        assert format_timestamp(value) == expected

    def test_every_hour_is_in_range(self):
        """The hour shown is always 1 to 12 and the suffix matches the half of day."""
        for hour in range(24):
            text = format_timestamp(datetime(2024, 1, 5, hour, 7))
            clock, suffix = text.split(" ")[1:]
            shown_hour = int(clock.split(":")[0])
            assert 1 <= shown_hour <= 12
            assert suffix == ("pm" if hour >= 12 else "am")

    def test_trailing_z_is_utc(self):
        assert format_timestamp("2024-01-05T13:05:00Z") == "2024-01-05 1:05 pm"

    def test_aware_value_converted_to_display_timezone(self):
        value = datetime(2024, 1, 5, 13, 5, tzinfo=timezone.utc)
        plus_two = timezone(timedelta(hours=2))
        assert format_timestamp(value, plus_two) == "2024-01-05 3:05 pm"

    def test_naive_value_ignores_display_timezone(self):
        plus_two = timezone(timedelta(hours=2))
        assert format_timestamp(datetime(2024, 1, 5, 13, 5), plus_two) == "2024-01-05 1:05 pm"

    def test_rejects_other_types(self):
        with pytest.raises(TypeError):
            format_timestamp(1704460800)


class TestFormatLocaleDatetime:
    """Test cases for the US short form."""

    def test_morning(self):
        assert format_locale_datetime("2024-01-05T00:30:00") == "01/05/2024 12:30 AM"

    def test_afternoon(self):
        assert format_locale_datetime(datetime(2024, 11, 5, 13, 5)) == "11/05/2024 01:05 PM"
