from datetime import timedelta

import pytest

from breaktimer.durations import (
    DurationParseError,
    clamped_difference,
    format_duration,
    parse_duration,
)


class TestFormatDuration:
    @pytest.mark.parametrize(
        "seconds, expected",
        [
            (0, "0 minutes"),
            (59, "0 minutes"),
            (60, "1 minute"),
            (120, "2 minutes"),
            (3600, "1 hour"),
            (3 * 3600, "3 hours"),
            (3 * 3600 + 120, "3:02"),
            (4 * 3600 + 60, "4:01"),
            (10 * 3600 + 45 * 60 + 59, "10:45"),
        ],
    )
    def test_known_values(self, seconds, expected):
        assert format_duration(timedelta(seconds=seconds)) == expected

    def test_negative_clamps_to_zero(self):
        assert format_duration(timedelta(seconds=-30)) == "0 minutes"


class TestParseDuration:
    @pytest.mark.parametrize(
        "text, seconds",
        [
            ("1:00", 3600),
            ("1 hour", 3600),
            ("2 hours", 7200),
            ("2h", 7200),
            ("2 minutes", 120),
            ("1 minute", 60),
            ("5m", 300),
            ("4:01", 4 * 3600 + 60),
            (" 1 : 30 ", 5400),
            ("1.5h", 5400),
            ("0:0.5", 30),
        ],
    )
    def test_accepted_forms(self, text, seconds):
        assert parse_duration(text) == timedelta(seconds=seconds)

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "soon",
            "2 days",
            "abc:10",
            "1:xx",
            "h",
            "five minutes",
            "-1h",
            "nan h",
            "1e300h",
            "1e307h",
            "1e12 hours",
        ],
    )
    def test_rejected_forms(self, text):
        with pytest.raises(DurationParseError):
            parse_duration(text)

    def test_non_string_rejected(self):
        with pytest.raises(DurationParseError):
            parse_duration(60)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_duration("later")


@pytest.mark.parametrize("seconds", [0, 59, 61, 3599, 3600, 3661, 8 * 3600 + 1234])
def test_reformatting_parsed_value_is_stable(seconds):
    rendered = format_duration(timedelta(seconds=seconds))
    assert format_duration(parse_duration(rendered)) == rendered


def test_clamped_difference_never_negative():
    assert clamped_difference(10.0, 25.0) == timedelta(0)
    assert clamped_difference(25.0, 10.0) == timedelta(seconds=15)
