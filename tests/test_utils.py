import math

import pytest

from hearlingo.utils import (
    format_mmss_to_seconds,
    format_seconds_to_mmss,
    parse_time_input,
    strip_markup,
)


def test_mmss_round_trip():
    for seconds in range(0, 6000):
        assert format_mmss_to_seconds(format_seconds_to_mmss(seconds)) == seconds


def test_format_seconds_to_mmss():
    assert format_seconds_to_mmss(0) == "00:00"
    assert format_seconds_to_mmss(59.99) == "00:59"
    assert format_seconds_to_mmss(90.5) == "01:30"
    assert format_seconds_to_mmss(5999) == "99:59"
    assert format_seconds_to_mmss(7200) == "120:00"


def test_format_seconds_to_mmss_non_finite():
    assert format_seconds_to_mmss(math.inf) is None
    assert format_seconds_to_mmss(math.nan, default="--:--") == "--:--"
    assert format_seconds_to_mmss(None, default="") == ""


@pytest.mark.parametrize("text, expected", [
    ("42", 42.0),
    ("7.5", 7.5),
    ("00:10", 10.0),
    ("1:05", 65.0),
    ("10:5", 605.0),
    ("2:30.5", 150.5),
    (" 01:00 ", 60.0),
    ("120:00", 7200.0),
])
def test_parse_time_input_valid(text, expected):
    assert parse_time_input(text) == expected


@pytest.mark.parametrize("text", [None, "", "   ", "abc", "1:60", "1:2:3", "-5", ":30", "5:", "1,5"])
def test_parse_time_input_invalid(text):
    assert parse_time_input(text) is None


def test_format_mmss_to_seconds_rejects_garbage():
    with pytest.raises(ValueError):
        format_mmss_to_seconds("soon")


def test_strip_markup():
    assert strip_markup("it&#39;s <font color=\"#fff\">here</font>") == "it's here"
    assert strip_markup(None) == ""
    assert strip_markup("  plain  ") == "plain"
