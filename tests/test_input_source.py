from datetime import timedelta

import pytest

from cliframe.input_source import (
    InputSource,
    format_duration,
    parse_duration,
)


def test_parse_minute():
    assert parse_duration("1m") == timedelta(minutes=1)


def test_parse_compound_equals_sum_of_parts():
    assert parse_duration("1h30m") == parse_duration("1h") + parse_duration("30m")


def test_parse_fraction_matches_smaller_unit():
    assert parse_duration("1.5s") == parse_duration("1500ms")


def test_parse_sign():
    assert parse_duration("-2s") == -parse_duration("2s")
    assert parse_duration("+2s") == parse_duration("2s")


def test_parse_bare_zero():
    assert parse_duration("0") == timedelta(0)


@pytest.mark.parametrize("text", ["", "abc", "5", "1x", ".s", "-"])
def test_parse_rejects_malformed(text):
    with pytest.raises(ValueError):
        parse_duration(text)


def test_format_fifteen_seconds():
    assert format_duration(timedelta(seconds=15)) == "15s"


def test_format_minute_keeps_seconds():
    assert format_duration(timedelta(minutes=1)) == "1m0s"


def test_format_zero():
    assert format_duration(timedelta(0)) == "0s"


@pytest.mark.parametrize(
    "value",
    [
        timedelta(seconds=30),
        timedelta(hours=2, minutes=3, seconds=4),
        timedelta(milliseconds=250),
        timedelta(microseconds=7),
        timedelta(seconds=1, milliseconds=500),
        -timedelta(minutes=5),
        timedelta(hours=1),
    ],
)
def test_format_parse_round_trip(value):
    assert parse_duration(format_duration(value)) == value


def test_input_source_is_abstract():
    with pytest.raises(TypeError):
        InputSource()