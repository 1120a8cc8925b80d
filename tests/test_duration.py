import pytest

from trending.domain.content_type import ContentType
from trending.domain.duration import classify_content_type, format_duration, is_short_duration, parse_duration


@pytest.mark.parametrize(
    "value, expected",
    [
        ("PT59S", 59),
        ("PT1M2S", 62),
        ("PT1H30M", 5400),
        ("PT1H1M1S", 3661),
        ("P1D", 0),
        ("", 0),
        (None, 0),
    ],
)
def test_parse_duration(value, expected):
    assert parse_duration(value) == expected


def test_short_boundary():
    assert is_short_duration("PT60S") is True
    assert is_short_duration("PT1M") is True
    assert is_short_duration("PT61S") is False


def test_zero_length_is_not_short():
    assert is_short_duration("PT0S") is False
    assert is_short_duration(None) is False


def test_classify_content_type():
    assert classify_content_type("PT45S") is ContentType.SHORT
    assert classify_content_type("PT4M13S") is ContentType.LONG
    assert classify_content_type(None) is ContentType.LONG


def test_format_duration():
    assert format_duration(59) == "0:59"
    assert format_duration(125) == "2:05"
    assert format_duration(3661) == "1:01:01"
    assert format_duration(-3) == "0:00"
