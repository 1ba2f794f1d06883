import datetime

import pytest
import pytz

from sdr.metadata.util.datetime_helpers import (
    format_utc,
    from_timestamp,
    parse_utc,
    to_utc,
)


class TestToUTC:
    def test_none(self):
        assert to_utc(None) is None

    def test_naive(self):
        dt = datetime.datetime(2021, 5, 1, 10, 0)
        assert to_utc(dt) == datetime.datetime(2021, 5, 1, 10, 0, tzinfo=pytz.UTC)

    def test_offset(self):
        pacific = pytz.timezone("US/Pacific")
        dt = pacific.localize(datetime.datetime(2021, 5, 1, 3, 0))
        converted = to_utc(dt)
        assert converted.tzinfo == pytz.UTC
        assert converted.hour == 10

    def test_already_utc(self):
        dt = datetime.datetime(2021, 5, 1, tzinfo=pytz.UTC)
        assert to_utc(dt) is dt


def test_from_timestamp():
    assert from_timestamp(0) == datetime.datetime(1970, 1, 1, tzinfo=pytz.UTC)


class TestParseUTC:
    @pytest.mark.parametrize(
        "value,expected",
        [
            pytest.param(
                "2021-05-01T10:00:00Z",
                datetime.datetime(2021, 5, 1, 10, tzinfo=pytz.UTC),
                id="zulu",
            ),
            pytest.param(
                "2029-02-28T00:00:00-08:00",
                datetime.datetime(2029, 2, 28, 8, tzinfo=pytz.UTC),
                id="offset",
            ),
            pytest.param(
                " 2021-05-01 ",
                datetime.datetime(2021, 5, 1, tzinfo=pytz.UTC),
                id="date-only",
            ),
        ],
    )
    def test_parse(self, value: str, expected: datetime.datetime):
        assert parse_utc(value) == expected

    def test_invalid(self):
        with pytest.raises(ValueError, match="is not an ISO 8601 timestamp"):
            parse_utc("next tuesday")


def test_format_utc():
    pacific = pytz.timezone("US/Pacific")
    dt = pacific.localize(datetime.datetime(2021, 5, 1, 3, 0))
    assert format_utc(dt) == "2021-05-01T10:00:00Z"
