"""Tests for trill.dates — HTTP dates and loose cookie Expires dates."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from trill.dates import HttpDate, format_http_date, parse_cookie_expires, parse_http_date
from trill.errors import (
    EmptyHeader,
    InvalidDateFormat,
    InvalidExpiresDay,
    InvalidExpiresHour,
    InvalidExpiresMinute,
    InvalidExpiresMonth,
    InvalidExpiresSecond,
    InvalidExpiresYear,
)

EXPECTED = datetime(1994, 11, 6, 8, 49, 37, tzinfo=UTC)


class TestParseHttpDate:
    @pytest.mark.parametrize(
        "text",
        [
            "Sun, 06 Nov 1994 08:49:37 GMT",
            "Sunday, 06-Nov-94 08:49:37 GMT",
            "Sun Nov  6 08:49:37 1994",
        ],
    )
    def test_three_formats(self, text: str) -> None:
        assert parse_http_date(text) == EXPECTED

    def test_strips_single_quotes(self) -> None:
        assert parse_http_date("'Sun, 06 Nov 1994 08:49:37 GMT'") == EXPECTED

    def test_result_is_utc(self) -> None:
        assert parse_http_date("Sun, 06 Nov 1994 08:49:37 GMT").tzinfo is UTC

    def test_invalid_lists_patterns(self) -> None:
        with pytest.raises(InvalidDateFormat) as exc_info:
            parse_http_date("2015-10-21T07:28:00Z")
        assert exc_info.value.raw == "2015-10-21T07:28:00Z"
        assert "%a, %d %b %Y %H:%M:%S %Z" in exc_info.value.detail
        assert "%A, %d-%b-%y %H:%M:%S %Z" in exc_info.value.detail
        assert "%a %b %d %H:%M:%S %Y" in exc_info.value.detail


class TestFormatHttpDate:
    def test_rfc_1123_gmt(self) -> None:
        assert format_http_date(EXPECTED) == "Sun, 06 Nov 1994 08:49:37 GMT"

    def test_naive_is_utc(self) -> None:
        assert format_http_date(datetime(1994, 11, 6, 8, 49, 37)) == "Sun, 06 Nov 1994 08:49:37 GMT"

    def test_converts_to_gmt(self) -> None:
        paris = timezone(timedelta(hours=1))
        value = datetime(1994, 11, 6, 9, 49, 37, tzinfo=paris)
        assert format_http_date(value) == "Sun, 06 Nov 1994 08:49:37 GMT"


class TestParseCookieExpires:
    def test_rfc_1123(self) -> None:
        assert parse_cookie_expires("Wed, 21 Oct 2015 07:28:00 GMT") == datetime(
            2015, 10, 21, 7, 28, 0, tzinfo=UTC
        )

    def test_rfc_850(self) -> None:
        assert parse_cookie_expires("Wednesday, 21-Oct-15 07:28:00 GMT") == datetime(
            2015, 10, 21, 7, 28, 0, tzinfo=UTC
        )

    def test_loose_order(self) -> None:
        assert parse_cookie_expires("2015 oct 21 07:28:00") == datetime(
            2015, 10, 21, 7, 28, 0, tzinfo=UTC
        )

    def test_month_prefix(self) -> None:
        assert parse_cookie_expires("21 October 2015 07:28:00").month == 10

    def test_two_digit_year_70_is_1970(self) -> None:
        assert parse_cookie_expires("Thu, 01-Jan-70 00:00:00 GMT").year == 1970

    def test_two_digit_year_69_is_2069(self) -> None:
        assert parse_cookie_expires("Tue, 01-Jan-69 00:00:00 GMT").year == 2069

    def test_two_digit_year_0_is_2000(self) -> None:
        assert parse_cookie_expires("01-Jan-00 00:00:00").year == 2000

    def test_year_before_1601(self) -> None:
        with pytest.raises(InvalidExpiresYear):
            parse_cookie_expires("01 Jan 1600 00:00:00")

    def test_year_1601_accepted(self) -> None:
        assert parse_cookie_expires("01 Jan 1601 00:00:00").year == 1601

    def test_missing_year(self) -> None:
        with pytest.raises(InvalidExpiresYear):
            parse_cookie_expires("Wed, 21 Oct 07:28:00 GMT")

    def test_missing_month(self) -> None:
        with pytest.raises(InvalidExpiresMonth):
            parse_cookie_expires("Wed, 21 2015 07:28:00 GMT")

    def test_day_out_of_range(self) -> None:
        with pytest.raises(InvalidExpiresDay):
            parse_cookie_expires("Wed, 32 Oct 2015 07:28:00 GMT")

    def test_impossible_calendar_day(self) -> None:
        with pytest.raises(InvalidExpiresDay):
            parse_cookie_expires("30 Feb 2015 07:28:00")

    def test_hour_out_of_range(self) -> None:
        with pytest.raises(InvalidExpiresHour):
            parse_cookie_expires("Wed, 21 Oct 2015 24:28:00 GMT")

    def test_missing_time(self) -> None:
        with pytest.raises(InvalidExpiresHour):
            parse_cookie_expires("Wed, 21 Oct 2015 GMT")

    def test_minute_out_of_range(self) -> None:
        with pytest.raises(InvalidExpiresMinute):
            parse_cookie_expires("Wed, 21 Oct 2015 07:60:00 GMT")

    def test_second_out_of_range(self) -> None:
        with pytest.raises(InvalidExpiresSecond):
            parse_cookie_expires("Wed, 21 Oct 2015 07:28:60 GMT")

    def test_error_carries_raw(self) -> None:
        with pytest.raises(InvalidExpiresSecond) as exc_info:
            parse_cookie_expires("Wed, 21 Oct 2015 07:28:60 GMT")
        assert exc_info.value.raw == "Wed, 21 Oct 2015 07:28:60 GMT"


class TestHttpDate:
    def test_canonical(self) -> None:
        assert HttpDate(EXPECTED).canonical() == "Sun, 06 Nov 1994 08:49:37 GMT"

    def test_round_trip(self) -> None:
        value = HttpDate(EXPECTED)
        assert HttpDate.parse(value.canonical()) == value

    def test_drops_microseconds(self) -> None:
        assert HttpDate(EXPECTED.replace(microsecond=5)) == HttpDate(EXPECTED)

    def test_matches_any_format(self) -> None:
        value = HttpDate(EXPECTED)
        assert value.matches("Sunday, 06-Nov-94 08:49:37 GMT")
        assert value.matches("Sun Nov  6 08:49:37 1994")
        assert not value.matches("Sun, 06 Nov 1994 08:49:38 GMT")

    def test_empty(self) -> None:
        with pytest.raises(EmptyHeader):
            HttpDate.parse("  ")
