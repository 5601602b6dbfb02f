"""Tests for trill.errors — exception hierarchy and error messages."""

import contextlib
import logging
from collections.abc import Iterator

import pytest

from trill.errors import (
    DuplicateDirective,
    EmptyDirectiveName,
    EmptyHeader,
    HeaderBuildError,
    HeaderParseError,
    InvalidCacheControlInteger,
    InvalidCookieName,
    InvalidCookieValue,
    InvalidDateFormat,
    InvalidExpiresDay,
    InvalidExpiresHour,
    InvalidExpiresMinute,
    InvalidExpiresMonth,
    InvalidExpiresSecond,
    InvalidExpiresYear,
    InvalidFrameAncestorSource,
    InvalidHeaderValue,
    InvalidMaxAge,
    InvalidOrigin,
    InvalidSourceSyntax,
    InvalidSourceValue,
    MissingCookieName,
    MissingCookieValue,
    TrillError,
    UnknownCookieAttribute,
    UnknownDirective,
    UnknownSameSite,
)

PARSE_ERRORS = [
    EmptyHeader,
    MissingCookieName,
    MissingCookieValue,
    InvalidMaxAge,
    UnknownSameSite,
    UnknownCookieAttribute,
    InvalidExpiresYear,
    InvalidExpiresMonth,
    InvalidExpiresDay,
    InvalidExpiresHour,
    InvalidExpiresMinute,
    InvalidExpiresSecond,
    UnknownDirective,
    EmptyDirectiveName,
    DuplicateDirective,
    InvalidSourceSyntax,
    InvalidDateFormat,
    InvalidCacheControlInteger,
    InvalidHeaderValue,
]

BUILD_ERRORS = [
    InvalidFrameAncestorSource,
    InvalidSourceValue,
    InvalidCookieName,
    InvalidCookieValue,
    InvalidOrigin,
]


class TestHierarchy:
    def test_branches_are_trill_errors(self) -> None:
        assert issubclass(HeaderParseError, TrillError)
        assert issubclass(HeaderBuildError, TrillError)

    @pytest.mark.parametrize("error", PARSE_ERRORS)
    def test_parse_side(self, error: type) -> None:
        assert issubclass(error, HeaderParseError)
        assert not issubclass(error, HeaderBuildError)

    @pytest.mark.parametrize("error", BUILD_ERRORS)
    def test_build_side(self, error: type) -> None:
        assert issubclass(error, HeaderBuildError)
        assert not issubclass(error, HeaderParseError)


class TestHeaderParseError:
    def test_raw_and_detail(self) -> None:
        err = UnknownDirective(raw="foo", detail="Unknown directive")
        assert err.raw == "foo"
        assert err.detail == "Unknown directive"

    def test_str_with_detail(self) -> None:
        err = UnknownDirective(raw="foo", detail="Unknown directive")
        assert str(err) == "Unknown directive: 'foo'"

    def test_str_without_detail(self) -> None:
        assert str(EmptyHeader(raw="")) == "''"

    def test_frozen(self) -> None:
        err = HeaderParseError(raw="x")
        with pytest.raises(AttributeError):
            err.raw = "y"  # type: ignore[misc]

    def test_raisable(self) -> None:
        with pytest.raises(HeaderParseError) as exc_info:
            raise InvalidMaxAge(raw="abc", detail="Max-Age is not a valid number")
        assert exc_info.value.raw == "abc"


class TestHeaderBuildError:
    def test_str(self) -> None:
        err = InvalidFrameAncestorSource(raw="'self'", detail="host and scheme only")
        assert str(err) == "host and scheme only: \"'self'\""


@contextlib.contextmanager
def _scope() -> Iterator[None]:
    yield


class TestRaisedThroughContextManagers:
    def test_generator_context_manager(self) -> None:
        from trill.csp import parse_csp

        with pytest.raises(UnknownDirective) as exc_info:
            with _scope():
                parse_csp("default-src 'none'; foo http://domain.com")
        assert exc_info.value.raw == "foo"
        assert exc_info.value.__traceback__ is not None

    def test_caplog_at_level(self, caplog: pytest.LogCaptureFixture) -> None:
        from trill.cookies import parse_set_cookie

        with pytest.raises(InvalidMaxAge):
            with caplog.at_level(logging.DEBUG, logger="trill.cookies"):
                parse_set_cookie("id=1; Max-Age=soon")
        assert "Parsing Set-Cookie value" in caplog.text

    def test_build_error_through_context_manager(self) -> None:
        with pytest.raises(InvalidSourceValue):
            with _scope():
                raise InvalidSourceValue(raw="x", detail="bad")

    def test_traceback_assignable(self) -> None:
        err = EmptyHeader(raw="")
        err.__traceback__ = None
        err.__notes__ = ["context"]
        assert err.__notes__ == ["context"]
