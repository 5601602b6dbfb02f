"""HTTP date parsing and formatting.

Two grammars live here:

- The strict HTTP-date formats (RFC 1123, RFC 850, asctime) used by
  ``Date``, ``Last-Modified`` and friends. Always serialized as RFC 1123
  in GMT.
- The loose cookie-date grammar (RFC 6265 §5.1.1) used by ``Set-Cookie``
  ``Expires``. Real servers emit every variation imaginable, so this one
  tokenizes by character class instead of matching a format string.

All timestamps are timezone-aware UTC ``datetime`` objects.
"""

import logging
import re
from dataclasses import dataclass
from datetime import UTC, datetime
from email.utils import format_datetime

from trill._internal.tokens import split_date_tokens, unquote
from trill.config import ParserConfig
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

logger = logging.getLogger("trill.dates")

RFC_1123 = "%a, %d %b %Y %H:%M:%S %Z"
RFC_850 = "%A, %d-%b-%y %H:%M:%S %Z"
ASCTIME = "%a %b %d %H:%M:%S %Y"

_FORMATS = (RFC_1123, RFC_850, ASCTIME)


def to_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def parse_http_date(text: str) -> datetime:
    """Parse an HTTP date in any of the three accepted formats.

    A single pair of surrounding single quotes is stripped first.

    Raises:
        InvalidDateFormat: If no format matches.
    """
    value = unquote(text.strip(), "'")
    for fmt in _FORMATS:
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            continue
        return parsed.replace(tzinfo=UTC)
    raise InvalidDateFormat(
        raw=text,
        detail=f"HTTP date must match one of {RFC_1123!r}, {RFC_850!r} or {ASCTIME!r}",
    )


def format_http_date(value: datetime) -> str:
    """Format *value* as an RFC 1123 date in GMT.

    Naive datetimes are taken to be UTC already.
    """
    return format_datetime(to_utc(value).replace(microsecond=0), usegmt=True)


# ---------------------------------------------------------------------------
# Cookie Expires
# ---------------------------------------------------------------------------

_TIME = re.compile(r"(\d{1,2}):(\d{1,2}):(\d{1,2})\D*", re.ASCII)
_DAY = re.compile(r"(\d{1,2})\D*", re.ASCII)
_MONTH = re.compile(r"(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec).*", re.IGNORECASE)
_YEAR = re.compile(r"(\d{2,4})\D*", re.ASCII)

_MONTHS = ("jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec")


@dataclass(slots=True)
class _ExpiresFields:
    """Slots filled while walking the date tokens. -1 means unset."""

    hour: int = -1
    minute: int = -1
    second: int = -1
    day: int = -1
    month: int = -1
    year: int = -1

    def feed(self, token: str) -> None:
        """Assign *token* to the first unset slot whose grammar it matches."""
        if self.hour == -1 and (m := _TIME.fullmatch(token)):
            self.hour, self.minute, self.second = (int(g) for g in m.groups())
        elif self.day == -1 and (m := _DAY.fullmatch(token)):
            self.day = int(m.group(1))
        elif self.month == -1 and (m := _MONTH.fullmatch(token)):
            self.month = _MONTHS.index(m.group(1).lower()) + 1
        elif self.year == -1 and (m := _YEAR.fullmatch(token)):
            self.year = int(m.group(1))


def _normalize_year(year: int) -> int:
    if 70 <= year <= 99:
        return year + 1900
    if 0 <= year <= 69:
        return year + 2000
    return year


def parse_cookie_expires(text: str) -> datetime:
    """Parse a cookie ``Expires`` date with the loose RFC 6265 algorithm.

    Two-digit years map 70-99 to 19xx and 0-69 to 20xx. Each field is
    validated on its own so the error names the broken part::

        >>> parse_cookie_expires("Wed, 21-Oct-15 07:28:00 GMT").year
        2015

    Raises:
        InvalidExpiresYear, InvalidExpiresMonth, InvalidExpiresDay,
        InvalidExpiresHour, InvalidExpiresMinute, InvalidExpiresSecond.
    """
    fields = _ExpiresFields()
    for token in split_date_tokens(text):
        fields.feed(token)

    year = _normalize_year(fields.year)
    if year < 1601:
        raise InvalidExpiresYear(raw=text, detail="Expires year must be at least 1601")
    if fields.month == -1:
        raise InvalidExpiresMonth(raw=text, detail="Expires month is missing")
    if not 1 <= fields.day <= 31:
        raise InvalidExpiresDay(raw=text, detail="Expires day must be between 1 and 31")
    if not 0 <= fields.hour <= 23:
        raise InvalidExpiresHour(raw=text, detail="Expires hour must be between 0 and 23")
    if not 0 <= fields.minute <= 59:
        raise InvalidExpiresMinute(raw=text, detail="Expires minute must be between 0 and 59")
    if not 0 <= fields.second <= 59:
        raise InvalidExpiresSecond(raw=text, detail="Expires second must be between 0 and 59")

    try:
        return datetime(
            year, fields.month, fields.day, fields.hour, fields.minute, fields.second, tzinfo=UTC
        )
    except ValueError as exc:
        # Day 1-31 passed, but not for this month (e.g. Feb 30).
        raise InvalidExpiresDay(raw=text, detail=str(exc)) from exc


# ---------------------------------------------------------------------------
# Header value
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class HttpDate:
    """An HTTP date header value (``Date``, ``Last-Modified``, ``Expires``).

    Compares at one-second resolution, which is all the wire format carries.
    """

    value: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", to_utc(self.value).replace(microsecond=0))

    @classmethod
    def parse(cls, text: str, *, config: ParserConfig | None = None) -> "HttpDate":
        if not text or not text.strip():
            raise EmptyHeader(raw=text, detail="HTTP date must not be empty")
        logger.debug("Parsing HTTP date: %r", text)
        return cls(parse_http_date(text))

    def canonical(self) -> str:
        return format_http_date(self.value)

    def matches(self, actual: str, *, config: ParserConfig | None = None) -> bool:
        return HttpDate.parse(actual, config=config) == self

    def __str__(self) -> str:
        return self.canonical()
