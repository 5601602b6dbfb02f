"""Trill exception hierarchy.

Shared by every codec so callers catch the same types whatever header
they are parsing. Two branches keep the failure sides apart:

- ``HeaderParseError`` — the wire text under test is malformed.
- ``HeaderBuildError`` — the expected value handed to a builder or
  constructor is malformed.

Each error carries the offending raw substring in ``raw``.
"""


class TrillError(Exception):
    """Base for all trill-specific errors.

    ``raw`` and ``detail`` are read-only once raised.
    """

    def __init__(self, raw: str = "", detail: str = "") -> None:
        super().__init__(raw, detail)
        self._raw = raw
        self._detail = detail

    @property
    def raw(self) -> str:
        return self._raw

    @property
    def detail(self) -> str:
        return self._detail

    def __str__(self) -> str:
        if self._detail:
            return f"{self._detail}: {self._raw!r}"
        return repr(self._raw)


class HeaderParseError(TrillError):
    """A wire value could not be parsed.

    Raised at the first malformed token. Parsers never return a partial
    value, so a ``matches()`` call either answers or raises.
    """


class HeaderBuildError(TrillError):
    """An expected value was built from invalid input."""


# ---------------------------------------------------------------------------
# Parse side
# ---------------------------------------------------------------------------


class EmptyHeader(HeaderParseError):
    """The header value is empty or blank."""


class MissingCookieName(HeaderParseError):
    """``Set-Cookie`` name-value pair has an empty name."""


class MissingCookieValue(HeaderParseError):
    """``Set-Cookie`` name-value pair has no ``=``."""


class InvalidMaxAge(HeaderParseError):
    """``Max-Age`` is missing or not an integer."""


class UnknownSameSite(HeaderParseError):
    """``SameSite`` is not one of ``Lax``, ``Strict``, ``None``."""


class UnknownCookieAttribute(HeaderParseError):
    """Unrecognized cookie attribute (strict mode only)."""


class InvalidExpiresYear(HeaderParseError):
    """Cookie ``Expires`` year is missing or before 1601."""


class InvalidExpiresMonth(HeaderParseError):
    """Cookie ``Expires`` has no recognizable month."""


class InvalidExpiresDay(HeaderParseError):
    """Cookie ``Expires`` day of month is missing or out of range."""


class InvalidExpiresHour(HeaderParseError):
    """Cookie ``Expires`` hour is missing or out of range."""


class InvalidExpiresMinute(HeaderParseError):
    """Cookie ``Expires`` minute is out of range."""


class InvalidExpiresSecond(HeaderParseError):
    """Cookie ``Expires`` second is out of range."""


class UnknownDirective(HeaderParseError):
    """Directive name is not part of the header's grammar."""


class EmptyDirectiveName(HeaderParseError):
    """A directive segment has no name."""


class DuplicateDirective(HeaderParseError):
    """A directive appears twice (strict mode only)."""


class InvalidSourceSyntax(HeaderParseError):
    """A CSP token matches none of the source grammars."""


class InvalidDateFormat(HeaderParseError):
    """HTTP date matches none of the accepted formats."""


class InvalidCacheControlInteger(HeaderParseError):
    """``max-age`` or ``s-maxage`` value is not an integer."""


class InvalidHeaderValue(HeaderParseError):
    """The value is none of the forms a fixed-vocabulary header allows."""


# ---------------------------------------------------------------------------
# Build side
# ---------------------------------------------------------------------------


class InvalidFrameAncestorSource(HeaderBuildError):
    """``frame-ancestors`` only accepts host and scheme sources."""


class InvalidSourceValue(HeaderBuildError):
    """A CSP source factory or builder received an invalid value."""


class InvalidCookieName(HeaderBuildError):
    """A cookie name is empty, padded, or holds a separator (``=``, ``;``)."""


class InvalidCookieValue(HeaderBuildError):
    """A cookie value, domain or path is padded or holds ``;``."""


class InvalidOrigin(HeaderBuildError):
    """An ``ALLOW-FROM`` origin is not an absolute ``scheme://host`` URI."""
