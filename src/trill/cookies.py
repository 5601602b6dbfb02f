"""``Set-Cookie`` parsing and serialization.

Consolidates the read side (``parse_set_cookie``, following RFC 6265
§5.2) and the write side (``Cookie.canonical``) in one module.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from trill._internal.tokens import parse_integer, split_first
from trill.config import ParserConfig, resolve
from trill.dates import format_http_date, parse_cookie_expires, to_utc
from trill.errors import (
    EmptyHeader,
    InvalidCookieName,
    InvalidCookieValue,
    InvalidMaxAge,
    MissingCookieName,
    MissingCookieValue,
    UnknownCookieAttribute,
    UnknownSameSite,
)

logger = logging.getLogger("trill.cookies")

_NAME_SEPARATORS = frozenset("=;")


class SameSite(Enum):
    """``SameSite`` attribute. Browsers treat a missing attribute as ``Lax``."""

    LAX = "Lax"
    STRICT = "Strict"
    NONE = "None"

    @classmethod
    def parse(cls, value: str) -> "SameSite":
        """Look up a member by wire value, case-insensitively."""
        wanted = value.strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        raise UnknownSameSite(raw=value, detail="Unknown SameSite value")


@dataclass(frozen=True, slots=True)
class Cookie:
    """A cookie as set by a ``Set-Cookie`` response header.

    ``max_age=0`` (delete now) and ``max_age=None`` (session cookie) are
    different values. ``expires`` is stored in UTC at one-second precision.
    """

    name: str
    value: str = ""
    domain: str | None = None
    path: str | None = None
    secure: bool = False
    http_only: bool = False
    same_site: SameSite = SameSite.LAX
    max_age: int | None = None
    expires: datetime | None = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise InvalidCookieName(raw=self.name, detail="Cookie name must not be empty")
        if self.name != self.name.strip() or _NAME_SEPARATORS.intersection(self.name):
            raise InvalidCookieName(
                raw=self.name, detail="Cookie name must not be padded or hold '=' or ';'"
            )
        if self.value != self.value.strip() or ";" in self.value:
            raise InvalidCookieValue(
                raw=self.value, detail="Cookie value must not be padded or hold ';'"
            )
        for attr in (self.domain, self.path):
            if attr is not None and (attr != attr.strip() or ";" in attr):
                raise InvalidCookieValue(
                    raw=attr, detail="Cookie domain and path must not be padded or hold ';'"
                )
        if self.expires is not None:
            object.__setattr__(self, "expires", to_utc(self.expires).replace(microsecond=0))

    @classmethod
    def parse(cls, text: str, *, config: ParserConfig | None = None) -> "Cookie":
        return parse_set_cookie(text, config=config)

    def canonical(self) -> str:
        """Serialize to a ``Set-Cookie`` header value string."""
        parts = [f"{self.name}={self.value}"]
        if self.domain is not None:
            parts.append(f"Domain={self.domain}")
        if self.path is not None:
            parts.append(f"Path={self.path}")
        if self.secure:
            parts.append("secure")
        if self.http_only:
            parts.append("HttpOnly")
        if self.max_age is not None:
            parts.append(f"max-age={self.max_age}")
        if self.same_site is not SameSite.LAX:
            parts.append(f"SameSite={self.same_site.value}")
        if self.expires is not None:
            parts.append(f"expires={format_http_date(self.expires)}")
        return "; ".join(parts)

    def matches(self, actual: str, *, config: ParserConfig | None = None) -> bool:
        return parse_set_cookie(actual, config=config) == self

    def __str__(self) -> str:
        return self.canonical()


def _parse_max_age(value: str) -> int:
    try:
        return parse_integer(value)
    except ValueError:
        raise InvalidMaxAge(raw=value, detail="Max-Age is not a valid number") from None


def parse_set_cookie(text: str, *, config: ParserConfig | None = None) -> Cookie:
    """Parse a ``Set-Cookie`` header value into a ``Cookie``.

    Attribute names are case-insensitive. Unknown attributes are skipped
    unless ``config.strict_cookie_attributes`` is set.

    Raises:
        EmptyHeader: If *text* is blank.
        MissingCookieValue: If the name-value pair has no ``=``.
        MissingCookieName: If the name is empty.
        InvalidMaxAge, UnknownSameSite, InvalidExpires*: On a bad attribute.
    """
    if not text or not text.strip():
        raise EmptyHeader(raw=text, detail="Set-Cookie header must not be empty")
    cfg = resolve(config)
    logger.debug("Parsing Set-Cookie value: %r", text)

    pair, unparsed, _ = split_first(text.strip(), ";")
    name, value, has_equals = split_first(pair, "=")
    if not has_equals:
        raise MissingCookieValue(raw=pair, detail="Set-Cookie header must have a value")
    if not name:
        raise MissingCookieName(raw=pair, detail="Set-Cookie header must have a name")

    attrs: dict[str, object] = {}
    for field in unparsed.split(";"):
        attr_name, attr_value, _ = split_first(field, "=")
        if not attr_name:
            continue
        key = attr_name.lower()
        if key == "domain":
            attrs["domain"] = attr_value
        elif key == "path":
            attrs["path"] = attr_value
        elif key == "secure":
            attrs["secure"] = True
        elif key == "httponly":
            attrs["http_only"] = True
        elif key == "max-age":
            attrs["max_age"] = _parse_max_age(attr_value)
        elif key == "expires":
            attrs["expires"] = parse_cookie_expires(attr_value)
        elif key == "samesite":
            attrs["same_site"] = SameSite.parse(attr_value)
        elif cfg.strict_cookie_attributes:
            raise UnknownCookieAttribute(raw=field.strip(), detail="Unknown cookie attribute")
        else:
            logger.debug("  - Ignoring unknown attribute: %r", attr_name)

    return Cookie(name, value, **attrs)  # type: ignore[arg-type]
