"""``X-Frame-Options`` (RFC 7034) values.

Usage::

    FrameOptions.deny().canonical()  # "DENY"
    FrameOptions.allow_from("https://example.com").matches("allow-from https://example.com")
"""

import logging
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlsplit

from trill._internal.tokens import split_whitespace_once
from trill.config import ParserConfig
from trill.errors import EmptyHeader, InvalidHeaderValue, InvalidOrigin

logger = logging.getLogger("trill.frame_options")


class FrameDirective(Enum):
    DENY = "DENY"
    SAME_ORIGIN = "SAMEORIGIN"
    ALLOW_FROM = "ALLOW-FROM"


@dataclass(frozen=True, slots=True)
class FrameOptions:
    """An ``X-Frame-Options`` value. Only ``ALLOW-FROM`` carries an origin."""

    directive: FrameDirective
    origin: str | None = None

    def __post_init__(self) -> None:
        if self.directive is FrameDirective.ALLOW_FROM:
            _check_origin(self.origin)
        elif self.origin is not None:
            raise InvalidOrigin(
                raw=self.origin, detail=f"{self.directive.value} takes no origin"
            )

    @classmethod
    def deny(cls) -> "FrameOptions":
        return cls(FrameDirective.DENY)

    @classmethod
    def same_origin(cls) -> "FrameOptions":
        return cls(FrameDirective.SAME_ORIGIN)

    @classmethod
    def allow_from(cls, origin: str) -> "FrameOptions":
        return cls(FrameDirective.ALLOW_FROM, origin)

    @classmethod
    def parse(cls, text: str, *, config: ParserConfig | None = None) -> "FrameOptions":
        return parse_frame_options(text, config=config)

    def canonical(self) -> str:
        if self.origin is None:
            return self.directive.value
        return f"{self.directive.value} {self.origin}"

    def matches(self, actual: str, *, config: ParserConfig | None = None) -> bool:
        return parse_frame_options(actual, config=config) == self

    def __str__(self) -> str:
        return self.canonical()


def _check_origin(origin: str | None) -> None:
    if origin is None or any(c.isspace() for c in origin):
        raise InvalidOrigin(raw=str(origin), detail="ALLOW-FROM needs a single origin")
    parts = urlsplit(origin)
    if not parts.scheme or not parts.netloc:
        raise InvalidOrigin(raw=origin, detail="Origin must be an absolute scheme://host URI")


def parse_frame_options(text: str, *, config: ParserConfig | None = None) -> FrameOptions:
    """Parse an ``X-Frame-Options`` header value.

    The directive is case-insensitive; the origin keeps its case.

    Raises:
        EmptyHeader: If *text* is blank.
        InvalidHeaderValue: On an unknown directive, a missing or extra
            ``ALLOW-FROM`` origin, or an origin on ``DENY``/``SAMEORIGIN``.
    """
    if not text or not text.strip():
        raise EmptyHeader(raw=text, detail="X-Frame-Options header must not be empty")
    logger.debug("Parsing X-Frame-Options value: %r", text)

    name, rest = split_whitespace_once(text)
    for directive in FrameDirective:
        if directive.value == name.upper():
            break
    else:
        raise InvalidHeaderValue(raw=name, detail="Unknown X-Frame-Options directive")

    if directive is not FrameDirective.ALLOW_FROM:
        if rest:
            raise InvalidHeaderValue(raw=text, detail=f"{directive.value} takes no origin")
        return FrameOptions(directive)
    if not rest or len(rest.split()) != 1:
        raise InvalidHeaderValue(raw=text, detail="ALLOW-FROM needs exactly one origin")
    parts = urlsplit(rest)
    if not parts.scheme or not parts.netloc:
        raise InvalidHeaderValue(raw=rest, detail="ALLOW-FROM origin is not an absolute URI")
    return FrameOptions(directive, rest)
