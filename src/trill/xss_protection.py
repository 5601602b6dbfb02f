"""``X-XSS-Protection`` values: ``0``, ``1`` and ``1; mode=block``."""

import logging
from enum import Enum

from trill._internal.tokens import split_first, split_list
from trill.config import ParserConfig
from trill.errors import EmptyHeader, InvalidHeaderValue

logger = logging.getLogger("trill.xss_protection")


class XssProtection(Enum):
    """The three ``X-XSS-Protection`` forms a browser understands."""

    DISABLE = "0"
    ENABLE = "1"
    ENABLE_BLOCK = "1; mode=block"

    @classmethod
    def parse(cls, text: str, *, config: ParserConfig | None = None) -> "XssProtection":
        return parse_xss_protection(text, config=config)

    def canonical(self) -> str:
        return self.value

    def matches(self, actual: str, *, config: ParserConfig | None = None) -> bool:
        return parse_xss_protection(actual, config=config) is self

    def __str__(self) -> str:
        return self.value


def parse_xss_protection(text: str, *, config: ParserConfig | None = None) -> XssProtection:
    """Parse an ``X-XSS-Protection`` header value.

    Spacing around ``;`` and ``=`` and the case of ``mode=block`` are not
    significant.

    Raises:
        EmptyHeader: If *text* is blank.
        InvalidHeaderValue: If the value is not one of the three forms.
    """
    if not text or not text.strip():
        raise EmptyHeader(raw=text, detail="X-XSS-Protection header must not be empty")
    logger.debug("Parsing X-XSS-Protection value: %r", text)

    parts = []
    for part in split_list(text, ";"):
        name, value, has_equals = split_first(part, "=")
        parts.append(f"{name.lower()}={value.lower()}" if has_equals else name.lower())
    normalized = "; ".join(parts)

    for member in XssProtection:
        if member.value == normalized:
            return member
    raise InvalidHeaderValue(raw=text, detail="Not a valid X-XSS-Protection value")
