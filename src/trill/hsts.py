"""``Strict-Transport-Security`` (RFC 6797) values."""

import logging
from dataclasses import dataclass

from trill._internal.tokens import parse_integer, split_first, unquote
from trill.config import ParserConfig, resolve
from trill.errors import DuplicateDirective, EmptyHeader, InvalidMaxAge, UnknownDirective

logger = logging.getLogger("trill.hsts")

_DIRECTIVES = ("max-age", "includesubdomains", "preload")


@dataclass(frozen=True, slots=True)
class StrictTransportSecurity:
    """HSTS policy: ``max-age=N[; includeSubDomains][; preload]``."""

    max_age: int
    include_subdomains: bool = False
    preload: bool = False

    @classmethod
    def parse(cls, text: str, *, config: ParserConfig | None = None) -> "StrictTransportSecurity":
        return parse_hsts(text, config=config)

    def canonical(self) -> str:
        parts = [f"max-age={self.max_age}"]
        if self.include_subdomains:
            parts.append("includeSubDomains")
        if self.preload:
            parts.append("preload")
        return "; ".join(parts)

    def matches(self, actual: str, *, config: ParserConfig | None = None) -> bool:
        return parse_hsts(actual, config=config) == self

    def __str__(self) -> str:
        return self.canonical()


def parse_hsts(text: str, *, config: ParserConfig | None = None) -> StrictTransportSecurity:
    """Parse a ``Strict-Transport-Security`` header value.

    Directive names are case-insensitive and ``max-age`` may be quoted.
    A repeated directive keeps its first value (or raises in strict mode).

    Raises:
        EmptyHeader: If *text* is blank.
        UnknownDirective: On a directive outside the RFC 6797 set.
        InvalidMaxAge: If ``max-age`` is missing or not an integer.
    """
    if not text or not text.strip():
        raise EmptyHeader(raw=text, detail="Strict-Transport-Security header must not be empty")
    cfg = resolve(config)
    logger.debug("Parsing Strict-Transport-Security value: %r", text)

    seen: set[str] = set()
    max_age: int | None = None
    include_subdomains = False
    preload = False
    for part in text.split(";"):
        name, value, _ = split_first(part, "=")
        if not name:
            continue
        key = name.lower()
        if key not in _DIRECTIVES:
            raise UnknownDirective(raw=name, detail="Unknown Strict-Transport-Security directive")
        if key in seen:
            if cfg.strict_duplicates:
                raise DuplicateDirective(raw=name, detail="Directive appears more than once")
            logger.warning("Directive %r has already been parsed, ignoring duplicate", name)
            continue
        seen.add(key)

        if key == "max-age":
            try:
                max_age = parse_integer(unquote(value))
            except ValueError:
                raise InvalidMaxAge(raw=value, detail="max-age is not a valid number") from None
        elif key == "includesubdomains":
            include_subdomains = True
        else:
            preload = True

    if max_age is None:
        raise InvalidMaxAge(raw=text, detail="Strict-Transport-Security requires max-age")
    return StrictTransportSecurity(max_age, include_subdomains, preload)
