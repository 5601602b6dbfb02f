"""``Cache-Control`` response directives.

Parsing walks the comma-separated tokens through a fixed list of
directive matchers; the first one that accepts a token applies it to a
``CacheControlBuilder``. Unknown directives are ignored.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from trill._internal.tokens import parse_integer, split_first, split_list, unquote
from trill.config import ParserConfig
from trill.errors import EmptyHeader, InvalidCacheControlInteger

logger = logging.getLogger("trill.cache_control")

SEPARATOR = ", "


class Visibility(Enum):
    PRIVATE = "private"
    PUBLIC = "public"


@dataclass(frozen=True, slots=True)
class CacheControl:
    """A parsed ``Cache-Control`` value.

    Booleans default to off and ``None`` numbers are not emitted.
    Comparison is field by field, so directive order on the wire never
    matters.
    """

    visibility: Visibility | None = None
    no_cache: bool = False
    no_store: bool = False
    no_transform: bool = False
    must_revalidate: bool = False
    proxy_revalidate: bool = False
    max_age: int | None = None
    s_maxage: int | None = None
    immutable: bool = False

    @staticmethod
    def builder() -> "CacheControlBuilder":
        return CacheControlBuilder()

    @classmethod
    def parse(cls, text: str, *, config: ParserConfig | None = None) -> "CacheControl":
        return parse_cache_control(text, config=config)

    def canonical(self) -> str:
        values: list[str] = []
        if self.visibility is not None:
            values.append(self.visibility.value)
        if self.no_cache:
            values.append("no-cache")
        if self.no_store:
            values.append("no-store")
        if self.no_transform:
            values.append("no-transform")
        if self.must_revalidate:
            values.append("must-revalidate")
        if self.proxy_revalidate:
            values.append("proxy-revalidate")
        if self.max_age is not None:
            values.append(f"max-age={self.max_age}")
        if self.s_maxage is not None:
            values.append(f"s-maxage={self.s_maxage}")
        if self.immutable:
            values.append("immutable")
        return SEPARATOR.join(values)

    def matches(self, actual: str, *, config: ParserConfig | None = None) -> bool:
        return parse_cache_control(actual, config=config) == self

    def __str__(self) -> str:
        return self.canonical()


class CacheControlBuilder:
    """Accumulates directives, then ``build()`` freezes them.

    Single-owner; every setter returns the builder for chaining::

        CacheControl.builder().visibility(Visibility.PUBLIC).max_age(3600).build()
    """

    __slots__ = ("_fields",)

    def __init__(self) -> None:
        self._fields: dict[str, object] = {}

    def visibility(self, visibility: Visibility) -> "CacheControlBuilder":
        self._fields["visibility"] = visibility
        return self

    def no_cache(self) -> "CacheControlBuilder":
        self._fields["no_cache"] = True
        return self

    def no_store(self) -> "CacheControlBuilder":
        self._fields["no_store"] = True
        return self

    def no_transform(self) -> "CacheControlBuilder":
        self._fields["no_transform"] = True
        return self

    def must_revalidate(self) -> "CacheControlBuilder":
        self._fields["must_revalidate"] = True
        return self

    def proxy_revalidate(self) -> "CacheControlBuilder":
        self._fields["proxy_revalidate"] = True
        return self

    def max_age(self, seconds: int) -> "CacheControlBuilder":
        self._fields["max_age"] = seconds
        return self

    def s_maxage(self, seconds: int) -> "CacheControlBuilder":
        self._fields["s_maxage"] = seconds
        return self

    def immutable(self) -> "CacheControlBuilder":
        self._fields["immutable"] = True
        return self

    def build(self) -> CacheControl:
        return CacheControl(**self._fields)  # type: ignore[arg-type]


def _to_int(token: str) -> int:
    _, value, _ = split_first(token, "=")
    try:
        return parse_integer(unquote(value))
    except ValueError as exc:
        raise InvalidCacheControlInteger(raw=token, detail="Directive value is not an integer") from exc


def _exact(name: str) -> Callable[[str], bool]:
    return lambda token: token == name


def _prefix(name: str) -> Callable[[str], bool]:
    return lambda token: token.startswith(name)


type _Apply = Callable[[str, CacheControlBuilder], object]

# Priority order: the first matcher accepting a token wins.
_DIRECTIVES: tuple[tuple[Callable[[str], bool], _Apply], ...] = (
    (
        lambda token: token in ("private", "public"),
        lambda token, b: b.visibility(Visibility(token)),
    ),
    (_exact("no-cache"), lambda token, b: b.no_cache()),
    (_exact("no-store"), lambda token, b: b.no_store()),
    (_exact("no-transform"), lambda token, b: b.no_transform()),
    (_exact("must-revalidate"), lambda token, b: b.must_revalidate()),
    (_exact("proxy-revalidate"), lambda token, b: b.proxy_revalidate()),
    (_prefix("max-age="), lambda token, b: b.max_age(_to_int(token))),
    (_prefix("s-maxage="), lambda token, b: b.s_maxage(_to_int(token))),
    (_exact("immutable"), lambda token, b: b.immutable()),
)


def _normalize(token: str) -> str:
    # Directive names are case-insensitive; values keep their case.
    name, value, has_equals = split_first(token, "=")
    return f"{name.lower()}={value}" if has_equals else name.lower()


def parse_cache_control(text: str, *, config: ParserConfig | None = None) -> CacheControl:
    """Parse a ``Cache-Control`` header value.

    Raises:
        EmptyHeader: If *text* is blank.
        InvalidCacheControlInteger: If ``max-age`` / ``s-maxage`` is not an integer.
    """
    if not text or not text.strip():
        raise EmptyHeader(raw=text, detail="Cache-Control header must not be empty")
    logger.debug("Parsing Cache-Control value: %r", text)

    builder = CacheControlBuilder()
    for token in map(_normalize, split_list(text, ",")):
        for accepts, apply in _DIRECTIVES:
            if accepts(token):
                apply(token, builder)
                break
        else:
            logger.debug("  - Ignoring unknown directive: %r", token)
    return builder.build()
