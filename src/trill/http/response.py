"""HTTP response protocol and header-matching helpers.

Any object exposing ``status``, ``has_header``, ``get_header``,
``get_cookies`` and ``get_content`` can be checked with the helpers
below; ``SimpleResponse`` is a ready-made in-memory one.

Usage::

    response = SimpleResponse(200, Headers.of([("Cache-Control", "no-store")]))
    header_matches(response, "Cache-Control", CacheControl(no_store=True))  # True
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from trill.config import ParserConfig
from trill.cookies import Cookie, parse_set_cookie
from trill.header_value import HeaderValue

logger = logging.getLogger("trill.http")

# Headers that legitimately appear more than once in one response
MULTI_VALUED = frozenset({"set-cookie"})


@dataclass(frozen=True, slots=True)
class Headers:
    """Response header lines in wire order, looked up case-insensitively.

    Repeated names are kept, so ``get_list("Set-Cookie")`` sees every line.
    """

    pairs: tuple[tuple[str, str], ...] = ()

    @classmethod
    def of(cls, headers: Iterable[tuple[str, str]] | Mapping[str, str] = ()) -> "Headers":
        items = headers.items() if isinstance(headers, Mapping) else headers
        return cls(tuple((str(name), str(value)) for name, value in items))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and bool(self.get_list(name))

    def get_list(self, name: str) -> list[str]:
        wanted = name.lower()
        return [value for key, value in self.pairs if key.lower() == wanted]


@runtime_checkable
class HttpResponse(Protocol):
    """The response shape the helpers read. No base class required."""

    @property
    def status(self) -> int: ...
    def has_header(self, name: str) -> bool: ...
    def get_header(self, name: str) -> list[str]: ...
    def get_cookies(self) -> list[Cookie]: ...
    def get_content(self) -> str: ...


@dataclass(frozen=True, slots=True)
class SimpleResponse:
    """An immutable, in-memory ``HttpResponse``.

    Cookies are read from the ``Set-Cookie`` headers on demand.
    """

    status: int
    headers: Headers = field(default_factory=Headers)
    content: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.headers, Headers):
            object.__setattr__(self, "headers", Headers.of(self.headers))

    @classmethod
    def of(
        cls,
        status: int,
        headers: Iterable[tuple[str, str]] | Mapping[str, str] = (),
        content: str = "",
    ) -> "SimpleResponse":
        return cls(status, Headers.of(headers), content)

    def has_header(self, name: str) -> bool:
        return name in self.headers

    def get_header(self, name: str) -> list[str]:
        return self.headers.get_list(name)

    def get_cookies(self) -> list[Cookie]:
        return [parse_set_cookie(value) for value in self.headers.get_list("Set-Cookie")]

    def get_content(self) -> str:
        return self.content


def header_matches(
    response: HttpResponse,
    name: str,
    expected: HeaderValue,
    *,
    config: ParserConfig | None = None,
) -> bool:
    """True if header *name* is set and structurally equals *expected*.

    A single-valued header that appears more than once never matches;
    for multi-valued headers (``Set-Cookie``) any one value may match.
    Parse errors in the actual value propagate.
    """
    if not response.has_header(name):
        logger.debug("Cannot find header %r", name)
        return False
    values = response.get_header(name)
    if name.lower() in MULTI_VALUED:
        return any(expected.matches(value, config=config) for value in values)
    if len(values) != 1:
        logger.debug("Header %r should appear once, found %d values", name, len(values))
        return False
    return expected.matches(values[0], config=config)


def find_cookie(response: HttpResponse, name: str) -> Cookie | None:
    """Return the first cookie named *name*, or ``None``."""
    for cookie in response.get_cookies():
        if cookie.name == name:
            return cookie
    return None


def has_cookie(response: HttpResponse, cookie: Cookie) -> bool:
    """True if the response sets a cookie structurally equal to *cookie*."""
    return any(actual == cookie for actual in response.get_cookies())
