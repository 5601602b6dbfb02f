"""HeaderValue protocol — the contract every structured header value meets.

A value renders itself to one canonical wire string and decides whether an
arbitrary wire string means the same thing. Matching never compares text:
the actual string is parsed with the value's own grammar and the two
structures are compared. No base class required; the shape is enough.
"""

from typing import Protocol, runtime_checkable

from trill.config import ParserConfig


@runtime_checkable
class HeaderValue(Protocol):
    """A structured header value.

    Implementations keep the round-trip invariant
    ``type(v).parse(v.canonical()) == v``.
    """

    def canonical(self) -> str: ...
    def matches(self, actual: str, *, config: ParserConfig | None = None) -> bool: ...
