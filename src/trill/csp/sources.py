"""CSP source values — the things a directive allows.

Every variant is a frozen dataclass: equality and hashing come from its
fields and ``str()`` renders the wire form. Scheme and host names are
case-insensitive on the wire, so they are stored lower-cased.

Factories validate their input and raise ``InvalidSourceValue``; the
``parse_*`` functions read wire tokens and raise ``InvalidSourceSyntax``.
"""

import re
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlsplit

from trill._internal.tokens import is_quoted
from trill.errors import InvalidSourceSyntax, InvalidSourceValue

SCHEME_REGEX = r"[a-z][a-z0-9+\-.]*"
HOST_NAME_REGEX = r"(?:\*\.)?[a-z0-9\-]+(?:\.[a-z0-9\-]+)*"
HOST_PORT_REGEX = r"[0-9]+|\*"
HOST_PATH_REGEX = r"/[^?#\s;,]*"

_SCHEME = re.compile(SCHEME_REGEX, re.IGNORECASE)
_SCHEME_SOURCE = re.compile(rf"({SCHEME_REGEX}):", re.IGNORECASE)
_HOST_NAME = re.compile(HOST_NAME_REGEX, re.IGNORECASE)
_PORT = re.compile(HOST_PORT_REGEX)
_PATH = re.compile(HOST_PATH_REGEX)
_HOST_SOURCE = re.compile(
    rf"(?:(?P<scheme>{SCHEME_REGEX})://)?"
    rf"(?P<host>{HOST_NAME_REGEX})"
    rf"(?::(?P<port>{HOST_PORT_REGEX}))?"
    rf"(?P<path>{HOST_PATH_REGEX})?",
    re.IGNORECASE,
)
_BASE64 = re.compile(r"[A-Za-z0-9+/_\-]+={0,2}")
_URI = re.compile(r"[^\s;,]+")
_MEDIA_TYPE = re.compile(r"[a-z0-9][a-z0-9!#$&^_.+\-]*/[a-z0-9][a-z0-9!#$&^_.+\-]*", re.IGNORECASE)

HASH_ALGORITHMS = ("sha256", "sha384", "sha512")
KEYWORDS = ("self", "none", "unsafe-eval", "unsafe-inline")


@dataclass(frozen=True, slots=True)
class Keyword:
    """A quoted keyword source such as ``'self'``."""

    name: str

    def __post_init__(self) -> None:
        name = self.name.lower()
        if name not in KEYWORDS:
            raise InvalidSourceValue(raw=self.name, detail="Not a CSP keyword")
        object.__setattr__(self, "name", name)

    def __str__(self) -> str:
        return f"'{self.name}'"


@dataclass(frozen=True, slots=True)
class Scheme:
    """A scheme source such as ``https:``."""

    name: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", self.name.lower())

    def __str__(self) -> str:
        return f"{self.name}:"


@dataclass(frozen=True, slots=True)
class Nonce:
    """A ``'nonce-<base64>'`` source."""

    value: str

    def __str__(self) -> str:
        return f"'nonce-{self.value}'"


@dataclass(frozen=True, slots=True)
class Hash:
    """A ``'sha256-<base64>'`` (or sha384 / sha512) source."""

    algorithm: str
    value: str

    def __str__(self) -> str:
        return f"'{self.algorithm}-{self.value}'"


@dataclass(frozen=True, slots=True)
class Host:
    """A host source: ``[scheme://]host[:port][/path]``.

    ``port`` is kept as text because ``*`` is a legal port.
    """

    host: str
    scheme: str | None = None
    port: str | None = None
    path: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "host", self.host.lower())
        if self.scheme is not None:
            object.__setattr__(self, "scheme", self.scheme.lower())

    def __str__(self) -> str:
        value = self.host
        if self.scheme is not None:
            value = f"{self.scheme}://{value}"
        if self.port is not None:
            value = f"{value}:{self.port}"
        if self.path is not None:
            value += self.path
        return value


@dataclass(frozen=True, slots=True)
class WildcardHost:
    """The ``*`` source: any host."""

    def __str__(self) -> str:
        return "*"


@dataclass(frozen=True, slots=True)
class MediaType:
    """A ``plugin-types`` entry such as ``application/pdf``."""

    value: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", self.value.lower())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Uri:
    """A ``report-uri`` entry."""

    value: str

    def __str__(self) -> str:
        return self.value


class Sandbox(Enum):
    """``sandbox`` tokens."""

    ALLOW_SCRIPTS = "allow-scripts"
    ALLOW_SAME_ORIGIN = "allow-same-origin"
    ALLOW_FORMS = "allow-forms"
    ALLOW_POINTER_LOCK = "allow-pointer-lock"
    ALLOW_POPUPS = "allow-popups"
    ALLOW_TOP_NAVIGATION = "allow-top-navigation"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, token: str) -> "Sandbox":
        try:
            return cls(token.lower())
        except ValueError:
            raise InvalidSourceSyntax(raw=token, detail="Unknown sandbox token") from None


# Any source a directive can hold
type Source = Keyword | Scheme | Nonce | Hash | Host | WildcardHost | MediaType | Uri | Sandbox

# The variants allowed in fetch and navigation directives
SOURCE_EXPRESSIONS = (Keyword, Scheme, Nonce, Hash, Host, WildcardHost)


SELF = Keyword("self")
NONE = Keyword("none")
UNSAFE_EVAL = Keyword("unsafe-eval")
UNSAFE_INLINE = Keyword("unsafe-inline")
ALL_HOSTS = WildcardHost()
HTTP = Scheme("http")
HTTPS = Scheme("https")
DATA = Scheme("data")


# ---------------------------------------------------------------------------
# Factories (build side)
# ---------------------------------------------------------------------------


def scheme(name: str) -> Scheme:
    """Build a scheme source: ``scheme("wss")`` renders ``wss:``."""
    if not name or not _SCHEME.fullmatch(name):
        raise InvalidSourceValue(raw=str(name), detail="Not a valid scheme")
    return Scheme(name)


def _check_base64(value: str) -> str:
    if not value or not _BASE64.fullmatch(value):
        raise InvalidSourceValue(raw=str(value), detail="Not a valid base64 value")
    return value


def nonce(value: str) -> Nonce:
    return Nonce(_check_base64(value))


def sha256(value: str) -> Hash:
    return Hash("sha256", _check_base64(value))


def sha384(value: str) -> Hash:
    return Hash("sha384", _check_base64(value))


def sha512(value: str) -> Hash:
    return Hash("sha512", _check_base64(value))


def host(
    name: str,
    scheme: str | None = None,
    port: int | str | None = None,
    path: str | None = None,
) -> Host:
    """Build a host source from its parts.

    Examples::

        host("example.com")                        # example.com
        host("*.example.com", scheme="https")      # https://*.example.com
        host("example.com", port=8443, path="/js") # example.com:8443/js

    Raises:
        InvalidSourceValue: If any part does not fit the host-source grammar.
    """
    if not name or not _HOST_NAME.fullmatch(name):
        raise InvalidSourceValue(raw=str(name), detail="Not a valid host name")
    if scheme is not None and not _SCHEME.fullmatch(scheme):
        raise InvalidSourceValue(raw=scheme, detail="Not a valid scheme")
    port_value = None if port is None else str(port)
    if port_value is not None and not _PORT.fullmatch(port_value):
        raise InvalidSourceValue(raw=port_value, detail="Port must be an integer or '*'")
    if path == "":
        path = None
    if path is not None and not _PATH.fullmatch(path):
        raise InvalidSourceValue(
            raw=path, detail="Path must start with '/' and hold no query, whitespace, ';' or ','"
        )
    return Host(name, scheme, port_value, path)


def host_from_url(url: str) -> Host:
    """Build a host source from an absolute URL (query and fragment dropped)."""
    parts = urlsplit(url)
    if not parts.scheme or not parts.hostname:
        raise InvalidSourceValue(raw=url, detail="URL must have a scheme and a host")
    return host(parts.hostname, parts.scheme, parts.port, parts.path or None)


def media_type(value: str) -> MediaType:
    if not value or not _MEDIA_TYPE.fullmatch(value):
        raise InvalidSourceValue(raw=str(value), detail="Not a valid media type")
    return MediaType(value)


def uri(value: str) -> Uri:
    if not value or not _URI.fullmatch(value):
        raise InvalidSourceValue(
            raw=str(value), detail="URI must be defined and hold no whitespace, ';' or ','"
        )
    return Uri(value)


# ---------------------------------------------------------------------------
# Parsers (wire side)
# ---------------------------------------------------------------------------


def _parse_quoted(token: str) -> Source:
    inner = token[1:-1]
    lowered = inner.lower()
    if lowered in KEYWORDS:
        return Keyword(lowered)
    prefix, _, value = inner.partition("-")
    if prefix.lower() == "nonce" and _BASE64.fullmatch(value):
        return Nonce(value)
    if prefix.lower() in HASH_ALGORITHMS and _BASE64.fullmatch(value):
        return Hash(prefix.lower(), value)
    raise InvalidSourceSyntax(raw=token, detail="Unknown quoted source")


def parse_source_expression(token: str) -> Source:
    """Parse one source-list token into the variant its syntax implies.

    Raises:
        InvalidSourceSyntax: If the token fits no source grammar.
    """
    if is_quoted(token, "'"):
        return _parse_quoted(token)
    if token == "*":
        return ALL_HOSTS
    if m := _SCHEME_SOURCE.fullmatch(token):
        return Scheme(m.group(1))
    if m := _HOST_SOURCE.fullmatch(token):
        return Host(m["host"], m["scheme"], m["port"], m["path"])
    raise InvalidSourceSyntax(raw=token, detail="Not a valid source expression")


def parse_media_type(token: str) -> MediaType:
    if not _MEDIA_TYPE.fullmatch(token):
        raise InvalidSourceSyntax(raw=token, detail="Not a valid media type")
    return MediaType(token)


def parse_uri(token: str) -> Uri:
    return Uri(token)
