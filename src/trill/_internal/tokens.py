"""Low-level token scanning shared by the header parsers.

The header grammars are simple enough that splitting on the first
delimiter and trimming covers them; none of the codecs need a full
tokenizer.
"""

import re

_INTEGER = re.compile(r"[+-]?[0-9]+")


def split_first(value: str, delimiter: str) -> tuple[str, str, bool]:
    """Split *value* on the first *delimiter*.

    Returns ``(head, tail, found)`` with both sides trimmed. When the
    delimiter is absent, *tail* is empty and *found* is ``False``::

        >>> split_first(" a = b=c ", "=")
        ('a', 'b=c', True)
        >>> split_first("secure", "=")
        ('secure', '', False)
    """
    head, sep, tail = value.partition(delimiter)
    return head.strip(), tail.strip(), bool(sep)


def parse_integer(value: str) -> int:
    """``int()`` limited to ASCII digits with an optional sign.

    Rejects what the HTTP grammars do not allow but ``int()`` does:
    ``1_000``, non-ASCII digits, surrounding whitespace.

    Raises:
        ValueError: If *value* is not a plain decimal integer.
    """
    if not _INTEGER.fullmatch(value):
        raise ValueError(f"invalid decimal integer: {value!r}")
    return int(value)


def split_whitespace_once(value: str) -> tuple[str, str]:
    """Split *value* on the first run of whitespace into ``(name, rest)``."""
    parts = value.strip().split(None, 1)
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1].strip()


def split_list(value: str, delimiter: str) -> list[str]:
    """Split *value* on every *delimiter*, trim, and drop empty items."""
    return [item for item in (part.strip() for part in value.split(delimiter)) if item]


def is_quoted(value: str, quote: str = '"') -> bool:
    """True if *value* is wrapped in a pair of *quote* characters."""
    return len(value) >= 2 and value[0] == quote and value[-1] == quote


def unquote(value: str, quote: str = '"') -> str:
    """Strip one pair of surrounding *quote* characters, if present."""
    if is_quoted(value, quote):
        return value[1:-1]
    return value


def _is_date_delimiter(char: str) -> bool:
    # RFC 6265 §5.1.1: everything but digits, letters, ':' and the
    # non-delimiter control/high ranges separates date tokens.
    code = ord(char)
    if (code < 0x20 and char != "\t") or code >= 0x7F:
        return False
    return not (char.isascii() and (char.isalnum() or char == ":"))


def split_date_tokens(value: str) -> list[str]:
    """Split a loose cookie date into tokens by character class."""
    tokens: list[str] = []
    current: list[str] = []
    for char in value:
        if _is_date_delimiter(char):
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(char)
    if current:
        tokens.append("".join(current))
    return tokens
