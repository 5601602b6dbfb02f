"""CSP directives and the grammar each one reads.

Declaration order of ``Directive`` is the order directives are emitted
when a policy is serialized.
"""

from collections.abc import Callable
from enum import Enum

from trill.csp.sources import (
    Sandbox,
    Source,
    parse_media_type,
    parse_source_expression,
    parse_uri,
)
from trill.errors import InvalidSourceSyntax


class Directive(Enum):
    BASE_URI = "base-uri"
    DEFAULT_SRC = "default-src"
    SCRIPT_SRC = "script-src"
    STYLE_SRC = "style-src"
    OBJECT_SRC = "object-src"
    MEDIA_SRC = "media-src"
    IMG_SRC = "img-src"
    FONT_SRC = "font-src"
    CONNECT_SRC = "connect-src"
    CHILD_SRC = "child-src"
    FORM_ACTION = "form-action"
    FRAME_ANCESTORS = "frame-ancestors"
    PLUGIN_TYPES = "plugin-types"
    REPORT_URI = "report-uri"
    SANDBOX = "sandbox"
    BLOCK_ALL_MIXED_CONTENT = "block-all-mixed-content"

    @classmethod
    def by_name(cls, name: str) -> "Directive | None":
        """Case-insensitive lookup by wire name; ``None`` when unknown."""
        return _BY_NAME.get(name.lower())


_BY_NAME = {directive.value: directive for directive in Directive}


def _token_parser(directive: Directive) -> Callable[[str], Source]:
    match directive:
        case Directive.PLUGIN_TYPES:
            return parse_media_type
        case Directive.REPORT_URI:
            return parse_uri
        case Directive.SANDBOX:
            return Sandbox.parse
        case _:
            return parse_source_expression


def parse_directive_value(directive: Directive, value: str) -> list[Source]:
    """Parse the whitespace-separated tokens of one directive.

    ``block-all-mixed-content`` is a flag and takes no tokens; every other
    directive needs at least one.

    Raises:
        InvalidSourceSyntax: On a token the directive's grammar rejects.
    """
    tokens = value.split()
    if directive is Directive.BLOCK_ALL_MIXED_CONTENT:
        if tokens:
            raise InvalidSourceSyntax(raw=value, detail=f"{directive.value} takes no value")
        return []
    if not tokens:
        raise InvalidSourceSyntax(raw=directive.value, detail="Directive has no sources")
    parse = _token_parser(directive)
    return [parse(token) for token in tokens]
