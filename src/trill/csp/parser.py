"""Content-Security-Policy wire parser."""

import logging

from trill._internal.tokens import split_whitespace_once
from trill.config import ParserConfig, resolve
from trill.csp.directives import Directive, parse_directive_value
from trill.csp.policy import ContentSecurityPolicy
from trill.csp.sources import Source
from trill.errors import DuplicateDirective, EmptyDirectiveName, EmptyHeader, UnknownDirective

logger = logging.getLogger("trill.csp")


def parse_csp(text: str, *, config: ParserConfig | None = None) -> ContentSecurityPolicy:
    """Parse a ``Content-Security-Policy`` header value.

    Directives are separated by ``;`` (a trailing one is optional) and
    their names are case-insensitive. When a directive repeats, the first
    occurrence wins, as in browsers, unless ``config.strict_duplicates``
    is set.

    Builder-side checks are not applied: ``frame-ancestors 'self'`` parses
    fine, it just never equals a builder-made policy.

    Raises:
        EmptyHeader: If *text* is blank.
        EmptyDirectiveName: On an empty segment between two ``;``.
        UnknownDirective: On a directive name outside the enumeration.
        DuplicateDirective: On a repeated directive in strict mode.
        InvalidSourceSyntax: On a token no source grammar accepts.
    """
    if not text or not text.strip():
        raise EmptyHeader(raw=text, detail="Content-Security-Policy header must not be empty")
    cfg = resolve(config)
    logger.debug("Parsing Content-Security-Policy value: %r", text)

    segments = text.split(";")
    while segments and not segments[-1].strip():
        segments.pop()
    if not segments:
        raise EmptyDirectiveName(raw=text, detail="Content-Security-Policy has no directive")

    directives: dict[Directive, list[Source]] = {}
    for segment in segments:
        name, value = split_whitespace_once(segment)
        logger.debug("-> Found directive: %r %r", name, value)
        if not name:
            raise EmptyDirectiveName(raw=segment, detail="Directive name is empty")

        directive = Directive.by_name(name)
        if directive is None:
            raise UnknownDirective(raw=name, detail="Unknown Content-Security-Policy directive")
        if directive in directives:
            if cfg.strict_duplicates:
                raise DuplicateDirective(raw=name, detail="Directive appears more than once")
            logger.warning("Directive %r has already been parsed, ignoring duplicate", name)
            continue

        directives[directive] = parse_directive_value(directive, value)
    return ContentSecurityPolicy(directives)
