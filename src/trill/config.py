"""Parser configuration.

ParserConfig is a frozen dataclass — immutable after creation, passed
explicitly to ``parse()`` / ``matches()``, no global state.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ParserConfig:
    """How lenient the header parsers are. Immutable after creation.

    The defaults follow what browsers do with real-world headers::

        config = ParserConfig(strict_duplicates=True)
        policy.matches(actual, config=config)
    """

    # CSP / HSTS: a repeated directive raises DuplicateDirective instead of
    # being ignored (first occurrence wins)
    strict_duplicates: bool = False

    # Set-Cookie: an unknown attribute raises UnknownCookieAttribute instead
    # of being skipped
    strict_cookie_attributes: bool = False


DEFAULT_CONFIG = ParserConfig()


def resolve(config: ParserConfig | None) -> ParserConfig:
    """Return *config*, or the shared default when ``None``."""
    return DEFAULT_CONFIG if config is None else config
