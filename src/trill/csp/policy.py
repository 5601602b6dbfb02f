"""ContentSecurityPolicy value and its builder.

A policy maps each directive to the sources it allows. Two policies are
equal when they hold the same directives and, per directive, the same
*set* of sources; first-seen order is kept only for serialization.
"""

from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType

from trill.config import ParserConfig
from trill.csp.directives import Directive
from trill.csp.sources import (
    SOURCE_EXPRESSIONS,
    Host,
    Sandbox,
    Scheme,
    Source,
    media_type,
    uri,
)
from trill.errors import InvalidFrameAncestorSource, InvalidSourceValue


class ContentSecurityPolicy:
    """An immutable Content-Security-Policy value.

    Build the expected policy, then match it against a header::

        policy = (
            ContentSecurityPolicy.builder()
            .add_default_src(SELF)
            .add_script_src(SELF, UNSAFE_INLINE)
            .build()
        )
        policy.canonical()  # "default-src 'self'; script-src 'self' 'unsafe-inline';"
        policy.matches("script-src 'unsafe-inline' 'self'; default-src 'self'")  # True
    """

    __slots__ = ("_directives",)

    def __init__(self, directives: Mapping[Directive, Iterable[Source]] | None = None) -> None:
        ordered = {
            directive: tuple(dict.fromkeys(sources))
            for directive, sources in (directives or {}).items()
        }
        for directive, sources in ordered.items():
            flag = directive is Directive.BLOCK_ALL_MIXED_CONTENT
            if flag and sources:
                raise InvalidSourceValue(
                    raw=" ".join(map(str, sources)), detail=f"{directive.value} takes no sources"
                )
            if not flag and not sources:
                raise InvalidSourceValue(
                    raw=directive.value, detail=f"{directive.value} needs at least one source"
                )
        object.__setattr__(self, "_directives", MappingProxyType(ordered))

    @staticmethod
    def builder() -> "ContentSecurityPolicyBuilder":
        return ContentSecurityPolicyBuilder()

    @classmethod
    def parse(cls, text: str, *, config: ParserConfig | None = None) -> "ContentSecurityPolicy":
        from trill.csp.parser import parse_csp

        return parse_csp(text, config=config)

    @property
    def directives(self) -> Mapping[Directive, tuple[Source, ...]]:
        """Directive → sources in first-seen order (read-only)."""
        return self._directives

    def canonical(self) -> str:
        """Serialize in directive declaration order, not insertion order."""
        parts = []
        for directive in Directive:
            if directive in self._directives:
                tokens = [directive.value, *(str(src) for src in self._directives[directive])]
                parts.append(" ".join(tokens) + ";")
        return " ".join(parts)

    def matches(self, actual: str, *, config: ParserConfig | None = None) -> bool:
        return ContentSecurityPolicy.parse(actual, config=config) == self

    def _as_sets(self) -> dict[Directive, frozenset[Source]]:
        return {directive: frozenset(sources) for directive, sources in self._directives.items()}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ContentSecurityPolicy):
            return NotImplemented
        return self._as_sets() == other._as_sets()

    def __hash__(self) -> int:
        return hash(frozenset(self._as_sets().items()))

    def __repr__(self) -> str:
        return f"ContentSecurityPolicy({self.canonical()!r})"

    def __str__(self) -> str:
        return self.canonical()


type _Validator = Callable[[Directive, object], None]


def _source_expression(directive: Directive, source: object) -> None:
    if not isinstance(source, SOURCE_EXPRESSIONS):
        raise InvalidSourceValue(raw=str(source), detail=f"Not a valid {directive.value} source")


def _host_or_scheme(directive: Directive, source: object) -> None:
    if not isinstance(source, (Host, Scheme)):
        raise InvalidFrameAncestorSource(
            raw=str(source), detail=f"{directive.value} only accepts host and scheme sources"
        )


def _sandbox_token(directive: Directive, source: object) -> None:
    if not isinstance(source, Sandbox):
        raise InvalidSourceValue(raw=str(source), detail="sandbox only accepts Sandbox tokens")


class ContentSecurityPolicyBuilder:
    """Accumulates sources per directive; ``build()`` freezes a snapshot.

    Adds are append-only. Every source is validated before any of the
    call's sources is stored, so a rejected call leaves the builder
    unchanged.
    """

    __slots__ = ("_sources",)

    def __init__(self) -> None:
        self._sources: dict[Directive, dict[Source, None]] = {}

    def add_base_uri(self, source: Source, *sources: Source) -> "ContentSecurityPolicyBuilder":
        return self._add(Directive.BASE_URI, (source, *sources))

    def add_default_src(self, source: Source, *sources: Source) -> "ContentSecurityPolicyBuilder":
        return self._add(Directive.DEFAULT_SRC, (source, *sources))

    def add_script_src(self, source: Source, *sources: Source) -> "ContentSecurityPolicyBuilder":
        return self._add(Directive.SCRIPT_SRC, (source, *sources))

    def add_style_src(self, source: Source, *sources: Source) -> "ContentSecurityPolicyBuilder":
        return self._add(Directive.STYLE_SRC, (source, *sources))

    def add_object_src(self, source: Source, *sources: Source) -> "ContentSecurityPolicyBuilder":
        return self._add(Directive.OBJECT_SRC, (source, *sources))

    def add_media_src(self, source: Source, *sources: Source) -> "ContentSecurityPolicyBuilder":
        return self._add(Directive.MEDIA_SRC, (source, *sources))

    def add_img_src(self, source: Source, *sources: Source) -> "ContentSecurityPolicyBuilder":
        return self._add(Directive.IMG_SRC, (source, *sources))

    def add_font_src(self, source: Source, *sources: Source) -> "ContentSecurityPolicyBuilder":
        return self._add(Directive.FONT_SRC, (source, *sources))

    def add_connect_src(self, source: Source, *sources: Source) -> "ContentSecurityPolicyBuilder":
        return self._add(Directive.CONNECT_SRC, (source, *sources))

    def add_child_src(self, source: Source, *sources: Source) -> "ContentSecurityPolicyBuilder":
        return self._add(Directive.CHILD_SRC, (source, *sources))

    def add_form_action(self, source: Source, *sources: Source) -> "ContentSecurityPolicyBuilder":
        return self._add(Directive.FORM_ACTION, (source, *sources))

    def add_frame_ancestors(
        self, source: Host | Scheme, *sources: Host | Scheme
    ) -> "ContentSecurityPolicyBuilder":
        return self._add(Directive.FRAME_ANCESTORS, (source, *sources), _host_or_scheme)

    def add_plugin_types(self, value: str, *values: str) -> "ContentSecurityPolicyBuilder":
        return self._add(Directive.PLUGIN_TYPES, [media_type(v) for v in (value, *values)], None)

    def add_report_uri(self, value: str, *values: str) -> "ContentSecurityPolicyBuilder":
        return self._add(Directive.REPORT_URI, [uri(v) for v in (value, *values)], None)

    def add_sandbox(self, token: Sandbox, *tokens: Sandbox) -> "ContentSecurityPolicyBuilder":
        return self._add(Directive.SANDBOX, (token, *tokens), _sandbox_token)

    def block_all_mixed_content(self) -> "ContentSecurityPolicyBuilder":
        self._sources.setdefault(Directive.BLOCK_ALL_MIXED_CONTENT, {})
        return self

    def _add(
        self,
        directive: Directive,
        sources: Iterable[Source],
        validator: _Validator | None = _source_expression,
    ) -> "ContentSecurityPolicyBuilder":
        sources = list(sources)
        for source in sources:
            if source is None:
                raise InvalidSourceValue(raw="None", detail=f"{directive.value} source must not be None")
            if validator is not None:
                validator(directive, source)
        self._sources.setdefault(directive, {}).update(dict.fromkeys(sources))
        return self

    def build(self) -> ContentSecurityPolicy:
        return ContentSecurityPolicy(self._sources)
