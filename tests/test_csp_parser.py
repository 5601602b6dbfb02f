"""Tests for trill.csp.parser — parsing and matching CSP header values."""

import itertools

import pytest

from trill.config import ParserConfig
from trill.csp import (
    ALL_HOSTS,
    HTTPS,
    NONE,
    SELF,
    UNSAFE_EVAL,
    UNSAFE_INLINE,
    ContentSecurityPolicy,
    Directive,
    Host,
    MediaType,
    Sandbox,
    Uri,
    host,
    nonce,
    parse_csp,
    sha512,
)
from trill.errors import (
    DuplicateDirective,
    EmptyDirectiveName,
    EmptyHeader,
    InvalidSourceSyntax,
    UnknownDirective,
)


def _default_src_policy() -> ContentSecurityPolicy:
    return (
        ContentSecurityPolicy.builder()
        .add_default_src(SELF, UNSAFE_EVAL, UNSAFE_INLINE)
        .build()
    )


class TestParse:
    def test_single_directive(self) -> None:
        policy = parse_csp("default-src 'self'")
        assert policy.directives == {Directive.DEFAULT_SRC: (SELF,)}

    def test_trailing_semicolon_optional(self) -> None:
        assert parse_csp("default-src 'self';") == parse_csp("default-src 'self'")

    def test_directive_names_case_insensitive(self) -> None:
        assert parse_csp("Default-SRC 'self'") == parse_csp("default-src 'self'")

    def test_extra_whitespace(self) -> None:
        policy = parse_csp("  script-src   'self'\t https:  ;  img-src * ; ")
        assert policy.directives == {
            Directive.SCRIPT_SRC: (SELF, HTTPS),
            Directive.IMG_SRC: (ALL_HOSTS,),
        }

    def test_keeps_first_seen_order(self) -> None:
        text = "script-src https: 'self' example.com;"
        assert parse_csp(text).canonical() == text

    def test_non_source_grammars(self) -> None:
        policy = parse_csp(
            "plugin-types application/pdf; report-uri /csp-report; "
            "sandbox allow-forms allow-scripts; block-all-mixed-content"
        )
        assert policy.directives == {
            Directive.PLUGIN_TYPES: (MediaType("application/pdf"),),
            Directive.REPORT_URI: (Uri("/csp-report"),),
            Directive.SANDBOX: (Sandbox.ALLOW_FORMS, Sandbox.ALLOW_SCRIPTS),
            Directive.BLOCK_ALL_MIXED_CONTENT: (),
        }

    def test_frame_ancestors_keyword_parses(self) -> None:
        policy = parse_csp("frame-ancestors 'self'")
        assert policy.directives[Directive.FRAME_ANCESTORS] == (SELF,)

    def test_duplicate_directive_first_wins(self) -> None:
        policy = parse_csp("default-src 'self'; default-src 'none'")
        assert policy.directives == {Directive.DEFAULT_SRC: (SELF,)}

    def test_duplicate_directive_strict(self) -> None:
        with pytest.raises(DuplicateDirective) as exc_info:
            parse_csp(
                "default-src 'self'; DEFAULT-SRC 'none'",
                config=ParserConfig(strict_duplicates=True),
            )
        assert exc_info.value.raw == "DEFAULT-SRC"


class TestParseErrors:
    def test_unknown_directive(self) -> None:
        with pytest.raises(UnknownDirective) as exc_info:
            parse_csp("default-src 'none'; foo http://domain.com")
        assert exc_info.value.raw == "foo"

    @pytest.mark.parametrize("text", ["", "   "])
    def test_empty(self, text: str) -> None:
        with pytest.raises(EmptyHeader):
            parse_csp(text)

    def test_empty_segment(self) -> None:
        with pytest.raises(EmptyDirectiveName):
            parse_csp("default-src 'self';; img-src *")

    def test_only_separators(self) -> None:
        with pytest.raises(EmptyDirectiveName):
            parse_csp(" ; ")

    def test_invalid_source(self) -> None:
        with pytest.raises(InvalidSourceSyntax) as exc_info:
            parse_csp("script-src 'self' 'strict-dynamic'")
        assert exc_info.value.raw == "'strict-dynamic'"

    def test_directive_without_sources(self) -> None:
        with pytest.raises(InvalidSourceSyntax):
            parse_csp("default-src;")

    def test_mixed_content_takes_no_value(self) -> None:
        with pytest.raises(InvalidSourceSyntax):
            parse_csp("block-all-mixed-content 'self'")

    def test_unknown_sandbox_token(self) -> None:
        with pytest.raises(InvalidSourceSyntax):
            parse_csp("sandbox allow-modals")


class TestMatches:
    @pytest.mark.parametrize(
        "order", list(itertools.permutations(["'self'", "'unsafe-eval'", "'unsafe-inline'"]))
    )
    def test_order_independent_within_directive(self, order: tuple[str, ...]) -> None:
        assert _default_src_policy().matches(f"default-src {' '.join(order)};")

    def test_missing_source(self) -> None:
        assert not _default_src_policy().matches("default-src 'self' 'unsafe-eval';")

    def test_extra_directive(self) -> None:
        actual = "default-src 'self' 'unsafe-eval' 'unsafe-inline'; img-src *"
        assert not _default_src_policy().matches(actual)

    def test_directive_order_independent(self) -> None:
        expected = ContentSecurityPolicy.builder().add_style_src(SELF).add_base_uri(NONE).build()
        assert expected.matches("style-src 'self'; base-uri 'none'")

    def test_unknown_directive_raises(self) -> None:
        with pytest.raises(UnknownDirective) as exc_info:
            _default_src_policy().matches("default-src 'none'; foo http://domain.com")
        assert exc_info.value.raw == "foo"

    def test_frame_ancestors_keyword_does_not_match(self) -> None:
        expected = ContentSecurityPolicy.builder().add_frame_ancestors(host("example.com")).build()
        assert not expected.matches("frame-ancestors 'self'")
        assert expected.matches("frame-ancestors example.com")

    def test_matches_agrees_with_parse(self) -> None:
        expected = _default_src_policy()
        for actual in ["default-src 'self'", "default-src 'unsafe-inline' 'self' 'unsafe-eval'"]:
            assert expected.matches(actual) == (parse_csp(actual) == expected)


class TestRoundTrip:
    def test_full_policy(self) -> None:
        policy = (
            ContentSecurityPolicy.builder()
            .add_base_uri(SELF)
            .add_default_src(NONE)
            .add_script_src(SELF, nonce("r4nd0m=="), sha512("abc+/=="))
            .add_style_src(SELF, UNSAFE_INLINE)
            .add_img_src(ALL_HOSTS, host("*.cdn.example.com", scheme="https", port="*"))
            .add_connect_src(host("api.example.com", scheme="wss", port=8443, path="/socket"))
            .add_frame_ancestors(host("example.com"), HTTPS)
            .add_plugin_types("application/pdf")
            .add_report_uri("https://example.com/csp-report")
            .add_sandbox(Sandbox.ALLOW_SAME_ORIGIN)
            .block_all_mixed_content()
            .build()
        )
        assert ContentSecurityPolicy.parse(policy.canonical()) == policy
        assert policy.matches(policy.canonical())

    def test_parsed_host_equals_built_host(self) -> None:
        policy = parse_csp("connect-src HTTPS://API.example.com:443/v1")
        assert policy.directives[Directive.CONNECT_SRC] == (
            Host("api.example.com", "https", "443", "/v1"),
        )
