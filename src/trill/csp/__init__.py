"""Content-Security-Policy: sources, directives, policy value and parser.

Usage::

    from trill.csp import SELF, ContentSecurityPolicy, host

    policy = (
        ContentSecurityPolicy.builder()
        .add_default_src(SELF)
        .add_frame_ancestors(host("example.com", scheme="https"))
        .build()
    )
    assert policy.matches(response_header)
"""

from trill.csp.directives import Directive
from trill.csp.parser import parse_csp
from trill.csp.policy import ContentSecurityPolicy, ContentSecurityPolicyBuilder
from trill.csp.sources import (
    ALL_HOSTS,
    DATA,
    HTTP,
    HTTPS,
    NONE,
    SELF,
    UNSAFE_EVAL,
    UNSAFE_INLINE,
    Hash,
    Host,
    Keyword,
    MediaType,
    Nonce,
    Sandbox,
    Scheme,
    Source,
    Uri,
    WildcardHost,
    host,
    host_from_url,
    nonce,
    scheme,
    sha256,
    sha384,
    sha512,
)

__all__ = [
    "ALL_HOSTS",
    "DATA",
    "HTTP",
    "HTTPS",
    "NONE",
    "SELF",
    "UNSAFE_EVAL",
    "UNSAFE_INLINE",
    "ContentSecurityPolicy",
    "ContentSecurityPolicyBuilder",
    "Directive",
    "Hash",
    "Host",
    "Keyword",
    "MediaType",
    "Nonce",
    "Sandbox",
    "Scheme",
    "Source",
    "Uri",
    "WildcardHost",
    "host",
    "host_from_url",
    "nonce",
    "parse_csp",
    "scheme",
    "sha256",
    "sha384",
    "sha512",
]
