"""Trill — structured HTTP header values for Python.

Parses, builds, serializes and matches ``Content-Security-Policy``,
``Set-Cookie``, ``Cache-Control``, ``Strict-Transport-Security``,
``X-Frame-Options``, ``X-XSS-Protection`` and HTTP date values. Matching
is structural: the actual header is parsed with the same grammar and
compared field by field, so directive or attribute order on the wire
never causes a false negative.

Basic usage::

    from trill import CacheControl, ContentSecurityPolicy
    from trill.csp import SELF, UNSAFE_INLINE

    policy = ContentSecurityPolicy.builder().add_script_src(SELF, UNSAFE_INLINE).build()
    policy.matches("script-src 'unsafe-inline' 'self'")  # True

    CacheControl.parse("max-age=3600, must-revalidate").canonical()
    # "must-revalidate, max-age=3600"
"""

__version__ = "0.1.0.dev0"
__all__ = [
    "CacheControl",
    "ContentSecurityPolicy",
    "Cookie",
    "FrameOptions",
    "HeaderBuildError",
    "HeaderParseError",
    "HeaderValue",
    "Headers",
    "HttpDate",
    "HttpResponse",
    "ParserConfig",
    "SameSite",
    "SimpleResponse",
    "StrictTransportSecurity",
    "TrillError",
    "Visibility",
    "XssProtection",
]

# Public name -> defining module. Keeps ``import trill`` cheap.
_LAZY_IMPORTS: dict[str, str] = {
    "CacheControl": "trill.cache_control",
    "Visibility": "trill.cache_control",
    "ContentSecurityPolicy": "trill.csp.policy",
    "Cookie": "trill.cookies",
    "SameSite": "trill.cookies",
    "HeaderBuildError": "trill.errors",
    "HeaderParseError": "trill.errors",
    "TrillError": "trill.errors",
    "HeaderValue": "trill.header_value",
    "Headers": "trill.http.response",
    "HttpResponse": "trill.http.response",
    "SimpleResponse": "trill.http.response",
    "HttpDate": "trill.dates",
    "ParserConfig": "trill.config",
    "StrictTransportSecurity": "trill.hsts",
    "FrameOptions": "trill.frame_options",
    "XssProtection": "trill.xss_protection",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API."""
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
