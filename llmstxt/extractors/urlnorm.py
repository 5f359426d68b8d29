"""URL helpers: title derivation, syntax checks and scheme swapping."""

from __future__ import annotations

import re
from urllib.parse import unquote, urlparse

from llmstxt.extractors.markdown import LINK_SEPARATOR

NETWORK_SCHEMES: frozenset[str] = frozenset({"http", "https"})

# Schemes whose URLs must carry a host to be meaningful
_HOST_SCHEMES: frozenset[str] = frozenset({"http", "https", "ftp", "ws", "wss"})

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_SEPARATOR_RUN_RE = re.compile(r"[-_\s]+")
_EXTENSION_RE = re.compile(r"\.\w+$")
_WORD_START_RE = re.compile(r"\b\w")
_WHITESPACE_RE = re.compile(r"\s")


def derive_title(url: str) -> str:
    """Turn the last path segment of *url* into a human-readable title.

    Example:
        https://example.com/docs/getting_started.html → Getting Started

    The root path, or a segment that cannot stand as a list-item title, yields
    the hostname.  Never raises: anything that cannot be parsed comes back
    unchanged.
    """
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
        if not parsed.scheme or not hostname:
            return url

        path = parsed.path
        if not path or path == "/":
            return hostname

        if path.endswith("/"):
            path = path[:-1]
        segment = unquote(path.rsplit("/", 1)[-1], errors="strict")
    except (ValueError, TypeError, AttributeError):
        return url

    title = _SEPARATOR_RUN_RE.sub(" ", segment)
    title = _EXTENSION_RE.sub("", title)
    title = _WORD_START_RE.sub(lambda m: m.group(0).upper(), title)
    if not title.strip() or LINK_SEPARATOR in title:
        return hostname
    return title


def is_valid_url(url: str) -> bool:
    """Return True if *url* is a syntactically valid absolute URL.

    Requires a scheme, a host for network schemes, a numeric port when one is
    given, and no embedded whitespace.
    """
    if not url or _WHITESPACE_RE.search(url):
        return False
    try:
        parsed = urlparse(url)
        parsed.port  # noqa: B018 - raises ValueError on a malformed port
    except ValueError:
        return False
    if not parsed.scheme or not _SCHEME_RE.match(parsed.scheme):
        return False
    if parsed.scheme.lower() in _HOST_SCHEMES:
        return bool(parsed.hostname)
    return bool(parsed.netloc or parsed.path)


def is_network_url(location: str) -> bool:
    """Return True if *location* uses the http or https scheme."""
    try:
        return urlparse(location).scheme.lower() in NETWORK_SCHEMES
    except ValueError:
        return False


def swap_scheme(url: str) -> str:
    """Return *url* with ``http`` and ``https`` exchanged.

    Example:
        https://example.com/sitemap.xml → http://example.com/sitemap.xml
    """
    scheme, sep, rest = url.partition(":")
    if not sep:
        return url
    if scheme.lower() == "https":
        return f"http:{rest}"
    if scheme.lower() == "http":
        return f"https:{rest}"
    return url
