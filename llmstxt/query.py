"""llmstxt.query - fetch and persist llms.txt / sitemap documents.

Uses only the stdlib (``urllib``) for HTTP.  Locations may be ``http://`` or
``https://`` URLs, ``file://`` URLs, or plain filesystem paths.

Basic usage::

    from llmstxt.query import fetch_manifest, load_sitemap

    entries = load_sitemap("https://example.com/sitemap.xml")
    manifest = fetch_manifest("https://example.com/llms.txt")
    print(manifest.to_json())

Network fetches make one attempt, then one more with ``http`` and ``https``
swapped.  There are no further retries.
"""

from __future__ import annotations

import gzip
import logging
import os
import urllib.error
import urllib.request
import zlib
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from llmstxt.errors import TransportError
from llmstxt.extractors.manifest import parse_manifest
from llmstxt.extractors.sitemap import SitemapEntry, extract_sitemap_entries
from llmstxt.extractors.urlnorm import is_network_url, swap_scheme
from llmstxt.items import ParsedManifest

logger = logging.getLogger(__name__)

_DEFAULT_UA = os.getenv("LLMSTXT_USER_AGENT", "llmstxt/0.1 (+https://llmstxt.org/)")
DEFAULT_TIMEOUT = float(os.getenv("LLMSTXT_TIMEOUT", "30"))


def _decode_response_body(raw: bytes, headers: object | None, url: str) -> str:
    encoding = ""
    if headers is not None:
        try:
            encoding = str(headers.get("Content-Encoding", "")).lower().strip()
        except Exception:
            encoding = ""

    try:
        if encoding == "gzip":
            raw = gzip.decompress(raw)
        elif encoding in ("deflate", "zlib"):
            raw = zlib.decompress(raw)
    except (OSError, zlib.error) as exc:
        raise TransportError(f"{encoding} decompression failed for {url}: {exc}", url=url) from exc

    charset = "utf-8"
    if headers is not None:
        try:
            charset = headers.get_content_charset("utf-8") or "utf-8"
        except Exception:
            charset = "utf-8"
    try:
        return raw.decode(charset, errors="replace")
    except (LookupError, ValueError):
        return raw.decode("utf-8", errors="replace")


# ---------------------------------------------------------------------------
# Low-level readers
# ---------------------------------------------------------------------------

def _local_path(location: str) -> Path:
    if location.startswith("file://"):
        return Path(urllib.request.url2pathname(urlparse(location).path))
    return Path(location)


def _read_local(location: str) -> str:
    path = _local_path(location)
    try:
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise TransportError(f"Failed to read local file: {exc}", url=location) from exc


def _http_get(url: str, *, timeout: float, user_agent: str | None) -> str:
    """Single GET of *url*; any non-200 outcome raises TransportError."""
    req = urllib.request.Request(
        url,
        headers={
            "User-Agent": user_agent or _DEFAULT_UA,
            "Accept": "text/plain,text/markdown,application/xml,text/xml;q=0.9,*/*;q=0.8",
            "Accept-Encoding": "gzip, deflate",
        },
    )
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            status = getattr(resp, "status", 200)
            if status != 200:
                raise TransportError(
                    f"Failed to fetch {url} (Status: {status})", url=url, status=status,
                )
            return _decode_response_body(resp.read(), resp.headers, url)
    except urllib.error.HTTPError as exc:
        raise TransportError(
            f"Failed to fetch {url} (Status: {exc.code})", url=url, status=exc.code,
        ) from exc
    except urllib.error.URLError as exc:
        raise TransportError(f"URL error fetching {url}: {exc.reason}", url=url) from exc
    except TransportError:
        raise
    except OSError as exc:
        raise TransportError(f"Network error fetching {url}: {exc}", url=url) from exc


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def fetch_text(
    location: str,
    *,
    timeout: float | None = None,
    user_agent: str | None = None,
) -> str:
    """Return the full text at *location*.

    Args:
        location:   ``http(s)://`` URL, ``file://`` URL or filesystem path.
        timeout:    Socket timeout in seconds (default ``LLMSTXT_TIMEOUT`` or 30).
        user_agent: Override the default User-Agent string.

    Returns:
        The decoded body or file content.

    Raises:
        TransportError: If the file cannot be read, or both the given and the
            scheme-swapped URL fail.
    """
    location = location.strip()
    scheme = urlparse(location).scheme.lower()
    if scheme == "file" or len(scheme) <= 1:
        logger.debug("Reading local file %s", location)
        return _read_local(location)
    if not is_network_url(location):
        raise TransportError(f"Unsupported URL scheme: {scheme!r}", url=location)

    effective_timeout = DEFAULT_TIMEOUT if timeout is None else timeout
    try:
        return _http_get(location, timeout=effective_timeout, user_agent=user_agent)
    except TransportError as first:
        alt_url = swap_scheme(location)
        logger.warning("%s; retrying as %s", first, alt_url)
        try:
            return _http_get(alt_url, timeout=effective_timeout, user_agent=user_agent)
        except TransportError as second:
            raise TransportError(
                f"Failed to fetch URL with both protocols: {first}; fallback error: {second}",
                url=location,
                status=second.status,
            ) from second


def save_text(location: str, text: str) -> Path:
    """Write *text* to *location* (path or ``file://`` URL), overwriting it.

    Parent directories are created as needed.

    Returns:
        The path written.

    Raises:
        TransportError: On any filesystem error.
    """
    path = _local_path(location.strip())
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise TransportError(f"Failed to write {path}: {exc}", url=location) from exc
    logger.info("Wrote %d chars to %s", len(text), path)
    return path


def load_sitemap(location: str, **kwargs: Any) -> list[SitemapEntry]:
    """Fetch the sitemap at *location* and return its entries.

    Keyword arguments are forwarded to :func:`fetch_text`.
    """
    entries = extract_sitemap_entries(fetch_text(location, **kwargs))
    logger.info("Loaded %d sitemap entries from %s", len(entries), location)
    return entries


def fetch_manifest(location: str, **kwargs: Any) -> ParsedManifest:
    """Fetch llms.txt from *location* (URL or path) and parse it."""
    return parse_manifest(fetch_text(location, **kwargs))


def parse_manifest_file(path: str | Path) -> ParsedManifest:
    """Read llms.txt from a local file and parse it."""
    return parse_manifest(_read_local(str(path)))
