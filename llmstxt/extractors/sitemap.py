"""Sitemap ``<urlset>`` scanner.

Returns a list of SitemapEntry namedtuples (loc, priority) without making any
network requests.  Network I/O is handled by the caller (query.load_sitemap).

The scan is tag-based rather than a full XML parse:
  - every ``<url>...</url>`` block is visited in document order
  - the first ``<loc>`` inside a block is required, blocks without one are skipped
  - the first ``<priority>`` is optional and defaults to 0.5
  - duplicate locations are kept; deduplication happens when rendering
"""

from __future__ import annotations

import logging
import re
from typing import NamedTuple
from xml.sax.saxutils import unescape

from llmstxt.errors import ParseError

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 0.5

_URL_BLOCK_RE = re.compile(r"<url>(.*?)</url>", re.IGNORECASE | re.DOTALL)
_LOC_RE = re.compile(r"<loc>([^<]+)</loc>", re.IGNORECASE)
_PRIORITY_RE = re.compile(r"<priority>([^<]*)</priority>", re.IGNORECASE)
_DECIMAL_RE = re.compile(r"[0-9]+(?:\.[0-9]*)?|\.[0-9]+")

# unescape() already handles &amp; &lt; &gt;
_XML_ENTITIES = {"&quot;": '"', "&apos;": "'"}


class SitemapEntry(NamedTuple):
    """Single ``<url>`` entry from a sitemap."""

    loc: str
    priority: float = DEFAULT_PRIORITY


def _parse_priority(raw: str | None) -> float:
    """Return *raw* as a float, or the default when it is absent or not a plain decimal."""
    if raw is None:
        return DEFAULT_PRIORITY
    raw = raw.strip()
    if not _DECIMAL_RE.fullmatch(raw):
        return DEFAULT_PRIORITY
    return float(raw)


def extract_sitemap_entries(xml_text: str) -> list[SitemapEntry]:
    """Scan sitemap XML and return a list of :class:`SitemapEntry`.

    Args:
        xml_text: Raw text of a sitemap ``<urlset>`` document.

    Returns:
        Entries in document order.  Duplicates are preserved.

    Raises:
        ParseError: If *xml_text* is not a string or contains no ``<url>``
            block with a usable ``<loc>``.
    """
    if not isinstance(xml_text, str):
        raise ParseError(f"Sitemap XML must be a string, got {type(xml_text).__name__}")

    entries: list[SitemapEntry] = []
    for block in _URL_BLOCK_RE.finditer(xml_text):
        body = block.group(1)
        loc_match = _LOC_RE.search(body)
        if not loc_match:
            continue
        loc = unescape(loc_match.group(1).strip(), _XML_ENTITIES)
        if not loc:
            continue

        priority_match = _PRIORITY_RE.search(body)
        priority = _parse_priority(priority_match.group(1) if priority_match else None)
        entries.append(SitemapEntry(loc=loc, priority=priority))

    if not entries:
        raise ParseError("No URLs parsed from sitemap XML")

    logger.debug("Parsed %d sitemap entries", len(entries))
    return entries
