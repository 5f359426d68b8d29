"""llmstxt.manager - High-level LLMSManager class.

Bundles a sitemap location, the loaded entries and a content model into one
object covering the whole sitemap → llms.txt → JSON workflow.

Usage::

    from llmstxt import LLMSManager

    manager = LLMSManager("https://example.com/sitemap.xml")
    manager.load_sitemap()
    manager.set_metadata("My Site", "The best site ever")
    manager.add_core_content(manager.auto_generate_core_content(0.4))
    manager.add_optional_content([{"title": "Extra", "url": "https://example.com/extra"}])
    manager.save_to_file("llms.txt")

    # Parse an existing manifest (no manager state needed)
    data = LLMSManager.parse_url("https://example.com/llms.txt").to_dict()
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from llmstxt.errors import ValidationError
from llmstxt.extractors.manifest import parse_manifest
from llmstxt.extractors.markdown import render_manifest
from llmstxt.extractors.sitemap import SitemapEntry
from llmstxt.extractors.validate import validate_and_correct
from llmstxt.items import ContentItem, ContentModel, ParsedManifest
from llmstxt.query import fetch_manifest, load_sitemap, parse_manifest_file, save_text

_SITEMAP_SCHEMES = ("http://", "https://", "file://")


def _require_location(value: Any, name: str) -> str:
    if isinstance(value, Path):
        value = str(value)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{name} must be non-empty string")
    return value.strip()


class LLMSManager:
    """Sitemap-driven llms.txt builder.

    Args:
        sitemap_url: ``http://``, ``https://`` or ``file://`` URL of the
                     sitemap to load.
        timeout:     Per-request network timeout in seconds (default:
                     ``LLMSTXT_TIMEOUT`` or 30).
    """

    def __init__(self, sitemap_url: str, *, timeout: float | None = None) -> None:
        sitemap_url = _require_location(sitemap_url, "sitemap_url")
        if not sitemap_url.startswith(_SITEMAP_SCHEMES):
            raise ValidationError("sitemap_url must start with http://, https:// or file://")
        self._sitemap_url = sitemap_url
        self._timeout = timeout
        self._entries: list[SitemapEntry] = []
        self._model = ContentModel()

    @property
    def sitemap_url(self) -> str:
        return self._sitemap_url

    @property
    def model(self) -> ContentModel:
        return self._model

    # ------------------------------------------------------------------
    # Sitemap
    # ------------------------------------------------------------------

    def load_sitemap(self) -> None:
        """Fetch and scan the sitemap, replacing any previously loaded entries.

        Raises:
            :class:`~llmstxt.errors.TransportError`: If the sitemap cannot be
                fetched over either scheme or read from disk.
            :class:`~llmstxt.errors.ParseError`: If it holds no usable entries.
        """
        self._entries = load_sitemap(self._sitemap_url, timeout=self._timeout)

    def get_sitemap_entries(self) -> list[SitemapEntry]:
        return list(self._entries)

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    def set_metadata(self, title: str, description: str) -> None:
        self._model.set_metadata(title, description)

    def add_core_content(self, items: Sequence[ContentItem | Mapping[str, Any]]) -> None:
        self._model.add_core_content(items)

    def add_optional_content(self, items: Sequence[ContentItem | Mapping[str, Any]]) -> None:
        self._model.add_optional_content(items)

    def auto_generate_core_content(self, threshold: float = 0.5) -> list[ContentItem]:
        """Derive core items from loaded sitemap entries with ``priority >= threshold``."""
        return self._model.auto_generate_core_content(threshold, self._entries)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def generate(self) -> str:
        return render_manifest(self._model)

    def validate(self, text: str) -> str:
        """Normalize *text* against this manager's metadata.

        Raises:
            :class:`~llmstxt.errors.ValidationError`: If metadata is not set.
            :class:`~llmstxt.errors.StructureError`: If *text* cannot be repaired.
        """
        metadata = self._model.metadata
        if metadata is None:
            raise ValidationError("set_metadata() must be called before validate()")
        return validate_and_correct(text, metadata)

    def save_to_file(self, filepath: str | Path) -> Path:
        """Render the manifest and write it to *filepath*, overwriting it."""
        filepath = _require_location(filepath, "filepath")
        return save_text(filepath, self.generate())

    # ------------------------------------------------------------------
    # Parsing (stateless)
    # ------------------------------------------------------------------

    @staticmethod
    def parse(content: str) -> ParsedManifest:
        return parse_manifest(content)

    @staticmethod
    def parse_file(filepath: str | Path) -> ParsedManifest:
        filepath = _require_location(filepath, "filepath")
        return parse_manifest_file(filepath)

    @staticmethod
    def parse_url(url: str, **kwargs: Any) -> ParsedManifest:
        """Fetch llms.txt from *url* (scheme fallback applies) and parse it."""
        return fetch_manifest(_require_location(url, "url"), **kwargs)
