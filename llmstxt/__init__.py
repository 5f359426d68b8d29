"""llmstxt - build, validate and parse llms.txt manifests from sitemaps.

Quick usage::

    from llmstxt import LLMSManager

    manager = LLMSManager("https://example.com/sitemap.xml")
    manager.load_sitemap()
    manager.set_metadata("Example", "Guides and API reference for Example")
    manager.add_core_content(manager.auto_generate_core_content(0.5))
    print(manager.generate())

Pure functions (no network)::

    from llmstxt import ContentModel, extract_sitemap_entries, parse_manifest, render_manifest

    model = ContentModel()
    model.set_metadata("Example", "Guides")
    model.add_core_content(model.auto_generate_core_content(0.5, extract_sitemap_entries(xml)))
    data = parse_manifest(render_manifest(model)).to_dict()
"""

from llmstxt.errors import (
    DataError,
    LLMSTxtError,
    ParseError,
    StructureError,
    TransportError,
    ValidationError,
)
from llmstxt.extractors import (
    SitemapEntry,
    derive_title,
    extract_sitemap_entries,
    render_manifest,
    validate_and_correct,
)
from llmstxt.extractors.manifest import parse_manifest
from llmstxt.items import ContentItem, ContentModel, ManifestMetadata, ParsedManifest
from llmstxt.manager import LLMSManager
from llmstxt.query import fetch_manifest, fetch_text, load_sitemap, save_text

__version__ = "0.1.0"
__all__ = [
    "ContentItem",
    "ContentModel",
    "DataError",
    "LLMSManager",
    "LLMSTxtError",
    "ManifestMetadata",
    "ParseError",
    "ParsedManifest",
    "SitemapEntry",
    "StructureError",
    "TransportError",
    "ValidationError",
    "derive_title",
    "extract_sitemap_entries",
    "fetch_manifest",
    "fetch_text",
    "load_sitemap",
    "parse_manifest",
    "render_manifest",
    "save_text",
    "validate_and_correct",
]
