"""Extraction sub-package: sitemap scanning, URL helpers and the llms.txt grammar."""

from .markdown import parse_list_item, render_manifest
from .sitemap import SitemapEntry, extract_sitemap_entries
from .urlnorm import derive_title, is_valid_url, swap_scheme
from .validate import validate_and_correct

__all__ = [
    "SitemapEntry",
    "derive_title",
    "extract_sitemap_entries",
    "is_valid_url",
    "parse_list_item",
    "render_manifest",
    "swap_scheme",
    "validate_and_correct",
]
