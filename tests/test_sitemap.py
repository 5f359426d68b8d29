"""Unit tests for the sitemap scanner."""

from __future__ import annotations

import pytest

from llmstxt.errors import ParseError
from llmstxt.extractors.sitemap import DEFAULT_PRIORITY, SitemapEntry, extract_sitemap_entries


def _urlset(*blocks: str) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        + "\n".join(blocks)
        + "\n</urlset>"
    )


class TestExtractSitemapEntries:
    def test_two_entries_in_order(self, sitemap_xml):
        entries = extract_sitemap_entries(sitemap_xml)
        assert entries == [
            SitemapEntry(loc="https://example.com/page-one", priority=0.8),
            SitemapEntry(loc="https://example.com/page-two", priority=0.4),
        ]

    def test_entry_count_matches_blocks(self):
        blocks = [f"<url><loc>https://example.com/p{i}</loc></url>" for i in range(25)]
        entries = extract_sitemap_entries(_urlset(*blocks))
        assert [e.loc for e in entries] == [f"https://example.com/p{i}" for i in range(25)]

    def test_missing_priority_defaults(self):
        entries = extract_sitemap_entries(_urlset("<url><loc>https://example.com/a</loc></url>"))
        assert entries[0].priority == DEFAULT_PRIORITY == 0.5

    def test_non_numeric_priority_defaults(self):
        entries = extract_sitemap_entries(
            _urlset("<url><loc>https://example.com/a</loc><priority>high</priority></url>"),
        )
        assert entries[0].priority == 0.5

    def test_nan_priority_defaults(self):
        entries = extract_sitemap_entries(
            _urlset("<url><loc>https://example.com/a</loc><priority>nan</priority></url>"),
        )
        assert entries[0].priority == 0.5

    @pytest.mark.parametrize("raw", ["0_9", "-0.9", "+0.9", "1e-1", "inf", "0x1", "0.9.1", "", "٠.٩"])
    def test_non_decimal_priority_defaults(self, raw):
        entries = extract_sitemap_entries(
            _urlset(f"<url><loc>https://example.com/a</loc><priority>{raw}</priority></url>"),
        )
        assert entries[0].priority == 0.5

    @pytest.mark.parametrize(("raw", "expected"), [("1", 1.0), ("1.", 1.0), (".25", 0.25), ("1.5", 1.5)])
    def test_plain_decimal_priority_parsed(self, raw, expected):
        entries = extract_sitemap_entries(
            _urlset(f"<url><loc>https://example.com/a</loc><priority>{raw}</priority></url>"),
        )
        assert entries[0].priority == expected

    def test_priority_whitespace_tolerated(self):
        entries = extract_sitemap_entries(
            _urlset("<url><loc>https://example.com/a</loc><priority> 0.9 </priority></url>"),
        )
        assert entries[0].priority == 0.9

    def test_block_without_loc_skipped(self, docs_sitemap_xml):
        entries = extract_sitemap_entries(docs_sitemap_xml)
        assert len(entries) == 7
        assert all(e.loc for e in entries)

    def test_case_insensitive_tags_and_trimmed_loc(self, docs_sitemap_xml):
        entries = extract_sitemap_entries(docs_sitemap_xml)
        assert entries[1] == SitemapEntry(
            loc="https://docs.example.com/getting_started.html", priority=0.9,
        )

    def test_xml_entities_unescaped(self, docs_sitemap_xml):
        entries = extract_sitemap_entries(docs_sitemap_xml)
        assert entries[3].loc == "https://docs.example.com/search?q=a&page=2"
        assert entries[3].priority == 0.5

    def test_duplicates_pass_through(self, docs_sitemap_xml):
        entries = extract_sitemap_entries(docs_sitemap_xml)
        dupes = [e for e in entries if e.loc == "https://docs.example.com/page-one"]
        assert [e.priority for e in dupes] == [0.3, 0.6]

    def test_first_loc_wins(self):
        entries = extract_sitemap_entries(
            _urlset("<url><loc>https://example.com/a</loc><loc>https://example.com/b</loc></url>"),
        )
        assert [e.loc for e in entries] == ["https://example.com/a"]

    def test_blank_loc_skipped(self):
        entries = extract_sitemap_entries(
            _urlset(
                "<url><loc>   </loc></url>",
                "<url><loc>https://example.com/kept</loc></url>",
            ),
        )
        assert [e.loc for e in entries] == ["https://example.com/kept"]

    def test_urlset_tag_not_treated_as_url_block(self):
        with pytest.raises(ParseError):
            extract_sitemap_entries(_urlset())


class TestExtractSitemapErrors:
    def test_empty_string_raises(self):
        with pytest.raises(ParseError, match="No URLs"):
            extract_sitemap_entries("")

    def test_html_document_raises(self):
        with pytest.raises(ParseError):
            extract_sitemap_entries("<html><body>Not a sitemap</body></html>")

    def test_non_string_raises(self):
        with pytest.raises(ParseError, match="string"):
            extract_sitemap_entries(b"<url><loc>https://example.com</loc></url>")  # type: ignore[arg-type]

    def test_entries_are_immutable(self, sitemap_xml):
        entry = extract_sitemap_entries(sitemap_xml)[0]
        with pytest.raises(AttributeError):
            entry.loc = "https://other.example"  # type: ignore[misc]
