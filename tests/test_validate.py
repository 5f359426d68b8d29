"""Tests for the llms.txt validator/corrector."""

from __future__ import annotations

import pytest

from llmstxt.errors import StructureError, ValidationError
from llmstxt.extractors.markdown import render_manifest
from llmstxt.extractors.validate import validate_and_correct
from llmstxt.items import ContentModel, make_metadata

META = make_metadata("Test Site", "A test description")
DOCS_META = make_metadata("Example Docs", "Guides and API reference for Example")

VALID = (
    "# Test Site\n"
    "> A test description\n"
    "\n"
    "## Core Content\n"
    "- [Page One](https://example.com/page-one)\n"
    "\n"
    "## Optional\n"
    "- [Optional Link](https://example.com/optional)\n"
)


# ---------------------------------------------------------------------------
# Header healing
# ---------------------------------------------------------------------------

class TestHeaderCorrection:
    def test_valid_text_unchanged(self):
        assert validate_and_correct(VALID, META) == VALID

    def test_wrong_title_replaced(self):
        text = VALID.replace("# Test Site", "# Something Else")
        assert validate_and_correct(text, META) == VALID

    def test_missing_title_inserted(self):
        text = VALID.replace("# Test Site\n", "")
        assert validate_and_correct(text, META) == VALID

    def test_title_inserted_above_non_h1_first_line(self):
        text = "## Core Content\n- [A](https://example.com/a)"
        corrected = validate_and_correct(text, META)
        assert corrected.split("\n")[:3] == ["# Test Site", "> A test description", "## Core Content"]

    def test_wrong_description_replaced(self):
        text = VALID.replace("> A test description", "> Outdated")
        assert validate_and_correct(text, META) == VALID

    def test_multi_line_blockquote_collapsed(self):
        text = VALID.replace("> A test description", "> Line one\n> Line two\n> Line three")
        assert validate_and_correct(text, META) == VALID

    def test_missing_description_inserted(self):
        text = VALID.replace("> A test description\n", "")
        corrected = validate_and_correct(text, META)
        assert corrected.split("\n")[:3] == ["# Test Site", "> A test description", ""]

    def test_trailing_whitespace_stripped(self):
        text = VALID.replace("(https://example.com/page-one)", "(https://example.com/page-one)   \t")
        assert validate_and_correct(text, META) == VALID

    def test_crlf_line_endings_normalized(self):
        assert validate_and_correct(VALID.replace("\n", "\r\n"), META) == VALID

    def test_headers_case_insensitive(self):
        text = VALID.replace("## Core Content", "## CORE CONTENT").replace("## Optional", "## optional")
        assert validate_and_correct(text, META) == text

    def test_messy_fixture(self, messy_llms_txt):
        assert validate_and_correct(messy_llms_txt, DOCS_META) == (
            "# Example Docs\n"
            "> Guides and API reference for Example\n"
            "\n"
            "Some introductory prose that is not part of any section.\n"
            "\n"
            "## core content\n"
            "- [Getting Started](https://docs.example.com/getting_started.html)\n"
            "\n"
            "- [Rest Reference](https://docs.example.com/api/rest-reference/)\n"
            "\n"
            "## OPTIONAL\n"
            "- [Changelog](https://docs.example.com/changelog)\n"
        )


# ---------------------------------------------------------------------------
# Section validation
# ---------------------------------------------------------------------------

class TestSectionValidation:
    def test_missing_core_section(self):
        with pytest.raises(StructureError, match="Core Content"):
            validate_and_correct("# Test Site\n> A test description\n\n- [A](https://example.com/a)", META)

    def test_optional_section_not_required(self):
        text = "# Test Site\n> A test description\n\n## Core Content\n- [A](https://example.com/a)\n"
        assert validate_and_correct(text, META) == text

    def test_malformed_core_line(self):
        text = VALID.replace(
            "- [Page One](https://example.com/page-one)",
            "- [Page One](https://example.com/page-one)\n- missing-brackets",
        )
        with pytest.raises(StructureError, match="Core Content list") as exc_info:
            validate_and_correct(text, META)
        assert exc_info.value.line == "- missing-brackets"

    def test_prose_inside_core_rejected(self):
        text = VALID.replace("## Core Content\n", "## Core Content\nSee below.\n")
        with pytest.raises(StructureError, match='"See below."'):
            validate_and_correct(text, META)

    def test_invalid_core_url(self):
        text = VALID.replace("https://example.com/page-one", "not a url")
        with pytest.raises(StructureError, match="Invalid URL in Core Content") as exc_info:
            validate_and_correct(text, META)
        assert exc_info.value.url == "not a url"

    def test_relative_url_rejected(self):
        text = VALID.replace("https://example.com/page-one", "/page-one")
        with pytest.raises(StructureError, match="/page-one"):
            validate_and_correct(text, META)

    def test_malformed_optional_line(self):
        text = VALID + "* [Bullet](https://example.com/bullet)\n"
        with pytest.raises(StructureError, match="Optional section"):
            validate_and_correct(text, META)

    def test_invalid_optional_url(self):
        text = VALID.replace("https://example.com/optional", "optional")
        with pytest.raises(StructureError, match='Invalid URL in Optional section: "optional"'):
            validate_and_correct(text, META)

    def test_optional_before_core_rejects_core_header(self):
        text = (
            "# Test Site\n> A test description\n\n"
            "## Optional\n- [B](https://example.com/b)\n\n"
            "## Core Content\n- [A](https://example.com/a)\n"
        )
        with pytest.raises(StructureError, match="## Core Content"):
            validate_and_correct(text, META)

    def test_non_string_rejected(self):
        with pytest.raises(ValidationError):
            validate_and_correct(None, META)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Dedup and idempotence
# ---------------------------------------------------------------------------

class TestDedupAndIdempotence:
    def test_global_dedup_first_wins(self):
        text = VALID.replace(
            "- [Optional Link](https://example.com/optional)",
            "- [Again](https://example.com/page-one)\n- [Optional Link](https://example.com/optional)",
        )
        corrected = validate_and_correct(text, META)
        assert "Again" not in corrected
        assert corrected == VALID

    @pytest.mark.parametrize(
        "text",
        [
            VALID,
            VALID.replace("# Test Site", "# Old"),
            "## Core Content\n- [A](https://example.com/a)\n- [B](https://example.com/a)",
            "# Old\n> x\n> y\n\nIntro\n## Core Content\n- [A](https://example.com/a)  \n",
        ],
    )
    def test_idempotent(self, text):
        once = validate_and_correct(text, META)
        assert validate_and_correct(once, META) == once

    def test_multi_line_description_cannot_reach_validator(self):
        with pytest.raises(ValidationError, match="single line"):
            make_metadata("Test Site", "Line one\nLine two")

    def test_bracketed_titles_idempotent(self):
        model = ContentModel()
        model.set_metadata("Test Site", "A test description")
        model.add_core_content([
            {"title": "Notes (beta)]", "url": "https://example.com/notes"},
            {"title": "[v2] API", "url": "https://example.com/v2"},
        ])
        rendered = render_manifest(model)
        once = validate_and_correct(rendered, model.metadata)
        assert once == rendered
        assert validate_and_correct(once, model.metadata) == once

    def test_rendered_output_passes_unchanged(self):
        model = ContentModel()
        model.set_metadata("Test Site", "A test description")
        model.add_core_content([{"title": "Page One", "url": "https://example.com/page-one"}])
        model.add_optional_content([{"title": "Optional Link", "url": "https://example.com/optional"}])
        rendered = render_manifest(model)
        assert validate_and_correct(rendered, model.metadata) == rendered
