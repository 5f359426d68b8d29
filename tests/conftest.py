"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture
def sitemap_xml() -> str:
    return _read_fixture("sitemap.xml")


@pytest.fixture
def docs_sitemap_xml() -> str:
    return _read_fixture("docs_sitemap.xml")


@pytest.fixture
def llms_txt() -> str:
    return _read_fixture("llms.txt")


@pytest.fixture
def messy_llms_txt() -> str:
    return _read_fixture("messy_llms.txt")


@pytest.fixture
def profile_path() -> Path:
    return FIXTURES_DIR / "profile.yaml"


@pytest.fixture
def sitemap_file(tmp_path: Path, sitemap_xml: str) -> Path:
    path = tmp_path / "sitemap.xml"
    path.write_text(sitemap_xml, encoding="utf-8")
    return path
