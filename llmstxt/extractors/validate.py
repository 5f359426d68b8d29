"""Normalize-or-reject pass over llms.txt text.

Header lines are healed from the supplied metadata; list lines are not: any
line inside a section that is not an exact ``- [title](url)`` with a valid
absolute URL rejects the whole document.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from llmstxt.errors import StructureError, ValidationError
from llmstxt.extractors.markdown import (
    QUOTE_MARKER,
    TITLE_MARKER,
    dedupe_list_items,
    format_description,
    format_title,
    is_core_header,
    is_optional_header,
    parse_list_item,
)
from llmstxt.extractors.urlnorm import is_valid_url

if TYPE_CHECKING:
    from llmstxt.items import ManifestMetadata

logger = logging.getLogger(__name__)


def _find(lines: list[str], predicate: Callable[[str], bool]) -> int:
    return next((i for i, line in enumerate(lines) if predicate(line)), -1)


def _check_section(lines: list[str], section: str, list_label: str) -> None:
    for line in lines:
        if line == "":
            continue
        item = parse_list_item(line)
        if item is None:
            raise StructureError(f'Invalid line in {list_label}: "{line}"', line=line)
        if not is_valid_url(item.url):
            raise StructureError(f'Invalid URL in {section}: "{item.url}"', line=line, url=item.url)


def validate_and_correct(text: str, metadata: ManifestMetadata) -> str:
    """Return *text* normalized to the llms.txt dialect.

    Steps:
    - trailing whitespace is stripped from every line
    - line 0 becomes ``# <title>`` (inserted, or replaced if it is another H1)
    - line 1 becomes ``> <description>``, replacing any blockquote run there
    - every non-blank line under ``## Core Content`` / ``## Optional`` must be
      a list item with a valid URL
    - list items repeating an earlier URL are dropped

    Raises:
        StructureError: If ``## Core Content`` is missing or a section holds
            a malformed line or URL.
    """
    if not isinstance(text, str):
        raise ValidationError(f"text must be a string, got {type(text).__name__}")

    lines = [line.rstrip() for line in text.split("\n")]

    expected_title = format_title(metadata.title)
    if not lines[0].startswith(TITLE_MARKER):
        lines.insert(0, expected_title)
    elif lines[0] != expected_title:
        lines[0] = expected_title

    expected_description = format_description(metadata.description)
    if len(lines) < 2 or lines[1] != expected_description:
        while len(lines) > 1 and lines[1].startswith(QUOTE_MARKER):
            del lines[1]
        lines.insert(1, expected_description)

    core_index = _find(lines, is_core_header)
    if core_index == -1:
        raise StructureError("Missing '## Core Content' section")
    optional_index = _find(lines, is_optional_header)

    core_end = len(lines) if optional_index == -1 else optional_index
    _check_section(lines[core_index + 1:core_end], "Core Content", "Core Content list")
    if optional_index != -1:
        _check_section(lines[optional_index + 1:], "Optional section", "Optional section")

    corrected = list(dedupe_list_items(lines))
    if len(corrected) != len(lines):
        logger.debug("Removed %d duplicate list item(s)", len(lines) - len(corrected))
    return "\n".join(corrected)
