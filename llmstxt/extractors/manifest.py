"""Lenient llms.txt parser.

Finds the title and description anywhere in the document and collects list
items under the Core Content / Optional headers.  Unlike
:mod:`llmstxt.extractors.validate` it skips lines it does not understand and
does not check URL syntax.
"""

from __future__ import annotations

import logging

from llmstxt.errors import StructureError, ValidationError
from llmstxt.extractors.markdown import (
    ITEM_PREFIX,
    QUOTE_MARKER,
    TITLE_MARKER,
    is_core_header,
    is_optional_header,
    parse_list_item,
)
from llmstxt.items import ContentItem, ParsedManifest

logger = logging.getLogger(__name__)


def _first_with_marker(lines: list[str], marker: str) -> str | None:
    for line in lines:
        if line.startswith(marker):
            return line[len(marker):].strip()
    return None


def parse_manifest(text: str) -> ParsedManifest:
    """Parse llms.txt *text* into a :class:`~llmstxt.items.ParsedManifest`.

    Raises:
        ValidationError: If *text* is not a string.
        StructureError: If the title line or description line is missing, or
            no core item is found.
    """
    if not isinstance(text, str):
        raise ValidationError(f"content must be a string, got {type(text).__name__}")

    lines = [line.strip() for line in text.split("\n")]

    title = _first_with_marker(lines, TITLE_MARKER)
    if title is None:
        raise StructureError("Missing # Title line")
    description = _first_with_marker(lines, QUOTE_MARKER)
    if description is None:
        raise StructureError("Missing > Description line")

    sections: dict[str, list[ContentItem]] = {"core": [], "optional": []}
    mode: str | None = None
    for line in lines:
        if is_core_header(line):
            mode = "core"
            continue
        if is_optional_header(line):
            mode = "optional"
            continue
        if mode is None or not line.startswith(ITEM_PREFIX):
            continue
        item = parse_list_item(line)
        if item is None:
            logger.debug("Skipping malformed list line: %s", line)
            continue
        sections[mode].append(ContentItem(title=item.title, url=item.url))

    if not sections["core"]:
        raise StructureError("No core content items found in llms.txt")

    return ParsedManifest(
        title=title,
        description=description,
        core_content=sections["core"],
        optional_content=sections["optional"],
    )
