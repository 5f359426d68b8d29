"""llms.txt line grammar and the manifest renderer.

The dialect is line-oriented::

    # <title>
    > <description>

    ## Core Content
    - [<title>](<url>)

    ## Optional
    - [<title>](<url>)

Lines are classified by hand rather than with one catch-all pattern so header
matching and list-item shape stay exact.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from llmstxt.items import ContentItem, ContentModel

logger = logging.getLogger(__name__)

TITLE_MARKER = "# "
QUOTE_MARKER = "> "
ITEM_PREFIX = "- ["
CORE_HEADER = "## Core Content"
OPTIONAL_HEADER = "## Optional"
LINK_SEPARATOR = "]("


class ListItem(NamedTuple):
    title: str
    url: str


# ---------------------------------------------------------------------------
# Line classifier
# ---------------------------------------------------------------------------

def is_core_header(line: str) -> bool:
    return line.lower() == CORE_HEADER.lower()


def is_optional_header(line: str) -> bool:
    return line.lower() == OPTIONAL_HEADER.lower()


def parse_list_item(line: str) -> ListItem | None:
    """Split a ``- [title](url)`` line, or return None if it has another shape.

    The title runs up to the first ``](`` (at least one character in), the URL
    from there to the closing ``)`` that ends the line.  Both must be non-blank.
    """
    if not line.startswith(ITEM_PREFIX) or not line.endswith(")"):
        return None
    body = line[len(ITEM_PREFIX):-1]
    split_at = body.find(LINK_SEPARATOR, 1)
    if split_at == -1:
        return None
    title = body[:split_at]
    url = body[split_at + len(LINK_SEPARATOR):]
    if not title.strip() or not url.strip():
        return None
    return ListItem(title=title, url=url)


def format_title(title: str) -> str:
    return f"{TITLE_MARKER}{title}"


def format_description(description: str) -> str:
    return f"{QUOTE_MARKER}{description}"


def format_item(title: str, url: str) -> str:
    return f"{ITEM_PREFIX}{title}{LINK_SEPARATOR}{url})"


def dedupe_list_items(lines: Iterable[str]) -> Iterator[str]:
    """Yield *lines*, dropping any list item whose URL was already yielded."""
    seen: set[str] = set()
    for line in lines:
        item = parse_list_item(line)
        if item is not None:
            if item.url in seen:
                logger.debug("Dropping duplicate URL %s", item.url)
                continue
            seen.add(item.url)
        yield line


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------

def _section(header: str, items: list[ContentItem]) -> list[str]:
    lines = [header]
    lines.extend(format_item(item.title, item.url) for item in items)
    lines.append("")
    return lines


def render_manifest(model: ContentModel) -> str:
    """Render *model* as llms.txt markdown.

    Core items precede optional items and a URL is emitted only once across
    both sections.  The ``## Optional`` section is omitted when empty.
    """
    metadata = model.metadata
    title = metadata.title if metadata else ""
    description = metadata.description if metadata else ""

    lines: list[str] = [format_title(title), format_description(description), ""]
    lines.extend(_section(CORE_HEADER, model.core_content))

    optional = model.optional_content
    if optional:
        lines.extend(_section(OPTIONAL_HEADER, optional))

    return "\n".join(dedupe_list_items(lines))
