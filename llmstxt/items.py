"""Pydantic schemas and the mutable content model behind an llms.txt manifest."""

from __future__ import annotations

import json
import logging
import numbers
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from llmstxt.errors import DataError, ValidationError
from llmstxt.extractors.markdown import LINK_SEPARATOR
from llmstxt.extractors.sitemap import SitemapEntry
from llmstxt.extractors.urlnorm import derive_title

logger = logging.getLogger(__name__)


def _strip_required(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError("must be a string")
    stripped = value.strip()
    if not stripped:
        raise ValueError("must not be empty")
    if "\n" in stripped or "\r" in stripped:
        raise ValueError("must be a single line")
    return stripped


# ---------------------------------------------------------------------------
# Pydantic schemas
# ---------------------------------------------------------------------------

class ContentItem(BaseModel):
    """One ``- [title](url)`` line of a manifest section."""

    model_config = ConfigDict(frozen=True)

    title: str
    url: str

    @field_validator("title", "url", mode="before")
    @classmethod
    def strip_required(cls, v: Any) -> str:
        return _strip_required(v)

    @field_validator("title")
    @classmethod
    def title_without_link_separator(cls, v: str) -> str:
        if LINK_SEPARATOR in v:
            raise ValueError(f"must not contain {LINK_SEPARATOR!r}")
        return v


class ManifestMetadata(BaseModel):
    """Title and blockquote description heading a manifest."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str

    @field_validator("title", "description", mode="before")
    @classmethod
    def strip_required(cls, v: Any) -> str:
        return _strip_required(v)


class ParsedManifest(BaseModel):
    """Structured result of parsing llms.txt text.

    Serializes to the camelCase JSON shape via :meth:`to_dict` / :meth:`to_json`.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str
    core_content: list[ContentItem] = Field(default_factory=list, alias="coreContent")
    optional_content: list[ContentItem] = Field(default_factory=list, alias="optionalContent")

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


def _describe_errors(exc: PydanticValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'value'}: {err['msg']}"
        for err in exc.errors()
    )


def make_metadata(title: Any, description: Any) -> ManifestMetadata:
    """Build a :class:`ManifestMetadata`, raising our ValidationError on bad input."""
    try:
        return ManifestMetadata(title=title, description=description)
    except PydanticValidationError as exc:
        raise ValidationError(
            f"title and description must be non-empty strings ({_describe_errors(exc)})",
        ) from exc


def coerce_items(items: Any) -> list[ContentItem]:
    """Validate *items* as a list of content items.

    Accepts :class:`ContentItem` instances or ``{"title": ..., "url": ...}``
    mappings.  Either every item is valid and the full list is returned, or
    ValidationError names the first offending item.
    """
    if isinstance(items, (str, bytes, Mapping)) or not isinstance(items, Sequence):
        raise ValidationError(f"items must be a list, got {type(items).__name__}")

    validated: list[ContentItem] = []
    for index, item in enumerate(items):
        if isinstance(item, ContentItem):
            validated.append(item)
            continue
        if not isinstance(item, Mapping):
            raise ValidationError(
                f"Item {index} must be a mapping with title and url, got {item!r}",
            )
        try:
            validated.append(ContentItem(title=item.get("title"), url=item.get("url")))
        except PydanticValidationError as exc:
            raise ValidationError(
                f"Item {index} {dict(item)!r} must have non-empty string title and url "
                f"({_describe_errors(exc)})",
            ) from exc
    return validated


# ---------------------------------------------------------------------------
# Content model
# ---------------------------------------------------------------------------

class ContentModel:
    """Construction buffer for one manifest: metadata plus core/optional lists.

    Metadata is overwritten by each :meth:`set_metadata` call.  The content
    lists only grow; each ``add_*`` call is all-or-nothing.
    """

    def __init__(self) -> None:
        self._metadata: ManifestMetadata | None = None
        self._core: list[ContentItem] = []
        self._optional: list[ContentItem] = []

    @property
    def metadata(self) -> ManifestMetadata | None:
        return self._metadata

    @property
    def core_content(self) -> list[ContentItem]:
        return list(self._core)

    @property
    def optional_content(self) -> list[ContentItem]:
        return list(self._optional)

    def set_metadata(self, title: str, description: str) -> None:
        self._metadata = make_metadata(title, description)

    def add_core_content(self, items: Sequence[ContentItem | Mapping[str, Any]]) -> None:
        validated = coerce_items(items)
        self._core.extend(validated)
        logger.debug("Added %d core item(s)", len(validated))

    def add_optional_content(self, items: Sequence[ContentItem | Mapping[str, Any]]) -> None:
        validated = coerce_items(items)
        self._optional.extend(validated)
        logger.debug("Added %d optional item(s)", len(validated))

    def auto_generate_core_content(
        self,
        threshold: float,
        entries: Iterable[SitemapEntry],
    ) -> list[ContentItem]:
        """Derive content items from sitemap *entries* with ``priority >= threshold``.

        The result is returned, not appended; pass it to
        :meth:`add_core_content` to keep it.  Entries whose location cannot
        form a single-line item are skipped with a warning.

        Raises:
            DataError: If *entries* is empty (no sitemap loaded).
            ValidationError: If *threshold* is not a number.
        """
        if isinstance(threshold, bool) or not isinstance(threshold, numbers.Real):
            raise ValidationError(f"threshold must be a number, got {threshold!r}")
        entries = list(entries)
        if not entries:
            raise DataError("Sitemap URLs not loaded or empty")
        items: list[ContentItem] = []
        for entry in entries:
            if entry.priority < threshold:
                continue
            try:
                items.append(ContentItem(title=derive_title(entry.loc), url=entry.loc))
            except PydanticValidationError as exc:
                logger.warning("Skipping sitemap entry %r: %s", entry.loc, _describe_errors(exc))
        return items
