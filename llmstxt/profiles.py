"""YAML-based generation profiles.

A profile supplies defaults for ``llmstxt generate``::

    default:
      threshold: 0.5
    domains:
      example.com:
        title: Example
        description: Docs and guides for Example
        optional:
          - title: Changelog
            url: https://example.com/changelog
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import yaml

from llmstxt.errors import TransportError, ValidationError

PROFILE_KEYS: frozenset[str] = frozenset(
    {"title", "description", "threshold", "core", "optional", "validate", "out"},
)

# Keys holding lists of {title, url} mappings
_LINK_KEYS: frozenset[str] = frozenset({"core", "optional"})


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _domain_settings(domains: Mapping[str, Any], host: str) -> Mapping[str, Any]:
    """Return the settings of the most specific ``domains`` key covering *host*."""
    candidates = [
        key for key, cfg in domains.items()
        if isinstance(key, str) and isinstance(cfg, Mapping)
        and (host == key.lower() or host.endswith("." + key.lower()))
    ]
    if not candidates:
        return {}
    return domains[max(candidates, key=len)]


def _generate_settings(layer: Mapping[str, Any], source: str) -> dict[str, Any]:
    settings: dict[str, Any] = {}
    for key, value in layer.items():
        if key not in PROFILE_KEYS:
            continue
        if key in _LINK_KEYS and value is not None and not isinstance(value, list):
            raise ValidationError(
                f"profile key {key!r} in {source} must be a list of {{title, url}} mappings",
            )
        settings[key] = value
    return settings


def load_profile(path: str | Path, url: str) -> dict[str, Any]:
    """Load YAML profile and return merged ``generate`` settings for a sitemap URL.

    The ``default`` mapping is overlaid with the longest ``domains`` key that
    equals the URL's host or is a parent domain of it.  Keys ``generate``
    does not understand are dropped.

    Raises:
        TransportError: If the file cannot be read.
        ValidationError: If the file is not valid YAML, or ``core`` /
            ``optional`` is not a list.
    """
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise TransportError(f"Failed to read profile {path}: {exc}", url=str(path)) from exc
    try:
        data = _mapping(yaml.safe_load(raw))
    except yaml.YAMLError as exc:
        raise ValidationError(f"Invalid YAML in profile {path}: {exc}") from exc

    host = (urlparse(url).hostname or "").lower()
    settings = _generate_settings(_mapping(data.get("default")), "default")
    settings.update(_generate_settings(_domain_settings(_mapping(data.get("domains")), host), host))
    return settings
