"""Reduce raw manifest license declarations to a single SPDX-style string."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from licensewall.engines.dependency_scanner.models import UNKNOWN_LICENSE

SPDX_OR = " OR "


def _reduce(entry: Any) -> str:
    if isinstance(entry, Mapping):
        return str(entry.get("type"))
    return str(entry)


def normalize_license(raw: Any) -> str:
    """Return the canonical license string for a manifest ``license`` value.

    Accepts a plain string, a legacy ``{"type": ..., "url": ...}`` object or a
    list of either. Lists become an ``OR`` disjunction. No validation against
    the SPDX registry is done, so unfamiliar identifiers pass through.
    """
    if not raw:
        return UNKNOWN_LICENSE
    if isinstance(raw, str):
        return raw
    if isinstance(raw, Mapping):
        if "type" in raw:
            return str(raw["type"])
        return UNKNOWN_LICENSE
    if isinstance(raw, (list, tuple)):
        return SPDX_OR.join(_reduce(entry) for entry in raw)
    return UNKNOWN_LICENSE


def manifest_license(manifest: Mapping[str, Any]) -> str:
    """Normalize the license declared by a parsed ``package.json``."""
    return normalize_license(manifest.get("license") or manifest.get("licenses"))
