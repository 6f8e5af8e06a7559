"""package.json reader — tolerant of missing and malformed manifests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Protocol

import structlog

log = structlog.get_logger("licensewall.engine")

MANIFEST_NAME = "package.json"


class ManifestReader(Protocol):
    """Callable returning a parsed manifest, or ``None`` when there is none."""

    def __call__(self, pkg_dir: Path) -> dict[str, Any] | None: ...


def read_manifest(pkg_dir: Path) -> dict[str, Any] | None:
    manifest_path = pkg_dir / MANIFEST_NAME
    if not manifest_path.is_file():
        return None
    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        log.debug("manifest.unparseable", path=str(manifest_path), error=str(exc))
        return None
    if not isinstance(data, dict):
        log.debug("manifest.not_an_object", path=str(manifest_path))
        return None
    return data
