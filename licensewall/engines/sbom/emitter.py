"""SBOM emitter — project scanned dependencies into a CycloneDX document."""

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path

import structlog

from licensewall import __version__
from licensewall.engines.dependency_scanner.models import Dependency
from licensewall.engines.sbom.models import (
    Component,
    CycloneDXDocument,
    LicenseChoice,
    LicenseId,
    Metadata,
    SubjectComponent,
    Tool,
)

log = structlog.get_logger("licensewall.engine")

PURL_ECOSYSTEM = "npm"
TOOL = Tool(vendor="LicenseWall", name="licensewall", version=__version__)


def package_url(name: str, version: str, ecosystem: str = PURL_ECOSYSTEM) -> str:
    """Return the package URL for *name*@*version*.

    The ``@`` of a scoped name is percent-encoded as the purl spec requires.
    """
    if name.startswith("@"):
        name = "%40" + name[1:]
    return f"pkg:{ecosystem}/{name}@{version}"


def _component(dep: Dependency) -> Component:
    return Component(
        name=dep.name,
        version=dep.version,
        licenses=[LicenseChoice(license=LicenseId(id=dep.license))],
        purl=package_url(dep.name, dep.version),
    )


def _iso_timestamp(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def generate_sbom(
    dependencies: Iterable[Dependency],
    name: str | None = "project",
    *,
    timestamp: datetime | None = None,
) -> CycloneDXDocument:
    """Build a CycloneDX 1.5 document for *dependencies*.

    Output is deterministic apart from ``metadata.timestamp``, which defaults
    to the current UTC time.
    """
    metadata = Metadata(
        timestamp=_iso_timestamp(timestamp or datetime.now(timezone.utc)),
        tools=[TOOL],
        component=SubjectComponent(name=name) if name else None,
    )
    return CycloneDXDocument(
        metadata=metadata,
        components=[_component(dep) for dep in dependencies],
    )


def write_sbom(document: CycloneDXDocument, path: Path | str) -> Path:
    """Serialize *document* as indented JSON to *path* and return the path."""
    out_path = Path(path).resolve()
    out_path.write_text(json.dumps(document.to_dict(), indent=2) + "\n", encoding="utf-8")
    log.info("sbom.written", path=str(out_path), components=len(document.components))
    return out_path
