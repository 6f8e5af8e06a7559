"""Data models for the dependency scanner engine."""

from __future__ import annotations

from dataclasses import dataclass, field

UNKNOWN_LICENSE = "UNKNOWN"
DEFAULT_VERSION = "0.0.0"


@dataclass
class Dependency:
    """A single installed package found in a package store."""

    name: str
    version: str
    license: str
    path: str


@dataclass
class ScannedDependency(Dependency):
    """A deduplicated package with its position in the dependency graph."""

    depth: int = 0
    depended_by: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class LicenseDetection:
    """Outcome of probing a package directory for a license file.

    ``source_file`` is ``None`` when no candidate file exists; a set
    ``source_file`` with ``license=None`` means the file was found but could
    not be classified.
    """

    license: str | None
    source_file: str | None = None

    @property
    def found_file(self) -> bool:
        return self.source_file is not None
