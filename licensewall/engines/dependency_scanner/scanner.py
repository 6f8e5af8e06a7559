"""Scanner — walk a node_modules tree and collect deduplicated dependencies."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import structlog

from licensewall.engines.dependency_scanner.detector import detect_license_file
from licensewall.engines.dependency_scanner.license import manifest_license
from licensewall.engines.dependency_scanner.manifest import (
    MANIFEST_NAME,
    ManifestReader,
    read_manifest,
)
from licensewall.engines.dependency_scanner.models import (
    DEFAULT_VERSION,
    UNKNOWN_LICENSE,
    Dependency,
    LicenseDetection,
    ScannedDependency,
)

log = structlog.get_logger("licensewall.engine")

PACKAGE_STORE = "node_modules"
SCOPE_PREFIX = "@"

Detector = Callable[[Path], LicenseDetection]


def _list_dir(path: Path) -> list[Path]:
    try:
        return sorted(path.iterdir())
    except OSError:
        return []


def iter_package_dirs(store: Path) -> Iterator[tuple[str, Path]]:
    """Yield ``(name, directory)`` for every candidate package in *store*.

    Scope directories (``@scope``) are expanded one level so that the yielded
    name is the full ``@scope/name``. Hidden entries such as ``.bin`` are
    ignored.
    """
    for entry in _list_dir(store):
        if entry.name.startswith("."):
            continue
        if entry.name.startswith(SCOPE_PREFIX):
            for sub in _list_dir(entry):
                if sub.name.startswith("."):
                    continue
                yield f"{entry.name}/{sub.name}", sub
        else:
            yield entry.name, entry


class Scanner:
    """Dependency graph walker with pluggable manifest reading and detection.

    One instance may run several scans; diagnostics are reset per scan.
    """

    def __init__(
        self,
        manifest_reader: ManifestReader = read_manifest,
        detector: Detector = detect_license_file,
    ) -> None:
        self._read_manifest = manifest_reader
        self._detect = detector
        self.skipped_manifests: list[str] = []
        self.unclassified_license_files: list[str] = []

    # ── public API ───────────────────────────────────────────────────────

    def scan(self, root: Path | str) -> list[ScannedDependency]:
        """Return one :class:`ScannedDependency` per distinct (name, version)."""
        self._reset()
        store = Path(root) / PACKAGE_STORE
        if not store.is_dir():
            log.debug("scanner.no_package_store", root=str(root))
            return []

        seen: dict[tuple[str, str], ScannedDependency] = {}
        self._walk(store, depth=0, parent=None, seen=seen, branch=frozenset())
        log.debug("scanner.complete", root=str(root), count=len(seen))
        return list(seen.values())

    def scan_flat(self, root: Path | str) -> list[Dependency]:
        """Return direct dependencies only, without recursion or dedup."""
        self._reset()
        store = Path(root) / PACKAGE_STORE
        if not store.is_dir():
            return []
        deps: list[Dependency] = []
        for name, pkg_dir in iter_package_dirs(store):
            dep = self.read_package(pkg_dir, name)
            if dep is not None:
                deps.append(dep)
        return deps

    def read_package(self, pkg_dir: Path, name: str) -> Dependency | None:
        """Build a :class:`Dependency` for *pkg_dir*, or ``None`` if it is not one."""
        manifest = self._read_manifest(pkg_dir)
        if manifest is None:
            if (pkg_dir / MANIFEST_NAME).is_file():
                self.skipped_manifests.append(str(pkg_dir / MANIFEST_NAME))
                log.debug("scanner.manifest_skipped", path=str(pkg_dir))
            return None

        license_id = manifest_license(manifest)
        if license_id == UNKNOWN_LICENSE:
            license_id = self._fallback_license(pkg_dir)

        return Dependency(
            name=name,
            version=str(manifest.get("version") or DEFAULT_VERSION),
            license=license_id,
            path=str(pkg_dir),
        )

    # ── internals ────────────────────────────────────────────────────────

    def _reset(self) -> None:
        self.skipped_manifests = []
        self.unclassified_license_files = []

    def _fallback_license(self, pkg_dir: Path) -> str:
        detection = self._detect(pkg_dir)
        if detection.license:
            return detection.license
        if detection.found_file:
            location = str(pkg_dir / detection.source_file)  # type: ignore[operator]
            self.unclassified_license_files.append(location)
            log.debug("scanner.license_unclassified", path=location)
        return UNKNOWN_LICENSE

    def _walk(
        self,
        store: Path,
        depth: int,
        parent: str | None,
        seen: dict[tuple[str, str], ScannedDependency],
        branch: frozenset[Path],
    ) -> None:
        try:
            real = store.resolve()
        except (OSError, RuntimeError):
            log.warning("scanner.unresolvable_store", path=str(store))
            return
        if real in branch:
            log.warning("scanner.symlink_loop", path=str(store))
            return
        branch = branch | {real}

        for name, pkg_dir in iter_package_dirs(store):
            dep = self.read_package(pkg_dir, name)
            if dep is None:
                continue

            key = (dep.name, dep.version)
            existing = seen.get(key)
            if existing is None:
                seen[key] = ScannedDependency(
                    name=dep.name,
                    version=dep.version,
                    license=dep.license,
                    path=dep.path,
                    depth=depth,
                    depended_by=[parent] if parent is not None else [],
                )
            else:
                if parent is not None and parent not in existing.depended_by:
                    existing.depended_by.append(parent)
                if depth < existing.depth:
                    existing.depth = depth

            # Sub-dependencies of a merged duplicate still need visiting.
            nested = pkg_dir / PACKAGE_STORE
            if nested.is_dir():
                self._walk(nested, depth + 1, name, seen, branch)


def scan_deep(root: Path | str) -> list[ScannedDependency]:
    """Scan *root*/node_modules recursively (no diagnostics kept)."""
    return Scanner().scan(root)


def scan_node_modules(root: Path | str) -> list[Dependency]:
    """Scan only the top level of *root*/node_modules."""
    return Scanner().scan_flat(root)
