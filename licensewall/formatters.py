"""Render scanned dependencies for the console."""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import asdict

from licensewall.engines.dependency_scanner.models import Dependency, ScannedDependency

_COLUMNS = ("Name", "Version", "License", "Depth")


def _row(dep: Dependency) -> tuple[str, str, str, str]:
    depth = str(dep.depth) if isinstance(dep, ScannedDependency) else "-"
    return (dep.name, dep.version, dep.license, depth)


def format_table(deps: Sequence[Dependency]) -> str:
    """Aligned text table sorted by name, then version."""
    if not deps:
        return "No dependencies found."
    rows = [_row(d) for d in sorted(deps, key=lambda d: (d.name, d.version))]
    widths = [max(len(col), *(len(r[i]) for r in rows)) for i, col in enumerate(_COLUMNS)]

    def line(cells: Sequence[str]) -> str:
        return "  ".join(cell.ljust(width) for cell, width in zip(cells, widths)).rstrip()

    out = [line(_COLUMNS), line(["-" * w for w in widths])]
    out.extend(line(r) for r in rows)
    return "\n".join(out)


def format_json(deps: Sequence[Dependency]) -> str:
    return json.dumps([asdict(d) for d in deps], indent=2)
