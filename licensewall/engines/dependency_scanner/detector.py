"""Rule-based license detection from license files shipped inside a package."""

from __future__ import annotations

import re
from collections.abc import Callable
from pathlib import Path

import structlog

from licensewall.engines.dependency_scanner.models import LicenseDetection

log = structlog.get_logger("licensewall.engine")

LICENSE_FILENAMES: tuple[str, ...] = (
    "LICENSE",
    "LICENSE.md",
    "LICENSE.txt",
    "LICENCE",
    "LICENCE.md",
    "LICENCE.txt",
    "COPYING",
    "COPYING.md",
)

Predicate = Callable[[str], bool]


def _contains(*needles: str) -> Predicate:
    def predicate(text: str) -> bool:
        return all(needle in text for needle in needles)

    return predicate


def _word(keyword: str) -> Predicate:
    pattern = re.compile(rf"\b{re.escape(keyword)}\b")
    return lambda text: pattern.search(text) is not None


# Evaluated top to bottom against the uppercased, whitespace-collapsed text.
# License bodies name other licenses (GPL-3.0 mentions the Affero and Lesser
# GPLs, MPL-2.0 lists all three), so versioned rules match the title line as
# one contiguous phrase. MPL-2.0 precedes the GNU rules and AGPL/LGPL precede
# GPL. Single keywords come last and only apply when no full text matched.
LICENSE_RULES: tuple[tuple[Predicate, str], ...] = (
    (_contains("MOZILLA PUBLIC LICENSE VERSION 2.0"), "MPL-2.0"),
    (_contains("GNU AFFERO GENERAL PUBLIC LICENSE VERSION 3"), "AGPL-3.0"),
    (_contains("GNU LESSER GENERAL PUBLIC LICENSE VERSION 3"), "LGPL-3.0"),
    (_contains("GNU LESSER GENERAL PUBLIC LICENSE VERSION 2.1"), "LGPL-2.1"),
    (_contains("GNU GENERAL PUBLIC LICENSE VERSION 3"), "GPL-3.0"),
    (_contains("GNU GENERAL PUBLIC LICENSE VERSION 2"), "GPL-2.0"),
    (_contains("APACHE LICENSE VERSION 2.0"), "Apache-2.0"),
    (_contains("PERMISSION IS HEREBY GRANTED, FREE OF CHARGE"), "MIT"),
    (
        _contains("PERMISSION TO USE, COPY, MODIFY, AND/OR DISTRIBUTE THIS SOFTWARE"),
        "ISC",
    ),
    (
        _contains(
            "REDISTRIBUTION AND USE IN SOURCE AND BINARY FORMS",
            "NEITHER THE NAME",
        ),
        "BSD-3-Clause",
    ),
    (_contains("REDISTRIBUTION AND USE IN SOURCE AND BINARY FORMS"), "BSD-2-Clause"),
    (
        _contains("THIS IS FREE AND UNENCUMBERED SOFTWARE RELEASED INTO THE PUBLIC DOMAIN"),
        "Unlicense",
    ),
    (_word("MIT"), "MIT"),
    (_word("ISC"), "ISC"),
    (_word("BSD"), "BSD"),
    (_word("GPL"), "GPL"),
    (_word("APACHE"), "Apache"),
)


def classify_license_text(text: str) -> str | None:
    """Return the first rule's license id matching *text*, or ``None``."""
    normalized = " ".join(text.upper().split())
    for predicate, license_id in LICENSE_RULES:
        if predicate(normalized):
            return license_id
    return None


def detect_license_file(pkg_dir: Path | str) -> LicenseDetection:
    """Probe *pkg_dir* for a conventional license file and classify it.

    Only the first readable candidate is classified. Unreadable candidates
    are skipped, and nothing here raises on filesystem or decoding problems.
    """
    base = Path(pkg_dir)
    for filename in LICENSE_FILENAMES:
        candidate = base / filename
        try:
            if not candidate.is_file():
                continue
            content = candidate.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            log.debug("detector.unreadable", path=str(candidate), error=str(exc))
            continue
        return LicenseDetection(license=classify_license_text(content), source_file=filename)
    return LicenseDetection(license=None)


def detect_license_from_file(pkg_dir: Path | str) -> str | None:
    """Shorthand for :func:`detect_license_file` returning only the license id."""
    return detect_license_file(pkg_dir).license
