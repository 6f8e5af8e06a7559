"""Dependency scanner engine — discover installed packages and their licenses."""

from licensewall.engines.dependency_scanner.detector import (
    detect_license_file,
    detect_license_from_file,
)
from licensewall.engines.dependency_scanner.license import normalize_license
from licensewall.engines.dependency_scanner.models import (
    UNKNOWN_LICENSE,
    Dependency,
    LicenseDetection,
    ScannedDependency,
)
from licensewall.engines.dependency_scanner.scanner import (
    Scanner,
    scan_deep,
    scan_node_modules,
)

__all__ = [
    "Dependency",
    "LicenseDetection",
    "ScannedDependency",
    "Scanner",
    "UNKNOWN_LICENSE",
    "detect_license_file",
    "detect_license_from_file",
    "normalize_license",
    "scan_deep",
    "scan_node_modules",
]
