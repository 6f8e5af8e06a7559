"""SBOM engine — CycloneDX bill of materials generation."""

from licensewall.engines.sbom.emitter import generate_sbom, package_url, write_sbom
from licensewall.engines.sbom.models import Component, CycloneDXDocument

__all__ = ["Component", "CycloneDXDocument", "generate_sbom", "package_url", "write_sbom"]
