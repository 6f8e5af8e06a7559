"""LicenseWall: dependency license compliance gate and SBOM generator."""

__version__ = "1.0.0"
