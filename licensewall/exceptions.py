"""Custom exceptions for LicenseWall."""


class LicenseWallError(Exception):
    """Base exception for all LicenseWall errors."""


class PolicyError(LicenseWallError):
    """Raised when a policy file cannot be read or is malformed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid policy file {path}: {reason}")


class TemplateError(LicenseWallError):
    """Raised when a policy template name or tier is not recognized."""


class ConfigExistsError(LicenseWallError):
    """Raised when init would overwrite an existing policy file."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Config file already exists at {path}. Use --force to overwrite.")
