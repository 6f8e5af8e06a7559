"""Data models for license policy evaluation."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class Verdict(str, enum.Enum):
    ALLOWED = "allowed"
    DENIED = "denied"
    UNKNOWN = "unknown"


@dataclass
class Policy:
    """Allow/deny license lists. An empty list disables that rule."""

    allow: list[str] = field(default_factory=list)
    deny: list[str] = field(default_factory=list)
    fail_on_unknown: bool = False
    max_dependencies: int | None = None


@dataclass(frozen=True)
class PolicyResult:
    name: str
    version: str
    license: str
    verdict: Verdict


@dataclass(frozen=True)
class Violation:
    """A non-allowed policy result with a human-readable reason."""

    name: str
    version: str
    license: str
    verdict: Verdict | None
    reason: str

    @property
    def label(self) -> str:
        return f"{self.name}@{self.version}" if self.version else self.name
