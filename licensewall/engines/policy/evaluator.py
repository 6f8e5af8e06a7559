"""Policy evaluator — assign a verdict to every scanned dependency.

Rules, in order of precedence:

1. any SPDX ``OR`` alternative matches the deny list -> ``denied``
2. allow list configured: an alternative matches -> ``allowed``, else ``unknown``
3. no allow list, ``fail_on_unknown`` and license is ``UNKNOWN`` -> ``unknown``
4. otherwise -> ``allowed``

Deny is absolute: a license listed in both lists is denied.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from licensewall.engines.dependency_scanner.models import UNKNOWN_LICENSE, Dependency
from licensewall.engines.policy.models import Policy, PolicyResult, Verdict, Violation

_OR_SPLIT_RE = re.compile(r"\s+OR\s+")


def parse_spdx_parts(license_expr: str) -> list[str]:
    """Split a disjunctive SPDX expression into its alternatives."""
    return [part.strip() for part in _OR_SPLIT_RE.split(license_expr) if part.strip()]


def matches_license(part: str, entry: str) -> bool:
    """Case-insensitive match allowing a hyphen-delimited suffix on *part*.

    ``AGPL-3.0-only`` matches ``AGPL-3.0``; ``GPL-3.0`` does not match ``GPL-3``.
    """
    a = part.lower()
    b = entry.lower()
    return a == b or a.startswith(b + "-")


def matches_any(parts: Iterable[str], entries: Sequence[str]) -> bool:
    return any(matches_license(part, entry) for part in parts for entry in entries)


def evaluate_dependency(policy: Policy, dep: Dependency) -> PolicyResult:
    parts = parse_spdx_parts(dep.license)

    if policy.deny and matches_any(parts, policy.deny):
        verdict = Verdict.DENIED
    elif policy.allow:
        verdict = Verdict.ALLOWED if matches_any(parts, policy.allow) else Verdict.UNKNOWN
    elif policy.fail_on_unknown and dep.license == UNKNOWN_LICENSE:
        verdict = Verdict.UNKNOWN
    else:
        verdict = Verdict.ALLOWED

    return PolicyResult(
        name=dep.name,
        version=dep.version,
        license=dep.license,
        verdict=verdict,
    )


def evaluate_policy(policy: Policy, dependencies: Iterable[Dependency]) -> list[PolicyResult]:
    """Evaluate *policy* against *dependencies*, preserving input order."""
    return [evaluate_dependency(policy, dep) for dep in dependencies]


def _reason(result: PolicyResult) -> str:
    if result.verdict is Verdict.DENIED:
        return f'License "{result.license}" is denied by policy'
    if result.license == UNKNOWN_LICENSE:
        return "Unknown license, manual review required"
    return f'License "{result.license}" not in allow list'


def find_violations(policy: Policy, dependencies: Sequence[Dependency]) -> list[Violation]:
    """Return one :class:`Violation` per dependency that is not allowed.

    A policy ``max_dependencies`` limit adds a project-level violation when
    the dependency count exceeds it.
    """
    violations = [
        Violation(
            name=result.name,
            version=result.version,
            license=result.license,
            verdict=result.verdict,
            reason=_reason(result),
        )
        for result in evaluate_policy(policy, dependencies)
        if result.verdict is not Verdict.ALLOWED
    ]

    limit = policy.max_dependencies
    if limit is not None and len(dependencies) > limit:
        violations.append(
            Violation(
                name="project",
                version="",
                license="",
                verdict=None,
                reason=f"{len(dependencies)} dependencies exceed the limit of {limit}",
            )
        )
    return violations
