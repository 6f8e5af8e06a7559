"""License policy engine — load policies and evaluate dependencies against them."""

from licensewall.engines.policy.evaluator import evaluate_policy, find_violations
from licensewall.engines.policy.loader import (
    DEFAULT_DENY,
    default_policy,
    load_policy,
    resolve_policy,
)
from licensewall.engines.policy.models import Policy, PolicyResult, Verdict, Violation
from licensewall.engines.policy.templates import init_config

__all__ = [
    "DEFAULT_DENY",
    "Policy",
    "PolicyResult",
    "Verdict",
    "Violation",
    "default_policy",
    "evaluate_policy",
    "find_violations",
    "init_config",
    "load_policy",
    "resolve_policy",
]
