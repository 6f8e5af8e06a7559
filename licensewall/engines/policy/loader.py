"""Load license policies from JSON policy files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import structlog

from licensewall.engines.policy.models import Policy
from licensewall.exceptions import PolicyError

log = structlog.get_logger("licensewall.policy")

POLICY_FILENAME = ".licensewallrc.json"
LEGACY_POLICY_FILENAME = ".licensewall.json"

# Strong-copyleft identifiers denied when a project has no policy file.
DEFAULT_DENY: tuple[str, ...] = ("AGPL-3.0", "GPL-3.0", "SSPL-1.0", "EUPL")


def default_policy() -> Policy:
    return Policy(deny=list(DEFAULT_DENY))


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]


def policy_from_dict(raw: dict[str, Any]) -> Policy:
    """Build a :class:`Policy` from a decoded policy document.

    Non-list ``allow``/``deny`` values are ignored and ``failOnUnknown`` is
    only enabled by a literal ``true``.
    """
    limit = raw.get("maxDependencies")
    if isinstance(limit, bool) or not isinstance(limit, int):
        limit = None
    return Policy(
        allow=_string_list(raw.get("allow")),
        deny=_string_list(raw.get("deny")),
        fail_on_unknown=raw.get("failOnUnknown") is True,
        max_dependencies=limit,
    )


def _read_policy_file(path: Path) -> Policy:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise PolicyError(str(path), f"cannot read file ({exc.strerror or exc})") from exc
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise PolicyError(str(path), f"invalid JSON ({exc})") from exc
    if not isinstance(raw, dict):
        raise PolicyError(str(path), "top-level value must be a JSON object")
    return policy_from_dict(raw)


def load_policy(path: Path | str) -> Policy:
    """Load the policy at *path*; a missing file yields an empty policy."""
    policy_path = Path(path).resolve()
    if not policy_path.exists():
        return Policy()
    return _read_policy_file(policy_path)


def resolve_policy(policy_path: Path | str | None, project_dir: Path | str) -> Policy:
    """Pick the policy used for a check run.

    An explicit *policy_path* must exist. Otherwise the project's
    ``.licensewallrc.json`` or legacy ``.licensewall.json`` is used, falling
    back to :func:`default_policy`.
    """
    if policy_path is not None:
        explicit = Path(policy_path).resolve()
        if not explicit.is_file():
            raise PolicyError(str(explicit), "file not found")
        return _read_policy_file(explicit)

    base = Path(project_dir).resolve()
    for filename in (POLICY_FILENAME, LEGACY_POLICY_FILENAME):
        candidate = base / filename
        if candidate.is_file():
            log.debug("policy.loaded", path=str(candidate))
            return _read_policy_file(candidate)

    log.debug("policy.default", project_dir=str(base))
    return default_policy()
