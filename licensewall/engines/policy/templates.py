"""Policy templates for ``licensewall init``."""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any

import structlog

from licensewall.engines.policy.loader import POLICY_FILENAME
from licensewall.exceptions import ConfigExistsError, TemplateError

log = structlog.get_logger("licensewall.policy")

TEMPLATE_NAMES: tuple[str, ...] = ("permissive", "moderate", "strict")

# None = unlimited
TIER_MAX_DEPENDENCIES: dict[str, int | None] = {
    "free": 100,
    "pro": None,
    "enterprise": None,
}


def load_template(template: str) -> dict[str, Any]:
    """Return the decoded JSON body of a bundled policy template."""
    if template not in TEMPLATE_NAMES:
        raise TemplateError(f"Unknown template: {template}")
    resource = resources.files("licensewall.engines.policy") / "data" / f"{template}.json"
    return json.loads(resource.read_text(encoding="utf-8"))


def init_config(
    template: str,
    target_dir: Path | str,
    *,
    force: bool = False,
    tier: str = "free",
) -> Path:
    """Write ``.licensewallrc.json`` into *target_dir* from *template*.

    Returns the written path. Raises :class:`ConfigExistsError` if the file
    is already there and *force* is not set.
    """
    if tier not in TIER_MAX_DEPENDENCIES:
        raise TemplateError(f"Unknown tier: {tier}")

    target = Path(target_dir).resolve()
    config_path = target / POLICY_FILENAME
    if config_path.exists() and not force:
        raise ConfigExistsError(str(config_path))

    config = {**load_template(template), "tier": tier}
    max_deps = TIER_MAX_DEPENDENCIES[tier]
    if max_deps is not None:
        config["maxDependencies"] = max_deps

    target.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(config, indent=2) + "\n", encoding="utf-8")
    log.info("policy.initialized", path=str(config_path), template=template, tier=tier)
    return config_path
