"""Tests for ``init`` policy templates."""

from __future__ import annotations

import json

import pytest

from licensewall.engines.policy.loader import load_policy
from licensewall.engines.policy.templates import TEMPLATE_NAMES, init_config, load_template
from licensewall.exceptions import ConfigExistsError, TemplateError

PERMISSIVE = ["MIT", "ISC", "BSD-2-Clause", "BSD-3-Clause", "Apache-2.0", "CC0-1.0", "Unlicense"]
COPYLEFT = {"AGPL-3.0", "GPL-2.0", "GPL-3.0"}


def _read(path):
    return json.loads(path.read_text())


class TestInitConfig:
    def test_permissive(self, tmp_path):
        config = _read(init_config("permissive", tmp_path))
        assert sorted(config["allow"]) == sorted(PERMISSIVE)
        assert set(config["deny"]) == COPYLEFT

    def test_moderate_adds_weak_copyleft(self, tmp_path):
        config = _read(init_config("moderate", tmp_path))
        assert set(config["allow"]) == set(PERMISSIVE) | {"LGPL-2.1", "LGPL-3.0", "MPL-2.0"}
        assert len(config["allow"]) == 10
        assert set(config["deny"]) == COPYLEFT

    def test_strict(self, tmp_path):
        config = _read(init_config("strict", tmp_path))
        assert config["allow"] == ["MIT", "ISC", "BSD-2-Clause", "Apache-2.0"]

    def test_free_tier_default(self, tmp_path):
        config = _read(init_config("permissive", tmp_path))
        assert config["tier"] == "free"
        assert config["maxDependencies"] == 100

    @pytest.mark.parametrize("tier", ["pro", "enterprise"])
    def test_paid_tiers_unlimited(self, tmp_path, tier):
        config = _read(init_config("moderate", tmp_path, tier=tier))
        assert config["tier"] == tier
        assert "maxDependencies" not in config

    def test_refuses_to_overwrite(self, tmp_path):
        path = tmp_path / ".licensewallrc.json"
        path.write_text(json.dumps({"allow": ["MIT"], "existing": True}))
        with pytest.raises(ConfigExistsError, match="already exists"):
            init_config("permissive", tmp_path)
        assert _read(path) == {"allow": ["MIT"], "existing": True}

    def test_force_overwrites(self, tmp_path):
        path = tmp_path / ".licensewallrc.json"
        path.write_text(json.dumps({"existing": True}))
        config = _read(init_config("permissive", tmp_path, force=True))
        assert "existing" not in config
        assert "MIT" in config["allow"]

    def test_creates_missing_directory(self, tmp_path):
        path = init_config("strict", tmp_path / "new" / "project")
        assert path.is_file()

    def test_unknown_template(self, tmp_path):
        with pytest.raises(TemplateError, match="Unknown template"):
            init_config("lax", tmp_path)

    def test_unknown_tier(self, tmp_path):
        with pytest.raises(TemplateError, match="Unknown tier"):
            init_config("strict", tmp_path, tier="platinum")

    @pytest.mark.parametrize("template", TEMPLATE_NAMES)
    def test_templates_load_as_policies(self, tmp_path, template):
        policy = load_policy(init_config(template, tmp_path))
        assert policy.allow and all(isinstance(x, str) for x in policy.allow)
        assert policy.deny and all(isinstance(x, str) for x in policy.deny)

    def test_load_template_returns_fresh_dict(self):
        load_template("strict")["allow"].append("GPL-3.0")
        assert "GPL-3.0" not in load_template("strict")["allow"]
