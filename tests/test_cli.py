"""Tests for CLI commands and console formatters."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from licensewall.cli import main
from licensewall.engines.dependency_scanner.models import Dependency, ScannedDependency
from licensewall.formatters import format_json, format_table


@pytest.fixture
def runner():
    return CliRunner()


def _invoke(runner, *args):
    return runner.invoke(main, ["--no-color", *args])


# ── formatters ──


class TestFormatters:
    def test_table_columns_and_sorting(self):
        deps = [
            ScannedDependency(name="zeta", version="1.0.0", license="MIT", path="/z", depth=1),
            ScannedDependency(name="alpha", version="2.0.0", license="ISC", path="/a"),
        ]
        lines = format_table(deps).splitlines()
        assert lines[0].split() == ["Name", "Version", "License", "Depth"]
        assert lines[2].split() == ["alpha", "2.0.0", "ISC", "0"]
        assert lines[3].split() == ["zeta", "1.0.0", "MIT", "1"]

    def test_table_flat_dependencies(self):
        table = format_table([Dependency(name="a", version="1.0.0", license="MIT", path="/a")])
        assert table.splitlines()[2].split() == ["a", "1.0.0", "MIT", "-"]

    def test_table_empty(self):
        assert format_table([]) == "No dependencies found."

    def test_json(self):
        dep = ScannedDependency(
            name="a", version="1.0.0", license="MIT", path="/a", depth=1, depended_by=["p"]
        )
        assert json.loads(format_json([dep])) == [
            {
                "name": "a",
                "version": "1.0.0",
                "license": "MIT",
                "path": "/a",
                "depth": 1,
                "depended_by": ["p"],
            }
        ]


# ── scan ──


class TestScanCommand:
    def test_table_output(self, runner, fake_project):
        result = _invoke(runner, "scan", "-d", str(fake_project))
        assert result.exit_code == 0
        assert "LicenseWall scanned 6 dependencies" in result.output
        assert "@scope/scoped-pkg" in result.output

    def test_json_output(self, runner, fake_project):
        result = _invoke(runner, "-q", "scan", "-d", str(fake_project), "-f", "json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        dep_c = [d for d in data if d["name"] == "dep-c"]
        assert len(dep_c) == 1
        assert sorted(dep_c[0]["depended_by"]) == ["dep-a", "dep-d"]

    def test_flat(self, runner, fake_project):
        result = _invoke(runner, "-q", "scan", "-d", str(fake_project), "--flat", "-f", "json")
        assert result.exit_code == 0
        assert "dep-c" not in {d["name"] for d in json.loads(result.output)}

    def test_invalid_format(self, runner, fake_project):
        result = _invoke(runner, "scan", "-d", str(fake_project), "-f", "xml")
        assert result.exit_code == 2


# ── check ──


class TestCheckCommand:
    def test_passes_with_default_policy(self, runner, fake_project):
        result = _invoke(runner, "check", "-d", str(fake_project))
        assert result.exit_code == 0
        assert "All dependencies comply with policy." in result.output

    def test_violations_exit_one(self, runner, fake_project, tmp_path):
        policy = tmp_path / "policy.json"
        policy.write_text(json.dumps({"deny": ["ISC"], "failOnUnknown": True}))
        result = _invoke(runner, "check", "-d", str(fake_project), "-p", str(policy))
        assert result.exit_code == 1
        assert "2 policy violation(s)" in result.output
        assert 'dep-c@2.0.0 — License "ISC" is denied by policy' in result.output
        assert "dep-no-license@0.1.0 — Unknown license, manual review required" in result.output

    def test_allow_list_from_project_rc(self, runner, fake_project):
        (fake_project / ".licensewallrc.json").write_text(
            json.dumps({"allow": ["MIT", "ISC", "Apache-2.0", "BSD-3-Clause"]})
        )
        result = _invoke(runner, "check", "-d", str(fake_project))
        assert result.exit_code == 1
        assert "1 policy violation(s)" in result.output
        assert "dep-no-license" in result.output

    def test_quiet_success_prints_nothing(self, runner, fake_project):
        result = _invoke(runner, "-q", "check", "-d", str(fake_project))
        assert result.exit_code == 0
        assert result.output == ""

    def test_malformed_policy_is_config_error(self, runner, fake_project, tmp_path):
        policy = tmp_path / "policy.json"
        policy.write_text("not json")
        result = _invoke(runner, "check", "-d", str(fake_project), "-p", str(policy))
        assert result.exit_code == 2
        assert "Invalid policy file" in result.output

    def test_max_dependencies(self, runner, fake_project):
        (fake_project / ".licensewallrc.json").write_text(json.dumps({"maxDependencies": 5}))
        result = _invoke(runner, "check", "-d", str(fake_project))
        assert result.exit_code == 1
        assert "6 dependencies exceed the limit of 5" in result.output


# ── sbom ──


class TestSbomCommand:
    def test_writes_file(self, runner, fake_project, tmp_path):
        out = tmp_path / "bom.json"
        result = _invoke(runner, "sbom", "-d", str(fake_project), "-o", str(out))
        assert result.exit_code == 0
        assert "(6 components)" in result.output
        doc = json.loads(out.read_text())
        assert doc["bomFormat"] == "CycloneDX"
        assert doc["metadata"]["component"]["name"] == "fake-project"
        purls = {c["purl"] for c in doc["components"]}
        assert "pkg:npm/dep-c@2.0.0" in purls
        assert "pkg:npm/%40scope/scoped-pkg@0.5.0" in purls

    def test_explicit_name(self, runner, fake_project, tmp_path):
        out = tmp_path / "bom.json"
        _invoke(runner, "-q", "sbom", "-d", str(fake_project), "-o", str(out), "--name", "shop")
        assert json.loads(out.read_text())["metadata"]["component"]["name"] == "shop"


# ── init ──


class TestInitCommand:
    def test_writes_config(self, runner, tmp_path):
        result = _invoke(runner, "init", "strict", "-d", str(tmp_path), "--tier", "pro")
        assert result.exit_code == 0
        config = json.loads((tmp_path / ".licensewallrc.json").read_text())
        assert config["tier"] == "pro"
        assert config["allow"] == ["MIT", "ISC", "BSD-2-Clause", "Apache-2.0"]

    def test_existing_config(self, runner, tmp_path):
        (tmp_path / ".licensewallrc.json").write_text("{}")
        result = _invoke(runner, "init", "strict", "-d", str(tmp_path))
        assert result.exit_code == 2
        assert "already exists" in result.output

    def test_unknown_template(self, runner, tmp_path):
        result = _invoke(runner, "init", "lax", "-d", str(tmp_path))
        assert result.exit_code == 2


class TestVersion:
    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output
