"""CLI entry point: licensewall.

Subcommands:
    licensewall scan  -d .                 # List dependencies and their licenses
    licensewall check -d . -p policy.json  # Policy gate, exits 1 on violation
    licensewall sbom  -d . -o sbom.cdx.json
    licensewall init  permissive           # Write .licensewallrc.json
"""

from __future__ import annotations

import sys
from pathlib import Path

import click
import structlog

from licensewall import __version__
from licensewall.core.logging import setup_logging
from licensewall.engines.dependency_scanner.manifest import read_manifest
from licensewall.engines.dependency_scanner.models import ScannedDependency
from licensewall.engines.dependency_scanner.scanner import Scanner
from licensewall.engines.policy.evaluator import find_violations
from licensewall.engines.policy.loader import resolve_policy
from licensewall.engines.policy.templates import (
    TEMPLATE_NAMES,
    TIER_MAX_DEPENDENCIES,
    init_config,
)
from licensewall.engines.sbom.emitter import generate_sbom, write_sbom
from licensewall.exceptions import LicenseWallError
from licensewall.formatters import format_json, format_table

log = structlog.get_logger("licensewall.cli")

EXIT_VIOLATIONS = 1
EXIT_CONFIG_ERROR = 2


def _echo(ctx: click.Context, message: str, **style) -> None:
    color = ctx.obj["color"]
    click.echo(click.style(message, **style) if color and style else message, color=color)


def _scan(project_dir: str) -> tuple[Path, list[ScannedDependency]]:
    root = Path(project_dir).resolve()
    scanner = Scanner()
    deps = scanner.scan(root)
    for location in scanner.unclassified_license_files:
        log.warning("scan.license_file_unclassified", path=location)
    for location in scanner.skipped_manifests:
        log.warning("scan.manifest_skipped", path=location)
    return root, deps


@click.group()
@click.version_option(__version__, prog_name="licensewall")
@click.option("-q", "--quiet", is_flag=True, help="Suppress non-essential output")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
@click.pass_context
def main(ctx: click.Context, quiet: bool, no_color: bool, verbose: bool) -> None:
    """LicenseWall: dependency license compliance gate & SBOM generator."""
    setup_logging("DEBUG" if verbose else None)
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["color"] = not no_color


@main.command("scan")
@click.option("-d", "--dir", "project_dir", default=".", help="Project directory")
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
@click.option("--flat", is_flag=True, help="Only list direct dependencies")
@click.pass_context
def scan(ctx: click.Context, project_dir: str, output_format: str, flat: bool) -> None:
    """Scan dependencies and list their licenses."""
    if flat:
        deps = Scanner().scan_flat(Path(project_dir).resolve())
    else:
        _, deps = _scan(project_dir)

    if not ctx.obj["quiet"] and output_format == "table":
        _echo(ctx, f"\nLicenseWall scanned {len(deps)} dependencies\n", bold=True)

    if output_format == "json":
        click.echo(format_json(deps))
    else:
        click.echo(format_table(deps))


@main.command("check")
@click.option("-d", "--dir", "project_dir", default=".", help="Project directory")
@click.option("-p", "--policy", "policy_path", default=None, help="Path to policy file")
@click.pass_context
def check(ctx: click.Context, project_dir: str, policy_path: str | None) -> None:
    """Check dependencies against license policy (exits 1 on violation)."""
    try:
        policy = resolve_policy(policy_path, project_dir)
    except LicenseWallError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    _, deps = _scan(project_dir)
    violations = find_violations(policy, deps)
    quiet = ctx.obj["quiet"]

    if not quiet:
        _echo(ctx, f"\nLicenseWall checked {len(deps)} dependencies\n", bold=True)

    if violations:
        _echo(ctx, f"{len(violations)} policy violation(s):\n", fg="red", bold=True)
        for v in violations:
            _echo(ctx, f"  x {v.label} — {v.reason}", fg="red")
        sys.exit(EXIT_VIOLATIONS)

    if not quiet:
        _echo(ctx, "All dependencies comply with policy.", fg="green")


@main.command("sbom")
@click.option("-d", "--dir", "project_dir", default=".", help="Project directory")
@click.option("-o", "--output", default="sbom.cdx.json", help="Output file path")
@click.option("--name", default=None, help="Subject component name (default: package.json name)")
@click.pass_context
def sbom(ctx: click.Context, project_dir: str, output: str, name: str | None) -> None:
    """Generate a CycloneDX SBOM file."""
    root, deps = _scan(project_dir)
    if name is None:
        manifest = read_manifest(root) or {}
        name = str(manifest.get("name") or root.name)

    out_path = write_sbom(generate_sbom(deps, name), output)

    if not ctx.obj["quiet"]:
        _echo(ctx, f"SBOM written to {out_path} ({len(deps)} components)", fg="green")


@main.command("init")
@click.argument("template", type=click.Choice(list(TEMPLATE_NAMES)))
@click.option("-d", "--dir", "project_dir", default=".", help="Project directory")
@click.option(
    "--tier",
    type=click.Choice(list(TIER_MAX_DEPENDENCIES)),
    default="free",
    help="License tier",
)
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
@click.pass_context
def init(ctx: click.Context, template: str, project_dir: str, tier: str, force: bool) -> None:
    """Write a .licensewallrc.json policy from a template."""
    try:
        config_path = init_config(template, project_dir, force=force, tier=tier)
    except LicenseWallError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    if not ctx.obj["quiet"]:
        _echo(ctx, f"Policy written to {config_path} ({template}, {tier} tier)", fg="green")


if __name__ == "__main__":
    main()
