"""Shared pytest fixtures for LicenseWall tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

MIT_TEXT = """MIT License

Copyright (c) 2024 Example Author

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction.
"""


def write_package(pkg_dir: Path, **manifest) -> Path:
    """Create *pkg_dir* with a package.json built from *manifest*."""
    pkg_dir.mkdir(parents=True, exist_ok=True)
    (pkg_dir / "package.json").write_text(json.dumps(manifest))
    return pkg_dir


@pytest.fixture
def fake_project(tmp_path) -> Path:
    """A project whose node_modules has six distinct packages.

    dep-a and dep-d each carry a private copy of dep-c@2.0.0; dep-b has no
    license field but ships an MIT LICENSE file; dep-no-license has neither.
    """
    root = tmp_path / "fake-project"
    nm = root / "node_modules"
    write_package(root, name="fake-project", version="1.0.0")

    write_package(nm / "dep-a", name="dep-a", version="1.0.0", license="MIT")
    write_package(nm / "dep-a" / "node_modules" / "dep-c", name="dep-c", version="2.0.0", license="ISC")

    dep_b = write_package(nm / "dep-b", name="dep-b", version="1.1.0")
    (dep_b / "LICENSE").write_text(MIT_TEXT)

    write_package(nm / "dep-d", name="dep-d", version="3.0.0", license="Apache-2.0")
    write_package(nm / "dep-d" / "node_modules" / "dep-c", name="dep-c", version="2.0.0", license="ISC")

    write_package(
        nm / "@scope" / "scoped-pkg",
        name="@scope/scoped-pkg",
        version="0.5.0",
        license="BSD-3-Clause",
    )
    write_package(nm / "dep-no-license", name="dep-no-license", version="0.1.0")

    (nm / ".bin").mkdir()
    return root


@pytest.fixture
def make_package():
    return write_package
