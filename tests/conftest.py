"""Shared fixtures for license-auditor tests."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Optional

import pytest
from click.testing import CliRunner

from license_auditor.normalizer import NullGrammarService

PackageFactory = Callable[..., Path]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def null_grammar() -> NullGrammarService:
    """Grammar service with no SPDX backends, forcing the heuristics."""
    return NullGrammarService()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """A project directory with a root manifest and an empty node_modules."""
    root = tmp_path / "project"
    (root / "node_modules").mkdir(parents=True)
    (root / "package.json").write_text(
        json.dumps({"name": "my-app", "version": "1.2.3", "license": "MIT"}),
        encoding="utf-8",
    )
    return root


@pytest.fixture
def make_package(project_root: Path) -> PackageFactory:
    """Create installed packages under the project's node_modules.

    The factory takes the full package name (``@scope/name`` for scoped
    packages), the manifest fields, and optional license/NOTICE texts.
    """

    def factory(
        name: str,
        manifest: Optional[dict[str, Any]] = None,
        license_text: Optional[str] = None,
        license_file: str = "LICENSE",
        notice_text: Optional[str] = None,
    ) -> Path:
        package_dir = project_root / "node_modules" / name
        package_dir.mkdir(parents=True)
        data = {"name": name, "version": "1.0.0"}
        if manifest is not None:
            data = manifest
        (package_dir / "package.json").write_text(json.dumps(data), encoding="utf-8")
        if license_text is not None:
            (package_dir / license_file).write_text(license_text, encoding="utf-8")
        if notice_text is not None:
            (package_dir / "NOTICE").write_text(notice_text, encoding="utf-8")
        return package_dir

    return factory
