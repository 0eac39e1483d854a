"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from release_pr.inputs import Inputs
from release_pr.models import PackageDescriptor


@pytest.fixture(autouse=True)
def no_github_output(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests from writing into a real runner's output file."""
    monkeypatch.delenv("GITHUB_OUTPUT", raising=False)


@pytest.fixture
def widget() -> PackageDescriptor:
    return PackageDescriptor(name="widget", path="/repo/crates/widget", version="1.2.3")


@pytest.fixture
def gadget() -> PackageDescriptor:
    return PackageDescriptor(name="gadget", path="/repo/crates/gadget", version="1.2.3")


@pytest.fixture
def workspace_json(tmp_path: Path) -> str:
    """`cargo workspaces list --json` output for a two-crate workspace."""
    return json.dumps(
        [
            {
                "name": "widget",
                "version": "1.2.3",
                "location": str(tmp_path / "crates" / "widget"),
                "private": False,
            },
            {
                "name": "gadget",
                "version": "1.2.3",
                "location": str(tmp_path / "crates" / "gadget"),
                "private": False,
            },
        ]
    )


@pytest.fixture
def make_inputs():
    """Build Inputs with sensible defaults, overridable per test."""

    def _make(**overrides) -> Inputs:
        data = {"github_token": "ghp_test", "version": "minor", **overrides}
        return Inputs.model_validate(data)

    return _make
