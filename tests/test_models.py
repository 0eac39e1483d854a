"""Tests for release_pr.models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from release_pr.errors import ConfigurationError
from release_pr.models import PackageDescriptor, PackageSelector, ReleaseRequest


class TestPackageDescriptor:
    def test_create(self) -> None:
        pkg = PackageDescriptor(name="widget", path="/repo/widget", version="1.0.0")
        assert pkg.name == "widget"
        assert pkg.path == "/repo/widget"
        assert pkg.version == "1.0.0"

    def test_is_immutable(self) -> None:
        pkg = PackageDescriptor(name="widget", path="/repo/widget", version="1.0.0")
        with pytest.raises(ValidationError):
            pkg.version = "2.0.0"  # type: ignore[misc]

    def test_summary_omits_version(self) -> None:
        pkg = PackageDescriptor(name="widget", path="/repo/widget", version="1.0.0")
        assert pkg.summary() == {"name": "widget", "path": "/repo/widget"}


class TestPackageSelector:
    def test_blank_strings_are_unset(self) -> None:
        selector = PackageSelector(name="", path="  ")
        assert selector.name is None
        assert selector.path is None
        assert selector.strategy == "root"

    @pytest.mark.parametrize(
        ("name", "path", "strategy"),
        [
            ("widget", None, "name"),
            (None, "crates/widget", "path"),
            ("widget", "crates/widget", "name+path"),
        ],
    )
    def test_strategy(self, name: str | None, path: str | None, strategy: str) -> None:
        assert PackageSelector(name=name, path=path).strategy == strategy

    @pytest.mark.parametrize(
        ("name", "path"),
        [("widget", None), (None, "crates/widget"), ("widget", "crates/widget")],
    )
    def test_release_all_excludes_name_and_path(
        self, name: str | None, path: str | None
    ) -> None:
        """Selecting every crate and naming one at once is a configuration error."""
        with pytest.raises(ConfigurationError, match="crate-release-all"):
            PackageSelector(name=name, path=path, release_all=True)

    def test_release_all_with_blank_name(self) -> None:
        selector = PackageSelector(name="", release_all=True)
        assert selector.release_all
        assert selector.strategy == "root"


def test_release_request_holds_selector() -> None:
    request = ReleaseRequest(
        desired_version="minor", selector=PackageSelector(release_all=True)
    )
    assert request.selector.release_all
    assert request.desired_version == "minor"
