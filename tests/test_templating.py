"""Tests for release_pr.templating and the bundled template."""

from __future__ import annotations

from pathlib import Path

import pytest

from release_pr.errors import ConfigurationError
from release_pr.inputs import PROptions
from release_pr.templating import body_template, default_template, render


@pytest.fixture
def variables() -> dict:
    crates = [{"name": "widget", "path": "/repo/widget"}]
    return {
        "pr": PROptions().model_dump(),
        "crate": crates[0],
        "crates": crates,
        "version": {"previous": "1.2.3", "actual": "1.3.0", "desired": "minor"},
        "branch_name": "release/widget/1.3.0",
        "title": "release: v1.3.0",
    }


class TestRender:
    def test_substitutes_variables(self, variables: dict) -> None:
        assert render("release: v{{ version.actual }}", variables) == "release: v1.3.0"

    def test_plain_text_is_not_escaped(self, variables: dict) -> None:
        """Markdown and HTML-ish text pass through verbatim."""
        template = "<b>{{ crate.name }}</b> & `{{ branch_name }}` \"quoted\""

        rendered = render(template, variables)

        assert rendered == '<b>widget</b> & `release/widget/1.3.0` "quoted"'

    def test_substituted_values_are_not_escaped(self, variables: dict) -> None:
        variables["crate"] = {"name": "a<b>&c", "path": "/x"}

        assert render("{{ crate.name }}", variables) == "a<b>&c"

    def test_unknown_variable(self, variables: dict) -> None:
        with pytest.raises(ConfigurationError):
            render("{{ nope }}", variables)

    def test_syntax_error(self, variables: dict) -> None:
        with pytest.raises(ConfigurationError):
            render("{% if %}", variables)


class TestBodyTemplate:
    def test_inline_template(self) -> None:
        assert body_template(PROptions(template="hello")) == "hello"

    def test_template_file(self, tmp_path: Path) -> None:
        path = tmp_path / "body.md"
        path.write_text("from file {{ crate.name }}")

        assert body_template(PROptions(template_file=str(path))) == (
            "from file {{ crate.name }}"
        )

    def test_missing_template_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError):
            body_template(PROptions(template_file=str(tmp_path / "missing.md")))

    def test_blank_falls_back_to_default(self) -> None:
        assert body_template(PROptions(template="   ")) == default_template()

    def test_unset_falls_back_to_default(self) -> None:
        assert body_template(PROptions()) == default_template()


class TestDefaultTemplate:
    def test_single_crate(self, variables: dict) -> None:
        body = render(default_template(), variables)

        assert "**widget**" in body
        assert "**1.3.0**" in body
        assert "performing a minor bump" in body
        assert "**Use squash merge.**" in body
        assert "`release/widget/1.3.0`" in body
        assert "### Release notes" not in body

    def test_several_crates_with_release_notes(self, variables: dict) -> None:
        variables["crates"] = [
            {"name": "widget", "path": "/repo/widget"},
            {"name": "gadget", "path": "/repo/gadget"},
        ]
        variables["version"]["desired"] = "1.3.0"
        variables["pr"] = PROptions(
            release_notes=True, merge_strategy="bors", meta_comment=False
        ).model_dump()

        body = render(default_template(), variables)

        assert "2 crates: **widget**, **gadget**" in body
        assert "bump" not in body
        assert "bors r+" in body
        assert "### Release notes" in body
        assert "release-pr" not in body
