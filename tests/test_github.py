"""Tests for release_pr.github."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest

from release_pr.actions import RepoContext
from release_pr.errors import ParseError
from release_pr.github import GitHubClient, public_url


class TestPublicUrl:
    def test_rewrites_api_url(self) -> None:
        assert public_url("https://api.example.com/repos/acme/widget/pulls/42") == (
            "https://example.com/acme/widget/pull/42"
        )

    def test_github_dot_com(self) -> None:
        assert public_url(
            "https://api.github.com/repos/passcod/cargo-release-pr-test/pulls/1"
        ) == "https://github.com/passcod/cargo-release-pr-test/pull/1"

    def test_only_leading_api_is_removed(self) -> None:
        assert public_url("https://ghe.api.example.com/repos/a/b/pulls/7") == (
            "https://ghe.api.example.com/a/b/pull/7"
        )


@pytest.fixture
def client() -> GitHubClient:
    return GitHubClient("secret", RepoContext(owner="acme", repo="widget"))


class TestGitHubClient:
    @patch("release_pr.github.gh")
    def test_default_branch(self, mock_gh: MagicMock, client: GitHubClient) -> None:
        mock_gh.return_value = json.dumps({"default_branch": "main"})

        assert client.default_branch() == "main"
        mock_gh.assert_called_once_with(
            "api",
            "--method",
            "GET",
            "repos/acme/widget",
            token="secret",
            host=None,
            input=None,
        )

    @patch("release_pr.github.gh")
    def test_default_branch_missing(
        self, mock_gh: MagicMock, client: GitHubClient
    ) -> None:
        mock_gh.return_value = "{}"

        with pytest.raises(ParseError):
            client.default_branch()

    @patch("release_pr.github.gh")
    def test_create_pull_request(
        self, mock_gh: MagicMock, client: GitHubClient
    ) -> None:
        mock_gh.return_value = json.dumps(
            {"url": "https://api.github.com/repos/acme/widget/pulls/3", "number": 3}
        )

        pr = client.create_pull_request(
            title="release: v1.3.0",
            body="body",
            head="release/widget/1.3.0",
            base="main",
            draft=True,
            maintainer_can_modify=False,
        )

        assert pr["number"] == 3
        args, kwargs = mock_gh.call_args
        assert args == (
            "api",
            "--method",
            "POST",
            "repos/acme/widget/pulls",
            "--input",
            "-",
        )
        assert json.loads(kwargs["input"]) == {
            "title": "release: v1.3.0",
            "body": "body",
            "head": "release/widget/1.3.0",
            "base": "main",
            "maintainer_can_modify": False,
            "draft": True,
        }

    @patch("release_pr.github.gh")
    def test_invalid_json(self, mock_gh: MagicMock, client: GitHubClient) -> None:
        mock_gh.return_value = "<html>"

        with pytest.raises(ParseError):
            client.default_branch()

    @patch("release_pr.github.gh")
    def test_add_labels(self, mock_gh: MagicMock, client: GitHubClient) -> None:
        mock_gh.return_value = "[]"

        client.add_labels(3, ["release"])

        args, kwargs = mock_gh.call_args
        assert args[3] == "repos/acme/widget/issues/3/labels"
        assert json.loads(kwargs["input"]) == {"labels": ["release"]}
