"""GitHub REST calls, made through ``gh api``.

The client carries its own token and repository; nothing here reads the
environment.
"""

from __future__ import annotations

import json
import re
from typing import Any
from urllib.parse import urlsplit, urlunsplit

from .actions import RepoContext, debug
from .errors import ParseError
from .shell import gh


def public_url(api_url: str) -> str:
    """Turn a pull request's API URL into the one people open in a browser.

    Example:
        https://api.github.com/repos/acme/widget/pulls/42
        → https://github.com/acme/widget/pull/42
    """
    parts = urlsplit(api_url)
    netloc = re.sub(r"^api[.]", "", parts.netloc)
    path = re.sub(r"^/repos/", "/", parts.path)
    path = re.sub(r"/pulls/(\d+)$", r"/pull/\1", path)
    return urlunsplit((parts.scheme, netloc, path, parts.query, parts.fragment))


class GitHubClient:
    """Repository-scoped access to the GitHub API."""

    def __init__(self, token: str, context: RepoContext) -> None:
        self._token = token
        self.context = context

    @property
    def _repo_path(self) -> str:
        return f"repos/{self.context.owner}/{self.context.repo}"

    def _request(
        self, method: str, path: str, payload: dict[str, Any] | None = None
    ) -> Any:
        args = ["api", "--method", method, path]
        body = None
        if payload is not None:
            args += ["--input", "-"]
            body = json.dumps(payload)
        raw = gh(*args, token=self._token, host=self.context.host, input=body)
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ParseError(f"GitHub returned invalid JSON for {path}") from exc

    def default_branch(self) -> str:
        debug("asking github API for repo's default branch")
        data = self._request("GET", self._repo_path)
        branch = data.get("default_branch") if isinstance(data, dict) else None
        if not branch:
            raise ParseError("GitHub did not report a default branch")
        return branch

    def create_pull_request(
        self,
        *,
        title: str,
        body: str,
        head: str,
        base: str,
        draft: bool,
        maintainer_can_modify: bool,
    ) -> dict[str, Any]:
        """Open a pull request and return the API's representation of it."""
        debug("making request to github to create PR")
        data = self._request(
            "POST",
            f"{self._repo_path}/pulls",
            {
                "title": title,
                "body": body,
                "head": head,
                "base": base,
                "maintainer_can_modify": maintainer_can_modify,
                "draft": draft,
            },
        )
        if not isinstance(data, dict) or "url" not in data:
            raise ParseError("GitHub response for the new pull request has no url")
        return data

    def add_labels(self, number: int, labels: list[str]) -> None:
        self._request(
            "POST", f"{self._repo_path}/issues/{number}/labels", {"labels": labels}
        )
