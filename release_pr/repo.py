"""Local git operations for the release branch."""

from __future__ import annotations

from .actions import info
from .shell import git

ALL_CRATES = "all"


def make_branch_name(
    prefix: str, package: str | None, version: str, separator: str
) -> str:
    """Join prefix, crate token and version, skipping empty segments.

    Examples:
        make_branch_name("release", None, "1.2.3", "/") → "release/1.2.3"
        make_branch_name("release", "widget", "minor", "/") → "release/widget/minor"
    """
    return separator.join(part for part in (prefix, package, version) if part)


def branch_token(package_names: list[str]) -> str:
    """The crate segment of the branch name: the crate, or "all"."""
    return package_names[0] if len(package_names) == 1 else ALL_CRATES


def configure_identity(name: str, email: str) -> None:
    """Set the committer used for the release commit."""
    info(f"Setting git user details: {name} <{email}>")
    git("config", "user.name", name)
    git("config", "user.email", email)


def fetch_history() -> None:
    """Make full history and tags available; cargo-release reads both.

    Checkouts made by actions/checkout are shallow by default. Unshallowing a
    complete clone is an error, so only do it when needed.
    """
    if git("rev-parse", "--is-shallow-repository") == "true":
        info("Fetching all history so cargo-release can read it")
        git("fetch", "--unshallow")
    info("Pulling git tags so cargo-release can read them")
    git("fetch", "--tags")


def create_branch(branch_name: str) -> None:
    """Create ``branch_name`` from HEAD and switch to it."""
    info(f"Creating branch {branch_name}")
    git("switch", "-c", branch_name)


def rename_branch(branch_name: str) -> None:
    """Rename the current branch in place."""
    info(f"Renaming branch to {branch_name}")
    git("branch", "-M", branch_name)


def push_branch(branch_name: str) -> None:
    """Push ``branch_name`` to origin under the same name."""
    git("push", "origin", branch_name)
