"""Driving cargo-release and the optional post-release checks.

cargo-release changed shape in 0.23: older versions do the whole release in
one command, newer ones expose each stage as a subcommand. Both are modelled
as a ReleaseFlow with the same ``release`` contract, and ``detect_flow``
picks one from the installed tool's version.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from .actions import debug, info
from .errors import ToolExecutionError
from .models import PackageDescriptor
from .shell import output, run
from .tools import ensure_installed
from .versions import parse_cargo_release_version, supports_step_commands

CONFIRM_FLAGS = ("--execute", "--verbose", "--no-confirm")


class ReleaseFlow(ABC):
    """One way of asking cargo-release to bump, commit and do nothing else."""

    name: str

    @abstractmethod
    def release(self, version: str, branch_name: str, cwd: str) -> None:
        """Bump to ``version`` and commit on ``branch_name``, running in ``cwd``."""


class LegacyReleaseFlow(ReleaseFlow):
    """cargo-release < 0.23: a single command with push/tag/publish disabled."""

    name = "legacy"

    def release(self, version: str, branch_name: str, cwd: str) -> None:
        run(
            "cargo",
            "release",
            "--execute",
            "--no-push",
            "--no-tag",
            "--no-publish",
            "--no-confirm",
            "--verbose",
            "--allow-branch",
            branch_name,
            version,
            cwd=cwd,
        )


class StepReleaseFlow(ReleaseFlow):
    """cargo-release >= 0.23: run only the steps that end in a commit."""

    name = "steps"

    def release(self, version: str, branch_name: str, cwd: str) -> None:
        info("Changes since last release (if any):")
        try:
            run("cargo", "release", "changes", cwd=cwd)
        except ToolExecutionError as exc:
            # Informational only.
            debug(f"cargo release changes failed: {exc}")

        info("Bump version")
        run(
            "cargo",
            "release",
            "version",
            version,
            *CONFIRM_FLAGS,
            "--allow-branch",
            branch_name,
            cwd=cwd,
        )

        info("Update lockfile and run check")
        run("cargo", "check", cwd=cwd)

        info("Perform replaces")
        run("cargo", "release", "replace", *CONFIRM_FLAGS, cwd=cwd)

        info("Run hooks")
        run("cargo", "release", "hook", *CONFIRM_FLAGS, cwd=cwd)

        info("Commit")
        run("cargo", "release", "commit", *CONFIRM_FLAGS, cwd=cwd)


def detect_flow() -> ReleaseFlow:
    """Choose the flow matching the installed cargo-release."""
    tool_version = parse_cargo_release_version(
        output("cargo", "release", "--version")
    )
    debug(f"got cargo-release version: {tool_version}")
    if supports_step_commands(tool_version):
        debug("Using new cargo-release")
        return StepReleaseFlow()
    debug("Using old cargo-release")
    return LegacyReleaseFlow()


def run_semver_checks(package: PackageDescriptor) -> None:
    """Fail if the crate's API changed incompatibly with its new version."""
    ensure_installed("cargo-semver-checks")
    debug("running cargo semver-checks")
    run(
        "cargo",
        "semver-checks",
        "check-release",
        "--package",
        package.name,
        "--verbose",
        cwd=package.path,
    )


def run_package_check(package: PackageDescriptor) -> None:
    """Fail if the crate would not publish."""
    run("cargo", "publish", "--dry-run", "-p", package.name, cwd=package.path)
