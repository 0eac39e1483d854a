"""Exception hierarchy for release-pr.

Every failure in the release pipeline is fatal: steps raise one of these
and the CLI reports the first one through the runner's failure channel.
Nothing is rolled back.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

SelectionStrategy = Literal["root", "name", "path", "name+path"]

SELECT_HINT = "Try specifying crate-name, crate-path, or crate-release-all."


class ReleasePRError(Exception):
    """Base class for all release-pr errors.

    Attributes:
        hint: Optional remediation advice, reported on its own line.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(ReleasePRError):
    """The inputs do not describe a releasable selection."""


class AmbiguousSelectionError(ConfigurationError):
    """Several crates are present and nothing says which one to release."""

    strategy: SelectionStrategy = "root"

    def __init__(self, packages: Sequence[str]) -> None:
        self.packages = list(packages)
        super().__init__(
            "multiple crates in the workspace, but crate-release-all is false "
            f"(found: {', '.join(self.packages)})",
            hint=SELECT_HINT,
        )


class NotFoundError(ConfigurationError):
    """No crate matched the selector."""

    def __init__(
        self,
        strategy: SelectionStrategy,
        *,
        name: str | None = None,
        path: str | None = None,
        hint: str | None = None,
    ) -> None:
        self.strategy = strategy
        self.name = name
        self.path = path
        if strategy == "root":
            message = "no crates found in the workspace"
        else:
            wanted = " ".join(
                f"{key}={value}"
                for key, value in (("name", name), ("path", path))
                if value
            )
            message = f"no matching crate found: {wanted}"
        super().__init__(message, hint=hint)


class ToolExecutionError(ReleasePRError):
    """An external program failed or could not be started.

    Attributes:
        returncode: Exit status, or None if the program could not be started.
    """

    def __init__(
        self,
        program: str,
        args: Sequence[str],
        returncode: int | None,
        *,
        reason: str = "not found",
    ) -> None:
        self.program = program
        self.arguments = list(args)
        self.returncode = returncode
        if returncode is None:
            message = f"{program} could not be started ({reason})"
        else:
            message = f"{program} exited with code {returncode}"
        super().__init__(message)


class IdenticalVersionError(ReleasePRError):
    """The release tool ran but the crate version did not change."""

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(
            f"New and old versions are identical ({version}), not proceeding"
        )


class VersionMismatchError(ReleasePRError):
    """Crates selected together do not share a version."""

    def __init__(self, package: str, version: str, expected: str) -> None:
        self.package = package
        self.version = version
        self.expected = expected
        super().__init__(
            "multiple crates with different versions: "
            f"crate={package} version={version} expected={expected}"
        )


class ParseError(ReleasePRError):
    """Tool output did not have the expected shape."""
