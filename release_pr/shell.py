"""Process and git utilities.

Provides simple wrappers around subprocess calls for running cargo, git and
gh, plus output formatting helpers. Every wrapper raises ToolExecutionError
on a non-zero exit so callers never need to inspect return codes.
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping

from .actions import debug
from .errors import ToolExecutionError


def _log_command(args: tuple[str, ...], cwd: str | None) -> None:
    where = f" (in {cwd})" if cwd else ""
    debug(f"running {args[0]} with arguments: {list(args[1:])}{where}")


def run(*args: str, cwd: str | None = None, check: bool = True) -> int:
    """Run a command, streaming its output to the terminal.

    Args:
        *args: Command and arguments (e.g., "cargo", "check").
        cwd: Working directory for the command.
        check: If True (default), raise on non-zero exit.

    Returns:
        The exit code.

    Raises:
        ToolExecutionError: If the program cannot be started, or exits non-zero
            while ``check`` is set.
    """
    _log_command(args, cwd)
    try:
        result = subprocess.run(args, cwd=cwd)
    except OSError as exc:
        raise ToolExecutionError(
            args[0], args[1:], None, reason=exc.strerror or "not found"
        ) from exc
    if check and result.returncode != 0:
        raise ToolExecutionError(args[0], args[1:], result.returncode)
    return result.returncode


def output(
    *args: str,
    cwd: str | None = None,
    input: str | None = None,
    env: Mapping[str, str] | None = None,
) -> str:
    """Run a command and return its stdout.

    Stderr is passed through to the terminal. The command must succeed.

    Args:
        *args: Command and arguments.
        cwd: Working directory for the command.
        input: Text fed to the command's stdin.
        env: Extra environment variables, layered over the current ones.
    """
    _log_command(args, cwd)
    full_env = {**os.environ, **env} if env else None
    try:
        result = subprocess.run(
            args,
            cwd=cwd,
            input=input,
            env=full_env,
            stdout=subprocess.PIPE,
            text=True,
        )
    except OSError as exc:
        raise ToolExecutionError(
            args[0], args[1:], None, reason=exc.strerror or "not found"
        ) from exc
    if result.returncode != 0:
        raise ToolExecutionError(args[0], args[1:], result.returncode)
    return result.stdout


def git(*args: str) -> str:
    """Run a git command and return stripped stdout."""
    return output("git", *args).strip()


def gh(
    *args: str, token: str, host: str | None = None, input: str | None = None
) -> str:
    """Run a GitHub CLI command authenticated with ``token``.

    The token is handed over in the environment, never on the command line.
    """
    env = {"GH_TOKEN": token}
    if host:
        env["GH_HOST"] = host
    return output("gh", *args, input=input, env=env)


def step(msg: str) -> None:
    """Print a visually distinct step header.

    Used to separate the states of the release pipeline in the job log.
    """
    print(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")
