"""GitHub Actions runner protocol.

Reads action inputs and repository context from the environment, and talks
back to the runner through workflow commands on stdout and the
``GITHUB_OUTPUT`` file.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict

from .errors import ConfigurationError

UNKNOWN_FAILURE = "An unknown error has occurred"


class RepoContext(BaseModel):
    """The repository the workflow runs against."""

    model_config = ConfigDict(frozen=True)

    owner: str
    repo: str
    host: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RepoContext:
        """Build the context from ``GITHUB_REPOSITORY`` and ``GITHUB_SERVER_URL``.

        The host is only kept for GitHub Enterprise servers; github.com is
        the gh CLI default.
        """
        env = os.environ if environ is None else environ
        slug = env.get("GITHUB_REPOSITORY", "")
        owner, _, repo = slug.partition("/")
        if not owner or not repo or "/" in repo:
            raise ConfigurationError(
                f"GITHUB_REPOSITORY must look like owner/repo, got {slug!r}"
            )
        host = urlsplit(env.get("GITHUB_SERVER_URL", "")).hostname
        if host == "github.com":
            host = None
        return cls(owner=owner, repo=repo, host=host)


def get_input(name: str, environ: Mapping[str, str] | None = None) -> str:
    """Return an action input, or "" when it was not given.

    The runner exposes ``with:`` values as ``INPUT_<NAME>`` with the name
    upper-cased and spaces (not hyphens) replaced by underscores.
    """
    env = os.environ if environ is None else environ
    return env.get(f"INPUT_{name.replace(' ', '_').upper()}", "").strip()


def _escape(msg: str) -> str:
    return msg.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def debug(msg: str) -> None:
    """Log a message that only shows when step debugging is enabled."""
    print(f"::debug::{_escape(msg)}")


def info(msg: str) -> None:
    """Log a plain progress line."""
    print(msg)


def warning(msg: str) -> None:
    """Log a warning, shown as an annotation on the run."""
    print(f"::warning::{_escape(msg)}")


def error(msg: str) -> None:
    """Log an error, shown as an annotation on the run."""
    print(f"::error::{_escape(msg)}")


def set_output(name: str, value: str) -> None:
    """Publish a step output.

    Appends ``name=value`` to the file named by ``GITHUB_OUTPUT``. Outside a
    runner the pair is printed instead.
    """
    output_path = os.environ.get("GITHUB_OUTPUT")
    if not output_path:
        print(f"{name}={value}")
        return
    with open(output_path, "a") as fh:
        fh.write(f"{name}={value}\n")


def failure_message(err: object) -> str:
    """Turn whatever was raised or passed along into a single message."""
    if isinstance(err, BaseException):
        return str(err) or type(err).__name__
    if isinstance(err, str):
        return err
    return UNKNOWN_FAILURE


def set_failed(err: object) -> None:
    """Report the run as failed.

    Callers are expected to exit non-zero afterwards.
    """
    error(failure_message(err))
    hint = getattr(err, "hint", None)
    if hint:
        error(hint)
    sys.stdout.flush()
