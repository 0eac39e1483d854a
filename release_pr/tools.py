"""Make sure the cargo subcommands we shell out to are installed."""

from __future__ import annotations

import subprocess

from .actions import debug, info, warning
from .shell import run

BINSTALL = "cargo-binstall"


def tool_exists(name: str) -> bool:
    """Probe for a tool by running ``<name> --help``.

    Any failure, including the executable not existing, counts as absent.
    """
    debug(f'running "{name} --help"')
    try:
        result = subprocess.run(
            [name, "--help"], stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL
        )
    except OSError as exc:
        debug(f"program errored: {exc}")
        return False
    debug(f"program exited with code {result.returncode}")
    return result.returncode == 0


def ensure_installed(tool: str) -> None:
    """Install ``tool`` if it is missing.

    Prefers cargo-binstall (prebuilt binaries) and falls back to building
    from source with cargo install. An install failure is fatal.
    """
    debug(f"checking for presence of {tool}")
    if tool_exists(tool):
        return

    warning(f"{tool} is not available, attempting to install it")
    if tool_exists(BINSTALL):
        info(f"trying to install {tool} with cargo-binstall")
        run("cargo", "binstall", "--no-confirm", tool)
    else:
        info(f"trying to install {tool} with cargo-install")
        run("cargo", "install", tool)
