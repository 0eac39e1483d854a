"""Version parsing utilities.

Covers the grammar of the requested version (an exact semver literal or a
bump level understood by cargo-release) and detection of which cargo-release
command style is installed.
"""

from __future__ import annotations

import re

import semver

BUMP_LEVELS = ("release", "patch", "minor", "major", "alpha", "beta", "rc")

DESIRED_VERSION_RE = re.compile(
    rf"^(?:{'|'.join(BUMP_LEVELS)}"
    r"|\d+[.]\d+[.]\d+(?:-\w+(?:[.]\d+)?)?(?:\+\w+)?)$"
)

CARGO_RELEASE_VERSION_RE = re.compile(r"cargo-release\s+([\d.]+)", re.IGNORECASE)

# First cargo-release with the `version`/`replace`/`hook`/`commit` subcommands.
STEP_COMMANDS_SINCE = ">=0.23.0"


def parse_version(version_str: str) -> semver.Version:
    """Parse a version string into a semver.Version object.

    Handles incomplete versions by padding with zeros:
    - "1" → "1.0.0"
    - "1.2" → "1.2.0"
    - "1.2.3" → "1.2.3"

    Only the first 3 components are used (major.minor.patch).
    """
    parts = version_str.strip().split(".")
    while len(parts) < 3:
        parts.append("0")
    return semver.Version.parse(".".join(parts[:3]))


def is_bump_level(version: str) -> bool:
    """True for symbolic requests like "minor" that cargo-release resolves."""
    return version in BUMP_LEVELS


def is_valid_desired_version(version: str) -> bool:
    """True for a bump level or an exact version such as "1.2.3-rc.1+build"."""
    return bool(DESIRED_VERSION_RE.match(version))


def parse_cargo_release_version(text: str) -> semver.Version | None:
    """Extract the tool version from ``cargo release --version`` output.

    Returns None when the output does not contain a recognizable version,
    e.g. "cargo-release 0.24.10" → Version(0, 24, 10).
    """
    match = CARGO_RELEASE_VERSION_RE.search(text)
    if not match:
        return None
    try:
        return parse_version(match.group(1).strip("."))
    except ValueError:
        return None


def supports_step_commands(tool_version: semver.Version | None) -> bool:
    """Whether this cargo-release splits a release into subcommands."""
    return tool_version is not None and tool_version.match(STEP_COMMANDS_SINCE)
