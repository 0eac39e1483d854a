"""Crate discovery and selection.

Lists the crates of the Cargo workspace through cargo-workspaces and picks
the one(s) the user asked to release:

1. No name or path: the only crate, or every crate when release-all is set
   (and they all share a version, since cargo-release gets one target).
2. Name and/or path: the first crate whose name matches or whose path
   matches.

The workspace is read fresh on every call. The orchestrator relies on this
to observe the version cargo-release wrote.
"""

from __future__ import annotations

import json
import os
from typing import Any

from .actions import debug, info, warning
from .errors import (
    SELECT_HINT,
    AmbiguousSelectionError,
    NotFoundError,
    ParseError,
    VersionMismatchError,
)
from .models import PackageDescriptor, PackageSelector, WorkspaceSnapshot
from .shell import output
from .tools import ensure_installed

CONFLICT_HINT = (
    "crate-name and crate-path conflict; prefer only specifying one or fix the "
    "mismatch."
)


def realpath(path: str) -> str:
    """Absolute, normalized form of ``path`` relative to the working directory.

    Symlinks are left alone so that user input compares equal to what cargo
    reports for the same directory.
    """
    return os.path.abspath(os.path.normpath(path))


def parse_workspace_list(raw: str) -> WorkspaceSnapshot:
    """Parse ``cargo workspaces list --json`` output.

    Raises:
        ParseError: If the output is not a JSON list of crate entries.
    """
    try:
        members: Any = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ParseError(f"cargo workspaces list returned invalid JSON: {exc}") from exc
    if not isinstance(members, list):
        raise ParseError("cargo workspaces list did not return a JSON list")

    packages: list[PackageDescriptor] = []
    for member in members:
        try:
            name, version, location = (
                member["name"],
                member["version"],
                member["location"],
            )
        except (KeyError, TypeError) as exc:
            raise ParseError(f"unexpected workspace member entry: {member!r}") from exc
        if not all(isinstance(v, str) for v in (name, version, location)):
            raise ParseError(f"unexpected workspace member entry: {member!r}")
        packages.append(
            PackageDescriptor(name=name, version=version, path=realpath(location))
        )
    return tuple(packages)


def list_packages() -> WorkspaceSnapshot:
    """Take a snapshot of every crate in the workspace."""
    ensure_installed("cargo-workspaces")
    packages = parse_workspace_list(output("cargo", "workspaces", "list", "--json"))
    debug(
        "got workspace members: "
        + json.dumps([p.model_dump() for p in packages])
    )
    return packages


def workspace_root() -> str:
    """Root directory of the Cargo workspace, from ``cargo metadata``."""
    raw = output("cargo", "metadata", "--format-version=1", "--no-deps")
    try:
        root = json.loads(raw).get("workspace_root")
    except (json.JSONDecodeError, AttributeError) as exc:
        raise ParseError("cargo metadata returned unexpected output") from exc
    if not isinstance(root, str) or not root:
        raise ParseError("cargo metadata did not report a workspace_root")
    debug(f"got workspace root: {root}")
    return root


def _select_all(packages: WorkspaceSnapshot) -> list[PackageDescriptor]:
    expected = packages[0].version
    for pkg in packages[1:]:
        if pkg.version != expected:
            raise VersionMismatchError(pkg.name, pkg.version, expected)
    return list(packages)


def _select_matching(
    packages: WorkspaceSnapshot, selector: PackageSelector
) -> list[PackageDescriptor]:
    wanted_path = realpath(selector.path) if selector.path else None
    debug(f"looking for name={selector.name} path={wanted_path}")

    for pkg in packages:
        by_name = bool(selector.name) and pkg.name == selector.name
        by_path = wanted_path is not None and pkg.path == wanted_path
        if not (by_name or by_path):
            continue
        # Either constraint is enough to match; say so when they disagree.
        if selector.strategy == "name+path" and not (by_name and by_path):
            warning(
                f"crate {pkg.name} at {pkg.path} only matches one of "
                f"crate-name={selector.name} crate-path={selector.path}"
            )
        return [pkg]

    raise NotFoundError(
        selector.strategy,
        name=selector.name,
        path=selector.path,
        hint=CONFLICT_HINT if selector.strategy == "name+path" else None,
    )


def resolve(
    selector: PackageSelector, packages: WorkspaceSnapshot
) -> list[PackageDescriptor]:
    """Pick the crates ``selector`` refers to from a snapshot.

    Raises:
        NotFoundError: If nothing matches, or the workspace is empty.
        AmbiguousSelectionError: If several crates exist and the selector
            names none of them without release-all.
        VersionMismatchError: If release-all selects crates with different
            versions.
    """
    if selector.strategy != "root":
        return _select_matching(packages, selector)

    if not packages:
        raise NotFoundError("root", hint=SELECT_HINT)
    if len(packages) == 1:
        info("only one crate in workspace, assuming that is it")
        return list(packages)
    if not selector.release_all:
        raise AmbiguousSelectionError([p.name for p in packages])

    info("multiple crates in the workspace, releasing all")
    return _select_all(packages)


def find_packages(selector: PackageSelector) -> list[PackageDescriptor]:
    """Read the workspace and resolve ``selector`` against it."""
    return resolve(selector, list_packages())
