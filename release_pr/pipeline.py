"""Release pipeline: select → branch → cargo-release → verify → PR.

This module orchestrates one release pull request:
1. Configure the git committer and fetch full history and tags
2. Resolve which crate(s) to release
3. Create the release branch, named after the requested version
4. Run cargo-release to bump and commit
5. Re-read the workspace to learn the version cargo-release produced
6. Optionally run cargo-semver-checks and a publish dry-run
7. Rename the branch if the actual version differs from the request
8. Push the branch and open the pull request

Any failure stops the run where it is. Nothing is rolled back, so a half
made branch is left in place for inspection.
"""

from __future__ import annotations

import json
from typing import Any

from .actions import debug, info, set_output
from .cargo_release import detect_flow, run_package_check, run_semver_checks
from .errors import IdenticalVersionError
from .github import GitHubClient, public_url
from .inputs import Inputs
from .models import PackageDescriptor, PackageSelector, ReleaseResult, VersionTriple
from .repo import (
    branch_token,
    configure_identity,
    create_branch,
    fetch_history,
    make_branch_name,
    push_branch,
    rename_branch,
)
from .shell import step
from .templating import body_template, render
from .tools import ensure_installed
from .versions import is_bump_level
from .workspace import find_packages, workspace_root


def release_cwd(packages: list[PackageDescriptor]) -> str:
    """Where cargo-release runs: the crate itself, or the workspace root."""
    if len(packages) == 1:
        return packages[0].path
    return workspace_root()


def reselect(packages: list[PackageDescriptor]) -> PackageSelector:
    """Selector that finds the same crates again after they were released."""
    if len(packages) == 1:
        return PackageSelector(name=packages[0].name, path=packages[0].path)
    return PackageSelector(release_all=True)


def release_packages(
    packages: list[PackageDescriptor], version: str, branch_name: str
) -> str:
    """Run cargo-release and return the version it produced.

    Raises:
        IdenticalVersionError: If the crates still carry their old version.
    """
    step("Running cargo-release")
    ensure_installed("cargo-release")

    cwd = release_cwd(packages)
    debug(f"got cwd: {cwd}")
    detect_flow().release(version, branch_name, cwd)

    debug("checking version after releasing")
    # Crates selected together share one version, so the first one speaks for all.
    new_version = find_packages(reselect(packages))[0].version
    info(f"new version: {new_version}")

    if new_version == packages[0].version:
        raise IdenticalVersionError(new_version)

    set_output("version", new_version)
    return new_version


def verify_packages(
    packages: list[PackageDescriptor], *, check_semver: bool, check_package: bool
) -> None:
    """Run the optional per-crate checks against the released crates."""
    if not (check_semver or check_package):
        return

    step("Verifying release")
    if check_semver:
        for package in packages:
            run_semver_checks(package)
    if check_package:
        for package in packages:
            run_package_check(package)


def template_variables(
    inputs: Inputs,
    packages: list[PackageDescriptor],
    branch_name: str,
    new_version: str,
) -> dict[str, Any]:
    """The variables PR title and body templates can use."""
    crates = [p.summary() for p in packages]
    return {
        "pr": inputs.pr.model_dump(),
        "crate": crates[0],
        "crates": crates,
        "version": VersionTriple(
            previous=packages[0].version,
            actual=new_version,
            desired=inputs.version,
        ).model_dump(),
        "branch_name": branch_name,
    }


def open_pull_request(
    client: GitHubClient,
    inputs: Inputs,
    packages: list[PackageDescriptor],
    base_branch: str,
    branch_name: str,
    new_version: str,
) -> str:
    """Render the PR text, open the PR and return its browser URL."""
    step("Opening pull request")
    variables = template_variables(inputs, packages, branch_name, new_version)
    debug(f"template variables: {json.dumps(variables)}")

    debug("rendering PR title template")
    title = render(inputs.pr.title, variables)
    debug(f'title rendered to "{title}"')

    debug("rendering PR body template")
    body = render(body_template(inputs.pr), {**variables, "title": title})

    pr = client.create_pull_request(
        title=title,
        body=body,
        head=branch_name,
        base=base_branch,
        draft=inputs.pr.draft,
        maintainer_can_modify=inputs.pr.modifiable,
    )
    debug(f"API URL for PR: {pr['url']}")

    if inputs.pr.label and "number" in pr:
        info(f"Adding label {inputs.pr.label}")
        client.add_labels(pr["number"], [inputs.pr.label])

    url = public_url(pr["url"])
    info(f"PR opened: {url}")
    set_output("pr-url", url)
    return url


def run_release(inputs: Inputs, client: GitHubClient) -> ReleaseResult:
    """Execute the full release pipeline.

    Args:
        inputs: Validated action inputs.
        client: GitHub client for the target repository.

    Returns:
        The final branch name, new version and PR URL.
    """
    request = inputs.release_request()
    desired = request.desired_version
    git_opts = inputs.git

    step("Preparing git")
    configure_identity(git_opts.name, git_opts.email)
    fetch_history()

    step("Selecting crates")
    packages = find_packages(request.selector)
    for pkg in packages:
        info(f"  {pkg.name} {pkg.version} ({pkg.path})")

    base_branch = inputs.base_branch or client.default_branch()
    token = branch_token([p.name for p in packages])

    step("Creating release branch")
    branch_name = make_branch_name(
        git_opts.branch_prefix, token, desired, git_opts.branch_separator
    )
    create_branch(branch_name)

    new_version = release_packages(packages, desired, branch_name)

    verify_packages(
        packages,
        check_semver=inputs.check_semver,
        check_package=inputs.check_package,
    )

    if new_version != desired:
        if is_bump_level(desired):
            info(f"{desired} bump resolved to {new_version}")
        branch_name = make_branch_name(
            git_opts.branch_prefix, token, new_version, git_opts.branch_separator
        )
        rename_branch(branch_name)

    set_output("pr-branch", branch_name)
    step("Pushing release branch")
    push_branch(branch_name)

    pr_url = open_pull_request(
        client, inputs, packages, base_branch, branch_name, new_version
    )
    return ReleaseResult(branch_name=branch_name, version=new_version, pr_url=pr_url)
