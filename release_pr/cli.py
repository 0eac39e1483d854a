"""CLI entry point for release-pr."""

from __future__ import annotations

import sys

import click

from . import actions
from .errors import ReleasePRError
from .github import GitHubClient
from .inputs import load_inputs
from .models import PackageSelector
from .pipeline import run_release
from .workspace import list_packages, resolve


@click.group()
@click.version_option(package_name="release-pr")
def cli() -> None:
    """Open a release pull request for a Cargo crate using cargo-release."""


@cli.command()
def run() -> None:
    """Run the release from action inputs (usually called from CI)."""
    try:
        inputs = load_inputs()
        client = GitHubClient(
            inputs.github_token.get_secret_value(), actions.RepoContext.from_env()
        )
        run_release(inputs, client)
    except Exception as exc:
        actions.set_failed(exc)
        sys.exit(1)


@cli.command()
@click.option("--crate-name", default=None, help="Select the crate with this name.")
@click.option(
    "--crate-path",
    type=click.Path(file_okay=False),
    default=None,
    help="Select the crate in this directory.",
)
@click.option("--release-all", is_flag=True, help="Select every crate.")
def packages(crate_name: str | None, crate_path: str | None, release_all: bool) -> None:
    """List workspace crates and show which ones would be released."""
    try:
        selector = PackageSelector(
            name=crate_name, path=crate_path, release_all=release_all
        )
        snapshot = list_packages()
        for pkg in snapshot:
            click.echo(f"  {pkg.name} {pkg.version} ({pkg.path})")
        selected = resolve(selector, snapshot)
    except ReleasePRError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo()
    click.echo("Selected:")
    for pkg in selected:
        click.echo(f"  {pkg.name} {pkg.version}")
