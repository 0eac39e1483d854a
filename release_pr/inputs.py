"""Action inputs.

Every option the action accepts is declared here with its default. Inputs
are read once from the runner environment, validated, and frozen; nothing
downstream reads the environment for configuration again.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    SecretStr,
    ValidationError,
    field_validator,
    model_validator,
)

from .actions import get_input
from .errors import ConfigurationError
from .models import PackageSelector, ReleaseRequest
from .versions import is_valid_desired_version

DEFAULT_TITLE = "release: v{{ version.actual }}"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class CrateOptions(_Frozen):
    name: str | None = None
    path: str | None = None
    release_all: bool = False

    @model_validator(mode="after")
    def _valid_selection(self) -> CrateOptions:
        self.selector()
        return self

    def selector(self) -> PackageSelector:
        return PackageSelector(
            name=self.name, path=self.path, release_all=self.release_all
        )


class GitOptions(_Frozen):
    name: str = "github-actions"
    email: EmailStr = "github-actions@github.com"
    branch_prefix: str = "release"
    branch_separator: str = "/"


class PROptions(_Frozen):
    title: str = DEFAULT_TITLE
    label: str | None = None
    draft: bool = False
    modifiable: bool = True
    template: str | None = None
    template_file: str | None = None
    merge_strategy: Literal["squash", "merge", "rebase", "bors"] = "squash"
    release_notes: bool = False
    meta_comment: bool = True

    @model_validator(mode="after")
    def _one_template_source(self) -> PROptions:
        if self.template and self.template_file:
            raise ValueError("template and template-file are mutually exclusive")
        return self


class Inputs(_Frozen):
    """Validated action configuration."""

    github_token: SecretStr
    version: str
    base_branch: str | None = None
    crate: CrateOptions = Field(default_factory=CrateOptions)
    git: GitOptions = Field(default_factory=GitOptions)
    pr: PROptions = Field(default_factory=PROptions)
    check_semver: bool = False
    check_package: bool = False

    @field_validator("github_token")
    @classmethod
    def _token_required(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("github-token is required")
        return value

    @field_validator("version", mode="before")
    @classmethod
    def _lowercase_version(cls, value: object) -> object:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("version")
    @classmethod
    def _valid_version(cls, value: str) -> str:
        if not is_valid_desired_version(value):
            raise ValueError(
                "must be an exact semver version or one of "
                "release, patch, minor, major, alpha, beta, rc"
            )
        return value

    def selector(self) -> PackageSelector:
        return self.crate.selector()

    def release_request(self) -> ReleaseRequest:
        return ReleaseRequest(desired_version=self.version, selector=self.selector())


# field path → action input name
INPUT_NAMES: dict[tuple[str, ...], str] = {
    ("github_token",): "github-token",
    ("version",): "version",
    ("base_branch",): "base-branch",
    ("check_semver",): "check-semver",
    ("check_package",): "check-package",
    ("crate", "name"): "crate-name",
    ("crate", "path"): "crate-path",
    ("crate", "release_all"): "crate-release-all",
    ("git", "name"): "git-user-name",
    ("git", "email"): "git-user-email",
    ("git", "branch_prefix"): "branch-prefix",
    ("git", "branch_separator"): "branch-separator",
    ("pr", "title"): "pr-title",
    ("pr", "label"): "pr-label",
    ("pr", "draft"): "pr-draft",
    ("pr", "modifiable"): "pr-modifiable",
    ("pr", "template"): "pr-template",
    ("pr", "template_file"): "pr-template-file",
    ("pr", "merge_strategy"): "pr-merge-strategy",
    ("pr", "release_notes"): "pr-release-notes",
    ("pr", "meta_comment"): "pr-meta-comment",
}


def _collect(environ: Mapping[str, str] | None) -> dict[str, object]:
    """Gather non-empty inputs into the nested shape of Inputs."""
    raw: dict[str, object] = {}
    for field_path, input_name in INPUT_NAMES.items():
        value = get_input(input_name, environ)
        if not value:
            continue
        target = raw
        for key in field_path[:-1]:
            target = target.setdefault(key, {})  # type: ignore[assignment]
        target[field_path[-1]] = value  # type: ignore[index]
    # Required inputs must reach validation even when blank.
    raw.setdefault("github_token", "")
    raw.setdefault("version", "")
    return raw


def _describe(exc: ValidationError) -> str:
    names = {".".join(path): name for path, name in INPUT_NAMES.items()}
    problems = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"])
        problems.append(f"{names.get(loc, loc) or 'inputs'}: {err['msg']}")
    return "invalid inputs:\n" + "\n".join(f"  - {p}" for p in problems)


def load_inputs(environ: Mapping[str, str] | None = None) -> Inputs:
    """Read and validate the action inputs.

    Raises:
        ConfigurationError: If any input is missing or invalid.
    """
    try:
        return Inputs.model_validate(_collect(environ))
    except ValidationError as exc:
        raise ConfigurationError(_describe(exc)) from exc
