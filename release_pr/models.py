"""Data models for release-pr.

These Pydantic models represent the core data structures used throughout
the release pipeline. All of them are frozen: a crate's version is observed
again by re-reading the workspace, never by mutating a descriptor.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from .errors import ConfigurationError, SelectionStrategy

RELEASE_ALL_CONFLICT = (
    "crate-release-all cannot be combined with crate-name or crate-path"
)


class PackageDescriptor(BaseModel):
    """A single crate in the Cargo workspace.

    Attributes:
        name: Crate name from its manifest.
        path: Absolute path to the directory holding the crate's Cargo.toml.
        version: Semantic version currently in the manifest.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    path: str
    version: str

    def summary(self) -> dict[str, str]:
        """Name and path only, as exposed to PR templates."""
        return {"name": self.name, "path": self.path}


WorkspaceSnapshot = tuple[PackageDescriptor, ...]


class PackageSelector(BaseModel):
    """Which crate(s) the user asked to release.

    Empty strings are treated as "not given" since that is how unset action
    inputs arrive. release_all selects every crate and cannot be combined
    with a name or path.
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    path: str | None = None
    release_all: bool = False

    @field_validator("name", "path", mode="before")
    @classmethod
    def _blank_is_none(cls, value: str | None) -> str | None:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _release_all_is_exclusive(self) -> PackageSelector:
        if self.release_all and (self.name or self.path):
            raise ConfigurationError(RELEASE_ALL_CONFLICT)
        return self

    @property
    def strategy(self) -> SelectionStrategy:
        if self.name and self.path:
            return "name+path"
        if self.name:
            return "name"
        if self.path:
            return "path"
        return "root"


class ReleaseRequest(BaseModel):
    """What to release and to which version.

    Attributes:
        desired_version: Exact version or a bump level such as "minor".
        selector: The crate selection.
    """

    model_config = ConfigDict(frozen=True)

    desired_version: str
    selector: PackageSelector


class VersionTriple(BaseModel):
    """The versions involved in one release, as exposed to PR templates."""

    model_config = ConfigDict(frozen=True)

    previous: str
    actual: str
    desired: str


class ReleaseResult(BaseModel):
    """What a successful run reports back."""

    model_config = ConfigDict(frozen=True)

    branch_name: str
    version: str
    pr_url: str
