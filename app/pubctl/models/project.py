"""Project configuration models.

This module defines the Pydantic models representing the pubctl.toml
file that describes the package being published.
"""

from pathlib import PurePosixPath
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Type alias for where a dependency is fetched from
DependencySourceType = Literal["registry", "git", "path"]

# Files and directories included in a release when [package].files is unset
DEFAULT_FILES: tuple[str, ...] = (
    "src",
    "lib",
    "pubctl.toml",
    "pyproject.toml",
    "README*",
    "readme*",
    "LICENSE*",
    "license*",
    "CHANGELOG*",
    "changelog*",
)


def file_pattern_problem(pattern: str) -> str | None:
    """Check a [package].files entry.

    Args:
        pattern: File name, directory name or glob pattern.

    Returns:
        Why the pattern is unusable, or None if it is fine.
    """
    if not pattern.strip():
        return "pattern is empty"
    path = PurePosixPath(pattern)
    if path.is_absolute():
        return "pattern must be relative to the project root"
    if ".." in path.parts:
        return "pattern must not leave the project root"
    return None


class DependencyEntry(BaseModel):
    """A single dependency declared in pubctl.toml.

    Only dependencies fetched from the registry are published as release
    requirements. Git and path dependencies are excluded from the release.

    Attributes:
        requirement: Version requirement (e.g., "~> 1.2").
        source: Where the dependency comes from.
        optional: Whether the dependency is optional for consumers.
    """

    model_config = ConfigDict(extra="forbid")

    requirement: Annotated[str | None, Field(description="Version requirement")] = None
    source: Annotated[DependencySourceType, Field(description="Dependency source")] = "registry"
    optional: Annotated[bool, Field(description="Optional dependency")] = False


class PackageSection(BaseModel):
    """The [package] section of pubctl.toml.

    Attributes:
        name: Package name, if it differs from the application name.
        files: Files and glob patterns included in the release.
        maintainers: Names and/or emails of maintainers.
        licenses: Licenses used by the package.
        links: Links relevant to the package.
        build_tools: Build tools able to build the package. Detected from
            the package files when unset.
    """

    model_config = ConfigDict(extra="forbid")

    name: Annotated[str | None, Field(description="Package name override")] = None
    files: Annotated[
        list[str],
        Field(default_factory=lambda: list(DEFAULT_FILES), description="Included files"),
    ]
    maintainers: Annotated[list[str], Field(default_factory=list, description="Maintainers")]
    licenses: Annotated[list[str], Field(default_factory=list, description="Licenses")]
    links: Annotated[dict[str, str], Field(default_factory=dict, description="Package links")]
    build_tools: Annotated[
        list[str] | None,
        Field(description="Build tools (None = detect from files)"),
    ] = None

    @field_validator("files")
    @classmethod
    def validate_files(cls, v: list[str]) -> list[str]:
        """Reject patterns that cannot be resolved below the project root."""
        for pattern in v:
            problem = file_pattern_problem(pattern)
            if problem:
                msg = f"invalid file pattern {pattern!r}: {problem}"
                raise ValueError(msg)
        return v


class DocsSection(BaseModel):
    """The [docs] section of pubctl.toml.

    Attributes:
        command: Documentation generator command. The canonical URL
            arguments are appended to it.
    """

    model_config = ConfigDict(extra="forbid")

    command: Annotated[
        list[str],
        Field(default_factory=lambda: ["docs"], description="Documentation generator command"),
    ]

    @field_validator("command")
    @classmethod
    def validate_command(cls, v: list[str]) -> list[str]:
        """Reject an empty generator command."""
        if not v or not v[0].strip():
            msg = "docs command cannot be empty"
            raise ValueError(msg)
        return v


class ProjectConfig(BaseModel):
    """Complete project configuration read from pubctl.toml.

    Attributes:
        app: Application name, also the package name unless overridden.
        version: Version being published.
        description: Short description of the project.
        package: Registry-specific package configuration.
        deps: Declared dependencies by name.
        docs: Documentation generator configuration.
    """

    model_config = ConfigDict(extra="forbid")

    app: Annotated[str, Field(min_length=1, description="Application name")]
    version: Annotated[str, Field(min_length=1, description="Package version")]
    description: Annotated[str | None, Field(description="Project description")] = None
    package: Annotated[PackageSection, Field(default_factory=PackageSection)]
    deps: Annotated[dict[str, DependencyEntry], Field(default_factory=dict)]
    docs: Annotated[DocsSection, Field(default_factory=DocsSection)]

    @property
    def package_name(self) -> str:
        """Name the package is published under."""
        return self.package.name or self.app
