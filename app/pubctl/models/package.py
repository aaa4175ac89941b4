"""Package models for release building.

This module defines the immutable data structures produced by the build
step and consumed by the publish and revert flows.
"""

from dataclasses import dataclass, field

from pubctl.models.project import PackageSection


@dataclass(frozen=True, slots=True)
class Requirement:
    """A registry dependency published as a release requirement.

    Attributes:
        name: Dependency package name.
        requirement: Version requirement, or None for any version.
        optional: Whether the dependency is optional.
    """

    name: str
    requirement: str | None = None
    optional: bool = False


@dataclass(frozen=True, slots=True)
class PackageMetadata:
    """Metadata of the release being published.

    Attributes:
        name: Package name on the registry.
        version: Release version.
        description: Short project description.
        requirements: Registry dependencies of the release.
        files: Project-relative paths of every file in the release.
        maintainers: Maintainer names and/or emails.
        licenses: License identifiers.
        links: Named links (homepage, source, ...).
        build_tools: Build tools able to build the package.
    """

    name: str
    version: str
    description: str | None = None
    requirements: tuple[Requirement, ...] = field(default=())
    files: tuple[str, ...] = field(default=())
    maintainers: tuple[str, ...] = field(default=())
    licenses: tuple[str, ...] = field(default=())
    links: tuple[tuple[str, str], ...] = field(default=())
    build_tools: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        """Validate metadata after initialization."""
        if not self.name:
            msg = "Package name cannot be empty"
            raise ValueError(msg)
        if not self.version:
            msg = "Package version cannot be empty"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, object]:
        """Return the metadata as a JSON-serializable dictionary."""
        return {
            "name": self.name,
            "version": self.version,
            "description": self.description or "",
            "requirements": {
                req.name: {"requirement": req.requirement, "optional": req.optional}
                for req in self.requirements
            },
            "files": list(self.files),
            "maintainers": list(self.maintainers),
            "licenses": list(self.licenses),
            "links": dict(self.links),
            "build_tools": list(self.build_tools),
        }


@dataclass(frozen=True, slots=True)
class BuildInfo:
    """Everything the build step hands to the publish flows.

    Attributes:
        meta: Release metadata.
        exclude_deps: Names of dependencies left out of the release because
            they are not fetched from the registry.
        package: The [package] configuration the metadata was built from.
    """

    meta: PackageMetadata
    exclude_deps: tuple[str, ...]
    package: PackageSection
