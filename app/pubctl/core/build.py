"""Project build step.

Reads pubctl.toml, resolves the release file list and splits dependencies
into published requirements and excluded (non-registry) dependencies.
"""

import logging
import tomllib
from pathlib import Path

from pydantic import ValidationError

from pubctl.core.errors import ProjectConfigError
from pubctl.core.paths import get_project_config_path
from pubctl.models.package import BuildInfo, PackageMetadata, Requirement
from pubctl.models.project import ProjectConfig, file_pattern_problem
from pubctl.utils.formatting import console, create_summary_table, print_warning

logger = logging.getLogger(__name__)

# Top-level files that identify a build tool
_BUILD_TOOL_FILES: dict[str, str] = {
    "pyproject.toml": "pip",
    "setup.py": "setuptools",
    "Makefile": "make",
    "rebar.config": "rebar3",
    "mix.exs": "mix",
}


def load_project_config(project_dir: Path | None = None) -> ProjectConfig:
    """Load and validate pubctl.toml.

    Args:
        project_dir: Project root. If None, uses the current directory.

    Returns:
        Validated ProjectConfig.

    Raises:
        ProjectConfigError: If the file is missing, unparsable or invalid.
    """
    config_path = get_project_config_path(project_dir)

    if not config_path.exists():
        raise ProjectConfigError(
            f"Project configuration not found: {config_path}",
            hint="Create a pubctl.toml with at least 'app' and 'version'.",
        )

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ProjectConfigError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ProjectConfigError(f"Failed to read {config_path}: {e}") from e

    try:
        return ProjectConfig.model_validate(data)
    except ValidationError as e:
        raise ProjectConfigError(f"Invalid project configuration: {e}") from e


def expand_files(patterns: list[str], root: Path) -> list[str]:
    """Expand file patterns into the release file list.

    Patterns are globs relative to ``root``. Matched directories contribute
    every regular file below them. Patterns matching nothing are skipped.

    Args:
        patterns: File names, directory names or glob patterns.
        root: Project root.

    Returns:
        Sorted, de-duplicated project-relative POSIX paths.

    Raises:
        ProjectConfigError: If a pattern is empty or points outside the
            project root.
    """
    found: set[str] = set()

    for pattern in patterns:
        problem = file_pattern_problem(pattern)
        if problem:
            raise ProjectConfigError(
                f"Invalid package file pattern {pattern!r}: {problem}",
                hint="List files relative to the project root in [package].files.",
            )
        matches = sorted(root.glob(pattern))
        if not matches:
            logger.debug("Package file pattern %r matched nothing", pattern)
        for match in matches:
            if match.is_dir():
                candidates = [p for p in match.rglob("*") if p.is_file()]
            elif match.is_file():
                candidates = [match]
            else:
                candidates = []
            found.update(p.relative_to(root).as_posix() for p in candidates)

    return sorted(found)


def detect_build_tools(files: list[str]) -> list[str]:
    """Detect build tools from top-level files of the release.

    Args:
        files: Project-relative release file paths.

    Returns:
        Sorted build tool names.
    """
    top_level = {f for f in files if "/" not in f}
    return sorted({tool for name, tool in _BUILD_TOOL_FILES.items() if name in top_level})


def prepare_package(
    project_dir: Path | None = None,
    *,
    config: ProjectConfig | None = None,
) -> BuildInfo:
    """Prepare everything needed to publish the project.

    Args:
        project_dir: Project root. If None, uses the current directory.
        config: Already loaded project configuration. If None, pubctl.toml
            is loaded from the project root.

    Returns:
        BuildInfo with metadata, excluded dependencies and package config.

    Raises:
        ProjectConfigError: If pubctl.toml is missing or invalid.
    """
    root = project_dir or Path.cwd()
    if config is None:
        config = load_project_config(root)
    package = config.package

    requirements: list[Requirement] = []
    exclude_deps: list[str] = []
    for name, dep in sorted(config.deps.items()):
        if dep.source == "registry":
            requirements.append(
                Requirement(name=name, requirement=dep.requirement, optional=dep.optional)
            )
        else:
            exclude_deps.append(name)

    files = expand_files(package.files, root)
    build_tools = package.build_tools
    if build_tools is None:
        build_tools = detect_build_tools(files)

    meta = PackageMetadata(
        name=config.package_name,
        version=config.version,
        description=config.description,
        requirements=tuple(requirements),
        files=tuple(files),
        maintainers=tuple(package.maintainers),
        licenses=tuple(package.licenses),
        links=tuple(sorted(package.links.items())),
        build_tools=tuple(build_tools),
    )
    logger.debug("Prepared %s %s with %d file(s)", meta.name, meta.version, len(files))

    return BuildInfo(meta=meta, exclude_deps=tuple(exclude_deps), package=package)


def print_build_info(
    meta: PackageMetadata,
    exclude_deps: tuple[str, ...],
    files: tuple[str, ...],
) -> None:
    """Print a summary of what will be published.

    Args:
        meta: Release metadata.
        exclude_deps: Dependencies left out of the release.
        files: Files included in the release.
    """
    table = create_summary_table(f"{meta.name} {meta.version}")

    if meta.description:
        table.add_row("Description", meta.description)

    if meta.requirements:
        deps = "\n".join(
            f"{req.name} {req.requirement or '*'}" + (" (optional)" if req.optional else "")
            for req in meta.requirements
        )
        table.add_row("Dependencies", deps)

    if exclude_deps:
        table.add_row("Excluded dependencies", f"[warning]{', '.join(exclude_deps)}[/]")

    if meta.maintainers:
        table.add_row("Maintainers", ", ".join(meta.maintainers))
    if meta.licenses:
        table.add_row("Licenses", ", ".join(meta.licenses))
    if meta.links:
        table.add_row("Links", "\n".join(f"{key}: {url}" for key, url in meta.links))
    if meta.build_tools:
        table.add_row("Build tools", ", ".join(meta.build_tools))

    table.add_row("Files", "\n".join(files) if files else "[warning]none[/]")

    console.print(table)

    if exclude_deps:
        print_warning("Dependencies not fetched from the registry are excluded from the release.")
