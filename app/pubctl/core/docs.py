"""Documentation generation and discovery.

The documentation generator is an external command configured in the
``[docs]`` section of pubctl.toml. pubctl appends ``--canonical URL`` to it
and expects HTML output with an ``index.html`` in ``doc/`` or ``docs/``.
"""

import logging
from pathlib import Path

from pubctl.core.errors import DocsGenerationError, DocsNotFoundError, DocsTaskUnavailableError
from pubctl.utils.shell import command_exists, run_interactive

logger = logging.getLogger(__name__)

# Output directories probed in order
DOCS_DIRS: tuple[str, ...] = ("doc", "docs")

DOCS_INDEX = "index.html"


def docs_args(command: list[str], canonical_url: str, extra: str | None = None) -> list[str]:
    """Build the documentation generator command line.

    Args:
        command: Configured generator command.
        canonical_url: Canonical documentation URL of the package.
        extra: Additional canonical URL argument supplied by the user.

    Returns:
        Full argument list.
    """
    args = [*command, "--canonical", canonical_url]
    if extra:
        args.append(extra)
    return args


def generate_docs(
    command: list[str],
    canonical_url: str,
    extra: str | None = None,
    cwd: Path | None = None,
) -> None:
    """Run the documentation generator.

    Args:
        command: Configured generator command.
        canonical_url: Canonical documentation URL of the package.
        extra: Additional canonical URL argument supplied by the user.
        cwd: Directory to run the generator in.

    Raises:
        DocsTaskUnavailableError: If the generator executable is not installed.
        DocsGenerationError: If the generator exits with a non-zero status.
    """
    executable = command[0]
    unavailable = DocsTaskUnavailableError(
        f'The documentation generator "{executable}" is unavailable',
        hint=(
            f'Add the tool that provides "{executable}" to your development dependencies, '
            "or set [docs].command in pubctl.toml. If it is already installed, make sure "
            "you run pubctl in the environment it is installed in."
        ),
    )

    if not command_exists(executable):
        raise unavailable

    args = docs_args(command, canonical_url, extra)
    logger.info("Generating documentation: %s", " ".join(args))

    try:
        returncode = run_interactive(args, cwd=str(cwd) if cwd else None)
    except FileNotFoundError as e:
        raise unavailable from e
    except OSError as e:
        raise DocsGenerationError(f"Failed to run {executable}: {e}") from e

    if returncode != 0:
        raise DocsGenerationError(f"Documentation generator exited with status {returncode}")


def locate_docs_dir(root: Path) -> Path:
    """Find the generated documentation directory.

    Args:
        root: Project root.

    Returns:
        The first of ``doc/`` and ``docs/`` that exists.

    Raises:
        DocsNotFoundError: If neither directory exists or the found
            directory has no index.html.
    """
    for name in DOCS_DIRS:
        directory = root / name
        if directory.exists():
            break
    else:
        raise DocsNotFoundError(
            "Documentation could not be found. "
            "Please ensure documentation is in the doc/ or docs/ directory"
        )

    if not (directory / DOCS_INDEX).is_file():
        raise DocsNotFoundError(f"File not found: {name}/{DOCS_INDEX}")

    logger.debug("Using documentation directory %s", directory)
    return directory
