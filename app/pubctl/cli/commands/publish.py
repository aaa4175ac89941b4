"""Publish command implementation.

Publishes a new package version and its documentation, or reverts them.
"""

from pathlib import Path
from typing import Annotated

import typer

from pubctl.api.client import RegistryClient
from pubctl.api.session import RegistrySession, auth_info
from pubctl.core.build import load_project_config, prepare_package
from pubctl.core.errors import PublishError, UsageError
from pubctl.core.outcome import Outcome
from pubctl.core.publisher import USAGE, Publisher, parse_target
from pubctl.core.settings import load_settings
from pubctl.core.version import clean_version
from pubctl.models.options import PublishOptions, PublishTarget
from pubctl.utils.formatting import print_error, print_info


def _parse_targets(targets: list[str] | None) -> PublishTarget | None:
    """Reduce the positional arguments to a single publish target.

    Raises:
        UsageError: If more than one argument or an unknown one was given.
    """
    if not targets:
        return None
    if len(targets) > 1:
        raise UsageError(USAGE)
    return parse_target(targets[0])


def _run_publish(
    targets: list[str] | None,
    options: PublishOptions,
    project_dir: Path,
) -> list[Outcome]:
    """Validate arguments, set up collaborators and run the publisher.

    Arguments are validated before any configuration is read or any
    registry connection is opened.
    """
    target = _parse_targets(targets)
    if options.revert is not None:
        clean_version(options.revert)

    settings = load_settings()
    auth = auth_info(settings)
    config = load_project_config(project_dir)
    build = prepare_package(project_dir, config=config)

    with RegistrySession.open(settings, auth) as session:
        publisher = Publisher(RegistryClient(session), build, config, project_dir)
        return publisher.run(target, options)


def publish(
    targets: Annotated[
        list[str] | None,
        typer.Argument(
            help="What to publish: 'package', 'docs', or nothing for both.",
            show_default=False,
        ),
    ] = None,
    revert: Annotated[
        str | None,
        typer.Option(
            "--revert",
            help="Revert the given version instead of publishing.",
            metavar="VERSION",
        ),
    ] = None,
    progress: Annotated[
        bool,
        typer.Option(
            "--progress/--no-progress",
            help="Show upload progress.",
        ),
    ] = True,
    canonical: Annotated[
        str | None,
        typer.Option(
            "--canonical",
            help="Canonical URL passed to the documentation generator.",
            metavar="URL",
        ),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip confirmation prompt and proceed.",
        ),
    ] = False,
    project_dir: Annotated[
        Path | None,
        typer.Option(
            "--project-dir",
            "-C",
            help="Project directory containing pubctl.toml.",
            file_okay=False,
        ),
    ] = None,
) -> None:
    """Publish a new package version and its documentation.

    A published version, or only its documentation, can be reverted with
    --revert within the grace period the registry allows.

    The documentation is generated by the command configured in
    [docs].command of pubctl.toml and read from doc/ or docs/.

    Examples:
        pubctl publish                    # Package, then docs
        pubctl publish package            # Package only
        pubctl publish docs               # Docs only
        pubctl publish --revert 1.0.0     # Revert package and docs
    """
    options = PublishOptions(revert=revert, progress=progress, canonical=canonical, yes=yes)
    root = project_dir or Path.cwd()

    try:
        outcomes = _run_publish(targets, options, root)
    except PublishError as e:
        print_error(str(e))
        if e.hint:
            print_info(e.hint)
        raise typer.Exit(code=1) from e

    if any(not outcome.ok for outcome in outcomes):
        raise typer.Exit(code=1)
