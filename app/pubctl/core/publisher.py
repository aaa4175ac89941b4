"""Publish orchestration.

Decides from the publish target and the revert option which registry
operations run, and runs them in order:

- ``package``: create or revert the release
- ``docs``: create or revert the documentation
- no target: the package operation followed by the docs operation

In the combined form the docs step always runs after the package step,
even when the package registry call failed or the registry could not be
reached. Fatal errors (exceptions) still abort the whole invocation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from pathlib import Path

import typer

from pubctl.api.client import RegistryClient
from pubctl.core.archive import build_docs_archive
from pubctl.core.build import print_build_info
from pubctl.core.docs import generate_docs, locate_docs_dir
from pubctl.core.errors import RegistryConnectionError, UsageError
from pubctl.core.outcome import Failure, NotFound, Outcome, as_failure, classify
from pubctl.core.progress import make_reporter
from pubctl.core.revert import (
    connection_failure,
    report_failure,
    revert_docs,
    revert_package,
)
from pubctl.core.tarball import create_tarball
from pubctl.core.version import clean_version
from pubctl.models.options import PublishOptions, PublishTarget
from pubctl.models.package import BuildInfo
from pubctl.models.project import ProjectConfig
from pubctl.utils.formatting import console, print_error, print_info, print_success

logger = logging.getLogger(__name__)

USAGE = """invalid arguments, expected one of:
  pubctl publish
  pubctl publish package
  pubctl publish docs"""


class Confirmation(Enum):
    """Answer to the publish confirmation prompt."""

    CONFIRMED = "confirmed"
    DECLINED = "declined"


ConfirmFn = Callable[[str], Confirmation]


def ask_confirmation(prompt: str) -> Confirmation:
    """Ask the user to confirm on the terminal.

    Args:
        prompt: Question to ask.

    Returns:
        CONFIRMED if the user answered yes, DECLINED otherwise.
    """
    if typer.confirm(prompt, default=False):
        return Confirmation.CONFIRMED
    return Confirmation.DECLINED


def parse_target(value: str | None) -> PublishTarget | None:
    """Validate the positional publish argument.

    Args:
        value: "package", "docs" or None.

    Returns:
        The matching PublishTarget, or None for the combined form.

    Raises:
        UsageError: For any other value.
    """
    if value is None:
        return None
    try:
        return PublishTarget(value)
    except ValueError:
        raise UsageError(USAGE) from None


class Publisher:
    """Runs the create and revert flows for one invocation.

    Attributes:
        client: Registry client for all registry calls.
        build: Result of the build step.
        config: Project configuration.
        project_dir: Project root.
    """

    def __init__(
        self,
        client: RegistryClient,
        build: BuildInfo,
        config: ProjectConfig,
        project_dir: Path,
        *,
        confirm: ConfirmFn = ask_confirmation,
    ) -> None:
        """Initialize the publisher.

        Args:
            client: Registry client.
            build: Result of the build step.
            config: Project configuration.
            project_dir: Project root.
            confirm: Confirmation prompt, replaceable for tests.
        """
        self.client = client
        self.build = build
        self.config = config
        self.project_dir = project_dir
        self._confirm = confirm

    def run(self, target: str | PublishTarget | None, options: PublishOptions) -> list[Outcome]:
        """Dispatch to the create or revert flows.

        Args:
            target: "package", "docs" or None for both.
            options: Parsed command options.

        Returns:
            Outcomes of every registry call made, in order. Empty when the
            user declined publishing.

        Raises:
            UsageError: If the target or the revert version is invalid.
        """
        if not isinstance(target, PublishTarget):
            target = parse_target(target)
        version = clean_version(options.revert) if options.revert is not None else None
        logger.debug("Publishing target=%s revert=%s", target, version)

        outcomes: list[Outcome] = []

        if target in (PublishTarget.PACKAGE, None):
            if version is not None:
                outcomes.append(revert_package(self.client, self.build.meta, version))
            else:
                outcome = self.create_package(options)
                if outcome is not None:
                    outcomes.append(outcome)

        if target in (PublishTarget.DOCS, None):
            if version is not None:
                outcomes.append(revert_docs(self.client, self.build.meta, version))
            else:
                outcomes.append(self.create_docs(options))

        return outcomes

    def create_package(self, options: PublishOptions) -> Outcome | None:
        """Show what will be published, confirm, and publish the release.

        Args:
            options: Parsed command options.

        Returns:
            Outcome of the upload, or None if the user declined.
        """
        meta = self.build.meta
        settings = self.client.session.settings

        print_info(f"Publishing {meta.name} {meta.version}")
        print_build_info(meta, self.build.exclude_deps, meta.files)
        console.print(
            f"Before publishing, please read the Code of Conduct: [url]{settings.coc_url}[/]"
        )

        if not options.yes and self._confirm("Proceed?") is Confirmation.DECLINED:
            print_info("Aborted.")
            return None

        return self._create_release(options.progress)

    def _create_release(self, progress: bool) -> Outcome:
        meta = self.build.meta
        tarball, checksum = create_tarball(meta, meta.files, self.project_dir)

        failed = f"Pushing {meta.name} {meta.version} failed"

        sink = make_reporter(len(tarball) if progress else None)
        try:
            response = self.client.create_release(meta.name, tarball, sink)
        except RegistryConnectionError as e:
            console.print()
            return report_failure(failed, connection_failure(e))

        outcome = as_failure(classify(response.status_code, response.body), response.body)
        console.print()
        if isinstance(outcome, Failure):
            return report_failure(failed, outcome)

        url = self.client.session.package_url(meta.name, meta.version)
        print_success(f"Published at {url} ({checksum.lower()})")
        print_info("Don't forget to upload your documentation with `pubctl publish docs`")
        return outcome

    def create_docs(self, options: PublishOptions) -> Outcome:
        """Generate, archive and upload the documentation.

        Args:
            options: Parsed command options.

        Returns:
            Outcome of the upload.

        Raises:
            DocsTaskUnavailableError: If the documentation generator is missing.
            DocsGenerationError: If the documentation generator fails.
            DocsNotFoundError: If no generated documentation is found.
            ArchiveError: If the archive cannot be built.
        """
        name = self.config.package_name
        version = self.config.version
        session = self.client.session

        generate_docs(
            self.config.docs.command,
            session.docs_url(name),
            options.canonical,
            cwd=self.project_dir,
        )

        directory = locate_docs_dir(self.project_dir)
        archive = build_docs_archive(directory, name, version)

        failed = f"Pushing docs for {name} v{version} failed"

        sink = make_reporter(len(archive) if options.progress else None)
        try:
            response = self.client.create_docs(name, version, archive, sink)
        except RegistryConnectionError as e:
            console.print()
            return report_failure(failed, connection_failure(e))

        outcome = classify(response.status_code, response.body)

        console.print()
        if isinstance(outcome, NotFound):
            print_error(
                f"Pushing docs for {name} v{version} is not possible "
                "because the package is not published"
            )
        elif isinstance(outcome, Failure):
            report_failure(failed, outcome)
        else:
            print_success(f"Published docs for {name} {version}")
            print_info(f"Hosted at {session.docs_url(name, version)}")

        return outcome
