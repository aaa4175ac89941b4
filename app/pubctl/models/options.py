"""Command options for publish invocations."""

from dataclasses import dataclass
from enum import Enum


class PublishTarget(str, Enum):
    """Artifact selected by the positional publish argument."""

    PACKAGE = "package"
    DOCS = "docs"


@dataclass(frozen=True, slots=True)
class PublishOptions:
    """Options parsed once from the command line.

    Attributes:
        revert: Version to revert. When set, the publish flows delete
            instead of create.
        progress: Whether uploads show a progress bar.
        canonical: Extra canonical documentation URL passed to the
            documentation generator.
        yes: Skip the confirmation prompt before publishing a package.
    """

    revert: str | None = None
    progress: bool = True
    canonical: str | None = None
    yes: bool = False

