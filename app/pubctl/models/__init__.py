"""Data models for pubctl.

This module exports the core data structures used throughout the application.
"""

from pubctl.models.options import PublishOptions, PublishTarget
from pubctl.models.package import BuildInfo, PackageMetadata, Requirement
from pubctl.models.project import (
    DEFAULT_FILES,
    DependencyEntry,
    DocsSection,
    PackageSection,
    ProjectConfig,
)

__all__ = [
    "DEFAULT_FILES",
    "BuildInfo",
    "DependencyEntry",
    "DocsSection",
    "PackageMetadata",
    "PackageSection",
    "ProjectConfig",
    "PublishOptions",
    "PublishTarget",
    "Requirement",
]
