"""Exception hierarchy for publish and revert operations.

Every exception derived from :class:`PublishError` is fatal: the CLI prints
it and exits with a non-zero status. Failed registry responses are not
exceptions; they are classified into outcomes instead.
"""


class PublishError(Exception):
    """Base exception for fatal publish errors.

    Attributes:
        hint: Optional remediation advice shown below the error message.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class UsageError(PublishError):
    """Raised when the command was invoked with invalid arguments."""


class InvalidVersionError(UsageError):
    """Raised when a version string cannot be normalized."""


class ConfigurationError(PublishError):
    """Base exception for project or user configuration problems."""


class ProjectConfigError(ConfigurationError):
    """Raised when pubctl.toml is missing or invalid."""


class AuthError(ConfigurationError):
    """Raised when no registry credentials are configured."""


class DocsTaskUnavailableError(ConfigurationError):
    """Raised when the documentation generator cannot be found."""


class DocsGenerationError(ConfigurationError):
    """Raised when the documentation generator exits with an error."""


class DocsNotFoundError(ConfigurationError):
    """Raised when no generated documentation can be located."""


class ArchiveError(PublishError):
    """Raised when a documentation or release archive cannot be built."""


class RegistryConnectionError(PublishError):
    """Raised by the registry client when the registry cannot be reached.

    The publish and revert flows catch it and report a failed outcome.
    """
