"""Registry session and authentication.

A :class:`RegistrySession` is built once when the CLI starts and handed to
every registry call. Nothing in pubctl looks the session up globally.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import httpx

from pubctl import __version__
from pubctl.core.errors import AuthError
from pubctl.core.settings import API_KEY_ENV, Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AuthInfo:
    """Credentials sent with every registry call.

    Attributes:
        key: Registry API key.
    """

    key: str = field(repr=False)

    def __post_init__(self) -> None:
        """Validate credentials after initialization."""
        if not self.key:
            msg = "API key cannot be empty"
            raise ValueError(msg)

    @property
    def headers(self) -> dict[str, str]:
        """HTTP headers carrying the credentials."""
        return {"Authorization": self.key}


def auth_info(settings: Settings) -> AuthInfo:
    """Get credentials from settings.

    Args:
        settings: Loaded user settings.

    Returns:
        AuthInfo holding the configured API key.

    Raises:
        AuthError: If no API key is configured.
    """
    if not settings.api_key:
        raise AuthError(
            "No registry API key configured",
            hint=f"Run 'pubctl auth' or set the {API_KEY_ENV} environment variable.",
        )
    return AuthInfo(key=settings.api_key)


@dataclass(frozen=True)
class RegistrySession:
    """Connection state shared by all registry calls of one invocation.

    Attributes:
        settings: Registry URLs and timeouts.
        auth: Credentials for the registry.
        client: HTTP client bound to the registry API.
    """

    settings: Settings
    auth: AuthInfo
    client: httpx.Client

    @classmethod
    def open(
        cls,
        settings: Settings,
        auth: AuthInfo,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> RegistrySession:
        """Create a session with a configured HTTP client.

        Args:
            settings: Registry settings.
            auth: Registry credentials.
            transport: Optional transport, used by tests.

        Returns:
            New RegistrySession. Close it with :meth:`close`.
        """
        client = httpx.Client(
            base_url=settings.api_url.rstrip("/"),
            headers={
                "User-Agent": f"pubctl/{__version__}",
                "Accept": "application/json",
            },
            timeout=settings.timeout_seconds,
            transport=transport,
        )
        logger.debug("Opened registry session for %s", settings.api_url)
        return cls(settings=settings, auth=auth, client=client)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.client.close()

    def __enter__(self) -> RegistrySession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def package_url(self, name: str, version: str | None = None) -> str:
        """Return the registry web page of a package or release."""
        base = f"{self.settings.package_url.rstrip('/')}/{name}"
        return f"{base}/{version}" if version else base

    def docs_url(self, name: str, version: str | None = None) -> str:
        """Return the hosted documentation URL of a package or release."""
        base = f"{self.settings.docs_url.rstrip('/')}/{name}"
        return f"{base}/{version}" if version else base
