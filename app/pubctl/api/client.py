"""Registry HTTP API client.

Implements the four registry calls used by the publish and revert flows.
Each call returns the raw response as an :class:`ApiResponse`; deciding
whether it succeeded is left to :mod:`pubctl.core.outcome`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

import httpx

from pubctl.api.session import RegistrySession
from pubctl.core.errors import RegistryConnectionError
from pubctl.core.progress import NullProgress, ProgressSink, iter_chunks

logger = logging.getLogger(__name__)

_TARBALL_HEADERS = {"Content-Type": "application/octet-stream"}


@dataclass(frozen=True, slots=True)
class ApiResponse:
    """Response of a registry call.

    Attributes:
        status_code: HTTP status code.
        body: Decoded JSON body, the raw text if the body is not JSON, or
            None for an empty body.
        headers: Response headers.
    """

    status_code: int
    body: Any = None
    headers: Mapping[str, str] = field(default_factory=dict)


class RegistryClient:
    """Client for the registry release and documentation endpoints.

    Example:
        >>> with RegistrySession.open(settings, auth) as session:
        ...     client = RegistryClient(session)
        ...     response = client.delete_release("my_package", "1.0.0")
    """

    def __init__(self, session: RegistrySession) -> None:
        """Initialize the client.

        Args:
            session: Registry session providing the HTTP client and credentials.
        """
        self._session = session

    @property
    def session(self) -> RegistrySession:
        """Return the registry session this client uses."""
        return self._session

    def create_release(
        self,
        name: str,
        tarball: bytes,
        progress: ProgressSink | None = None,
    ) -> ApiResponse:
        """Upload a release tarball.

        Args:
            name: Package name.
            tarball: Release tarball built by the release packager.
            progress: Progress sink notified while uploading.

        Returns:
            Registry response.
        """
        return self._upload(f"/packages/{quote(name)}/releases", tarball, progress)

    def delete_release(self, name: str, version: str) -> ApiResponse:
        """Delete (revert) a published release.

        Args:
            name: Package name.
            version: Release version.

        Returns:
            Registry response.
        """
        return self._request("DELETE", f"/packages/{quote(name)}/releases/{quote(version)}")

    def create_docs(
        self,
        name: str,
        version: str,
        archive: bytes,
        progress: ProgressSink | None = None,
    ) -> ApiResponse:
        """Upload a documentation archive for a release.

        Args:
            name: Package name.
            version: Release version the documentation belongs to.
            archive: Gzipped tar archive of the generated documentation.
            progress: Progress sink notified while uploading.

        Returns:
            Registry response.
        """
        return self._upload(
            f"/packages/{quote(name)}/releases/{quote(version)}/docs", archive, progress
        )

    def delete_docs(self, name: str, version: str) -> ApiResponse:
        """Delete (revert) the documentation of a release.

        Args:
            name: Package name.
            version: Release version.

        Returns:
            Registry response.
        """
        return self._request(
            "DELETE", f"/packages/{quote(name)}/releases/{quote(version)}/docs"
        )

    def _upload(self, path: str, data: bytes, progress: ProgressSink | None) -> ApiResponse:
        """POST a binary payload, reporting progress as it is sent."""
        sink = progress or NullProgress()
        headers = {**_TARBALL_HEADERS, "Content-Length": str(len(data))}
        try:
            return self._request("POST", path, content=iter_chunks(data, sink), headers=headers)
        finally:
            sink.close()

    def _request(
        self,
        method: str,
        path: str,
        *,
        content: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> ApiResponse:
        """Send a request and convert the response.

        Raises:
            RegistryConnectionError: If the registry cannot be reached.
        """
        request_headers = {**self._session.auth.headers, **(headers or {})}
        logger.info("%s %s", method, path)

        try:
            response = self._session.client.request(
                method, path, content=content, headers=request_headers
            )
        except httpx.HTTPError as e:
            raise RegistryConnectionError(
                f"Failed to reach registry at {self._session.settings.api_url}: {e}"
            ) from e

        logger.debug("%s %s -> %d", method, path, response.status_code)
        return ApiResponse(
            status_code=response.status_code,
            body=_decode_body(response),
            headers=dict(response.headers),
        )


def _decode_body(response: httpx.Response) -> Any:
    """Decode a response body as JSON, falling back to text."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
