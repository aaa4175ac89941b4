"""Classification of registry responses.

Every registry call site passes its response through :func:`classify` so
success and failure are decided in one place.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Success:
    """The registry accepted the request (2xx)."""

    code: int

    @property
    def ok(self) -> bool:
        """Check if the outcome counts as a successful step."""
        return True


@dataclass(frozen=True, slots=True)
class NotFound:
    """The registry answered 404 for the referenced package or version."""

    code: int = field(default=404, init=False)

    @property
    def ok(self) -> bool:
        """Check if the outcome counts as a successful step."""
        return False


@dataclass(frozen=True, slots=True)
class Failure:
    """Any other response. The body is kept as returned by the registry.

    The code is None when the registry could not be reached; the body then
    holds the connection error message.
    """

    code: int | None
    body: Any = None

    @property
    def ok(self) -> bool:
        """Check if the outcome counts as a successful step."""
        return False


Outcome = Success | NotFound | Failure


def classify(status_code: int, body: Any = None) -> Outcome:
    """Map a registry status code and body to an outcome.

    Args:
        status_code: HTTP status code of the response.
        body: Decoded response body, passed through to Failure unchanged.

    Returns:
        Success for 200-299, NotFound for 404, Failure otherwise.
    """
    if 200 <= status_code <= 299:
        return Success(status_code)
    if status_code == 404:
        return NotFound()
    return Failure(status_code, body)


def as_failure(outcome: Outcome, body: Any = None) -> Outcome:
    """Fold NotFound into Failure for call sites without 404 handling.

    Args:
        outcome: Classified outcome.
        body: Response body to keep on the resulting Failure.

    Returns:
        The outcome unchanged, or a Failure(404, body) for NotFound.
    """
    if isinstance(outcome, NotFound):
        return Failure(outcome.code, body)
    return outcome
