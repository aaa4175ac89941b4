"""Version string normalization.

Revert versions are typed by hand, so they are normalized to the
registry's canonical SemVer form before use.
"""

import re

from pubctl.core.errors import InvalidVersionError

# MAJOR.MINOR.PATCH[-PRE][+BUILD]
_SEMVER_RE = re.compile(
    r"(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
)

# MAJOR.MINOR without patch, padded to MAJOR.MINOR.0
_SHORT_RE = re.compile(r"(0|[1-9]\d*)\.(0|[1-9]\d*)")


def clean_version(version: str) -> str:
    """Normalize a user-supplied version string.

    Strips surrounding whitespace and a leading ``v``, pads ``1.2`` to
    ``1.2.0`` and validates the result as SemVer.

    Args:
        version: Version as typed by the user.

    Returns:
        Canonical version string.

    Raises:
        InvalidVersionError: If the version is not valid SemVer.

    Example:
        >>> clean_version(" v1.2 ")
        '1.2.0'
    """
    candidate = version.strip()
    if candidate[:1] in ("v", "V"):
        candidate = candidate[1:]

    if _SHORT_RE.fullmatch(candidate):
        candidate = f"{candidate}.0"

    if not _SEMVER_RE.fullmatch(candidate):
        raise InvalidVersionError(
            f"Invalid version: {version!r}",
            hint="Versions must follow SemVer, e.g. 1.2.3 or 1.2.3-rc.1",
        )
    return candidate
