"""Release tarball packaging.

A release tarball is an uncompressed tar holding four members:

- ``VERSION``: tarball format version
- ``CHECKSUM``: upper-case hex SHA-256 of VERSION, metadata and contents
- ``metadata.json``: release metadata
- ``contents.tar.gz``: the package files
"""

import hashlib
import io
import json
import logging
import tarfile
from collections.abc import Iterable
from pathlib import Path

from pubctl.core.archive import ArchiveEntry, write_tarball
from pubctl.core.errors import ArchiveError
from pubctl.models.package import PackageMetadata

logger = logging.getLogger(__name__)

# Tarball format version
TARBALL_VERSION = b"3"


def _read_package_files(files: Iterable[str], root: Path) -> list[ArchiveEntry]:
    """Read package files relative to the project root.

    Raises:
        ArchiveError: If a file cannot be read.
    """
    entries: list[ArchiveEntry] = []
    for relative in sorted(set(files)):
        path = root / relative
        try:
            entries.append(ArchiveEntry(path=Path(relative).as_posix(), content=path.read_bytes()))
        except OSError as e:
            raise ArchiveError(f"Failed to read package file {path}: {e}") from e
    return entries


def _add_member(tar: tarfile.TarFile, name: str, data: bytes) -> None:
    info = tarfile.TarInfo(name=name)
    info.size = len(data)
    info.mode = 0o644
    info.mtime = 0
    tar.addfile(info, io.BytesIO(data))


def create_tarball(
    meta: PackageMetadata,
    files: Iterable[str],
    root: Path,
) -> tuple[bytes, str]:
    """Build the release tarball for a package.

    Args:
        meta: Release metadata.
        files: Project-relative paths of the files to include.
        root: Project root the file paths are relative to.

    Returns:
        Tuple of (tarball bytes, upper-case hex checksum).

    Raises:
        ArchiveError: If a package file cannot be read.
    """
    entries = _read_package_files(files, root)
    contents_buffer = io.BytesIO()
    write_tarball(contents_buffer, entries)
    contents = contents_buffer.getvalue()

    metadata = json.dumps(meta.to_dict(), sort_keys=True, indent=2).encode()

    checksum = hashlib.sha256(TARBALL_VERSION + metadata + contents).hexdigest().upper()

    outer = io.BytesIO()
    with tarfile.open(fileobj=outer, mode="w", format=tarfile.PAX_FORMAT) as tar:
        _add_member(tar, "VERSION", TARBALL_VERSION)
        _add_member(tar, "CHECKSUM", checksum.encode())
        _add_member(tar, "metadata.json", metadata)
        _add_member(tar, "contents.tar.gz", contents)

    data = outer.getvalue()
    logger.info(
        "Built release tarball for %s %s (%d file(s), %d bytes)",
        meta.name,
        meta.version,
        len(entries),
        len(data),
    )
    return data, checksum
