"""Documentation archive builder.

Packs a generated documentation directory into a gzipped tarball held in
memory. The archive is written to a private temporary directory and read
back, and the temporary file is always removed before returning.
"""

import gzip
import io
import logging
import tarfile
import tempfile
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from pubctl.core.errors import ArchiveError

logger = logging.getLogger(__name__)

# Permission bits stored for every archive member
_MEMBER_MODE = 0o644


@dataclass(frozen=True, slots=True)
class ArchiveEntry:
    """A single file of the documentation archive.

    Attributes:
        path: Path relative to the documentation directory, '/'-separated.
        content: Raw file content.
    """

    path: str
    content: bytes


def collect_entries(directory: Path) -> list[ArchiveEntry]:
    """Read every regular file below ``directory``.

    Symlinks and directories are skipped. Entries are sorted by relative
    path so identical input produces identical archives.

    Args:
        directory: Documentation output directory.

    Returns:
        Archive entries in path order.

    Raises:
        ArchiveError: If the directory or any file cannot be read.
    """
    if not directory.is_dir():
        raise ArchiveError(f"Not a directory: {directory}")

    entries: list[ArchiveEntry] = []
    for path in sorted(directory.rglob("*")):
        if path.is_symlink() or not path.is_file():
            continue
        relative = path.relative_to(directory).as_posix()
        try:
            content = path.read_bytes()
        except OSError as e:
            raise ArchiveError(f"Failed to read {path}: {e}") from e
        entries.append(ArchiveEntry(path=relative, content=content))

    logger.debug("Collected %d file(s) from %s", len(entries), directory)
    return entries


def write_tarball(fileobj: BinaryIO, entries: Iterable[ArchiveEntry]) -> None:
    """Write entries as a gzipped tarball with normalized metadata.

    Member mtimes, modes and the gzip header timestamp are fixed, so the
    output depends only on the entries.

    Args:
        fileobj: Binary file object to write to.
        entries: Files to include.

    Raises:
        OSError: If the tarball cannot be written.
    """
    with (
        gzip.GzipFile(filename="", mode="wb", fileobj=fileobj, mtime=0) as gz,
        tarfile.open(fileobj=gz, mode="w", format=tarfile.PAX_FORMAT) as tar,
    ):
        for entry in entries:
            info = tarfile.TarInfo(name=entry.path)
            info.size = len(entry.content)
            info.mode = _MEMBER_MODE
            info.mtime = 0
            tar.addfile(info, io.BytesIO(entry.content))


def build_docs_archive(directory: Path, name: str, version: str) -> bytes:
    """Build the documentation archive for a release.

    Args:
        directory: Documentation output directory.
        name: Package name, used for the temporary file name.
        version: Release version, used for the temporary file name.

    Returns:
        The gzipped tarball as bytes.

    Raises:
        ArchiveError: If a file cannot be read or the archive cannot be
            written or read back.
    """
    entries = collect_entries(directory)

    with tempfile.TemporaryDirectory(prefix="pubctl-") as tmp_dir:
        tarball = Path(tmp_dir) / f"{name}-{version}-docs.tar.gz"
        try:
            with open(tarball, "wb") as f:
                write_tarball(f, entries)
            data = tarball.read_bytes()
        except (OSError, tarfile.TarError) as e:
            raise ArchiveError(f"Failed to build documentation archive: {e}") from e
        finally:
            tarball.unlink(missing_ok=True)

    logger.info("Built documentation archive for %s %s (%d bytes)", name, version, len(data))
    return data
