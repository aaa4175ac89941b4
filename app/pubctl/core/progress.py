"""Upload progress reporting.

A progress sink is called by the transport with the cumulative number of
bytes sent. :func:`make_reporter` returns either a Rich progress bar or a
sink that ignores every notification.
"""

from collections.abc import Iterator
from typing import Protocol

from rich.console import Console
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TaskID,
    TextColumn,
    TransferSpeedColumn,
)

from pubctl.utils.formatting import console as default_console

# Upload chunk size in bytes
CHUNK_SIZE = 64 * 1024


class ProgressSink(Protocol):
    """Receiver of upload progress notifications."""

    def __call__(self, sent: int) -> None:
        """Report that ``sent`` bytes have been transmitted so far."""

    def close(self) -> None:
        """Stop reporting; called once the upload finished or failed."""


class NullProgress:
    """Sink used when progress display is disabled."""

    def __call__(self, sent: int) -> None:
        return None

    def close(self) -> None:
        return None


class ConsoleProgress:
    """Render upload progress as a Rich progress bar.

    The bar is started on the first notification and stopped when the
    upload completes or :meth:`close` is called. Reported values never
    decrease and are capped at ``total``.

    Attributes:
        total: Size of the upload in bytes.
        completed: Bytes reported so far.
    """

    def __init__(
        self,
        total: int,
        *,
        description: str = "Uploading",
        console: Console | None = None,
    ) -> None:
        self.total = total
        self.completed = 0
        self._description = description
        self._progress = Progress(
            TextColumn("[info]{task.description}[/]"),
            BarColumn(),
            DownloadColumn(),
            TransferSpeedColumn(),
            console=console or default_console,
        )
        self._task: TaskID | None = None

    def __call__(self, sent: int) -> None:
        if self._task is None:
            self._progress.start()
            self._task = self._progress.add_task(self._description, total=self.total)

        self.completed = min(max(sent, self.completed), self.total)
        self._progress.update(self._task, completed=self.completed)

        if self.completed >= self.total:
            self.close()

    def close(self) -> None:
        self._progress.stop()


def make_reporter(total_bytes: int | None, *, console: Console | None = None) -> ProgressSink:
    """Create a progress sink for an upload.

    Args:
        total_bytes: Upload size in bytes, or None to disable progress.
        console: Console to render to. Defaults to the shared console.

    Returns:
        ConsoleProgress when a size is given, NullProgress otherwise.
    """
    if total_bytes is None:
        return NullProgress()
    return ConsoleProgress(total_bytes, console=console)


def iter_chunks(
    data: bytes,
    sink: ProgressSink,
    chunk_size: int = CHUNK_SIZE,
) -> Iterator[bytes]:
    """Yield ``data`` in chunks, notifying ``sink`` after each one.

    The last notification always equals ``len(data)``, including for an
    empty payload.

    Args:
        data: Payload to upload.
        sink: Progress sink to notify.
        chunk_size: Maximum chunk size in bytes.

    Yields:
        Consecutive slices of ``data``.
    """
    if not data:
        sink(0)
        return

    sent = 0
    for start in range(0, len(data), chunk_size):
        chunk = data[start : start + chunk_size]
        yield chunk
        sent += len(chunk)
        sink(sent)
