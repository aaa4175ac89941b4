"""Unit tests for upload progress reporting."""

import io

from pubctl.core.progress import (
    ConsoleProgress,
    NullProgress,
    iter_chunks,
    make_reporter,
)
from rich.console import Console


class RecordingSink:
    """Progress sink remembering every notification."""

    def __init__(self) -> None:
        self.values: list[int] = []
        self.closed = False

    def __call__(self, sent: int) -> None:
        self.values.append(sent)

    def close(self) -> None:
        self.closed = True


def _quiet_console() -> Console:
    return Console(file=io.StringIO(), force_terminal=False)


class TestMakeReporter:
    """Tests for make_reporter function."""

    def test_none_gives_null_progress(self) -> None:
        """Disabled progress returns a sink that ignores notifications."""
        assert isinstance(make_reporter(None), NullProgress)

    def test_size_gives_console_progress(self) -> None:
        """A known size returns a progress bar of that size."""
        reporter = make_reporter(1024, console=_quiet_console())

        assert isinstance(reporter, ConsoleProgress)
        assert reporter.total == 1024


class TestIterChunks:
    """Tests for iter_chunks function."""

    def test_yields_all_data(self) -> None:
        """Chunks concatenate to the original payload."""
        data = bytes(range(256)) * 10
        sink = RecordingSink()

        chunks = list(iter_chunks(data, sink, chunk_size=100))

        assert b"".join(chunks) == data
        assert all(len(c) <= 100 for c in chunks)

    def test_notifications_are_monotonic_and_end_at_size(self) -> None:
        """Cumulative notifications never decrease and end at the payload size."""
        data = b"x" * 1000
        sink = RecordingSink()

        list(iter_chunks(data, sink, chunk_size=300))

        assert sink.values == [300, 600, 900, 1000]
        assert sink.values == sorted(sink.values)

    def test_empty_payload_reports_zero(self) -> None:
        """An empty payload yields nothing and reports 0 once."""
        sink = RecordingSink()

        assert list(iter_chunks(b"", sink)) == []
        assert sink.values == [0]

    def test_null_sink_sees_identical_data(self) -> None:
        """Disabled progress sends exactly the same bytes."""
        data = b"payload" * 5000
        recording = RecordingSink()

        with_progress = b"".join(iter_chunks(data, recording, chunk_size=4096))
        without_progress = b"".join(iter_chunks(data, NullProgress(), chunk_size=4096))

        assert with_progress == without_progress == data
        assert recording.values[-1] == len(data)


class TestConsoleProgress:
    """Tests for ConsoleProgress sink."""

    def test_completed_never_decreases(self) -> None:
        """Out-of-order notifications do not move the bar backwards."""
        progress = ConsoleProgress(100, console=_quiet_console())

        progress(40)
        progress(20)

        assert progress.completed == 40
        progress.close()

    def test_completed_is_capped_at_total(self) -> None:
        """Reported progress never exceeds the upload size."""
        progress = ConsoleProgress(100, console=_quiet_console())

        progress(150)

        assert progress.completed == 100

    def test_close_without_notifications(self) -> None:
        """Closing an unused bar is harmless."""
        progress = ConsoleProgress(10, console=_quiet_console())

        progress.close()

        assert progress.completed == 0
