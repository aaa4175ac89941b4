"""Unit tests for console formatting helpers."""

import logging

import pytest
from pubctl.utils.formatting import (
    create_summary_table,
    print_error,
    print_error_result,
    print_info,
    print_success,
    print_warning,
)
from pubctl.utils.logging import configure_logging
from rich.logging import RichHandler


class TestPrintHelpers:
    """Tests for the message helpers."""

    def test_info_and_success_go_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Informational output is written to stdout."""
        print_info("hello")
        print_success("done")

        captured = capsys.readouterr()
        assert "hello" in captured.out
        assert "done" in captured.out
        assert captured.err == ""

    def test_errors_go_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Errors and warnings are written to stderr."""
        print_error("broken")
        print_warning("careful")

        captured = capsys.readouterr()
        assert "Error: broken" in captured.err
        assert "Warning: careful" in captured.err
        assert captured.out == ""


class TestPrintErrorResult:
    """Tests for print_error_result function."""

    def test_message_and_errors(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Registry messages and field errors are printed with the status."""
        print_error_result(
            422,
            {
                "message": "Validation error(s)",
                "errors": {"meta": {"licenses": "can't be blank"}, "name": "taken"},
            },
        )

        err = capsys.readouterr().err
        assert "Validation error(s)" in err
        assert "  meta:" in err
        assert "    licenses: can't be blank" in err
        assert "name: taken" in err
        assert "(422)" in err

    def test_plain_body(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Non-mapping bodies are printed as-is."""
        print_error_result(502, "Bad Gateway")

        err = capsys.readouterr().err
        assert "Bad Gateway" in err
        assert "(502)" in err

    def test_markup_in_body_is_not_interpreted(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Registry text containing brackets is printed literally."""
        print_error_result(400, {"message": "[bold]nope[/bold]"})

        assert "[bold]nope[/bold]" in capsys.readouterr().err

    def test_no_body(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Only the status is printed without a body."""
        print_error_result(500, None)

        assert capsys.readouterr().err.strip() == "(500)"

    def test_no_status(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Without a response only the error text is printed."""
        print_error_result(None, "Failed to reach registry")

        assert capsys.readouterr().err.strip() == "Failed to reach registry"


class TestCreateSummaryTable:
    """Tests for create_summary_table function."""

    def test_columns(self) -> None:
        """The table has Field and Value columns."""
        table = create_summary_table("my_pkg 1.0.0")

        assert table.title == "my_pkg 1.0.0"
        assert [c.header for c in table.columns] == ["Field", "Value"]


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_verbose_enables_debug(self) -> None:
        """Verbose mode logs at DEBUG level."""
        configure_logging(verbose=True)

        assert logging.getLogger("pubctl").level == logging.DEBUG

    def test_default_level_is_warning(self) -> None:
        """Without verbose only warnings are logged."""
        configure_logging()

        assert logging.getLogger("pubctl").level == logging.WARNING

    def test_single_handler_after_reconfiguring(self) -> None:
        """Configuring twice does not duplicate handlers."""
        configure_logging()
        configure_logging(verbose=True)

        handlers = [
            h for h in logging.getLogger("pubctl").handlers if isinstance(h, RichHandler)
        ]
        assert len(handlers) == 1
