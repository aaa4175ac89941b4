"""Logging setup for the pubctl CLI.

Library modules log through ``logging.getLogger(__name__)``; the CLI
decides where those records go.
"""

import logging

from rich.logging import RichHandler

from pubctl.utils.formatting import err_console


def configure_logging(verbose: bool = False) -> None:
    """Attach a Rich handler to the ``pubctl`` logger.

    Args:
        verbose: Log at DEBUG level instead of WARNING.
    """
    logger = logging.getLogger("pubctl")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # Reconfiguring (e.g. repeated CLI invocations in one process) replaces the handler
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    logger.addHandler(
        RichHandler(console=err_console, show_path=verbose, rich_tracebacks=verbose)
    )
    logger.propagate = False
