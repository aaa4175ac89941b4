"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from pubctl import __version__
from pubctl.cli.commands import auth, publish
from pubctl.utils.logging import configure_logging

# Create main Typer app
app = typer.Typer(
    name="pubctl",
    help="Publish packages and their documentation to a registry.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"pubctl version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
) -> None:
    """pubctl - Publish packages and their documentation to a registry.

    Releases and documentation can be reverted within the grace period
    the registry allows after publication.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(verbose)


# Register commands
app.command(name="publish")(publish.publish)
app.command(name="auth")(auth.auth)


if __name__ == "__main__":
    app()
