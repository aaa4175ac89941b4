"""Auth command implementation.

Stores the registry API key in the user settings file.
"""

from typing import Annotated

import typer

from pubctl.core.errors import ConfigurationError
from pubctl.core.settings import load_settings, save_settings
from pubctl.utils.formatting import print_error, print_success


def auth(
    key: Annotated[
        str | None,
        typer.Option(
            "--key",
            help="Registry API key. Prompted for when omitted.",
        ),
    ] = None,
) -> None:
    """Store the registry API key used for publishing.

    The key is saved to ~/.config/pubctl/config.toml. The PUBCTL_API_KEY
    environment variable takes precedence over the stored key.
    """
    if key is None:
        key = typer.prompt("API key", hide_input=True)

    if not key.strip():
        print_error("API key cannot be empty.")
        raise typer.Exit(code=1)

    try:
        # Read the file only, so environment overrides are not persisted
        settings = load_settings(environ={})
        path = save_settings(settings.model_copy(update={"api_key": key.strip()}))
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"API key saved to {path}")
