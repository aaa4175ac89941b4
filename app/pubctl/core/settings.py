"""User settings for registry access.

Settings are stored in ~/.config/pubctl/config.toml and can be overridden
with environment variables:

- PUBCTL_API_URL: registry API base URL
- PUBCTL_API_KEY: registry API key
"""

import logging
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pubctl.core.errors import ConfigurationError
from pubctl.core.paths import get_settings_path

logger = logging.getLogger(__name__)

API_URL_ENV = "PUBCTL_API_URL"
API_KEY_ENV = "PUBCTL_API_KEY"


class Settings(BaseModel):
    """Registry settings.

    Attributes:
        api_url: Base URL of the registry HTTP API.
        package_url: Base URL of package pages on the registry website.
        docs_url: Base URL documentation is hosted under.
        coc_url: Code of conduct shown before publishing.
        api_key: API key used to authenticate registry calls.
        timeout_seconds: Timeout for each registry request.
    """

    model_config = ConfigDict(extra="forbid")

    api_url: Annotated[str, Field(description="Registry API base URL")] = "https://hex.pm/api"
    package_url: Annotated[
        str, Field(description="Package page base URL")
    ] = "https://hex.pm/packages"
    docs_url: Annotated[str, Field(description="Hosted docs base URL")] = "https://hexdocs.pm"
    coc_url: Annotated[
        str, Field(description="Code of conduct URL")
    ] = "https://hex.pm/policies/codeofconduct"
    api_key: Annotated[str | None, Field(description="Registry API key")] = None
    timeout_seconds: Annotated[
        float,
        Field(gt=0, le=3600, description="Request timeout in seconds"),
    ] = 60.0


def load_settings(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Load settings from the settings file and environment.

    A missing settings file is not an error; defaults are used.

    Args:
        path: Settings file. If None, uses the default settings path.
        environ: Environment to read overrides from. Defaults to os.environ.

    Returns:
        Validated Settings.

    Raises:
        ConfigurationError: If the file cannot be read, parsed or validated.
    """
    settings_path = path or get_settings_path()
    env = os.environ if environ is None else environ

    data: dict[str, object] = {}
    if settings_path.exists():
        try:
            with open(settings_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid TOML syntax in {settings_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Failed to read settings: {e}") from e
        logger.debug("Loaded settings from %s", settings_path)

    if api_url := env.get(API_URL_ENV):
        data["api_url"] = api_url
    if api_key := env.get(API_KEY_ENV):
        data["api_key"] = api_key

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings in {settings_path}: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file atomically.

    Args:
        settings: Settings to save.
        path: Destination. If None, uses the default settings path.

    Returns:
        Path where the settings were saved.

    Raises:
        ConfigurationError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()
    settings_path.parent.mkdir(parents=True, exist_ok=True)

    data = settings.model_dump(exclude_none=True)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(tmp_path, settings_path)
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigurationError(f"Failed to write settings: {e}") from e

    return settings_path
