"""Unit tests for auth command."""

import tomllib
from pathlib import Path
from unittest.mock import patch

from pubctl.cli.main import app
from pubctl.core.errors import ConfigurationError
from typer.testing import CliRunner

runner = CliRunner()


class TestAuthCommand:
    """Tests for the auth command."""

    def test_stores_key_from_option(self, isolated_config: Path) -> None:
        """--key saves the key to the settings file."""
        result = runner.invoke(app, ["auth", "--key", "abc123"])

        assert result.exit_code == 0
        settings_path = isolated_config / "pubctl" / "config.toml"
        assert tomllib.loads(settings_path.read_text())["api_key"] == "abc123"
        assert "API key saved" in result.output

    def test_prompts_for_key(self, isolated_config: Path) -> None:
        """Without --key the key is read from a hidden prompt."""
        result = runner.invoke(app, ["auth"], input="prompted\n")

        assert result.exit_code == 0
        settings_path = isolated_config / "pubctl" / "config.toml"
        assert tomllib.loads(settings_path.read_text())["api_key"] == "prompted"
        assert "prompted" not in result.output

    def test_keeps_other_settings(self, isolated_config: Path) -> None:
        """Existing settings survive storing a new key."""
        settings_path = isolated_config / "pubctl" / "config.toml"
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text('api_url = "https://mirror.test/api"\napi_key = "old"\n')

        result = runner.invoke(app, ["auth", "--key", "new"])

        assert result.exit_code == 0
        data = tomllib.loads(settings_path.read_text())
        assert data["api_url"] == "https://mirror.test/api"
        assert data["api_key"] == "new"

    def test_environment_not_persisted(self, isolated_config: Path) -> None:
        """Environment overrides are not written to the settings file."""
        result = runner.invoke(
            app,
            ["auth", "--key", "abc"],
            env={"PUBCTL_API_URL": "https://env.test/api"},
        )

        assert result.exit_code == 0
        data = tomllib.loads((isolated_config / "pubctl" / "config.toml").read_text())
        assert data["api_url"] == "https://hex.pm/api"

    def test_rejects_empty_key(self, isolated_config: Path) -> None:
        """A blank key is rejected."""
        result = runner.invoke(app, ["auth", "--key", "   "])

        assert result.exit_code == 1
        assert "cannot be empty" in result.output
        assert not (isolated_config / "pubctl" / "config.toml").exists()

    def test_write_failure(self) -> None:
        """A settings write failure exits 1."""
        with patch(
            "pubctl.cli.commands.auth.save_settings",
            side_effect=ConfigurationError("Failed to write settings: read-only"),
        ):
            result = runner.invoke(app, ["auth", "--key", "abc"])

        assert result.exit_code == 1
        assert "Failed to write settings" in result.output
