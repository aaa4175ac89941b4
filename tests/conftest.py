"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Iterator
from pathlib import Path

import httpx
import pytest
from pubctl.api.client import RegistryClient
from pubctl.api.session import AuthInfo, RegistrySession
from pubctl.core.build import load_project_config, prepare_package
from pubctl.core.settings import Settings
from pubctl.models.package import BuildInfo
from pubctl.models.project import ProjectConfig
from pubctl.utils.formatting import console, err_console

API_URL = "https://registry.test/api"

PROJECT_TOML = """\
app = "my_pkg"
version = "1.0.0"
description = "A package used in tests"

[package]
files = ["lib", "README.md", "pubctl.toml"]
maintainers = ["Jane Doe"]
licenses = ["Apache-2.0"]

[package.links]
source = "https://example.com/my_pkg"

[deps.http_lib]
requirement = "~> 2.0"

[deps.local_helper]
source = "path"

[docs]
command = ["docgen", "--format", "html"]
"""


class FakeRegistry:
    """In-memory registry answering requests through httpx.MockTransport.

    Responses are looked up by (method, path); unknown routes answer 200
    with an empty JSON object. Routes marked with :meth:`fail` raise a
    connection error instead of answering.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responses: dict[tuple[str, str], httpx.Response] = {}
        self.unreachable: set[tuple[str, str]] = set()

    def respond(self, method: str, path: str, status_code: int, json: object = None) -> None:
        """Register the response for a route."""
        self.responses[(method, f"/api{path}")] = httpx.Response(status_code, json=json)

    def fail(self, method: str, path: str) -> None:
        """Make a route fail as if the registry could not be reached."""
        self.unreachable.add((method, f"/api{path}"))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if (request.method, request.url.path) in self.unreachable:
            raise httpx.ConnectError("connection refused", request=request)
        response = self.responses.get((request.method, request.url.path))
        if response is None:
            return httpx.Response(200, json={})
        return httpx.Response(response.status_code, content=response.content)

    @property
    def calls(self) -> list[tuple[str, str]]:
        """(method, path) of every request, in order, without the API prefix."""
        return [(r.method, r.url.path.removeprefix("/api")) for r in self.requests]


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep tests away from the real user configuration."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.delenv("PUBCTL_API_KEY", raising=False)
    monkeypatch.delenv("PUBCTL_API_URL", raising=False)
    return config_home


@pytest.fixture(autouse=True)
def wide_console(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep Rich from wrapping long messages in captured output."""
    monkeypatch.setattr(console, "width", 200)
    monkeypatch.setattr(err_console, "width", 200)


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A small project with a pubctl.toml and some package files."""
    root = tmp_path / "project"
    (root / "lib" / "my_pkg").mkdir(parents=True)
    (root / "lib" / "my_pkg" / "__init__.py").write_text("VALUE = 1\n")
    (root / "lib" / "my_pkg" / "core.py").write_text("def run():\n    return 42\n")
    (root / "README.md").write_text("# my_pkg\n")
    (root / "pubctl.toml").write_text(PROJECT_TOML)
    return root


@pytest.fixture
def project_config(project_dir: Path) -> ProjectConfig:
    """Configuration loaded from the sample project."""
    return load_project_config(project_dir)


@pytest.fixture
def build_info(project_dir: Path, project_config: ProjectConfig) -> BuildInfo:
    """Build step result for the sample project."""
    return prepare_package(project_dir, config=project_config)


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at the fake registry."""
    return Settings(
        api_url=API_URL,
        package_url="https://registry.test/packages",
        docs_url="https://docs.registry.test",
        api_key="secret-key",
    )


@pytest.fixture
def fake_registry() -> FakeRegistry:
    """A fresh fake registry."""
    return FakeRegistry()


@pytest.fixture
def registry_session(settings: Settings, fake_registry: FakeRegistry) -> Iterator[RegistrySession]:
    """A registry session whose requests go to the fake registry."""
    session = RegistrySession.open(
        settings,
        AuthInfo(key="secret-key"),
        transport=httpx.MockTransport(fake_registry.handler),
    )
    yield session
    session.close()


@pytest.fixture
def registry_client(registry_session: RegistrySession) -> RegistryClient:
    """A registry client bound to the fake registry."""
    return RegistryClient(registry_session)
