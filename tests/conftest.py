"""Shared fixtures for pushrm tests."""

from __future__ import annotations

import argparse
import base64
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from pushrm.config import DockerConfig


@pytest.fixture
def tmp_readme(tmp_path: Path) -> Path:
    """Create a temporary project directory with a README.md."""
    (tmp_path / "README.md").write_text("# hello\n\nworld\n")
    return tmp_path


def encode_auth(user: str, password: str) -> str:
    return base64.b64encode(f"{user}:{password}".encode()).decode()


def make_config_data(
    auths: dict[str, tuple[str, str]] | None = None,
    creds_store: str | None = None,
    apikeys: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Build the JSON structure of a Docker config file."""
    data: dict[str, Any] = {
        "auths": {
            key: {"auth": encode_auth(user, password)}
            for key, (user, password) in (auths or {}).items()
        },
    }
    if creds_store:
        data["credsStore"] = creds_store
    if apikeys:
        data["plugins"] = {
            "docker-pushrm": {
                f"apikey_{server}": key for server, key in apikeys.items()
            },
        }
    return data


def make_config(**kwargs) -> DockerConfig:
    """Factory for DockerConfig with a fake path so it counts as loaded."""
    return DockerConfig(path=Path("/nonexistent/config.json"), data=make_config_data(**kwargs))


def make_args(**kwargs) -> argparse.Namespace:
    """Factory for argparse.Namespace with common defaults."""
    defaults = {
        "command": "pushrm",
        "target": "myns/myrepo",
        "provider": "dockerhub",
        "file": None,
        "short": "",
        "config": None,
        "debug": False,
    }
    defaults.update(kwargs)
    return argparse.Namespace(**defaults)


def mock_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
    """Return an httpx.Client that answers every request with *handler*."""
    return httpx.Client(transport=httpx.MockTransport(handler))


class Recorder:
    """httpx.MockTransport handler that replays canned responses in order."""

    def __init__(self, *responses: httpx.Response) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responses.pop(0)

    def client(self) -> httpx.Client:
        return mock_client(self)
