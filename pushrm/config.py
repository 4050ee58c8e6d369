"""Docker client config file (``~/.docker/config.json``) loading.

This module has ZERO side effects beyond reading the file.  It does not
run credential helpers or touch the network; it only exposes the parts of
the config that pushrm consumes (``auths``, ``credsStore`` and the
``plugins.docker-pushrm`` section).
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pushrm import log

PLUGIN_NAME = "docker-pushrm"

DEFAULT_CONFIG_PATH = Path("~/.docker/config.json")


@dataclass
class DockerConfig:
    """Parsed Docker client config.

    ``path`` is ``None`` when no usable config file exists; lookups then
    behave as if the file were empty.
    """

    path: Path | None = None
    data: dict[str, Any] = field(default_factory=dict)

    def get(self, *keys: str) -> Any:
        """Walk nested mappings along *keys*, returning ``None`` on any miss."""
        node: Any = self.data
        for key in keys:
            if not isinstance(node, dict) or key not in node:
                return None
            node = node[key]
        return node

    def auth(self, key: str) -> str:
        """Return the inline base64 ``auths.<key>.auth`` entry, or ``""``."""
        value = self.get("auths", key, "auth")
        return value if isinstance(value, str) else ""

    @property
    def creds_store(self) -> str:
        value = self.get("credsStore")
        return value if isinstance(value, str) else ""

    def apikey(self, server: str) -> str:
        """Return ``plugins.docker-pushrm.apikey_<server>``, or ``""``."""
        value = self.get("plugins", PLUGIN_NAME, f"apikey_{server}")
        return value if isinstance(value, str) else ""


def default_path() -> Path:
    """Return the config path from ``PUSHRM_CONFIG`` or the Docker default."""
    env = os.environ.get("PUSHRM_CONFIG")
    if env:
        return Path(env).expanduser()
    return DEFAULT_CONFIG_PATH.expanduser()


def load(path: str | Path | None = None) -> DockerConfig:
    """Load the Docker config from *path* (or :func:`default_path`).

    A missing, unreadable or malformed file yields an empty
    :class:`DockerConfig`, so env credentials still work; the store and
    apikey lookups then come up empty.
    """
    cfg_path = Path(path).expanduser() if path else default_path()
    if not cfg_path.is_file():
        log.debug(f"Docker config file not found: {cfg_path}")
        return DockerConfig()

    log.debug(f"Using config file: {cfg_path}")
    try:
        with open(cfg_path, encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        log.debug(f"reading {cfg_path} failed, ignoring it: {exc}")
        return DockerConfig()

    if not isinstance(data, dict):
        log.debug(f"{cfg_path} does not contain a JSON object, ignoring it")
        return DockerConfig()
    return DockerConfig(path=cfg_path, data=data)
