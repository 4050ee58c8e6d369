"""Credential resolution.

Credentials are looked up in this order, first hit wins:

1. ``DOCKER_USER`` / ``DOCKER_PASS``
2. ``DOCKER_USER__<SERVER>`` / ``DOCKER_PASS__<SERVER>``
   (``<SERVER>`` is the server name upper-cased with ``.`` replaced by ``_``)
3. the local Docker credentials store: an inline ``auths.<key>.auth``
   entry in the config file, else the configured ``credsStore`` helper.

Step 3 is skipped for providers whose auth ident is :data:`NO_AUTH_NEEDED`.
Each strategy returns ``None`` for "not found"; only running out of
strategies is an error.
"""

from __future__ import annotations

import base64
import binascii
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Mapping

from pushrm import helper, log
from pushrm.config import PLUGIN_NAME, DockerConfig
from pushrm.errors import (
    CredentialResolutionError,
    MalformedCredentials,
    NoApikeyFound,
    NoCredentialsFound,
)

if TYPE_CHECKING:
    from pushrm.providers import ProviderBase

# Auth ident sentinels returned by ProviderBase.get_authident().
USE_SERVER_NAME = "__SERVERNAME__"
NO_AUTH_NEEDED = "__NONE__"

_MASK = "********"


@dataclass(frozen=True)
class Credentials:
    """Username/password pair or a bare API key.  Never logged unmasked."""

    username: str = ""
    password: str = ""
    apikey: str = ""

    def __bool__(self) -> bool:
        return bool(self.username or self.password or self.apikey)

    def __repr__(self) -> str:
        password = _MASK if self.password else ""
        apikey = _MASK if self.apikey else ""
        return (
            f"Credentials(username={self.username!r}, "
            f"password={password!r}, apikey={apikey!r})"
        )


def env_suffix(server: str) -> str:
    """Return the env var suffix for *server* (``docker.io`` -> ``DOCKER_IO``)."""
    return server.replace(".", "_").upper()


def candidates(authident: str, server: str) -> list[str]:
    """Return the credential store keys to try, in order."""
    if authident == USE_SERVER_NAME:
        return [
            server,
            f"https://{server}",
            f"https://{server}/",
            f"http://{server}",
            f"http://{server}/",
        ]
    return [authident]


# ── Strategies ────────────────────────────────────────────────────────

def from_env(environ: Mapping[str, str]) -> Credentials | None:
    user = environ.get("DOCKER_USER", "")
    password = environ.get("DOCKER_PASS", "")
    if user and password:
        log.debug(f"using credentials for user {user} from generic env var")
        return Credentials(user, password)
    return None


def from_server_env(server: str, environ: Mapping[str, str]) -> Credentials | None:
    suffix = env_suffix(server)
    user = environ.get(f"DOCKER_USER__{suffix}", "")
    password = environ.get(f"DOCKER_PASS__{suffix}", "")
    if user and password:
        log.debug(f"using credentials for user {user} from env var for suffix {suffix}")
        return Credentials(user, password)
    return None


def decode_auth(value: str) -> tuple[str, str]:
    """Decode an inline base64 ``user:pass`` entry."""
    try:
        clear = base64.b64decode(value, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise MalformedCredentials(
            "Error parsing auth info from the Docker config file. "
            "Check your local Docker config."
        ) from exc
    user, sep, password = clear.partition(":")
    if not sep:
        raise MalformedCredentials(
            "Error parsing auth info from the Docker config file. "
            "Check your local Docker config."
        )
    return user, password


def query_store(config: DockerConfig, key: str) -> Credentials | None:
    """Look up *key* in the config file, then in the credentials helper.

    Returns ``None`` when neither an inline entry nor a helper is
    configured.  Decoding and helper failures raise.
    """
    inline = config.auth(key)
    if inline:
        return Credentials(*decode_auth(inline))
    store = config.creds_store
    if store:
        return Credentials(*helper.get(store, key))
    return None


def from_store(authident: str, server: str, config: DockerConfig) -> Credentials | None:
    """Try every candidate key for *authident* against the local store."""
    if config.path is None:
        log.debug("no Docker config file, skipping the Docker credentials store")
    for candidate in candidates(authident, server):
        try:
            creds = query_store(config, candidate)
        except CredentialResolutionError as exc:
            log.debug(f"tried candidate {candidate}, got error: {exc}")
            continue
        if not creds:
            log.debug(f"tried candidate {candidate}: could not find credentials")
            continue
        log.debug(f"tried candidate {candidate}: found credentials for user {creds.username}")
        return creds
    return None


# ── Public API ────────────────────────────────────────────────────────

def resolve(
    provider: ProviderBase,
    server: str,
    config: DockerConfig,
    environ: Mapping[str, str] | None = None,
) -> Credentials:
    """Return the credentials *provider* should use for *server*.

    Providers whose auth ident is :data:`NO_AUTH_NEEDED` get empty
    credentials when no env vars are set; they acquire their own secret.

    Raises
    ------
    NoCredentialsFound
        No strategy produced credentials.
    """
    if environ is None:
        environ = os.environ

    strategies: tuple[Callable[[], Credentials | None], ...] = (
        lambda: from_env(environ),
        lambda: from_server_env(server, environ),
    )
    for strategy in strategies:
        creds = strategy()
        if creds:
            return creds

    authident = provider.get_authident()
    if authident == NO_AUTH_NEEDED:
        log.debug("provider handles its own credentials, skipping the Docker credentials store")
        return Credentials()

    log.debug("no credentials found in env vars. Trying Docker credentials store")
    creds = from_store(authident, server, config)
    if creds:
        return creds
    raise NoCredentialsFound(server)


def resolve_apikey(
    server: str,
    config: DockerConfig,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Return the API key for *server*.

    Looked up in ``DOCKER_APIKEY``, then ``APIKEY__<SERVER>``, then
    ``plugins.docker-pushrm.apikey_<server>`` in the Docker config file.
    """
    if environ is None:
        environ = os.environ

    generic = environ.get("DOCKER_APIKEY", "")
    if generic:
        log.debug("using api key from generic env var")
        return generic

    env_key = f"APIKEY__{env_suffix(server)}"
    scoped = environ.get(env_key, "")
    if scoped:
        log.debug(f"using api key from env var {env_key}")
        return scoped

    config_key = f"plugins.{PLUGIN_NAME}.apikey_{server}"
    stored = config.apikey(server)
    if stored:
        log.debug(f"using api key from config key {config_key}")
        return stored

    raise NoApikeyFound(
        f"could not find api key for server {server}. Either specify env var "
        f"DOCKER_APIKEY or env var {env_key} or {config_key} in the local "
        "Docker config file."
    )
