"""Thin wrapper around ``docker-credential-*`` helper programs.

This module has ZERO business logic.  It does not know about providers,
candidates or env vars.  It runs ``docker-credential-<store> get`` with
the lookup key on stdin and parses the JSON answer.
"""

from __future__ import annotations

import json
import subprocess

from pushrm import log
from pushrm.errors import CredentialHelperError, MalformedCredentials


def executable(store: str) -> str:
    """Return the helper program name for *store*."""
    name = f"docker-credential-{store}"
    if store == "wincred":
        name += ".exe"
    return name


def get(store: str, key: str) -> tuple[str, str]:
    """Ask the credential helper for *store* for the credentials under *key*.

    The key is written to the helper's stdin in full before its combined
    stdout/stderr output is read.

    Returns
    -------
    ``(username, secret)``

    Raises
    ------
    CredentialHelperError
        The helper could not be run or exited non-zero.
    MalformedCredentials
        The helper printed something other than a JSON object with string
        ``Username`` and ``Secret`` fields.
    """
    cmd = [executable(store), "get"]
    log.debug(f"$ {' '.join(cmd)} <<< {key}")
    try:
        proc = subprocess.run(
            cmd,
            input=key,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            check=False,
        )
    except OSError as exc:
        log.debug(f"running {cmd[0]} failed: {exc}")
        raise CredentialHelperError(
            f"Error executing the Docker credentials helper {cmd[0]}. "
            "Check your local Docker config and/or installation."
        ) from exc

    output = proc.stdout or ""
    if proc.returncode != 0:
        log.debug(f"{cmd[0]} exited with rc={proc.returncode}: {output.strip()}")
        raise CredentialHelperError(
            "no Docker credentials found for this server/provider. "
            "Run 'docker login' first."
        )

    try:
        data = json.loads(output)
    except json.JSONDecodeError as exc:
        log.debug(f"could not parse {cmd[0]} output: {exc}")
        raise MalformedCredentials(
            "Error parsing credentials from Docker creds provider. "
            "Run 'docker login' first."
        ) from exc

    if not isinstance(data, dict):
        raise MalformedCredentials(
            "Error parsing credentials from Docker creds provider. "
            "Run 'docker login' first."
        )
    username = data.get("Username", "")
    secret = data.get("Secret", "")
    if not isinstance(username, str) or not isinstance(secret, str):
        raise MalformedCredentials(
            "Error parsing credentials from Docker creds provider. "
            "Run 'docker login' first."
        )
    return username, secret
