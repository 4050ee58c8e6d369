"""README push orchestration.

1. Validates the short description length.
2. Parses the target image reference.
3. Locates and reads the README file.
4. Selects the registry provider for the server.
5. Resolves credentials (env vars, then the Docker credentials store).
6. Hands everything to the provider, which updates the description.

This module does NOT talk HTTP or run credential helpers itself.  It uses
:mod:`pushrm.providers` and :mod:`pushrm.credentials` for that.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from pushrm import config as config_mod
from pushrm import credentials, log, readme, reference
from pushrm import providers as providers_mod
from pushrm.errors import ShortDescriptionTooLong

# Dockerhub's limit, enforced for every provider so that the same command
# line works against all of them.
SHORT_MAX = 100


def check_short(short: str) -> None:
    """Raise :class:`ShortDescriptionTooLong` if *short* exceeds :data:`SHORT_MAX` characters."""
    if len(short) > SHORT_MAX:
        raise ShortDescriptionTooLong(len(short), SHORT_MAX)


def run(args: argparse.Namespace) -> None:
    """Push the README for ``args.target``.

    Parameters
    ----------
    args:
        Resolved CLI arguments.  Recognised attributes:

        * ``target`` -- image reference (``[SERVER/]NAMESPACE/REPO[:TAG]``)
        * ``provider`` -- provider name, overridden for well-known servers
        * ``file`` -- README path (optional, auto-detected otherwise)
        * ``short`` -- short description (optional)
        * ``config`` -- Docker config file path (optional)
    """
    short: str = getattr(args, "short", None) or ""
    check_short(short)

    ref = reference.parse(getattr(args, "target", None) or "")
    log.debug(f"Using target: {ref}")

    readme_path = getattr(args, "file", None) or readme.find(Path.cwd())
    log.debug(f"using README file: {readme_path}")
    content = readme.read(readme_path)

    name = providers_mod.select(ref.server, getattr(args, "provider", None))
    log.debug(f"server: {ref.server}")
    log.debug(f"namespace: {ref.namespace}")
    log.debug(f"repo: {ref.repo}")
    log.debug(f"tag: {ref.tag}")
    log.debug(f"repo provider: {name}")

    cfg = config_mod.load(getattr(args, "config", None))
    provider = providers_mod.for_name(name, config=cfg)

    creds = credentials.resolve(provider, ref.server, cfg)
    log.debug(f"Using Docker creds: {creds!r}")

    provider.pushrm(ref, creds, content, short)
    log.success(f"Pushed {readme_path} to {ref.server}/{ref.path} ({name})")
