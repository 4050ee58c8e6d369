"""Docker CLI plugin support.

The Docker CLI discovers ``docker-pushrm`` as ``docker pushrm`` by running
``docker-pushrm docker-cli-plugin-metadata`` and reading the JSON it
prints.  When the Docker CLI launches the plugin it sets
``DOCKER_CLI_PLUGIN_ORIGINAL_CLI_COMMAND`` and passes the subcommand name
itself; a standalone invocation does not.
"""

from __future__ import annotations

import json
import os
from typing import Any, Mapping

import pushrm

METADATA_COMMAND = "docker-cli-plugin-metadata"
SUBCOMMAND = "pushrm"


def metadata() -> dict[str, Any]:
    return {
        "SchemaVersion": "0.1.0",
        "Vendor": "docker-pushrm",
        "Version": pushrm.VERSION,
        "ShortDescription": "Push Readme to container registry",
    }


def metadata_json() -> str:
    return json.dumps(metadata(), indent=4)


def normalize_argv(
    argv: list[str],
    environ: Mapping[str, str] | None = None,
) -> list[str]:
    """Insert the ``pushrm`` subcommand for standalone invocations.

    Lets ``docker-pushrm myns/myrepo`` behave like
    ``docker pushrm myns/myrepo``.
    """
    if environ is None:
        environ = os.environ
    if environ.get("DOCKER_CLI_PLUGIN_ORIGINAL_CLI_COMMAND"):
        return list(argv)
    if METADATA_COMMAND in argv:
        return list(argv)
    return [SUBCOMMAND, *argv]
