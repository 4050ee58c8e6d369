"""Command-line interface for docker-pushrm.

This is the user-facing entry point.  It parses arguments, fills in
values from ``PUSHRM_*`` environment variables, and dispatches to
:mod:`pushrm.push` or prints the Docker CLI plugin metadata.
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import Mapping

import pushrm
from pushrm import log, plugin
from pushrm.errors import (
    NetworkTransportError,
    PushrmError,
    RemoteRejectionError,
    ResponseValidationError,
)
from pushrm.providers import DEFAULT_PROVIDER, PROVIDER_NAMES

_EPILOG = """\
examples:
  docker pushrm myaccount/hello-world
  docker pushrm quay.io/my-organization/hello-world
  docker pushrm --provider quay my-quay-server.com/my-user/hello-world
  docker pushrm --provider harbor2 my-harbor-server.com/my-project/hello-world

login:
  Credentials come from the Docker credentials store ('docker login') or
  from env vars, which take precedence:
    DOCKER_USER / DOCKER_PASS
    DOCKER_USER__<SERVER>_<DOMAIN> / DOCKER_PASS__<SERVER>_<DOMAIN>
  quay needs an API key: DOCKER_APIKEY, APIKEY__<SERVER>_<DOMAIN> or the
  config key 'plugins.docker-pushrm.apikey_<servername>'.

environment:
  PUSHRM_TARGET, PUSHRM_PROVIDER, PUSHRM_FILE, PUSHRM_SHORT, PUSHRM_DEBUG,
  PUSHRM_CONFIG (command-line parameters take precedence)
"""

_TRUTHY = {"1", "true", "yes", "on"}

# Docker CLI global options.  Accepted so that the plugin does not break
# when they are set, but ignored.
_DOCKER_VALUE_FLAGS = (
    ("-c", "--context"),
    ("-H", "--host"),
    ("-l", "--log-level"),
    ("--tlscacert",),
    ("--tlscert",),
    ("--tlskey",),
)
_DOCKER_BOOL_FLAGS = ("--tls", "--tlsverify")


# ── Helpers ───────────────────────────────────────────────────────────

def _add_global_flags(parser: argparse.ArgumentParser, *, suppress: bool) -> None:
    """Add the options shared by the root parser and the ``pushrm`` subcommand.

    With ``suppress=True`` the defaults are ``argparse.SUPPRESS`` so that a
    subcommand does not overwrite a value given before it.
    """
    parser.add_argument(
        "-D", "--debug",
        action="store_true",
        default=argparse.SUPPRESS if suppress else False,
        help="enable debug mode",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        default=argparse.SUPPRESS if suppress else None,
        help="config file (default is $HOME/.docker/config.json)",
    )
    for flags in _DOCKER_VALUE_FLAGS:
        parser.add_argument(*flags, default=argparse.SUPPRESS, help=argparse.SUPPRESS)
    for flag in _DOCKER_BOOL_FLAGS:
        parser.add_argument(
            flag, action="store_true",
            default=argparse.SUPPRESS, help=argparse.SUPPRESS,
        )


def _make_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser with all subcommands."""

    parser = argparse.ArgumentParser(
        prog="docker-pushrm",
        description=(
            "push README file from current working directory to container "
            "registry (Dockerhub, quay, harbor2)"
        ),
        epilog="Run 'docker-pushrm --help' for subcommand-specific options.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"docker-pushrm {pushrm.VERSION}",
    )
    _add_global_flags(parser, suppress=False)

    sub = parser.add_subparsers(dest="command", title="commands", metavar="COMMAND")

    # -- pushrm --
    pushrm_parser = sub.add_parser(
        "pushrm",
        help="push README file to the container registry",
        description=(
            "Push the README.md file from the current working directory to "
            "the container registry (Dockerhub, quay, harbor2) where it "
            "appears as repo description."
        ),
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    pushrm_parser.add_argument(
        "target",
        metavar="NAME[:TAG]",
        nargs="?",
        default=None,
        help="image reference, e.g. docker.io/mynamespace/myrepo:latest "
             "(the tag is accepted but has no effect)",
    )
    pushrm_parser.add_argument(
        "-p", "--provider",
        metavar="NAME",
        default=None,
        help=f"repo type: {', '.join(PROVIDER_NAMES)} (default: {DEFAULT_PROVIDER})",
    )
    pushrm_parser.add_argument(
        "-f", "--file",
        metavar="PATH",
        default=None,
        help='README file (defaults: "./README-containers.md", "./README.md")',
    )
    pushrm_parser.add_argument(
        "-s", "--short",
        metavar="TEXT",
        default=None,
        help="short description (optional, max 100 characters)",
    )
    pushrm_parser.add_argument(
        "--version",
        action="version",
        version=f"docker-pushrm {pushrm.VERSION}",
    )
    _add_global_flags(pushrm_parser, suppress=True)

    # -- docker-cli-plugin-metadata (no help, so not listed) --
    sub.add_parser(plugin.METADATA_COMMAND)

    return parser


def _env_flag(value: str | None) -> bool:
    return (value or "").strip().lower() in _TRUTHY


def _apply_env(
    args: argparse.Namespace,
    environ: Mapping[str, str] | None = None,
) -> argparse.Namespace:
    """Fill unset arguments from ``PUSHRM_*`` env vars.

    Command-line values always win.
    """
    if environ is None:
        environ = os.environ
    if not getattr(args, "target", None):
        args.target = environ.get("PUSHRM_TARGET", "")
    if not getattr(args, "provider", None):
        args.provider = environ.get("PUSHRM_PROVIDER") or DEFAULT_PROVIDER
    if not getattr(args, "file", None):
        args.file = environ.get("PUSHRM_FILE") or None
    if getattr(args, "short", None) is None:
        args.short = environ.get("PUSHRM_SHORT", "")
    if not getattr(args, "config", None):
        args.config = environ.get("PUSHRM_CONFIG") or None
    if not getattr(args, "debug", False):
        args.debug = _env_flag(environ.get("PUSHRM_DEBUG"))
    return args


def _dispatch_pushrm(args: argparse.Namespace) -> int:
    """Run the pushrm subcommand."""
    from pushrm import push
    push.run(args)
    return 0


def _dispatch_metadata(args: argparse.Namespace) -> int:
    """Print the Docker CLI plugin metadata."""
    sys.stdout.write(plugin.metadata_json() + "\n")
    return 0


_DISPATCHERS: dict[str, callable] = {
    "pushrm": _dispatch_pushrm,
    plugin.METADATA_COMMAND: _dispatch_metadata,
}

# Errors raised after the request left; the debug log has the details.
_REMOTE_ERRORS = (NetworkTransportError, RemoteRejectionError, ResponseValidationError)


# ── Entry point ───────────────────────────────────────────────────────

def main(argv: list[str] | None = None) -> None:
    """Parse arguments, dispatch to subcommand, exit.

    Parameters
    ----------
    argv:
        Argument list for testing.  Defaults to ``sys.argv[1:]``.
    """
    if argv is None:
        argv = sys.argv[1:]
    parser = _make_parser()
    args = parser.parse_args(plugin.normalize_argv(argv))

    if args.command is None:
        parser.print_help(sys.stderr)
        sys.exit(2)

    args = _apply_env(args)
    log.set_debug(args.debug)
    log.debug(f'subcommand "{args.command}" called')

    dispatcher = _DISPATCHERS[args.command]
    try:
        rc = dispatcher(args)
    except KeyboardInterrupt:
        log.warn("interrupted")
        sys.exit(130)
    except PushrmError as exc:
        log.error(str(exc))
        if args.debug:
            import traceback
            traceback.print_exc()
        elif isinstance(exc, _REMOTE_ERRORS):
            log.info('Run with "--debug" for more details.')
        sys.exit(1)

    sys.exit(rc)
