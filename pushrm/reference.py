"""Image reference parsing.

Turns the single positional argument (``myns/myrepo``,
``docker.io/myns/myrepo:v1``, ...) into a fully-qualified
:class:`ImageReference`.  Pure function, no side effects.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from pushrm.errors import (
    InvalidCharacters,
    MissingNamespace,
    MissingTarget,
    TooManySeparators,
)

DEFAULT_SERVER = "docker.io"
DEFAULT_TAG = "latest"

# Dots are allowed in every field.
_VALID = re.compile(r"[0-9a-zA-Z\-_.]+")


@dataclass(frozen=True)
class ImageReference:
    """A ``server/namespace/repo:tag`` tuple."""

    server: str
    namespace: str
    repo: str
    tag: str = DEFAULT_TAG

    @property
    def full(self) -> str:
        return f"{self.server}/{self.namespace}/{self.repo}:{self.tag}"

    @property
    def path(self) -> str:
        """Return ``namespace/repo`` (the part the registry APIs address)."""
        return f"{self.namespace}/{self.repo}"

    def __str__(self) -> str:
        return self.full


def parse(target: str) -> ImageReference:
    """Parse *target* into an :class:`ImageReference`.

    The server defaults to ``docker.io`` and the tag to ``latest``.  Only
    the server is lower-cased; namespace, repo and tag keep their case.

    Raises
    ------
    MissingTarget, MissingNamespace, TooManySeparators, InvalidCharacters
    """
    if not target:
        raise MissingTarget()

    segments = target.split("/")
    if len(segments) < 2:
        raise MissingNamespace()
    if len(segments) == 2:
        target = f"{DEFAULT_SERVER}/{target}"
    if ":" not in target.rsplit("/", 1)[-1]:
        target = f"{target}:{DEFAULT_TAG}"

    segments = target.split("/")
    if len(segments) != 3:
        raise TooManySeparators()
    name_tag = segments[2].split(":")
    if len(name_tag) != 2:
        raise TooManySeparators()

    server = segments[0].lower()
    namespace = segments[1]
    repo, tag = name_tag

    for value in (namespace, repo, tag, server):
        if not _VALID.fullmatch(value):
            raise InvalidCharacters(value)

    return ImageReference(server=server, namespace=namespace, repo=repo, tag=tag)
