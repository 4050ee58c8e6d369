"""Registry provider abstraction and factory.

Use :func:`select` to pick the provider name for a server and
:func:`for_name` to obtain an instance -- never import a provider class
directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from pushrm.credentials import NO_AUTH_NEEDED, USE_SERVER_NAME, Credentials
from pushrm.errors import ProviderServerMismatch, UnsupportedProvider

if TYPE_CHECKING:
    import httpx

    from pushrm.config import DockerConfig
    from pushrm.reference import ImageReference

__all__ = [
    "DEFAULT_PROVIDER",
    "NO_AUTH_NEEDED",
    "PROVIDER_NAMES",
    "USE_SERVER_NAME",
    "ProviderBase",
    "for_name",
    "select",
]

DEFAULT_PROVIDER = "dockerhub"
PROVIDER_NAMES = ("dockerhub", "quay", "harbor2")

# Servers that always map to one provider, whatever --provider says.
_FORCED: dict[str, str] = {
    "docker.io": "dockerhub",
    "quay.io": "quay",
}

# Providers that only work against one server.
_PINNED: dict[str, str] = {
    "dockerhub": "docker.io",
}


class ProviderBase(ABC):
    """Abstract base class for registry providers."""

    name: str = ""

    @abstractmethod
    def get_authident(self) -> str:
        """Return the credentials store key for this provider.

        :data:`USE_SERVER_NAME` means "key by the server name";
        :data:`NO_AUTH_NEEDED` means the provider finds its own secret.
        """

    @abstractmethod
    def pushrm(
        self,
        ref: ImageReference,
        creds: Credentials,
        readme: str,
        short: str = "",
    ) -> None:
        """Set the repository description of *ref* to *readme*."""


def select(server: str, name: str | None = None) -> str:
    """Return the provider name to use for *server*.

    ``docker.io`` and ``quay.io`` force their provider; otherwise *name*
    (default :data:`DEFAULT_PROVIDER`) is used.

    Raises
    ------
    UnsupportedProvider
        *name* is not a known provider.
    ProviderServerMismatch
        The provider cannot be used with *server*.
    """
    chosen = _FORCED.get(server, name or DEFAULT_PROVIDER)
    if chosen not in PROVIDER_NAMES:
        raise UnsupportedProvider(chosen)
    pinned = _PINNED.get(chosen)
    if pinned is not None and server != pinned:
        raise ProviderServerMismatch(server, chosen, pinned)
    return chosen


def for_name(
    name: str,
    *,
    config: DockerConfig | None = None,
    client: httpx.Client | None = None,
) -> ProviderBase:
    """Return a provider instance for *name*.

    Parameters
    ----------
    name:
        One of :data:`PROVIDER_NAMES`.
    config:
        Docker config, for providers that read their own secret from it.
    client:
        Optional ``httpx.Client`` to send requests with.
    """
    if name == "dockerhub":
        from pushrm.providers.dockerhub import Dockerhub
        return Dockerhub(config=config, client=client)
    if name == "quay":
        from pushrm.providers.quay import Quay
        return Quay(config=config, client=client)
    if name == "harbor2":
        from pushrm.providers.harbor2 import Harbor2
        return Harbor2(config=config, client=client)
    raise UnsupportedProvider(name)
