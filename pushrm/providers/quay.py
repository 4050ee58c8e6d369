"""Quay (quay.io or self-hosted) provider.

Quay authenticates with an API key (bearer token) instead of the Docker
login, so the auth ident is :data:`~pushrm.credentials.NO_AUTH_NEEDED`
and the key is looked up by :func:`~pushrm.credentials.resolve_apikey`.
"""

from __future__ import annotations

from typing import Any

from pushrm import log
from pushrm.credentials import NO_AUTH_NEEDED, Credentials, resolve_apikey
from pushrm.providers.generic import GenericProvider
from pushrm.reference import ImageReference


class Quay(GenericProvider):
    """Provider for Quay."""

    name = "quay"

    def get_authident(self) -> str:
        return NO_AUTH_NEEDED

    def _error_detail(self, body: Any) -> str | None:
        if isinstance(body, dict) and isinstance(body.get("error_message"), str):
            return body["error_message"]
        return None

    def pushrm(
        self,
        ref: ImageReference,
        creds: Credentials,
        readme: str,
        short: str = "",
    ) -> None:
        if short:
            log.warn('Short description not supported for provider "quay". Ignoring.')

        apikey = resolve_apikey(ref.server, self.config)
        log.debug("apikey: ********")

        response = self._send(
            "PUT",
            f"https://{ref.server}/api/v1/repository/{ref.namespace}/{ref.repo}",
            json={"description": readme},
            headers={"Authorization": f"Bearer {apikey}"},
        )
        self._check(response)
