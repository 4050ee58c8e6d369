"""Harbor v2 (self-hosted) provider."""

from __future__ import annotations

from typing import Any

from pushrm.credentials import USE_SERVER_NAME, Credentials
from pushrm.providers.generic import GenericProvider
from pushrm.reference import ImageReference


class Harbor2(GenericProvider):
    """Provider for Harbor 2.x.

    Harbor is self-hosted, so credentials are keyed by the server name in
    the Docker credentials store.  Requests use HTTP basic auth.
    """

    name = "harbor2"

    def get_authident(self) -> str:
        return USE_SERVER_NAME

    def _error_detail(self, body: Any) -> str | None:
        # {"errors": [{"code": "FORBIDDEN", "message": "..."}]}
        errors = body.get("errors") if isinstance(body, dict) else None
        if not isinstance(errors, list) or not errors or not isinstance(errors[0], dict):
            return None
        first = errors[0]
        return f"{first.get('code', '')} - {first.get('message', '')}"

    def pushrm(
        self,
        ref: ImageReference,
        creds: Credentials,
        readme: str,
        short: str = "",
    ) -> None:
        response = self._send(
            "PUT",
            f"https://{ref.server}/api/v2.0/projects/{ref.namespace}/repositories/{ref.repo}",
            json={"description": readme},
            auth=(creds.username, creds.password),
        )
        self._check(response)
