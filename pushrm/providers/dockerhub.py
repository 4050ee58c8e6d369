"""Dockerhub (hub.docker.com) provider.

Logs in with username/password to obtain a JWT, then PATCHes the
repository's ``full_description`` (and ``description`` when a short
description is given).  The response must echo back exactly what was
sent.
"""

from __future__ import annotations

from typing import Any

from pushrm import log
from pushrm.credentials import Credentials
from pushrm.errors import AuthFailed, ResponseValidationError
from pushrm.providers.generic import GenericProvider
from pushrm.reference import ImageReference

HUB_URL = "https://hub.docker.com"
AUTHIDENT = "https://index.docker.io/v1/"

_LOGIN_HINT = (
    'Try "docker logout" and "docker login". You cannot use a personal access '
    "token to log in and must use username and password. If you have 2FA auth "
    "enabled in Dockerhub you'll need to disable it for this tool to work."
)


class Dockerhub(GenericProvider):
    """Provider for Dockerhub (docker.io)."""

    name = "dockerhub"
    forbidden_hint = _LOGIN_HINT

    def get_authident(self) -> str:
        return AUTHIDENT

    def _error_detail(self, body: Any) -> str | None:
        if isinstance(body, dict) and isinstance(body.get("detail"), str):
            return body["detail"]
        return None

    def login(self, username: str, password: str) -> str:
        """Return a JWT for *username*.

        Raises
        ------
        AuthFailed
            Non-200 answer or no token in the response.
        """
        what = "retrieving Dockerhub jwt token"
        response = self._send(
            "POST",
            f"{HUB_URL}/v2/users/login/",
            what=what,
            json={"username": username, "password": password},
        )
        if response.status_code != 200:
            log.debug(f"{what}, bad status code: {response.status_code}")
            raise AuthFailed(
                "error trying to get a JWT token from Dockerhub for the stored "
                f"Docker login. {_LOGIN_HINT}",
                status=response.status_code,
            )
        body = self._json(response)
        token = body.get("token") if isinstance(body, dict) else None
        if not isinstance(token, str) or not token:
            raise AuthFailed(
                "error trying to get a JWT token from Dockerhub: no token received. "
                f"{_LOGIN_HINT}",
                status=response.status_code,
            )
        return token

    def update_description(
        self,
        jwt: str,
        ref: ImageReference,
        readme: str,
        short: str = "",
    ) -> None:
        """PATCH the repository description and verify the echoed content."""
        payload = {"full_description": readme}
        if short:
            payload["description"] = short

        # The trailing slash is required by the API.
        response = self._send(
            "PATCH",
            f"{HUB_URL}/v2/repositories/{ref.namespace}/{ref.repo}/",
            json=payload,
            headers={"Authorization": f"JWT {jwt}"},
        )
        self._check(response)

        body = self._json(response)
        if not isinstance(body, dict):
            raise ResponseValidationError(
                "error pushing README, could not parse the server response"
            )
        if body.get("full_description") != readme:
            raise ResponseValidationError(
                "error pushing README, pushed readme to repo server but validation failed"
            )
        if short and body.get("description") != short:
            raise ResponseValidationError(
                "error setting Short Description, pushed to repo server but validation failed"
            )
        log.debug("content validation successful")

    def pushrm(
        self,
        ref: ImageReference,
        creds: Credentials,
        readme: str,
        short: str = "",
    ) -> None:
        log.debug("Dockerhub.pushrm called")
        jwt = self.login(creds.username, creds.password)
        self.update_description(jwt, ref, readme, short)
