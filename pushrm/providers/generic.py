"""Shared HTTP plumbing for registry providers.

Sends exactly one request per call through ``httpx`` and turns non-2xx
answers into :class:`~pushrm.errors.RemoteRejectionError` with whatever
detail the registry put in its error body.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from pushrm import log
from pushrm.config import DockerConfig
from pushrm.errors import NetworkTransportError, RemoteRejectionError
from pushrm.providers import ProviderBase


class GenericProvider(ProviderBase):
    """Base for providers that talk JSON over HTTPS."""

    #: Appended to the error message on HTTP 403.
    forbidden_hint = 'Try "docker logout" and "docker login".'

    def __init__(
        self,
        config: DockerConfig | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.config = config if config is not None else DockerConfig()
        self.client = client

    # ── Hooks ──

    def _error_detail(self, body: Any) -> str | None:
        """Extract the registry's error message from a decoded error body."""
        return None

    # ── Helpers ──

    def _send(
        self,
        method: str,
        url: str,
        *,
        what: str = "pushing README",
        **kwargs: Any,
    ) -> httpx.Response:
        """Send a single request.  No retries."""
        log.debug(f"{method} {url}")
        try:
            if self.client is not None:
                response = self.client.request(method, url, **kwargs)
            else:
                with httpx.Client() as client:
                    response = client.request(method, url, **kwargs)
        except httpx.RequestError as exc:
            log.debug(f"{method} {url} failed: {exc!r}")
            raise NetworkTransportError(
                f"error {what}, error making http request to {url}"
            ) from exc
        log.debug(f"{what}, status code: {response.status_code}")
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        """Decode the response body, returning ``None`` if it is not JSON."""
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            log.debug(f"could not parse response body: {exc}")
            return None

    def _check(self, response: httpx.Response, *, what: str = "pushing README") -> None:
        """Raise :class:`RemoteRejectionError` unless *response* is 2xx."""
        log.debug(f"{what}, response body: {response.text}")
        if response.is_success:
            return
        status = f"{response.status_code} {response.reason_phrase}".strip()
        msg = f"error {what}, bad status code for response: {status}"
        detail = None
        body = self._json(response)
        if body is not None:
            detail = self._error_detail(body)
        if detail:
            msg += f'. Server responded: "{detail}"'
        if response.status_code == 403:
            msg += f". {self.forbidden_hint}"
        raise RemoteRejectionError(msg, status=response.status_code, detail=detail)
