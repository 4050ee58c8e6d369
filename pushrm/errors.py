"""Exception hierarchy for pushrm.

Every failure that ends an invocation is a :class:`PushrmError`.  The CLI
prints the message and exits non-zero; nothing is retried.
"""

from __future__ import annotations


class PushrmError(Exception):
    """Base class for all pushrm errors."""


# ── Input validation ──────────────────────────────────────────────────

class InputValidationError(PushrmError):
    """Bad or missing user input (image reference, short description, README)."""


class MissingTarget(InputValidationError):
    def __init__(self) -> None:
        super().__init__(
            "Missing [IMAGE] argument. Example: docker.io/mynamespace/myrepo:latest"
        )


class MissingNamespace(InputValidationError):
    def __init__(self) -> None:
        super().__init__(
            "Invalid [IMAGE] argument - missing namespace. "
            "Example: docker.io/mynamespace/myrepo:latest"
        )


class TooManySeparators(InputValidationError):
    def __init__(self) -> None:
        super().__init__(
            "Invalid [IMAGE] argument - too many separators. "
            "Example: docker.io/mynamespace/myrepo:latest"
        )


class InvalidCharacters(InputValidationError):
    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(
            f"Invalid [IMAGE] argument - bad characters or empty value ({value!r}). "
            "Example: docker.io/mynamespace/myrepo:latest"
        )


class ShortDescriptionTooLong(InputValidationError):
    def __init__(self, length: int, limit: int) -> None:
        self.length = length
        self.limit = limit
        super().__init__(
            f"Short description is too long ({length} characters, max {limit})"
        )


class ReadmeNotFound(InputValidationError):
    """No README file could be located or read."""


# ── Credential resolution ─────────────────────────────────────────────

class CredentialResolutionError(PushrmError):
    """Credentials or an API key could not be obtained."""


class NoCredentialsFound(CredentialResolutionError):
    def __init__(self, server: str) -> None:
        self.server = server
        super().__init__(
            f"no Docker credentials found for server {server}. "
            "Run 'docker login' first."
        )


class CredentialHelperError(CredentialResolutionError):
    """The external ``docker-credential-*`` helper failed."""


class MalformedCredentials(CredentialResolutionError):
    """Stored credentials could not be decoded."""


class NoApikeyFound(CredentialResolutionError):
    """No API key for a provider that authenticates with one."""


# ── Provider selection ────────────────────────────────────────────────

class ProviderSelectionError(PushrmError):
    """Unknown provider or provider not valid for the server."""


class UnsupportedProvider(ProviderSelectionError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"unsupported repo provider: {name}. "
            "See \"--help\" for supported providers."
        )


class ProviderServerMismatch(ProviderSelectionError):
    def __init__(self, server: str, provider: str, expected: str) -> None:
        self.server = server
        self.provider = provider
        super().__init__(
            f"servername {server} is not valid for provider {provider} "
            f"(try \"{expected}\")"
        )


# ── Remote side ───────────────────────────────────────────────────────

class NetworkTransportError(PushrmError):
    """The HTTP request could not be sent or the response not received."""


class RemoteRejectionError(PushrmError):
    """The registry answered with a non-2xx status."""

    def __init__(self, message: str, status: int | None = None, detail: str | None = None) -> None:
        self.status = status
        self.detail = detail
        super().__init__(message)


class AuthFailed(RemoteRejectionError):
    """Login against the registry did not yield a session token."""


class ResponseValidationError(PushrmError):
    """The registry accepted the update but stored something else."""
