"""Exceptions raised by the AI generation layer.

Each provider failure maps to exactly one subclass of :class:`GenerationError`.
The exceptions carry structured fields; user-facing wording is chosen by the
API layer.
"""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar


class GenerationErrorKind(StrEnum):
    """Closed set of generation failure kinds."""

    CONFIG_MISSING = "config_missing"
    CONFIG_INVALID = "config_invalid"
    RATE_LIMITED = "rate_limited"
    UNAUTHORIZED = "unauthorized"
    NETWORK_FAILURE = "network_failure"
    TIMEOUT = "timeout"
    MALFORMED_RESPONSE = "malformed_response"


class GenerationError(Exception):
    """Base exception for AI generation errors."""

    kind: ClassVar[GenerationErrorKind]
    transient: ClassVar[bool] = False

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        message = self.kind.value if detail is None else f"{self.kind.value}: {detail}"
        super().__init__(message)


class ConfigMissingError(GenerationError):
    """A required setting (normally the API key) is not configured."""

    kind = GenerationErrorKind.CONFIG_MISSING

    def __init__(self, setting: str = "OPENAI_API_KEY") -> None:
        self.setting = setting
        super().__init__(f"{setting} is not set")


class ConfigInvalidError(GenerationError):
    """A setting is present but has the wrong shape."""

    kind = GenerationErrorKind.CONFIG_INVALID

    def __init__(self, setting: str = "OPENAI_API_KEY") -> None:
        self.setting = setting
        super().__init__(f"{setting} has an invalid format")


class RateLimitedError(GenerationError):
    """Provider answered 429."""

    kind = GenerationErrorKind.RATE_LIMITED
    transient = True

    def __init__(self, retry_after: str | None = None) -> None:
        self.retry_after = retry_after
        super().__init__(None if retry_after is None else f"retry after {retry_after}")


class UnauthorizedError(GenerationError):
    """Provider rejected the API key (401)."""

    kind = GenerationErrorKind.UNAUTHORIZED


class NetworkFailureError(GenerationError):
    """Connection failure or an unexpected non-success status."""

    kind = GenerationErrorKind.NETWORK_FAILURE
    transient = True

    def __init__(self, status_code: int | None = None, reason: str | None = None) -> None:
        self.status_code = status_code
        self.reason = reason
        parts = []
        if status_code is not None:
            parts.append(f"status {status_code}")
        if reason:
            parts.append(reason)
        super().__init__(", ".join(parts) or None)


class GenerationTimeoutError(GenerationError):
    """Request did not complete within the timeout budget."""

    kind = GenerationErrorKind.TIMEOUT
    transient = True

    def __init__(self, timeout: float, elapsed: float | None = None) -> None:
        self.timeout = timeout
        self.elapsed = elapsed
        detail = f"no response within {timeout:g}s"
        if elapsed is not None:
            detail += f" (elapsed {elapsed:.1f}s)"
        super().__init__(detail)


class MalformedResponseError(GenerationError):
    """Provider output does not match the expected envelope or payload."""

    kind = GenerationErrorKind.MALFORMED_RESPONSE

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)
