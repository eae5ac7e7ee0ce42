"""Central application exception hierarchy.

This module defines the base application exception ``AppError`` and the
specialized subclasses used by the converter to represent its failure modes:
invalid configuration, failures of the completion service (network, HTTP
status, rate limiting, timeouts) and per-file content problems. Using a
centralized hierarchy lets the conversion driver treat every expected
per-file failure uniformly while still logging a precise cause.
"""

from __future__ import annotations

from typing import Any, Mapping


class AppError(Exception):
    """Base exception for all application-level errors.

    Parameters
    ----------
    code : str
        Machine-readable error code (e.g., ``'CONFIGURATION_ERROR'``).
    message : str
        Human-readable message describing the error.
    context : Mapping[str, Any] | None, optional
        Optional structured context for logging.
    transient : bool, optional
        Whether the error is temporary and re-running may succeed.

    Attributes
    ----------
    code : str
        Stable machine-readable error code.
    message : str
        Human-readable message.
    context : dict
        Structured, non-sensitive context for logging.
    transient : bool
        True if the error is transient.

    Examples
    --------
    >>> e = AppError('CODE', 'message', context={'k': 'v'}, transient=True)
    >>> e.code
    'CODE'
    """

    __slots__ = ("code", "message", "context", "transient")

    def __init__(
        self,
        code: str,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        transient: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.context = dict(context or {})
        self.transient = bool(transient)

    def __str__(self) -> str:
        """Return a compact string representation of the error."""
        return f"{self.code}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Return a log-safe dictionary representation of the error."""
        return {
            "error_code": self.code,
            "message": self.message,
            "context": self.context,
            "is_transient": self.transient,
        }


class ConfigurationError(AppError):
    """Raised for invalid or missing configuration."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(
            "CONFIGURATION_ERROR", message, context=context, transient=False
        )


class APIRateLimitError(AppError):
    """Raised when the completion service indicates a rate limit condition."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(
            "API_RATE_LIMIT_ERROR", message, context=context, transient=True
        )


class TimeoutExceededError(AppError):
    """Raised when a request to the completion service exceeds its timeout."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(
            "TIMEOUT_EXCEEDED_ERROR", message, context=context, transient=True
        )


class ExternalServiceError(AppError):
    """Raised for unexpected failures from the completion service."""

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        transient: bool = True,
    ) -> None:
        super().__init__(
            "EXTERNAL_SERVICE_ERROR", message, context=context, transient=transient
        )


class ContentTooLargeError(AppError):
    """Raised when a file is still over budget after cleaning."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(
            "CONTENT_TOO_LARGE_ERROR", message, context=context, transient=False
        )


class EmptyResponseError(AppError):
    """Raised when the sanitized completion reply is empty."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(
            "EMPTY_RESPONSE_ERROR", message, context=context, transient=True
        )
