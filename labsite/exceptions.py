"""Central application exception hierarchy.

This module defines the base application exception ``AppError`` and the
specialized subclasses used by the feed pipeline to represent its failure
modes: missing configuration, transport failures while fetching a feed, and
parser failures on malformed feed text. Every subclass carries a stable
machine-readable code so loaders and tests can discriminate failures without
matching on message text.
"""

from __future__ import annotations

from typing import Any, Mapping


class AppError(Exception):
    """Base exception for all application-level errors.

    Parameters
    ----------
    code : str
        Machine-readable error code (e.g., ``'FEED_PARSE_ERROR'``).
    message : str
        Human-readable message describing the error.
    context : Mapping[str, Any] | None, optional
        Optional structured context for logging.
    transient : bool, optional
        Whether the error is temporary and a manual reload may succeed.

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
    """Raised for invalid or missing configuration (e.g. an unset feed URL)."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(
            "CONFIGURATION_ERROR", message, context=context, transient=False
        )


class FeedTransportError(AppError):
    """Raised when a feed cannot be fetched.

    Covers both non-success HTTP responses (``status`` is set) and
    client-side failures such as connection errors or timeouts (``status``
    is ``None``).

    Parameters
    ----------
    message : str
        Human-readable message, ``"HTTP <status>"`` for bad responses.
    status : int | None, optional
        HTTP status code of the response, when one was received.
    context : Mapping[str, Any] | None, optional
        Optional structured context for logging.
    """

    __slots__ = ("status",)

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            "FEED_TRANSPORT_ERROR",
            message,
            context=context,
            transient=status is None or status >= 500,
        )
        self.status = status


class FeedParseError(AppError):
    """Raised when the CSV parser rejects the feed text."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__("FEED_PARSE_ERROR", message, context=context, transient=False)
