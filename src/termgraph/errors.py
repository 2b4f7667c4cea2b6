"""Error taxonomy for term insertion and graph retrieval.

Every error raised on the request path derives from
:class:`TermGraphError`.  :func:`error_response` is the one place that
turns such an error into the JSON payload and status code sent back to
the HTTP caller.
"""

from __future__ import annotations

from typing import Any


class TermGraphError(Exception):
    """Base exception for termgraph errors."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TermGraphError):
    """Raised when a request is rejected before any store call."""

    status_code = 400


class UpstreamStatusError(TermGraphError):
    """Raised when the store answers with a status other than the expected one.

    The store did not report an error, so the operation may or may not
    have been applied.  The store's status is surfaced unchanged.
    """

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransportError(TermGraphError):
    """Raised when the store cannot be reached or reports an error.

    ``status_code`` is the store's own error status when it answered, and
    500 otherwise.  ``detail`` holds the store's error body, if any.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        detail: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code or 500
        self.detail = detail

    def with_message(self, message: str) -> TransportError:
        """Return a copy carrying an operation-specific generic message."""
        return TransportError(message, self.status_code, self.detail)


def error_response(exc: TermGraphError) -> tuple[dict[str, Any], int]:
    """Map an error to the ``(payload, status)`` returned to the client.

    Store error bodies are forwarded verbatim.
    """
    if isinstance(exc, UpstreamStatusError):
        return {
            "message": exc.message,
            "graphDbStatus": exc.status_code,
        }, exc.status_code

    if isinstance(exc, TransportError):
        return {"error": exc.detail or exc.message}, exc.status_code

    return {"error": exc.message}, exc.status_code
