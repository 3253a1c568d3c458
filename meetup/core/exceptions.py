"""
Meetup Sync error taxonomy.

Every error raised by the session engine is a MeetupException carrying a
message safe to show a client and a details dict for logs. The HTTP layer
maps the concrete class onto a status code (see meetup.api.error_handling).

System role: Domain errors shared by engine, store and API
"""

from typing import Any


def _with(details: dict[str, Any] | None, **context: Any) -> dict[str, Any]:
    merged = dict(details or {})
    merged.update({k: v for k, v in context.items() if v is not None})
    return merged


class MeetupException(Exception):
    """Root of all Meetup Sync errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        return f"{self.message} | Details: {self.details}"


class ValidationError(MeetupException):
    """A required identifier is missing or a value is out of range (HTTP 400)."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.field = field
        super().__init__(message, _with(details, field=field or None))


class NotFoundError(MeetupException):
    """A resource that must already exist does not (HTTP 404)."""


class SessionNotFoundError(NotFoundError):
    """Lookup of a session id that was never created or has been reaped."""

    def __init__(self, session_id: str, details: dict[str, Any] | None = None) -> None:
        self.session_id = session_id
        super().__init__(
            f"Session not found: {session_id}",
            _with(details, session_id=session_id),
        )


class StoreError(MeetupException):
    """
    The persistence layer failed: I/O, lock timeout or constraint violation.

    The engine never turns one of these into success. `operation` names the
    engine call that failed and is the only part exposed to clients.
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.operation = operation
        super().__init__(message, _with(details, operation=operation or None))
