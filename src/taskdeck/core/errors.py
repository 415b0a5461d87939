# src/taskdeck/core/errors.py

"""
Classified client errors.

The gateway maps every failure (HTTP status, network condition, malformed
payload) onto exactly one ErrorKind and raises the matching subclass.
Callers above the gateway never reinterpret the kind.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    UNAUTHORIZED = "unauthorized"
    VALIDATION_FAILED = "validation_failed"
    SERVER_FAULT = "server_fault"
    NETWORK_UNREACHABLE = "network_unreachable"
    NOT_FOUND = "not_found"
    MISSING_IDENTITY = "missing_identity"
    PROTOCOL_ERROR = "protocol_error"
    ACTION_IN_FLIGHT = "action_in_flight"


class TaskClientError(RuntimeError):
    """Base class for every error surfaced by the task client."""

    kind: ErrorKind = ErrorKind.PROTOCOL_ERROR

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        detail: object | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class Unauthorized(TaskClientError):
    """Credentials rejected. The session has already been cleared."""

    kind = ErrorKind.UNAUTHORIZED


class ValidationFailed(TaskClientError):
    kind = ErrorKind.VALIDATION_FAILED


class ServerFault(TaskClientError):
    kind = ErrorKind.SERVER_FAULT


class NetworkUnreachable(TaskClientError):
    kind = ErrorKind.NETWORK_UNREACHABLE


class NotFound(TaskClientError):
    kind = ErrorKind.NOT_FOUND


class MissingIdentity(TaskClientError):
    """A user-scoped call was attempted without a resolvable user id."""

    kind = ErrorKind.MISSING_IDENTITY


class ProtocolError(TaskClientError):
    """The server answered, but not in the shape the client expects."""

    kind = ErrorKind.PROTOCOL_ERROR


class ActionInFlight(TaskClientError):
    """The same action on the same target is still waiting for the server."""

    kind = ErrorKind.ACTION_IN_FLIGHT


_FRIENDLY: dict[ErrorKind, str] = {
    ErrorKind.UNAUTHORIZED: "Session expired or credentials rejected. Please /login again.",
    ErrorKind.VALIDATION_FAILED: "The server rejected the data. Check your input and try again.",
    ErrorKind.SERVER_FAULT: "The server had a problem. Try again in a moment.",
    ErrorKind.NETWORK_UNREACHABLE: "Could not reach the server. Check your connection.",
    ErrorKind.NOT_FOUND: "That task no longer exists.",
    ErrorKind.MISSING_IDENTITY: "No user session found. Please /login first.",
    ErrorKind.PROTOCOL_ERROR: "The server sent an unexpected response.",
    ErrorKind.ACTION_IN_FLIGHT: "That action is already in progress.",
}


def friendly_error_message(err: Exception) -> str:
    """Notification text for the presentation layer, one per error kind."""
    if isinstance(err, TaskClientError):
        base = _FRIENDLY.get(err.kind, str(err))
        if err.kind == ErrorKind.VALIDATION_FAILED and err.detail:
            return f"{base} ({err.detail})"
        return base
    msg = str(err).strip()
    return msg or err.__class__.__name__
