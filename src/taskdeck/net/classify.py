# src/taskdeck/net/classify.py

"""
Map raw transport outcomes onto classified client errors.

Used by the remote gateways (tasks, auth). Each failure becomes exactly one
TaskClientError subclass. Only a 401 clears the session: the stored token is
no longer valid. A 403 keeps the session and reads as a refused request.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..core.errors import (
    NetworkUnreachable,
    NotFound,
    ProtocolError,
    ServerFault,
    TaskClientError,
    Unauthorized,
    ValidationFailed,
)
from ..core.ports import SessionRepo
from .transport import RawResponse

logger = logging.getLogger(__name__)


def _detail(resp: RawResponse) -> Any:
    body = resp.body
    if isinstance(body, dict):
        for key in ("detail", "message", "error"):
            if body.get(key):
                return body[key]
    if resp.text:
        return resp.text[:200]
    return None


def classify_request_error(exc: httpx.RequestError, *, what: str) -> TaskClientError:
    """No usable response was received."""
    if isinstance(exc, httpx.TransportError):
        logger.info("%s: network error (%s)", what, exc.__class__.__name__)
        return NetworkUnreachable(f"{what}: server unreachable ({exc.__class__.__name__})")
    logger.warning("%s: request failed (%s)", what, exc.__class__.__name__)
    return ProtocolError(f"{what}: malformed exchange ({exc.__class__.__name__})")


def raise_for_response(resp: RawResponse, *, session_store: SessionRepo, what: str) -> None:
    """Raise the classified error for a non-2xx response; return quietly otherwise."""
    status = resp.status_code
    if 200 <= status < 300:
        return

    detail = _detail(resp)

    if status == 401:
        logger.warning("%s: credentials rejected, clearing session", what)
        session_store.clear()
        raise Unauthorized(f"{what}: unauthorized", status_code=status, detail=detail)

    if status == 403:
        logger.info("%s: forbidden: %s", what, detail)
        raise ValidationFailed(
            f"{what}: forbidden", status_code=status, detail=detail or "not allowed for this account"
        )

    if status == 404:
        logger.info("%s: not found", what)
        raise NotFound(f"{what}: not found", status_code=status, detail=detail)

    if 400 <= status < 500:
        logger.info("%s: rejected by server (%s): %s", what, status, detail)
        raise ValidationFailed(f"{what}: rejected ({status})", status_code=status, detail=detail)

    if status >= 500:
        logger.warning("%s: server fault (%s)", what, status)
        raise ServerFault(f"{what}: server error ({status})", status_code=status, detail=detail)

    logger.warning("%s: unexpected status %s", what, status)
    raise ProtocolError(f"{what}: unexpected status {status}", status_code=status, detail=detail)


def require_json(resp: RawResponse, *, what: str) -> Any:
    """Decoded body of a successful response; undecodable or empty bodies are protocol errors."""
    if resp.decode_failed:
        raise ProtocolError(f"{what}: response is not JSON", status_code=resp.status_code)
    if resp.body is None:
        raise ProtocolError(f"{what}: empty response body", status_code=resp.status_code)
    return resp.body
