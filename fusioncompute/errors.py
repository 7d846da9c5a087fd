"""Exceptions raised by the FusionCompute client."""

from __future__ import annotations

import json


class FusionComputeError(Exception):
    """Base class for every error raised by this package."""


class TransportError(FusionComputeError):
    """The HTTP exchange itself failed (connection, TLS, timeout)."""


class AuthenticationError(FusionComputeError):
    pass


class DecodeError(FusionComputeError):
    """A success response whose body does not match the expected shape."""


class InputError(FusionComputeError, ValueError):
    """Caller-supplied input rejected before any request was sent."""


class HttpStatusError(FusionComputeError):
    """The platform answered with a non-success status code."""

    def __init__(self, message, status_code=None, body="", method=None, path=None, error_code=None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.method = method
        self.path = path
        self.error_code = error_code


def _response_text(response) -> str:
    text = getattr(response, "text", None)
    if text is not None:
        return text
    content = getattr(response, "content", b"") or b""
    if isinstance(content, bytes):
        return content.decode("utf-8", errors="replace")
    return str(content)


def format_http_error(response, method=None, path=None) -> HttpStatusError:
    """
    Build the error for a non-success response.

    Every operation goes through this so all HTTP failures look the same:
    status code and raw body, plus FusionCompute's errorCode/errorDes when the
    body carries them.
    """
    status_code = getattr(response, "status_code", None)
    body = _response_text(response)

    error_code = None
    description = None
    try:
        payload = json.loads(body) if body else None
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        error_code = payload.get("errorCode")
        description = payload.get("errorDes")

    target = f" {method} {path}" if method and path else ""
    message = f"HTTP {status_code}{target}: {body}"
    if error_code:
        message = f"{message} (errorCode={error_code}, errorDes={description})"
    return HttpStatusError(
        message,
        status_code=status_code,
        body=body,
        method=method,
        path=path,
        error_code=error_code,
    )
