"""Turn raw HTTP responses into typed results or errors."""

from __future__ import annotations

import logging

from .errors import DecodeError, format_http_error

logger = logging.getLogger(__name__)


def is_success(status_code) -> bool:
    return isinstance(status_code, int) and 200 <= status_code < 300


def decode_response(response, response_cls, method=None, path=None):
    """
    Decode ``response`` into ``response_cls`` or raise.

    Non-2xx statuses raise the shared HttpStatusError; a 2xx body that is not
    JSON, or not the shape ``response_cls`` expects, raises DecodeError.
    """
    status_code = response.status_code
    if not is_success(status_code):
        logger.error(f"Request {method} {path} failed with status {status_code}")
        raise format_http_error(response, method=method, path=path)

    try:
        payload = response.json()
    except ValueError as err:
        raise DecodeError(f"{method} {path}: response body is not valid JSON: {err}") from err
    return response_cls.from_payload(payload)
