"""Runtime configuration and environment parsing helpers."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_API_VERSION = "6.3"
DEFAULT_REQUEST_TIMEOUT = 30


def _normalize_text_value(raw_value) -> str:
    """
    Normalize a free-form text value:
    - trim leading/trailing whitespace
    - strip one pair of matching surrounding quotes ('...' or "...")
    """
    if raw_value is None:
        return ""
    text = str(raw_value).strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in {"'", '"'}:
        text = text[1:-1].strip()
    return text


def _parse_env_bool(raw_value: str | None, default: bool = False) -> bool:
    if raw_value is None:
        return default
    value = str(raw_value).strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    logger.warning(f"Invalid boolean value '{raw_value}'. Using default {default}.")
    return default


def _read_env_int(var_name: str, default: int, minimum: int | None = None) -> int:
    raw_value = os.getenv(var_name)
    if raw_value is None or str(raw_value).strip() == "":
        return default
    try:
        value = int(str(raw_value).strip())
    except (TypeError, ValueError):
        logger.warning(
            f"Invalid integer value for {var_name}: {raw_value}. Using default {default}."
        )
        return default
    if minimum is not None and value < minimum:
        logger.warning(
            f"Value for {var_name} must be >= {minimum}. Using default {default}."
        )
        return default
    return value


def _fc_verify_ssl() -> bool:
    return _parse_env_bool(os.getenv("FC_VERIFY_SSL"), default=True)


def _fc_request_timeout() -> int:
    return _read_env_int("FC_REQUEST_TIMEOUT", default=DEFAULT_REQUEST_TIMEOUT, minimum=1)


def load_runtime_config(env_file=None):
    """
    Build runtime config from environment variables.

    A ``.env`` file (``env_file`` or the one found from the working directory)
    is loaded first; variables already set in the environment win.
    """
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    fc_cfg = {
        "URL": _normalize_text_value(os.getenv("FC_URL")).rstrip("/"),
        "USERNAME": _normalize_text_value(os.getenv("FC_USERNAME")),
        "PASSWORD": _normalize_text_value(os.getenv("FC_PASSWORD")),
        "SITE": _normalize_text_value(os.getenv("FC_SITE")),
        "API_VERSION": _normalize_text_value(os.getenv("FC_API_VERSION")) or DEFAULT_API_VERSION,
        "USER_TYPE": _normalize_text_value(os.getenv("FC_USER_TYPE")) or "2",
        "AUTH_TYPE": _normalize_text_value(os.getenv("FC_AUTH_TYPE")) or "0",
        "VERIFY_SSL": _fc_verify_ssl(),
        "REQUEST_TIMEOUT": _fc_request_timeout(),
    }

    if not fc_cfg["URL"]:
        raise ValueError("FusionCompute URL is missing. Set FC_URL in .env.")
    if not fc_cfg["USERNAME"] or not fc_cfg["PASSWORD"]:
        logger.warning("FC_USERNAME or FC_PASSWORD is not set; login will fail.")

    return {"FUSIONCOMPUTE": fc_cfg}
