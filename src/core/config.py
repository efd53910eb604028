# core/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Mapping

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://lidyi.com/config"
DEFAULT_ICECAST_STATUS_URL = "https://lidyi.com/radio/status.xsl"
DEFAULT_STREAM_URL = "https://lidyi.com/radio/stream.mp3"
DEFAULT_MOUNT_HEADING = "Mount Point /stream.mp3"


@dataclass(frozen=True)
class RadioConfig:
    api_base: str = DEFAULT_API_BASE
    icecast_status_url: str = DEFAULT_ICECAST_STATUS_URL
    stream_url: str = DEFAULT_STREAM_URL
    mount_heading: str = DEFAULT_MOUNT_HEADING
    poll_interval_ms: int = 5000
    request_timeout_s: float = 15.0
    reconnect_base_ms: int = 3000
    reconnect_cap_ms: int = 15000
    reconnect_max_attempts: int = 5
    search_result_limit: int = 20
    user_agent: str = "live-radio-client/0.1"
    debug: bool = False


def _int_env(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = environ.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %s", key, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring %s=%r: must be positive, using %s", key, raw, default)
        return default
    return value


def _float_env(environ: Mapping[str, str], key: str, default: float) -> float:
    raw = environ.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number, using %s", key, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring %s=%r: must be positive, using %s", key, raw, default)
        return default
    return value


def _url_env(environ: Mapping[str, str], key: str, default: str) -> str:
    u = (environ.get(key) or "").strip().rstrip("/")
    return u or default


def load_config(environ: Mapping[str, str] | None = None) -> RadioConfig:
    """
    Build the runtime config from RADIO_* environment variables.
    Anything missing or unparsable keeps its default.
    """
    env = os.environ if environ is None else environ
    cfg = RadioConfig()

    return replace(
        cfg,
        api_base=_url_env(env, "RADIO_API_BASE", cfg.api_base),
        icecast_status_url=_url_env(env, "RADIO_ICECAST_STATUS_URL", cfg.icecast_status_url),
        stream_url=_url_env(env, "RADIO_STREAM_URL", cfg.stream_url),
        mount_heading=(env.get("RADIO_MOUNT") or "").strip() or cfg.mount_heading,
        poll_interval_ms=_int_env(env, "RADIO_POLL_INTERVAL_MS", cfg.poll_interval_ms),
        request_timeout_s=_float_env(env, "RADIO_REQUEST_TIMEOUT", cfg.request_timeout_s),
        debug=env.get("RADIO_DEBUG") == "1",
    )
