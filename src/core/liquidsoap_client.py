# core/liquidsoap_client.py
from __future__ import annotations

import json
import logging
import math
from typing import Any, Mapping
from urllib.parse import quote

from core.errors import DecodeFailure, NetworkFailure
from core.models import SourceMode, TrackStatus, basename
from core.net import fetch, new_session

logger = logging.getLogger(__name__)

# same set encodeURIComponent leaves alone
_KEYWORD_SAFE = "-_.!~*'()"


def _as_mapping(payload: Any) -> Mapping[str, Any]:
    # the status endpoint answers with [[key, value], ...]
    if isinstance(payload, Mapping):
        return payload
    if not isinstance(payload, list):
        raise DecodeFailure(f"status payload is {type(payload).__name__}, expected list of pairs")
    out: dict[str, Any] = {}
    for entry in payload:
        if not isinstance(entry, (list, tuple)) or len(entry) != 2:
            raise DecodeFailure(f"malformed status entry: {entry!r}")
        key, value = entry
        out[str(key)] = value
    return out


def _coerce_seconds(raw: Any) -> float:
    if raw is None or raw == "" or isinstance(raw, bool):
        return 0.0
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def decode_track_list(raw: Any) -> tuple[str, ...]:
    """
    Decode a serialized list of track paths. Raises DecodeFailure when the
    value is not a JSON list of strings.
    """
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            raise DecodeFailure(f"not a JSON list: {e}") from e
    if not isinstance(raw, list) or not all(isinstance(p, str) for p in raw):
        raise DecodeFailure(f"expected a list of paths, got {type(raw).__name__}")
    return tuple(raw)


def decode_status(payload: Any) -> TrackStatus:
    fields = _as_mapping(payload)

    raw_queue = fields.get("queue")
    queue: tuple[str, ...] | None
    if not raw_queue:
        queue = ()
    else:
        try:
            queue = decode_track_list(raw_queue)
        except DecodeFailure as e:
            logger.error("Status queue field undecodable, keeping previous queue: %s", e)
            queue = None

    source = SourceMode.QUEUE if fields.get("source") == SourceMode.QUEUE.value else SourceMode.RANDOM

    return TrackStatus(
        queue=queue,
        source_mode=source,
        elapsed_s=_coerce_seconds(fields.get("elapsed")),
        remaining_s=_coerce_seconds(fields.get("remaining")),
        duration_s=_coerce_seconds(fields.get("duration")),
    )


def decode_library(payload: Any) -> tuple[str, ...]:
    # [[name, "<json list>"], ...]; only the first entry carries the catalog
    if not isinstance(payload, list):
        raise DecodeFailure(f"library payload is {type(payload).__name__}, expected list")
    if not payload:
        return ()
    first = payload[0]
    if not isinstance(first, (list, tuple)) or len(first) < 2:
        raise DecodeFailure(f"malformed library entry: {first!r}")
    return decode_track_list(first[1])


class LiquidsoapClient:
    def __init__(
        self,
        base_url: str,
        session=None,
        user_agent: str = "live-radio-client/0.1",
        timeout: float = 15.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else new_session(user_agent)
        self.timeout = timeout

    def _get(self, path: str):
        return fetch(self.session, f"{self.base_url}{path}", timeout=self.timeout)

    def _get_json(self, path: str) -> Any:
        r = self._get(path)
        try:
            return r.json()
        except ValueError as e:
            raise DecodeFailure(f"{path}: response is not JSON: {e}") from e


class StatusClient(LiquidsoapClient):
    def fetch(self) -> TrackStatus:
        return decode_status(self._get_json("/status"))


class LibraryClient(LiquidsoapClient):
    def fetch(self) -> tuple[str, ...]:
        return decode_library(self._get_json("/library"))


class CommandClient(LiquidsoapClient):
    """
    Fire-and-forget controls. Failures are logged and swallowed; the next
    status poll shows whether the server acted on them.
    """

    def skip(self) -> bool:
        return self._send("/skip")

    def request_by_keyword(self, path: str) -> bool:
        keyword = quote(basename(path), safe=_KEYWORD_SAFE)
        return self._send(f"/next?keyword={keyword}")

    def _send(self, path: str) -> bool:
        try:
            self._get(path)
        except NetworkFailure as e:
            logger.error("Command %s failed: %s", path, e)
            return False
        logger.info("Command sent: %s", path)
        return True
