# core/net.py
from __future__ import annotations

import time

import requests

from core.errors import NetworkFailure

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store",
    "Pragma": "no-cache",
}


def new_session(user_agent: str) -> requests.Session:
    session = requests.Session()
    session.headers.update({"User-Agent": user_agent})
    session.headers.update(NO_CACHE_HEADERS)
    return session


def fetch(session, url: str, timeout: float, params: dict | None = None) -> requests.Response:
    """
    GET with cache bypass. Every transport-level problem, including a
    non-success status, comes out as NetworkFailure.
    """
    try:
        r = session.get(url, params=params, headers=NO_CACHE_HEADERS, timeout=timeout)
        r.raise_for_status()
    except requests.RequestException as e:
        raise NetworkFailure(f"GET {url} failed: {e}") from e
    return r


def cache_busted_url(url: str, now_ms: int | None = None) -> str:
    # fresh value per load attempt so no intermediary serves a dead stream
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    sep = "&" if "?" in url else "?"
    return f"{url}{sep}nocache={now_ms}"
