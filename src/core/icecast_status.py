# core/icecast_status.py
from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup, Tag

from core.errors import ExtractionMiss
from core.models import ListenerSnapshot
from core.net import fetch, new_session

logger = logging.getLogger(__name__)

MOUNT_HEADER_SELECTOR = "h3.mount"
INFO_BOX_CLASS = "roundbox"
NOW_PLAYING_LABEL = "Currently playing:"
LISTENERS_LABEL = "Listeners (current):"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_status_page(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def _text(node: Tag) -> str:
    return node.get_text().strip()


def _closest(node: Tag | None, class_name: str) -> Tag | None:
    while isinstance(node, Tag):
        if class_name in (node.get("class") or []):
            return node
        node = node.parent
    return None


def _parse_listeners(value: str) -> int:
    m = _LEADING_INT.match(value)
    if not m:
        return 0
    return max(0, int(m.group(1)))


def find_mount_box(doc: Tag, mount_heading: str) -> Tag:
    """
    Info box of the mount whose header text is exactly mount_heading.
    A shared status page lists several mounts, so a prefix or substring
    match is not good enough.
    """
    header = None
    for h in doc.select(MOUNT_HEADER_SELECTOR):
        if _text(h) == mount_heading:
            header = h
            break
    if header is None:
        raise ExtractionMiss(f"mount header {mount_heading!r} not found")

    box = _closest(header, INFO_BOX_CLASS)
    if box is None:
        raise ExtractionMiss(f"mount header {mount_heading!r} has no .{INFO_BOX_CLASS} container")
    return box


def extract_snapshot(doc: Tag, mount_heading: str) -> ListenerSnapshot | None:
    """
    Read now-playing and listener count out of the mount's info box.

    Returns None (no update) when the mount or its box is missing, so the
    caller keeps whatever it showed before. Labels that never show up keep
    their defaults; unknown rows are ignored.
    """
    try:
        box = find_mount_box(doc, mount_heading)
    except ExtractionMiss as e:
        logger.warning("Icecast status: %s", e)
        return None

    now_playing = ""
    listeners = 0

    for row in box.select("table tr"):
        cells = row.select("td")
        if len(cells) != 2:
            continue

        label = _text(cells[0])
        value = _text(cells[1])

        if label == NOW_PLAYING_LABEL:
            now_playing = value
        elif label == LISTENERS_LABEL:
            listeners = _parse_listeners(value)

    return ListenerSnapshot(now_playing=now_playing, listener_count=listeners)


class IcecastStatusClient:
    def __init__(
        self,
        status_url: str,
        mount_heading: str,
        session=None,
        user_agent: str = "live-radio-client/0.1",
        timeout: float = 15.0,
    ):
        self.status_url = status_url
        self.mount_heading = mount_heading
        self.session = session if session is not None else new_session(user_agent)
        self.timeout = timeout

    def fetch(self) -> ListenerSnapshot | None:
        r = fetch(self.session, self.status_url, timeout=self.timeout)
        return extract_snapshot(parse_status_page(r.text), self.mount_heading)
