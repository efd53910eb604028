# core/state.py
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable

from PySide6.QtCore import QObject, Signal, Slot

from core.models import (
    ListenerSnapshot,
    MergedViewState,
    PlaybackState,
    PlaybackStatus,
    TrackStatus,
)
from core.search import SearchIndex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notify:
    message: str
    notify_type: str = "info"   # info/success/warning/error


class AppState(QObject):
    """
    Single owner of everything the window renders.

    Each slice has one writer: feed fields come from the PollScheduler
    (commit_feeds), playback fields from the playback controller
    (commit_playback), the catalog from the one-shot library load.
    Every commit publishes one MergedViewState through view_changed.
    """

    notification = Signal(object)   # emits Notify
    view_changed = Signal(object)   # emits MergedViewState

    def __init__(self, search_result_limit: int = 20):
        super().__init__()
        self._track = TrackStatus()
        self._listeners = ListenerSnapshot()
        self._playback = PlaybackStatus()
        self._search = SearchIndex()
        self._library_loaded = False
        self._search_result_limit = search_result_limit
        self.queued_notifications: list[Notify] = []

    @property
    def view(self) -> MergedViewState:
        return MergedViewState(
            track=self._track,
            listeners=self._listeners,
            library=self._search.catalog,
            search=self._search.state,
            playback=self._playback,
            search_result_limit=self._search_result_limit,
        )

    @property
    def library_loaded(self) -> bool:
        return self._library_loaded

    def commit_feeds(
        self,
        track_status: TrackStatus | None = None,
        snapshot: ListenerSnapshot | None = None,
    ) -> None:
        if track_status is None and snapshot is None:
            return

        if track_status is not None:
            if track_status.queue is None:
                track_status = replace(track_status, queue=self._track.queue)
            self._track = track_status

        if snapshot is not None:
            self._listeners = snapshot

        self._publish()

    def commit_playback(self, state: PlaybackState, attempt: int = 0) -> None:
        new = PlaybackStatus(state=state, attempt=attempt)
        if new == self._playback:
            return
        self._playback = new
        self._publish()

    def load_library(self, catalog: Iterable[str]) -> None:
        if self._library_loaded:
            logger.warning("Library already loaded for this session; ignoring reload")
            return
        self._library_loaded = True
        self._search.set_catalog(catalog)
        logger.info("Library loaded: %d tracks", len(self._search.catalog))
        self._publish()

    def set_query(self, query: str) -> None:
        if (query or "") == self._search.state.query:
            return
        self._search.set_query(query)
        self._publish()

    @Slot(str, str)
    def notify(self, message: str, notify_type: str = "info"):
        self.notification.emit(Notify(message=message, notify_type=notify_type))

    def _publish(self) -> None:
        self.view_changed.emit(self.view)
