# core/poller.py
from __future__ import annotations

import logging
from typing import Any, Callable

from PySide6.QtCore import QObject, QTimer, Slot

from core.errors import DecodeFailure, NetworkFailure

logger = logging.getLogger(__name__)

STATUS_FEED = "status"
ICECAST_FEED = "icecast"
FEEDS = (STATUS_FEED, ICECAST_FEED)

# run_job(job, on_done, tag): run job() off the GUI thread, then call
# on_done(tag, result, error) back on it
JobRunner = Callable[[Callable[[], Any], Callable[[Any, Any, Any], None], Any], Any]


class PollScheduler(QObject):
    """
    One repeating timer; each tick fetches both feeds together and commits
    them to AppState in a single update once both have answered.

    Ticks are numbered. A feed result is only applied if no later tick has
    already been applied for that feed, so a slow response never rolls the
    view back. Failed or empty feeds leave their slice as it was.
    """

    def __init__(
        self,
        app_state,
        status_client,
        icecast_client,
        run_job: JobRunner,
        interval_ms: int = 5000,
        parent=None,
    ):
        super().__init__(parent)
        self.app_state = app_state
        self.status_client = status_client
        self.icecast_client = icecast_client
        self._run_job = run_job

        self._timer = QTimer(self)
        self._timer.setInterval(int(interval_ms))
        self._timer.timeout.connect(self.tick)

        self._cycle = 0
        self._pending: dict[int, dict[str, tuple[Any, Any]]] = {}
        self._applied: dict[str, int] = {feed: 0 for feed in FEEDS}
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self.tick()     # first paint without waiting a full interval
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()
        self._running = False
        self._pending.clear()

    @Slot()
    def tick(self) -> None:
        if not self._running:
            return
        self._cycle += 1
        cycle = self._cycle
        if self._pending:
            logger.debug("Cycle %d starts with %d cycle(s) still in flight", cycle, len(self._pending))
        self._pending[cycle] = {}

        self._run_job(self.status_client.fetch, self._on_job_done, (cycle, STATUS_FEED))
        self._run_job(self.icecast_client.fetch, self._on_job_done, (cycle, ICECAST_FEED))

    @Slot(object, object, object)
    def _on_job_done(self, tag, result, error) -> None:
        if not self._running:
            logger.debug("Dropping %s result after teardown", tag)
            return

        cycle, feed = tag
        outcomes = self._pending.get(cycle)
        if outcomes is None:
            return
        outcomes[feed] = (result, error)
        if len(outcomes) < len(FEEDS):
            return

        del self._pending[cycle]
        self._commit(cycle, outcomes)

    def _commit(self, cycle: int, outcomes: dict[str, tuple[Any, Any]]) -> None:
        status = self._accept(cycle, STATUS_FEED, *outcomes[STATUS_FEED])
        snapshot = self._accept(cycle, ICECAST_FEED, *outcomes[ICECAST_FEED])

        if status is None and snapshot is None:
            return

        self.app_state.commit_feeds(track_status=status, snapshot=snapshot)

    def _accept(self, cycle: int, feed: str, result, error):
        if error is not None:
            if isinstance(error, (NetworkFailure, DecodeFailure)):
                logger.error("%s feed failed (cycle %d): %s", feed, cycle, error)
            else:
                logger.error("%s feed crashed (cycle %d): %r", feed, cycle, error)
            return None

        if result is None:
            # extraction miss, already logged where it happened
            return None

        if cycle < self._applied[feed]:
            logger.debug("Discarding stale %s result from cycle %d (have %d)", feed, cycle, self._applied[feed])
            return None

        self._applied[feed] = cycle
        return result
