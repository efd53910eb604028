# core/playback.py
from __future__ import annotations

import logging
from typing import Any, Callable

from PySide6.QtCore import QObject, QTimer, Slot

from core.models import PlaybackState

logger = logging.getLogger(__name__)

BASE_DELAY_MS = 3000
DELAY_CAP_MS = 15000
MAX_ATTEMPTS = 5

# schedule(delay_ms, callback) -> handle with stop()
Scheduler = Callable[[int, Callable[[], None]], Any]


def backoff_delay(attempt: int, base_ms: int = BASE_DELAY_MS, cap_ms: int = DELAY_CAP_MS) -> int:
    # linear, capped: 3s, 6s, 9s, 12s, 15s, 15s...
    return min(base_ms * (attempt + 1), cap_ms)


class PlaybackResilienceController(QObject):
    """
    Keeps the stream transport connected.

    Driven by the transport's playing/paused/errored signals. Each error
    schedules one reconnect after backoff_delay(attempt); once
    max_attempts reconnects have been spent the state becomes FAILED and
    stays there for the rest of the session.

    The transport starts muted so autoplay is allowed and is only unmuted
    after real playback has been confirmed.
    """

    def __init__(
        self,
        app_state,
        transport,
        base_delay_ms: int = BASE_DELAY_MS,
        delay_cap_ms: int = DELAY_CAP_MS,
        max_attempts: int = MAX_ATTEMPTS,
        schedule: Scheduler | None = None,
        parent=None,
    ):
        super().__init__(parent)
        self.app_state = app_state
        self.transport = transport
        self.base_delay_ms = base_delay_ms
        self.delay_cap_ms = delay_cap_ms
        self.max_attempts = max_attempts
        self._schedule = schedule or self._qt_single_shot

        self._state = PlaybackState.IDLE
        self._attempt = 0
        self._retry = None
        self._torn_down = False

        transport.playing.connect(self.on_playing)
        transport.paused.connect(self.on_paused)
        transport.errored.connect(self.on_error)

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def attempt(self) -> int:
        return self._attempt

    @property
    def retry_pending(self) -> bool:
        return self._retry is not None

    def start(self) -> None:
        if self._state is not PlaybackState.IDLE or self._torn_down:
            return
        self.transport.set_muted(True)
        self._set_state(PlaybackState.CONNECTING, 0)
        self.transport.load_stream()

    def shutdown(self) -> None:
        self._torn_down = True
        self._cancel_retry()

    @Slot()
    def on_playing(self) -> None:
        if self._torn_down or self._state is PlaybackState.FAILED:
            return
        self._cancel_retry()
        self._set_state(PlaybackState.LIVE, 0)
        self.transport.set_muted(False)

    @Slot()
    def on_paused(self) -> None:
        if self._torn_down or self._state is not PlaybackState.LIVE:
            return
        self._set_state(PlaybackState.PAUSED, self._attempt)

    @Slot(object)
    def on_error(self, error=None) -> None:
        if self._torn_down or self._state is PlaybackState.FAILED:
            return

        if self._retry is not None:
            logger.debug("Transport error while a reconnect is pending: %s", error)
            return

        n = self._attempt
        if n >= self.max_attempts:
            logger.error("Stream failed after %d reconnect attempts: %s", n, error)
            self._set_state(PlaybackState.FAILED, n)
            self.app_state.notify("Stream offline. Restart to try again.", "error")
            return

        delay = backoff_delay(n, self.base_delay_ms, self.delay_cap_ms)
        logger.info("Transport error (%s); reconnect %d/%d in %d ms", error, n + 1, self.max_attempts, delay)
        self._set_state(PlaybackState.RECONNECTING, n + 1)
        self._retry = self._schedule(delay, self._reconnect)

    def _reconnect(self) -> None:
        self._retry = None
        if self._torn_down:
            return
        try:
            self.transport.load_stream()
        except Exception:
            # the next errored signal drives the next attempt
            logger.debug("Reconnect attempt %d raised", self._attempt, exc_info=True)

    def _cancel_retry(self) -> None:
        if self._retry is not None:
            self._retry.stop()
            self._retry = None

    def _set_state(self, state: PlaybackState, attempt: int) -> None:
        if state is not self._state:
            logger.info("Playback state: %s -> %s", self._state.name, state.name)
        self._state = state
        self._attempt = attempt
        self.app_state.commit_playback(state, attempt)

    def _qt_single_shot(self, delay_ms: int, callback: Callable[[], None]) -> QTimer:
        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.timeout.connect(callback)
        timer.timeout.connect(timer.deleteLater)
        timer.start(delay_ms)
        return timer
