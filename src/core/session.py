# core/session.py
from __future__ import annotations

import logging
from functools import partial

from PySide6.QtCore import QObject, Slot

from core.config import RadioConfig
from core.icecast_status import IcecastStatusClient
from core.liquidsoap_client import CommandClient, LibraryClient, StatusClient
from core.playback import PlaybackResilienceController
from core.poller import JobRunner, PollScheduler

logger = logging.getLogger(__name__)


class RadioSession(QObject):
    """
    Wires the feed clients, poller, playback controller and library load
    around one AppState, and forwards user intents (skip, request, search).
    """

    def __init__(
        self,
        config: RadioConfig,
        app_state,
        transport,
        run_job: JobRunner,
        http=None,
        schedule=None,
        parent=None,
    ):
        super().__init__(parent)
        self.config = config
        self.app_state = app_state
        self._run_job = run_job
        self.transport = transport
        self._started = False

        # one requests.Session per client unless a shared one is injected
        opts = dict(session=http, user_agent=config.user_agent, timeout=config.request_timeout_s)

        self.status_client = StatusClient(config.api_base, **opts)
        self.library_client = LibraryClient(config.api_base, **opts)
        self.commands = CommandClient(config.api_base, **opts)
        self.icecast_client = IcecastStatusClient(config.icecast_status_url, config.mount_heading, **opts)

        self.poller = PollScheduler(
            app_state,
            self.status_client,
            self.icecast_client,
            run_job,
            interval_ms=config.poll_interval_ms,
            parent=self,
        )

        self.playback = None
        if transport is not None:
            self.playback = PlaybackResilienceController(
                app_state,
                transport,
                base_delay_ms=config.reconnect_base_ms,
                delay_cap_ms=config.reconnect_cap_ms,
                max_attempts=config.reconnect_max_attempts,
                schedule=schedule,
                parent=self,
            )

    def start(self) -> None:
        if self._started:
            return
        self._started = True
        logger.info("Session start: api=%s icecast=%s", self.config.api_base, self.config.icecast_status_url)
        self._run_job(self.library_client.fetch, self._on_library_loaded, "library")
        self.poller.start()
        if self.playback is not None:
            self.playback.start()

    def shutdown(self) -> None:
        self.poller.stop()
        if self.playback is not None:
            self.playback.shutdown()
        self._started = False
        logger.info("Session stopped")

    # ------------------ user intents ------------------
    def skip(self) -> None:
        self._run_job(self.commands.skip, self._on_command_done, "skip")

    def request_track(self, path: str) -> None:
        self._run_job(partial(self.commands.request_by_keyword, path), self._on_command_done, ("request", path))

    def set_query(self, text: str) -> None:
        self.app_state.set_query(text)

    # ------------------ results ------------------
    @Slot(object, object, object)
    def _on_library_loaded(self, tag, result, error) -> None:
        if not self._started:
            return
        if error is not None:
            logger.error("Library load failed: %s", error)
            self.app_state.notify(f"Failed to load library: {error}", "warning")
            result = ()
        self.app_state.load_library(result or ())

    @Slot(object, object, object)
    def _on_command_done(self, tag, result, error) -> None:
        if error is not None:
            logger.error("Command %s crashed: %s", tag, error)
