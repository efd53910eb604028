# src/player/player.py
from __future__ import annotations

import logging

from PySide6.QtCore import QObject, Signal, QUrl
from PySide6.QtMultimedia import QMediaPlayer, QAudioOutput

from core.errors import TransportError
from core.net import cache_busted_url

logger = logging.getLogger(__name__)


class StreamPlayer(QObject):
    """
    QMediaPlayer wrapper for a live stream.

    Emits playing once audio actually flows (not merely when play() is
    called), paused on pause, and errored(TransportError) on any media
    error or when the live stream ends.
    """

    playing = Signal()
    paused = Signal()
    errored = Signal(object)            # TransportError

    def __init__(self, stream_url: str, volume: float = 0.7, media=None, audio=None):
        super().__init__()
        self.stream_url = stream_url
        self.current_source: str | None = None

        self.audio = audio if audio is not None else QAudioOutput()
        self.media = media if media is not None else QMediaPlayer()
        self.media.setAudioOutput(self.audio)

        # Default volume (0.0 - 1.0)
        self._volume_0_to_1: float = volume
        self.audio.setVolume(self._volume_0_to_1)

        self._announced = False

        self.media.playbackStateChanged.connect(self._on_qt_state_changed)
        self.media.mediaStatusChanged.connect(self._on_qt_media_status)
        self.media.errorOccurred.connect(self._on_qt_error)

    # ----------------------------
    # Qt backend handlers
    # ----------------------------

    def _on_qt_state_changed(self, state: QMediaPlayer.PlaybackState) -> None:
        if state == QMediaPlayer.PlaybackState.PausedState:
            self._announced = False
            self.paused.emit()
        elif state == QMediaPlayer.PlaybackState.StoppedState:
            self._announced = False
        self._maybe_announce_playing()

    def _on_qt_media_status(self, status: QMediaPlayer.MediaStatus) -> None:
        if status == QMediaPlayer.MediaStatus.EndOfMedia:
            # a live stream has no end; treat it as a dropped connection
            self._announced = False
            self.errored.emit(TransportError("stream ended"))
            return
        if status == QMediaPlayer.MediaStatus.InvalidMedia:
            self._announced = False
            return      # errorOccurred reports this one
        self._maybe_announce_playing()

    def _on_qt_error(self, error: QMediaPlayer.Error, error_string: str) -> None:
        if error == QMediaPlayer.Error.NoError:
            return
        self._announced = False
        logger.warning("Media error %s: %s", error, error_string)
        self.errored.emit(TransportError(error_string or str(error)))

    def _maybe_announce_playing(self) -> None:
        if self._announced:
            return
        if self.media.playbackState() != QMediaPlayer.PlaybackState.PlayingState:
            return
        if self.media.mediaStatus() not in (
            QMediaPlayer.MediaStatus.BufferingMedia,
            QMediaPlayer.MediaStatus.BufferedMedia,
        ):
            return
        self._announced = True
        self.playing.emit()

    # ----------------------------
    # Public API
    # ----------------------------

    def load_stream(self) -> None:
        """(Re)connect with a fresh cache-busting source and start playing."""
        self._announced = False
        self.current_source = cache_busted_url(self.stream_url)
        logger.debug("Loading stream %s", self.current_source)
        self.media.stop()
        self.media.setSource(QUrl(self.current_source))
        self.media.play()

    def play(self) -> None:
        self.media.play()

    def pause(self) -> None:
        self.media.pause()

    def toggle_play_pause(self) -> None:
        if self.media.playbackState() == QMediaPlayer.PlaybackState.PlayingState:
            self.pause()
        else:
            self.play()

    def set_muted(self, muted: bool) -> None:
        self.audio.setMuted(bool(muted))

    def set_volume(self, volume_0_to_1: float) -> None:
        v = min(1.0, max(0.0, float(volume_0_to_1)))
        self._volume_0_to_1 = v
        self.audio.setVolume(v)

    def volume(self) -> float:
        return self._volume_0_to_1
