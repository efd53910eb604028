# ui/transport_bar.py
from __future__ import annotations

from PySide6.QtCore import Qt, QSize, QByteArray
from PySide6.QtGui import QIcon, QPixmap, QPainter
from PySide6.QtSvg import QSvgRenderer
from PySide6.QtWidgets import QWidget, QHBoxLayout, QLabel, QToolButton, QSlider

from core.models import MergedViewState, PlaybackState


def _svg_icon(path_d: str, size: int = 20, color: str = "#e5e7eb") -> QIcon:
    svg = f"""
    <svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" viewBox="0 0 24 24">
      <path d="{path_d}" fill="{color}"/>
    </svg>
    """.strip()

    renderer = QSvgRenderer(QByteArray(svg.encode("utf-8")))
    pm = QPixmap(size, size)
    pm.fill(Qt.transparent)

    p = QPainter(pm)
    renderer.render(p)
    p.end()

    return QIcon(pm)


SVG_PLAY = "M8 5v14l11-7L8 5z"
SVG_PAUSE = "M6 5h4v14H6V5zm8 0h4v14h-4V5z"

_STATE_TEXT = {
    PlaybackState.IDLE: "Idle",
    PlaybackState.CONNECTING: "Connecting…",
    PlaybackState.LIVE: "Live",
    PlaybackState.PAUSED: "Paused",
    PlaybackState.RECONNECTING: "Reconnecting",
    PlaybackState.FAILED: "Offline",
}


def state_text(view: MergedViewState) -> str:
    state = view.playback.state
    if state is PlaybackState.RECONNECTING:
        return f"Reconnecting ({view.playback.attempt})…"
    return _STATE_TEXT[state]


class TransportBar(QWidget):
    """Play/pause and volume for the stream player."""

    def __init__(self, player, parent=None):
        super().__init__(parent)
        self.player = player
        self._is_playing = False

        root = QHBoxLayout(self)
        root.setContentsMargins(8, 6, 8, 6)
        root.setSpacing(10)

        self._icons = {
            "play": _svg_icon(SVG_PLAY, 22),
            "pause": _svg_icon(SVG_PAUSE, 22),
        }

        self.btn_play = QToolButton()
        self.btn_play.setObjectName("BtnPlay")
        self.btn_play.setIcon(self._icons["play"])
        self.btn_play.setIconSize(QSize(22, 22))
        self.btn_play.setToolTip("Play")
        self.btn_play.clicked.connect(self.player.toggle_play_pause)

        self.lbl_state = QLabel("Idle")
        self.lbl_state.setObjectName("StreamState")

        self.volume = QSlider(Qt.Orientation.Horizontal)
        self.volume.setObjectName("Volume")
        self.volume.setRange(0, 100)
        self.volume.setValue(int(round(self.player.volume() * 100)))
        self.volume.setMaximumWidth(140)
        self.volume.setToolTip("Volume")
        self.volume.valueChanged.connect(self._on_volume)

        root.addWidget(self.btn_play)
        root.addWidget(self.lbl_state, 1)
        root.addWidget(QLabel("🔊"))
        root.addWidget(self.volume)

        self.setObjectName("TransportBar")
        self.setStyleSheet("""
        QWidget#TransportBar {
            background-color: #020617;
            border-top: 1px solid #111827;
        }
        QToolButton#BtnPlay {
            background: #111827;
            border: 1px solid #1f2937;
            border-radius: 999px;
            padding: 8px;
        }
        QToolButton#BtnPlay:hover { border-color: #38bdf8; }
        QSlider::groove:horizontal {
            height: 4px;
            background: #0f172a;
            border-radius: 2px;
        }
        QSlider::handle:horizontal {
            width: 12px;
            height: 12px;
            margin: -4px 0;
            border-radius: 6px;
            background: #38bdf8;
        }
        QSlider::sub-page:horizontal {
            background: #38bdf8;
            border-radius: 2px;
        }
        QLabel#StreamState { color: #9ca3af; font-size: 11px; }
        """)

    def render(self, view: MergedViewState) -> None:
        self._set_playing(view.playback.state is PlaybackState.LIVE)
        self.lbl_state.setText(state_text(view))

    def _set_playing(self, playing: bool):
        if playing == self._is_playing:
            return
        self._is_playing = playing
        self.btn_play.setIcon(self._icons["pause" if playing else "play"])
        self.btn_play.setToolTip("Pause" if playing else "Play")

    def _on_volume(self, value: int):
        self.player.set_volume(value / 100)
