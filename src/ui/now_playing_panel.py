# ui/now_playing_panel.py
from __future__ import annotations

import math

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QFrame, QVBoxLayout, QHBoxLayout, QLabel, QProgressBar, QListWidget, QPushButton
)

from core.models import MergedViewState, basename

# progress bar works in tenths of a percent
PROGRESS_SCALE = 10


def _fmt_times(elapsed_s: float, remaining_s: float) -> str:
    return f"⏱ {math.floor(elapsed_s)}s elapsed · {math.floor(remaining_s)}s remaining"


class NowPlayingPanel(QFrame):
    def __init__(self, on_skip, parent=None):
        super().__init__(parent)
        self.setObjectName("Panel")

        root = QVBoxLayout(self)
        root.setContentsMargins(12, 10, 12, 10)
        root.setSpacing(8)

        header = QHBoxLayout()
        title = QLabel("▶ Now Playing")
        title.setObjectName("PanelTitle")
        self.lbl_badge = QLabel("RANDOM")
        self.lbl_badge.setObjectName("Badge")
        header.addWidget(title)
        header.addWidget(self.lbl_badge)
        header.addStretch(1)
        root.addLayout(header)

        self.lbl_now = QLabel("—")
        self.lbl_now.setObjectName("NowPlaying")
        self.lbl_now.setWordWrap(True)
        self.lbl_now.setTextInteractionFlags(Qt.TextSelectableByMouse)
        root.addWidget(self.lbl_now)

        self.progress = QProgressBar()
        self.progress.setObjectName("TrackProgress")
        self.progress.setTextVisible(False)
        self.progress.setRange(0, 100 * PROGRESS_SCALE)
        self.progress.setValue(0)
        root.addWidget(self.progress)

        self.lbl_times = QLabel(_fmt_times(0, 0))
        root.addWidget(self.lbl_times)

        queue_title = QLabel("⏭ Queue")
        queue_title.setObjectName("PanelTitle")
        root.addWidget(queue_title)

        self.queue_list = QListWidget()
        self.queue_list.setSelectionMode(QListWidget.NoSelection)
        self.queue_list.setMaximumHeight(140)
        root.addWidget(self.queue_list)

        self.btn_skip = QPushButton("⏩ Skip")
        self.btn_skip.clicked.connect(on_skip)
        root.addWidget(self.btn_skip, 0, Qt.AlignmentFlag.AlignLeft)

    def render(self, view: MergedViewState) -> None:
        self.lbl_badge.setText(view.source_badge)
        self.lbl_now.setText(view.listeners.now_playing or "—")
        self.progress.setValue(int(round(view.progress * PROGRESS_SCALE)))
        self.lbl_times.setText(_fmt_times(view.track.elapsed_s, view.track.remaining_s))

        self.queue_list.clear()
        queue = view.track.queue or ()
        if not queue:
            self.queue_list.addItem("Empty")
        for path in queue:
            self.queue_list.addItem(basename(path))
