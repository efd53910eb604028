from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QSplitter
)
from PySide6.QtCore import Qt

from core.models import MergedViewState
from ui.now_playing_panel import NowPlayingPanel
from ui.request_panel import RequestPanel
from ui.toast import Toast
from ui.transport_bar import TransportBar
from ui.workers.feed_worker import wait_for_workers


class MainWindow(QMainWindow):
    def __init__(self, app_state, session):
        super().__init__()
        self.setWindowTitle("Live Radio")
        self.resize(900, 640)
        self.app_state = app_state
        self.session = session

        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        self.layout = QVBoxLayout(self.central_widget)

        # --- header: title + live badge, listeners ---
        header = QHBoxLayout()
        title = QLabel("🎧 Live Radio")
        title.setObjectName("AppTitle")
        self.lbl_live = QLabel("⚫ OFFLINE")
        self.lbl_live.setObjectName("LiveOff")
        header.addWidget(title)
        header.addWidget(self.lbl_live)
        header.addStretch(1)
        self.lbl_listeners = QLabel("👥 Listeners: 0")
        header.addWidget(self.lbl_listeners)
        self.layout.addLayout(header)

        # --- panels ---
        splitter = QSplitter(Qt.Orientation.Horizontal)

        self.now_playing = NowPlayingPanel(on_skip=self.session.skip)
        splitter.addWidget(self.now_playing)

        self.requests = RequestPanel()
        self.requests.searchChanged.connect(self.session.set_query)
        self.requests.requestTrack.connect(self._on_request_track)
        splitter.addWidget(self.requests)

        splitter.setStretchFactor(0, 2)
        splitter.setStretchFactor(1, 3)
        self.layout.addWidget(splitter, 1)

        # --- transport: play/pause + volume ---
        self.transport_bar = None
        if self.session.transport is not None:
            self.transport_bar = TransportBar(self.session.transport, self)
            self.layout.addWidget(self.transport_bar)

        # --- state wiring ---
        self.app_state.view_changed.connect(self.render)
        self.app_state.notification.connect(self._on_notify)

        self.render(self.app_state.view)
        self.show_queued_notifications()

        self.setStyleSheet(self.styleSheet() + """
            QFrame#Panel {
                background: #020617;
                border: 1px solid #111827;
                border-radius: 12px;
            }
            QLabel#AppTitle { font-size: 20px; font-weight: 600; }
            QLabel#PanelTitle { font-size: 14px; font-weight: 600; }
            QLabel#NowPlaying { font-size: 13px; color: #e5e7eb; }
            QLabel#Badge {
                background: #0b1222;
                border: 1px solid #38bdf8;
                border-radius: 8px;
                padding: 1px 6px;
                color: #38bdf8;
                font-size: 10px;
            }
            QLabel#LiveOn { color: #ef4444; font-weight: 600; }
            QLabel#LiveOff { color: #9ca3af; }

            QProgressBar#TrackProgress {
                background: #0b1222;
                border: 1px solid #1f2937;
                border-radius: 999px;
                height: 10px;
            }
            QProgressBar#TrackProgress::chunk {
                border-radius: 999px;
                background: qlineargradient(
                    x1:0, y1:0, x2:1, y2:0,
                    stop:0 #38bdf8, stop:1 #22c55e
                );
            }
            """)

    # ------------------ rendering ------------------
    def render(self, view: MergedViewState):
        if view.is_live:
            self.lbl_live.setText("🔴 LIVE")
            self.lbl_live.setObjectName("LiveOn")
        else:
            self.lbl_live.setText("⚫ OFFLINE")
            self.lbl_live.setObjectName("LiveOff")
        # object name drives the stylesheet; re-polish to apply it
        self.lbl_live.style().unpolish(self.lbl_live)
        self.lbl_live.style().polish(self.lbl_live)

        self.lbl_listeners.setText(f"👥 Listeners: {view.listeners.listener_count}")
        self.now_playing.render(view)
        self.requests.render(view)
        if self.transport_bar is not None:
            self.transport_bar.render(view)

    # ------------------ intents ------------------
    def _on_request_track(self, path: str):
        self.session.request_track(path)
        self.requests.clear_search()
        self.statusBar().showMessage(f"Requested {path.split('/')[-1]}", 3000)

    # ------------------ notifications ------------------
    def _on_notify(self, n):
        # n is core.state.Notify
        msg = getattr(n, "message", "") or ""
        if not msg:
            return
        toast = Toast(self, msg, kind=getattr(n, "notify_type", "info"), ms=4000)
        toast.show_bottom_right()

    def show_queued_notifications(self):
        for n in self.app_state.queued_notifications:
            self._on_notify(n)
        self.app_state.queued_notifications.clear()

    def closeEvent(self, event):
        self.session.shutdown()
        wait_for_workers()
        super().closeEvent(event)
