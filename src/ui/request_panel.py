# ui/request_panel.py
from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QFrame, QVBoxLayout, QLabel, QLineEdit, QListWidget, QListWidgetItem
)

from core.models import MergedViewState, basename

PATH_ROLE = Qt.ItemDataRole.UserRole


def _fill(widget: QListWidget, paths, placeholder: str | None = None) -> None:
    widget.clear()
    if not paths and placeholder:
        item = QListWidgetItem(placeholder)
        item.setFlags(Qt.ItemFlag.NoItemFlags)
        widget.addItem(item)
        return
    for path in paths:
        item = QListWidgetItem(f"➕ {basename(path)}")
        item.setData(PATH_ROLE, path)
        item.setToolTip(path)
        widget.addItem(item)


class RequestPanel(QFrame):
    """Search box with matching tracks, plus the whole catalog below it."""

    searchChanged = Signal(str)
    requestTrack = Signal(str)      # full track path

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("Panel")
        self._shown_results: tuple[str, ...] | None = None
        self._shown_library: tuple[str, ...] | None = None

        root = QVBoxLayout(self)
        root.setContentsMargins(12, 10, 12, 10)
        root.setSpacing(8)

        title = QLabel("🎶 Request Song")
        title.setObjectName("PanelTitle")
        root.addWidget(title)

        self.search_box = QLineEdit()
        self.search_box.setPlaceholderText("Search song...")
        self.search_box.textChanged.connect(self.searchChanged.emit)
        root.addWidget(self.search_box)

        self.results = QListWidget()
        self.results.setMaximumHeight(180)
        self.results.itemClicked.connect(self._on_item_clicked)
        root.addWidget(self.results)

        self.lbl_library = QLabel("📚 Full Library (0)")
        self.lbl_library.setObjectName("PanelTitle")
        root.addWidget(self.lbl_library)

        self.library = QListWidget()
        self.library.itemClicked.connect(self._on_item_clicked)
        root.addWidget(self.library, 1)

    def clear_search(self) -> None:
        self.search_box.clear()

    def render(self, view: MergedViewState) -> None:
        if self.search_box.text() != view.search.query:
            self.search_box.blockSignals(True)
            self.search_box.setText(view.search.query)
            self.search_box.blockSignals(False)

        results = view.search_results
        if results != self._shown_results:
            self._shown_results = results
            _fill(self.results, results)

        # catalog never changes after load; avoid rebuilding a long list every poll
        if view.library != self._shown_library:
            self._shown_library = view.library
            self.lbl_library.setText(f"📚 Full Library ({len(view.library)})")
            _fill(self.library, view.library, placeholder="No songs loaded")

    def _on_item_clicked(self, item: QListWidgetItem):
        path = item.data(PATH_ROLE)
        if path:
            self.requestTrack.emit(str(path))
