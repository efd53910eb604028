from PySide6.QtWidgets import QFrame, QLabel, QHBoxLayout
from PySide6.QtCore import Qt, QTimer

_BACKGROUNDS = {
    "info": "#0b1222",
    "success": "#1f6f3b",
    "warning": "#7a5b12",
    "error": "#7a1b1b",
}


class Toast(QFrame):
    def __init__(self, parent, text: str, kind: str = "info", ms: int = 5000):
        super().__init__(parent)
        self.setWindowFlags(Qt.ToolTip)  # floats above
        self.setAttribute(Qt.WA_TransparentForMouseEvents, False)
        self.setAttribute(Qt.WA_DeleteOnClose)

        self.label = QLabel(text)
        self.label.setWordWrap(True)
        layout = QHBoxLayout(self)
        layout.addWidget(self.label)

        kind = "warning" if kind == "warn" else (kind or "info")
        bg = _BACKGROUNDS.get(kind, _BACKGROUNDS["info"])
        self.setStyleSheet(f"QFrame {{ border-radius: 10px; padding: 10px 12px; background: {bg}; color: #fff; }}")

        QTimer.singleShot(ms, self.close)

    def show_bottom_right(self, margin=16):
        p = self.parentWidget()
        if not p:
            self.show()
            return
        self.adjustSize()
        geo = p.frameGeometry()
        x = geo.x() + geo.width() - self.width() - margin
        y = geo.y() + geo.height() - self.height() - margin
        self.move(x, y)
        self.show()
