import os
import sys
from pathlib import Path

from PySide6.QtCore import QStandardPaths
from PySide6.QtWidgets import QApplication

ROOT = Path(__file__).resolve().parent
SRC_DIR = ROOT / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from core.config import load_config
from core.logging_setup import setup_logging
from core.session import RadioSession
from core.state import AppState, Notify
from player.player import StreamPlayer
from ui.main_window import MainWindow
from ui.workers.feed_worker import start_job


def get_app_data_dir() -> str:
    base = QStandardPaths.writableLocation(QStandardPaths.AppDataLocation)
    os.makedirs(base, exist_ok=True)
    return base


def init_session(config) -> RadioSession:
    app_state = AppState(search_result_limit=config.search_result_limit)

    try:
        transport = StreamPlayer(config.stream_url)
    except Exception as e:
        transport = None
        app_state.queued_notifications.append(
            Notify(message=f"Failed to initialize audio player: {e}", notify_type="error")
        )

    return RadioSession(config, app_state, transport, run_job=start_job)


def main() -> int:
    qt_app = QApplication(sys.argv)
    qt_app.setApplicationName("LiveRadio")

    config = load_config()
    setup_logging(os.path.join(get_app_data_dir(), "logs"), debug=config.debug)

    session = init_session(config)
    main_window = MainWindow(session.app_state, session)
    main_window.show()
    session.start()

    return qt_app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
