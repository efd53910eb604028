# ui/workers/feed_worker.py
from __future__ import annotations

import logging
import time
from typing import Any, Callable

from PySide6.QtCore import QThread, Signal

from core.errors import RadioClientError

logger = logging.getLogger(__name__)

_active: set["FeedWorker"] = set()


class FeedWorker(QThread):
    # tag, result, error; delivered queued onto the receiver's thread
    done = Signal(object, object, object)

    def __init__(self, job: Callable[[], Any], tag: Any, parent=None):
        super().__init__(parent)
        self.job = job
        self.tag = tag

    def run(self):
        try:
            result = self.job()
        except RadioClientError as e:
            self.done.emit(self.tag, None, e)
            return
        except Exception as e:
            logger.exception("Job %s crashed", self.tag)
            self.done.emit(self.tag, None, e)
            return
        self.done.emit(self.tag, result, None)


def start_job(job: Callable[[], Any], on_done: Callable[[Any, Any, Any], None], tag: Any = None) -> FeedWorker:
    """
    Run job() on a worker thread and hand (tag, result, error) to on_done,
    which should be a slot of a QObject living on the GUI thread.
    """
    worker = FeedWorker(job, tag)
    worker.done.connect(on_done)
    _active.add(worker)

    def _release():
        _active.discard(worker)
        worker.deleteLater()

    worker.finished.connect(_release)
    worker.start()
    return worker


def wait_for_workers(timeout_ms: int = 2000, clock: Callable[[], float] = time.monotonic) -> list[FeedWorker]:
    """
    Give in-flight jobs one shared deadline to finish before exit; they are
    not aborted. Returns the workers still running when it ran out.
    """
    deadline = clock() + timeout_ms / 1000
    stuck = []
    for worker in list(_active):
        remaining_ms = int((deadline - clock()) * 1000)
        if remaining_ms <= 0 or not worker.wait(remaining_ms):
            stuck.append(worker)
    for worker in stuck:
        logger.warning("Worker %s still running at exit", worker.tag)
    return stuck
