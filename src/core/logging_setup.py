# core/logging_setup.py
from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "radio.log"


def setup_logging(log_dir: str | None, debug: bool = False) -> logging.Logger:
    """
    File handler (DEBUG) under log_dir plus a console handler (INFO, or DEBUG
    when debug is set). Safe to call more than once.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    for h in list(root.handlers):
        if getattr(h, "_radio_handler", False):
            root.removeHandler(h)
            h.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.DEBUG if debug else logging.INFO)
    console_handler._radio_handler = True
    root.addHandler(console_handler)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(os.path.join(log_dir, LOG_FILE_NAME), encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.DEBUG)
        file_handler._radio_handler = True
        root.addHandler(file_handler)

    # urllib3 is chatty at DEBUG on every poll
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    return root
