"""
Logging setup for the ledger API.

``setup_logging`` installs a console handler (and optionally a file
handler) on the root logger.  The handlers it owns are tagged by name,
so calling it again, e.g. from a second ``create_app``, replaces them
instead of stacking duplicates.  Handlers installed by someone else,
such as pytest's capture or uvicorn, are left alone.
"""

import logging
from pathlib import Path
from typing import List, Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CONSOLE_HANDLER_NAME = "loan_ledger.console"
FILE_HANDLER_NAME = "loan_ledger.file"
_OWN_HANDLERS = {CONSOLE_HANDLER_NAME, FILE_HANDLER_NAME}


def _own_handlers(root: logging.Logger) -> List[logging.Handler]:
    return [h for h in root.handlers if h.get_name() in _OWN_HANDLERS]


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> logging.Logger:
    """Configure the root logger and return it.

    ``level`` is a level name, case insensitive; unknown names fall
    back to ``INFO``.  ``logfile`` adds a UTF-8 file handler next to
    the console one.
    """
    root = logging.getLogger()
    for handler in _own_handlers(root):
        root.removeHandler(handler)
        handler.close()

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler()
    console.set_name(CONSOLE_HANDLER_NAME)
    console.setFormatter(formatter)
    root.addHandler(console)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.set_name(FILE_HANDLER_NAME)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    return root
