"""Package logger.

Modules that only need to emit records should use ``logging.getLogger(__name__)``;
entry points (CLI, Streamlit page) import ``logger`` from here so the handler
is installed once.
"""
from __future__ import annotations

import logging
import uuid

from headcount.config import settings

_LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
_SESSION_ID = uuid.uuid4().hex[:8]


def _build_logger() -> logging.Logger:
    log = logging.getLogger("headcount")
    if not log.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt="%H:%M:%S"))
        log.addHandler(handler)
    log.setLevel(settings.LOG_LEVEL.upper())
    return log


def get_session_id() -> str:
    """Short id of this process, used to correlate log lines."""
    return _SESSION_ID


logger = _build_logger()
