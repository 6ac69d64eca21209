from __future__ import annotations

import logging
import os
import sys

TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(request_id)s] | %(message)s"


class RequestIdFilter(logging.Filter):
    """Stamp each record with the identifier of the request being served."""

    def filter(self, record: logging.LogRecord) -> bool:
        from ..middleware.request_context import get_request_id

        if not hasattr(record, "request_id"):
            record.request_id = get_request_id("-")
        return True


def configure_logging(default_level: str = "INFO") -> logging.Logger:
    level_name = os.getenv("MANVIEWER_LOG_LEVEL", default_level).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.basicConfig(level=level, handlers=[handler])
    logger = logging.getLogger("manviewer")
    logger.setLevel(level)
    return logger


__all__ = ["LOG_FORMAT", "RequestIdFilter", "TRACE_LEVEL", "configure_logging"]
