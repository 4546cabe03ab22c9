# backend/utils/logger.py

from typing import Any

import structlog

_configured = False


def get_logger(name: str) -> Any:
    """
    Return a structlog logger bound to the module name.
    Output is one JSON object per event.
    """
    global _configured
    if not _configured:
        structlog.configure(
            processors=[
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.add_log_level,
                structlog.processors.JSONRenderer(),
            ],
            cache_logger_on_first_use=True,
        )
        _configured = True
    return structlog.get_logger(name)
