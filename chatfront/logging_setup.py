from __future__ import annotations

import logging
import sys
from typing import Optional

import structlog

from . import config


SERVICE_NAME = "chatfront"


def _add_service(logger, method_name, event_dict):
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def configure_logging(level: Optional[str] = None) -> None:
    """Route structlog through stdlib logging as one JSON object per line.

    Safe to call multiple times; the root handler is replaced each time.
    """
    log_level = (level or config.log_level()).upper()

    logging.basicConfig(level=log_level, format="%(message)s", stream=sys.stdout, force=True)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _add_service,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(log_level)),
        cache_logger_on_first_use=False,
    )

    structlog.get_logger(__name__).info("Logging configured", log_level=log_level)
