"""
Logging configuration for kvawait.
Modules log through structlog; this wires structlog to the standard library
logger named ``kvawait``.
"""

import logging
import os

import structlog

LOG_LEVEL_ENV_VAR = "KVAWAIT_LOG_LEVEL"


def setup_logging() -> None:
    """
    Configure structlog and the package logger level.

    The level is read from ``KVAWAIT_LOG_LEVEL`` and defaults to ``WARNING``;
    unknown level names fall back to ``WARNING`` as well.
    """
    level_name = os.getenv(LOG_LEVEL_ENV_VAR, "WARNING").upper()
    logging.getLogger("kvawait").setLevel(getattr(logging, level_name, logging.WARNING))
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(colors=True),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
