"""
Logging Configuration
====================

Centralized logging setup using loguru.
Modules keep logging through the standard library; those records are
intercepted and emitted by loguru, as JSON in production and colorized
text everywhere else.
"""

import logging
import sys

from loguru import logger

from geostamp.core.config import Settings

# Attributes every LogRecord has; anything else arrived through ``extra=``
_RECORD_ATTRS = set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}


class InterceptHandler(logging.Handler):
    """
    Redirect standard logging to Loguru.
    """
    def emit(self, record):
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        extra = {k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRS}

        logger.bind(**extra).opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(settings: Settings) -> None:
    """
    Configure logging based on environment.
    """
    logging.root.handlers = []
    logger.remove()

    level = "DEBUG" if settings.DEBUG else "INFO"

    if settings.APP_ENV == "production":
        # JSON logs for log aggregators
        logger.add(
            sys.stderr,
            format="{message}",
            serialize=True,
            level=level,
            backtrace=False,
            diagnose=False,
        )
    else:
        logger.add(
            sys.stderr,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
            level=level,
            colorize=True,
        )

    # Intercept standard library logs (ours, uvicorn, fastapi)
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for _log in ["uvicorn", "uvicorn.error", "uvicorn.access", "fastapi"]:
        _logger = logging.getLogger(_log)
        _logger.handlers = [InterceptHandler()]
        _logger.propagate = False
