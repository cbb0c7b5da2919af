"""Process-wide logging setup shared by the API and the scripts."""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# OTLP exporters log every failed export attempt at WARNING.
_QUIET_LOGGERS = ("opentelemetry.exporter.otlp", "opentelemetry.sdk")

_handler: logging.Handler | None = None


def setup_logging(level: str = "INFO") -> None:
    """Send logs to stdout at ``level``; safe to call more than once."""
    global _handler
    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())
    if _handler is not None:
        return
    _handler = logging.StreamHandler(sys.stdout)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(_handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.ERROR)


__all__ = ["setup_logging"]
