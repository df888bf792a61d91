"""Structured JSON logging configuration."""

import logging
import sys
from typing import IO, Optional

from pythonjsonlogger import jsonlogger


SERVICE_NAME = "puppet_last_run_exporter"


def setup_logger(name: str = "puppet_exporter", level: str = "INFO", stream: Optional[IO] = None) -> logging.Logger:
    """
    Configure structured JSON logging.

    Every record carries a "service" field so the exporter's lines can be
    picked out of a shared journal.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        stream: Output stream, stdout by default

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers to avoid duplicates
    logger.handlers = []

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(jsonlogger.JsonFormatter(
        '%(asctime)s %(name)s %(levelname)s %(message)s',
        rename_fields={"asctime": "time", "levelname": "level"},
        static_fields={"service": SERVICE_NAME},
    ))
    logger.addHandler(handler)

    logger.propagate = False

    return logger
