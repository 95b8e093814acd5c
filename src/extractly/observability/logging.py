"""
Configures structured logging for the application using structlog.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any, Dict, List, TextIO

import structlog

if TYPE_CHECKING:
    from extractly.config.config import MonitoringConfig


def add_request_id(logger: logging.Logger, method_name: str, event_dict: Dict[Any, Any]) -> Dict[Any, Any]:
    """
    Adds the request_id bound by the HTTP middleware to every record
    emitted while that request is being served.
    """
    from structlog.contextvars import get_contextvars

    ctx = get_contextvars()
    if "request_id" in ctx:
        event_dict["request_id"] = ctx["request_id"]
    return event_dict


def configure_logging(config: MonitoringConfig, stream: TextIO | None = None) -> None:
    """
    Sets up structlog to handle all logging for the application.

    Console output goes to ``stream`` (stdout by default).
    """
    stream = stream or sys.stdout
    shared_processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        add_request_id,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    log_renderer: Any
    if config.log_file:
        log_renderer = structlog.processors.JSONRenderer()
        handler: logging.Handler = logging.FileHandler(config.log_file)
    elif config.json_logs:
        log_renderer = structlog.processors.JSONRenderer()
        handler = logging.StreamHandler(stream)
    else:
        log_renderer = structlog.dev.ConsoleRenderer(colors=stream.isatty())
        handler = logging.StreamHandler(stream)

    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=log_renderer,
            foreign_pre_chain=shared_processors,
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(config.log_level.upper())

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("extractly.logging")
    logger.info("Logging configured", level=config.log_level, output=config.log_file or "console")
