"""Structured logging configuration."""
import json
import logging
import sys
from typing import Any, List

import structlog
from structlog.types import Processor, EventDict

STDERR_LOG_LEVEL = "INFO"
IGNORED_LOGGERS = [
    "mcp.server.session",
    "mcp.server.stdio",
    "aiohttp",
    "asyncio"
]

def level_filter(logger: Any, name: str, event_dict: EventDict) -> EventDict:
    """Drop events below STDERR_LOG_LEVEL and events from ignored loggers."""
    logger_name = getattr(logger, "name", "")
    if any(ignored in logger_name for ignored in IGNORED_LOGGERS):
        raise structlog.DropEvent
    level_no = getattr(logging, str(event_dict.get('level', 'NOTSET')).upper(), logging.NOTSET)
    if level_no < getattr(logging, STDERR_LOG_LEVEL):
        raise structlog.DropEvent
    return event_dict

class CompactJSONRenderer:
    """One JSON object per line; dict events are merged into the top level."""
    def __call__(self, _: Any, __: str, event_dict: EventDict) -> str:
        event = event_dict.pop("event", "")
        fields = dict(event) if isinstance(event, dict) else {"event": event}
        return json.dumps({**event_dict, **fields}, separators=(",", ":"), default=str)

def configure_logging(level: str = "INFO") -> None:
    """Configure structured logging.

    This sets up:
    - TTY stderr: compact JSON, filtered by level & ignored loggers
    - otherwise: stdlib-integrated console output
    """
    global STDERR_LOG_LEVEL
    STDERR_LOG_LEVEL = level

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level)
    )

    stderr_processors: List[Processor] = [
        structlog.stdlib.add_log_level,
        level_filter,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
        structlog.processors.CallsiteParameterAdder([
            structlog.processors.CallsiteParameter.FILENAME,
            structlog.processors.CallsiteParameter.LINENO,
        ]),
        CompactJSONRenderer()
    ]

    stdout_processors: List[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.dev.ConsoleRenderer(colors=False)
    ]

    structlog.configure(
        processors=stderr_processors if sys.stderr.isatty() else stdout_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
