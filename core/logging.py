"""
Structured logging for the development host.

Each request runs inside request_context(), so every line logged while it
is handled carries the site name and a short request id:

    [2024-05-01 10:00:00] [INFO] [driver] [site:blog] [req:1f2e3d4c] Proxying missing upload ...

The context lives in contextvars, so the threaded server's requests never
see each other's values.

Usage:
    from core.logging import configure_logging, get_logger, request_context

    configure_logging()  # once, at startup

    logger = get_logger(__name__)
    with request_context(site_name='blog'):
        logger.info("Resolving request")
"""
import logging
import sys
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from core.config import Config

_site_name_var: ContextVar[Optional[str]] = ContextVar('site_name', default=None)
_request_id_var: ContextVar[Optional[str]] = ContextVar('request_id', default=None)

_configured = False


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


@contextmanager
def request_context(site_name: Optional[str] = None,
                    request_id: Optional[str] = None) -> Iterator[str]:
    """
    Tag log records with site_name and a request id for the duration of the block.

    Yields the request id in use. Previous values are restored on exit, even
    if the block raises.
    """
    request_id = request_id or new_request_id()
    site_token = _site_name_var.set(site_name)
    request_token = _request_id_var.set(request_id)
    try:
        yield request_id
    finally:
        _request_id_var.reset(request_token)
        _site_name_var.reset(site_token)


class ContextFilter(logging.Filter):
    """Copies the current site_name and request_id onto each record, '-' when unset."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.site_name = _site_name_var.get() or '-'
        record.request_id = _request_id_var.get() or '-'
        return True


class StructuredFormatter(logging.Formatter):
    """
    Format: [timestamp] [LEVEL] [module] [site:X] [req:Y] message

    The site and request tags are left out when the record has none, so
    startup lines stay short.
    """

    def __init__(self, include_timestamp: bool = True):
        super().__init__()
        self.include_timestamp = include_timestamp

    def _tags(self, record: logging.LogRecord) -> list:
        tags = []
        if self.include_timestamp:
            tags.append(self.formatTime(record, '%Y-%m-%d %H:%M:%S'))
        tags.append(record.levelname)
        tags.append(record.name.rsplit('.', 1)[-1] if record.name else 'root')
        for label, attr in (('site', 'site_name'), ('req', 'request_id')):
            value = getattr(record, attr, '-')
            if value and value != '-':
                tags.append(f"{label}:{value}")
        return tags

    def format(self, record: logging.LogRecord) -> str:
        message = ' '.join(f"[{tag}]" for tag in self._tags(record))
        message = f"{message} {record.getMessage()}"

        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            message = f"{message}\n{record.exc_text}"

        return message


def configure_logging(level: Optional[str] = None, include_timestamp: bool = True) -> None:
    """
    Send all logging to stdout through StructuredFormatter.

    Only the first call has an effect.

    Args:
        level: DEBUG, INFO, WARNING or ERROR. Defaults to Config.get_log_level()
        include_timestamp: Whether lines start with a timestamp
    """
    global _configured

    if _configured:
        return

    level_name = (level or Config.get_log_level()).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(StructuredFormatter(include_timestamp=include_timestamp))
    handler.addFilter(ContextFilter())

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    _configured = True
    logging.getLogger(__name__).debug(f"Logging configured: level={level_name}")


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Usage:
        logger = get_logger(__name__)
        logger.exception("Error occurred")  # includes the traceback
    """
    return logging.getLogger(name or 'valetwp')
