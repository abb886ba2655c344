"""
Logging setup for the hostel administration backend.

Standard library logging is configured once per process (plain text or
JSON lines), structlog is layered on top when structured logging is
enabled, and ``get_logger`` hands out adapters that stamp the current
request ID and any bound context onto every record.
"""

import logging
import logging.handlers
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
from pythonjsonlogger import jsonlogger

from hostel_admin.config.settings import settings

# Set per request by RequestIDMiddleware
request_id: ContextVar[Optional[str]] = ContextVar('request_id', default=None)

TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s'
_HANDLER_TAG = '_hostel_admin_handler'


class RequestIdFilter(logging.Filter):
    """Give every record a ``request_id`` so formats can always reference it."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, 'request_id', None):
            record.request_id = request_id.get() or '-'
        return True


def add_request_context(logger, method_name, event_dict):
    """structlog processor adding request ID, service and environment."""
    req_id = request_id.get()
    if req_id:
        event_dict.setdefault('request_id', req_id)
    event_dict['service'] = 'hostel-admin'
    event_dict['environment'] = settings.ENVIRONMENT
    return event_dict


class JsonLineFormatter(jsonlogger.JsonFormatter):
    """One JSON object per record; ``extra`` keys become top-level fields."""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record['timestamp'] = datetime.fromtimestamp(record.created, timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['environment'] = settings.ENVIRONMENT


class LoggingConfig:
    """Process-wide logging configuration driven by ``Settings``."""

    @staticmethod
    def level() -> int:
        level = logging.getLevelName(settings.LOG_LEVEL)
        return level if isinstance(level, int) else logging.INFO

    @staticmethod
    def build_formatter() -> logging.Formatter:
        if settings.LOG_FORMAT == 'json':
            return JsonLineFormatter('%(message)s')
        return logging.Formatter(TEXT_FORMAT)

    @staticmethod
    def configure_handlers() -> None:
        """
        Install console (and optional rotating file) handlers on the root logger.

        Only handlers installed by an earlier call are replaced, so handlers
        added by the server or the test runner survive a reconfiguration.
        """
        level = LoggingConfig.level()
        root_logger = logging.getLogger()
        root_logger.setLevel(level)

        for handler in [h for h in root_logger.handlers if getattr(h, _HANDLER_TAG, False)]:
            root_logger.removeHandler(handler)
            handler.close()

        handlers = [logging.StreamHandler(sys.stdout)]
        if settings.LOG_FILE:
            log_path = Path(settings.LOG_FILE)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(
                logging.handlers.RotatingFileHandler(
                    log_path,
                    maxBytes=10 * 1024 * 1024,  # 10MB
                    backupCount=5,
                    encoding='utf-8',
                )
            )

        formatter = LoggingConfig.build_formatter()
        for handler in handlers:
            handler.setLevel(level)
            handler.setFormatter(formatter)
            handler.addFilter(RequestIdFilter())
            setattr(handler, _HANDLER_TAG, True)
            root_logger.addHandler(handler)

    @staticmethod
    def configure_structlog() -> None:
        renderer = (
            structlog.processors.JSONRenderer()
            if settings.LOG_FORMAT == 'json'
            else structlog.processors.KeyValueRenderer(key_order=['timestamp', 'level', 'event'])
        )
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                add_request_context,
                structlog.processors.TimeStamper(fmt='iso', utc=True),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                renderer,
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            logger_factory=structlog.stdlib.LoggerFactory(),
            context_class=dict,
            cache_logger_on_first_use=True,
        )

    @staticmethod
    def quiet_libraries() -> None:
        logging.getLogger('uvicorn.access').setLevel(logging.WARNING)
        logging.getLogger('httpx').setLevel(logging.WARNING)
        logging.getLogger('sqlalchemy.engine').setLevel(
            logging.INFO if settings.LOG_SQL_QUERIES else logging.WARNING
        )


class LoggerAdapter:
    """
    Logger wrapper merging bound context and the current request ID into
    ``extra`` on every call.

    Context keys must not collide with ``LogRecord`` attributes such as
    ``name``, ``message`` or ``module``.
    """

    def __init__(self, logger: logging.Logger, context: Optional[Dict[str, Any]] = None):
        self.logger = logger
        self.context: Dict[str, Any] = dict(context or {})

    @property
    def name(self) -> str:
        return self.logger.name

    def bind(self, **context: Any) -> 'LoggerAdapter':
        """Return a new adapter that adds ``context`` to every record."""
        return LoggerAdapter(self.logger, {**self.context, **context})

    def _log(self, level: int, message: str, *args, **kwargs):
        if not self.logger.isEnabledFor(level):
            return
        extra = {**self.context, **(kwargs.pop('extra', None) or {})}
        req_id = request_id.get()
        if req_id:
            extra.setdefault('request_id', req_id)
        # Report the caller of debug()/info()/..., not this module
        kwargs.setdefault('stacklevel', 3)
        self.logger.log(level, message, *args, extra=extra, **kwargs)

    def debug(self, message: str, *args, **kwargs):
        self._log(logging.DEBUG, message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        self._log(logging.INFO, message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs):
        self._log(logging.WARNING, message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs):
        self._log(logging.ERROR, message, *args, **kwargs)

    def critical(self, message: str, *args, **kwargs):
        self._log(logging.CRITICAL, message, *args, **kwargs)


def get_logger(name: Optional[str] = None) -> LoggerAdapter:
    """Adapter over ``logging.getLogger(name or "hostel_admin")``."""
    return LoggerAdapter(logging.getLogger(name or 'hostel_admin'))


def setup_logging() -> None:
    """Apply logging settings; safe to call more than once."""
    LoggingConfig.configure_handlers()
    LoggingConfig.quiet_libraries()
    if settings.ENABLE_STRUCTURED_LOGGING:
        LoggingConfig.configure_structlog()

    get_logger(__name__).info(
        'Logging configured',
        extra={
            'log_level': settings.LOG_LEVEL,
            'log_format': settings.LOG_FORMAT,
            'structured_logging': settings.ENABLE_STRUCTURED_LOGGING,
        },
    )


__all__ = [
    'get_logger',
    'setup_logging',
    'LoggerAdapter',
    'LoggingConfig',
    'RequestIdFilter',
    'request_id',
]
