"""
Logging Configuration and Utilities

Structured logging on top of the standard library: structlog processors
for context enrichment and redaction, JSON output via python-json-logger,
and a context-carrying logger adapter used by services and repositories.
"""

import inspect
import logging
import logging.handlers
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from functools import wraps
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
from pythonjsonlogger import jsonlogger

from travel_booking.config.settings import settings

# Context variables for request tracking
request_id: ContextVar[Optional[str]] = ContextVar('request_id', default=None)
user_id: ContextVar[Optional[str]] = ContextVar('user_id', default=None)

SENSITIVE_KEYS = (
    'password', 'token', 'secret', 'credentials', 'authorization', 'cookie', 'session',
)


class RequestContextProcessor:
    """Add request context to log records"""

    def __call__(self, logger, method_name, event_dict):
        req_id = request_id.get()
        if req_id:
            event_dict['request_id'] = req_id

        uid = user_id.get()
        if uid:
            event_dict['user_id'] = uid

        event_dict['service'] = 'travel-booking'
        event_dict['environment'] = settings.ENVIRONMENT

        return event_dict


class SecurityLogProcessor:
    """Mask sensitive values before they are rendered"""

    def __call__(self, logger, method_name, event_dict):
        self._sanitize_event_dict(event_dict)
        return event_dict

    def _sanitize_event_dict(self, event_dict: Dict[str, Any]):
        for key in list(event_dict.keys()):
            if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
                event_dict[key] = '[REDACTED]'
            elif isinstance(event_dict[key], dict):
                self._sanitize_event_dict(event_dict[key])


class PerformanceLogProcessor:
    """Categorize operations that report a duration"""

    def __call__(self, logger, method_name, event_dict):
        duration = event_dict.get('duration_seconds')
        if isinstance(duration, (int, float)):
            if duration > 5.0:
                event_dict['performance_category'] = 'slow'
            elif duration > 1.0:
                event_dict['performance_category'] = 'moderate'
            else:
                event_dict['performance_category'] = 'fast'

        return event_dict


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter for structured logging"""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['module'] = record.module
        log_record['function'] = record.funcName
        log_record['line'] = record.lineno

        if record.exc_info:
            log_record['exception'] = self.formatException(record.exc_info)


class LoggingConfig:
    """Centralized logging configuration"""

    @staticmethod
    def _shared_processors():
        return [
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.ExtraAdder(),
            RequestContextProcessor(),
            SecurityLogProcessor(),
            PerformanceLogProcessor(),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
        ]

    @staticmethod
    def _renderer():
        if settings.LOG_FORMAT == "json":
            return structlog.processors.JSONRenderer()
        return structlog.processors.KeyValueRenderer(key_order=['timestamp', 'level', 'event'])

    @staticmethod
    def configure_structured_logging():
        """Route structlog loggers through the standard library handlers"""
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            logger_factory=structlog.stdlib.LoggerFactory(),
            context_class=dict,
            cache_logger_on_first_use=True,
        )

    @staticmethod
    def build_formatter() -> logging.Formatter:
        """Pick the record formatter for the configured output style"""
        if settings.ENABLE_STRUCTURED_LOGGING:
            return structlog.stdlib.ProcessorFormatter(
                processor=LoggingConfig._renderer(),
                foreign_pre_chain=LoggingConfig._shared_processors(),
            )
        if settings.LOG_FORMAT == "json":
            return CustomJsonFormatter('%(asctime)s %(name)s %(levelname)s %(message)s')
        return logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    @staticmethod
    def configure_standard_logging():
        """Configure standard Python logging"""
        level = getattr(logging, settings.LOG_LEVEL, logging.INFO)

        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        root_logger.handlers.clear()

        formatter = LoggingConfig.build_formatter()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

        if settings.LOG_FILE:
            log_path = Path(settings.LOG_FILE)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.TimedRotatingFileHandler(
                log_path,
                when='midnight',
                interval=1,
                backupCount=settings.LOG_RETENTION
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

        LoggingConfig._configure_library_loggers()

    @staticmethod
    def _configure_library_loggers():
        """Configure logging for external libraries"""
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

        if settings.LOG_SQL_QUERIES:
            logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
        else:
            logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

        logging.getLogger("httpx").setLevel(logging.WARNING)


class LoggerAdapter:
    """Enhanced logger adapter with context management"""

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self._context = {}

    def add_context(self, **kwargs):
        """Add context to all log messages"""
        self._context.update(kwargs)
        return self

    def _log(self, level: int, message: str, *args, **kwargs):
        """Internal log method with context"""
        extra = dict(kwargs.get('extra') or {})
        extra.update(self._context)

        req_id = request_id.get()
        if req_id and 'request_id' not in extra:
            extra['request_id'] = req_id
        uid = user_id.get()
        if uid and 'user_id' not in extra:
            extra['user_id'] = uid

        kwargs['extra'] = extra
        self.logger.log(level, message, *args, **kwargs)

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
    """
    Get configured logger instance.

    Args:
        name: Logger name (defaults to caller's module)

    Returns:
        Enhanced logger adapter
    """
    if name is None:
        frame = inspect.currentframe()
        caller_frame = frame.f_back
        name = caller_frame.f_globals.get('__name__', 'travel_booking')

    return LoggerAdapter(logging.getLogger(name))


def track_performance(operation_name: str, logger_name: Optional[str] = None):
    """
    Decorator to log operation duration and outcome.

    Works for sync and async callables; results exposing ``is_success``
    report it in the log context.
    """
    def decorator(func):
        logger = get_logger(logger_name or func.__module__)

        def _log_success(start_time: datetime, result: Any) -> None:
            duration = (datetime.now(timezone.utc) - start_time).total_seconds()
            logger.info(
                f"Operation '{operation_name}' completed in {duration:.3f}s",
                extra={
                    "operation": operation_name,
                    "duration_seconds": duration,
                    "success": getattr(result, 'is_success', True),
                }
            )

        def _log_failure(start_time: datetime, exc: Exception) -> None:
            duration = (datetime.now(timezone.utc) - start_time).total_seconds()
            logger.error(
                f"Operation '{operation_name}' failed after {duration:.3f}s: {exc}",
                extra={
                    "operation": operation_name,
                    "duration_seconds": duration,
                    "error_type": type(exc).__name__,
                },
                exc_info=True
            )

        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            start_time = datetime.now(timezone.utc)
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                _log_failure(start_time, e)
                raise
            _log_success(start_time, result)
            return result

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            start_time = datetime.now(timezone.utc)
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                _log_failure(start_time, e)
                raise
            _log_success(start_time, result)
            return result

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


def setup_logging():
    """Initialize logging configuration"""
    if settings.ENABLE_STRUCTURED_LOGGING:
        LoggingConfig.configure_structured_logging()

    LoggingConfig.configure_standard_logging()

    logger = get_logger(__name__)
    logger.info("Logging system initialized", extra={
        'log_level': settings.LOG_LEVEL,
        'log_format': settings.LOG_FORMAT,
        'structured_logging': settings.ENABLE_STRUCTURED_LOGGING
    })


__all__ = [
    'get_logger',
    'setup_logging',
    'track_performance',
    'LoggerAdapter',
    'LoggingConfig',
    'request_id',
    'user_id'
]
