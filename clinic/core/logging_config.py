"""
Structured logging for the clinic API.

Every module logs through the stdlib with an optional ``context`` dict:

    logger = get_logger(__name__)
    logger.info("Doctor added", extra={"context": {"doctor_id": 1}})

``setup_logging`` installs one console handler (JSON in production, coloured
text otherwise), optional rotating JSON files, per-request logging hooks on
the Flask app and, when asked, SQL statement timing.
"""

import json
import logging
import logging.handlers
import sys
import time
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from flask import Flask, g, request
from sqlalchemy import event
from sqlalchemy.engine import Engine

LOG_FILE_NAME = "clinic.log"
ERROR_LOG_FILE_NAME = "clinic_errors.log"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

SQL_TIMING_LOGGER = "sqlalchemy.performance"
_QUIET_LOGGERS = ("werkzeug", "urllib3")


class JSONFormatter(logging.Formatter):
    """One JSON object per line: level, logger, source location and context."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        context = getattr(record, "context", None)
        if context is not None:
            payload["context"] = context
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """Coloured level names with the context dict appended, for local runs."""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Colour a copy; the JSON file handlers format the same record
        coloured = logging.makeLogRecord(record.__dict__)
        color = self.LEVEL_COLORS.get(coloured.levelname, self.RESET)
        coloured.levelname = f"{color}{coloured.levelname:8}{self.RESET}"
        line = super().format(coloured)
        context = getattr(record, "context", None)
        if context:
            line = f"{line} | {json.dumps(context, default=str)}"
        return line


def _resolve_level(log_level: Union[int, str]) -> int:
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def _console_handler(level: int, use_json_format: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    if use_json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            ConsoleFormatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    return handler


def _file_handlers(level: int, log_dir: Path) -> List[logging.Handler]:
    """Rotating JSON files: everything at ``level`` plus an errors-only file."""
    log_dir.mkdir(parents=True, exist_ok=True)
    handlers = []
    for file_name, handler_level in (
        (LOG_FILE_NAME, level),
        (ERROR_LOG_FILE_NAME, logging.ERROR),
    ):
        handler = logging.handlers.RotatingFileHandler(
            log_dir / file_name,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8",
        )
        handler.setLevel(handler_level)
        handler.setFormatter(JSONFormatter())
        handlers.append(handler)
    return handlers


_sql_timing_registered = False


def _register_sql_timing() -> None:
    """Log every statement's duration at DEBUG; listeners are global, attach once."""
    global _sql_timing_registered
    if _sql_timing_registered:
        return

    timing_logger = logging.getLogger(SQL_TIMING_LOGGER)

    @event.listens_for(Engine, "before_cursor_execute")
    def _start_timer(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault("clinic_query_started", []).append(time.perf_counter())

    @event.listens_for(Engine, "after_cursor_execute")
    def _stop_timer(conn, cursor, statement, parameters, context, executemany):
        started = conn.info.get("clinic_query_started")
        if not started:
            return
        elapsed_ms = round((time.perf_counter() - started.pop()) * 1000, 2)
        timing_logger.debug(
            f"SQL took {elapsed_ms}ms",
            extra={
                "context": {
                    "sql_query": statement[:500],
                    "sql_duration_ms": elapsed_ms,
                }
            },
        )

    _sql_timing_registered = True


def _register_request_hooks(app: Flask) -> None:
    """Log each request on arrival and its status and duration on completion."""
    request_logger = logging.getLogger("clinic.http")

    @app.before_request
    def _log_request_started():
        g.request_started = time.perf_counter()
        g.request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request_logger.info(
            f"{request.method} {request.path}",
            extra={
                "context": {
                    "request_id": g.request_id,
                    "method": request.method,
                    "path": request.path,
                    "remote_addr": request.remote_addr,
                }
            },
        )

    @app.after_request
    def _log_request_finished(response):
        started = g.get("request_started")
        if started is not None:
            duration_ms = round((time.perf_counter() - started) * 1000, 2)
            request_logger.info(
                f"{request.method} {request.path} -> {response.status_code}",
                extra={
                    "context": {
                        "request_id": g.get("request_id"),
                        "status_code": response.status_code,
                        "duration_ms": duration_ms,
                    }
                },
            )
            response.headers.setdefault("X-Request-ID", g.get("request_id"))
        return response


def setup_logging(
    app: Optional[Flask] = None,
    log_level: Union[int, str] = "INFO",
    enable_sql_echo: bool = False,
    log_to_file: bool = False,
    use_json_format: bool = False,
    log_dir: Optional[Path] = None,
) -> None:
    """
    Configure the root logger for the clinic application.

    Safe to call more than once: existing root handlers are closed and
    replaced.

    Args:
        app: Flask application to attach request/response logging to
        log_level: Level name ("INFO") or number (logging.INFO)
        enable_sql_echo: Log SQLAlchemy statement timings at DEBUG
        log_to_file: Also write rotating JSON files under log_dir
        use_json_format: JSON console output instead of coloured text
        log_dir: Directory for log files (defaults to ./logs)
    """
    level = _resolve_level(log_level)

    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        handler.close()
        root.removeHandler(handler)

    root.addHandler(_console_handler(level, use_json_format))

    if log_to_file:
        target_dir = Path(log_dir) if log_dir else Path.cwd() / "logs"
        try:
            for handler in _file_handlers(level, target_dir):
                root.addHandler(handler)
        except OSError as e:
            root.warning(
                f"Cannot write log files to {target_dir}: {e}. Logging to console only.",
                extra={"context": {"component": "logging_setup"}},
            )

    if enable_sql_echo:
        _register_sql_timing()
        logging.getLogger(SQL_TIMING_LOGGER).setLevel(logging.DEBUG)

    if app is not None:
        _register_request_hooks(app)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("clinic").info(
        "Logging configured",
        extra={
            "context": {
                "level": logging.getLevelName(level),
                "sql_timing": enable_sql_echo,
                "log_to_file": log_to_file,
                "json_format": use_json_format,
            }
        },
    )


def get_logger(name: str) -> logging.Logger:
    """Return the stdlib logger for ``name``."""
    return logging.getLogger(name)
