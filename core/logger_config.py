# core/logger_config.py
"""
Logging setup for the document editor.

Call setup_logging() once from an entry point (the API module or the CLI).
Every record carries the current trace id, so a single export or editing
request can be followed through the log file.
"""
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from core.utils.snitch import get_trace_id

LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(trace_id)s | %(name)s:%(lineno)d | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

_configured = False


class TraceIdFilter(logging.Filter):
    """Stamps records with the trace id of the run that emitted them."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = get_trace_id()
        return True


def _file_handler(log_file: Path, max_bytes: int, backup_count: int) -> logging.Handler:
    handler = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count, encoding='utf-8')
    handler.setLevel(logging.DEBUG)
    return handler


def setup_logging(
    log_dir: Path,
    level: int = logging.INFO,
    log_filename: str = "document_editor.log",
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
) -> Path:
    """
    Configure the root logger with a console handler and a rotating file.

    Args:
        log_dir: Directory for the log file (RUN_LOG_DIR)
        level: Console level; the file always records DEBUG
        log_filename: Name of the log file inside log_dir
        max_bytes: Rotation threshold
        backup_count: Rotated files to keep

    Returns:
        Path of the log file. Repeated calls leave the handlers alone.
    """
    global _configured

    log_file = Path(log_dir) / log_filename
    if _configured:
        return log_file

    log_file.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    trace_filter = TraceIdFilter()

    console = logging.StreamHandler()
    console.setLevel(level)
    handlers = [console, _file_handler(log_file, max_bytes, backup_count)]

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(trace_filter)
        root.addHandler(handler)

    _configured = True
    logging.getLogger(__name__).info(f"Logging to {log_file}")
    return log_file
