import contextvars
import functools
import logging
import time
import uuid

# One id per API request or CLI run
_trace_id = contextvars.ContextVar("trace_id", default="-")

logger = logging.getLogger("DOCUMENT_WORKFLOW")


def start_trace(custom_id=None):
    """Starts a new trace for the current context and returns its id."""
    tid = custom_id or f"run-{uuid.uuid4().hex[:8]}"
    _trace_id.set(tid)
    return tid


def get_trace_id():
    return _trace_id.get()


def snitch(func):
    """Logs entry, exit with elapsed time, and failures of the wrapped call."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        name = func.__qualname__
        started = time.perf_counter()
        logger.info(f">> {name}")
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(f"!! {name} failed after {time.perf_counter() - started:.3f}s: {e}")
            raise
        logger.info(f"<< {name} ({time.perf_counter() - started:.3f}s)")
        return result
    return wrapper
