import logging
import logging.handlers
import queue
import atexit
import sys
from typing import Optional

# Global reference to prevent garbage collection
_queue_listener = None
_shutdown_registered = False

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class SafeRotatingFileHandler(logging.handlers.RotatingFileHandler):
    """
    RotatingFileHandler that keeps logging to the current file when rotation
    fails (e.g., file locked by an editor on Windows).
    """

    def doRollover(self):
        try:
            super().doRollover()
        except PermissionError as e:
            print(f"Warning: Could not rotate log file (file in use): {e}", file=sys.stderr)


def setup_async_logging(
    log_level=logging.INFO,
    log_file_path: Optional[str] = None,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
    console: bool = True,
) -> None:
    """
    Set up asynchronous logging so log I/O never blocks the GUI thread.

    Args:
        log_level: The logging level (e.g., logging.INFO)
        log_file_path: Path to the log file, if None no file handler is added
        max_bytes: Maximum size of each log file before rotation
        backup_count: Number of backup files to keep
        console: Also write records to stderr
    """
    global _queue_listener, _shutdown_registered

    # Replace a previous setup instead of stacking listeners
    shutdown_async_logging(close_handlers=False)

    log_queue = queue.Queue(-1)  # No limit on queue size
    queue_handler = logging.handlers.QueueHandler(log_queue)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove any existing handlers to avoid duplicate logs
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    root_logger.addHandler(queue_handler)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    handlers = []

    if log_file_path:
        file_handler = SafeRotatingFileHandler(
            log_file_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    _queue_listener = logging.handlers.QueueListener(log_queue, *handlers, respect_handler_level=True)
    _queue_listener.start()

    # Register atexit hook (one-time) to ensure cleanup on unexpected exit
    if not _shutdown_registered:
        atexit.register(shutdown_async_logging)
        _shutdown_registered = True

    logging.info("Asynchronous logging setup completed")


def shutdown_async_logging(close_handlers: bool = True):
    """Stop the queue listener thread and flush its handlers (idempotent)."""
    global _queue_listener

    if _queue_listener is None:
        return

    # stop() drains the queue and joins the listener thread
    _queue_listener.stop()
    for handler in _queue_listener.handlers:
        handler.flush()
        if close_handlers:
            handler.close()
    _queue_listener = None


def is_async_logging_active() -> bool:
    return _queue_listener is not None
