"""
Global exception hook for the overlay application.

Exceptions raised inside Qt slots and timer callbacks end up in sys.excepthook.
The hook logs them with their traceback and then hands them to the hook that
was installed before it, so nothing is swallowed.
"""

import sys
import logging
import traceback
import faulthandler
from PySide6.QtCore import QtMsgType, qInstallMessageHandler

logger = logging.getLogger(__name__)


class GlobalExceptionHandler:
    """Logs unhandled exceptions and Qt messages through the logging module."""

    def __init__(self):
        self._previous_excepthook = None
        self._installed = False

    @property
    def installed(self) -> bool:
        return self._installed

    def install(self):
        """Install global exception handlers."""
        if self._installed:
            return
        self._previous_excepthook = sys.excepthook
        sys.excepthook = self._handle_exception
        qInstallMessageHandler(self._qt_message_handler)
        faulthandler.enable(all_threads=True)
        self._installed = True
        logger.info("Global exception handler installed")

    def uninstall(self):
        """Restore the previous exception hook."""
        if not self._installed:
            return
        sys.excepthook = self._previous_excepthook
        qInstallMessageHandler(None)
        faulthandler.disable()
        self._installed = False
        logger.info("Global exception handler uninstalled")

    def _qt_message_handler(self, mode: QtMsgType, context, message: str):
        """Handle messages from Qt's logging system."""
        level = logging.DEBUG
        if mode == QtMsgType.QtInfoMsg:
            level = logging.INFO
        elif mode == QtMsgType.QtWarningMsg:
            level = logging.WARNING
        elif mode in (QtMsgType.QtCriticalMsg, QtMsgType.QtFatalMsg):
            level = logging.CRITICAL

        logger.log(level, f"[QT] {message} (Context: {context.file}:{context.line}, {context.function})")

    def _handle_exception(self, exc_type, exc_value, exc_traceback):
        """
        Log an uncaught exception, then delegate to the previous hook.

        Args:
            exc_type: Exception type
            exc_value: Exception instance
            exc_traceback: Traceback object
        """
        if not issubclass(exc_type, KeyboardInterrupt):
            error_details = "".join(traceback.format_exception(exc_type, exc_value, exc_traceback))
            logger.critical(f"Unhandled exception {exc_type.__name__}: {exc_value}\n{error_details}")

        previous = self._previous_excepthook or sys.__excepthook__
        previous(exc_type, exc_value, exc_traceback)


def install_global_exception_handler() -> GlobalExceptionHandler:
    """
    Install the global exception handler.

    Returns:
        GlobalExceptionHandler instance
    """
    handler = GlobalExceptionHandler()
    handler.install()
    return handler
