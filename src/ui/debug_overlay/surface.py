import logging
from typing import Callable, Protocol

from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import QLabel

logger = logging.getLogger(__name__)


class DisplaySurface(Protocol):
    """Text area plus a delayed-callback queue running on the GUI thread."""

    def set_text(self, text: str) -> None:
        ...

    def post_delayed(self, callback: Callable[[], None], delay_ms: int) -> None:
        """Run callback once after delay_ms on the same event loop."""
        ...

    def remove_callbacks(self, callback: Callable[[], None]) -> None:
        """Cancel every pending callback equal to the given one."""
        ...


class LabelSurface:
    """
    DisplaySurface over a QLabel.

    Each posted callback gets its own single-shot QTimer parented to the label,
    so pending callbacks die with the widget. Callbacks are matched by equality,
    which makes two bound methods of the same object interchangeable.
    """

    def __init__(self, label: QLabel):
        self.label = label
        self.label.setTextFormat(Qt.TextFormat.PlainText)
        self._pending: list[tuple[QTimer, Callable[[], None]]] = []

    def set_text(self, text: str) -> None:
        self.label.setText(text)

    def post_delayed(self, callback: Callable[[], None], delay_ms: int) -> None:
        timer = QTimer(self.label)
        timer.setSingleShot(True)
        timer.timeout.connect(lambda: self._on_timeout(timer))
        self._pending.append((timer, callback))
        timer.start(delay_ms)

    def remove_callbacks(self, callback: Callable[[], None]) -> None:
        for entry in list(self._pending):
            timer, pending_callback = entry
            if pending_callback == callback:
                timer.stop()
                self._pending.remove(entry)
                timer.deleteLater()
                logger.debug(f"LabelSurface: canceled pending callback (label_id={id(self.label)})")

    def pending_count(self) -> int:
        return len(self._pending)

    def _on_timeout(self, timer: QTimer) -> None:
        """Consume the timer's entry, then run its callback. Errors propagate."""
        for entry in self._pending:
            if entry[0] is timer:
                self._pending.remove(entry)
                break
        else:
            # Removed after the timeout was queued
            return

        timer.deleteLater()
        entry[1]()
