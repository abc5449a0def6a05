import logging

from common.constants import REFRESH_INTERVAL_MS
from services.telemetry.formatter import format_telemetry
from services.telemetry.provider import TelemetryProvider, take_snapshot
from ui.debug_overlay.surface import DisplaySurface

logger = logging.getLogger(__name__)


class DebugTextViewHelper:
    """
    Periodically renders provider telemetry into a display surface.

    Usage:
      - start() shows the line immediately and refreshes it every
        REFRESH_INTERVAL_MS until stop() is called.
      - At most one refresh is pending on the surface at any time.
      - start() and stop() must be called from the GUI thread.

    Errors from the provider or the surface are not caught. A failing tick
    never reposts itself, so refreshing stops until start() is called again.
    """

    def __init__(self, provider: TelemetryProvider, surface: DisplaySurface):
        self._provider = provider
        self._surface = surface
        self._armed = False

    @property
    def is_running(self) -> bool:
        """Whether a refresh is currently pending on the surface."""
        return self._armed

    def start(self):
        """Start periodic updates. Restarts cleanly if already running."""
        logger.debug(f"DebugTextViewHelper: start (was_running={self._armed})")
        self.stop()
        self.run()

    def stop(self):
        """Stop periodic updates. Safe to call when not running."""
        self._surface.remove_callbacks(self.run)
        if self._armed:
            logger.debug("DebugTextViewHelper: stopped")
        self._armed = False

    def run(self):
        """One refresh tick: sample, format, write, repost."""
        self._armed = False
        self._surface.set_text(format_telemetry(take_snapshot(self._provider)))
        self._surface.post_delayed(self.run, REFRESH_INTERVAL_MS)
        self._armed = True
