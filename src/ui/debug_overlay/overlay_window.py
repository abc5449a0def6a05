import os
import logging
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QFontDatabase, QKeySequence
from PySide6.QtMultimediaWidgets import QVideoWidget
from PySide6.QtWidgets import QFileDialog, QLabel, QMainWindow, QToolBar, QVBoxLayout, QWidget

from common.constants import APP_NAME
from services.media import PlaybackState, create_backend
from services.telemetry.provider import BackendTelemetryProvider
from ui.debug_overlay.surface import LabelSurface
from ui.debug_overlay.text_view_helper import DebugTextViewHelper

logger = logging.getLogger(__name__)


class OverlayWindow(QMainWindow):
    """Video player window with the telemetry debug line above the picture."""

    def __init__(self, config, backend=None):
        super().__init__()
        self.config = config
        self.setWindowTitle(APP_NAME)
        self.resize(config.window_width, config.window_height)

        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self.debug_label = QLabel(central)
        self.debug_label.setObjectName("debugLabel")
        font = QFontDatabase.systemFont(QFontDatabase.SystemFont.FixedFont)
        font.setPointSize(config.overlay_font_point_size)
        self.debug_label.setFont(font)
        self.debug_label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        layout.addWidget(self.debug_label)

        self.video_widget = QVideoWidget(central)
        layout.addWidget(self.video_widget, 1)
        self.setCentralWidget(central)

        self.backend = backend if backend is not None else create_backend(video_output=self.video_widget)
        self.backend.set_volume(config.default_volume)
        self.backend.error_occurred.connect(self._on_media_error)

        self.provider = BackendTelemetryProvider(self.backend)
        self.surface = LabelSurface(self.debug_label)
        self.debug_helper = DebugTextViewHelper(self.provider, self.surface)

        self._create_toolbar()

        if config.overlay_start_on_launch:
            self.debug_helper.start()

    def _create_toolbar(self):
        toolbar = QToolBar("Playback", self)
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        self.open_action = QAction("Open…", self)
        self.open_action.triggered.connect(self._choose_file)
        toolbar.addAction(self.open_action)

        self.play_action = QAction("Play/Pause", self)
        self.play_action.setShortcut(QKeySequence(Qt.Key.Key_Space))
        self.play_action.triggered.connect(self.toggle_playback)
        toolbar.addAction(self.play_action)

        self.debug_action = QAction("Debug line", self)
        self.debug_action.setCheckable(True)
        self.debug_action.setChecked(self.config.overlay_start_on_launch)
        self.debug_action.toggled.connect(self.set_debug_line_enabled)
        toolbar.addAction(self.debug_action)

    def open_media(self, file_path: str, auto_play: Optional[bool] = None):
        """Load a media file and optionally start playing it."""
        logger.info(f"Opening media: {file_path}")
        self.backend.load(file_path)
        self.setWindowTitle(f"{os.path.basename(file_path)} - {APP_NAME}")
        if self.config.auto_play if auto_play is None else auto_play:
            self.backend.play()

    def toggle_playback(self):
        if self.backend.get_playback_state() == PlaybackState.PLAYING:
            self.backend.pause()
        else:
            self.backend.play()

    def set_debug_line_enabled(self, enabled: bool):
        if enabled:
            self.debug_helper.start()
        else:
            self.debug_helper.stop()
            self.debug_label.clear()

    def _choose_file(self):
        file_path, _ = QFileDialog.getOpenFileName(self, "Open media file")
        if file_path:
            self.open_media(file_path)

    def _on_media_error(self, message: str):
        self.statusBar().showMessage(message, 5000)

    def closeEvent(self, event):
        logger.debug("OverlayWindow closing, stopping debug line and playback")
        self.debug_helper.stop()
        self.backend.stop()
        self.backend.unload()
        super().closeEvent(event)
