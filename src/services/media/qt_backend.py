"""
Qt-based media backend adapter.

Wraps QMediaPlayer to implement the unified MediaBackend interface and keeps
the playback counters shown on the debug line.
"""

import os
import sys
import logging
from typing import Optional
from PySide6.QtCore import QObject, Signal, QUrl
from PySide6.QtMultimedia import QMediaPlayer, QAudioOutput, QMediaMetaData

from model.telemetry import Format, PlaybackCounters
from services.media.backend import PlaybackState, MediaStatus

logger = logging.getLogger(__name__)


class QtBackendAdapter(QObject):
    """
    Qt QMediaPlayer backend adapter.

    Implements the MediaBackend protocol using Qt's QMediaPlayer.

    Counter mapping:
        load -> cic, unload -> crc, metadata change -> ofc,
        buffering -> obc, position update -> ren, stall -> sob, error -> dob
    """

    # Signals
    position_changed = Signal(int)  # position in ms
    playback_state_changed = Signal(object)  # PlaybackState
    media_status_changed = Signal(object)  # MediaStatus
    error_occurred = Signal(str)  # error message

    _STATUS_MAP = {
        QMediaPlayer.MediaStatus.NoMedia: MediaStatus.NO_MEDIA,
        QMediaPlayer.MediaStatus.LoadingMedia: MediaStatus.LOADING,
        QMediaPlayer.MediaStatus.LoadedMedia: MediaStatus.LOADED,
        QMediaPlayer.MediaStatus.BufferingMedia: MediaStatus.BUFFERING,
        QMediaPlayer.MediaStatus.BufferedMedia: MediaStatus.BUFFERED,
        QMediaPlayer.MediaStatus.StalledMedia: MediaStatus.STALLED,
        QMediaPlayer.MediaStatus.EndOfMedia: MediaStatus.END_OF_MEDIA,
        QMediaPlayer.MediaStatus.InvalidMedia: MediaStatus.INVALID,
    }

    def __init__(self, video_output=None):
        """
        Initialize Qt backend with QMediaPlayer.

        Args:
            video_output: Optional QVideoWidget (or other video sink) to render into
        """
        super().__init__()

        self._audio_output = QAudioOutput()
        self._audio_output.setVolume(0.5)  # Default 50%

        self._player = QMediaPlayer()
        self._player.setAudioOutput(self._audio_output)
        if video_output is not None:
            self._player.setVideoOutput(video_output)

        # State tracking
        self._playback_state = PlaybackState.STOPPED
        self._media_status = MediaStatus.NO_MEDIA
        self._counters = PlaybackCounters()

        # Connect Qt signals to our unified signals
        self._player.playbackStateChanged.connect(self._on_playback_state_changed)
        self._player.mediaStatusChanged.connect(self._on_media_status_changed)
        self._player.positionChanged.connect(self._on_position_changed)
        self._player.metaDataChanged.connect(self._on_metadata_changed)
        self._player.errorOccurred.connect(self._on_error_occurred)

        logger.info(f"QtBackendAdapter initialized with {self.get_backend_name()}")

    # Lifecycle

    def load(self, file_path: str) -> None:
        """Load a local media file."""
        logger.debug(f"QtBackend: loading {file_path}")
        self._counters.reset()
        self._counters.codec_init_count += 1
        self._player.setSource(QUrl.fromLocalFile(os.path.abspath(file_path)))

    def unload(self) -> None:
        """Clear media source."""
        logger.debug("QtBackend: unloading media")
        if self.get_current_file() is not None:
            self._counters.codec_release_count += 1
        self._player.setSource(QUrl())
        self._playback_state = PlaybackState.STOPPED
        self._media_status = MediaStatus.NO_MEDIA

    # Playback control

    def play(self) -> None:
        logger.debug(
            "QtBackend.play() called, status: %s, state: %s", self._media_status.value, self._playback_state.value
        )
        self._player.play()

    def pause(self) -> None:
        logger.debug("QtBackend.pause() called, current state: %s", self._playback_state.value)
        self._player.pause()

    def stop(self) -> None:
        logger.debug("QtBackend: stop()")
        self._player.stop()
        self._playback_state = PlaybackState.STOPPED

    # Position/seeking

    def seek(self, position_ms: int) -> None:
        logger.debug(f"QtBackend: seek to {position_ms}ms")
        self._player.setPosition(position_ms)

    def get_position(self) -> int:
        """Get current position in milliseconds."""
        return self._player.position()

    def get_duration(self) -> int:
        """Get duration in milliseconds."""
        return self._player.duration()

    # State queries

    def is_playing(self) -> bool:
        return self._playback_state == PlaybackState.PLAYING

    def is_loaded(self) -> bool:
        return self._media_status in (MediaStatus.LOADED, MediaStatus.BUFFERED)

    def get_playback_state(self) -> PlaybackState:
        return self._playback_state

    def get_media_status(self) -> MediaStatus:
        return self._media_status

    # Audio settings

    def set_volume(self, volume: int) -> None:
        """Set volume (0-100)."""
        # Qt uses 0.0-1.0 range
        self._audio_output.setVolume(volume / 100.0)

    def get_volume(self) -> int:
        """Get volume (0-100)."""
        return int(round(self._audio_output.volume() * 100))

    # Telemetry

    def get_format(self) -> Optional[Format]:
        """
        Build a Format from the media metadata.

        id is the video codec name, falling back to the audio codec and then the
        container format. Spaces are replaced so the id stays one token.
        """
        meta = self._player.metaData()
        if meta.isEmpty():
            return None

        codec = (
            meta.stringValue(QMediaMetaData.Key.VideoCodec)
            or meta.stringValue(QMediaMetaData.Key.AudioCodec)
            or meta.stringValue(QMediaMetaData.Key.FileFormat)
            or "unknown"
        )
        bitrate = meta.value(QMediaMetaData.Key.VideoBitRate) or meta.value(QMediaMetaData.Key.AudioBitRate) or 0
        resolution = meta.value(QMediaMetaData.Key.Resolution)
        height = resolution.height() if resolution is not None and resolution.isValid() else 0

        return Format(id=codec.strip().replace(" ", "_"), bitrate=int(bitrate), height=int(height))

    def get_playback_counters(self) -> PlaybackCounters:
        return self._counters

    # Backend info

    def get_backend_name(self) -> str:
        """
        Detect which Qt multimedia backend is being used.

        Returns:
            Backend name (e.g., "Qt/WMF", "Qt/AVFoundation", "Qt/GStreamer")
        """
        env_backend = os.environ.get("QT_MEDIA_BACKEND", "")
        if env_backend:
            return f"Qt/{env_backend}"

        if sys.platform == "win32":
            return "Qt/WMF"
        elif sys.platform == "darwin":
            return "Qt/AVFoundation"
        else:
            return "Qt/GStreamer"

    def get_backend_version(self) -> Optional[str]:
        from PySide6 import __version__

        return f"PySide6 {__version__}"

    def get_current_file(self) -> Optional[str]:
        source = self._player.source()
        if source.isEmpty():
            return None
        return source.toLocalFile() if source.isLocalFile() else source.toString()

    # Signal handlers (map Qt signals to unified signals)

    def _on_playback_state_changed(self, qt_state: QMediaPlayer.PlaybackState) -> None:
        if qt_state == QMediaPlayer.PlaybackState.PlayingState:
            self._playback_state = PlaybackState.PLAYING
        elif qt_state == QMediaPlayer.PlaybackState.PausedState:
            self._playback_state = PlaybackState.PAUSED
        else:  # StoppedState
            self._playback_state = PlaybackState.STOPPED

        logger.debug("QtBackend: playback state -> %s", self._playback_state.value)
        self.playback_state_changed.emit(self._playback_state)

    def _on_media_status_changed(self, qt_status: QMediaPlayer.MediaStatus) -> None:
        old_status = self._media_status
        self._media_status = self._STATUS_MAP.get(qt_status, MediaStatus.NO_MEDIA)

        if self._media_status == MediaStatus.BUFFERING:
            self._counters.output_buffers_changed_count += 1
        elif self._media_status == MediaStatus.STALLED:
            self._counters.skipped_output_buffer_count += 1

        logger.info(
            "QtBackend: media status changed %s -> %s (Qt status: %s)",
            old_status.value,
            self._media_status.value,
            qt_status,
        )
        self.media_status_changed.emit(self._media_status)

    def _on_position_changed(self, position: int) -> None:
        self._counters.rendered_output_buffer_count += 1
        self.position_changed.emit(position)

    def _on_metadata_changed(self) -> None:
        self._counters.output_format_changed_count += 1
        logger.debug("QtBackend: metadata changed, format=%s", self.get_format())

    def _on_error_occurred(self, error: QMediaPlayer.Error, error_string: str) -> None:
        error_msg = f"QMediaPlayer error: {error.name if hasattr(error, 'name') else error} - {error_string}"
        logger.error(error_msg)
        self._counters.dropped_output_buffer_count += 1
        self.error_occurred.emit(error_msg)

        # Reset state on error
        self._playback_state = PlaybackState.STOPPED
        self._media_status = MediaStatus.INVALID
