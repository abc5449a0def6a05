"""
Abstract media backend interface.

Defines the protocol that media backends must implement to be sampled by
the debug overlay.
"""

from typing import Protocol, Optional
from enum import Enum
from PySide6.QtCore import Signal

from model.telemetry import Format, PlaybackCounters


class PlaybackState(Enum):
    """Unified playback state across all backends."""
    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"


class MediaStatus(Enum):
    """Unified media status across all backends."""
    NO_MEDIA = "no_media"
    LOADING = "loading"
    LOADED = "loaded"
    BUFFERING = "buffering"
    BUFFERED = "buffered"
    STALLED = "stalled"
    END_OF_MEDIA = "end_of_media"
    INVALID = "invalid"


class MediaBackend(Protocol):
    """
    Protocol defining the interface that all media backends must implement.

    Besides playback control, a backend exposes the telemetry accessors
    read by BackendTelemetryProvider: position, format and counters.
    """

    # Signals (Qt signals for UI compatibility)
    position_changed: Signal  # Signal[int] - position in milliseconds
    playback_state_changed: Signal  # Signal[PlaybackState]
    media_status_changed: Signal  # Signal[MediaStatus]
    error_occurred: Signal  # Signal[str] - error message

    # Lifecycle
    def load(self, file_path: str) -> None:
        """
        Load a media file for playback.

        Args:
            file_path: Absolute path to the media file
        """
        ...

    def unload(self) -> None:
        """Clear the current media source and reset to idle state."""
        ...

    # Playback control
    def play(self) -> None:
        ...

    def pause(self) -> None:
        ...

    def stop(self) -> None:
        """Stop playback and reset position to beginning."""
        ...

    # Position/seeking
    def seek(self, position_ms: int) -> None:
        ...

    def get_position(self) -> int:
        """
        Get current playback position.

        Returns:
            Position in milliseconds
        """
        ...

    def get_duration(self) -> int:
        """
        Get total media duration.

        Returns:
            Duration in milliseconds, or 0 if unknown
        """
        ...

    # State queries
    def is_playing(self) -> bool:
        ...

    def is_loaded(self) -> bool:
        ...

    def get_playback_state(self) -> PlaybackState:
        ...

    def get_media_status(self) -> MediaStatus:
        ...

    # Audio settings
    def set_volume(self, volume: int) -> None:
        """
        Set playback volume.

        Args:
            volume: Volume level (0-100)
        """
        ...

    def get_volume(self) -> int:
        ...

    # Telemetry
    def get_format(self) -> Optional[Format]:
        """
        Get the format of the currently selected track.

        Returns:
            Format, or None until the media metadata is known
        """
        ...

    def get_playback_counters(self) -> PlaybackCounters:
        """Get the live event counters of this backend."""
        ...

    # Backend info
    def get_backend_name(self) -> str:
        """
        Get the name of this backend.

        Returns:
            Backend identifier (e.g., "Qt/WMF", "Qt/AVFoundation", "Qt/GStreamer")
        """
        ...

    def get_backend_version(self) -> Optional[str]:
        ...

    def get_current_file(self) -> Optional[str]:
        ...
