"""
Media playback backend abstraction layer.

Provides a unified interface over the platform media player, including the
telemetry accessors sampled by the debug overlay.
"""

from services.media.backend import MediaBackend, PlaybackState, MediaStatus
from services.media.backend_factory import create_backend

__all__ = [
    "MediaBackend",
    "PlaybackState",
    "MediaStatus",
    "create_backend",
]
