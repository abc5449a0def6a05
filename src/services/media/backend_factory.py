"""
Media backend factory.

Creates the media backend used by the overlay window.
"""

import logging
import sys

from services.media.backend import MediaBackend
from services.media.qt_backend import QtBackendAdapter

logger = logging.getLogger(__name__)


def create_backend(video_output=None) -> MediaBackend:
    """
    Create the media backend for this platform.

    Args:
        video_output: Optional video sink passed to the backend

    Returns:
        MediaBackend instance
    """
    logger.info(f"Selecting media backend for platform: {sys.platform}")
    backend = QtBackendAdapter(video_output=video_output)
    logger.info(f"Selected Qt backend - {backend.get_backend_name()} ({backend.get_backend_version()})")
    return backend
