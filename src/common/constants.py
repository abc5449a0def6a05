"""
Application-wide constants for Playback Debug Overlay.

Centralizes app name, file names and the overlay refresh cadence.
"""

# Application display name (user-facing)
APP_NAME = "Playback Debug Overlay"

# Application full description
APP_DESCRIPTION = "Live playback telemetry line for media players"

APP_VERSION = "0.1.0"

# Technical identifiers (for paths, files - DO NOT change without migration)
APP_FOLDER_NAME = "PlaybackDebugOverlay"  # Used in %LOCALAPPDATA%\PlaybackDebugOverlay\
APP_LOG_FILENAME = "playbackdebugoverlay.log"
APP_CONFIG_FILENAME = "config.ini"

# Refresh period of the debug line in milliseconds. Fixed, not user-configurable.
REFRESH_INTERVAL_MS = 1000
