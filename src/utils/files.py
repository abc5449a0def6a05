import logging
import os
import sys

logger = logging.getLogger(__name__)


def get_localappdata_dir():
    """
    Get platform-appropriate application data directory.

    Returns:
        str: Path to application data directory

    Platform paths:
        Windows: %LOCALAPPDATA%/PlaybackDebugOverlay/
        Linux:   ~/.local/share/PlaybackDebugOverlay/ (respects XDG_DATA_HOME)
        macOS:   ~/Library/Application Support/PlaybackDebugOverlay/
    """
    from common.constants import APP_FOLDER_NAME

    if sys.platform == "win32":
        local_app_data = os.getenv("LOCALAPPDATA")
        if not local_app_data:
            local_app_data = os.path.expanduser("~/AppData/Local")
            logger.warning(f"LOCALAPPDATA not set, using {local_app_data}")
        app_data_dir = os.path.join(local_app_data, APP_FOLDER_NAME)

    elif sys.platform == "darwin":
        app_data_dir = os.path.expanduser(f"~/Library/Application Support/{APP_FOLDER_NAME}")

    else:
        xdg_data = os.getenv("XDG_DATA_HOME")
        if xdg_data:
            app_data_dir = os.path.join(xdg_data, APP_FOLDER_NAME)
        else:
            app_data_dir = os.path.expanduser(f"~/.local/share/{APP_FOLDER_NAME}")

    os.makedirs(app_data_dir, exist_ok=True)
    return app_data_dir
