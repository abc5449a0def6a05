import sys
import os
import logging
import argparse
from typing import Optional, Tuple

from common.constants import APP_NAME, APP_DESCRIPTION, APP_LOG_FILENAME, APP_VERSION


def parse_arguments(argv=None):
    """Parse command-line arguments"""
    parser = argparse.ArgumentParser(description=f"{APP_NAME} - {APP_DESCRIPTION}")
    parser.add_argument("media", nargs="?", help="Media file to open on start")
    parser.add_argument("--config", type=str, metavar="PATH", help="Use a custom config.ini")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the log level from the config file",
    )
    parser.add_argument("--no-autoplay", action="store_true", help="Load the media file without playing it")
    parser.add_argument("--version", action="store_true", help="Show version information and exit")
    return parser.parse_args(argv)


def print_version_info():
    """Print version and dependency information"""
    print(f"{APP_NAME} {APP_VERSION}")
    print(f"Python: {sys.version.split()[0]}")

    from PySide6 import __version__ as pyside_version

    print(f"PySide6: {pyside_version}")


def _setup_logging(config, level_override: Optional[str]) -> Tuple[str, logging.Logger]:
    """Setup async logging and return (log_file_path, logger)."""
    from common.utils.async_logging import setup_async_logging

    log_file_path = os.path.join(config.data_dir, APP_LOG_FILENAME)
    level = getattr(logging, level_override.upper(), config.log_level) if level_override else config.log_level
    setup_async_logging(log_level=level, log_file_path=log_file_path)

    logger = logging.getLogger(__name__)
    config.log_config_location()
    return log_file_path, logger


def main(argv=None) -> int:
    """Main entry point for the overlay application"""
    args = parse_arguments(argv)

    if args.version:
        print_version_info()
        return 0

    if args.media and not os.path.isfile(args.media):
        print(f"Error: media file not found: {args.media}", file=sys.stderr)
        return 2

    from common.config import Config
    from common.utils.async_logging import shutdown_async_logging
    from utils.exception_handler import install_global_exception_handler

    config = Config(args.config)
    _, logger = _setup_logging(config, args.log_level)
    exception_handler = install_global_exception_handler()

    try:
        from PySide6.QtWidgets import QApplication
        from ui.debug_overlay.overlay_window import OverlayWindow

        app = QApplication.instance() or QApplication(sys.argv)
        app.setApplicationName(APP_NAME)

        window = OverlayWindow(config)
        window.show()
        if args.media:
            window.open_media(args.media, auto_play=False if args.no_autoplay else None)

        exit_code = app.exec()
        logger.info(f"Application exited with code {exit_code}")
        return exit_code
    finally:
        exception_handler.uninstall()
        shutdown_async_logging()


if __name__ == "__main__":
    sys.exit(main())
