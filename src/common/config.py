import os
import shutil
import configparser
import logging
from PySide6.QtCore import QObject

from common.constants import APP_CONFIG_FILENAME
from utils.files import get_localappdata_dir

logger = logging.getLogger(__name__)


class Config(QObject):
    LOG_LEVELS = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }

    def __init__(self, custom_config_path: str | None = None):
        """Initialize Config from file.

        Args:
            custom_config_path: Optional path to custom config file.
                               If None, uses system config location.
        """
        super().__init__()

        if custom_config_path:
            self.config_path = custom_config_path
            logger.debug(f"Using custom config: {self.config_path}")
        elif "PYTEST_CURRENT_TEST" in os.environ:
            # Keep tests away from the user's real config
            import tempfile

            test_config_dir = os.path.join(tempfile.gettempdir(), "playbackdebugoverlay_test")
            os.makedirs(test_config_dir, exist_ok=True)
            self.config_path = os.path.join(test_config_dir, APP_CONFIG_FILENAME)
            logger.debug(f"Test mode detected, using temp config: {self.config_path}")
        else:
            self.config_path = os.path.join(get_localappdata_dir(), APP_CONFIG_FILENAME)

        self._config = configparser.ConfigParser()

        if os.path.exists(self.config_path):
            logger.debug(f"Loading existing config from: {self.config_path}")
            self._config.read(self.config_path, encoding="utf-8-sig")
        else:
            logger.info(f"Config file not found. Creating default config at: {self.config_path}")
            self._set_defaults()
            config_dir = os.path.dirname(self.config_path)
            if config_dir:
                os.makedirs(config_dir, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as configfile:
                self._config.write(configfile)
            logger.info("Default config.ini created successfully")

        self._initialize_properties()

    def _get_defaults(self):
        """Get default configuration values as a dictionary structure."""
        return {
            "General": {"log_level": "INFO"},
            "Overlay": {"start_on_launch": True, "font_point_size": 9},
            "Audio": {"default_volume": 50, "auto_play": True},
            "Window": {"width": 960, "height": 540},
        }

    def _set_defaults(self):
        """Set default configuration values in the ConfigParser object."""
        for section, values in self._get_defaults().items():
            self._config[section] = {}
            for key, value in values.items():
                if isinstance(value, bool):
                    self._config[section][key] = "true" if value else "false"
                else:
                    self._config[section][key] = str(value)

    def _initialize_properties(self):
        """Initialize class properties from config values with fallbacks."""
        defaults = self._get_defaults()

        self._init_general(defaults)
        self._init_overlay(defaults)
        self._init_audio(defaults)
        self._init_window(defaults)

        logger.debug("Configuration loaded: %s", self.config_path)

    def _init_general(self, defaults: dict):
        g = defaults["General"]
        raw = self._config.get("General", "log_level", fallback=g["log_level"])
        self.log_level_str = raw.strip().upper()
        if self.log_level_str not in self.LOG_LEVELS:
            logger.warning(f"Invalid value for General.log_level: '{raw}', using default {g['log_level']}")
            self.log_level_str = g["log_level"]
        self.log_level = self._get_log_level(self.log_level_str)

    def _init_overlay(self, defaults: dict):
        o = defaults["Overlay"]
        self.overlay_start_on_launch = self._get_checked(
            self._config.getboolean, "Overlay", "start_on_launch", o["start_on_launch"]
        )
        self.overlay_font_point_size = self._get_checked(
            self._config.getint, "Overlay", "font_point_size", o["font_point_size"]
        )
        if self.overlay_font_point_size <= 0:
            logger.warning(f"Invalid Overlay.font_point_size {self.overlay_font_point_size}, using default")
            self.overlay_font_point_size = o["font_point_size"]

    def _init_audio(self, defaults: dict):
        a = defaults["Audio"]
        volume = self._get_checked(self._config.getint, "Audio", "default_volume", a["default_volume"])
        self.default_volume = max(0, min(100, volume))
        self.auto_play = self._get_checked(self._config.getboolean, "Audio", "auto_play", a["auto_play"])

    def _init_window(self, defaults: dict):
        w = defaults["Window"]
        self.window_width = self._get_checked(self._config.getint, "Window", "width", w["width"])
        self.window_height = self._get_checked(self._config.getint, "Window", "height", w["height"])

    def _get_checked(self, getter, section: str, key: str, default):
        """Read a typed value, falling back to the default when it does not parse."""
        try:
            return getter(section, key, fallback=default)
        except ValueError:
            raw = self._config.get(section, key, fallback="")
            logger.warning(f"Invalid value for {section}.{key}: '{raw}', using default {default}")
            return default

    def _get_log_level(self, level_str):
        """Convert string log level to logging level constant"""
        return self.LOG_LEVELS.get(level_str.upper(), logging.INFO)

    @property
    def data_dir(self) -> str:
        """Directory holding the config file and the log file."""
        return os.path.dirname(os.path.abspath(self.config_path))

    def _update_window_section(self, config: configparser.ConfigParser):
        if not config.has_section("Window"):
            config.add_section("Window")
        config["Window"]["width"] = str(self.window_width)
        config["Window"]["height"] = str(self.window_height)

    def _update_overlay_section(self, config: configparser.ConfigParser):
        if not config.has_section("Overlay"):
            config.add_section("Overlay")
        config["Overlay"]["start_on_launch"] = "true" if self.overlay_start_on_launch else "false"
        config["Overlay"]["font_point_size"] = str(self.overlay_font_point_size)

    def _update_audio_section(self, config: configparser.ConfigParser):
        if not config.has_section("Audio"):
            config.add_section("Audio")
        config["Audio"]["default_volume"] = str(self.default_volume)
        config["Audio"]["auto_play"] = "true" if self.auto_play else "false"

    def _create_backup(self):
        """Create backup of config file before modifying."""
        if os.path.exists(self.config_path):
            backup_path = self.config_path + ".bak"
            try:
                shutil.copy2(self.config_path, backup_path)
                logger.debug(f"Created backup at {backup_path}")
            except OSError as e:
                logger.warning(f"Failed to create backup: {e}")

    def save(self):
        """Save current configuration to file with minimal mutation.

        Re-reads the existing config file, updates ONLY managed keys,
        creates a backup, and preserves all unrelated sections/keys.
        """
        current = configparser.ConfigParser()
        if os.path.exists(self.config_path):
            current.read(self.config_path, encoding="utf-8-sig")
            logger.debug(f"Re-read existing config from {self.config_path}")

        self._create_backup()

        self._update_overlay_section(current)
        self._update_audio_section(current)
        self._update_window_section(current)

        try:
            with open(self.config_path, "w", encoding="utf-8") as configfile:
                current.write(configfile)
            logger.debug(f"Configuration saved to {self.config_path}")
        except OSError as e:
            logger.error(f"Failed to save config: {e}")
            raise

    def log_config_location(self):
        """Log the configuration file location (call after logging is set up)"""
        logger.info(f"Configuration loaded from: {self.config_path}")
