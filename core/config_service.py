# --- core/config_service.py ---
import configparser
import logging
import os

from pdfsift_lib.constants import DEFAULT_KEYWORDS, DEFAULT_PUBLISHERS

log = logging.getLogger("pdfsift.config")

DEFAULT_CONFIG_PATH = os.path.join(os.path.expanduser("~"), ".pdfsift.cfg")


def _split_list(value):
    return [v.strip() for v in value.replace("\n", ",").split(",") if v.strip()]


def _to_ini(value):
    if isinstance(value, (list, tuple)):
        return ", ".join(value)
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


class ConfigService:
    """Manages reading from and writing to the pdfsift.cfg file."""

    def __init__(self, config_path: str = None):
        self.config_path = (
            config_path or os.environ.get("PDFSIFT_CONFIG") or DEFAULT_CONFIG_PATH
        )
        self.defaults = {
            "view": {
                "layout": "plain",
                "format": "text",
                "headers": "true",
            },
            "search": {
                "format": "text",
                "context": "0",
                "default_keywords": ", ".join(DEFAULT_KEYWORDS),
            },
            "cleaner": {
                "publishers": ", ".join(DEFAULT_PUBLISHERS),
            },
        }

    def get_settings(self) -> dict:
        """Reads settings from the config file, applying defaults if missing."""
        config = self._load()
        return {
            "view": {
                "layout": config.get("view", "layout"),
                "format": config.get("view", "format"),
                "headers": config.getboolean("view", "headers"),
            },
            "search": {
                "format": config.get("search", "format"),
                "context": config.getint("search", "context"),
                "default_keywords": _split_list(config.get("search", "default_keywords")),
            },
            "cleaner": {
                "publishers": _split_list(config.get("cleaner", "publishers")),
            },
        }

    def save_settings(self, settings: dict):
        """Saves a dictionary of settings to the config file."""
        config = configparser.ConfigParser()
        for section, values in settings.items():
            config[section] = {k: _to_ini(v) for k, v in values.items()}

        try:
            with open(self.config_path, "w") as configfile:
                config.write(configfile)
            log.info("Settings successfully saved to %s", self.config_path)
        except IOError as e:
            log.error("Failed to write settings to %s: %s", self.config_path, e)
            raise

    def _load(self) -> configparser.ConfigParser:
        config = configparser.ConfigParser()
        # Apply defaults first
        for section, values in self.defaults.items():
            config[section] = values

        # Read existing file to override defaults
        if not config.read(self.config_path):
            log.info("Config file not found at %s. Using defaults.", self.config_path)
        else:
            log.debug("Loaded settings from %s", self.config_path)
        return config
