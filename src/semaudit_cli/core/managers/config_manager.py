# src/semaudit_cli/core/managers/config_manager.py
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from semaudit_cli.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


def _deep_merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Merges `overrides` into `base` in place; nested dicts are merged key by key."""
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


class ConfigManager:
    """
    A singleton class to manage the application's configuration.
    It loads the packaged settings.json (plus ~/.semaudit/settings.json when
    present) and allows for in-memory modifications.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        """Loads the configuration from the file."""
        self._config: Dict[str, Any] = {}
        self.reset()
        logger.debug("ConfigManager initialized.")

    def get_all(self) -> Dict[str, Any]:
        """Returns the entire current configuration dictionary."""
        return self._config

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """
        Safely retrieves a nested value from the configuration.
        e.g., 'rules.section-heading.enabled'.
        """
        keys = key_path.split('.')
        value = self._config
        for key in keys:
            if isinstance(value, dict):
                value = value.get(key)
            else:
                return default
        return value if value is not None else default

    def set_nested(self, key_path: str, value: Any) -> bool:
        """
        Sets a nested value in the in-memory configuration.
        e.g., 'debug.level', 'INFO'
        """
        keys = key_path.split('.')
        d = self._config
        # Navigate to the second-to-last dictionary
        for key in keys[:-1]:
            d = d.setdefault(key, {})
            if not isinstance(d, dict):
                logger.error("Cannot set value: '%s' is not a dictionary.", key)
                return False

        # Get the original value to determine the type
        original_value = d.get(keys[-1])
        if original_value is not None:
            value = self._cast_like(original_value, value, key_path)

        d[keys[-1]] = value
        logger.info("Configuration updated: %s = %s", key_path, value)
        return True

    @staticmethod
    def _cast_like(original: Any, value: Any, key_path: str) -> Any:
        """Casts `value` to the type of `original`; bool('false') would be True, so strings are parsed."""
        if isinstance(original, bool) and isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in ("true", "1", "yes", "on"):
                return True
            if lowered in ("false", "0", "no", "off"):
                return False
            logger.warning("Could not cast '%s' to bool for '%s'. Storing as string.", value, key_path)
            return value
        try:
            return type(original)(value)
        except (ValueError, TypeError):
            logger.warning(
                "Could not cast new value for '%s' to type %s. Storing as string.",
                key_path, type(original).__name__
            )
            return value

    def load_file(self, path: Union[str, Path]) -> bool:
        """Deep-merges a JSON settings file over the current configuration."""
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                overrides = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to load settings from %s: %s", path, e)
            return False

        if not isinstance(overrides, dict):
            logger.error("Settings file %s must contain a JSON object.", path)
            return False

        _deep_merge(self._config, overrides)
        logger.info("Configuration merged from %s.", path)
        return True

    def rule_settings(self) -> Dict[str, Dict[str, Any]]:
        """Per-rule settings ({rule_id: {enabled, severity}}) for the RuleEngine."""
        rules = self.get_nested("rules", {})
        return {rule_id: dict(opts) for rule_id, opts in rules.items() if isinstance(opts, dict)}

    def reset(self):
        """Resets the in-memory configuration from the settings.json files."""
        self._config = {}
        config_path = PathUtils.get_default_settings_file()
        if not config_path.exists():
            logger.warning("settings.json not found at %s. Using empty config.", config_path)
        else:
            self.load_file(config_path)

        user_path = PathUtils.get_user_settings_file()
        if user_path.exists():
            self.load_file(user_path)
        logger.debug("Configuration has been (re)loaded from settings.json.")


# The global singleton instance that the entire application will use.
config_manager = ConfigManager()
