"""
Configuration Manager - Handle bridge settings persistence
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_BACKEND_URL = "http://192.168.1.10:9090"
DEFAULT_MAX_SUGGESTIONS = 5


class ConfigManager:
    """Manage configuration persistence"""

    _instance = None
    _config_file = None

    def __init__(self, config_dir: str | None = None):
        try:
            # 1st choice: explicit argument, then environment variable
            config_dir = config_dir or os.environ.get("DEVALLEY_CONFIG_DIR")

            # 2nd choice: ~/.devalley
            if not config_dir:
                try:
                    config_dir = os.path.expanduser("~/.devalley")
                except Exception:
                    config_dir = None

            if config_dir:
                config_path = Path(config_dir)
                try:
                    config_path.mkdir(parents=True, exist_ok=True)
                    self._config_file = config_path / "config.json"
                except OSError as e:
                    logger.warning("[ConfigManager] Cannot write to %s: %s", config_dir, e)
                    self._config_file = None

            # Last resort: temp directory
            if not self._config_file:
                tmp_dir = Path(tempfile.gettempdir()) / "devalley"
                tmp_dir.mkdir(parents=True, exist_ok=True)
                self._config_file = tmp_dir / "config.json"
                logger.info("[ConfigManager] Using temporary config path: %s", self._config_file)

        except OSError as e:
            logger.error("[ConfigManager] Critical error during init: %s", e)
            self._config_file = Path(tempfile.gettempdir()) / "devalley_config_fallback.json"

        self._config = self._load_config()

    @classmethod
    def get_instance(cls) -> "ConfigManager":
        """Get singleton instance"""
        if cls._instance is None:
            cls._instance = ConfigManager()
        return cls._instance

    @classmethod
    def reset_instance(cls, instance: "ConfigManager | None" = None):
        """Replace the singleton (used at startup and by tests)"""
        cls._instance = instance

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from file, filling in missing sections from defaults"""
        config = self._default_config()
        if not self._config_file.exists():
            return config

        try:
            with open(self._config_file) as f:
                stored = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("[ConfigManager] Error loading config: %s", e)
            return config

        for key, value in stored.items():
            if isinstance(value, dict) and isinstance(config.get(key), dict):
                config[key] = {**config[key], **value}
            else:
                config[key] = value
        return config

    def _default_config(self) -> dict[str, Any]:
        """Get default configuration"""
        return {
            "backend": {
                "baseUrl": DEFAULT_BACKEND_URL,
                "completionTimeout": 5000,  # Hint sent to the backend, in ms
                "requestTimeoutSeconds": 60,
            },
            "completions": {
                "enabled": True,
                "maxSuggestions": DEFAULT_MAX_SUGGESTIONS,
            },
            "server": {"host": "127.0.0.1", "port": 8000},
        }

    def get_config(self) -> dict[str, Any]:
        """Get current configuration"""
        # Reload config from file to ensure we have the latest
        self._config = self._load_config()
        return self._config.copy()

    def save_config(self, config: dict[str, Any]):
        """Save configuration to file"""
        # Merge with existing config
        self._config.update(config)

        # Ensure config directory exists
        self._config_file.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(self._config_file, "w") as f:
                json.dump(self._config, f, indent=2)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}")

    def get(self, key: str, default=None):
        """Get specific config value"""
        return self._config.get(key, default)

    def set(self, key: str, value: Any):
        """Set specific config value"""
        self._config[key] = value
        self.save_config(self._config)

    def completions_enabled(self) -> bool:
        return bool(self.get_config()["completions"].get("enabled", True))

    def max_suggestions(self) -> int:
        value = self.get_config()["completions"].get("maxSuggestions", DEFAULT_MAX_SUGGESTIONS)
        try:
            return max(0, int(value))
        except (TypeError, ValueError):
            return DEFAULT_MAX_SUGGESTIONS
