import json
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class Config:
    _config_json: Optional[Dict[str, Any]] = None

    @staticmethod
    def _load_config() -> None:
        raw_path: str = os.environ.get('CONFIG_PATH', '')
        if not raw_path:
            Config._config_json = None
            return
        # Expand shell variables ($HOME) and user paths (~)
        config_path = os.path.expandvars(os.path.expanduser(raw_path))
        try:
            with open(config_path) as f:
                Config._config_json = json.load(f)
        except (FileNotFoundError, json.JSONDecodeError):
            logger.warning("Error loading config from %s", config_path)
            Config._config_json = None

    @staticmethod
    def get_str(key: str, default: Optional[str] = None) -> Optional[str]:
        """Get a string value from config"""
        Config._load_config()
        if Config._config_json is None:
            return default
        value = Config._config_json.get(key, default)
        return str(value) if value is not None else None

    @staticmethod
    def get_int(key: str, default: int) -> int:
        """Get an integer value from config"""
        Config._load_config()
        if Config._config_json is None:
            return default
        value = Config._config_json.get(key, default)
        if value is None:
            return default
        try:
            return int(value)
        except (ValueError, TypeError):
            return default

