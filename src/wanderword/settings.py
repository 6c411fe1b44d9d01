"""Persistent settings for WanderWord.

Settings are stored in ~/.wanderword/settings.json (or $WANDERWORD_HOME) and
hold the user's API keys and the last backend used. Only values that differ
from ``DEFAULTS`` are written, so the file stays a short list of overrides.

Lookup order for a value is: environment variable (where one is mapped in
``ENV_OVERRIDES``), then the settings file, then ``DEFAULTS``. Command-line
flags sit above all of these and are applied by the caller.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional, Union

from wanderword.providers import BackendId, get_descriptor

logger = logging.getLogger(__name__)


def get_home_dir() -> Path:
    """Directory for settings and logs."""
    return Path(os.environ.get("WANDERWORD_HOME", Path.home() / ".wanderword"))


# Default settings
DEFAULTS = {
    "backend": "mock",
    "timeout": 60,
    "language": "English",
    # API keys per hosted backend; the provider env vars win over these
    "gemini_api_key": "",
    "openai_api_key": "",
    "anthropic_api_key": "",
    # Local inference
    "ollama_url": "http://localhost:11434",
    "ollama_model": "llama3",
    # Relay
    "relay_url": "http://localhost:3001",
    "relay_host": "127.0.0.1",
    "relay_port": 3001,
    "cli_caller": "",  # Empty = CLI_AGENTS_PATH/cli_caller.py if present, else direct
    "mock_delay": 1.5,
}

_KEY_SETTINGS = {
    BackendId.GEMINI_API: "gemini_api_key",
    BackendId.OPENAI_API: "openai_api_key",
    BackendId.ANTHROPIC_API: "anthropic_api_key",
}

# Setting -> env vars checked (in order) before the stored value
ENV_OVERRIDES: dict[str, tuple[str, ...]] = {
    setting: get_descriptor(backend).key_env for backend, setting in _KEY_SETTINGS.items()
}
ENV_OVERRIDES["relay_url"] = ("WANDERWORD_RELAY_URL",)


class Settings:
    """Persistent settings manager.

    Example:
        settings = Settings()
        backend = settings.get("backend")
        settings.set("backend", "ollama")
        key = settings.api_key_for("openai-api")
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path else get_home_dir() / "settings.json"
        self._data: dict[str, Any] = dict(DEFAULTS)
        self._data.update(self._read_overrides())

    def _read_overrides(self) -> dict[str, Any]:
        """Known keys from the settings file; {} if it is missing or unreadable."""
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                loaded = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable settings file {self.path}: {e}")
            return {}
        if not isinstance(loaded, dict):
            logger.warning(f"Ignoring settings file {self.path}: expected a JSON object")
            return {}

        unknown = sorted(set(loaded) - set(DEFAULTS))
        if unknown:
            logger.debug(f"Dropping unknown settings: {', '.join(unknown)}")
        logger.debug(f"Loaded settings from {self.path}")
        return {k: v for k, v in loaded.items() if k in DEFAULTS}

    def save(self) -> None:
        """Write the values that differ from the defaults."""
        overrides = {k: v for k, v in self._data.items() if DEFAULTS.get(k) != v}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(overrides, f, indent=2, ensure_ascii=False)
            logger.debug(f"Saved {len(overrides)} setting(s) to {self.path}")
        except OSError as e:
            logger.warning(f"Failed to save settings: {e}")

    def get(self, key: str, default: Any = None) -> Any:
        """Stored value for ``key``, or ``default`` when it is unset."""
        value = self._data.get(key)
        return default if value is None else value

    def get_float(self, key: str) -> float:
        """Numeric setting; a value that is not a number falls back to its default."""
        try:
            return float(self.get(key))
        except (TypeError, ValueError):
            logger.warning(f"Setting {key}={self.get(key)!r} is not a number, using default")
            return float(DEFAULTS[key])

    def resolve(self, key: str) -> Any:
        """Value for ``key`` with its environment override applied."""
        for var in ENV_OVERRIDES.get(key, ()):
            if os.environ.get(var):
                return os.environ[var]
        return self.get(key)

    def set(self, key: str, value: Any, save: bool = True) -> None:
        """Set a setting value.

        Args:
            key: Setting key; must be one of DEFAULTS
            value: Value to set
            save: If True (default), immediately save to disk

        Raises:
            KeyError: If ``key`` is not a known setting
        """
        if key not in DEFAULTS:
            raise KeyError(f"Unknown setting: {key}")
        self._data[key] = value
        if save:
            self.save()

    def reset(self) -> None:
        """Reset all settings to defaults."""
        self._data = dict(DEFAULTS)
        self.save()

    def api_key_for(self, backend: Union[BackendId, str]) -> Optional[str]:
        """Key for a hosted backend: provider env var first, then the stored key."""
        setting = _KEY_SETTINGS.get(get_descriptor(backend).id)
        if setting is None:
            return None
        return self.resolve(setting) or None


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
