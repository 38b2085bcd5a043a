"""Configuration service for Focus TUI.

Loads ``config.json`` from the platform config directory into an
:class:`~focus_tui.models.config_models.AppConfig`. A missing file yields the
defaults; a corrupted file is logged and also falls back to the defaults so
the timer can always start.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir
from pydantic import ValidationError

from focus_tui.models.config_models import AppConfig
from focus_tui.utils.constants import APP_NAME, CONFIG_FILE_NAME, TASKS_FILE_NAME
from focus_tui.utils.logger import get_logger


class ConfigService:
    """Service for loading and saving the application configuration."""

    def __init__(self):
        self.config_dir = Path(user_config_dir(APP_NAME))
        self.config_path = self.config_dir / CONFIG_FILE_NAME
        self.data_dir = Path(user_data_dir(APP_NAME))

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from disk."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            self._config = AppConfig()
        except (OSError, ValidationError) as e:
            get_logger("config").warning(
                "Ignoring unreadable config at %s: %s", self.config_path, e
            )
            self._config = AppConfig()

        return self._config

    def tasks_path(self) -> Path:
        """Resolve the task file location."""
        configured = self.config.storage.tasks_file
        if configured:
            return Path(configured).expanduser()
        return self.data_dir / TASKS_FILE_NAME


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Return the process-wide config service."""
    return ConfigService()
