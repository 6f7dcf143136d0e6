"""
Configuration management using Pydantic Settings.

Architecture Decision: Why pydantic-settings?
- Type-safe configuration with validation
- Paths and the database URL come from TIMEKEEPER_* environment variables
  (or a .env file)
- Tracking preferences live in a YAML file the user can edit
- Easy to test with different configurations
"""

import os
from pathlib import Path
from typing import Optional
import yaml

from pydantic_settings import BaseSettings, SettingsConfigDict
from timekeeper.domain.models import TrackingPreferences

PREFERENCES_FILE = "settings.yaml"


def _user_base_dir(kind: str) -> Path:
    """Per-user base directory for "config" or "data" files"""
    if os.name == 'nt':  # Windows
        return Path(os.getenv('APPDATA'))
    if kind == "config":
        return Path.home() / '.config'
    return Path.home() / '.local' / 'share'


class Settings(BaseSettings):
    """
    Application settings, resolved in this order:
    1. Default values (hardcoded)
    2. YAML preferences file: config/settings.yaml in the working
       directory, else <config_dir>/settings.yaml
    3. Environment variables / .env (and constructor arguments)
    """
    model_config = SettingsConfigDict(
        env_prefix='TIMEKEEPER_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore'
    )

    app_name: str = "TimeKeeper"
    config_dir: Optional[Path] = None
    data_dir: Optional[Path] = None

    # Defaults to a SQLite file in data_dir
    database_url: Optional[str] = None

    preferences: TrackingPreferences = TrackingPreferences()

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        folder = self.app_name.lower()
        if self.config_dir is None:
            self.config_dir = _user_base_dir("config") / folder
        if self.data_dir is None:
            self.data_dir = _user_base_dir("data") / folder
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        preferences_file = self.preferences_file()
        if preferences_file is not None:
            self.preferences = self._read_preferences(preferences_file)

    def preferences_file(self) -> Optional[Path]:
        """The YAML file preferences are read from, if one exists"""
        for candidate in (Path("config") / PREFERENCES_FILE, self.config_dir / PREFERENCES_FILE):
            if candidate.exists():
                return candidate
        return None

    def _read_preferences(self, path: Path) -> TrackingPreferences:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
        if 'preferences' in self.model_fields_set:
            # Set through TIMEKEEPER_PREFERENCES or an argument; those keys win
            data.update(self.preferences.model_dump(exclude_unset=True))
        return TrackingPreferences(**data)

    def save_preferences(self) -> Path:
        """Write the current preferences to <config_dir>/settings.yaml"""
        config_file = self.config_dir / PREFERENCES_FILE
        with open(config_file, 'w', encoding='utf-8') as f:
            yaml.dump(self.preferences.model_dump(), f, default_flow_style=False)
        return config_file

    def get_db_url(self) -> str:
        """Get database URL, defaulting to <data_dir>/timekeeper.db"""
        if self.database_url:
            return self.database_url
        return f"sqlite+aiosqlite:///{self.data_dir / 'timekeeper.db'}"


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Reload settings from environment and file"""
    global _settings
    _settings = Settings()
    return _settings
