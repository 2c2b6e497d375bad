"""
Настройки из переменных окружения (и .env) через pydantic-settings.

SHOP_SEED_PATH: путь к seed.json (по умолчанию data/seed.json в корне проекта),
LOG_LEVEL: уровень логирования, LOG_FILE: файл для логов (необязательно).
"""

import logging
import os
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
DEFAULT_SEED_PATH = os.path.join(_PROJECT_ROOT, "data", "seed.json")


class Settings(BaseSettings):
    """Настройки приложения"""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore", populate_by_name=True
    )

    seed_path: str = Field(default=DEFAULT_SEED_PATH, validation_alias="SHOP_SEED_PATH")
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @field_validator("log_level", mode="before")
    @classmethod
    def known_log_level(cls, v: str) -> str:
        """Только имена уровней, известные logging (DEBUG, INFO, ...)"""
        name = str(v).strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"unknown log level {v!r}")
        return name

    @field_validator("log_file", mode="before")
    @classmethod
    def empty_log_file_is_none(cls, v):
        return v or None


# окружение читается один раз при импорте; в тестах создавайте Settings() заново
settings = Settings()
