# backend/app/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path
from functools import lru_cache
from typing import Optional

from ...core.hrmd.constants import OWNERSHIP_NAMESPACE


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    PROJECT_NAME: str = "HRMD Filter"
    API_V1_STR: str = "/api/v1"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # None: filter.properties empaquetado junto a backend/core/hrmd/config
    FILTER_PROPERTIES_PATH: Optional[Path] = None
    OWNERSHIP_NAMESPACE: str = OWNERSHIP_NAMESPACE
    REMOVE_COST_CENTER: bool = True

    MAX_PAYLOAD_SIZE: int = 20 * 1024 * 1024  # 20MB


@lru_cache()
def get_settings() -> Settings:
    """
    Crea una instancia única de Settings que se reutiliza.
    El decorador lru_cache asegura que solo se cree una vez.
    """
    return Settings()


settings = get_settings()
