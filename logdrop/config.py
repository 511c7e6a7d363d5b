from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "logdrop"
    app_env: str = "dev"
    admin_token: str = ""
    max_file_size: int = 25 * 1024 * 1024
    expiration_ttl: int = 30 * 24 * 60 * 60
    cache_ttl: int = 60
    storage_backend: str = "sqlite"
    database_path: str = "data/logs.db"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_prefix="LOGDROP_")


@lru_cache
def get_settings() -> Settings:
    return Settings()
