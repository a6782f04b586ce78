from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = "info"
    log_json: bool = True

    # Pagination defaults
    pagination_items: int = 6
    pagination_size: str = "1,4,4,1"
    pagination_max_items: int = 100

    templates_dir: str = ""

    model_config = SettingsConfigDict(
        env_file=[".env", "../.env"],
        env_file_encoding="utf-8",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
