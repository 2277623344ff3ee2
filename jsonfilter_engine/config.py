from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    max_filter_depth: int = 64
    path_cache_size: int = 1024

    model_config = SettingsConfigDict(env_prefix="JSONFILTER_")

settings = Settings()
