from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    env: str = Field(default="development", description="ENV")
    debug: bool = Field(default=False, description="DEBUG")

    # Paging
    default_page_size: int = Field(default=10, ge=1, alias="PAGING_DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(default=100, ge=1, alias="PAGING_MAX_PAGE_SIZE")
    # count and slice awaited together instead of one after the other
    concurrent_fetch: bool = Field(default=False, alias="PAGING_CONCURRENT_FETCH")


@lru_cache
def get_settings() -> Settings:
    return Settings()
