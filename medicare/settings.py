# medicare/settings.py
from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # MEDICARE_API_BASE, or BACKEND_URL when that is unset
    api_base: str = Field(
        default="http://localhost:8000",
        validation_alias=AliasChoices("MEDICARE_API_BASE", "BACKEND_URL"),
    )
    request_timeout: float = 30.0
    default_patient_id: str = "demo-patient"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="MEDICARE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
