from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
        protected_namespaces=(),
    )

    app_name: str = "prescription-reader"
    log_level: str = "INFO"

    # upload limits
    max_image_mb: int = 10

    # hosted model configuration
    model_provider: str = "gemini"  # "gemini" | "mock"
    model_id: str = "gemini-2.5-pro"
    analysis_mode: str = "structured"  # "structured" | "text"
    gemini_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY"),
    )


settings = Settings()
