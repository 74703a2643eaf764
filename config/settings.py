"""Application settings and configuration management."""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .routes import ProviderRoute

ROOT_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    """Settings loaded from environment variables or defaults."""

    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-pro"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    LLM_TIMEOUT_S: float = Field(default=30.0, ge=0.1)

    DATA_DIR: str = Field(default=str(ROOT_DIR / "data"))
    STORAGE_DIR: str = Field(default=str(ROOT_DIR / "data" / "local"))

    ENV: str = "development"
    PORT: int = 3001
    API_BASE_URL: str = "http://localhost:3001/api"
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])

    QUESTION_COUNT: int = Field(default=5, ge=1)

    model_config = SettingsConfigDict(env_file=".env", validate_assignment=True, extra="ignore")

    def provider_route(self) -> ProviderRoute:
        """Build the provider route handed to the AI proxy client."""

        return ProviderRoute(
            base_url=self.GEMINI_BASE_URL,
            model=self.GEMINI_MODEL,
            timeout_s=self.LLM_TIMEOUT_S,
            api_key=self.GEMINI_API_KEY,
        )

    @property
    def data_path(self) -> Path:
        return Path(self.DATA_DIR)

    @property
    def storage_path(self) -> Path:
        return Path(self.STORAGE_DIR)


settings = Settings()
