from __future__ import annotations  # Provider route schema for the generation API

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

PLACEHOLDER_KEYS = frozenset({"your_gemini_api_key_here"})


class ProviderRoute(BaseModel):  # Immutable endpoint configuration for the generation provider
    model_config = ConfigDict(frozen=True)

    name: str = "gemini"
    base_url: str
    model: str
    timeout_s: float = Field(ge=0.1)
    api_key: Optional[str] = None
    extra_headers: Dict[str, str] = Field(default_factory=dict)

    @property
    def configured(self) -> bool:  # Credential present and not a placeholder
        key = (self.api_key or "").strip()
        return bool(key) and key not in PLACEHOLDER_KEYS

    @property
    def url(self) -> str:
        return f"{self.base_url.rstrip('/')}/models/{self.model}:generateContent"

    def key_preview(self) -> str:  # First characters of the credential for health checks
        if not self.api_key:
            return "Not set"
        return self.api_key[:10] + "..."


__all__ = ["ProviderRoute", "PLACEHOLDER_KEYS"]
