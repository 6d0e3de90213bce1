from __future__ import annotations

import os
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MODELS = {
    "openai": "gpt-4o",
    "openrouter": "anthropic/claude-3.5-sonnet",
}


class VisionBackend(str, Enum):
    OPENAI = "openai"
    OPENROUTER = "openrouter"


class BackendConfig(BaseModel):
    """Everything a single backend call needs; passed explicitly, never read globally."""

    model_config = ConfigDict(frozen=True)

    provider: VisionBackend = VisionBackend.OPENAI
    api_key: str = ""
    model: str = ""
    base_url: Optional[str] = None
    timeout_s: float = Field(default=60.0, ge=1.0, le=300.0)
    app_title: str = "LifeCapture"
    referer: str = ""

    @property
    def model_id(self) -> str:
        return self.model or DEFAULT_MODELS[self.provider.value]


class AppSettings(BaseModel):
    """User-level settings: both providers' keys, the active provider and model."""

    provider: VisionBackend = VisionBackend.OPENAI
    openai_key: str = ""
    openrouter_key: str = ""
    model: str = ""
    base_url: Optional[str] = None
    timeout_s: float = Field(default=60.0, ge=1.0, le=300.0)
    referer: str = ""

    @classmethod
    def from_env(cls) -> "AppSettings":
        return cls(
            provider=VisionBackend(os.getenv("LIFECAPTURE_PROVIDER", "openai").strip().lower()),
            openai_key=os.getenv("OPENAI_API_KEY", "").strip(),
            openrouter_key=os.getenv("OPENROUTER_API_KEY", "").strip(),
            model=os.getenv("LIFECAPTURE_MODEL", "").strip(),
            base_url=os.getenv("LIFECAPTURE_BASE_URL", "").strip() or None,
            timeout_s=float(os.getenv("LIFECAPTURE_TIMEOUT_S", "60")),
            referer=os.getenv("LIFECAPTURE_REFERER", "").strip(),
        )

    def backend_config(
        self,
        provider: Optional[VisionBackend] = None,
        model: Optional[str] = None,
    ) -> BackendConfig:
        chosen = VisionBackend(provider) if provider else self.provider
        if chosen is VisionBackend.OPENROUTER:
            api_key = self.openrouter_key
        else:
            api_key = self.openai_key
        return BackendConfig(
            provider=chosen,
            api_key=api_key,
            # a stored model id only makes sense for the provider it was chosen for
            model=model or (self.model if chosen is self.provider else ""),
            base_url=self.base_url if chosen is self.provider else None,
            timeout_s=self.timeout_s,
            referer=self.referer,
        )

    def has_api_key(self, provider: Optional[VisionBackend] = None) -> bool:
        return bool(self.backend_config(provider).api_key)
