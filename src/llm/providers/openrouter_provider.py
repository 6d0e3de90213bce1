from __future__ import annotations

from typing import Any

import httpx

from lifecapture.errors import MalformedResponseError
from llm.schemas import BackendConfig
from .base import VisionProvider, post_chat


class OpenRouterProvider(VisionProvider):
    def __init__(self, config: BackendConfig, transport: httpx.BaseTransport | None = None):
        self.api_key = config.api_key
        self.model = config.model_id
        self.base_url = (config.base_url or "https://openrouter.ai/api/v1").rstrip("/")
        self.timeout_s = config.timeout_s
        self.app_title = config.app_title
        self.referer = config.referer
        self.transport = transport

    def generate(
        self,
        *,
        system: str,
        user: list[dict[str, Any]],
        model: str | None = None,
        max_tokens: int = 500,
        temperature: float = 0.3,
    ) -> str:
        url = f"{self.base_url}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.referer,
            "X-Title": self.app_title,
        }
        payload = {
            "model": model or self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

        data = post_chat(
            url, headers=headers, payload=payload, timeout_s=self.timeout_s, transport=self.transport
        )

        # Some routed models answer with a flattened root "content".
        content = None
        choices = data.get("choices") if isinstance(data, dict) else None
        if isinstance(choices, list) and choices and isinstance(choices[0], dict):
            content = (choices[0].get("message") or {}).get("content")
        if not content and isinstance(data, dict):
            content = data.get("content")

        if not isinstance(content, str):
            raise MalformedResponseError(
                "OpenRouter response has neither choices[0].message.content nor content"
            )
        return content
