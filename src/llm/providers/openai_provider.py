from __future__ import annotations

from typing import Any

import httpx

from lifecapture.errors import MalformedResponseError
from llm.schemas import BackendConfig
from .base import VisionProvider, post_chat


class OpenAIProvider(VisionProvider):
    def __init__(self, config: BackendConfig, transport: httpx.BaseTransport | None = None):
        self.api_key = config.api_key
        self.model = config.model_id
        self.base_url = (config.base_url or "https://api.openai.com/v1").rstrip("/")
        self.timeout_s = config.timeout_s
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

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise MalformedResponseError("OpenAI response has no choices[0].message.content") from e
        if not isinstance(content, str):
            raise MalformedResponseError("OpenAI message content is not text")
        return content
