import json
import logging
import re
import threading
from typing import Any, Optional

from lifecapture.errors import ExtractionCancelled, ExtractionParseError
from llm.providers.base import VisionProvider
from llm.providers.openai_provider import OpenAIProvider
from llm.providers.openrouter_provider import OpenRouterProvider
from llm.schemas import BackendConfig, VisionBackend

logger = logging.getLogger(__name__)

_FENCED_JSON = re.compile(r"```(?:json)?\s*(\{.*\})\s*```", re.DOTALL)


def provider_for(config: BackendConfig) -> VisionProvider:
    if config.provider is VisionBackend.OPENROUTER:
        return OpenRouterProvider(config)
    return OpenAIProvider(config)


def strip_code_fences(text: str) -> str:
    """Unwrap a ```json ... ``` block around a JSON object, if there is one."""
    match = _FENCED_JSON.search(text)
    if match:
        return match.group(1)
    return text.strip()


class VisionClient:
    """Sends one image + prompt pair to the configured backend and returns raw text.

    No caching, no retries: every call is a single request. Callers parse.
    """

    def __init__(
        self,
        config: BackendConfig,
        provider: Optional[VisionProvider] = None,
        cancel_event: Optional[threading.Event] = None,
    ):
        self.config = config
        self.provider = provider or provider_for(config)
        self.cancel_event = cancel_event

    @staticmethod
    def build_user_content(prompt: str, image: str) -> list[dict[str, Any]]:
        return [
            {"type": "text", "text": prompt},
            {"type": "image_url", "image_url": {"url": image}},
        ]

    def check_cancelled(self) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise ExtractionCancelled("extraction cancelled by caller")

    def complete(
        self,
        image: str,
        system: str,
        prompt: str,
        max_tokens: int = 500,
        temperature: float = 0.3,
    ) -> str:
        self.check_cancelled()
        logger.debug(
            f"Vision call via {self.config.provider.value} ({self.config.model_id}), "
            f"max_tokens={max_tokens}"
        )
        return self.provider.generate(
            system=system,
            user=self.build_user_content(prompt, image),
            model=self.config.model_id,
            max_tokens=max_tokens,
            temperature=temperature,
        )

    @staticmethod
    def parse_json(text: str) -> dict[str, Any]:
        content = strip_code_fences(text)
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ExtractionParseError(f"Model output is not valid JSON: {e}", raw_text=text) from e
        if not isinstance(data, dict):
            raise ExtractionParseError("Model output is not a JSON object", raw_text=text)
        return data
