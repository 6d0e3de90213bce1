from __future__ import annotations

import json
from typing import Any

from .base import VisionProvider


class MockProvider(VisionProvider):
    def generate(
        self,
        *,
        system: str,
        user: list[dict[str, Any]],
        model: str | None = None,
        max_tokens: int = 500,
        temperature: float = 0.3,
    ) -> str:
        """
        Returns dummy JSON responses based on the prompt content.
        """
        lower_system = system.lower()

        if "classifying screenshot" in lower_system:
            return json.dumps({"type": "event", "confidence": 0.9})

        if "transcribe" in lower_system:
            return "Demo Night\nHosted by LifeCapture Club\n03-05 18:30"

        if "event data" in lower_system:
            return json.dumps({
                "title": "Demo Night",
                "host": "",
                "date": "03-05",
                "time": "18:30",
                "location": "Main Hall",
            })

        if "link information" in lower_system:
            return json.dumps({"title": "Example", "url": "https://example.com"})

        # Default fallback
        return "{}"
