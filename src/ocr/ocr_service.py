from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from llm.llm_client import VisionClient

TRANSCRIBE_SYSTEM_PROMPT = (
    "You transcribe text from images. Transcribe every piece of visible text verbatim, "
    "top to bottom, one line of the image per line of output. "
    "Do not summarize, translate, or add commentary. If there is no text, return nothing."
)


@dataclass(frozen=True)
class OCRResult:
    text: str
    confidence: Optional[float] = None


class OCRService(ABC):
    @abstractmethod
    def recognize(self, image: str) -> OCRResult:
        raise NotImplementedError


class VisionOCRService(OCRService):
    """Reads the text off a screenshot with the same vision backend used for extraction."""

    def __init__(self, llm_client: VisionClient, max_tokens: int = 1500):
        self.llm = llm_client
        self.max_tokens = max_tokens

    def recognize(self, image: str) -> OCRResult:
        text = self.llm.complete(
            image,
            TRANSCRIBE_SYSTEM_PROMPT,
            "Transcribe all text in this image.",
            max_tokens=self.max_tokens,
            temperature=0.0,
        )
        return OCRResult(text=text.strip())


class StaticOCRService(OCRService):
    def __init__(self, text: str = ""):
        self.text = text

    def recognize(self, image: str) -> OCRResult:
        return OCRResult(text=self.text)


class NullOCRService(StaticOCRService):
    """OCR disabled: every image has no text."""

    def __init__(self, llm_client: Optional[VisionClient] = None):
        super().__init__("")
