from __future__ import annotations

import logging
from typing import ClassVar, List, Type

from pydantic import ValidationError

from lifecapture.errors import ExtractionParseError
from lifecapture.models import Record, ScreenshotType
from llm.llm_client import VisionClient

logger = logging.getLogger(__name__)

RAW_JSON_ONLY = "Output must be raw JSON only, no markdown, no code fences."


class BaseExtractor:
    """Shared template for the per-type extractors.

    Subclasses only declare their prompt pieces and record model; the call,
    fence stripping and strict validation are the same for every type.
    """

    screenshot_type: ClassVar[ScreenshotType]
    record_model: ClassVar[Type[Record]]
    system_prompt: ClassVar[str]
    intro: ClassVar[str]
    field_lines: ClassVar[List[str]]
    json_format: ClassVar[str]
    preamble: ClassVar[str] = ""
    footer: ClassVar[str] = "Only include fields that are present in the screenshot."
    ocr_limit: ClassVar[int] = 1000
    max_tokens: ClassVar[int] = 500
    temperature: ClassVar[float] = 0.3

    def __init__(self, llm_client: VisionClient):
        self.llm = llm_client

    def build_prompt(self, ocr_text: str) -> str:
        parts = [self.intro, ""]
        if ocr_text:
            parts += [f'Here is the extracted text from the image:\n"{ocr_text[: self.ocr_limit]}"', ""]
        if self.preamble:
            parts += [self.preamble, ""]
        parts.append("Extract the following fields:")
        parts += [f"- {line}" for line in self.field_lines]
        parts += [
            "",
            "Return ONLY valid JSON with no markdown, no code blocks, no explanation.",
            f"Format: {self.json_format}",
        ]
        if self.footer:
            parts.append(self.footer)
        return "\n".join(parts)

    def extract(self, image: str, ocr_text: str = "") -> Record:
        raw = self.llm.complete(
            image,
            self.system_prompt,
            self.build_prompt(ocr_text),
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )
        data = VisionClient.parse_json(raw)
        try:
            record = self.record_model.model_validate(data)
        except ValidationError as e:
            raise ExtractionParseError(
                f"{self.screenshot_type.value} output does not match the expected shape: {e}",
                raw_text=raw,
            ) from e
        logger.debug(f"Extracted {self.screenshot_type.value} record")
        return self.post_process(record)

    def post_process(self, record: Record) -> Record:
        return record
