import logging
from typing import Any, Optional

from lifecapture.errors import ClassificationError, ExtractionParseError
from lifecapture.models import ClassificationResult, ScreenshotType
from llm.llm_client import VisionClient

logger = logging.getLogger(__name__)

FALLBACK_TYPE = ScreenshotType.LINK
FALLBACK_CONFIDENCE = 0.5
DEFAULT_CONFIDENCE = 0.8
OCR_CONTEXT_LIMIT = 500

SYSTEM_PROMPT = """You are an expert at classifying screenshot images. Analyze the image and OCR text to determine what type of content it contains.

Types to classify:
- event: Calendar events, event invitations, event posters, schedule screenshots; if it's a social media post and has a calendar icon, date, and/or time, it should be classified as event.
- song: Music app interfaces (Spotify, Apple Music, etc.), social media app song posts (TikTok, Instagram, etc.), song info with play buttons, track lists, artist and song name visible. If it's a song but not a music app interface, it should be classified as song. If there is a "Use Audio" or "Add to Spotify" button, it should be classified as song.
- video: YouTube interfaces, video thumbnails, video player screens, channel pages
- restaurant: Restaurant menus, reviews, location markers, food delivery apps, restaurant listings, restaurant posts (TikTok, Instagram, etc.), restaurant info with location and contact information visible
- link: Browser URLs, link previews, website screenshots with URLs visible
- social_post: Social media posts (Twitter/X, Instagram, Facebook, LinkedIn, etc.), platform-specific UI elements; if it's a social media post but not a song, restaurant, event, video, or link, it should be classified as social_post
- note: Informational content, articles, recipes, instructions, diagrams, text snippets, or anything that doesn't fit into event, song, video, restaurant, or social_post.

Return ONLY valid JSON: {"type": "event" | "song" | "video" | "restaurant" | "link" | "social_post" | "note", "confidence": 0.0-1.0}"""


def _build_prompt(ocr_text: str) -> str:
    prompt = "Classify this screenshot image.\n\n"
    if ocr_text:
        prompt += f'OCR Text: "{ocr_text[:OCR_CONTEXT_LIMIT]}"\n\n'
    prompt += (
        "Analyze the visual elements and text to determine the screenshot type. Consider:\n"
        "- UI elements (buttons, interfaces, app layouts)\n"
        "- Text content (dates for events, artist/track for songs, etc.)\n"
        "- Visual indicators (calendars, play buttons, maps, social media layouts)\n"
        "Return JSON with type and confidence (0.0-1.0) based on how certain you are."
    )
    return prompt


def _confidence(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return DEFAULT_CONFIDENCE
    try:
        confidence = float(value)
    except (TypeError, ValueError):
        return DEFAULT_CONFIDENCE
    if confidence != confidence:  # NaN
        return DEFAULT_CONFIDENCE
    return max(0.0, min(1.0, confidence))


class ScreenshotClassifier:

    def __init__(self, llm_client: VisionClient):
        self.llm = llm_client

    def classify(self, image: str, ocr_text: str = "") -> ClassificationResult:
        raw = self.llm.complete(
            image, SYSTEM_PROMPT, _build_prompt(ocr_text), max_tokens=200, temperature=0.2
        )
        try:
            data = VisionClient.parse_json(raw)
        except ExtractionParseError as e:
            raise ClassificationError(f"Classification failed: {e}", raw_text=raw) from e

        tag: Optional[str] = data.get("type") if isinstance(data.get("type"), str) else None
        try:
            screenshot_type = ScreenshotType(tag)
        except ValueError:
            logger.info(f"Unknown screenshot type {tag!r}, defaulting to {FALLBACK_TYPE.value}")
            return ClassificationResult(type=FALLBACK_TYPE, confidence=FALLBACK_CONFIDENCE)

        return ClassificationResult(
            type=screenshot_type, confidence=_confidence(data.get("confidence"))
        )
