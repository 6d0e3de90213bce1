from __future__ import annotations

from extraction.base import RAW_JSON_ONLY, BaseExtractor
from lifecapture.models import LinkData, NoteData, ScreenshotType, SocialPostData


class LinkExtractor(BaseExtractor):
    screenshot_type = ScreenshotType.LINK
    record_model = LinkData
    system_prompt = (
        "You are an expert at extracting link information from browser screenshots "
        "and link previews. " + RAW_JSON_ONLY
    )
    intro = "Analyze this link/browser screenshot and extract link information."
    field_lines = [
        "title: The page title or link title (required)",
        "url: The full URL (required, must be a valid URL)",
        "description: Page description or preview text if visible",
        "favicon: Favicon URL if visible",
    ]
    json_format = '{"title": "...", "url": "https://...", "description": "...", "favicon": "..."}'
    footer = (
        "The URL must be complete and valid. Look for URLs in the address bar, link previews, or text.\n"
        "Only include fields that are present in the screenshot."
    )


class SocialPostExtractor(BaseExtractor):
    screenshot_type = ScreenshotType.SOCIAL_POST
    record_model = SocialPostData
    system_prompt = (
        "You are an expert at extracting social media post information from screenshots. "
        + RAW_JSON_ONLY
    )
    intro = "Analyze this social media post screenshot and extract post information."
    field_lines = [
        "platform: The social media platform (Twitter/X, Instagram, Facebook, LinkedIn, TikTok, etc.)",
        "author: The post author/username (required)",
        "content: The main post content/text (required)",
        "url: The post URL if visible",
        "timestamp: Post date/time if visible",
        "imageUrl: Image URL if the post contains an image",
    ]
    json_format = (
        '{"platform": "...", "author": "...", "content": "...", "url": "...", '
        '"timestamp": "...", "imageUrl": "..."}'
    )


class NoteExtractor(BaseExtractor):
    screenshot_type = ScreenshotType.NOTE
    record_model = NoteData
    system_prompt = (
        "You are an expert at extracting structured notes and knowledge from images. "
        + RAW_JSON_ONLY
    )
    intro = "Analyze this image and extract note/knowledge information."
    field_lines = [
        "title: A concise summary or title of the content (required)",
        "content: A detailed transcription or summary of the content in markdown format. "
        "Preserve structure, lists, and key information. (required)",
        "tags: An array of relevant tags or keywords (optional)",
        'source: The source of the information if visible (e.g., "Book Excerpt", "Recipe", "Article") (optional)',
    ]
    json_format = '{"title": "...", "content": "...", "tags": ["..."], "source": "..."}'
    footer = ""
    ocr_limit = 2000
    max_tokens = 1000
