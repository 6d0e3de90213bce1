from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from extraction.base import RAW_JSON_ONLY, BaseExtractor
from lifecapture.models import EventData, ScreenshotType
from llm.llm_client import VisionClient
from normalization.text_normalizer import normalize_event_dates


class EventExtractor(BaseExtractor):
    # Host is the field general-purpose vision models drop most often, hence the emphasis.
    screenshot_type = ScreenshotType.EVENT
    record_model = EventData
    system_prompt = (
        "You are an expert at extracting structured event data from images. "
        "You MUST identify the host/organizer. "
        f"{RAW_JSON_ONLY} "
        "Always extract host information if it is visible in any form."
    )
    intro = "Analyze this event screenshot image and extract all event information."
    preamble = "\n".join([
        "CRITICAL: Extract the HOST information. The host is the person, organization, "
        "or group that is hosting/organizing/presenting the event. Look for:",
        '- Labels like: "Hosted by", "Organized by", "Organised by", "Presented by", '
        '"Host:", "Organizer:", "Organiser:", "By:", "From:"',
        "- Social media handles (e.g., @username, @organization)",
        "- Profile names or group names visible on the event post",
        "- Organization/club/department names that appear to be the event creator",
    ])
    field_lines = [
        "title: The event name/title (required)",
        "host: The host/organizer name (CRITICAL - must extract if visible, even from profile name or handle)",
        "date: Start date in YYYY-MM-DD format (or MM-DD if year is not visible - we will default to current year) (required)",
        "time: Start time in HH:MM format (24-hour format) (required)",
        "endDate: End date in YYYY-MM-DD format (or MM-DD if year is not visible). "
        "If not different from start date, omit this field.",
        "endTime: End time in HH:MM format (24-hour format)",
        "location: Venue or location of the event",
        "description: Any additional event details or description",
    ]
    json_format = (
        '{"title": "...", "host": "...", "date": "YYYY-MM-DD", "time": "HH:MM", '
        '"endDate": "...", "endTime": "...", "location": "...", "description": "..."}'
    )
    footer = (
        "IMPORTANT: Do NOT leave host as empty string if you can see any host information "
        "in the image or text. Extract names, handles, or organization names that appear "
        "to be hosting the event."
    )
    max_tokens = 1000

    def __init__(self, llm_client: VisionClient, clock: Optional[Callable[[], date]] = None):
        super().__init__(llm_client)
        self.clock = clock or date.today

    def post_process(self, record: EventData) -> EventData:
        return normalize_event_dates(record, today=self.clock())
