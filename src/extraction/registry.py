from __future__ import annotations

from datetime import date
from typing import Callable, Dict, Optional, Type, Union

from extraction.base import BaseExtractor
from extraction.event_extractor import EventExtractor
from extraction.media_extractors import SongExtractor, VideoExtractor
from extraction.place_extractor import RestaurantExtractor
from extraction.web_extractors import LinkExtractor, NoteExtractor, SocialPostExtractor
from lifecapture.models import ScreenshotType
from llm.llm_client import VisionClient

EXTRACTORS: Dict[ScreenshotType, Type[BaseExtractor]] = {
    ScreenshotType.EVENT: EventExtractor,
    ScreenshotType.SONG: SongExtractor,
    ScreenshotType.VIDEO: VideoExtractor,
    ScreenshotType.RESTAURANT: RestaurantExtractor,
    ScreenshotType.LINK: LinkExtractor,
    ScreenshotType.SOCIAL_POST: SocialPostExtractor,
    ScreenshotType.NOTE: NoteExtractor,
}


def extractor_for(
    screenshot_type: Union[ScreenshotType, str],
    llm_client: VisionClient,
    clock: Optional[Callable[[], date]] = None,
) -> BaseExtractor:
    """Pick the extractor for a classified type; anything unknown is handled as a link."""
    try:
        key = ScreenshotType(screenshot_type)
    except ValueError:
        key = ScreenshotType.LINK

    extractor_cls = EXTRACTORS.get(key, LinkExtractor)
    if extractor_cls is EventExtractor:
        return EventExtractor(llm_client, clock=clock)
    return extractor_cls(llm_client)
