from __future__ import annotations

from extraction.base import RAW_JSON_ONLY, BaseExtractor
from lifecapture.models import RestaurantData, ScreenshotType


class RestaurantExtractor(BaseExtractor):
    screenshot_type = ScreenshotType.RESTAURANT
    record_model = RestaurantData
    system_prompt = (
        "You are an expert at extracting restaurant information from menus, reviews, "
        "map listings, delivery apps and food posts. " + RAW_JSON_ONLY
    )
    intro = "Analyze this restaurant screenshot and extract restaurant information."
    field_lines = [
        "name: The restaurant name (required)",
        "address: The street address or the most specific location visible (required)",
        "cuisine: Type of cuisine (e.g., Italian, Thai, Cafe) if visible",
        "rating: Numeric rating between 0 and 5 if visible (number, not text)",
        "coordinates: Latitude/longitude object if visible, e.g. {\"lat\": 40.7, \"lng\": -73.9}",
        "phone: Phone number if visible",
        "website: Website URL if visible",
    ]
    json_format = (
        '{"name": "...", "address": "...", "cuisine": "...", "rating": 4.5, '
        '"coordinates": {"lat": 0.0, "lng": 0.0}, "phone": "...", "website": "https://..."}'
    )
