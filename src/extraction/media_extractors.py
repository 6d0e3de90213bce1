from __future__ import annotations

from extraction.base import RAW_JSON_ONLY, BaseExtractor
from lifecapture.models import SongData, ScreenshotType, VideoData


class SongExtractor(BaseExtractor):
    screenshot_type = ScreenshotType.SONG
    record_model = SongData
    system_prompt = (
        "You are an expert at extracting song information from music app screenshots. "
        + RAW_JSON_ONLY
    )
    intro = "Analyze this music app screenshot and extract song information."
    field_lines = [
        "title: The song/track title (required)",
        "artist: The artist name (required)",
        "album: The album name (if visible)",
        "duration: The song duration in format MM:SS or HH:MM:SS (if visible)",
        "spotifyId: Spotify track ID if visible in URL or text (e.g., spotify:track:xxxxx)",
        "youtubeId: YouTube video ID if visible in URL or text (e.g., ?v=xxxxx)",
        "appleMusicId: Apple Music track ID if visible in URL or text",
    ]
    json_format = (
        '{"title": "...", "artist": "...", "album": "...", "duration": "...", '
        '"spotifyId": "...", "youtubeId": "...", "appleMusicId": "..."}'
    )


class VideoExtractor(BaseExtractor):
    screenshot_type = ScreenshotType.VIDEO
    record_model = VideoData
    system_prompt = (
        "You are an expert at extracting video information from YouTube and video "
        "platform screenshots. " + RAW_JSON_ONLY
    )
    intro = "Analyze this video platform screenshot and extract video information."
    field_lines = [
        "title: The video title (required)",
        "channel: The channel/creator name (required)",
        "url: The full video URL if visible (e.g., https://youtube.com/watch?v=xxxxx)",
        "description: Video description if visible",
        "thumbnail: Thumbnail URL if visible",
        "videoId: YouTube video ID if visible in URL (extract from ?v=xxxxx or /watch?v=xxxxx)",
    ]
    json_format = (
        '{"title": "...", "channel": "...", "url": "...", "description": "...", '
        '"thumbnail": "...", "videoId": "..."}'
    )
