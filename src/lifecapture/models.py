from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class ScreenshotType(str, Enum):
    EVENT = "event"
    SONG = "song"
    VIDEO = "video"
    RESTAURANT = "restaurant"
    LINK = "link"
    SOCIAL_POST = "social_post"
    NOTE = "note"


class Record(BaseModel):
    """Base for every extracted record.

    Attributes are snake_case; the model speaks camelCase on the wire
    (``endDate``, ``spotifyId``...) because that is what the prompts ask for.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


def _not_blank(v: str) -> str:
    v2 = v.strip()
    if not v2:
        raise ValueError("must not be blank")
    return v2


class EventData(Record):
    title: str
    date: str
    time: str
    host: str = ""
    end_date: Optional[str] = None
    end_time: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None

    @field_validator("title", "date", "time")
    @classmethod
    def required_not_blank(cls, v: str) -> str:
        return _not_blank(v)

    @field_validator("host", mode="before")
    @classmethod
    def host_none_to_empty(cls, v):
        return "" if v is None else v


class SongData(Record):
    title: str
    artist: str
    album: Optional[str] = None
    duration: Optional[str] = None
    spotify_id: Optional[str] = None
    youtube_id: Optional[str] = None
    apple_music_id: Optional[str] = None

    @field_validator("title", "artist")
    @classmethod
    def required_not_blank(cls, v: str) -> str:
        return _not_blank(v)


class VideoData(Record):
    title: str
    channel: str
    url: Optional[str] = None
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    video_id: Optional[str] = None

    @field_validator("title", "channel")
    @classmethod
    def required_not_blank(cls, v: str) -> str:
        return _not_blank(v)


class Coordinates(Record):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class RestaurantData(Record):
    name: str
    address: str
    cuisine: Optional[str] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    coordinates: Optional[Coordinates] = None
    phone: Optional[str] = None
    website: Optional[str] = None

    @field_validator("name", "address")
    @classmethod
    def required_not_blank(cls, v: str) -> str:
        return _not_blank(v)


class LinkData(Record):
    title: str
    url: str
    description: Optional[str] = None
    favicon: Optional[str] = None

    @field_validator("title", "url")
    @classmethod
    def required_not_blank(cls, v: str) -> str:
        return _not_blank(v)


class SocialPostData(Record):
    author: str
    content: str
    platform: Optional[str] = None
    url: Optional[str] = None
    timestamp: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("author", "content")
    @classmethod
    def required_not_blank(cls, v: str) -> str:
        return _not_blank(v)


class NoteData(Record):
    title: str
    content: str
    tags: List[str] = Field(default_factory=list)
    source: Optional[str] = None

    @field_validator("title", "content")
    @classmethod
    def required_not_blank(cls, v: str) -> str:
        return _not_blank(v)

    @field_validator("tags", mode="before")
    @classmethod
    def tags_none_to_empty(cls, v):
        return [] if v is None else v


ExtractedData = Union[
    EventData, SongData, VideoData, RestaurantData, LinkData, SocialPostData, NoteData
]

RECORD_MODELS: Dict[ScreenshotType, Type[Record]] = {
    ScreenshotType.EVENT: EventData,
    ScreenshotType.SONG: SongData,
    ScreenshotType.VIDEO: VideoData,
    ScreenshotType.RESTAURANT: RestaurantData,
    ScreenshotType.LINK: LinkData,
    ScreenshotType.SOCIAL_POST: SocialPostData,
    ScreenshotType.NOTE: NoteData,
}


class ClassificationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: ScreenshotType
    confidence: float = Field(..., ge=0.0, le=1.0)


class ExtractedResult(BaseModel):
    """Tagged record handed to the presentation/export layer."""

    model_config = ConfigDict(frozen=True)

    type: ScreenshotType
    data: ExtractedData
    confidence: float = Field(..., ge=0.0, le=1.0)

    @model_validator(mode="after")
    def type_matches_data(self) -> "ExtractedResult":
        expected = RECORD_MODELS[self.type]
        if type(self.data) is not expected:
            raise ValueError(
                f"{self.type.value} result cannot carry {type(self.data).__name__}"
            )
        return self

    def to_payload(self) -> dict:
        return {
            "type": self.type.value,
            "data": self.data.model_dump(by_alias=True, exclude_none=True),
            "confidence": self.confidence,
        }
