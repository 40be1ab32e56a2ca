"""
Models of the media entries embedded into tweets.

Only essentials fields defined for parsing purposes.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, field_validator

HLS_MANIFEST_CONTENT_TYPE = 'application/x-mpegURL'


class TweetMediaType(str, Enum):
    """Media kinds which the API is known to return"""

    photo = 'photo'
    video = 'video'
    animated_gif = 'animated_gif'


class VideoVariant(BaseModel):
    """One encoding of a video (mp4 with specific bitrate or HLS manifest)"""

    content_type: str
    url: str
    bitrate: int = 0

    @field_validator('bitrate', mode='before')
    @classmethod
    def _absent_bitrate_is_zero(cls, value: int | None) -> int:
        return 0 if value is None else value

    @property
    def is_manifest(self) -> bool:
        return self.content_type == HLS_MANIFEST_CONTENT_TYPE


class VideoInfo(BaseModel):
    variants: list[VideoVariant] = []


class TweetMedia(BaseModel):
    """
    Media entry of a tweet.

    `type` is kept as a plain string, unknown kinds must not break parsing.
    """

    type: str
    media_url_https: str
    video_info: VideoInfo | None = None


class ExtendedEntities(BaseModel):
    media: list[TweetMedia] = []
