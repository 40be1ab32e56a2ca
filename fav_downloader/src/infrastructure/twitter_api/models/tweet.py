"""The module describes the form of a favorited tweet"""

from __future__ import annotations

from pydantic import BaseModel, Field

from fav_downloader.src.infrastructure.twitter_api.models.media import ExtendedEntities


class Tweet(BaseModel):
    """Tweet with its embedded media (if any)"""

    id: int = Field(ge=0)
    extended_entities: ExtendedEntities | None = None
