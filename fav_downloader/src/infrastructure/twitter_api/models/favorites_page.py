"""Models for favorites responses"""

from pydantic import BaseModel, Field

from fav_downloader.src.infrastructure.twitter_api.models.tweet import Tweet


class FavoritesPage(BaseModel):
    """
    One page of favorited tweets (newest first).

    `rate_limit_remaining` is the number of requests left in the current rate limit window.
    """

    tweets: list[Tweet]
    rate_limit_remaining: int = Field(ge=0)

    @property
    def is_empty(self) -> bool:
        return len(self.tweets) == 0
