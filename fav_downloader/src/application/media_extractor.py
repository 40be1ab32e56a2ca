"""Extract downloadable media references from favorited tweets"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fav_downloader.src.application.bitrate_selector import (
    SelectionError,
    select_best_variant_url,
)
from fav_downloader.src.domain.media import MediaKind, MediaReference
from fav_downloader.src.infrastructure.loggers.logger_instances import downloader_logger
from fav_downloader.src.infrastructure.twitter_api.models.media import (
    TweetMedia,
    TweetMediaType,
)

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from fav_downloader.src.infrastructure.twitter_api.models.tweet import Tweet


def _video_references(tweet_id: int, media: TweetMedia) -> Iterator[MediaReference]:
    """
    Thumbnail and best stream of a video, always exactly two references.

    The thumbnail doesn't depend on the variants and is downloaded anyway.
    If no stream can be selected only the stream reference is failed: it
    carries no url and the selection error as `unavailable_reason`.
    """
    yield MediaReference(
        kind=MediaKind.photo,
        url=media.media_url_https,
        tweet_id=tweet_id,
    )

    variants = media.video_info.variants if media.video_info else []
    try:
        stream_url = select_best_variant_url(variants)
    except SelectionError as e:
        downloader_logger.warning(
            f'No downloadable stream for video in tweet {tweet_id}: {e}',
            tab_level=1,
        )
        yield MediaReference(
            kind=MediaKind.video,
            url=None,
            tweet_id=tweet_id,
            unavailable_reason=str(e),
        )
        return

    yield MediaReference(kind=MediaKind.video, url=stream_url, tweet_id=tweet_id)


def extract_media_references(tweet: Tweet) -> list[MediaReference]:
    """
    Classify the media of a tweet, preserving their order.

    - photo: one reference
    - video: thumbnail + best bitrate stream
    - animated gif and unknown kinds: marked as not downloadable
    """
    if tweet.extended_entities is None:
        return []

    references: list[MediaReference] = []
    for media in tweet.extended_entities.media:
        if media.type == TweetMediaType.photo.value:
            references.append(
                MediaReference(
                    kind=MediaKind.photo,
                    url=media.media_url_https,
                    tweet_id=tweet.id,
                ),
            )
        elif media.type == TweetMediaType.video.value:
            references.extend(_video_references(tweet.id, media))
        else:
            kind = (
                MediaKind.animated_image
                if media.type == TweetMediaType.animated_gif.value
                else MediaKind.unsupported
            )
            downloader_logger.info(
                f'Unsupported media type [yellow]{media.type}[/yellow] in tweet {tweet.id}, skipping',
                tab_level=1,
            )
            references.append(
                MediaReference(kind=kind, url=media.media_url_https, tweet_id=tweet.id),
            )
    return references


def extract_page_references(tweets: Sequence[Tweet]) -> list[MediaReference]:
    """Extract references from all the tweets of a page, keeping tweets order"""
    return [
        reference
        for tweet in tweets
        for reference in extract_media_references(tweet)
    ]
