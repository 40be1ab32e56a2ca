"""Raw API payloads shaped like the favorites endpoint responses"""

from __future__ import annotations

from typing import Any

from fav_downloader.src.infrastructure.twitter_api.models.tweet import Tweet

THUMBNAIL_URL = 'https://pbs.example.com/ext_tw_video_thumb/1/pu/img/thumb.jpg'
LOW_STREAM_URL = 'https://video.example.com/ext_tw_video/1/pu/vid/480x270/low.mp4?tag=12'
BEST_STREAM_URL = 'https://video.example.com/ext_tw_video/1/pu/vid/1280x720/best.mp4?tag=12'
MANIFEST_URL = 'https://video.example.com/ext_tw_video/1/pu/pl/playlist.m3u8?tag=12'


def photo_media(url: str) -> dict[str, Any]:
    return {'type': 'photo', 'media_url_https': url}


def video_media(thumbnail_url: str = THUMBNAIL_URL) -> dict[str, Any]:
    return {
        'type': 'video',
        'media_url_https': thumbnail_url,
        'video_info': {
            'variants': [
                {'content_type': 'video/mp4', 'bitrate': 256000, 'url': LOW_STREAM_URL},
                {'content_type': 'application/x-mpegURL', 'url': MANIFEST_URL},
                {'content_type': 'video/mp4', 'bitrate': 2176000, 'url': BEST_STREAM_URL},
            ],
        },
    }


def tweet_payload(tweet_id: int, *media: dict[str, Any]) -> dict[str, Any]:
    payload: dict[str, Any] = {'id': tweet_id, 'id_str': str(tweet_id), 'text': 'liked tweet'}
    if media:
        payload['extended_entities'] = {'media': list(media)}
    return payload


def make_tweet(tweet_id: int, *media: dict[str, Any]) -> Tweet:
    return Tweet.model_validate(tweet_payload(tweet_id, *media))
