"""Pick the best quality mp4 encoding of a video"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fav_downloader.src.infrastructure.twitter_api.models.media import VideoVariant


class SelectionError(Exception):
    """Raised when there is no variant suitable for downloading."""


def select_best_variant_url(variants: Sequence[VideoVariant]) -> str:
    """
    Return the url of the highest bitrate variant which isn't an HLS manifest.

    On equal bitrates the first one wins.
    """
    if not variants:
        raise SelectionError('Video has no variants')

    best: VideoVariant | None = None
    for variant in variants:
        if variant.is_manifest:
            continue
        if best is None or best.bitrate < variant.bitrate:
            best = variant

    if best is None:
        raise SelectionError(
            f'All {len(variants)} variants are streaming manifests, no direct stream to download',
        )
    return best.url
