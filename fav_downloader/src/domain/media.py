"""Domain representation of downloadable media and download results"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class MediaKind(Enum):
    """Classification of a media entry found in a tweet"""

    photo = 'photo'
    video = 'video'
    animated_image = 'animated_image'
    unsupported = 'unsupported'


DOWNLOADABLE_KINDS = frozenset({MediaKind.photo, MediaKind.video})


@dataclass(frozen=True)
class MediaReference:
    """
    Single downloadable unit derived from a tweet.

    `url` is None only for videos whose stream couldn't be resolved,
    `unavailable_reason` explains why in that case.
    """

    kind: MediaKind
    url: str | None
    tweet_id: int
    unavailable_reason: str | None = None

    @property
    def is_downloadable(self) -> bool:
        return self.kind in DOWNLOADABLE_KINDS


class DownloadStatus(Enum):
    succeeded = 'succeeded'
    skipped = 'skipped'
    failed = 'failed'


@dataclass(frozen=True)
class DownloadOutcome:
    reference: MediaReference
    status: DownloadStatus
    path: Path | None = None
    reason: str | None = None
