"""Implements the use case for synchronizing media of favorited tweets to the local directory."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING

from fav_downloader.src.application.media_extractor import extract_page_references
from fav_downloader.src.infrastructure.loggers.logger_instances import downloader_logger
from fav_downloader.src.infrastructure.twitter_api.core.client import ProtocolError
from fav_downloader.src.infrastructure.twitter_api.core.endpoints import (
    MAX_FAVORITES_PER_PAGE,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from fav_downloader.src.application.download_coordinator import (
        DownloadCoordinator,
        PageDownloadSummary,
    )
    from fav_downloader.src.infrastructure.loggers.base import RichLogger
    from fav_downloader.src.infrastructure.twitter_api.core.client import (
        TwitterAPIClient,
    )
    from fav_downloader.src.infrastructure.twitter_api.models.tweet import Tweet

# 75 requests per 15 minutes window
RATE_LIMIT_COOLDOWN_SECONDS = 900


@dataclass
class SyncSummary:
    """Totals of the whole run"""

    pages: int = 0
    tweets: int = 0
    assets_total: int = 0
    assets_downloaded: int = 0
    assets_skipped: int = 0
    assets_failed: int = 0

    def add_page(self, tweets_count: int, page_summary: PageDownloadSummary) -> None:
        self.pages += 1
        self.tweets += tweets_count
        self.assets_total += page_summary.total
        self.assets_downloaded += page_summary.succeeded
        self.assets_skipped += page_summary.skipped
        self.assets_failed += page_summary.failed


def oldest_tweet_id(tweets: Sequence[Tweet], previous_cursor: int | None) -> int:
    """
    Cursor for the next page: id of the last tweet of the page.

    Pages are ordered newest first, so the last id must be the smallest one
    and every id must be older than the previous cursor.
    """
    ids = [tweet.id for tweet in tweets]
    oldest = ids[-1]
    if oldest != min(ids):
        raise ProtocolError(
            f'Favorites are not ordered newest first, last id {oldest} is not the smallest ({min(ids)})',
        )
    if previous_cursor is not None and max(ids) >= previous_cursor:
        raise ProtocolError(
            f'Page contains tweet {max(ids)} which is not older than the cursor {previous_cursor}',
        )
    return oldest


class SyncFavoritesUseCase:
    """
    Use case for downloading media of the account favorites.

    Pages are requested one by one from newest to oldest, each page is fully downloaded
    before the next one is requested. Without `scan_all` only the newest page is processed.
    When the rate limit quota is exhausted the whole process waits for the next window.
    """

    def __init__(  # noqa: PLR0913
        self,
        *,
        twitter_api: TwitterAPIClient,
        coordinator: DownloadCoordinator,
        scan_all: bool,
        favorites_per_page: int = MAX_FAVORITES_PER_PAGE,
        rate_limit_cooldown_seconds: float = RATE_LIMIT_COOLDOWN_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        logger: RichLogger = downloader_logger,
    ) -> None:
        self.twitter_api = twitter_api
        self.coordinator = coordinator
        self.scan_all = scan_all
        self.favorites_per_page = favorites_per_page
        self.rate_limit_cooldown_seconds = rate_limit_cooldown_seconds
        self._sleep = sleep
        self.logger = logger

    async def execute(self) -> SyncSummary:
        summary = SyncSummary()
        cursor: int | None = None

        while True:
            screen_name = await self.twitter_api.get_screen_name()

            max_id = None if cursor is None else cursor - 1
            if max_id is not None:
                self.logger.info(f'Requesting favorites with max id: {max_id}')

            page = await self.twitter_api.get_favorites(
                screen_name,
                count=self.favorites_per_page,
                max_id=max_id,
            )
            if page.is_empty:
                self.logger.success('All done, no more favorites!')
                break

            self.logger.info(
                f'Fetched {len(page.tweets)} favorited tweets, remaining quota: {page.rate_limit_remaining}',
            )
            cursor = oldest_tweet_id(page.tweets, cursor)

            page_summary = await self.coordinator.download_all(
                extract_page_references(page.tweets),
            )
            summary.add_page(len(page.tweets), page_summary)

            if not self.scan_all:
                break

            if page.rate_limit_remaining == 0:
                self.logger.wait(
                    f'No quota left, sleeping {self.rate_limit_cooldown_seconds:.0f} seconds to recover...',
                )
                await self._sleep(self.rate_limit_cooldown_seconds)

        self.logger.success(
            f'Processed {summary.tweets} favorites on {summary.pages} page(s): '
            f'{summary.assets_downloaded} downloaded, {summary.assets_skipped} already present, '
            f'{summary.assets_failed} failed',
        )
        return summary
