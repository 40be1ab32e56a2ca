"""Concurrent downloading of all media found on a page of favorites"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING

from fav_downloader.src.domain.media import (
    DownloadOutcome,
    DownloadStatus,
    MediaReference,
)
from fav_downloader.src.infrastructure.file_downloader import MediaDownloadError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fav_downloader.src.application.di.download_context import DownloadContext


@dataclass(frozen=True)
class PageDownloadSummary:
    total: int
    succeeded: int
    skipped: int
    failed: int

    @property
    def completed(self) -> int:
        """Number of assets which are present on disk after the page"""
        return self.succeeded + self.skipped

    @classmethod
    def from_outcomes(cls, outcomes: Sequence[DownloadOutcome]) -> PageDownloadSummary:
        def count(status: DownloadStatus) -> int:
            return sum(1 for outcome in outcomes if outcome.status is status)

        return cls(
            total=len(outcomes),
            succeeded=count(DownloadStatus.succeeded),
            skipped=count(DownloadStatus.skipped),
            failed=count(DownloadStatus.failed),
        )


class DownloadCoordinator:
    """
    Fan out downloads of a page with a fixed concurrency ceiling.

    A failure of one asset is logged and counted, it never cancels the other downloads.
    Completion order is not preserved, only the aggregated result matters.
    """

    def __init__(self, context: DownloadContext) -> None:
        self.context = context

    async def download_all(
        self,
        references: Sequence[MediaReference],
    ) -> PageDownloadSummary:
        downloadable = [ref for ref in references if ref.is_downloadable]
        self.context.logger.info(f'Parsed {len(downloadable)} media urls')
        if not downloadable:
            return PageDownloadSummary(total=0, succeeded=0, skipped=0, failed=0)

        semaphore = asyncio.Semaphore(self.context.max_concurrent_downloads)
        reporter = self.context.progress_reporter
        task_id = reporter.create_task(
            'Downloading media',
            total=len(downloadable),
            indent_level=1,
        )

        async def _limited(reference: MediaReference) -> DownloadOutcome:
            async with semaphore:
                outcome = await self._download_one(reference)
            reporter.update_task(task_id, advance=1)
            return outcome

        try:
            outcomes = await asyncio.gather(*(_limited(ref) for ref in downloadable))
        finally:
            reporter.complete_task(task_id)

        summary = PageDownloadSummary.from_outcomes(outcomes)
        self.context.logger.success(
            f'Total downloaded: {summary.completed}/{summary.total}'
            f' (new: {summary.succeeded}, already present: {summary.skipped}, failed: {summary.failed})',
        )
        return summary

    async def _download_one(self, reference: MediaReference) -> DownloadOutcome:
        if reference.url is None:
            return await self._fail(
                reference,
                reference.unavailable_reason or 'no url to download',
            )

        try:
            outcome = await self.context.downloader.download(
                reference,
                self.context.destination,
            )
        except MediaDownloadError as e:
            return await self._fail(reference, str(e))

        if outcome.status is DownloadStatus.skipped:
            self.context.logger.info(
                f'{reference.url} already exists, skipping',
                tab_level=1,
            )
        else:
            self.context.logger.success(f'{reference.url} downloaded', tab_level=1)
        return outcome

    async def _fail(self, reference: MediaReference, reason: str) -> DownloadOutcome:
        self.context.logger.error(
            f'Failed to download {reference.kind.value} from tweet {reference.tweet_id}: {reason}',
            tab_level=1,
        )
        await self.context.failed_downloads_logger.add_error(
            f'tweet {reference.tweet_id} {reference.kind.value} {reference.url}: {reason}',
        )
        return DownloadOutcome(
            reference=reference,
            status=DownloadStatus.failed,
            reason=reason,
        )
