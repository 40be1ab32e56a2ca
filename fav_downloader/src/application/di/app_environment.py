"""Build network sessions and shared services for the whole app run"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import aiohttp
from aiohttp_retry import RetryClient, RetryOptionsBase

from fav_downloader.src.infrastructure.file_downloader import MediaDownloader
from fav_downloader.src.infrastructure.twitter_api.core.client import TwitterAPIClient
from fav_downloader.src.infrastructure.twitter_api.utils.oauth_signer import OAuthSigner
from fav_downloader.src.interfaces.console_progress_reporter import ProgressReporter

if TYPE_CHECKING:
    from pathlib import Path
    from types import TracebackType

    from fav_downloader.src.infrastructure.configuration.config import Credentials
    from fav_downloader.src.infrastructure.loggers.base import RichLogger


class AppEnvironment:
    """
    Async context manager which owns the HTTP session for the run.

    API requests go through a retrying client (transport errors only),
    media downloads use the plain session and are attempted once.
    """

    @dataclass
    class AppConfig:
        credentials: Credentials
        target_directory: Path
        retry_options: RetryOptionsBase
        max_concurrent_downloads: int
        logger: RichLogger

    def __init__(self, config: AppConfig) -> None:
        self.config = config
        self.destination_directory = config.target_directory
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> AppEnvironment:
        self.destination_directory.mkdir(parents=True, exist_ok=True)

        self._session = aiohttp.ClientSession(
            connector=aiohttp.TCPConnector(limit=self.config.max_concurrent_downloads),
            timeout=aiohttp.ClientTimeout(total=None, sock_connect=30, sock_read=60),
        )
        signer = OAuthSigner(self.config.credentials)

        self.api_retry_client = RetryClient(
            client_session=self._session,
            retry_options=self.config.retry_options,
        )
        self.twitter_api_client = TwitterAPIClient(self.api_retry_client, signer)
        self.media_downloader = MediaDownloader(self._session, signer)

        self.progress_reporter = ProgressReporter(self.config.logger)
        self.progress_reporter.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.progress_reporter.stop()
        if self._session is not None:
            await self._session.close()
