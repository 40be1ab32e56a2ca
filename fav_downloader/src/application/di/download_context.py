"""Define the DownloadContext dataclass and its dependencies for the download workflow."""

from dataclasses import dataclass
from pathlib import Path

from fav_downloader.src.infrastructure.file_downloader import MediaDownloader
from fav_downloader.src.infrastructure.loggers.base import RichLogger
from fav_downloader.src.infrastructure.loggers.failed_downloads_logger import (
    FailedDownloadsLogger,
)
from fav_downloader.src.interfaces.console_progress_reporter import ProgressReporter


@dataclass
class DownloadContext:
    """Aggregates dependencies and configuration for the download workflow."""

    downloader: MediaDownloader
    destination: Path
    progress_reporter: ProgressReporter
    failed_downloads_logger: FailedDownloadsLogger
    logger: RichLogger
    max_concurrent_downloads: int = 50
