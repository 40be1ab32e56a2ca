import asyncio

import pytest

from fav_downloader.src.infrastructure.loggers.failed_downloads_logger import (
    FailedDownloadsLogger,
)


@pytest.mark.asyncio
async def test_errors_are_appended_line_by_line(tmp_path):
    log_path = tmp_path / 'failed_downloads.txt'
    logger = FailedDownloadsLogger(file_path=log_path)

    await asyncio.gather(*(logger.add_error(f'asset {idx} failed') for idx in range(20)))

    lines = log_path.read_text(encoding='utf-8').splitlines()
    assert len(lines) == 20
    assert {line.split('] ', 1)[1] for line in lines} == {
        f'asset {idx} failed' for idx in range(20)
    }


@pytest.mark.asyncio
async def test_file_is_not_created_without_errors(tmp_path):
    FailedDownloadsLogger(file_path=tmp_path / 'failed_downloads.txt')

    assert not (tmp_path / 'failed_downloads.txt').exists()
