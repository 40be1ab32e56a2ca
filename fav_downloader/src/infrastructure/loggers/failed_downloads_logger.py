"""Persist failed asset downloads so the user can inspect them after the run"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import TYPE_CHECKING

import aiofiles

if TYPE_CHECKING:
    from pathlib import Path


class FailedDownloadsLogger:
    """
    Append-only text log of failed downloads.

    Many download tasks can fail at the same time, so writes are serialized with a lock.
    The file is created lazily on the first error.
    """

    def __init__(self, file_path: Path) -> None:
        self.file_path = file_path
        self._lock = asyncio.Lock()

    async def add_error(self, message: str) -> None:
        timestamp = datetime.now(tz=timezone.utc).strftime('%Y-%m-%d %H:%M:%S')
        async with self._lock, aiofiles.open(self.file_path, mode='a', encoding='utf-8') as file:
            await file.write(f'[{timestamp}] {message}\n')
