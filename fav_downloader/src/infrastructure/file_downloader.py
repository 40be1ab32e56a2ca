"""Module to download media files with idempotent skip of already saved ones"""

from __future__ import annotations

import asyncio
from contextlib import suppress
from http import HTTPStatus
from typing import TYPE_CHECKING

import aiofiles
import aiohttp
from yarl import URL

from fav_downloader.src.domain.media import DownloadOutcome, DownloadStatus

if TYPE_CHECKING:
    from pathlib import Path

    from fav_downloader.src.domain.media import MediaReference
    from fav_downloader.src.infrastructure.twitter_api.utils.oauth_signer import (
        OAuthSigner,
    )

VIDEO_STREAM_EXTENSION = 'mp4'
PARTIAL_FILE_SUFFIX = '.part'


class MediaDownloadError(Exception):
    """Base class for errors of a single asset download"""


class FetchError(MediaDownloadError):
    """Raised when the asset couldn't be fetched (network, auth, bad status)"""


class StorageError(MediaDownloadError):
    """Raised when the asset couldn't be written to the destination"""


class UrlParseError(MediaDownloadError):
    """Raised when the url has no file name to save the asset under"""


def _parse(url: str) -> URL:
    try:
        parsed = URL(url)
    except (TypeError, ValueError) as e:
        raise UrlParseError(f'Malformed url: {url}') from e
    if not parsed.is_absolute():
        raise UrlParseError(f'Url is not absolute: {url}')
    return parsed


def _extension(name: str, url: str) -> str:
    stem, dot, extension = name.rpartition('.')
    if not dot or not stem or not extension:
        raise UrlParseError(f'No file extension in url: {url}')
    return extension


def media_filename(url: str) -> str:
    """Name of the file for the asset: last path segment without query"""
    name = _parse(url).name
    if not name:
        raise UrlParseError(f'No path segment in url: {url}')
    _extension(name, url)
    return name


def build_fetch_url(url: str) -> URL:
    """
    Url to actually request.

    Direct video streams are requested as is,
    images are requested in original resolution.
    """
    parsed = _parse(url)
    extension = _extension(parsed.name, url)
    if extension.lower() == VIDEO_STREAM_EXTENSION:
        return parsed
    return parsed.update_query(format=extension, name='orig')


class MediaDownloader:
    """
    Download single assets into a destination directory.

    The data is streamed into a `.part` file which is renamed only after the whole body was received,
    so an existing file with the final name is always complete and is never fetched again.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        signer: OAuthSigner,
        chunk_size: int = 64 * 1024,
    ) -> None:
        self.session = session
        self.signer = signer
        self.chunk_size = chunk_size

    async def download(
        self,
        reference: MediaReference,
        destination: Path,
    ) -> DownloadOutcome:
        if reference.url is None:
            raise UrlParseError(reference.unavailable_reason or 'Reference has no url')

        filename = media_filename(reference.url)
        file_path = destination / filename

        try:
            already_saved = file_path.exists()
        except OSError as e:
            raise StorageError(f"Can't check {file_path}: {e}") from e
        if already_saved:
            return DownloadOutcome(
                reference=reference,
                status=DownloadStatus.skipped,
                path=file_path,
            )

        try:
            destination.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Can't create {destination}: {e}") from e

        try:
            fetch_url, headers = self.signer.sign(build_fetch_url(reference.url))
        except ValueError as e:
            raise UrlParseError(f"Can't sign request for {reference.url}: {e}") from e

        try:
            async with self.session.get(fetch_url, headers=headers) as response:
                if response.status != HTTPStatus.OK:
                    raise FetchError(
                        f'Got {response.status} status for {reference.url}',
                    )
                await self._save(response, file_path)
        except aiohttp.ClientError as e:
            raise FetchError(f'Failed to fetch {reference.url}: {e}') from e
        except asyncio.TimeoutError as e:
            raise FetchError(f'Timed out fetching {reference.url}') from e

        return DownloadOutcome(
            reference=reference,
            status=DownloadStatus.succeeded,
            path=file_path,
        )

    async def _save(self, response: aiohttp.ClientResponse, file_path: Path) -> None:
        part_path = file_path.with_name(file_path.name + PARTIAL_FILE_SUFFIX)
        try:
            async with aiofiles.open(part_path, mode='wb') as file:
                async for chunk in response.content.iter_chunked(self.chunk_size):
                    await file.write(chunk)
            part_path.replace(file_path)
        except aiohttp.ClientError:
            raise
        except OSError as e:
            raise StorageError(f"Can't write {file_path}: {e}") from e
        finally:
            with suppress(OSError):
                part_path.unlink(missing_ok=True)
