"""Main entrypoint of the app"""

from __future__ import annotations

import asyncio
import sys
from typing import TYPE_CHECKING

import aiohttp
import typer
from aiohttp.client_exceptions import ClientConnectorError
from aiohttp_retry import ExponentialRetry

from fav_downloader.src.application.di.app_environment import AppEnvironment
from fav_downloader.src.application.di.download_context import DownloadContext
from fav_downloader.src.application.download_coordinator import DownloadCoordinator
from fav_downloader.src.application.use_cases.sync_favorites import (
    SyncFavoritesUseCase,
)
from fav_downloader.src.infrastructure.configuration.config import (
    ConfigError,
    init_config,
)
from fav_downloader.src.infrastructure.loggers.logger_instances import (
    downloader_logger,
    failed_downloads_logger,
)
from fav_downloader.src.infrastructure.twitter_api.core.client import (
    ProtocolError,
    TwitterAPIRateLimitError,
    TwitterAPIUnauthorizedError,
    TwitterAPIUnknownError,
)
from fav_downloader.src.interfaces.cli_options import (
    # ---------------------------------------------------------------------------
    # These imports can't be moved to TYPE_CHECKING
    # because they are used by typer at runtime.
    #
    SavePathOption,  # noqa: TC001
    ScanAllOption,  # noqa: TC001
    VersionOption,  # noqa: TC001
)

if TYPE_CHECKING:
    from pathlib import Path

typer_app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode='rich',
)


@typer_app.callback()
def typer_app_callback(
    version: VersionOption = False,  # noqa: ARG001 (handled by the eager callback)
) -> None:
    """Download media (photos and videos) from tweets you liked."""


async def download_handler(*, save_path: Path | None, scan_all: bool) -> None:
    """Download media of favorited tweets of the authorized account"""
    config = init_config()

    downloading_settings = config.downloading_settings
    if save_path is not None:
        downloader_logger.info(f'Path for media saving: {save_path}')
        downloading_settings.target_directory = save_path

    retry_options = ExponentialRetry(
        attempts=3,
        exceptions={
            aiohttp.ClientConnectorError,
            aiohttp.ClientOSError,
            aiohttp.ServerDisconnectedError,
        },
    )

    async with AppEnvironment(
        config=AppEnvironment.AppConfig(
            credentials=config.credentials,
            target_directory=downloading_settings.target_directory.absolute(),
            retry_options=retry_options,
            max_concurrent_downloads=downloading_settings.max_concurrent_downloads,
            logger=downloader_logger,
        ),
    ) as app_environment:
        download_context = DownloadContext(
            downloader=app_environment.media_downloader,
            destination=app_environment.destination_directory,
            progress_reporter=app_environment.progress_reporter,
            failed_downloads_logger=failed_downloads_logger,
            logger=downloader_logger,
            max_concurrent_downloads=downloading_settings.max_concurrent_downloads,
        )

        summary = await SyncFavoritesUseCase(
            twitter_api=app_environment.twitter_api_client,
            coordinator=DownloadCoordinator(download_context),
            scan_all=scan_all,
            favorites_per_page=downloading_settings.favorites_per_page,
            rate_limit_cooldown_seconds=downloading_settings.rate_limit_cooldown_seconds,
        ).execute()

        if summary.assets_failed:
            downloader_logger.warning(
                f'Check the failed downloads log at: {failed_downloads_logger.file_path.absolute()}',
            )


@typer_app.command()
def download(
    *,
    save_path: SavePathOption = None,
    scan_all: ScanAllOption = False,
) -> None:
    """
    Download media from your liked tweets.

    - By default only the recent 200 favorites are processed, use `--scan-all` for the whole history.
    - Files which already exist in the destination are never downloaded again, so re-runs are cheap.
    - Credentials are read from APP_CLIENT_KEY, APP_CLIENT_SECRET, RESOURCE_OWNER_KEY, RESOURCE_OWNER_SECRET.
    """
    asyncio.run(download_handler(save_path=save_path, scan_all=scan_all))


def entry_point() -> None:
    """
    Run main entry point of the whole app.

    Fatal errors are reported to the user and the process exits with non-zero status.
    """
    try:
        typer_app()
    except ConfigError as e:
        downloader_logger.error(str(e))
        sys.exit(1)
    except TwitterAPIUnauthorizedError as e:
        downloader_logger.error(
            f'Unauthorized: bad credentials, please check your keys ({e})',
        )
        sys.exit(1)
    except TwitterAPIRateLimitError as e:
        downloader_logger.error(f'Rate limit exceeded: {e}, try again in 15 minutes')
        sys.exit(1)
    except ProtocolError as e:
        downloader_logger.error(
            'Twitter API returned unexpected structures, the client probably needs to be updated.\n'
            f'Details: {e} {e.errors!s}',
        )
        sys.exit(1)
    except TwitterAPIUnknownError as e:
        downloader_logger.error(f'Unknown error occurred: {e}')
        sys.exit(1)
    except ClientConnectorError:
        downloader_logger.error(
            'Network error: Unable to connect to Twitter API, please check your internet connection.',
        )
        sys.exit(1)


if __name__ == '__main__':
    entry_point()
