"""Shared fixtures for Twitter API integration tests."""

import logging
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from aiohttp import ClientSession
from aiohttp_retry import ExponentialRetry, RetryClient
from integration.configuration import IntegrationTestConfig
from pydantic import ValidationError

from fav_downloader.src.infrastructure.configuration.config import Credentials
from fav_downloader.src.infrastructure.twitter_api.core.client import TwitterAPIClient
from fav_downloader.src.infrastructure.twitter_api.utils.oauth_signer import OAuthSigner

logger = logging.getLogger(__name__)


@pytest.fixture(scope='session')
def integration_config() -> IntegrationTestConfig:
    """
    Provides configuration for integration tests.

    If the credentials are not configured, the tests are skipped.
    """
    try:
        return IntegrationTestConfig()  # pyright: ignore[reportCallIssue] : will be loaded automatically by pydantic_settings

    except ValidationError as e:
        for err in e.errors():
            loc = '.'.join(map(str, err['loc']))
            logger.warning(f'  - {loc}: {err["msg"]}')
        pytest.skip('Integration tests require real API credentials')


@pytest.fixture
def credentials(integration_config: IntegrationTestConfig) -> Credentials:
    return Credentials(
        client_key=integration_config.app_client_key,
        client_secret=integration_config.app_client_secret,
        resource_owner_key=integration_config.resource_owner_key,
        resource_owner_secret=integration_config.resource_owner_secret,
    )


@pytest_asyncio.fixture
async def retry_client() -> AsyncGenerator[RetryClient, None]:
    """Creates a retry client for handling transient failures."""
    client = RetryClient(
        client_session=ClientSession(),
        retry_options=ExponentialRetry(attempts=3, start_timeout=1.0),
    )
    yield client
    await client.close()


@pytest_asyncio.fixture
async def twitter_client(
    retry_client: RetryClient,
    credentials: Credentials,
) -> TwitterAPIClient:
    return TwitterAPIClient(retry_client, OAuthSigner(credentials))


@pytest_asyncio.fixture
async def invalid_twitter_client(retry_client: RetryClient) -> TwitterAPIClient:
    """Client with credentials which look valid but aren't"""
    return TwitterAPIClient(
        retry_client,
        OAuthSigner(
            Credentials(
                client_key='a' * 25,
                client_secret='b' * 50,
                resource_owner_key='1-' + 'c' * 40,
                resource_owner_secret='d' * 45,
            ),
        ),
    )
