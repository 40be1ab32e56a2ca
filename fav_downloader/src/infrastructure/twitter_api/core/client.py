"""Twitter API client for accessing favorites of the authorized account."""

from __future__ import annotations

from http import HTTPStatus
from typing import TYPE_CHECKING, Any

import aiohttp
from pydantic import ValidationError

from fav_downloader.src.infrastructure.twitter_api.core.endpoints import (
    ACCOUNT_SETTINGS,
    BASE_URL,
    FAVORITES_LIST,
    MAX_FAVORITES_PER_PAGE,
    RATE_LIMIT_REMAINING_HEADER,
)
from fav_downloader.src.infrastructure.twitter_api.models.favorites_page import (
    FavoritesPage,
)
from fav_downloader.src.infrastructure.twitter_api.models.tweet import Tweet
from fav_downloader.src.infrastructure.twitter_api.utils.filter_none_params import (
    filter_none_params,
)

if TYPE_CHECKING:
    from aiohttp_retry import RetryClient
    from pydantic_core import ErrorDetails

    from fav_downloader.src.infrastructure.twitter_api.utils.oauth_signer import (
        OAuthSigner,
    )


class TwitterAPIError(Exception):
    """Base class for all Twitter API related errors."""


class TwitterAPIUnauthorizedError(TwitterAPIError):
    """Raised when credentials are invalid, expired or lack permissions (401/403)."""


class TwitterAPIRateLimitError(TwitterAPIError):
    """Raised when the API rejects the request because of the rate limit (429)."""


class TwitterAPIUnknownError(TwitterAPIError):
    """Raised when the API returns unexpected status code."""

    details: str

    def __init__(self, status_code: int, details: str) -> None:
        super().__init__(f'Twitter returned unknown error[{status_code}]: {details}')
        self.details = details


class ProtocolError(TwitterAPIError):
    """
    Raised when the response doesn't match the expected structure.

    It can happen if the API contract changes, the client should be updated then.
    """

    errors: list[ErrorDetails]

    def __init__(self, message: str, errors: list[ErrorDetails] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class TwitterAPIClient:
    """
    Main client class for the Twitter API.

    Every request is signed with the account credentials via the provided signer.
    """

    def __init__(
        self,
        session: RetryClient,
        signer: OAuthSigner,
        base_url: str = BASE_URL,
    ) -> None:
        self.session = session
        self.signer = signer
        self.base_url = base_url

    async def _get(
        self,
        endpoint: str,
        params: dict[str, str] | None = None,
    ) -> tuple[Any, aiohttp.ClientResponse]:
        url, headers = self.signer.sign(self.base_url + endpoint, params)
        response = await self.session.get(url, headers=headers)

        if response.status != HTTPStatus.OK:
            response.release()

        if response.status in (HTTPStatus.UNAUTHORIZED, HTTPStatus.FORBIDDEN):
            raise TwitterAPIUnauthorizedError(
                f'Request to {endpoint} was rejected ({response.status})',
            )
        if response.status == HTTPStatus.TOO_MANY_REQUESTS:
            raise TwitterAPIRateLimitError(f'Rate limit exceeded for {endpoint}')
        if response.status != HTTPStatus.OK:
            raise TwitterAPIUnknownError(
                response.status, f'Unexpected status code: {response.status}'
            )

        try:
            data = await response.json()
        except (aiohttp.ContentTypeError, ValueError) as e:
            raise ProtocolError(f'{endpoint} returned non-JSON body') from e

        return data, response

    async def get_screen_name(self) -> str:
        """Resolve the handle of the account which owns the credentials"""
        data, _ = await self._get(ACCOUNT_SETTINGS)

        screen_name = data.get('screen_name') if isinstance(data, dict) else None
        if not isinstance(screen_name, str) or not screen_name:
            raise ProtocolError('No screen_name in account settings response')
        return screen_name

    async def get_favorites(
        self,
        screen_name: str,
        count: int = MAX_FAVORITES_PER_PAGE,
        max_id: int | None = None,
    ) -> FavoritesPage:
        """
        Request one page of favorited tweets, newest first.

        To get older tweets repeat the request with `max_id` lower than the smallest id already seen.
        """
        data, response = await self._get(
            FAVORITES_LIST,
            params=filter_none_params(
                {
                    'screen_name': screen_name,
                    'count': min(count, MAX_FAVORITES_PER_PAGE),
                    'max_id': max_id,
                },
            ),
        )

        if not isinstance(data, list):
            raise ProtocolError(
                f'Favorites response is not an array: {type(data).__name__}',
            )

        try:
            tweets = [Tweet.model_validate(tweet) for tweet in data]
        except ValidationError as e:
            raise ProtocolError('Unexpected tweet structure', errors=e.errors()) from e

        remaining = response.headers.get(RATE_LIMIT_REMAINING_HEADER)
        try:
            rate_limit_remaining = int(remaining)  # type: ignore[arg-type]
            if rate_limit_remaining < 0:
                raise ValueError(remaining)
        except (TypeError, ValueError) as e:
            raise ProtocolError(
                f'Missing or invalid {RATE_LIMIT_REMAINING_HEADER} header: {remaining!r}',
            ) from e

        return FavoritesPage(tweets=tweets, rate_limit_remaining=rate_limit_remaining)
