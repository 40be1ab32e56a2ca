"""OAuth 1.0a request signing for the Twitter API and media CDN"""

from __future__ import annotations

from typing import TYPE_CHECKING

from oauthlib.oauth1 import Client
from yarl import URL

if TYPE_CHECKING:
    from collections.abc import Mapping

    from fav_downloader.src.infrastructure.configuration.config import Credentials


class OAuthSigner:
    """
    Sign GET requests with HMAC-SHA1 on behalf of the resource owner.

    The signature covers the query string, so the exact URL returned from `sign`
    must be requested (pass it to aiohttp with `encoded=True`).
    """

    def __init__(self, credentials: Credentials) -> None:
        self._client = Client(
            client_key=credentials.client_key,
            client_secret=credentials.client_secret,
            resource_owner_key=credentials.resource_owner_key,
            resource_owner_secret=credentials.resource_owner_secret,
        )

    def sign(
        self,
        url: str | URL,
        params: Mapping[str, str] | None = None,
    ) -> tuple[URL, dict[str, str]]:
        """Return the URL to request together with the `Authorization` header"""
        target = URL(str(url))
        if params:
            target = target.update_query(params)

        signed_uri, headers, _ = self._client.sign(str(target), http_method='GET')
        return URL(signed_uri, encoded=True), dict(headers)
