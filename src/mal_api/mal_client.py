"""MyAnimeList API client."""

import logging
from typing import Optional, Union

import requests

from .base_client import BaseAPIClient
from .config import ClientConfig
from .constants import HTTP_NO_CONTENT, ListType
from .credentials import Credentials
from .decoder import decode_search
from .exceptions import AuthError
from .models import AnimeInfo, MangaInfo
from .request_builder import RequestBuilder

logger = logging.getLogger(__name__)


class MALClient(BaseAPIClient):
    """Client for the MyAnimeList XML API.

    Credentials and configuration are passed in explicitly; the client
    owns one HTTP session and hands itself to the list handles it creates.
    """

    SERVICE_NAME = "MyAnimeList"

    def __init__(
        self,
        credentials: Credentials,
        config: Optional[ClientConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        """Initialize MAL client with account credentials."""
        super().__init__(config=config, session=session)
        self.credentials = credentials
        self.requests = RequestBuilder(
            credentials,
            base_url=self.config.base_url,
            user_agent=self.config.user_agent,
        )

    @property
    def username(self) -> str:
        return self.credentials.username

    def search(self, list_type: ListType, query: str) -> list[Union[AnimeInfo, MangaInfo]]:
        """Search the anime or manga catalog by title."""
        request = self.requests.build_search(list_type, query)
        response = self.send(request, self.SERVICE_NAME)
        if response.status_code == HTTP_NO_CONTENT:
            logger.info(f"No {ListType(list_type).value} found for '{query}'")
            return []
        results = decode_search(response.text, list_type)
        logger.info(f"Found {len(results)} {ListType(list_type).value} results for '{query}'")
        return results

    def search_anime(self, query: str) -> list[AnimeInfo]:
        return self.search(ListType.ANIME, query)

    def search_manga(self, query: str) -> list[MangaInfo]:
        return self.search(ListType.MANGA, query)

    def verify_credentials(self) -> bool:
        """Return True if MyAnimeList accepts the credentials."""
        request = self.requests.build_verify_credentials()
        try:
            self.send(request, self.SERVICE_NAME)
        except AuthError:
            return False
        logger.info(f"Verified credentials for {self.username}")
        return True

    def anime_list(self) -> "AnimeList":
        """Return a handle on the user's anime list."""
        from .lists import AnimeList

        return AnimeList(self)

    def manga_list(self) -> "MangaList":
        """Return a handle on the user's manga list."""
        from .lists import MangaList

        return MangaList(self)
