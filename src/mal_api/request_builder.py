"""Construction of MyAnimeList API requests."""

import logging
from typing import Optional

from pydantic import BaseModel, Field

from .constants import (
    DEFAULT_BASE_URL,
    DEFAULT_USER_AGENT,
    ENTRY_PATH,
    LIST_READ_PATH,
    SEARCH_PATH,
    VERIFY_CREDENTIALS_PATH,
    ListType,
)
from .credentials import Credentials
from .exceptions import AuthError, ValidationError
from .values import EntryValues

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class ApiRequest(BaseModel):
    """A fully formed request, ready to be sent."""

    method: str
    url: str
    params: dict[str, str] = Field(default_factory=dict)
    headers: dict[str, str] = Field(default_factory=dict)
    data: Optional[dict[str, str]] = None

    @property
    def entry_xml(self) -> Optional[str]:
        """The ``<entry>`` document carried by an add/update request."""
        if self.data is None:
            return None
        return self.data.get("data")


class RequestBuilder:
    """Builds requests for one account against one MyAnimeList host."""

    def __init__(
        self,
        credentials: Credentials,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent

    def _headers(self, authenticated: bool = True) -> dict[str, str]:
        headers = {"User-Agent": self.user_agent}
        if authenticated:
            if not self.credentials.has_secret:
                raise AuthError(
                    401,
                    message=f"a password or API key is required for user '{self.credentials.username}'",
                )
            headers.update(self.credentials.auth_headers())
        return headers

    @staticmethod
    def _check_series_id(series_id: int) -> int:
        if isinstance(series_id, bool) or not isinstance(series_id, int) or series_id <= 0:
            raise ValidationError("series_id", f"expected a positive integer, got {series_id!r}")
        return series_id

    def _entry_url(self, list_type: ListType, action: str, series_id: int) -> str:
        path = ENTRY_PATH.format(
            list_type=ListType(list_type).value,
            action=action,
            series_id=self._check_series_id(series_id),
        )
        return self.base_url + path

    def build_read_list(self, list_type: ListType, username: Optional[str] = None) -> ApiRequest:
        """Build a request for every entry on a user's list.

        The list endpoint is public, so no auth header is attached.
        """
        username = username or self.credentials.username
        return ApiRequest(
            method="GET",
            url=self.base_url + LIST_READ_PATH,
            params={"u": username, "status": "all", "type": ListType(list_type).value},
            headers=self._headers(authenticated=False),
        )

    def build_search(self, list_type: ListType, query: str) -> ApiRequest:
        if not query or not query.strip():
            raise ValidationError("query", "search query must not be empty")
        return ApiRequest(
            method="GET",
            url=self.base_url + SEARCH_PATH.format(list_type=ListType(list_type).value),
            params={"q": query.strip()},
            headers=self._headers(),
        )

    def _build_write(self, action: str, list_type: ListType, series_id: int, values: EntryValues) -> ApiRequest:
        url = self._entry_url(list_type, action, series_id)
        headers = self._headers()
        headers["Content-Type"] = FORM_CONTENT_TYPE
        body = values.to_xml()
        logger.debug(f"Built {action} request for {ListType(list_type).value} {series_id} with fields: {sorted(values.changes())}")
        return ApiRequest(method="POST", url=url, headers=headers, data={"data": body})

    def build_add_entry(self, list_type: ListType, series_id: int, values: EntryValues) -> ApiRequest:
        """Build a request adding a series with its staged values."""
        return self._build_write("add", list_type, series_id, values)

    def build_update_entry(self, list_type: ListType, series_id: int, values: EntryValues) -> ApiRequest:
        """Build a request sending only the staged fields of an entry."""
        return self._build_write("update", list_type, series_id, values)

    def build_delete_entry(self, list_type: ListType, series_id: int) -> ApiRequest:
        return ApiRequest(
            method="DELETE",
            url=self._entry_url(list_type, "delete", series_id),
            headers=self._headers(),
        )

    def build_verify_credentials(self) -> ApiRequest:
        return ApiRequest(
            method="GET",
            url=self.base_url + VERIFY_CREDENTIALS_PATH,
            headers=self._headers(),
        )
