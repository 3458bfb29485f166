"""Base API client with common request handling."""

import logging
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import ClientConfig
from .constants import (
    HTTP_BAD_REQUEST,
    HTTP_FORBIDDEN,
    HTTP_NOT_FOUND,
    HTTP_TOO_MANY_REQUESTS,
    HTTP_UNAUTHORIZED,
    SUCCESS_STATUSES,
)
from .exceptions import AuthError, NotFoundError, ResponseError, TransportError
from .request_builder import ApiRequest

logger = logging.getLogger(__name__)


class BaseAPIClient:
    """Base class for API clients: owns the session and maps failures to errors."""

    def __init__(self, config: Optional[ClientConfig] = None, session: Optional[requests.Session] = None):
        """Initialize the client with its HTTP settings."""
        self.config = config or ClientConfig()
        self.session = session or requests.Session()

        # Retrying is opt-in; by default every operation is a single call
        if self.config.max_retries > 0:
            retry_strategy = Retry(
                total=self.config.max_retries,
                backoff_factor=1,
                status_forcelist=[HTTP_TOO_MANY_REQUESTS],
                allowed_methods=["GET", "POST", "DELETE"],
                raise_on_status=False,
            )
            adapter = HTTPAdapter(max_retries=retry_strategy)
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _handle_auth_error(self, response: requests.Response, service_name: str) -> None:
        """Handle authentication errors consistently."""
        if response.status_code in (HTTP_UNAUTHORIZED, HTTP_FORBIDDEN):
            logger.error(f"{service_name} authentication failed (HTTP {response.status_code})")
            logger.error(f"{service_name} credentials are invalid or lack access")
            raise AuthError(response.status_code, response.text)

    def _raise_for_status(self, response: requests.Response, service_name: str) -> None:
        """Raise the matching error for a non-success response."""
        if response.status_code in SUCCESS_STATUSES:
            return
        self._handle_auth_error(response, service_name)

        body = response.text or ""
        if response.status_code == HTTP_NOT_FOUND:
            raise NotFoundError(response.status_code, body)
        if response.status_code == HTTP_BAD_REQUEST and "invalid id" in body.lower():
            raise NotFoundError(response.status_code, body, message=body.strip())

        logger.error(f"{service_name} API error: {response.status_code}")
        logger.debug(f"Response: {body}")
        raise ResponseError(response.status_code, body)

    def send(self, request: ApiRequest, service_name: str = "MyAnimeList") -> requests.Response:
        """Send a request once and return the successful response."""
        logger.debug(f"{request.method} {request.url}")
        try:
            response = self.session.request(
                request.method,
                request.url,
                params=request.params or None,
                headers=request.headers,
                data=request.data,
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"error sending request to {service_name}: {e}") from e

        self._raise_for_status(response, service_name)
        return response
