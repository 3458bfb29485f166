"""Exception hierarchy for the MyAnimeList client.

Every failure surfaces as a subclass of :class:`MALError` so callers can
catch library errors in one place or handle specific cases.
"""

from typing import Optional


class MALError(Exception):
    """Base exception for all mal_api errors."""

    pass


class ValidationError(MALError, ValueError):
    """Raised when a value is rejected before any request is built."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field}: {message}")


class TransportError(MALError):
    """Raised when the request could not be sent or the response not read."""

    pass


class ResponseError(MALError):
    """Raised when MyAnimeList answers with a non-success status code."""

    def __init__(self, status_code: int, body: str = "", message: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        super().__init__(message or f"received bad response code from MyAnimeList: {status_code}")


class AuthError(ResponseError):
    """Raised when credentials are missing, invalid or rejected."""

    pass


class NotFoundError(ResponseError):
    """Raised when the series or list entry does not exist."""

    pass


class DecodeError(MALError):
    """Raised when a response payload cannot be decoded.

    ``field`` names the offending XML element, or is ``None`` when the
    payload as a whole is not well-formed.
    """

    def __init__(self, field: Optional[str], message: str):
        self.field = field
        if field:
            message = f"{message} (field '{field}')"
        super().__init__(message)


class ConfigError(MALError):
    """Raised when configuration is invalid or cannot be loaded."""

    pass
