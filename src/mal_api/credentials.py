"""Account credentials for authenticating against MyAnimeList."""

import base64
import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, SecretStr

from .exceptions import ValidationError

API_KEY_HEADER = "X-MAL-CLIENT-ID"


class Credentials(BaseModel):
    """Username plus password and/or API key.

    Only the username is needed to read a public list. Every other endpoint
    needs a password (HTTP Basic) or an API key.
    """

    model_config = ConfigDict(frozen=True)

    username: str
    password: Optional[SecretStr] = None
    api_key: Optional[SecretStr] = None

    def __init__(self, username: str, password: Optional[str] = None, api_key: Optional[str] = None):
        """Create credentials, rejecting an empty username."""
        if not isinstance(username, str) or not username.strip():
            raise ValidationError("username", "username must not be empty")
        super().__init__(
            username=username.strip(),
            password=password or None,
            api_key=api_key or None,
        )

    @classmethod
    def from_env(cls) -> "Credentials":
        """Build credentials from MAL_USERNAME, MAL_PASSWORD and MAL_API_KEY."""
        return cls(
            os.environ.get("MAL_USERNAME", ""),
            password=os.environ.get("MAL_PASSWORD") or None,
            api_key=os.environ.get("MAL_API_KEY") or None,
        )

    @property
    def has_secret(self) -> bool:
        """True when authenticated endpoints can be called."""
        return self.password is not None or self.api_key is not None

    def auth_headers(self) -> dict[str, str]:
        """Return the headers that authenticate a request."""
        headers = {}
        if self.password is not None:
            raw = f"{self.username}:{self.password.get_secret_value()}".encode("utf-8")
            headers["Authorization"] = "Basic " + base64.b64encode(raw).decode("ascii")
        if self.api_key is not None:
            headers[API_KEY_HEADER] = self.api_key.get_secret_value()
        return headers
