"""Constants used throughout the library."""

from enum import Enum


class ListType(str, Enum):
    """Kind of list an operation targets."""

    ANIME = "anime"
    MANGA = "manga"


# HTTP Status Codes
HTTP_OK = 200
HTTP_CREATED = 201
HTTP_NO_CONTENT = 204
HTTP_BAD_REQUEST = 400
HTTP_UNAUTHORIZED = 401
HTTP_FORBIDDEN = 403
HTTP_NOT_FOUND = 404
HTTP_TOO_MANY_REQUESTS = 429

SUCCESS_STATUSES = (HTTP_OK, HTTP_CREATED, HTTP_NO_CONTENT)

# Default values
DEFAULT_BASE_URL = "https://myanimelist.net"
DEFAULT_TIMEOUT_SECONDS = 15.0
DEFAULT_USER_AGENT = "mal-api-client/0.1.0"

# Endpoint paths
LIST_READ_PATH = "/malappinfo.php"
VERIFY_CREDENTIALS_PATH = "/api/account/verify_credentials.xml"
SEARCH_PATH = "/api/{list_type}/search.xml"
ENTRY_PATH = "/api/{list_type}list/{action}/{series_id}.xml"

# MAL wire formats
MAL_DATE_FORMAT = "%Y-%m-%d"
MAL_REQUEST_DATE_FORMAT = "%m%d%Y"
MAL_EMPTY_DATE = "0000-00-00"
MAL_EMPTY_REQUEST_DATE = "00000000"

SCORE_MIN = 0
SCORE_MAX = 10
