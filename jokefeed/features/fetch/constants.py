"""HTTP constants for the fetch layer.

Centralizes all HTTP-related constants to avoid duplication across modules.
"""

# HTTP Status Code Ranges
HTTP_STATUS_OK_MIN = 200
HTTP_STATUS_OK_MAX = 300

# Error codes for failures that carry no HTTP status
UNEXPECTED_ERROR_CODE = -1
WRAPPED_ERROR_CODE = -2

# Defaults for the remote API
DEFAULT_BASE_URL = "https://api.chucknorris.io"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_USER_AGENT = "jokefeed/0.1"

# Endpoint templates, relative to the base URL
RANDOM_ITEM_PATH = "/jokes/random"
CATEGORY_ITEM_TEMPLATE = "/jokes/random?category={category}"
CATEGORIES_PATH = "/jokes/categories"

# Messages for responses that fail validation before decoding
MESSAGE_NOT_HTTP = "response type was not HTTP"
MESSAGE_EMPTY_BODY = "response data is empty"
SERVER_RESPONSE_MESSAGE = "A data request error occurred. (code: {code})"
