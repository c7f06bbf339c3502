"""Typed async HTTP fetch layer.

This module provides:
- A GET-only JSON client that resolves to Success/Failure results
- A closed error taxonomy with stable messages and codes
- Wire models and endpoint templates for the remote API
- Per-client metrics for observability
"""

from jokefeed.features.fetch.client import HttpClient
from jokefeed.features.fetch.config import ApiEndpoints, ClientConfig
from jokefeed.features.fetch.constants import (
    HTTP_STATUS_OK_MAX,
    HTTP_STATUS_OK_MIN,
    UNEXPECTED_ERROR_CODE,
    WRAPPED_ERROR_CODE,
)
from jokefeed.features.fetch.errors import (
    RequestError,
    RequestErrorClass,
    describe_exception,
)
from jokefeed.features.fetch.metrics import FetchMetrics
from jokefeed.features.fetch.models import Item
from jokefeed.features.fetch.protocols import JsonClient
from jokefeed.features.fetch.redact import redact_url
from jokefeed.features.fetch.result import Failure, Result, Success


__all__ = [
    # Client
    "HttpClient",
    "JsonClient",
    # Config
    "ApiEndpoints",
    "ClientConfig",
    # Errors
    "RequestError",
    "RequestErrorClass",
    "describe_exception",
    # Results
    "Failure",
    "Result",
    "Success",
    # Models
    "Item",
    # Constants
    "HTTP_STATUS_OK_MAX",
    "HTTP_STATUS_OK_MIN",
    "UNEXPECTED_ERROR_CODE",
    "WRAPPED_ERROR_CODE",
    # Metrics
    "FetchMetrics",
    # Redaction
    "redact_url",
]
