"""Async HTTP client returning typed results instead of raising."""

import time
from functools import lru_cache
from types import TracebackType
from typing import Any, TypeVar

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError

from jokefeed.features.fetch.config import ClientConfig
from jokefeed.features.fetch.constants import (
    HTTP_STATUS_OK_MAX,
    HTTP_STATUS_OK_MIN,
    MESSAGE_EMPTY_BODY,
    MESSAGE_NOT_HTTP,
)
from jokefeed.features.fetch.errors import RequestError
from jokefeed.features.fetch.metrics import FetchMetrics
from jokefeed.features.fetch.redact import redact_url
from jokefeed.features.fetch.result import Failure, Result, Success


logger = structlog.get_logger()

T = TypeVar("T")

# Transport-level failures that are reported as WRAPPED errors.
_TRANSPORT_ERRORS = (httpx.HTTPError, httpx.InvalidURL, OSError)


@lru_cache(maxsize=64)
def _adapter_for(model: Any) -> TypeAdapter[Any]:
    return TypeAdapter(model)


class HttpClient:
    """GET-only JSON client for the remote API.

    Wraps one ``httpx.AsyncClient`` so a single connection pool is
    shared by every screen. Each call performs exactly one attempt and
    resolves to ``Success`` or ``Failure``:

    - transport failure -> WRAPPED
    - response that is not HTTP -> UNEXPECTED
    - status outside 2xx -> SERVER_RESPONSE
    - empty body -> UNEXPECTED
    - JSON that does not decode into the requested type -> WRAPPED
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        metrics: FetchMetrics | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Client configuration (defaults to ClientConfig()).
            transport: Optional transport, e.g. ``httpx.MockTransport`` in tests.
            metrics: Metrics sink (a fresh one is created when omitted).
        """
        self._config = config or ClientConfig()
        self._metrics = metrics or FetchMetrics()
        self._client = httpx.AsyncClient(
            base_url=self._config.base_url,
            timeout=self._config.timeout_seconds,
            follow_redirects=self._config.follow_redirects,
            headers={
                "User-Agent": self._config.user_agent,
                "Accept": "application/json",
            },
            transport=transport,
        )
        self._log = logger.bind(component="fetch")

    @property
    def config(self) -> ClientConfig:
        """Get the client configuration."""
        return self._config

    @property
    def metrics(self) -> FetchMetrics:
        """Get the metrics collected by this client."""
        return self._metrics

    @property
    def is_closed(self) -> bool:
        """Check whether the connection pool has been released."""
        return self._client.is_closed

    async def aclose(self) -> None:
        """Release the underlying connection pool."""
        await self._client.aclose()

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def get(self, url: str, model: type[T] | Any) -> Result[T]:
        """Fetch a URL and decode its JSON body.

        Args:
            url: Absolute URL, or a path relative to the configured base URL.
            model: Target type: a pydantic model, ``list[str]``, etc.

        Returns:
            Success with the decoded value, or Failure with a RequestError.
        """
        start_time_ns = time.perf_counter_ns()
        log = self._log.bind(url=redact_url(url))
        log.debug("http_get")

        result = await self._execute(url, model, log)

        duration_ms = (time.perf_counter_ns() - start_time_ns) / 1_000_000
        self._metrics.record_call(duration_ms)

        if isinstance(result, Failure):
            self._metrics.record_failure(result.error.error_class)
            log.warning(
                "http_get_failed",
                duration_ms=round(duration_ms, 2),
                **result.error.to_dict(),
            )
        else:
            log.debug("http_get_complete", duration_ms=round(duration_ms, 2))

        return result

    async def _execute(
        self,
        url: str,
        model: type[T] | Any,
        log: structlog.stdlib.BoundLogger,
    ) -> Result[T]:
        """Perform the request and run the response checks in order."""
        try:
            response = await self._client.get(url)
        except _TRANSPORT_ERRORS as e:
            log.error("http_transport_error", error_type=type(e).__name__)
            return Failure(RequestError.wrapped(e))

        if not response.http_version.upper().startswith("HTTP"):
            log.critical("http_response_not_http", http_version=response.http_version)
            return Failure(RequestError.unexpected(MESSAGE_NOT_HTTP))

        body = response.content
        self._metrics.record_response(response.status_code, len(body))

        if not HTTP_STATUS_OK_MIN <= response.status_code < HTTP_STATUS_OK_MAX:
            return Failure(RequestError.server_response(response.status_code))

        if not body:
            return Failure(RequestError.unexpected(MESSAGE_EMPTY_BODY))

        try:
            value = _adapter_for(model).validate_json(body)
        except ValidationError as e:
            log.error(
                "http_decode_failed",
                body=body[:500].decode("utf-8", errors="replace"),
            )
            return Failure(RequestError.wrapped(e))

        return Success(value)
