"""Per-client request counters."""

from collections import Counter
from dataclasses import dataclass, field

from jokefeed.features.fetch.errors import RequestErrorClass


@dataclass
class FetchMetrics:
    """Counters kept by one HttpClient.

    A call is one ``get``; it produces at most one response and exactly
    one outcome. Transport failures produce no response, so
    ``responses_by_status`` can sum to less than ``calls``.
    """

    calls: int = 0
    responses_by_status: Counter[int] = field(default_factory=Counter)
    failures_by_class: Counter[RequestErrorClass] = field(default_factory=Counter)
    bytes_received: int = 0
    total_duration_ms: float = 0.0
    max_duration_ms: float = 0.0

    def record_response(self, status_code: int, size: int) -> None:
        """Count a response that reached the client.

        Args:
            status_code: HTTP status code.
            size: Body size in bytes.
        """
        self.responses_by_status[status_code] += 1
        self.bytes_received += size

    def record_failure(self, error_class: RequestErrorClass) -> None:
        """Count a call that resolved to a Failure."""
        self.failures_by_class[error_class] += 1

    def record_call(self, duration_ms: float) -> None:
        """Count a finished call and its wall time.

        Args:
            duration_ms: Time from request start to outcome, in milliseconds.
        """
        self.calls += 1
        self.total_duration_ms += duration_ms
        self.max_duration_ms = max(self.max_duration_ms, duration_ms)

    @property
    def success_count(self) -> int:
        """Calls that resolved to a Success."""
        return self.calls - sum(self.failures_by_class.values())

    @property
    def avg_duration_ms(self) -> float:
        """Mean wall time per call, 0.0 before the first call."""
        if self.calls == 0:
            return 0.0
        return self.total_duration_ms / self.calls

    def reset(self) -> None:
        """Zero every counter."""
        self.calls = 0
        self.responses_by_status.clear()
        self.failures_by_class.clear()
        self.bytes_received = 0
        self.total_duration_ms = 0.0
        self.max_duration_ms = 0.0

    def to_dict(self) -> dict[str, object]:
        """Render the counters with JSON-friendly keys."""
        return {
            "calls": self.calls,
            "successes": self.success_count,
            "responses_by_status": {
                str(status): count
                for status, count in sorted(self.responses_by_status.items())
            },
            "failures_by_class": {
                error_class.value: count
                for error_class, count in self.failures_by_class.items()
            },
            "bytes_received": self.bytes_received,
            "avg_duration_ms": round(self.avg_duration_ms, 2),
            "max_duration_ms": round(self.max_duration_ms, 2),
        }
