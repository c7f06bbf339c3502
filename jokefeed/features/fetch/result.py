"""Success/failure result container returned by the HTTP client."""

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar

from jokefeed.features.fetch.errors import RequestError


T = TypeVar("T")
E = TypeVar("E", bound=Exception)


@dataclass(frozen=True)
class Success(Generic[T]):
    """A request that produced a decoded value."""

    value: T

    @property
    def is_success(self) -> bool:
        """Always True."""
        return True

    def unwrap(self) -> T:
        """Return the decoded value."""
        return self.value


@dataclass(frozen=True)
class Failure(Generic[E]):
    """A request that failed with a typed error."""

    error: E

    @property
    def is_success(self) -> bool:
        """Always False."""
        return False

    def unwrap(self) -> NoReturn:
        """Raise the carried error."""
        raise self.error


Result = Success[T] | Failure[RequestError]
