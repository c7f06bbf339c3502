"""Protocol interface for JSON clients."""

from typing import Any, Protocol, TypeVar, runtime_checkable

from jokefeed.features.fetch.result import Result


T = TypeVar("T")


@runtime_checkable
class JsonClient(Protocol):
    """Protocol for clients that fetch and decode JSON.

    ``HttpClient`` implements it; tests substitute fakes that resolve
    requests on demand.
    """

    async def get(self, url: str, model: type[T] | Any) -> Result[T]:
        """Fetch a URL and decode its body.

        Args:
            url: URL to fetch.
            model: Type to decode the JSON body into.

        Returns:
            Success with the decoded value, or Failure with a RequestError.
        """
        ...
