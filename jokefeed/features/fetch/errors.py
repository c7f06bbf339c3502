"""Error taxonomy for the HTTP client.

Every failure the client can produce collapses into one of three
classes. Errors compare by their class and rendered payload so tests
can assert on them directly.
"""

from enum import Enum

from jokefeed.features.fetch.constants import (
    SERVER_RESPONSE_MESSAGE,
    UNEXPECTED_ERROR_CODE,
    WRAPPED_ERROR_CODE,
)


class RequestErrorClass(str, Enum):
    """Classification of request errors.

    - UNEXPECTED: Free-text failure raised by the client itself
    - WRAPPED: Failure raised by another layer (transport, decoder)
    - SERVER_RESPONSE: Non-2xx HTTP status
    """

    UNEXPECTED = "UNEXPECTED"
    WRAPPED = "WRAPPED"
    SERVER_RESPONSE = "SERVER_RESPONSE"


def describe_exception(exc: BaseException) -> str:
    """Render an exception as a short human-readable description.

    Some transport exceptions carry an empty message; the exception
    type name is used for those.

    Args:
        exc: Exception to describe.

    Returns:
        Non-empty description.
    """
    text = str(exc).strip()
    return text or type(exc).__name__


class RequestError(Exception):
    """Typed failure from a client request.

    Use the ``unexpected``, ``wrapped`` and ``server_response``
    constructors rather than calling the initializer directly.
    """

    def __init__(
        self,
        error_class: RequestErrorClass,
        description: str = "",
        status_code: int | None = None,
        underlying: BaseException | None = None,
    ) -> None:
        """Initialize the request error.

        Args:
            error_class: Classification of the error.
            description: Free text (UNEXPECTED) or underlying description (WRAPPED).
            status_code: HTTP status (SERVER_RESPONSE only).
            underlying: Original exception for WRAPPED errors.
        """
        self.error_class = error_class
        self.description = description
        self.status_code = status_code
        self.underlying = underlying
        super().__init__(self.message)

    @classmethod
    def unexpected(cls, description: str) -> "RequestError":
        """Create an UNEXPECTED error carrying free text."""
        return cls(RequestErrorClass.UNEXPECTED, description=description)

    @classmethod
    def wrapped(cls, error: BaseException | str) -> "RequestError":
        """Create a WRAPPED error around another failure.

        Args:
            error: The underlying exception, or its rendered description.
        """
        if isinstance(error, BaseException):
            return cls(
                RequestErrorClass.WRAPPED,
                description=describe_exception(error),
                underlying=error,
            )
        return cls(RequestErrorClass.WRAPPED, description=error)

    @classmethod
    def server_response(cls, code: int) -> "RequestError":
        """Create a SERVER_RESPONSE error for an HTTP status code."""
        return cls(RequestErrorClass.SERVER_RESPONSE, status_code=code)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "RequestError":
        """Coerce any exception into the taxonomy.

        RequestErrors pass through unchanged; anything else becomes an
        UNEXPECTED error carrying the original description.
        """
        if isinstance(exc, RequestError):
            return exc
        return cls.unexpected(describe_exception(exc))

    @property
    def code(self) -> int:
        """Numeric code: -1 (unexpected), -2 (wrapped) or the HTTP status."""
        if self.error_class == RequestErrorClass.UNEXPECTED:
            return UNEXPECTED_ERROR_CODE
        if self.error_class == RequestErrorClass.WRAPPED:
            return WRAPPED_ERROR_CODE
        return self.status_code if self.status_code is not None else 0

    @property
    def message(self) -> str:
        """Human-readable message shown to the user."""
        if self.error_class == RequestErrorClass.SERVER_RESPONSE:
            return SERVER_RESPONSE_MESSAGE.format(code=self.status_code)
        return self.description

    def _identity(self) -> tuple[RequestErrorClass, str | int | None]:
        if self.error_class == RequestErrorClass.SERVER_RESPONSE:
            return (self.error_class, self.status_code)
        return (self.error_class, self.description)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RequestError):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self._identity())

    def __repr__(self) -> str:
        if self.error_class == RequestErrorClass.SERVER_RESPONSE:
            return f"RequestError.server_response(code={self.status_code})"
        return f"RequestError.{self.error_class.value.lower()}({self.description!r})"

    def to_dict(self) -> dict[str, str | int]:
        """Convert error to dictionary for logging/serialization.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "error_class": self.error_class.value,
            "code": self.code,
            "message": self.message,
        }
