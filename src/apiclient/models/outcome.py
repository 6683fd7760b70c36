from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of one fetch: either a decoded value or the error it failed with.

    ``error`` is an :class:`~apiclient.APIClientError` for every classified
    failure; anything else raised while fetching is delivered as is.
    """

    value: Optional[T] = None
    error: Optional[Exception] = None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: Exception) -> "Outcome[T]":
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the decoded value, raising the error for failed outcomes."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
