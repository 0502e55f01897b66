"""
Result Type Definitions

Tagged success/failure values returned by every engine operation. Domain
errors travel inside ``Failure`` instead of being raised, so the same rules
can be reused from an API handler, a batch job, or a test harness.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")
K = TypeVar("K")
U = TypeVar("U")


class Result(Generic[T, K], ABC):
    """
    Result type for handling success/failure cases with type safety.

    Examples:
        >>> result: Result[BookingStatus, IllegalTransitionError] = Success(status)
        >>> if isinstance(result, Success):
        ...     print(f"Status: {result.value}")
        >>> elif isinstance(result, Failure):
        ...     print(f"Error: {result.error.error_code}")
    """

    @abstractmethod
    def is_success(self) -> bool:
        """Check if result represents success."""
        pass

    @abstractmethod
    def is_failure(self) -> bool:
        """Check if result represents failure."""
        pass

    def map(self, func: Callable[[T], U]) -> "Result[U, K]":
        """Apply ``func`` to a success value, passing failures through."""
        if isinstance(self, Success):
            return Success(func(self.value))
        return self  # type: ignore[return-value]

    def bind(self, func: "Callable[[T], Result[U, K]]") -> "Result[U, K]":
        """Chain another result-returning step onto a success value."""
        if isinstance(self, Success):
            return func(self.value)
        return self  # type: ignore[return-value]


class Success(Result[T, K]):
    """Success result containing a value."""

    __match_args__ = ("value",)

    def __init__(self, value: T) -> None:
        self.value = value

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Success) and other.value == self.value

    def __repr__(self) -> str:
        return f"Success({self.value!r})"


class Failure(Result[T, K]):
    """Failure result containing an error."""

    __match_args__ = ("error",)

    def __init__(self, error: K) -> None:
        self.error = error

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Failure) and other.error == self.error

    def __repr__(self) -> str:
        return f"Failure({self.error!r})"
