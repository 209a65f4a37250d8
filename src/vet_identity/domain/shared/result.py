"""Success/failure outcome returned by every lifecycle operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from vet_identity.domain.shared.errors import Error

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Discriminated outcome of an operation.

    Expected business conditions (unknown user, bad credentials, expired
    token) are reported as failed results, never raised.

    Examples
    --------
    >>> result = Result.success("token")
    >>> result.value
    'token'
    >>> Result.failure(Error.NONE).is_failure
    True
    """

    is_success: bool
    error: Error
    _value: T | None = None

    @classmethod
    def success(cls, value: T | None = None) -> Result[T]:
        return cls(is_success=True, error=Error.NONE, _value=value)

    @classmethod
    def failure(cls, error: Error) -> Result[T]:
        return cls(is_success=False, error=error)

    @property
    def is_failure(self) -> bool:
        return not self.is_success

    @property
    def value(self) -> T:
        """Payload of a successful result.

        Raises
        ------
        ValueError
            If the result is a failure
        """
        if not self.is_success:
            msg = f"Cannot access the value of a failed result ({self.error.code})"
            raise ValueError(msg)
        return self._value  # type: ignore[return-value]

    def __repr__(self) -> str:
        if self.is_success:
            return f"Result.success({self._value!r})"
        return f"Result.failure({self.error.code!r})"
