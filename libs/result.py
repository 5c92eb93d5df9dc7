"""Explicit success/error return values for use cases.

Use cases never raise for expected business outcomes; they return a
``Result`` that carries either a value or an ``Error``.
"""

from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class Error:
    """Error payload carried by a failed Result"""

    def __init__(self, code: str, message: str, reason: Optional[str] = None):
        self.code = code
        self.message = message
        self.reason = reason

    def __eq__(self, other):
        if not isinstance(other, Error):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.code == other.code
            and self.message == other.message
            and self.reason == other.reason
        )

    def __repr__(self):
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}, reason={self.reason!r})"


class Result(Generic[T]):
    def __init__(self, value: Optional[T] = None, error: Optional[Error] = None):
        self._value = value
        self._error = error

    def is_ok(self) -> bool:
        return self._error is None

    def is_err(self) -> bool:
        return self._error is not None

    @property
    def value(self) -> T:
        if self._error is not None:
            raise ValueError(f"Result is an error: {self._error!r}")
        return self._value

    @property
    def error(self) -> Optional[Error]:
        return self._error

    def __repr__(self):
        if self.is_err():
            return f"Result(error={self._error!r})"
        return f"Result(value={self._value!r})"


class Return:
    """Factory for Result instances"""

    @staticmethod
    def ok(value: T) -> Result[T]:
        return Result(value=value)

    @staticmethod
    def err(error: Error) -> Result:
        return Result(error=error)
