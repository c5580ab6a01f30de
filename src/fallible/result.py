"""Result type for explicit error handling.

A ``Result[T]`` is either a ``Value`` holding a payload of type T or a
``Failure`` holding a ``FailureDescriptor``. Both variants are frozen;
"reassigning" a result means binding a new one in its place.

Usage:
    def scale(x: float) -> Result[np.ndarray]:
        if x < 0:
            return from_failure(failure("x must be positive"))
        return from_value(x * np.array([1.0, 2.0, 3.0]))

    result = scale(12.0)
    match result:
        case Value(values):
            print(values.sum())
        case Failure(descriptor):
            print(descriptor.display())
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, cast, final

from fallible.exceptions import FallibleException
from fallible.failure import FailureDescriptor, FailureTag
from fallible.payload import PayloadShape, describe_payload

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

logger = logging.getLogger(__name__)


class UnwrapError(FallibleException):
    """Raised when unwrap_value() is called on a Failure or unwrap_failure() on a Value."""


@final
@dataclass(frozen=True, slots=True)
class Value[T]:
    """Represents a successful result containing a value."""

    value: T

    def is_value(self) -> bool:
        return True

    def is_error(self) -> bool:
        return False

    def unwrap_value(self) -> T:
        """Returns the contained value."""
        return self.value

    def unwrap_failure(self) -> FailureDescriptor:
        """Raises UnwrapError since this is not a Failure."""
        raise UnwrapError("Called unwrap_failure on Value result")

    def unwrap_or(self, default: T) -> T:
        """Returns the contained value, ignoring the default."""
        return self.value

    @property
    def shape(self) -> PayloadShape | None:
        """Kind and rank of the contained value, if it is a known shape."""
        return describe_payload(self.value)

    def map[U](self, fn: Callable[[T], U]) -> Result[U]:
        """Applies fn to the contained value, returning Value(fn(value))."""
        return Value(fn(self.value))

    def map_failure(self, fn: Callable[[FailureDescriptor], FailureDescriptor]) -> Result[T]:
        """Returns self unchanged since this is a Value."""
        return self

    def and_then[U](self, fn: Callable[[T], Result[U]]) -> Result[U]:
        """Applies fn to the contained value, returning its result."""
        return fn(self.value)

    def or_else(self, fn: Callable[[FailureDescriptor], Result[T]]) -> Result[T]:
        """Returns self unchanged since this is a Value."""
        return self

    def with_context(self, message: str, *, tag: FailureTag | None = None) -> Result[T]:
        """Returns self unchanged since there is no failure to wrap."""
        return self


@final
@dataclass(frozen=True, slots=True)
class Failure:
    """Represents a failed result containing a failure descriptor."""

    descriptor: FailureDescriptor

    def is_value(self) -> bool:
        return False

    def is_error(self) -> bool:
        return True

    def unwrap_value[T](self) -> T:  # pyright: ignore[reportInvalidTypeVarUse]
        """Raises UnwrapError describing the contained failure."""
        raise UnwrapError(f"Called unwrap_value on Failure result:\n{self.descriptor.display()}")

    def unwrap_failure(self) -> FailureDescriptor:
        """Returns the contained failure descriptor."""
        return self.descriptor

    def unwrap_or[T](self, default: T) -> T:
        """Returns the default value."""
        return default

    @property
    def shape(self) -> None:
        return None

    def map[T, U](self, fn: Callable[[T], U]) -> Result[U]:  # pyright: ignore[reportInvalidTypeVarUse]
        """Returns self unchanged since this is a Failure."""
        return self

    def map_failure(self, fn: Callable[[FailureDescriptor], FailureDescriptor]) -> Failure:
        """Applies fn to the contained descriptor, returning Failure(fn(descriptor))."""
        return Failure(fn(self.descriptor))

    def and_then[T, U](self, fn: Callable[[T], Result[U]]) -> Result[U]:  # pyright: ignore[reportInvalidTypeVarUse]
        """Returns self unchanged since this is a Failure."""
        return self

    def or_else[T](self, fn: Callable[[FailureDescriptor], Result[T]]) -> Result[T]:
        """Applies fn to the contained descriptor, returning its result."""
        return fn(self.descriptor)

    def with_context(self, message: str, *, tag: FailureTag | None = None) -> Failure:
        """Returns a Failure whose descriptor wraps this one as its cause."""
        return Failure(self.descriptor.wrap(message, tag=tag))


type Result[T] = Value[T] | Failure


def from_value[T](v: T) -> Result[T]:
    """Builds a Value result. The payload is held by reference, not copied."""
    return Value(v)


def from_failure[T](f: FailureDescriptor) -> Result[T]:
    """Builds a Failure result holding ``f``."""
    return Failure(f)


def attempt[T](
    fn: Callable[..., T],
    *args: object,
    catch: tuple[type[Exception], ...] = (Exception,),
    **kwargs: object,
) -> Result[T]:
    """Calls fn, returning its return value as a Value or a caught exception as a Failure.

    Exceptions that are not instances of ``catch`` propagate.
    """
    try:
        return Value(fn(*args, **kwargs))
    except catch as e:
        logger.debug("Captured %s from %s as failure", type(e).__name__, getattr(fn, "__name__", fn))
        return Failure(FailureDescriptor.from_exception(e))


def collect[T](results: Iterable[Result[T]]) -> Result[list[T]]:
    """Collects results into a single Result of a list, stopping at the first Failure."""
    values: list[T] = []
    for r in results:
        if r.is_error():
            return cast("Failure", r)
        values.append(r.unwrap_value())
    return Value(values)
