"""Failure descriptors stored inside Failure results.

A descriptor carries a message, an optional cause (the descriptor it was raised
in response to), an optional tag for programmatic matching, and optionally a
snapshot of the call stack taken when it was created.

Usage:
    err = failure("x must be positive")
    outer = err.wrap("could not build grid", tag=FailureTag("validation", {"x": -12.0}))

    tag = outer.find_tag("validation")
    if tag is not None:
        handle_validation(tag.payload)

    print(outer.display())
    # Error: could not build grid
    # Caused by:
    #   1: x must be positive
"""

from __future__ import annotations

import logging
import os
import traceback
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from fallible.config import FailureSettings, get_failure_settings

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)

_PACKAGE_PREFIX = str(Path(__file__).resolve().parent) + os.sep


@dataclass(frozen=True)
class FailureTag:
    """Identifies a kind of failure so calling code can match on it.

    Tags are open-ended: any name may be used, and ``payload`` carries whatever
    detail the producer wants to hand to the handler.
    """

    name: str
    payload: object = None


@dataclass(frozen=True)
class FailureDescriptor:
    """Immutable description of something that went wrong.

    Attributes:
        message: Human-readable description.
        cause: The descriptor this one wraps, if any. The root cause is innermost.
        tag: Optional tag for programmatic matching.
        stacktrace: Formatted call-stack lines captured at creation, if enabled.
    """

    message: str
    cause: FailureDescriptor | None = None
    tag: FailureTag | None = None
    stacktrace: tuple[str, ...] | None = None

    @classmethod
    def create(
        cls,
        message: str,
        *,
        cause: FailureDescriptor | None = None,
        tag: FailureTag | None = None,
        settings: FailureSettings | None = None,
    ) -> FailureDescriptor:
        """Build a descriptor, capturing the call stack when settings ask for it."""
        if settings is None:
            settings = get_failure_settings()
        stacktrace = _capture_stack(settings.stack_limit) if settings.capture_stacktrace else None
        return cls(message=message, cause=cause, tag=tag, stacktrace=stacktrace)

    @classmethod
    def from_exception(
        cls,
        exc: BaseException,
        *,
        tag: FailureTag | None = None,
        settings: FailureSettings | None = None,
    ) -> FailureDescriptor:
        """Convert an exception, and the exceptions chained to it, into a descriptor."""
        if settings is None:
            settings = get_failure_settings()

        chain: list[BaseException] = []
        seen: set[int] = set()
        current: BaseException | None = exc
        while current is not None and id(current) not in seen:
            seen.add(id(current))
            chain.append(current)
            current = _chained_exception(current)

        capture, limit = settings.capture_stacktrace, settings.stack_limit

        def convert(inner: BaseException, cause: FailureDescriptor | None) -> FailureDescriptor:
            return cls(
                message=_exception_message(inner),
                cause=cause,
                tag=tag if inner is exc else None,
                stacktrace=_format_traceback(inner, limit) if capture else None,
            )

        *outer, root = chain
        descriptor = convert(root, None)
        for inner in reversed(outer):
            descriptor = convert(inner, descriptor)
        logger.debug("Converted %s into failure descriptor", type(exc).__name__)
        return descriptor

    def wrap(self, message: str, *, tag: FailureTag | None = None) -> FailureDescriptor:
        """Return a new descriptor with this one as its cause."""
        return FailureDescriptor.create(message, cause=self, tag=tag)

    def chain(self) -> Iterator[FailureDescriptor]:
        """Yield this descriptor followed by each cause, outermost first."""
        current: FailureDescriptor | None = self
        while current is not None:
            yield current
            current = current.cause

    def root_cause(self) -> FailureDescriptor:
        root = self
        for descriptor in self.chain():
            root = descriptor
        return root

    def find_tag(self, name: str) -> FailureTag | None:
        """Return the first tag called ``name`` along the cause chain, or None."""
        for descriptor in self.chain():
            if descriptor.tag is not None and descriptor.tag.name == name:
                return descriptor.tag
        return None

    def display(self) -> str:
        lines = [f"Error: {self.message}"]
        causes = list(self.chain())[1:]
        if causes:
            lines.append("Caused by:")
            lines.extend(f"  {i}: {cause.message}" for i, cause in enumerate(causes, start=1))
        if self.stacktrace:
            lines.append("Stack trace:")
            lines.extend(self.stacktrace)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.display()


def failure(
    message: str,
    *,
    cause: FailureDescriptor | None = None,
    tag: FailureTag | None = None,
) -> FailureDescriptor:
    """Shortcut for ``FailureDescriptor.create``."""
    return FailureDescriptor.create(message, cause=cause, tag=tag)


def _capture_stack(limit: int) -> tuple[str, ...]:
    frames = [frame for frame in traceback.extract_stack() if not _is_library_frame(frame.filename)]
    return _format_frames(frames[-limit:])


def _is_library_frame(filename: str) -> bool:
    return filename.startswith(_PACKAGE_PREFIX)


def _format_traceback(exc: BaseException, limit: int) -> tuple[str, ...] | None:
    if exc.__traceback__ is None:
        return None
    return _format_frames(traceback.extract_tb(exc.__traceback__)[-limit:])


def _format_frames(frames: list[traceback.FrameSummary]) -> tuple[str, ...]:
    return tuple(line.rstrip("\n") for line in traceback.format_list(frames))


def _chained_exception(exc: BaseException) -> BaseException | None:
    if exc.__cause__ is not None:
        return exc.__cause__
    if exc.__suppress_context__:
        return None
    return exc.__context__


def _exception_message(exc: BaseException) -> str:
    text = str(exc)
    name = type(exc).__name__
    return f"{name}: {text}" if text else name
