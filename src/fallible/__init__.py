"""Result carrier holding either a value or a structured failure."""

from fallible.config import FailureSettings, get_failure_settings, load_failure_settings, set_failure_settings
from fallible.exceptions import FallibleException
from fallible.failure import FailureDescriptor, FailureTag, failure
from fallible.payload import PayloadKind, PayloadShape, describe_payload
from fallible.result import Failure, Result, UnwrapError, Value, attempt, collect, from_failure, from_value

__all__ = [
    "Failure",
    "FailureDescriptor",
    "FailureSettings",
    "FailureTag",
    "FallibleException",
    "PayloadKind",
    "PayloadShape",
    "Result",
    "UnwrapError",
    "Value",
    "attempt",
    "collect",
    "describe_payload",
    "failure",
    "from_failure",
    "from_value",
    "get_failure_settings",
    "load_failure_settings",
    "set_failure_settings",
]
