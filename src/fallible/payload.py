"""Kind and rank introspection for result payloads.

Any Python object can be held by a ``Value``. The common numeric, logical and
text shapes (scalars and numpy arrays) can be described by kind and rank, e.g.
``real_dp_rank1`` for a one-dimensional float64 array.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Iterator

MAX_STANDARD_RANK = 4


class PayloadKind(Enum):
    LOGICAL = "logical"
    INTEGER = "int"
    REAL_SP = "real_sp"
    REAL_DP = "real_dp"
    COMPLEX_SP = "complex_sp"
    COMPLEX_DP = "complex_dp"
    TEXT = "chars"


@dataclass(frozen=True)
class PayloadShape:
    kind: PayloadKind
    rank: int

    @property
    def label(self) -> str:
        return f"{self.kind.value}_rank{self.rank}"

    @property
    def is_standard(self) -> bool:
        """Whether the rank is within the scalar through 4-dimensional range."""
        return self.rank <= MAX_STANDARD_RANK


_DTYPE_KINDS: dict[np.dtype, PayloadKind] = {
    np.dtype(np.float32): PayloadKind.REAL_SP,
    np.dtype(np.float64): PayloadKind.REAL_DP,
    np.dtype(np.complex64): PayloadKind.COMPLEX_SP,
    np.dtype(np.complex128): PayloadKind.COMPLEX_DP,
}


def _kind_for_dtype(dtype: np.dtype) -> PayloadKind | None:
    if dtype.kind == "b":
        return PayloadKind.LOGICAL
    if dtype.kind in ("i", "u"):
        return PayloadKind.INTEGER
    if dtype.kind == "U":
        return PayloadKind.TEXT
    return _DTYPE_KINDS.get(dtype)


def _leaves(value: list | tuple) -> Iterator[object]:
    for item in value:
        if isinstance(item, (list, tuple)):
            yield from _leaves(item)
        else:
            yield item


def describe_payload(value: object) -> PayloadShape | None:
    """Describe the kind and rank of a payload.

    Returns None for payloads outside the known kinds, such as arbitrary
    objects, ragged sequences or unsupported dtypes.
    """
    if isinstance(value, str):
        return PayloadShape(PayloadKind.TEXT, 0)
    if isinstance(value, bool):
        return PayloadShape(PayloadKind.LOGICAL, 0)
    if isinstance(value, int):
        return PayloadShape(PayloadKind.INTEGER, 0)
    if isinstance(value, float):
        return PayloadShape(PayloadKind.REAL_DP, 0)
    if isinstance(value, complex):
        return PayloadShape(PayloadKind.COMPLEX_DP, 0)

    if isinstance(value, (np.ndarray, np.generic)):
        array = value
    elif isinstance(value, (list, tuple)):
        try:
            array = np.asarray(value)
        except ValueError:
            return None
        # numpy coerces mixed numbers and strings to a text dtype
        if array.dtype.kind == "U" and not all(isinstance(item, str) for item in _leaves(value)):
            return None
    else:
        return None

    kind = _kind_for_dtype(array.dtype)
    if kind is None:
        return None
    return PayloadShape(kind, array.ndim)
