from __future__ import annotations

import numpy as np
import pytest

from fallible.payload import MAX_STANDARD_RANK, PayloadKind, PayloadShape, describe_payload


class TestScalars:
    @pytest.mark.parametrize(
        ("value", "kind"),
        [
            (True, PayloadKind.LOGICAL),
            (np.bool_(False), PayloadKind.LOGICAL),
            (3, PayloadKind.INTEGER),
            (np.int32(3), PayloadKind.INTEGER),
            (np.uint8(3), PayloadKind.INTEGER),
            (np.float32(1.0), PayloadKind.REAL_SP),
            (1.0, PayloadKind.REAL_DP),
            (np.float64(1.0), PayloadKind.REAL_DP),
            (np.complex64(1j), PayloadKind.COMPLEX_SP),
            (1j, PayloadKind.COMPLEX_DP),
            ("Hello world", PayloadKind.TEXT),
            ("", PayloadKind.TEXT),
        ],
    )
    def test_kind(self, value: object, kind: PayloadKind) -> None:
        assert describe_payload(value) == PayloadShape(kind, 0)


class TestArrays:
    def test_rank_follows_ndim(self) -> None:
        assert describe_payload(np.zeros((2, 3, 4), dtype=np.complex64)) == PayloadShape(PayloadKind.COMPLEX_SP, 3)

    def test_text_array(self) -> None:
        assert describe_payload(np.array(["a", "bc"])) == PayloadShape(PayloadKind.TEXT, 1)

    def test_list_is_described_as_array(self) -> None:
        assert describe_payload([[1.0, 2.0], [3.0, 4.0]]) == PayloadShape(PayloadKind.REAL_DP, 2)

    def test_mixed_number_and_text_list_is_unknown(self) -> None:
        assert describe_payload([1, "a"]) is None
        assert describe_payload([["a", "b"], ["c", 2.0]]) is None

    def test_nested_text_list(self) -> None:
        assert describe_payload((("a", "b"), ("c", "d"))) == PayloadShape(PayloadKind.TEXT, 2)

    def test_ragged_list_is_unknown(self) -> None:
        assert describe_payload([[1.0], [2.0, 3.0]]) is None

    def test_unsupported_dtype_is_unknown(self) -> None:
        assert describe_payload(np.zeros(2, dtype=np.float16)) is None

    def test_object_is_unknown(self) -> None:
        assert describe_payload(object()) is None
        assert describe_payload(None) is None


class TestPayloadShape:
    def test_label(self) -> None:
        assert PayloadShape(PayloadKind.REAL_DP, 1).label == "real_dp_rank1"
        assert PayloadShape(PayloadKind.TEXT, 0).label == "chars_rank0"

    def test_is_standard(self) -> None:
        assert PayloadShape(PayloadKind.INTEGER, MAX_STANDARD_RANK).is_standard
        assert not PayloadShape(PayloadKind.INTEGER, MAX_STANDARD_RANK + 1).is_standard

    def test_high_rank_array_is_described(self) -> None:
        shape = describe_payload(np.zeros((1,) * 5))
        assert shape == PayloadShape(PayloadKind.REAL_DP, 5)
        assert shape is not None and not shape.is_standard
