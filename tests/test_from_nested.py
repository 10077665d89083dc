# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import sys

import numpy as np
import pytest

import densetensor as dt
from densetensor.tensor import Tensor


def test_from_nested_lists():
    t = dt.tensor([[1, 2, 3], [4, 5, 6]])
    assert t.shape == (2, 3)
    assert t.get(1, 0) == 4


def test_mixed_primitive_rows():
    data = [
        np.array([1, 2, 3], dtype=np.float32),
        [True, False, False],
        (3, 3.14, "a"),
        [10, 11, 12],
    ]
    t = Tensor(data)
    assert t.shape == (4, 3)
    assert t.get(2, 2) == 97
    assert t.get(0, 1) == 2
    assert t.get(3, 0) == 10
    assert t.get(1, 0) == 1
    assert t.get(2, 1) == pytest.approx(3.14)


def test_ragged_rows_raise():
    with pytest.raises(dt.ShapeError, match="ragged"):
        dt.tensor([[1, 2, 3], [4, 5, 6, 7]])
    with pytest.raises(dt.ShapeError, match="ragged"):
        dt.tensor([[1, 2], [3]])
    with pytest.raises(dt.ShapeError, match="ragged"):
        dt.tensor([[], [1]])


def test_primitive_in_place_of_row_raises():
    with pytest.raises(dt.ShapeError, match="Inconsistent dimensions"):
        dt.tensor([[1, 2, 3], 0])


def test_row_in_place_of_primitive_raises():
    with pytest.raises(dt.ShapeError, match="Inconsistent dimensions"):
        dt.tensor([1, [2]])


def test_non_primitive_values_raise():
    with pytest.raises(dt.ShapeError, match="non primitive"):
        dt.tensor([[1, 2, 3], object()])
    with pytest.raises(dt.ShapeError, match="non primitive"):
        dt.tensor([[1, 2, 3], [0, 1, object()]])
    with pytest.raises(dt.ShapeError, match="non primitive"):
        dt.tensor([[1, None]])
    with pytest.raises(ValueError):
        dt.tensor("text")


def test_top_level_none_is_distinct_error():
    with pytest.raises(dt.NullInputError):
        dt.tensor(None)
    with pytest.raises(TypeError):
        Tensor(None)


def test_scalar_becomes_single_element():
    t = dt.tensor(7)
    assert t.shape == (1,)
    assert t.get(0) == 7
    assert dt.tensor("a").tolist() == [97.0]


def test_empty_input_is_empty_tensor():
    assert dt.tensor([]) == dt.EMPTY
    assert dt.tensor([[], []]).shape == (2, 0)


def test_bytes_and_numpy_scalars():
    assert dt.tensor(b"\x01\x02").tolist() == [1.0, 2.0]
    assert dt.tensor([np.int64(3), np.float64(1.5), np.bool_(True)]).tolist() == [
        3.0,
        1.5,
        1.0,
    ]


def test_numpy_arrays_keep_their_shape():
    arr = np.arange(24).reshape(2, 3, 4)
    t = dt.tensor(arr)
    assert t.shape == (2, 3, 4)
    np.testing.assert_array_equal(t.numpy(), arr.astype(np.float32))


def test_copy_constructor_does_not_share_storage():
    original = dt.tensor([1, 2, 3])
    copied = Tensor(original)
    copied.set(10, 0)
    assert original.get(0) == 1
    assert copied == dt.tensor([10, 2, 3])


def test_copy_constructor_materializes_views():
    original = dt.tensor([[1, 2], [3, 4]])
    copied = Tensor(original.t())
    assert not copied.is_view
    assert copied.tolist() == [[1.0, 3.0], [2.0, 4.0]]


def test_values_outside_float32_range_raise():
    with pytest.raises(ValueError, match="out of range"):
        dt.tensor([1.0, sys.float_info.max])
    with pytest.raises(ValueError):
        dt.tensor([[-1e39]])
    t = dt.tensor([1.0, sys.float_info.max], dtype="float64")
    assert t.get(1) == sys.float_info.max


def test_float32_extremes_and_infinities_are_kept():
    largest = float(np.finfo(np.float32).max)
    t = dt.tensor([largest, -largest, float("inf"), float("-inf")])
    assert t.tolist() == [largest, -largest, float("inf"), float("-inf")]
