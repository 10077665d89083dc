# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import pytest

import densetensor as dt
from densetensor.tensor import Tensor


@pytest.mark.parametrize("shape", [(3,), (3, 4), (3, 4, 5), (2, 0, 3)])
def test_size_and_dims_follow_shape(shape):
    t = Tensor.zeros(*shape)
    assert t.shape == shape
    assert t.ndim == t.dims == t.dim() == len(shape)
    assert t.size == t.numel() == int(np.prod(shape))


def test_zeros_accepts_sequence_and_tensor_shapes():
    assert dt.zeros((2, 3)).shape == (2, 3)
    assert dt.zeros([2, 3]).shape == (2, 3)
    assert dt.zeros(dt.tensor([2, 3])).shape == (2, 3)
    assert dt.zeros(2, 3).tolist() == [[0.0] * 3] * 2


def test_negative_or_missing_extents_raise():
    with pytest.raises(dt.ShapeError):
        dt.zeros(2, -1)
    with pytest.raises(ValueError):
        dt.ones(-3)
    with pytest.raises(dt.ShapeError):
        dt.rand(4, -2)
    with pytest.raises(dt.ShapeError):
        dt.zeros()


def test_ones_and_full():
    assert dt.ones(2, 2).tolist() == [[1.0, 1.0], [1.0, 1.0]]
    assert dt.full((3,), 2.5).tolist() == [2.5, 2.5, 2.5]
    assert dt.full(2, -1).tolist() == [-1.0, -1.0]


def test_like_factories_copy_shape_and_dtype():
    base = dt.ones((4, 2), dtype="float64")
    assert dt.zeros_like(base).shape == (4, 2)
    assert dt.zeros_like(base).dtype == "float64"
    assert dt.ones_like(base) == base
    assert dt.rand_like(base).shape == (4, 2)
    assert dt.randn_like(base, dtype="float32").dtype == "float32"


def test_rand_range_and_shape():
    t = dt.rand(50, 4)
    values = t.numpy()
    assert t.shape == (50, 4)
    assert values.dtype == np.float32
    assert ((values >= 0.0) & (values < 1.0)).all()


def test_randn_shape_and_dtype():
    t = dt.randn(3, dtype="float64")
    assert t.shape == (3,)
    assert t.numpy().dtype == np.float64


def test_arange_single_argument_matches_tensor():
    assert dt.arange(5) == dt.tensor([0, 1, 2, 3, 4])
    assert Tensor.range(5) == dt.arange(0, 5)


def test_arange_negative_step():
    assert dt.arange(8, 0, -2) == dt.tensor([8, 6, 4, 2])


def test_arange_mismatched_sign_is_empty():
    t = dt.arange(8, 0, 2)
    assert t.size == 0
    assert t == dt.EMPTY


def test_arange_fractional_step_rounds_count_up():
    assert dt.arange(0, 1, 0.25).tolist() == [0.0, 0.25, 0.5, 0.75]
    assert dt.arange(0, 1, 0.3).size == 4


def test_arange_zero_step_raises():
    with pytest.raises(ValueError):
        dt.arange(0, 1, 0)


def test_empty_tensor_is_rank_one():
    assert dt.EMPTY.shape == (0,)
    assert dt.EMPTY.size == 0
    assert Tensor.EMPTY is dt.EMPTY
    assert list(dt.EMPTY) == []


def test_out_of_range_values_are_not_stored_as_infinity():
    with pytest.raises(ValueError):
        dt.full(2, 1e39)
    with pytest.raises(ValueError):
        dt.from_numpy(np.array([1e300]), dtype="float32")
    t = dt.zeros(2)
    with pytest.raises(ValueError):
        t.set(1e300, 0)
    assert t.get(0) == 0
    assert dt.full(2, 1e39, dtype="float64").get(0) == 1e39
