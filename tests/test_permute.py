# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import itertools

import numpy as np
import pytest

import densetensor as dt


def _inverse(permutation):
    inverse = [0] * len(permutation)
    for axis, position in enumerate(permutation):
        inverse[position] = axis
    return inverse


def test_permute_dims_moves_axis_i_to_position():
    t = dt.zeros(5, 6, 3)
    assert t.permute_dims(1, 2, 0).shape == (3, 5, 6)
    assert t.permute_dims((2, 0, 1)).shape == (6, 3, 5)


@pytest.mark.parametrize("permutation", list(itertools.permutations(range(3))))
def test_permute_dims_matches_numpy(permutation):
    arr = np.arange(24, dtype=np.float32).reshape(2, 3, 4)
    t = dt.from_numpy(arr)
    expected = np.transpose(arr, _inverse(permutation))
    np.testing.assert_array_equal(t.permute_dims(*permutation).numpy(), expected)


def test_permute_dims_round_trip():
    t = dt.rand(2, 3, 4, 5)
    permutation = (3, 0, 2, 1)
    assert t.permute_dims(permutation).permute_dims(_inverse(permutation)) == t


def test_permute_dims_negative_axes():
    t = dt.zeros(5, 6, 3)
    assert t.permute_dims(-2, 2, 0).shape == t.permute_dims(1, 2, 0).shape


def test_permute_dims_wrong_length():
    t = dt.zeros(2, 3, 4)
    with pytest.raises(dt.ArgumentCountError):
        t.permute_dims(0, 1)
    with pytest.raises(ValueError):
        t.permute_dims(0, 1, 2, 3)


def test_permute_dims_repeated_axis():
    t = dt.zeros(2, 3, 4)
    with pytest.raises(dt.ShapeError, match="repeated"):
        t.permute_dims(0, 0, 1)
    with pytest.raises(dt.ShapeError):
        t.permute_dims(0, -3, 1)


def test_permute_dims_out_of_bounds():
    with pytest.raises(dt.TensorIndexError):
        dt.zeros(2, 3, 4).permute_dims(0, 1, 3)


def test_permute_dims_writes_through():
    t = dt.zeros(2, 3)
    p = t.permute_dims(1, 0)
    p.set(7, 2, 1)
    assert t.get(1, 2) == 7
