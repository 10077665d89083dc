# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import pytest

import densetensor as dt


def test_unsqueeze_single_axis():
    t = dt.zeros(2, 3)
    assert t.unsqueeze(0).shape == (1, 2, 3)
    assert t.unsqueeze(1).shape == (2, 1, 3)
    assert t.unsqueeze(2).shape == (2, 3, 1)
    assert t.unsqueeze(-1).shape == (2, 3, 1)


def test_unsqueeze_inserts_unit_extent():
    t = dt.zeros(4, 5, 6)
    for axis in range(4):
        assert t.unsqueeze(axis).shape[axis] == 1


def test_unsqueeze_repeated_positions_are_consecutive():
    t = dt.zeros(2, 3)
    assert t.unsqueeze(2, 2).shape == (2, 3, 1, 1)
    assert t.unsqueeze(0, 0).shape == (1, 1, 2, 3)
    with pytest.raises(dt.TensorIndexError):
        t.unsqueeze(3, 3)


def test_unsqueeze_multiple_axes_matches_numpy():
    arr = np.arange(6, dtype=np.float32).reshape(2, 3)
    t = dt.from_numpy(arr)
    u = t.unsqueeze(0, 2)
    assert u.shape == (1, 2, 1, 3)
    np.testing.assert_array_equal(u.numpy(), np.expand_dims(arr, (0, 2)))
    np.testing.assert_array_equal(t.unsqueeze([3, 1]).numpy(), np.expand_dims(arr, (1, 3)))


def test_unsqueeze_reads_and_writes_parent():
    t = dt.tensor([[1, 2, 3], [4, 5, 6]])
    u = t.unsqueeze(0, 2)
    assert u.get(0, 1, 0, 2) == t.get(1, 2)
    u.set(-1, 0, 0, 0, 1)
    assert t.get(0, 1) == -1


def test_unsqueeze_out_of_bounds():
    with pytest.raises(dt.TensorIndexError):
        dt.zeros(2, 3).unsqueeze(5)
    with pytest.raises(IndexError):
        dt.zeros(2, 3).unsqueeze(-4)


def test_unsqueeze_without_axes_returns_self():
    t = dt.zeros(2)
    assert t.unsqueeze() is t
