# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import pytest

import densetensor as dt


def test_swapaxes_is_self_inverse():
    arr = np.arange(12, dtype=np.float32).reshape(1, 4, 3)
    t = dt.from_numpy(arr)
    s = t.swapaxes(0, 2)
    assert s.shape == (3, 4, 1)
    assert s.swapaxes(0, 2) == t


def test_swapaxes_matches_numpy():
    arr = np.arange(24, dtype=np.float32).reshape(2, 3, 4)
    t = dt.from_numpy(arr)
    np.testing.assert_array_equal(t.swapaxes(0, 2).numpy(), np.swapaxes(arr, 0, 2))
    np.testing.assert_array_equal(t.swapaxes(-1, 1).numpy(), np.swapaxes(arr, -1, 1))
    np.testing.assert_array_equal(t.swapdims(0, 1).numpy(), np.swapaxes(arr, 0, 1))


def test_swapaxes_same_axis_returns_self():
    t = dt.zeros(2, 3)
    assert t.swapaxes(1, -1) is t


def test_swapaxes_out_of_bounds():
    t = dt.zeros(2, 3)
    with pytest.raises(dt.TensorIndexError):
        t.swapaxes(0, 2)
    with pytest.raises(IndexError):
        t.swapaxes(-3, 0)


def test_t_on_matrix_and_vector():
    arr = np.arange(6, dtype=np.float32).reshape(2, 3)
    t = dt.from_numpy(arr)
    np.testing.assert_array_equal(t.t().numpy(), arr.T)
    np.testing.assert_array_equal(t.T.numpy(), arr.T)
    column = dt.arange(3).t()
    assert column.shape == (3, 1)
    assert column.tolist() == [[0.0], [1.0], [2.0]]
