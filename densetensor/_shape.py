# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Shape, stride and index arithmetic shared by leaves and views.

All helpers work on plain tuples of ints. Coordinates handed to
:func:`offset_of`, :func:`ravel_index` and the view remaps are assumed to be
validated and non-negative; :func:`validate_indices` is the only entry point
that accepts user supplied indices.
"""

from __future__ import annotations

import operator
from typing import Sequence, Tuple

from .errors import ArgumentCountError, ShapeError, TensorIndexError

Shape = Tuple[int, ...]


def _as_int(value, what: str) -> int:
    try:
        return operator.index(value)
    except TypeError:
        raise TypeError(
            f"{what} must be integers, got {type(value).__name__}"
        ) from None


def validate_shape(shape: Sequence[int]) -> Shape:
    """Return ``shape`` as a tuple, rejecting empty or negative shapes."""

    shape = tuple(_as_int(extent, "Tensor dimensions") for extent in shape)
    if not shape:
        raise ShapeError("Tensors must have at least one dimension")
    for extent in shape:
        if extent < 0:
            raise ShapeError(
                f"Attempted to create Tensor of shape {list(shape)}, but cannot "
                "create Tensor with negative dimensions"
            )
    return shape


def numel(shape: Shape) -> int:
    size = 1
    for extent in shape:
        size *= extent
    return size


def compute_strides(shape: Shape) -> Shape:
    """Row-major strides: the last axis varies fastest."""

    strides = [1] * len(shape)
    for i in range(len(shape) - 2, -1, -1):
        strides[i] = strides[i + 1] * shape[i + 1]
    return tuple(strides)


def offset_of(coords: Sequence[int], strides: Shape) -> int:
    offset = 0
    for coord, stride in zip(coords, strides):
        offset += coord * stride
    return offset


def ravel_index(coords: Sequence[int], shape: Shape) -> int:
    """Row-major flat index of ``coords`` within ``shape``."""

    index = 0
    for coord, extent in zip(coords, shape):
        index = index * extent + coord
    return index


def unravel_index(index: int, shape: Shape) -> Shape:
    """Inverse of :func:`ravel_index` for a non-negative, in-range ``index``."""

    coords = [0] * len(shape)
    for i in range(len(shape) - 1, -1, -1):
        index, coords[i] = divmod(index, shape[i])
    return tuple(coords)


def normalize_axis(axis: int, ndim: int) -> int:
    """Map ``axis`` from ``[-ndim, ndim)`` onto ``[0, ndim)``."""

    axis = _as_int(axis, "Axes")
    if axis < -ndim or axis >= ndim:
        raise TensorIndexError(
            f"Axis {axis} out of bounds for Tensor with {ndim} dimensions"
        )
    return axis + ndim if axis < 0 else axis


def normalize_index(index: int, extent: int, axis: int) -> int:
    index = _as_int(index, "Tensor indices")
    if index < -extent or index >= extent:
        raise TensorIndexError(
            f"Index {index} is out of bounds for axis {axis} with size {extent}"
        )
    return index + extent if index < 0 else index


def validate_indices(indices: Sequence[int], shape: Shape, size: int) -> Shape:
    """Validate user indices and return non-negative coordinates.

    A full set of indices (one per axis) addresses an element directly. A
    single index on a tensor with more than one axis is a flat, row-major
    index into the whole tensor.
    """

    indices = tuple(_as_int(i, "Tensor indices") for i in indices)
    ndim = len(shape)

    if len(indices) != 1 or ndim == 1:
        if len(indices) > ndim:
            raise ArgumentCountError(
                f"Too many indices supplied. Tensor is {ndim}-dimensional "
                f"but {len(indices)} were indexed"
            )
        if len(indices) < ndim:
            raise ArgumentCountError(
                f"Not enough indices supplied. Tensor is {ndim}-dimensional "
                f"but {len(indices)} were indexed"
            )
        return tuple(
            normalize_index(index, extent, axis)
            for axis, (index, extent) in enumerate(zip(indices, shape))
        )

    index = indices[0]
    if index < -size or index >= size:
        raise TensorIndexError(
            f"Index {index} out of bounds for Tensor of size {size}"
        )
    if index < 0:
        index += size
    return unravel_index(index, shape)


def iter_indices(shape: Shape):
    """Yield every coordinate tuple of ``shape`` in row-major order."""

    if numel(shape) == 0:
        return
    ndim = len(shape)
    coords = [0] * ndim
    while True:
        yield tuple(coords)
        axis = ndim - 1
        while axis >= 0:
            coords[axis] += 1
            if coords[axis] < shape[axis]:
                break
            coords[axis] = 0
            axis -= 1
        if axis < 0:
            return
