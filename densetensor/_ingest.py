# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Conversion of nested Python data into a shape and flat row-major values."""

from __future__ import annotations

from numbers import Real
from typing import Any, List, Optional, Tuple, Union

import numpy as np

from .errors import NullInputError, ShapeError

_SEQUENCE_TYPES = (list, tuple, bytes, bytearray)

Normalized = Union[float, List["Normalized"], None]


def float_value(obj: Any) -> Optional[float]:
    """Widen a primitive to ``float``; return ``None`` for anything else.

    Primitives are bools, real numbers (including NumPy scalars) and
    single-character strings, which are converted through their code point.
    """

    if isinstance(obj, (bool, np.bool_)):
        return 1.0 if obj else 0.0
    if isinstance(obj, Real):
        return float(obj)
    if isinstance(obj, str) and len(obj) == 1:
        return float(ord(obj))
    return None


def normalize(obj: Any) -> Normalized:
    """Rewrite ``obj`` as nested lists whose terminals are floats or ``None``.

    ``None`` marks a value that is neither a primitive nor a sequence, so the
    fill pass can report it at the exact position it occurs.
    """

    value = float_value(obj)
    if value is not None:
        return value
    if isinstance(obj, np.ndarray):
        return normalize(obj.tolist())
    if isinstance(obj, _SEQUENCE_TYPES):
        return [normalize(item) for item in obj]
    return None


def infer_shape(nested: list) -> Tuple[int, ...]:
    """Candidate shape from the lengths of first elements.

    An empty nested list ends the walk at its depth. The result is not
    guaranteed to fit the rest of the data; :func:`flatten` checks that.
    """

    ndim = 1
    head = nested[0]
    while isinstance(head, list):
        ndim += 1
        if not head:
            break
        head = head[0]

    shape = [len(nested)]
    head = nested
    for _ in range(1, ndim):
        head = head[0]
        shape.append(len(head))
    return tuple(shape)


def _non_primitive_error() -> ShapeError:
    return ShapeError(
        "Invalid argument. Cannot create Tensors from non primitive types"
    )


def _fill(nested: list, shape: Tuple[int, ...], axis: int, out: List[float]) -> None:
    ndim = len(shape)
    if len(nested) != shape[axis]:
        raise ShapeError(
            "Invalid argument. Tensors cannot be created from ragged lists. "
            f"At axis {axis} size is {shape[axis]}, but found list of length {len(nested)}"
        )

    if axis == ndim - 1:
        for item in nested:
            if item is None:
                raise _non_primitive_error()
            if isinstance(item, list):
                raise ShapeError(
                    "Invalid argument. Inconsistent dimensions found in argument. "
                    f"Expected {ndim} dimensions, but found a nested list at depth {ndim}"
                )
            out.append(item)
        return

    for item in nested:
        if item is None:
            raise _non_primitive_error()
        if not isinstance(item, list):
            raise ShapeError(
                "Invalid argument. Inconsistent dimensions found in argument. "
                f"Expected {ndim} dimensions, but found primitive value in list at depth {axis}"
            )
        _fill(item, shape, axis + 1, out)


def flatten(data: Any) -> Tuple[Tuple[int, ...], List[float]]:
    """Validate nested ``data`` and return its shape and row-major values.

    Nothing is allocated for the tensor until this returns, so a malformed
    argument never leaves a partially filled buffer behind.
    """

    if data is None:
        raise NullInputError("Cannot create Tensor from 'None'")

    nested = normalize(data)
    if nested is None:
        raise ShapeError(
            f"Cannot create Tensor from object of type {type(data).__name__}"
        )
    if not isinstance(nested, list):
        return (1,), [nested]
    if not nested:
        return (0,), []

    shape = infer_shape(nested)
    values: List[float] = []
    _fill(nested, shape, 0, values)
    return shape, values
