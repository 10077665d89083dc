# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Whole-tensor folds and elementwise maps.

Every function walks the tensor in row-major order, so "flat index" below is
always the position in that walk, whatever chain of views the tensor sits on.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, Callable, Optional

import numpy as np

from ._config import numpy_dtype
from ._storage import narrow
from .errors import EmptyReductionError

if TYPE_CHECKING:  # pragma: no cover
    from .tensor import Tensor

_MISSING: Any = object()


def _require_elements(tensor: "Tensor", operation: str) -> None:
    if tensor.size == 0:
        raise EmptyReductionError(f"Cannot perform {operation}() on an empty Tensor")


def reduce(
    tensor: "Tensor", function: Callable[[float, float], float], initial: Any = _MISSING
) -> float:
    """Left fold of ``function`` over the elements of ``tensor``.

    With ``initial`` the fold starts from it, which also makes the result of an
    empty tensor well defined. Without it the first element seeds the fold.
    """

    values = iter(tensor)
    if initial is _MISSING:
        if tensor.size == 0:
            raise EmptyReductionError(
                "Cannot reduce an empty Tensor without an initial value"
            )
        accumulated = next(values)
    else:
        accumulated = initial
    for value in values:
        accumulated = function(accumulated, value)
    return accumulated


# math.nan comparisons are always False, so NaN has to be propagated by hand.
# Equal zeros are ordered -0.0 < +0.0.
def _ieee_min(x: float, y: float) -> float:
    if math.isnan(x) or math.isnan(y):
        return math.nan
    if y == x:
        return y if math.copysign(1.0, y) < 0 else x
    return y if y < x else x


def _ieee_max(x: float, y: float) -> float:
    if math.isnan(x) or math.isnan(y):
        return math.nan
    if y == x:
        return x if math.copysign(1.0, y) < 0 else y
    return y if y > x else x


def minimum(tensor: "Tensor") -> float:
    _require_elements(tensor, "min")
    return reduce(tensor, _ieee_min)


def maximum(tensor: "Tensor") -> float:
    _require_elements(tensor, "max")
    return reduce(tensor, _ieee_max)


def _ignoring_nan(function: Callable[[float, float], float]):
    def wrapped(x: float, y: float) -> float:
        if math.isnan(y):
            return x
        if math.isnan(x):
            return y
        return function(x, y)

    return wrapped


def nanmin(tensor: "Tensor") -> float:
    """Smallest non-NaN element, or NaN when every element is NaN."""
    _require_elements(tensor, "nanmin")
    return reduce(tensor, _ignoring_nan(_ieee_min))


def nanmax(tensor: "Tensor") -> float:
    """Largest non-NaN element, or NaN when every element is NaN."""
    _require_elements(tensor, "nanmax")
    return reduce(tensor, _ignoring_nan(_ieee_max))


def _arg_extreme(tensor: "Tensor", operation: str, better: Callable[[float, float], bool]) -> int:
    _require_elements(tensor, operation)
    best_index = 0
    best = None
    for index, value in enumerate(tensor):
        if math.isnan(value):
            return index
        if best is None or better(value, best):
            best = value
            best_index = index
    return best_index


def argmin(tensor: "Tensor") -> int:
    """Flat index of the first minimum; the first NaN wins outright."""
    return _arg_extreme(tensor, "argmin", lambda value, best: value < best)


def argmax(tensor: "Tensor") -> int:
    """Flat index of the first maximum; the first NaN wins outright."""
    return _arg_extreme(tensor, "argmax", lambda value, best: value > best)


def apply(tensor: "Tensor", function: Callable[[float], float]) -> "Tensor":
    return tensor._new_leaf(tensor.shape, (function(value) for value in tensor))


def apply_indexed(tensor: "Tensor", function: Callable[[int, float], float]) -> "Tensor":
    return tensor._new_leaf(
        tensor.shape, (function(index, value) for index, value in enumerate(tensor))
    )


def nan_to_num(
    tensor: "Tensor",
    nan: float = 0.0,
    posinf: Optional[float] = None,
    neginf: Optional[float] = None,
) -> "Tensor":
    """Replace NaN and infinities with finite values.

    ``posinf`` defaults to the largest finite value of the tensor's dtype and
    ``neginf`` to ``-posinf``. Every replacement must be finite in the
    tensor's dtype, otherwise ``ValueError`` is raised.
    """

    limits = np.finfo(numpy_dtype(tensor.dtype))
    if posinf is None:
        posinf = float(limits.max)
    if neginf is None:
        neginf = -posinf
    for name, value in (("nan", nan), ("posinf", posinf), ("neginf", neginf)):
        if not math.isfinite(value):
            raise ValueError(f"nan_to_num() {name} must be finite, got {value!r}")
        narrow(value, tensor.dtype)

    def replace(value: float) -> float:
        if math.isnan(value):
            return nan
        if math.isinf(value):
            return neginf if value < 0 else posinf
        return value

    return apply(tensor, replace)
