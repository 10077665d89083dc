# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Function-style forms of the tensor view and reduction methods."""

from __future__ import annotations

from typing import Callable, Optional, Sequence, Union

from .tensor import Tensor


def delete(input: Tensor, axis: int, *indices: Union[int, Sequence[int]]) -> Tensor:
    return input.delete(axis, *indices)


def swapaxes(input: Tensor, axis0: int, axis1: int) -> Tensor:
    return input.swapaxes(axis0, axis1)


swapdims = swapaxes


def transpose(input: Tensor) -> Tensor:
    """Swap the last two axes (see :meth:`Tensor.t`)."""
    return input.t()


def permute_dims(input: Tensor, *permutation: Union[int, Sequence[int]]) -> Tensor:
    return input.permute_dims(*permutation)


def moveaxis(input: Tensor, source: int, destination: int) -> Tensor:
    return input.moveaxis(source, destination)


movedim = moveaxis


def unsqueeze(input: Tensor, *axes: Union[int, Sequence[int]]) -> Tensor:
    return input.unsqueeze(*axes)


def reduce(input: Tensor, function: Callable[[float, float], float], *initial: float) -> float:
    return input.reduce(function, *initial)


def nanmin(input: Tensor) -> float:
    return input.nanmin()


def nanmax(input: Tensor) -> float:
    return input.nanmax()


def argmin(input: Tensor) -> int:
    return input.argmin()


def argmax(input: Tensor) -> int:
    return input.argmax()


def nan_to_num(
    input: Tensor,
    nan: float = 0.0,
    posinf: Optional[float] = None,
    neginf: Optional[float] = None,
) -> Tensor:
    return input.nan_to_num(nan, posinf, neginf)


__all__ = [
    "delete",
    "swapaxes",
    "swapdims",
    "transpose",
    "permute_dims",
    "moveaxis",
    "movedim",
    "unsqueeze",
    "reduce",
    "nanmin",
    "nanmax",
    "argmin",
    "argmax",
    "nan_to_num",
]
