# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Exception types raised by densetensor.

Every error derives from :class:`TensorError` and from the builtin exception a
caller would naturally catch, so ``except IndexError`` keeps working while
``except TensorIndexError`` allows branching on the exact kind.
"""

from __future__ import annotations


class TensorError(Exception):
    """Base class for all densetensor errors."""


class ArgumentCountError(TensorError, ValueError):
    """Wrong number of indices or permutation entries for the tensor's rank."""


class TensorIndexError(TensorError, IndexError):
    """An index, axis or flat index outside its valid range."""


class ShapeError(TensorError, ValueError):
    """Invalid shape or structure.

    Raised for negative extents, ragged or inconsistent nested input,
    non-primitive values in nested input, duplicate deletion indices and
    non-bijective permutations.
    """


class NullInputError(TensorError, TypeError):
    """``None`` passed where nested tensor data was expected."""


class EmptyReductionError(TensorError, RuntimeError):
    """A reduction without an initial value was requested on an empty tensor."""


__all__ = [
    "TensorError",
    "ArgumentCountError",
    "TensorIndexError",
    "ShapeError",
    "NullInputError",
    "EmptyReductionError",
]
