# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Layouts describing where a tensor's elements live.

A tensor carries exactly one layout. :class:`Leaf` owns a buffer; the other
three kinds wrap a parent tensor and only record the parameters needed to
rewrite a coordinate tuple of the view into one of the parent. :func:`resolve`
walks the chain down to the leaf, so views compose to any depth without
copying.

The ``build_*`` helpers expect arguments that have already been validated
against the acting tensor (see :class:`densetensor.tensor.Tensor`).
"""

from __future__ import annotations

import logging
from bisect import bisect_right
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence, Tuple, Union

from ._shape import Shape, offset_of
from ._storage import StorageArray

if TYPE_CHECKING:  # pragma: no cover
    from .tensor import Tensor

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Leaf:
    storage: StorageArray
    strides: Shape


@dataclass(frozen=True, eq=False)
class AxisDeletion:
    """Hides a sorted set of coordinates along ``axis``.

    ``shifted[i]`` is the ``i``-th deleted coordinate minus ``i``, so the
    number of entries ``<= c`` is how many hidden slots precede visible
    coordinate ``c``.
    """

    parent: "Tensor"
    axis: int
    shifted: Tuple[int, ...]


@dataclass(frozen=True, eq=False)
class AxisPermutation:
    """``permutation[i]`` is the position of parent axis ``i`` in the view."""

    parent: "Tensor"
    permutation: Tuple[int, ...]


@dataclass(frozen=True, eq=False)
class AxisInsertion:
    """Unit axes at the sorted positions ``inserted`` of the view."""

    parent: "Tensor"
    inserted: Tuple[int, ...]


Layout = Union[Leaf, AxisDeletion, AxisPermutation, AxisInsertion]


def remap(layout: Layout, coords: Shape) -> Shape:
    """Translate view coordinates into the coordinates of ``layout.parent``."""

    if isinstance(layout, AxisDeletion):
        axis = layout.axis
        skipped = bisect_right(layout.shifted, coords[axis])
        return coords[:axis] + (coords[axis] + skipped,) + coords[axis + 1 :]
    if isinstance(layout, AxisPermutation):
        return tuple(coords[position] for position in layout.permutation)
    if isinstance(layout, AxisInsertion):
        inserted = layout.inserted
        return tuple(c for axis, c in enumerate(coords) if axis not in inserted)
    raise TypeError(f"{type(layout).__name__} has no parent to remap into")


def resolve(layout: Layout, coords: Shape) -> Tuple[StorageArray, int]:
    """Follow ``layout`` down to its leaf and return ``(storage, offset)``."""

    while not isinstance(layout, Leaf):
        coords = remap(layout, coords)
        layout = layout.parent._layout
    return layout.storage, offset_of(coords, layout.strides)


def build_deletion(parent: "Tensor", axis: int, deleted: Sequence[int]):
    """Return ``(layout, shape)`` hiding the sorted, unique ``deleted`` indices."""

    shape = list(parent.shape)
    shape[axis] -= len(deleted)
    shifted = tuple(index - i for i, index in enumerate(deleted))
    logger.debug(
        "Deleting %d indices from axis %d of %s", len(deleted), axis, parent.shape
    )
    return AxisDeletion(parent, axis, shifted), tuple(shape)


def build_permutation(parent: "Tensor", permutation: Sequence[int]):
    """Return ``(layout, shape)`` moving parent axis ``i`` to ``permutation[i]``."""

    shape = [0] * len(permutation)
    for axis, position in enumerate(permutation):
        shape[position] = parent.shape[axis]
    logger.debug("Permuting axes of %s by %s", parent.shape, tuple(permutation))
    return AxisPermutation(parent, tuple(permutation)), tuple(shape)


def build_insertion(parent: "Tensor", inserted: Sequence[int]):
    """Return ``(layout, shape)`` with unit axes at the sorted ``inserted`` positions."""

    inserted = tuple(inserted)
    extents = iter(parent.shape)
    shape = tuple(
        1 if axis in inserted else next(extents)
        for axis in range(parent.ndim + len(inserted))
    )
    logger.debug("Inserting unit axes at %s into %s", inserted, parent.shape)
    return AxisInsertion(parent, inserted), shape
