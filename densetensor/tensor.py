# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Dense row-major tensors with zero-copy axis views.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Iterable, Iterator, Optional, Sequence, Tuple, Union

import numpy as np

from . import _reductions, random as _random
from ._config import numpy_dtype, resolve_dtype
from ._formatting import format_tensor
from ._ingest import flatten
from ._shape import (
    Shape,
    compute_strides,
    iter_indices,
    normalize_axis,
    normalize_index,
    numel,
    validate_indices,
    validate_shape,
)
from ._storage import StorageArray
from ._views import (
    Layout,
    Leaf,
    build_deletion,
    build_insertion,
    build_permutation,
    resolve,
)
from .errors import ArgumentCountError, ShapeError, TensorIndexError

ShapeLike = Union[int, Sequence[int], "Tensor"]


def _flatten_args(args: Sequence[Any]) -> list:
    """Accept both ``f(1, 2)`` and ``f((1, 2))`` call styles."""

    if len(args) == 1 and isinstance(args[0], (list, tuple)):
        return list(args[0])
    return list(args)


def _shape_from_args(shape: Sequence[ShapeLike]) -> Shape:
    if len(shape) == 1 and isinstance(shape[0], Tensor):
        return validate_shape(int(extent) for extent in shape[0])
    return validate_shape(_flatten_args(shape))


class Tensor:
    """
    A dense, row-major, floating-point tensor.

    A tensor either owns a flat buffer (a leaf) or is a view onto another
    tensor. Views are created by :meth:`delete`, :meth:`swapaxes`,
    :meth:`permute_dims`, :meth:`moveaxis`, :meth:`unsqueeze` and :meth:`t`;
    they never copy, and writes through a view land in the leaf's buffer.
    """

    EMPTY: "Tensor"

    @classmethod
    def _wrap_layout(cls, layout: Layout, shape: Shape) -> "Tensor":
        """Instantiate a ``Tensor`` (or subclass) with ``layout`` and ``shape``.

        Every view and factory goes through this helper instead of
        ``__init__``, which is reserved for ingesting nested data.
        """

        instance = cls.__new__(cls)
        instance._layout = layout
        instance._shape = shape
        instance._size = numel(shape)
        return instance

    @classmethod
    def _from_storage(cls, shape: Shape, storage: StorageArray) -> "Tensor":
        return cls._wrap_layout(Leaf(storage, compute_strides(shape)), shape)

    @classmethod
    def _from_values(
        cls, shape: Shape, values: Iterable[float], dtype: Optional[str] = None
    ) -> "Tensor":
        storage = StorageArray.from_values(values, numel(shape), dtype)
        return cls._from_storage(shape, storage)

    def _new_leaf(self, shape: Shape, values: Iterable[float]) -> "Tensor":
        """A fresh leaf with this tensor's dtype."""
        return Tensor._from_values(shape, values, self.dtype)

    def __init__(self, data: Any, dtype: Optional[str] = None):
        """
        Initialize a tensor from nested data.

        Args:
            data: A primitive, an arbitrarily nested list/tuple/ndarray of
                primitives, or another tensor (which is copied). Bools,
                integers and one-character strings are widened to floats.
            dtype: Storage data type ('float32' or 'float64').

        Examples:
            >>> t1 = Tensor([1, 2, 3])
            >>> t2 = Tensor([[1, 2], [3, 4]], dtype='float64')
            >>> t3 = Tensor([(True, 'a'), (2.5, 3)])
        """
        if isinstance(data, Tensor):
            # Copy constructor
            shape: Shape = data.shape
            values: Iterable[float] = iter(data)
            dtype = dtype or data.dtype
        else:
            shape, values = flatten(data)
        storage = StorageArray.from_values(values, numel(shape), dtype)
        self._layout = Leaf(storage, compute_strides(shape))
        self._shape = shape
        self._size = numel(shape)

    # Core properties
    @property
    def shape(self) -> Tuple[int, ...]:
        """Get tensor shape as tuple."""
        return self._shape

    @property
    def ndim(self) -> int:
        """Number of dimensions."""
        return len(self._shape)

    dims = ndim

    @property
    def size(self) -> int:
        """Total number of elements."""
        return self._size

    @property
    def dtype(self) -> str:
        """Data type of the leaf buffer backing this tensor."""
        return self._leaf().storage.dtype

    @property
    def strides(self) -> Optional[Tuple[int, ...]]:
        """Strides of a leaf tensor, ``None`` for views."""
        layout = self._layout
        return layout.strides if isinstance(layout, Leaf) else None

    @property
    def is_view(self) -> bool:
        return not isinstance(self._layout, Leaf)

    @property
    def base(self) -> Optional["Tensor"]:
        """The tensor this view reads through, or ``None`` for a leaf."""
        layout = self._layout
        return None if isinstance(layout, Leaf) else layout.parent

    @property
    def T(self) -> "Tensor":
        """Transpose."""
        return self.t()

    def _leaf(self) -> Leaf:
        layout = self._layout
        while not isinstance(layout, Leaf):
            layout = layout.parent._layout
        return layout

    # Basic tensor info methods
    def numel(self) -> int:
        """Get total number of elements."""
        return self._size

    def dim(self) -> int:
        """Get number of dimensions."""
        return self.ndim

    def extent(self, axis: int) -> int:
        """Size of the tensor along ``axis``. Negative axes count from the end."""
        return self._shape[normalize_axis(axis, self.ndim)]

    # Element access
    def get(self, *indices: int) -> float:
        """Return the element at ``indices``.

        Supply one index per axis, or a single flat (row-major) index. Negative
        indices count from the end of their axis, or of the whole tensor for a
        flat index.
        """
        coords = validate_indices(indices, self._shape, self._size)
        storage, offset = resolve(self._layout, coords)
        return storage[offset]

    def set(self, value: float, *indices: int) -> "Tensor":
        """Write ``value`` at ``indices`` (see :meth:`get`) and return ``self``."""
        coords = validate_indices(indices, self._shape, self._size)
        storage, offset = resolve(self._layout, coords)
        storage[offset] = float(value)
        return self

    def __getitem__(self, key) -> float:
        if isinstance(key, tuple):
            return self.get(*key)
        return self.get(key)

    def __setitem__(self, key, value: float) -> None:
        if isinstance(key, tuple):
            self.set(value, *key)
        else:
            self.set(value, key)

    def indices(self) -> Iterator[Tuple[int, ...]]:
        """Iterate over every valid coordinate tuple in row-major order."""
        return iter_indices(self._shape)

    def __iter__(self) -> Iterator[float]:
        """Iterate over the elements in row-major order."""
        layout = self._layout
        if isinstance(layout, Leaf):
            return iter(layout.storage.tolist())
        return self._iter_view()

    def _iter_view(self) -> Iterator[float]:
        layout = self._layout
        for coords in iter_indices(self._shape):
            storage, offset = resolve(layout, coords)
            yield storage[offset]

    # Data conversion methods
    def numpy(self) -> np.ndarray:
        """Convert to a NumPy array, sharing memory when this is a leaf."""
        layout = self._layout
        if isinstance(layout, Leaf):
            return layout.storage.numpy().reshape(self._shape)
        data = np.fromiter(self, dtype=numpy_dtype(self.dtype), count=self._size)
        return data.reshape(self._shape)

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        """Support NumPy's array protocol."""
        array = self.numpy()
        if copy:
            array = array.copy()
        if dtype is not None:
            return array.astype(dtype, copy=False)
        return array

    def tolist(self) -> list:
        """Convert to nested Python lists."""
        return self.numpy().tolist()

    def clone(self) -> "Tensor":
        """Create a leaf copy of the tensor, materializing any views."""
        layout = self._layout
        if isinstance(layout, Leaf):
            return Tensor._from_storage(self._shape, layout.storage.clone())
        return self._new_leaf(self._shape, iter(self))

    def copy(self) -> "Tensor":
        """Create a copy of the tensor (NumPy compatibility)."""
        return self.clone()

    # View operations
    def delete(self, axis: int, *indices: Union[int, Sequence[int]]) -> "Tensor":
        """Hide ``indices`` along ``axis``.

        The result is a view; the retained elements keep their relative order
        and writes through it reach this tensor.

        Raises:
            TensorIndexError: ``axis`` or an index is out of bounds.
            ShapeError: An index is given twice.
        """
        axis = normalize_axis(axis, self.ndim)
        extent = self._shape[axis]
        deleted = sorted(
            normalize_index(index, extent, axis) for index in _flatten_args(indices)
        )
        for previous, current in zip(deleted, deleted[1:]):
            if previous == current:
                raise ShapeError(
                    f"Attempted to delete index {current} twice in axis {axis}. "
                    "Each index can only be deleted once"
                )
        return Tensor._wrap_layout(*build_deletion(self, axis, deleted))

    def swapaxes(self, axis0: int, axis1: int) -> "Tensor":
        """Swap two dimensions of the tensor."""
        axis0 = normalize_axis(axis0, self.ndim)
        axis1 = normalize_axis(axis1, self.ndim)
        if axis0 == axis1:
            return self
        permutation = list(range(self.ndim))
        permutation[axis0], permutation[axis1] = axis1, axis0
        return Tensor._wrap_layout(*build_permutation(self, permutation))

    swapdims = swapaxes

    def t(self) -> "Tensor":
        """Swap the last two axes; a 1-D tensor becomes an ``(n, 1)`` column."""
        if self.ndim == 1:
            return self.unsqueeze(1)
        return self.swapaxes(-1, -2)

    def permute_dims(self, *permutation: Union[int, Sequence[int]]) -> "Tensor":
        """Move axis ``i`` to position ``permutation[i]``.

        For example a tensor of shape ``(5, 6, 3)`` permuted by ``(1, 2, 0)``
        has shape ``(3, 5, 6)``.
        """
        permutation = _flatten_args(permutation)
        ndim = self.ndim
        if len(permutation) != ndim:
            raise ArgumentCountError(
                f"{len(permutation)} permutation dims provided to Tensor with {ndim} dims"
            )
        normalized = []
        for axis in permutation:
            axis = normalize_axis(axis, ndim)
            if axis in normalized:
                raise ShapeError(f"Dimension {axis} repeated in permute_dims")
            normalized.append(axis)
        return Tensor._wrap_layout(*build_permutation(self, normalized))

    def moveaxis(self, source: int, destination: int) -> "Tensor":
        """Move axis ``source`` to ``destination``, keeping the others in order."""
        ndim = self.ndim
        source = normalize_axis(source, ndim)
        destination = normalize_axis(destination, ndim)
        if source == destination:
            return self
        order = [axis for axis in range(ndim) if axis != source]
        order.insert(destination, source)
        permutation = [0] * ndim
        for position, axis in enumerate(order):
            permutation[axis] = position
        return Tensor._wrap_layout(*build_permutation(self, permutation))

    movedim = moveaxis

    def unsqueeze(self, *axes: Union[int, Sequence[int]]) -> "Tensor":
        """Insert unit axes at ``axes``.

        Positions refer to the result, whose rank is ``ndim + len(axes)``.
        Repeated positions insert consecutively, so on a 2-D tensor
        ``unsqueeze(2, 2)`` gives shape ``(x, y, 1, 1)`` while
        ``unsqueeze(3, 3)`` is out of bounds.
        """
        axes = _flatten_args(axes)
        if not axes:
            return self
        final = self.ndim + len(axes)
        positions = sorted(normalize_axis(axis, final) for axis in axes)
        for i in range(1, len(positions)):
            positions[i] = max(positions[i], positions[i - 1] + 1)
        if positions[-1] >= final:
            raise TensorIndexError(
                f"Axis {positions[-1]} out of bounds for Tensor with {final} dimensions"
            )
        return Tensor._wrap_layout(*build_insertion(self, positions))

    # Reduction operations
    def reduce(self, function: Callable[[float, float], float], *initial: float) -> float:
        """Fold ``function`` over the flattened tensor, left to right.

        For example if ``t = [1, 2, 3]`` then ``t.reduce(f, -1)`` computes
        ``f(f(f(-1, 1), 2), 3)``. Without an initial value the first element
        seeds the fold and an empty tensor raises
        :class:`~densetensor.errors.EmptyReductionError`.
        """
        if len(initial) > 1:
            raise TypeError(f"reduce() takes at most one initial value, got {len(initial)}")
        return _reductions.reduce(self, function, *initial)

    def min(self) -> float:
        """Smallest element; NaN if any element is NaN."""
        return _reductions.minimum(self)

    def max(self) -> float:
        """Largest element; NaN if any element is NaN."""
        return _reductions.maximum(self)

    def argmin(self) -> int:
        return _reductions.argmin(self)

    def argmax(self) -> int:
        return _reductions.argmax(self)

    def nanmin(self) -> float:
        return _reductions.nanmin(self)

    def nanmax(self) -> float:
        return _reductions.nanmax(self)

    def apply(self, function: Callable[[float], float]) -> "Tensor":
        """Return a new leaf with ``function`` applied to every element."""
        return _reductions.apply(self, function)

    def apply_indexed(self, function: Callable[[int, float], float]) -> "Tensor":
        """Like :meth:`apply`, but ``function`` receives ``(flat_index, value)``."""
        return _reductions.apply_indexed(self, function)

    def abs(self) -> "Tensor":
        return self.apply(abs)

    def nan_to_num(
        self,
        nan: float = 0.0,
        posinf: Optional[float] = None,
        neginf: Optional[float] = None,
    ) -> "Tensor":
        """Replace NaN, inf and -inf with finite values.

        Infinities default to the largest finite value of the dtype, with the
        sign preserved; ``neginf`` defaults to ``-posinf``.
        """
        return _reductions.nan_to_num(self, nan, posinf, neginf)

    # Comparison
    def __eq__(self, other: object) -> bool:
        """Shape and elementwise equality where NaN == NaN and 0.0 == -0.0."""
        if self is other:
            return True
        if not isinstance(other, Tensor):
            return NotImplemented
        if self._shape != other._shape:
            return False
        for left, right in zip(self, other):
            if left != right and not (math.isnan(left) and math.isnan(right)):
                return False
        return True

    def __hash__(self) -> int:
        values = np.fromiter(self, dtype=np.float64, count=self._size)
        # One bit pattern for every NaN and for both zeros, matching __eq__
        values[values == 0] = 0.0
        values[np.isnan(values)] = np.nan
        return hash((self._shape, tuple(values.view(np.uint64).tolist())))

    # String representations
    def __str__(self) -> str:
        return format_tensor(self)

    def __repr__(self) -> str:
        body = format_tensor(self).replace("\n", "\n" + " " * len("tensor("))
        return f"tensor({body})"

    # Static tensor creation methods
    @staticmethod
    def zeros(*shape: ShapeLike, dtype: Optional[str] = None) -> "Tensor":
        """Create a tensor filled with zeros."""
        shape = _shape_from_args(shape)
        return Tensor._from_storage(shape, StorageArray(numel(shape), dtype))

    @staticmethod
    def ones(*shape: ShapeLike, dtype: Optional[str] = None) -> "Tensor":
        """Create a tensor filled with ones."""
        return Tensor.full(_shape_from_args(shape), 1.0, dtype=dtype)

    @staticmethod
    def full(shape: ShapeLike, fill_value: float, dtype: Optional[str] = None) -> "Tensor":
        """Create a tensor filled with a specific value."""
        shape = _shape_from_args((shape,))
        storage = StorageArray.full(numel(shape), float(fill_value), dtype)
        return Tensor._from_storage(shape, storage)

    @staticmethod
    def rand(
        *shape: ShapeLike,
        dtype: Optional[str] = None,
        generator: Optional[np.random.Generator] = None,
    ) -> "Tensor":
        """Create a tensor with random values from uniform distribution [0, 1)."""
        shape = _shape_from_args(shape)
        dtype = resolve_dtype(dtype)
        size = numel(shape)
        data = _random.uniform(size, numpy_dtype(dtype), generator)
        return Tensor._from_storage(shape, StorageArray(size, dtype, data))

    @staticmethod
    def randn(
        *shape: ShapeLike,
        dtype: Optional[str] = None,
        generator: Optional[np.random.Generator] = None,
    ) -> "Tensor":
        """Create a tensor with random values from standard normal distribution."""
        shape = _shape_from_args(shape)
        dtype = resolve_dtype(dtype)
        size = numel(shape)
        data = _random.standard_normal(size, numpy_dtype(dtype), generator)
        return Tensor._from_storage(shape, StorageArray(size, dtype, data))

    @staticmethod
    def arange(
        start: float,
        stop: Optional[float] = None,
        step: float = 1,
        dtype: Optional[str] = None,
    ) -> "Tensor":
        """Create a 1-D tensor with values ``start + i * step`` in ``[start, stop)``.

        With one argument the range starts at 0. If ``stop - start`` and
        ``step`` have different signs the result is empty.
        """
        if stop is None:
            start, stop = 0, start
        if step == 0:
            raise ValueError("arange() step must be nonzero")
        count = max(0, math.ceil((stop - start) / step))
        values = (start + i * step for i in range(count))
        return Tensor._from_values((count,), values, dtype)

    range = arange

    @staticmethod
    def from_numpy(array: np.ndarray, dtype: Optional[str] = None) -> "Tensor":
        """Create a tensor from a NumPy array (the data is copied)."""
        array = np.asarray(array)
        if dtype is None and array.dtype.name in ("float32", "float64"):
            dtype = array.dtype.name
        shape = validate_shape(array.shape or (1,))
        return Tensor._from_storage(
            shape, StorageArray(numel(shape), dtype, array.copy())
        )


EMPTY = Tensor._from_values((0,), ())
Tensor.EMPTY = EMPTY


# Convenience functions for tensor creation (NumPy-style)
def tensor(data: Any, dtype: Optional[str] = None) -> Tensor:
    """Create a tensor from nested data."""
    return Tensor(data, dtype=dtype)


def zeros(*shape: ShapeLike, dtype: Optional[str] = None) -> Tensor:
    """Create a tensor filled with zeros."""
    return Tensor.zeros(*shape, dtype=dtype)


def ones(*shape: ShapeLike, dtype: Optional[str] = None) -> Tensor:
    """Create a tensor filled with ones."""
    return Tensor.ones(*shape, dtype=dtype)


def full(shape: ShapeLike, fill_value: float, dtype: Optional[str] = None) -> Tensor:
    """Create a tensor filled with a specific value."""
    return Tensor.full(shape, fill_value, dtype=dtype)


def rand(
    *shape: ShapeLike,
    dtype: Optional[str] = None,
    generator: Optional[np.random.Generator] = None,
) -> Tensor:
    """Create a tensor with random values from uniform distribution."""
    return Tensor.rand(*shape, dtype=dtype, generator=generator)


def randn(
    *shape: ShapeLike,
    dtype: Optional[str] = None,
    generator: Optional[np.random.Generator] = None,
) -> Tensor:
    """Create a tensor with random values from normal distribution."""
    return Tensor.randn(*shape, dtype=dtype, generator=generator)


def arange(
    start: float,
    stop: Optional[float] = None,
    step: float = 1,
    dtype: Optional[str] = None,
) -> Tensor:
    """Create a tensor with evenly spaced values."""
    return Tensor.arange(start, stop, step, dtype=dtype)


def zeros_like(other: Tensor, dtype: Optional[str] = None) -> Tensor:
    return Tensor.zeros(other.shape, dtype=dtype or other.dtype)


def ones_like(other: Tensor, dtype: Optional[str] = None) -> Tensor:
    return Tensor.ones(other.shape, dtype=dtype or other.dtype)


def rand_like(
    other: Tensor,
    dtype: Optional[str] = None,
    generator: Optional[np.random.Generator] = None,
) -> Tensor:
    return Tensor.rand(other.shape, dtype=dtype or other.dtype, generator=generator)


def randn_like(
    other: Tensor,
    dtype: Optional[str] = None,
    generator: Optional[np.random.Generator] = None,
) -> Tensor:
    return Tensor.randn(other.shape, dtype=dtype or other.dtype, generator=generator)


def from_numpy(array: np.ndarray, dtype: Optional[str] = None) -> Tensor:
    """Create a tensor from a NumPy array."""
    return Tensor.from_numpy(array, dtype=dtype)


# Export all public symbols
__all__ = [
    "Tensor",
    "EMPTY",
    "tensor",
    "zeros",
    "ones",
    "full",
    "rand",
    "randn",
    "arange",
    "zeros_like",
    "ones_like",
    "rand_like",
    "randn_like",
    "from_numpy",
]
