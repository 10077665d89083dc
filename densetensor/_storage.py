# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Flat element buffers owned by leaf tensors."""

from __future__ import annotations

from typing import Iterable, Optional

import numpy as np

from ._config import numpy_dtype, resolve_dtype


def narrow(data, dtype: str) -> np.ndarray:
    """Cast ``data`` to a flat array of ``dtype``.

    Finite values beyond the range of ``dtype`` raise ``ValueError`` instead of
    turning into infinities.
    """

    source = np.asarray(data).reshape(-1)
    with np.errstate(over="ignore"):
        narrowed = np.ascontiguousarray(source, dtype=numpy_dtype(dtype))
    overflow = np.isinf(narrowed) & np.isfinite(source)
    if overflow.any():
        raise ValueError(
            f"Value {source[overflow][0].item()!r} is out of range for dtype {dtype}"
        )
    return narrowed


class StorageArray:
    """A one-dimensional NumPy buffer of floating-point elements.

    Only leaf tensors own a ``StorageArray``; views reach it through their
    parent chain. The buffer is never resized after allocation.
    """

    __slots__ = ("_data", "dtype")

    def __init__(self, size: int, dtype: Optional[str] = None, data=None):
        self.dtype = resolve_dtype(dtype)
        if data is None:
            self._data = np.zeros(size, dtype=numpy_dtype(self.dtype))
        else:
            self._data = narrow(data, self.dtype)
            if self._data.size != size:
                raise ValueError(
                    f"Storage expected {size} elements but received {self._data.size}"
                )

    @classmethod
    def full(cls, size: int, value: float, dtype: Optional[str] = None):
        storage = cls(size, dtype)
        storage._data.fill(narrow(value, storage.dtype)[0])
        return storage

    @classmethod
    def from_values(cls, values: Iterable[float], size: int, dtype: Optional[str] = None):
        # Collected at double precision so overflow into a narrower dtype is caught
        data = np.fromiter(values, dtype=np.float64, count=size)
        return cls(size, dtype, data)

    def __len__(self) -> int:
        return self._data.size

    def __getitem__(self, offset: int) -> float:
        return float(self._data[offset])

    def __setitem__(self, offset: int, value: float) -> None:
        self._data[offset] = narrow(value, self.dtype)[0]

    def tolist(self) -> list:
        return self._data.tolist()

    def numpy(self) -> np.ndarray:
        """Return the underlying buffer without copying."""
        return self._data

    def clone(self) -> "StorageArray":
        return StorageArray(self._data.size, self.dtype, self._data.copy())
