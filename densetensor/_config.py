# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Process-wide defaults: storage dtype and print options."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from threading import RLock
from typing import Dict, Iterator, Optional

import numpy as np

logger = logging.getLogger(__name__)

# Supported storage dtypes, mapped to their NumPy equivalents
_SUPPORTED_DTYPES: Dict[str, np.dtype] = {
    "float32": np.dtype(np.float32),
    "float64": np.dtype(np.float64),
}

_CONFIG_LOCK = RLock()
_default_dtype = "float32"

_PRINT_OPTIONS: Dict[str, int] = {
    "precision": 5,
    "exp_precision": 4,
}


def _check_dtype(dtype: str) -> str:
    if dtype not in _SUPPORTED_DTYPES:
        supported = ", ".join(sorted(_SUPPORTED_DTYPES))
        raise ValueError(f"Unsupported dtype '{dtype}'. Expected one of: {supported}")
    return dtype


def resolve_dtype(dtype: Optional[str]) -> str:
    """Return ``dtype`` validated, or the current default when ``None``."""

    if dtype is None:
        return _default_dtype
    return _check_dtype(dtype)


def numpy_dtype(dtype: str) -> np.dtype:
    return _SUPPORTED_DTYPES[_check_dtype(dtype)]


def set_default_dtype(dtype: str) -> None:
    """Set the global default data type for new tensors."""

    global _default_dtype

    with _CONFIG_LOCK:
        _default_dtype = _check_dtype(dtype)
    logger.debug("Default dtype set to %s", dtype)


def get_default_dtype() -> str:
    """Get the current global default data type."""

    return _default_dtype


@contextmanager
def default_dtype(dtype: str) -> Iterator[str]:
    """Temporarily change the default dtype, restoring it on exit."""

    with _CONFIG_LOCK:
        previous = _default_dtype
        set_default_dtype(dtype)
    try:
        yield dtype
    finally:
        set_default_dtype(previous)


def set_printoptions(
    precision: Optional[int] = None, exp_precision: Optional[int] = None
) -> None:
    """Set the maximum number of fractional digits used when rendering tensors.

    Args:
        precision: Cap for fixed-point rendering.
        exp_precision: Cap for the mantissa in exponential rendering.
    """

    updates = {"precision": precision, "exp_precision": exp_precision}
    with _CONFIG_LOCK:
        for name, value in updates.items():
            if value is None:
                continue
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
            _PRINT_OPTIONS[name] = value


def get_printoptions() -> Dict[str, int]:
    return dict(_PRINT_OPTIONS)


@contextmanager
def printoptions(**options: int) -> Iterator[Dict[str, int]]:
    """Temporarily override print options."""

    previous = get_printoptions()
    set_printoptions(**options)
    try:
        yield get_printoptions()
    finally:
        set_printoptions(**previous)


__all__ = [
    "set_default_dtype",
    "get_default_dtype",
    "default_dtype",
    "set_printoptions",
    "get_printoptions",
    "printoptions",
]
