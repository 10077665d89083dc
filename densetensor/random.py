# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Random number source used by :func:`densetensor.rand` and :func:`densetensor.randn`.

Factories accept an explicit ``generator`` (a :class:`numpy.random.Generator`).
When none is given they draw from a package default that :func:`manual_seed`
can reset for reproducible runs.
"""

from __future__ import annotations

import logging
from threading import RLock
from typing import Optional

import numpy as np

logger = logging.getLogger(__name__)

_GENERATOR_LOCK = RLock()
_default_generator: np.random.Generator = np.random.default_rng()


def manual_seed(seed: int) -> np.random.Generator:
    """Reseed the default generator and return it."""

    global _default_generator

    with _GENERATOR_LOCK:
        _default_generator = np.random.default_rng(seed)
    logger.debug("Default generator reseeded with %r", seed)
    return _default_generator


def default_generator() -> np.random.Generator:
    """Return the generator used when no explicit one is supplied."""

    with _GENERATOR_LOCK:
        return _default_generator


def resolve_generator(
    generator: Optional[np.random.Generator] = None,
) -> np.random.Generator:
    """Return ``generator`` if given, otherwise the default generator."""

    if generator is None:
        return default_generator()
    if not isinstance(generator, np.random.Generator):
        raise TypeError(
            "generator must be a numpy.random.Generator, "
            f"got {type(generator).__name__}"
        )
    return generator


def uniform(size: int, dtype: np.dtype, generator=None) -> np.ndarray:
    """Draw ``size`` floats uniformly from ``[0, 1)``."""

    return resolve_generator(generator).random(size, dtype=dtype)


def standard_normal(size: int, dtype: np.dtype, generator=None) -> np.ndarray:
    """Draw ``size`` floats from the standard normal distribution."""

    return resolve_generator(generator).standard_normal(size, dtype=dtype)


__all__ = [
    "manual_seed",
    "default_generator",
    "resolve_generator",
]
