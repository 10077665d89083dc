# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

import logging
from typing import Iterable

from . import errors, functional, random
from ._config import (
    default_dtype,
    get_default_dtype,
    get_printoptions,
    printoptions,
    set_default_dtype,
    set_printoptions,
)
from ._formatting import float_to_string
from .errors import (
    ArgumentCountError,
    EmptyReductionError,
    NullInputError,
    ShapeError,
    TensorError,
    TensorIndexError,
)
from .random import manual_seed
from .tensor import (
    EMPTY,
    Tensor,
    arange,
    from_numpy,
    full,
    ones,
    ones_like,
    rand,
    rand_like,
    randn,
    randn_like,
    tensor,
    zeros,
    zeros_like,
)

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

_FUNCTIONAL_FORWARDERS: Iterable[str] = (
    "delete",
    "swapaxes",
    "swapdims",
    "transpose",
    "permute_dims",
    "moveaxis",
    "movedim",
    "unsqueeze",
    "nanmin",
    "nanmax",
    "argmin",
    "argmax",
    "nan_to_num",
)

for _name in _FUNCTIONAL_FORWARDERS:
    globals()[_name] = getattr(functional, _name)


__all__ = [
    "Tensor",
    "EMPTY",
    "tensor",
    "functional",
    "random",
    "errors",
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
    "manual_seed",
    "float_to_string",
    "set_default_dtype",
    "get_default_dtype",
    "default_dtype",
    "set_printoptions",
    "get_printoptions",
    "printoptions",
    "TensorError",
    "ArgumentCountError",
    "TensorIndexError",
    "ShapeError",
    "NullInputError",
    "EmptyReductionError",
    *_FUNCTIONAL_FORWARDERS,
]
