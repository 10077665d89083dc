# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Aligned text rendering of tensors."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, List, Sequence

from ._config import get_printoptions

if TYPE_CHECKING:  # pragma: no cover
    from .tensor import Tensor

_EXPONENTIAL_UPPER = 1e3
_EXPONENTIAL_LOWER = 1e-2


def _fraction_digits(text: str) -> int:
    fraction = text.partition(".")[2].rstrip("0")
    return max(1, len(fraction))


def required_chars_after(value: float, exponential: bool, digits: int) -> int:
    """Fractional digits needed to show ``value`` without trailing zeros.

    The count is capped at ``digits``, the precision the caller will print with.
    """

    if not math.isfinite(value):
        return 1
    value = abs(value)
    if exponential:
        return _fraction_digits(f"{value:.{digits}e}".partition("e")[0])
    return _fraction_digits(f"{value:.{digits}f}")


def float_to_string(
    value: float,
    chars_before: int,
    chars_after: int,
    exponent_digits: int,
    exponent_sign: bool,
) -> str:
    """Render ``value`` into a fixed-width field.

    Args:
        value: The number to render.
        chars_before: Width of the integer part, including a minus sign.
        chars_after: Digits after the decimal point. Fixed-point output pads
            with spaces instead of trailing zeros; exponential output keeps
            the zeros.
        exponent_digits: Width of the exponent, or 0 for fixed-point output.
        exponent_sign: Whether non-negative exponents carry a ``+``.

    Returns:
        str: ``value`` right-aligned in a field of the combined width.
    """

    width = chars_before + 1 + chars_after
    if exponent_digits > 0:
        width += 1 + exponent_digits + (1 if exponent_sign else 0)
    if math.isnan(value):
        return "NaN".rjust(width)
    if math.isinf(value):
        return ("-inf" if value < 0 else "inf").rjust(width)

    sign = "-" if value < 0 else ""
    magnitude = abs(value)
    exponent_string = ""
    if exponent_digits > 0:
        mantissa, _, exponent_text = f"{magnitude:.{chars_after}e}".partition("e")
        exponent = int(exponent_text)
        exponent_prefix = "-" if exponent < 0 else ("+" if exponent_sign else "")
        exponent_string = "e" + exponent_prefix + str(abs(exponent)).zfill(exponent_digits)
        integer_part, _, fractional_part = mantissa.partition(".")
    else:
        integer_part, _, fractional_part = f"{magnitude:.{chars_after}f}".partition(".")
        fractional_part = (fractional_part.rstrip("0") or "0").ljust(chars_after)

    integer_part = (sign + integer_part).rjust(chars_before)
    return f"{integer_part}.{fractional_part}{exponent_string}"


def _integer_width(value: float, chars_after: int) -> int:
    # -0.0 renders without a sign
    value = value + 0.0
    return len(f"{value:.{chars_after}f}".partition(".")[0])


def _exponent_width(value: float, chars_after: int) -> int:
    if value == 0:
        return 1
    return len(str(abs(int(f"{value:.{chars_after}e}".partition("e")[2]))))


def format_tensor(tensor: "Tensor") -> str:
    values = list(tensor)
    if not values:
        return "".join(_render(tensor.shape, [], 0, [0]))

    finite = [value for value in values if math.isfinite(value)]
    has_negative_inf = any(value == -math.inf for value in values)
    if finite:
        magnitudes = [abs(value) for value in finite]
        max_abs, min_abs = max(magnitudes), min(magnitudes)
        smallest, largest = min(finite), max(finite)
    else:
        max_abs = min_abs = largest = 0.0
        smallest = -1.0 if has_negative_inf else 0.0

    exponential = max_abs >= _EXPONENTIAL_UPPER or 0 < min_abs < _EXPONENTIAL_LOWER
    options = get_printoptions()
    cap = options["exp_precision"] if exponential else options["precision"]
    chars_after = max(required_chars_after(v, exponential, cap) for v in values)

    if exponential:
        chars_before = 2 if smallest < 0 or has_negative_inf else 1
        exponent_digits = max(
            _exponent_width(max_abs, chars_after), _exponent_width(min_abs, chars_after)
        )
    else:
        chars_before = max(
            1, _integer_width(largest, chars_after), _integer_width(smallest, chars_after)
        )
        if has_negative_inf:
            chars_before = max(chars_before, 2)
        exponent_digits = 0
    exponent_sign = min_abs < 1

    rendered = [
        float_to_string(v, chars_before, chars_after, exponent_digits, exponent_sign)
        for v in values
    ]
    return "".join(_render(tensor.shape, rendered, 0, [0]))


def _render(shape: Sequence[int], rendered: List[str], depth: int, cursor: List[int]):
    ndim = len(shape)
    if depth == ndim:
        yield rendered[cursor[0]]
        cursor[0] += 1
        return

    separator = "," + "\n" * (ndim - depth - 1) + " " * (1 if depth == ndim - 1 else depth + 1)
    yield "["
    for i in range(shape[depth]):
        if i:
            yield separator
        yield from _render(shape, rendered, depth + 1, cursor)
    yield "]"
