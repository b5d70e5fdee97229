"""Supported floating-point formats and the error bound tables of the predicates.

Every predicate is evaluated in exactly one binary IEEE-754 format. A format
fixes the mantissa width ``p``, from which the splitting constant used by
Dekker's product and all certification thresholds are derived. The tables
are computed once, at import time, and are read-only afterwards.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict

import numpy as np

from .logging_utils import get_logger

logger = get_logger(__name__)


class UnsupportedFloatTypeError(TypeError):
    """Raised when a predicate is asked to work in a non-binary or unknown float type."""


@dataclass(frozen=True)
class FloatFormat:
    """A binary IEEE-754 floating-point format.

    Attributes
    ----------
    name : str
        Canonical numpy name ('float64', 'float32').
    scalar : type
        numpy scalar type used for every intermediate value.
    digits : int
        Mantissa width ``p`` in bits, including the implicit bit.
    """
    name: str
    scalar: type
    digits: int

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(self.scalar)

    @property
    def epsilon(self):
        """``2**-p``, half an ulp of one."""
        return self.scalar(math.ldexp(1.0, -self.digits))

    @property
    def splitter(self):
        """``2**ceil(p/2) + 1``."""
        return self.scalar(math.ldexp(1.0, (self.digits + self.digits % 2) // 2) + 1.0)

    @property
    def two(self):
        return self.scalar(2.0)


FLOAT64 = FloatFormat('float64', np.float64, 53)
FLOAT32 = FloatFormat('float32', np.float32, 24)


def _check_binary_ieee(fmt: FloatFormat) -> None:
    info = np.finfo(fmt.dtype)
    # finfo.eps is the gap above 1.0, i.e. 2**(1-p) for a radix-2 format
    if info.nmant + 1 != fmt.digits or float(info.eps) != math.ldexp(1.0, 1 - fmt.digits):
        raise UnsupportedFloatTypeError(
            f"{fmt.name} is not a binary IEEE-754 format with {fmt.digits} mantissa bits"
        )


_FORMATS: Dict[np.dtype, FloatFormat] = {}
for _fmt in (FLOAT64, FLOAT32):
    _check_binary_ieee(_fmt)
    _FORMATS[_fmt.dtype] = _fmt


def get_format(dtype: Any) -> FloatFormat:
    """Return the FloatFormat for a dtype-like value.

    Integer and boolean types are promoted to float64. Anything that is not
    float32 or float64 after promotion is rejected.
    """
    if isinstance(dtype, FloatFormat):
        return dtype
    try:
        dt = np.dtype(dtype)
    except TypeError as exc:
        raise UnsupportedFloatTypeError(f"not a numeric type: {dtype!r}") from exc
    if dt.kind in 'biu':
        dt = np.dtype(np.float64)
    fmt = _FORMATS.get(dt)
    if fmt is None:
        raise UnsupportedFloatTypeError(
            f"unsupported floating type {dt.name}; expected one of "
            + ', '.join(sorted(f.name for f in _FORMATS.values()))
        )
    return fmt


@dataclass(frozen=True)
class ErrorBounds:
    """Certification coefficients of one format.

    A stage result ``det`` is certified when ``|det| >= coefficient * permanent``;
    the third stage additionally adds ``resulterrbound * |det|`` to the bound.
    """
    epsilon: Any
    resulterrbound: Any
    orient2d_a: Any
    orient2d_b: Any
    orient2d_c: Any
    orient3d_a: Any
    orient3d_b: Any
    orient3d_c: Any
    incircle_a: Any
    incircle_b: Any
    incircle_c: Any
    insphere_a: Any
    insphere_b: Any
    insphere_c: Any

    @classmethod
    def for_format(cls, fmt: FloatFormat) -> 'ErrorBounds':
        T = fmt.scalar
        e = fmt.epsilon

        def first(k, m):
            return (T(k) + T(m) * e) * e

        def second(k, m):
            return (T(k) + T(m) * e) * e * e

        return cls(
            epsilon=e,
            resulterrbound=first(3, 8),
            orient2d_a=first(3, 16),
            orient2d_b=first(2, 12),
            orient2d_c=second(9, 64),
            orient3d_a=first(7, 56),
            orient3d_b=first(3, 28),
            orient3d_c=second(26, 288),
            incircle_a=first(10, 96),
            incircle_b=first(4, 48),
            incircle_c=second(44, 576),
            insphere_a=first(16, 224),
            insphere_b=first(5, 72),
            insphere_c=second(71, 1408),
        )


_BOUNDS: Dict[str, ErrorBounds] = {}
for _fmt in _FORMATS.values():
    _BOUNDS[_fmt.name] = ErrorBounds.for_format(_fmt)
    logger.debug("error bounds ready for %s (epsilon=%r)", _fmt.name, _BOUNDS[_fmt.name].epsilon)


def error_bounds(fmt: Any) -> ErrorBounds:
    """Return the precomputed bounds table of a format (or dtype-like)."""
    return _BOUNDS[get_format(fmt).name]


def supported_formats() -> tuple:
    return tuple(_FORMATS.values())


__all__ = [
    'UnsupportedFloatTypeError',
    'FloatFormat',
    'FLOAT64',
    'FLOAT32',
    'get_format',
    'ErrorBounds',
    'error_bounds',
    'supported_formats',
]
