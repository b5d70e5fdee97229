"""Error-free transformations of floating-point sums and products.

Each transformation returns the rounded result of an ordinary floating-point
operation together with its exact rounding error, using nothing but
arithmetic in the operands' own format. The functions are type generic: they
work for any numpy floating scalar (and Python floats) as long as both
operands have the same type.

Sum and difference tails only need the operands. Products need the format's
splitting constant, or a fused multiply-add; those live on
:class:`ErrorFreeArithmetic`, which binds one strategy at construction.
"""
from __future__ import annotations

import math
from typing import Any, Optional, Tuple

from .config import ArithmeticConfig, DEFAULT_CONFIG
from .constants import FLOAT64, error_bounds, get_format

__all__ = [
    'plus_tail', 'fast_plus_tail', 'minus_tail',
    'two_sum', 'fast_two_sum', 'two_diff',
    'ErrorFreeArithmetic',
]


def plus_tail(a, b, x):
    """Roundoff error of ``x = a + b``."""
    b_virtual = x - a
    a_virtual = x - b_virtual
    b_roundoff = b - b_virtual
    a_roundoff = a - a_virtual
    return a_roundoff + b_roundoff


def fast_plus_tail(a, b, x):
    """Roundoff error of ``x = a + b``; only valid when ``|a| >= |b|``."""
    b_virtual = x - a
    return b - b_virtual


def minus_tail(a, b, x):
    """Roundoff error of ``x = a - b``."""
    b_virtual = a - x
    a_virtual = x + b_virtual
    b_roundoff = b_virtual - b
    a_roundoff = a - a_virtual
    return a_roundoff + b_roundoff


def two_sum(a, b):
    """Return ``(s, t)`` with ``s = fl(a + b)`` and ``a + b == s + t`` exactly."""
    s = a + b
    return s, plus_tail(a, b, s)


def fast_two_sum(a, b):
    """Like :func:`two_sum`, for operands already known to satisfy ``|a| >= |b|``."""
    s = a + b
    return s, fast_plus_tail(a, b, s)


def two_diff(a, b):
    """Return ``(d, t)`` with ``d = fl(a - b)`` and ``a - b == d + t`` exactly."""
    d = a - b
    return d, minus_tail(a, b, d)


class ErrorFreeArithmetic:
    """Format-bound splitting and exact products.

    Parameters
    ----------
    fmt : FloatFormat or dtype-like
        Format of every operand handed to this engine.
    config : ArithmeticConfig, optional
        Capability selection. ``use_fma`` overrides ``config.use_fma``.

    The product tail strategy (fused multiply-add or Dekker's product) is
    chosen here once; ``mult_tail`` and ``mult_tail_presplit`` are bound to
    it so the hot path never tests for it again.
    """

    def __init__(self, fmt: Any = FLOAT64, config: Optional[ArithmeticConfig] = None,
                 use_fma: Optional[bool] = None):
        self.format = get_format(fmt)
        cfg = config or DEFAULT_CONFIG
        if use_fma is not None:
            cfg = ArithmeticConfig(use_fma=use_fma)
        self.uses_fma = cfg.resolve_fma()
        self.bounds = error_bounds(self.format)
        self.cast = self.format.scalar
        self.two = self.format.two
        self._splitter = self.format.splitter
        if self.uses_fma:
            self.mult_tail = self._fma_tail
            self.mult_tail_presplit = self._fma_tail_presplit
        else:
            self.mult_tail = self._dekker_tail
            self.mult_tail_presplit = self._dekker_tail_presplit

    def __repr__(self) -> str:
        strategy = 'fma' if self.uses_fma else 'dekker'
        return f"{type(self).__name__}({self.format.name}, {strategy})"

    def split(self, a) -> Tuple[Any, Any]:
        """Split ``a`` into non-overlapping halves ``(hi, lo)`` with ``hi + lo == a``."""
        c = self._splitter * a
        a_big = c - a
        a_hi = c - a_big
        return a_hi, a - a_hi

    @staticmethod
    def dekkers_product(a_split, b_split, p):
        """Roundoff error of ``p = a * b`` from the split halves of both factors."""
        a_hi, a_lo = a_split
        b_hi, b_lo = b_split
        y = p - a_hi * b_hi
        y -= a_lo * b_hi
        y -= a_hi * b_lo
        return a_lo * b_lo - y

    def _dekker_tail(self, a, b, p):
        return self.dekkers_product(self.split(a), self.split(b), p)

    def _dekker_tail_presplit(self, a, b, b_split, p):
        return self.dekkers_product(self.split(a), b_split, p)

    def _fma_tail(self, a, b, p):
        # a*b - p is representable in the operand format, so the double
        # rounded fma result casts back without loss for float32 as well
        return self.cast(math.fma(a, b, -p))

    def _fma_tail_presplit(self, a, b, b_split, p):
        return self.cast(math.fma(a, b, -p))

    def two_product(self, a, b) -> Tuple[Any, Any]:
        """Return ``(p, t)`` with ``p = fl(a * b)`` and ``a * b == p + t`` exactly."""
        p = a * b
        return p, self.mult_tail(a, b, p)
