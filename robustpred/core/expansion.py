"""Floating-point expansions and their exact algebra.

An expansion is a sum of floating-point components stored in increasing
order of magnitude, pairwise non-overlapping and with zeros removed, so the
represented value carries no rounding error at all. Every operation here
produces an expansion whose capacity is the static worst case of that
operation (``cap(e) + cap(f)`` for sums, ``2 * cap(e)`` for scaling); the
runtime length is usually much smaller.
"""
from __future__ import annotations

import functools
from typing import Any, Iterator, Optional

import numpy as np

from .config import ArithmeticConfig
from .constants import FLOAT64, get_format
from .eft import ErrorFreeArithmetic, fast_plus_tail, minus_tail, plus_tail
from .logging_utils import get_logger

logger = get_logger(__name__)

__all__ = [
    'Expansion',
    'expansion_sum',
    'negate_expansion',
    'expansion_diff',
    'scale_expansion',
    'ExpansionArithmetic',
    'arithmetic_for',
]


class Expansion:
    """Fixed-capacity buffer of expansion components plus a length counter."""

    __slots__ = ('_buf', '_size')

    def __init__(self, capacity: int, dtype: Any = np.float64):
        self._buf = np.empty(int(capacity), dtype=dtype)
        self._size = 0

    @classmethod
    def from_value(cls, value, dtype: Any = None) -> 'Expansion':
        """Single-component expansion holding ``value`` (empty when it is zero)."""
        dt = np.dtype(dtype) if dtype is not None else np.asarray(value).dtype
        e = cls(1, dt)
        e.append_nonzero(dt.type(value))
        return e

    @property
    def capacity(self) -> int:
        return self._buf.shape[0]

    @property
    def dtype(self) -> np.dtype:
        return self._buf.dtype

    @property
    def components(self) -> np.ndarray:
        """Read-only view of the stored components, smallest magnitude first."""
        view = self._buf[:self._size]
        view.flags.writeable = False
        return view

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator:
        return iter(self._buf[:self._size])

    def __getitem__(self, index):
        return self.components[index]

    def __repr__(self) -> str:
        comps = ', '.join(repr(float(c)) for c in self)
        return f"Expansion([{comps}], capacity={self.capacity}, dtype={self.dtype.name})"

    def append(self, value) -> None:
        if self._size == self._buf.shape[0]:
            raise OverflowError(f"expansion capacity {self.capacity} exceeded")
        self._buf[self._size] = value
        self._size += 1

    def append_nonzero(self, value) -> None:
        if value != 0:
            self.append(value)

    def estimate(self):
        """Sum of the components in stored order, rounded at every step."""
        total = self.dtype.type(0)
        for c in self._buf[:self._size]:
            total = total + c
        return total

    def most_significant(self):
        """Largest-magnitude component, or zero for the empty expansion."""
        if self._size == 0:
            return self.dtype.type(0)
        return self._buf[self._size - 1]


def _merge_by_magnitude(e: Expansion, f: Expansion, out: np.ndarray) -> None:
    # stable: on equal magnitude the component of e comes first
    ec, fc = e._buf, f._buf
    n, m = e._size, f._size
    i = j = k = 0
    while i < n and j < m:
        if abs(fc[j]) < abs(ec[i]):
            out[k] = fc[j]
            j += 1
        else:
            out[k] = ec[i]
            i += 1
        k += 1
    out[k:k + n - i] = ec[i:n]
    k += n - i
    out[k:k + m - j] = fc[j:m]


def expansion_sum(e: Expansion, f: Expansion) -> Expansion:
    """Exact sum of two expansions, zero components eliminated."""
    h = Expansion(e.capacity + f.capacity, e.dtype)
    n, m = e._size, f._size
    buf = h._buf
    _merge_by_magnitude(e, f, buf)
    if m == 0:
        h._size = n
        return h
    if n == 0:
        h._size = m
        return h

    # Output index never overtakes the read index, so distill in place.
    out = 0
    q = buf[0]
    q_new = buf[1] + q
    hh = fast_plus_tail(buf[1], q, q_new)
    q = q_new
    if hh != 0:
        buf[out] = hh
        out += 1
    for g in range(2, n + m):
        comp = buf[g]
        q_new = q + comp
        hh = plus_tail(q, comp, q_new)
        q = q_new
        if hh != 0:
            buf[out] = hh
            out += 1
    if q != 0:
        buf[out] = q
        out += 1
    h._size = out
    return h


def negate_expansion(e: Expansion) -> Expansion:
    h = Expansion(e.capacity, e.dtype)
    h._buf[:e._size] = -e._buf[:e._size]
    h._size = e._size
    return h


def expansion_diff(e: Expansion, f: Expansion) -> Expansion:
    """Exact ``e - f``."""
    return expansion_sum(e, negate_expansion(f))


def scale_expansion(e: Expansion, b, arithmetic: ErrorFreeArithmetic) -> Expansion:
    """Exact product of an expansion and a scalar of the same format."""
    h = Expansion(2 * e.capacity, e.dtype)
    n = e._size
    if n == 0 or b == 0:
        return h
    comps = e._buf
    b_split = arithmetic.split(b)
    q = comps[0] * b
    h.append_nonzero(arithmetic.mult_tail_presplit(comps[0], b, b_split, q))
    for i in range(1, n):
        product = comps[i] * b
        product_tail = arithmetic.mult_tail_presplit(comps[i], b, b_split, product)
        partial = q + product_tail
        h.append_nonzero(plus_tail(q, product_tail, partial))
        q = product + partial
        h.append_nonzero(fast_plus_tail(product, partial, q))
    h.append_nonzero(q)
    return h


class ExpansionArithmetic(ErrorFreeArithmetic):
    """Error-free arithmetic that also builds the small expansions the predicates need."""

    def make_expansion(self, value, tail) -> Expansion:
        e = Expansion(2, self.format.dtype)
        e.append_nonzero(tail)
        e.append_nonzero(value)
        return e

    def plus(self, a, b) -> Expansion:
        x = a + b
        return self.make_expansion(x, plus_tail(a, b, x))

    def minus(self, a, b) -> Expansion:
        return self.plus(a, -b)

    def mult(self, a, b) -> Expansion:
        x = a * b
        return self.make_expansion(x, self.mult_tail(a, b, x))

    def scale(self, e: Expansion, b) -> Expansion:
        return scale_expansion(e, b, self)

    def two_two_diff(self, ax, by, ay, bx) -> Expansion:
        """Exact expansion of ``ax * by - ay * bx`` (at most four components)."""
        axby1 = ax * by
        axby0 = self.mult_tail(ax, by, axby1)
        bxay1 = bx * ay
        bxay0 = self.mult_tail(bx, ay, bxay1)
        i0 = axby0 - bxay0
        x0 = minus_tail(axby0, bxay0, i0)
        j = axby1 + i0
        low = plus_tail(axby1, i0, j)
        i1 = low - bxay1
        x1 = minus_tail(low, bxay1, i1)
        x3 = j + i1
        x2 = plus_tail(j, i1, x3)
        e = Expansion(4, self.format.dtype)
        e.append_nonzero(x0)
        e.append_nonzero(x1)
        e.append_nonzero(x2)
        e.append_nonzero(x3)
        return e

    def two_two_diff_zero_check(self, ax, by, ay, bx) -> Expansion:
        """:meth:`two_two_diff` that skips the products with an exactly zero factor."""
        e = Expansion(4, self.format.dtype)
        if ax == 0 and ay == 0:
            return e
        if ax == 0:
            # 0 * by - ay * bx
            prod = self.mult(ay, bx)
            e._buf[:len(prod)] = -prod.components
            e._size = len(prod)
            return e
        if ay == 0:
            prod = self.mult(ax, by)
            e._buf[:len(prod)] = prod.components
            e._size = len(prod)
            return e
        return self.two_two_diff(ax, by, ay, bx)

    def three_product(self, a, b, c) -> Expansion:
        """Exact ``a * b * c``; empty when any factor is zero."""
        if a == 0 or b == 0 or c == 0:
            return Expansion(4, self.format.dtype)
        return self.scale(self.mult(a, b), c)


@functools.lru_cache(maxsize=None)
def _cached_arithmetic(format_name: str, use_fma: Optional[bool]) -> ExpansionArithmetic:
    arithmetic = ExpansionArithmetic(format_name, config=ArithmeticConfig(use_fma=use_fma))
    logger.debug("built %r", arithmetic)
    return arithmetic


def arithmetic_for(fmt: Any = FLOAT64, use_fma: Optional[bool] = None) -> ExpansionArithmetic:
    """Shared engine for a format; engines are immutable once built."""
    return _cached_arithmetic(get_format(fmt).name, use_fma)
