"""Vectorized predicate evaluation over arrays of points.

The fast stage of each predicate is evaluated for all rows at once with
numpy, using the same stage-1 formulas as the scalar evaluators. Only the
rows whose fast result cannot be certified go through the scalar adaptive
evaluator. Each argument is an ``(N, d)`` array, or a single point of shape
``(d,)`` that is broadcast against the others.
"""
from __future__ import annotations

from typing import Callable, Optional, Sequence, Tuple

import numpy as np

from .adaptive import (
    _incircle_fast, _insphere_fast, _orient2d_fast, _orient3d_fast,
    incircle, insphere, orient2d, orient3d, resolve_arithmetic,
)
from .expansion import ExpansionArithmetic
from .logging_utils import get_logger
from .stats import Stage, record_resolution

logger = get_logger(__name__)

__all__ = ['orient2d_batch', 'orient3d_batch', 'incircle_batch', 'insphere_batch']


def _as_point_arrays(points: Sequence, dim: int,
                     arithmetic: Optional[ExpansionArithmetic]) -> Tuple[list, ExpansionArithmetic, int]:
    arrays = [np.asarray(p) for p in points]
    ar = resolve_arithmetic(arrays, arithmetic)
    n_rows = None
    for arr in arrays:
        if arr.ndim not in (1, 2) or arr.shape[-1] < dim:
            raise ValueError(f"expected points of shape (N, {dim}) or ({dim},), got {arr.shape}")
        if arr.ndim == 2:
            if n_rows is not None and arr.shape[0] != n_rows:
                raise ValueError(f"row count mismatch: {arr.shape[0]} != {n_rows}")
            n_rows = arr.shape[0]
    if n_rows is None:
        n_rows = 1
    dtype = ar.format.dtype
    out = [np.broadcast_to(arr[..., :dim].astype(dtype, copy=False), (n_rows, dim)) for arr in arrays]
    return out, ar, n_rows


def _escalate(name: str, det: np.ndarray, certified: np.ndarray, points: list,
              predicate: Callable, ar: ExpansionArithmetic) -> np.ndarray:
    pending = np.flatnonzero(~certified)
    record_resolution(name, Stage.FAST, int(det.shape[0] - pending.shape[0]))
    if pending.size:
        logger.debug("%s_batch: %d of %d rows escalated", name, pending.size, det.shape[0])
    for i in pending:
        det[i] = predicate(*(p[i] for p in points), arithmetic=ar)
    return det


def orient2d_batch(pa, pb, pc, *, arithmetic: Optional[ExpansionArithmetic] = None) -> np.ndarray:
    (a, b, c), ar, _ = _as_point_arrays((pa, pb, pc), 2, arithmetic)
    acx = a[:, 0] - c[:, 0]
    bcx = b[:, 0] - c[:, 0]
    acy = a[:, 1] - c[:, 1]
    bcy = b[:, 1] - c[:, 1]
    detleft, detright, det = _orient2d_fast(acx, bcx, acy, bcy)
    errbound = ar.bounds.orient2d_a * np.abs(detleft + detright)
    certified = ((np.signbit(detleft) != np.signbit(detright))
                 | (detleft == 0) | (detright == 0)
                 | (np.abs(det) >= np.abs(errbound)))
    return _escalate('orient2d', np.array(det), certified, [a, b, c], orient2d, ar)


def orient3d_batch(pa, pb, pc, pd, *, arithmetic: Optional[ExpansionArithmetic] = None) -> np.ndarray:
    (a, b, c, d), ar, _ = _as_point_arrays((pa, pb, pc, pd), 3, arithmetic)
    diffs = [p[:, k] - d[:, k] for k in range(3) for p in (a, b, c)]
    det, permanent = _orient3d_fast(*diffs)
    certified = np.abs(det) >= np.abs(ar.bounds.orient3d_a * permanent)
    return _escalate('orient3d', np.array(det), certified, [a, b, c, d], orient3d, ar)


def incircle_batch(pa, pb, pc, pd, *, arithmetic: Optional[ExpansionArithmetic] = None) -> np.ndarray:
    (a, b, c, d), ar, _ = _as_point_arrays((pa, pb, pc, pd), 2, arithmetic)
    diffs = [p[:, k] - d[:, k] for k in range(2) for p in (a, b, c)]
    det, permanent = _incircle_fast(*diffs)
    certified = np.abs(det) >= np.abs(ar.bounds.incircle_a * permanent)
    return _escalate('incircle', np.array(det), certified, [a, b, c, d], incircle, ar)


def insphere_batch(pa, pb, pc, pd, pe, *, arithmetic: Optional[ExpansionArithmetic] = None) -> np.ndarray:
    (a, b, c, d, e), ar, _ = _as_point_arrays((pa, pb, pc, pd, pe), 3, arithmetic)
    diffs = [p[:, k] - e[:, k] for k in range(3) for p in (a, b, c, d)]
    det, permanent = _insphere_fast(*diffs)
    certified = np.abs(det) >= np.abs(ar.bounds.insphere_a * permanent)
    return _escalate('insphere', np.array(det), certified, [a, b, c, d, e], insphere, ar)
