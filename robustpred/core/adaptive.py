"""Adaptive-precision geometric predicates.

Each predicate evaluates its determinant in up to four stages and returns as
soon as the sign of the current approximation is certified:

1. plain floating-point evaluation of the centred determinant, certified
   against ``A * permanent``;
2. exact 2x2 minors combined in expansion arithmetic and rounded once,
   certified against ``B * permanent``;
3. a first-order correction built from the exact roundoff of the centring
   subtractions, certified against ``C * permanent + resulterrbound * |det|``
   (when every such roundoff is zero the stage-2 value is already exact);
4. the complete expansion, which is always right.

The returned value has the sign of the true determinant; its magnitude only
approximates it. Positive results mean: counter-clockwise (``orient2d``),
``d`` below the plane of counter-clockwise ``a, b, c`` (``orient3d``), ``d``
inside the circle through counter-clockwise ``a, b, c`` (``incircle``) and
``e`` inside the sphere through positively oriented ``a, b, c, d``
(``insphere``).
"""
from __future__ import annotations

import functools
from typing import Optional, Sequence

import numpy as np

from .constants import FLOAT64
from .eft import minus_tail
from .exact import incircle_exact, insphere_exact, orient2d_exact, orient3d_exact
from .expansion import ExpansionArithmetic, arithmetic_for, expansion_sum
from .logging_utils import get_logger
from .stats import Stage, record_resolution

logger = get_logger(__name__)

__all__ = [
    'orient2d', 'orient3d', 'incircle', 'insphere',
    'orient2d_exact_sign', 'orient3d_exact_sign', 'incircle_exact_sign', 'insphere_exact_sign',
    'resolve_arithmetic', 'cast_points',
]


def _points_dtype(points: Sequence):
    dtypes = [p.dtype for p in points if isinstance(p, np.ndarray)]
    if not dtypes:
        return FLOAT64
    if len(dtypes) != len(points):
        # plain sequences hold Python floats
        dtypes.append(np.dtype(np.float64))
    return np.result_type(*dtypes)


def resolve_arithmetic(points: Sequence, arithmetic: Optional[ExpansionArithmetic] = None) -> ExpansionArithmetic:
    """Engine for a call: the explicit one, else the one matching the points' dtype."""
    if arithmetic is not None:
        return arithmetic
    return arithmetic_for(_points_dtype(points))


def cast_points(points: Sequence, dim: int, ar: ExpansionArithmetic):
    cast = ar.cast
    return tuple(tuple(cast(p[i]) for i in range(dim)) for p in points)


# ---------------------------------------------------------------------------
# Stage-1 formulas. They are written with builtin abs() and plain operators so
# that the batch module can evaluate them on whole numpy arrays and obtain the
# very same values as the scalar path.
# ---------------------------------------------------------------------------

def _orient2d_fast(acx, bcx, acy, bcy):
    detleft = acx * bcy
    detright = acy * bcx
    return detleft, detright, detleft - detright


def _orient3d_fast(adx, bdx, cdx, ady, bdy, cdy, adz, bdz, cdz):
    bdxcdy = bdx * cdy
    cdxbdy = cdx * bdy
    cdxady = cdx * ady
    adxcdy = adx * cdy
    adxbdy = adx * bdy
    bdxady = bdx * ady
    det = adz * (bdxcdy - cdxbdy) + bdz * (cdxady - adxcdy) + cdz * (adxbdy - bdxady)
    permanent = ((abs(bdxcdy) + abs(cdxbdy)) * abs(adz)
                 + (abs(cdxady) + abs(adxcdy)) * abs(bdz)
                 + (abs(adxbdy) + abs(bdxady)) * abs(cdz))
    return det, permanent


def _incircle_fast(adx, bdx, cdx, ady, bdy, cdy):
    bdxcdy = bdx * cdy
    cdxbdy = cdx * bdy
    cdxady = cdx * ady
    adxcdy = adx * cdy
    adxbdy = adx * bdy
    bdxady = bdx * ady
    alift = adx * adx + ady * ady
    blift = bdx * bdx + bdy * bdy
    clift = cdx * cdx + cdy * cdy
    det = alift * (bdxcdy - cdxbdy) + blift * (cdxady - adxcdy) + clift * (adxbdy - bdxady)
    permanent = ((abs(bdxcdy) + abs(cdxbdy)) * alift
                 + (abs(cdxady) + abs(adxcdy)) * blift
                 + (abs(adxbdy) + abs(bdxady)) * clift)
    return det, permanent


def _insphere_fast(aex, bex, cex, dex, aey, bey, cey, dey, aez, bez, cez, dez):
    aexbey = aex * bey
    bexaey = bex * aey
    bexcey = bex * cey
    cexbey = cex * bey
    cexdey = cex * dey
    dexcey = dex * cey
    dexaey = dex * aey
    aexdey = aex * dey
    aexcey = aex * cey
    cexaey = cex * aey
    bexdey = bex * dey
    dexbey = dex * bey
    ab = aexbey - bexaey
    bc = bexcey - cexbey
    cd = cexdey - dexcey
    da = dexaey - aexdey
    ac = aexcey - cexaey
    bd = bexdey - dexbey
    abc = aez * bc - bez * ac + cez * ab
    bcd = bez * cd - cez * bd + dez * bc
    cda = cez * da + dez * ac + aez * cd
    dab = dez * ab + aez * bd + bez * da
    alift = aex * aex + aey * aey + aez * aez
    blift = bex * bex + bey * bey + bez * bez
    clift = cex * cex + cey * cey + cez * cez
    dlift = dex * dex + dey * dey + dez * dez
    det = (dlift * abc - clift * dab) + (blift * cda - alift * bcd)

    aezplus = abs(aez)
    bezplus = abs(bez)
    cezplus = abs(cez)
    dezplus = abs(dez)
    aexbeyplus = abs(aexbey)
    bexaeyplus = abs(bexaey)
    bexceyplus = abs(bexcey)
    cexbeyplus = abs(cexbey)
    cexdeyplus = abs(cexdey)
    dexceyplus = abs(dexcey)
    dexaeyplus = abs(dexaey)
    aexdeyplus = abs(aexdey)
    aexceyplus = abs(aexcey)
    cexaeyplus = abs(cexaey)
    bexdeyplus = abs(bexdey)
    dexbeyplus = abs(dexbey)
    permanent = (((cexdeyplus + dexceyplus) * bezplus
                  + (dexbeyplus + bexdeyplus) * cezplus
                  + (bexceyplus + cexbeyplus) * dezplus) * alift
                 + ((dexaeyplus + aexdeyplus) * cezplus
                    + (aexceyplus + cexaeyplus) * dezplus
                    + (cexdeyplus + dexceyplus) * aezplus) * blift
                 + ((aexbeyplus + bexaeyplus) * dezplus
                    + (bexdeyplus + dexbeyplus) * aezplus
                    + (dexaeyplus + aexdeyplus) * bezplus) * clift
                 + ((bexceyplus + cexbeyplus) * aezplus
                    + (cexaeyplus + aexceyplus) * bezplus
                    + (aexbeyplus + bexaeyplus) * cezplus) * dlift)
    return det, permanent


# ---------------------------------------------------------------------------
# orient2d
# ---------------------------------------------------------------------------

def orient2d(pa, pb, pc, *, arithmetic: Optional[ExpansionArithmetic] = None):
    """Twice the signed area of triangle ``a, b, c``; positive when counter-clockwise."""
    ar = resolve_arithmetic((pa, pb, pc), arithmetic)
    a, b, c = cast_points((pa, pb, pc), 2, ar)
    bounds = ar.bounds

    acx = a[0] - c[0]
    bcx = b[0] - c[0]
    acy = a[1] - c[1]
    bcy = b[1] - c[1]
    detleft, detright, det = _orient2d_fast(acx, bcx, acy, bcy)
    # opposite signs or a zero product: the subtraction did not cancel
    if np.signbit(detleft) != np.signbit(detright) or detleft == 0 or detright == 0:
        record_resolution('orient2d', Stage.FAST)
        return det

    detsum = abs(detleft + detright)
    errbound = bounds.orient2d_a * detsum
    if abs(det) >= abs(errbound):
        record_resolution('orient2d', Stage.FAST)
        return det

    B = ar.two_two_diff(acx, bcy, acy, bcx)
    det = B.estimate()
    errbound = bounds.orient2d_b * detsum
    if abs(det) >= abs(errbound):
        record_resolution('orient2d', Stage.PARTIAL)
        return det

    acxtail = minus_tail(a[0], c[0], acx)
    bcxtail = minus_tail(b[0], c[0], bcx)
    acytail = minus_tail(a[1], c[1], acy)
    bcytail = minus_tail(b[1], c[1], bcy)
    if acxtail == 0 and bcxtail == 0 and acytail == 0 and bcytail == 0:
        record_resolution('orient2d', Stage.TAIL)
        return det

    errbound = bounds.orient2d_c * detsum + bounds.resulterrbound * abs(det)
    det += (acx * bcytail + bcy * acxtail) - (acy * bcxtail + bcx * acytail)
    if abs(det) >= abs(errbound):
        record_resolution('orient2d', Stage.TAIL)
        return det

    logger.debug("orient2d: completing expansion (det=%r, errbound=%r)", det, errbound)
    D = expansion_sum(B, ar.two_two_diff(acxtail, bcy, acytail, bcx))
    D = expansion_sum(D, ar.two_two_diff(acx, bcytail, acy, bcxtail))
    D = expansion_sum(D, ar.two_two_diff(acxtail, bcytail, acytail, bcxtail))
    record_resolution('orient2d', Stage.EXACT)
    return D.most_significant()


# ---------------------------------------------------------------------------
# orient3d
# ---------------------------------------------------------------------------

def orient3d(pa, pb, pc, pd, *, arithmetic: Optional[ExpansionArithmetic] = None):
    """Six times the signed volume of ``a, b, c, d``; positive when ``d`` lies
    below the plane through counter-clockwise (seen from above) ``a, b, c``.
    """
    ar = resolve_arithmetic((pa, pb, pc, pd), arithmetic)
    a, b, c, d = cast_points((pa, pb, pc, pd), 3, ar)
    bounds = ar.bounds

    adx = a[0] - d[0]
    bdx = b[0] - d[0]
    cdx = c[0] - d[0]
    ady = a[1] - d[1]
    bdy = b[1] - d[1]
    cdy = c[1] - d[1]
    adz = a[2] - d[2]
    bdz = b[2] - d[2]
    cdz = c[2] - d[2]
    det, permanent = _orient3d_fast(adx, bdx, cdx, ady, bdy, cdy, adz, bdz, cdz)
    errbound = bounds.orient3d_a * permanent
    if abs(det) >= abs(errbound):
        record_resolution('orient3d', Stage.FAST)
        return det

    bc = ar.two_two_diff(bdx, cdy, cdx, bdy)
    ca = ar.two_two_diff(cdx, ady, adx, cdy)
    ab = ar.two_two_diff(adx, bdy, bdx, ady)
    fin1 = expansion_sum(expansion_sum(ar.scale(bc, adz), ar.scale(ca, bdz)), ar.scale(ab, cdz))
    det = fin1.estimate()
    errbound = bounds.orient3d_b * permanent
    if abs(det) >= abs(errbound):
        record_resolution('orient3d', Stage.PARTIAL)
        return det

    adxtail = minus_tail(a[0], d[0], adx)
    bdxtail = minus_tail(b[0], d[0], bdx)
    cdxtail = minus_tail(c[0], d[0], cdx)
    adytail = minus_tail(a[1], d[1], ady)
    bdytail = minus_tail(b[1], d[1], bdy)
    cdytail = minus_tail(c[1], d[1], cdy)
    adztail = minus_tail(a[2], d[2], adz)
    bdztail = minus_tail(b[2], d[2], bdz)
    cdztail = minus_tail(c[2], d[2], cdz)
    if (adxtail == 0 and adytail == 0 and adztail == 0
            and bdxtail == 0 and bdytail == 0 and bdztail == 0
            and cdxtail == 0 and cdytail == 0 and cdztail == 0):
        record_resolution('orient3d', Stage.TAIL)
        return det

    errbound = bounds.orient3d_c * permanent + bounds.resulterrbound * abs(det)
    det += ((adz * ((bdx * cdytail + cdy * bdxtail) - (bdy * cdxtail + cdx * bdytail))
             + adztail * (bdx * cdy - bdy * cdx))
            + (bdz * ((cdx * adytail + ady * cdxtail) - (cdy * adxtail + adx * cdytail))
               + bdztail * (cdx * ady - cdy * adx))
            + (cdz * ((adx * bdytail + bdy * adxtail) - (ady * bdxtail + bdx * adytail))
               + cdztail * (adx * bdy - ady * bdx)))
    if abs(det) >= abs(errbound):
        record_resolution('orient3d', Stage.TAIL)
        return det

    logger.debug("orient3d: completing expansion (det=%r, errbound=%r)", det, errbound)
    zc = ar.two_two_diff_zero_check
    bct = expansion_sum(zc(bdxtail, cdy, bdytail, cdx), zc(cdytail, bdx, cdxtail, bdy))
    cat = expansion_sum(zc(cdxtail, ady, cdytail, adx), zc(adytail, cdx, adxtail, cdy))
    abt = expansion_sum(zc(adxtail, bdy, adytail, bdx), zc(bdytail, adx, bdxtail, ady))
    tp = ar.three_product
    terms = [
        fin1,
        ar.scale(bct, adz), ar.scale(cat, bdz), ar.scale(abt, cdz),
        ar.scale(bc, adztail), ar.scale(ca, bdztail), ar.scale(ab, cdztail),
        tp(adxtail, bdytail, cdz), tp(adxtail, bdytail, cdztail),
        tp(-adxtail, cdytail, bdz), tp(-adxtail, cdytail, bdztail),
        tp(bdxtail, cdytail, adz), tp(bdxtail, cdytail, adztail),
        tp(-bdxtail, adytail, cdz), tp(-bdxtail, adytail, cdztail),
        tp(cdxtail, adytail, bdz), tp(cdxtail, adytail, bdztail),
        tp(-cdxtail, bdytail, adz), tp(-cdxtail, bdytail, adztail),
        ar.scale(bct, adztail), ar.scale(cat, bdztail), ar.scale(abt, cdztail),
    ]
    fin2 = functools.reduce(expansion_sum, terms)
    record_resolution('orient3d', Stage.EXACT)
    return fin2.most_significant()


# ---------------------------------------------------------------------------
# incircle
# ---------------------------------------------------------------------------

def incircle(pa, pb, pc, pd, *, arithmetic: Optional[ExpansionArithmetic] = None):
    """Positive when ``d`` lies inside the circle through counter-clockwise ``a, b, c``,
    negative outside, zero on the circle.
    """
    ar = resolve_arithmetic((pa, pb, pc, pd), arithmetic)
    a, b, c, d = cast_points((pa, pb, pc, pd), 2, ar)
    bounds = ar.bounds
    two = ar.two

    adx = a[0] - d[0]
    bdx = b[0] - d[0]
    cdx = c[0] - d[0]
    ady = a[1] - d[1]
    bdy = b[1] - d[1]
    cdy = c[1] - d[1]
    det, permanent = _incircle_fast(adx, bdx, cdx, ady, bdy, cdy)
    errbound = bounds.incircle_a * permanent
    if abs(det) >= abs(errbound):
        record_resolution('incircle', Stage.FAST)
        return det

    bc = ar.two_two_diff(bdx, cdy, cdx, bdy)
    ca = ar.two_two_diff(cdx, ady, adx, cdy)
    ab = ar.two_two_diff(adx, bdy, bdx, ady)
    adet = expansion_sum(ar.scale(ar.scale(bc, adx), adx), ar.scale(ar.scale(bc, ady), ady))
    bdet = expansion_sum(ar.scale(ar.scale(ca, bdx), bdx), ar.scale(ar.scale(ca, bdy), bdy))
    cdet = expansion_sum(ar.scale(ar.scale(ab, cdx), cdx), ar.scale(ar.scale(ab, cdy), cdy))
    fin1 = expansion_sum(expansion_sum(adet, bdet), cdet)
    det = fin1.estimate()
    errbound = bounds.incircle_b * permanent
    if abs(det) >= abs(errbound):
        record_resolution('incircle', Stage.PARTIAL)
        return det

    adxtail = minus_tail(a[0], d[0], adx)
    adytail = minus_tail(a[1], d[1], ady)
    bdxtail = minus_tail(b[0], d[0], bdx)
    bdytail = minus_tail(b[1], d[1], bdy)
    cdxtail = minus_tail(c[0], d[0], cdx)
    cdytail = minus_tail(c[1], d[1], cdy)
    if (adxtail == 0 and bdxtail == 0 and cdxtail == 0
            and adytail == 0 and bdytail == 0 and cdytail == 0):
        record_resolution('incircle', Stage.TAIL)
        return det

    errbound = bounds.incircle_c * permanent + bounds.resulterrbound * abs(det)
    det += (((adx * adx + ady * ady) * ((bdx * cdytail + cdy * bdxtail) - (bdy * cdxtail + cdx * bdytail))
             + (bdx * cdy - bdy * cdx) * (adx * adxtail + ady * adytail) * two)
            + ((bdx * bdx + bdy * bdy) * ((cdx * adytail + ady * cdxtail) - (cdy * adxtail + adx * cdytail))
               + (cdx * ady - cdy * adx) * (bdx * bdxtail + bdy * bdytail) * two)
            + ((cdx * cdx + cdy * cdy) * ((adx * bdytail + bdy * adxtail) - (ady * bdxtail + bdx * adytail))
               + (adx * bdy - ady * bdx) * (cdx * cdxtail + cdy * cdytail) * two))
    if abs(det) >= abs(errbound):
        record_resolution('incircle', Stage.TAIL)
        return det

    logger.debug("incircle: falling back to exact evaluation (det=%r, errbound=%r)", det, errbound)
    record_resolution('incircle', Stage.EXACT)
    return incircle_exact(a, b, c, d, ar)


# ---------------------------------------------------------------------------
# insphere
# ---------------------------------------------------------------------------

def insphere(pa, pb, pc, pd, pe, *, arithmetic: Optional[ExpansionArithmetic] = None):
    """Positive when ``e`` lies inside the sphere through ``a, b, c, d`` (with
    ``orient3d(a, b, c, d) > 0``), negative outside, zero on the sphere.
    """
    ar = resolve_arithmetic((pa, pb, pc, pd, pe), arithmetic)
    a, b, c, d, e = cast_points((pa, pb, pc, pd, pe), 3, ar)
    bounds = ar.bounds
    two = ar.two

    aex = a[0] - e[0]
    bex = b[0] - e[0]
    cex = c[0] - e[0]
    dex = d[0] - e[0]
    aey = a[1] - e[1]
    bey = b[1] - e[1]
    cey = c[1] - e[1]
    dey = d[1] - e[1]
    aez = a[2] - e[2]
    bez = b[2] - e[2]
    cez = c[2] - e[2]
    dez = d[2] - e[2]
    det, permanent = _insphere_fast(aex, bex, cex, dex, aey, bey, cey, dey, aez, bez, cez, dez)
    errbound = bounds.insphere_a * permanent
    if abs(det) >= abs(errbound):
        record_resolution('insphere', Stage.FAST)
        return det

    ab = ar.two_two_diff(aex, bey, bex, aey)
    bc = ar.two_two_diff(bex, cey, cex, bey)
    cd = ar.two_two_diff(cex, dey, dex, cey)
    da = ar.two_two_diff(dex, aey, aex, dey)
    ac = ar.two_two_diff(aex, cey, cex, aey)
    bd = ar.two_two_diff(bex, dey, dex, bey)
    temp24a = expansion_sum(ar.scale(bc, dez), expansion_sum(ar.scale(cd, bez), ar.scale(bd, -cez)))
    temp24b = expansion_sum(ar.scale(cd, aez), expansion_sum(ar.scale(da, cez), ar.scale(ac, dez)))
    temp24c = expansion_sum(ar.scale(da, bez), expansion_sum(ar.scale(ab, dez), ar.scale(bd, aez)))
    temp24d = expansion_sum(ar.scale(ab, cez), expansion_sum(ar.scale(bc, aez), ar.scale(ac, -bez)))

    def lifted(minor, x, y, z, negative):
        sx, sy, sz = (-x, -y, -z) if negative else (x, y, z)
        return expansion_sum(
            expansion_sum(ar.scale(ar.scale(minor, x), sx), ar.scale(ar.scale(minor, y), sy)),
            ar.scale(ar.scale(minor, z), sz),
        )

    adet = lifted(temp24a, aex, aey, aez, True)
    bdet = lifted(temp24b, bex, bey, bez, False)
    cdet = lifted(temp24c, cex, cey, cez, True)
    ddet = lifted(temp24d, dex, dey, dez, False)
    fin1 = expansion_sum(expansion_sum(adet, bdet), expansion_sum(cdet, ddet))
    det = fin1.estimate()
    errbound = bounds.insphere_b * permanent
    if abs(det) >= abs(errbound):
        record_resolution('insphere', Stage.PARTIAL)
        return det

    aextail = minus_tail(a[0], e[0], aex)
    aeytail = minus_tail(a[1], e[1], aey)
    aeztail = minus_tail(a[2], e[2], aez)
    bextail = minus_tail(b[0], e[0], bex)
    beytail = minus_tail(b[1], e[1], bey)
    beztail = minus_tail(b[2], e[2], bez)
    cextail = minus_tail(c[0], e[0], cex)
    ceytail = minus_tail(c[1], e[1], cey)
    ceztail = minus_tail(c[2], e[2], cez)
    dextail = minus_tail(d[0], e[0], dex)
    deytail = minus_tail(d[1], e[1], dey)
    deztail = minus_tail(d[2], e[2], dez)
    if (aextail == 0 and aeytail == 0 and aeztail == 0
            and bextail == 0 and beytail == 0 and beztail == 0
            and cextail == 0 and ceytail == 0 and ceztail == 0
            and dextail == 0 and deytail == 0 and deztail == 0):
        record_resolution('insphere', Stage.TAIL)
        return det

    errbound = bounds.insphere_c * permanent + bounds.resulterrbound * abs(det)
    abeps = (aex * beytail + bey * aextail) - (aey * bextail + bex * aeytail)
    bceps = (bex * ceytail + cey * bextail) - (bey * cextail + cex * beytail)
    cdeps = (cex * deytail + dey * cextail) - (cey * dextail + dex * ceytail)
    daeps = (dex * aeytail + aey * dextail) - (dey * aextail + aex * deytail)
    aceps = (aex * ceytail + cey * aextail) - (aey * cextail + cex * aeytail)
    bdeps = (bex * deytail + dey * bextail) - (bey * dextail + dex * beytail)
    # the correction only needs the minors to first order
    ab3 = ab.most_significant()
    bc3 = bc.most_significant()
    cd3 = cd.most_significant()
    da3 = da.most_significant()
    ac3 = ac.most_significant()
    bd3 = bd.most_significant()
    det += ((((bex * bex + bey * bey + bez * bez)
              * ((cez * daeps + dez * aceps + aez * cdeps) + (ceztail * da3 + deztail * ac3 + aeztail * cd3))
              + (dex * dex + dey * dey + dez * dez)
              * ((aez * bceps - bez * aceps + cez * abeps) + (aeztail * bc3 - beztail * ac3 + ceztail * ab3)))
             - ((aex * aex + aey * aey + aez * aez)
                * ((bez * cdeps - cez * bdeps + dez * bceps) + (beztail * cd3 - ceztail * bd3 + deztail * bc3))
                + (cex * cex + cey * cey + cez * cez)
                * ((dez * abeps + aez * bdeps + bez * daeps) + (deztail * ab3 + aeztail * bd3 + beztail * da3))))
            + two * ((((bex * bextail + bey * beytail + bez * beztail) * (cez * da3 + dez * ac3 + aez * cd3))
                      + ((dex * dextail + dey * deytail + dez * deztail) * (aez * bc3 - bez * ac3 + cez * ab3)))
                     - (((aex * aextail + aey * aeytail + aez * aeztail) * (bez * cd3 - cez * bd3 + dez * bc3))
                        + ((cex * cextail + cey * ceytail + cez * ceztail) * (dez * ab3 + aez * bd3 + bez * da3)))))
    if abs(det) >= abs(errbound):
        record_resolution('insphere', Stage.TAIL)
        return det

    logger.debug("insphere: falling back to exact evaluation (det=%r, errbound=%r)", det, errbound)
    record_resolution('insphere', Stage.EXACT)
    return insphere_exact(a, b, c, d, e, ar)


# ---------------------------------------------------------------------------
# Public wrappers of the exact evaluators
# ---------------------------------------------------------------------------

def orient2d_exact_sign(pa, pb, pc, *, arithmetic: Optional[ExpansionArithmetic] = None):
    """Exact-only orient2d; same sign as :func:`orient2d`, always slow."""
    ar = resolve_arithmetic((pa, pb, pc), arithmetic)
    return orient2d_exact(*cast_points((pa, pb, pc), 2, ar), ar)


def orient3d_exact_sign(pa, pb, pc, pd, *, arithmetic: Optional[ExpansionArithmetic] = None):
    ar = resolve_arithmetic((pa, pb, pc, pd), arithmetic)
    return orient3d_exact(*cast_points((pa, pb, pc, pd), 3, ar), ar)


def incircle_exact_sign(pa, pb, pc, pd, *, arithmetic: Optional[ExpansionArithmetic] = None):
    ar = resolve_arithmetic((pa, pb, pc, pd), arithmetic)
    return incircle_exact(*cast_points((pa, pb, pc, pd), 2, ar), ar)


def insphere_exact_sign(pa, pb, pc, pd, pe, *, arithmetic: Optional[ExpansionArithmetic] = None):
    ar = resolve_arithmetic((pa, pb, pc, pd, pe), arithmetic)
    return insphere_exact(*cast_points((pa, pb, pc, pd, pe), 3, ar), ar)
