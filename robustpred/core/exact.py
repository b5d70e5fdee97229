"""Exact predicate evaluators.

The determinants are expanded over the raw coordinates into sums of 2x2
minors (each an exact four-component expansion) scaled by coordinates, so
the complete value is carried as an expansion and only its most significant
component is returned. The sign is always right, including an exact zero for
degenerate input, at the cost of several hundred (orient2d) up to several
thousand (insphere) floating-point operations.

These functions take already-cast coordinate tuples and an engine; the
public entry points in :mod:`robustpred` accept arbitrary point sequences.
"""
from __future__ import annotations

from .expansion import ExpansionArithmetic, expansion_diff, expansion_sum

__all__ = ['orient2d_exact', 'orient3d_exact', 'incircle_exact', 'insphere_exact']


def orient2d_exact(pa, pb, pc, ar: ExpansionArithmetic):
    aterms = ar.two_two_diff(pa[0], pb[1], pa[0], pc[1])
    bterms = ar.two_two_diff(pb[0], pc[1], pb[0], pa[1])
    cterms = ar.two_two_diff(pc[0], pa[1], pc[0], pb[1])
    w = expansion_sum(expansion_sum(aterms, bterms), cterms)
    return w.most_significant()


def _xy_minors(ar: ExpansionArithmetic, pa, pb, pc, pd):
    ab = ar.two_two_diff(pa[0], pb[1], pb[0], pa[1])
    bc = ar.two_two_diff(pb[0], pc[1], pc[0], pb[1])
    cd = ar.two_two_diff(pc[0], pd[1], pd[0], pc[1])
    da = ar.two_two_diff(pd[0], pa[1], pa[0], pd[1])
    ac = ar.two_two_diff(pa[0], pc[1], pc[0], pa[1])
    bd = ar.two_two_diff(pb[0], pd[1], pd[0], pb[1])

    abc = expansion_diff(expansion_sum(ab, bc), ac)
    bcd = expansion_diff(expansion_sum(bc, cd), bd)
    cda = expansion_sum(expansion_sum(cd, da), ac)
    dab = expansion_sum(expansion_sum(da, ab), bd)
    return abc, bcd, cda, dab


def orient3d_exact(pa, pb, pc, pd, ar: ExpansionArithmetic):
    abc, bcd, cda, dab = _xy_minors(ar, pa, pb, pc, pd)

    adet = ar.scale(bcd, pa[2])
    bdet = ar.scale(cda, -pb[2])
    cdet = ar.scale(dab, pc[2])
    ddet = ar.scale(abc, -pd[2])

    deter = expansion_sum(expansion_sum(adet, bdet), expansion_sum(cdet, ddet))
    return deter.most_significant()


def _lifted(ar: ExpansionArithmetic, minor, p, sign_flip: bool):
    # minor * (px^2 + py^2 [+ pz^2]), each square applied as two exact scalings
    total = None
    for coord in p:
        factor = -coord if sign_flip else coord
        term = ar.scale(ar.scale(minor, coord), factor)
        total = term if total is None else expansion_sum(total, term)
    return total


def incircle_exact(pa, pb, pc, pd, ar: ExpansionArithmetic):
    abc, bcd, cda, dab = _xy_minors(ar, pa, pb, pc, pd)

    adet = _lifted(ar, bcd, pa[:2], False)
    bdet = _lifted(ar, cda, pb[:2], True)
    cdet = _lifted(ar, dab, pc[:2], False)
    ddet = _lifted(ar, abc, pd[:2], True)

    deter = expansion_sum(expansion_sum(adet, bdet), expansion_sum(cdet, ddet))
    return deter.most_significant()


def insphere_exact(pa, pb, pc, pd, pe, ar: ExpansionArithmetic):
    ab = ar.two_two_diff(pa[0], pb[1], pb[0], pa[1])
    bc = ar.two_two_diff(pb[0], pc[1], pc[0], pb[1])
    cd = ar.two_two_diff(pc[0], pd[1], pd[0], pc[1])
    de = ar.two_two_diff(pd[0], pe[1], pe[0], pd[1])
    ea = ar.two_two_diff(pe[0], pa[1], pa[0], pe[1])
    ac = ar.two_two_diff(pa[0], pc[1], pc[0], pa[1])
    bd = ar.two_two_diff(pb[0], pd[1], pd[0], pb[1])
    ce = ar.two_two_diff(pc[0], pe[1], pe[0], pc[1])
    da = ar.two_two_diff(pd[0], pa[1], pa[0], pd[1])
    eb = ar.two_two_diff(pe[0], pb[1], pb[0], pe[1])

    def triple(m1, z1, m2, z2, m3, z3):
        return expansion_sum(expansion_sum(ar.scale(m1, z1), ar.scale(m2, z2)), ar.scale(m3, z3))

    # 3x3 minors over (x, y, z)
    abc = triple(bc, pa[2], ac, -pb[2], ab, pc[2])
    bcd = triple(cd, pb[2], bd, -pc[2], bc, pd[2])
    cde = triple(de, pc[2], ce, -pd[2], cd, pe[2])
    dea = triple(ea, pd[2], da, -pe[2], de, pa[2])
    eab = triple(ab, pe[2], eb, -pa[2], ea, pb[2])
    abd = triple(bd, pa[2], da, pb[2], ab, pd[2])
    bce = triple(ce, pb[2], eb, pc[2], bc, pe[2])
    cda = triple(da, pc[2], ac, pd[2], cd, pa[2])
    deb = triple(eb, pd[2], bd, pe[2], de, pb[2])
    eac = triple(ac, pe[2], ce, pa[2], ea, pc[2])

    # 4x4 minors
    bcde = expansion_diff(expansion_sum(cde, bce), expansion_sum(deb, bcd))
    cdea = expansion_diff(expansion_sum(dea, cda), expansion_sum(eac, cde))
    deab = expansion_diff(expansion_sum(eab, deb), expansion_sum(abd, dea))
    eabc = expansion_diff(expansion_sum(abc, eac), expansion_sum(bce, eab))
    abcd = expansion_diff(expansion_sum(bcd, abd), expansion_sum(cda, abc))

    adet = _lifted(ar, bcde, pa[:3], False)
    bdet = _lifted(ar, cdea, pb[:3], False)
    cdet = _lifted(ar, deab, pc[:3], False)
    ddet = _lifted(ar, eabc, pd[:3], False)
    edet = _lifted(ar, abcd, pe[:3], False)

    deter = expansion_sum(
        expansion_sum(adet, bdet),
        expansion_sum(expansion_sum(cdet, ddet), edet),
    )
    return deter.most_significant()
