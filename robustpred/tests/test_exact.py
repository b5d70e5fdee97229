import numpy as np
import pytest

from robustpred.core.adaptive import cast_points
from robustpred.core.constants import FLOAT32, FLOAT64
from robustpred.core.exact import incircle_exact, insphere_exact, orient2d_exact, orient3d_exact
from robustpred.core.expansion import arithmetic_for
from _cases import grid_mixed, near_cocircular, near_collinear, near_coplanar, near_cospherical
from _reference import incircle_ref, insphere_ref, orient2d_ref, orient3d_ref, sign


def run(fn, pts, dim, ar):
    return fn(*cast_points(pts, dim, ar), ar)


@pytest.mark.parametrize('fn, ref, gen, count, dim, n', [
    (orient2d_exact, orient2d_ref, near_collinear, 3, 2, 60),
    (orient3d_exact, orient3d_ref, near_coplanar, 4, 3, 40),
    (incircle_exact, incircle_ref, near_cocircular, 4, 2, 40),
    (insphere_exact, insphere_ref, near_cospherical, 5, 3, 15),
], ids=['orient2d', 'orient3d', 'incircle', 'insphere'])
def test_exact_signs(rng, fn, ref, gen, count, dim, n):
    ar = arithmetic_for(FLOAT64)
    cases = list(gen(rng, n)) + list(grid_mixed(rng, n // 3, count, dim))
    for pts in cases:
        assert sign(run(fn, pts, dim, ar)) == sign(ref(*pts))


def test_orient2d_exact_value_for_integer_triangle():
    ar = arithmetic_for(FLOAT64)
    assert run(orient2d_exact, ((0, 0), (3, 0), (0, 4)), 2, ar) == 12.0


def test_exact_zero_for_degenerate_float32_input():
    ar = arithmetic_for(FLOAT32)
    pts = ((1, 0, 0), (0, 1, 0), (-1, 0, 0), (0, 0, -1), (0, -1, 0))
    det = run(insphere_exact, pts, 3, ar)
    assert det == 0 and isinstance(det, np.float32)


def test_exact_results_do_not_depend_on_strategy(rng):
    fma, dekker = arithmetic_for(FLOAT64), arithmetic_for(FLOAT64, use_fma=False)
    for pts in near_cocircular(rng, 10):
        assert run(incircle_exact, pts, 2, fma) == run(incircle_exact, pts, 2, dekker)


def test_sign_of_numpy_scalars():
    assert sign(np.float64(-3.55e-14)) == -1
    assert sign(np.float32(2.5)) == 1
    assert sign(np.float64(0.0)) == 0
    assert sign(-0.0) == 0
