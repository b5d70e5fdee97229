import dataclasses

import numpy as np
import pytest

from robustpred.core.adaptive import (
    incircle, incircle_exact_sign, insphere, insphere_exact_sign, orient2d,
    orient2d_exact_sign, orient3d, orient3d_exact_sign,
)
from robustpred.core.constants import FLOAT32, FLOAT64, UnsupportedFloatTypeError
from robustpred.core.expansion import ExpansionArithmetic, arithmetic_for
from robustpred.core.stats import Stage, record_stages
from _cases import (
    grid_mixed, near_cocircular, near_collinear, near_coplanar, near_cospherical, uniform,
)
from _reference import (
    incircle_ref, insphere_ref, orient2d_ref, orient3d_ref, sign,
)

# name, adaptive, exact-only, reference, near-degenerate generator, point count, dimension
PREDICATES = [
    ('orient2d', orient2d, orient2d_exact_sign, orient2d_ref, near_collinear, 3, 2),
    ('orient3d', orient3d, orient3d_exact_sign, orient3d_ref, near_coplanar, 4, 3),
    ('incircle', incircle, incircle_exact_sign, incircle_ref, near_cocircular, 4, 2),
    ('insphere', insphere, insphere_exact_sign, insphere_ref, near_cospherical, 5, 3),
]
IDS = [p[0] for p in PREDICATES]
CASES = {'orient2d': 150, 'orient3d': 80, 'incircle': 80, 'insphere': 30}

U = 2.0 ** -80


class TestConcreteConfigurations:

    def test_orient2d(self):
        assert orient2d((0, 0), (1, 0), (0, 1)) > 0
        assert orient2d((0, 0), (0, 1), (1, 0)) < 0
        assert orient2d((0, 0), (1, 1), (2, 2)) == 0
        assert orient2d((0.0, 0.0), (1.0, 0.0), (1.0, 1.0)) == 1.0

    def test_orient3d(self):
        a, b, c = (0, 0, 0), (1, 0, 0), (0, 1, 0)
        assert orient3d(a, b, c, (0, 0, -1)) > 0
        assert orient3d(a, b, c, (0, 0, 1)) < 0
        assert orient3d(a, b, c, (3, -7, 0)) == 0

    def test_incircle(self):
        a, b, c = (0, 0), (1, 0), (0, 1)
        assert incircle(a, b, c, (0.5, 0.5)) > 0
        assert incircle(a, b, c, (2, 2)) < 0
        assert incircle(a, b, c, (1, 1)) == 0

    def test_insphere(self):
        a, b, c, d = (1, 0, 0), (0, 1, 0), (-1, 0, 0), (0, 0, -1)
        assert orient3d(a, b, c, d) > 0
        assert insphere(a, b, c, d, (0, 0, 0)) > 0
        assert insphere(a, b, c, d, (0, 0, 2)) < 0
        assert insphere(a, b, c, d, (0, -1, 0)) == 0

    def test_tiny_but_certain_area(self):
        with record_stages() as stats:
            det = orient2d((0.0, 0.0), (1.0, 0.0), (0.5, 1e-20))
        assert det > 0
        assert stats['orient2d'].fast == 1


class TestDegenerateInputs:

    @pytest.mark.parametrize('dtype', [np.float64, np.float32])
    def test_collinear(self, dtype):
        pts = [np.array(p, dtype=dtype) for p in ((-3, -8), (1, 4), (7, 22))]
        assert orient2d(*pts) == 0
        assert orient2d_exact_sign(*pts) == 0

    @pytest.mark.parametrize('dtype', [np.float64, np.float32])
    def test_coplanar(self, dtype):
        pts = [np.array((x, y, x + 2 * y), dtype=dtype) for x, y in ((0, 0), (3, -1), (-2, 5), (7, 7))]
        assert orient3d(*pts) == 0
        assert orient3d_exact_sign(*pts) == 0

    @pytest.mark.parametrize('dtype', [np.float64, np.float32])
    def test_cocircular(self, dtype):
        pts = [np.array(p, dtype=dtype) for p in ((5, 0), (3, 4), (-4, 3), (0, -5))]
        assert incircle(*pts) == 0
        assert incircle_exact_sign(*pts) == 0
        unit = [np.array(p, dtype=dtype) for p in ((1, 0), (0, 1), (-1, 0), (0, -1))]
        assert incircle(*unit) == 0

    @pytest.mark.parametrize('dtype', [np.float64, np.float32])
    def test_cospherical(self, dtype):
        pts = [np.array(p, dtype=dtype) for p in
               ((1, 0, 0), (0, 1, 0), (-1, 0, 0), (0, 0, -1), (0, -1, 0))]
        assert insphere(*pts) == 0
        assert insphere_exact_sign(*pts) == 0

    def test_cospherical_off_origin(self):
        # integer points on the sphere of radius 3 around (10, -20, 5)
        center = np.array([10.0, -20.0, 5.0])
        offsets = [(3, 0, 0), (0, 3, 0), (1, 2, 2), (-2, -1, 2), (2, -2, -1)]
        pts = [center + np.array(o, dtype=float) for o in offsets]
        assert insphere(*pts) == 0


class TestStages:

    def test_representable_collinear_points_resolve_from_tails(self):
        with record_stages() as stats:
            det = orient2d((0.5, 0.5), (12.0, 12.0), (24.0, 24.0))
        assert det == 0
        assert stats['orient2d'].tail == 1

    def test_rounded_collinear_points_need_the_full_expansion(self):
        with record_stages() as stats:
            det = orient2d((U, U), (3.0, 3.0), (1.0, 1.0))
        assert det == 0
        assert stats['orient2d'].exact == 1

    def test_second_order_term_decides(self):
        # first-order terms cancel, leaving -U**2
        a, b, c = (U, 2 * U), (2 * U, 3 * U), (1.0, 1.0)
        with record_stages() as stats:
            det = orient2d(a, b, c)
        assert det < 0
        assert sign(orient2d_ref(a, b, c)) == -1
        assert stats['orient2d'].exact == 1

    def test_near_degenerate_inputs_escalate(self, rng):
        with record_stages() as stats:
            for pts in near_collinear(rng, 100):
                orient2d(*pts)
        s = stats['orient2d']
        assert s.calls == 100
        assert s.partial + s.tail + s.exact > 0


@pytest.mark.parametrize('name, fn, exact_fn, ref, gen, count, dim', PREDICATES, ids=IDS)
class TestAgainstReference:

    def test_near_degenerate_signs(self, rng, name, fn, exact_fn, ref, gen, count, dim):
        for pts in gen(rng, CASES[name]):
            expected = sign(ref(*pts))
            assert sign(fn(*pts)) == expected
            assert sign(exact_fn(*pts)) == expected

    def test_random_signs(self, rng, name, fn, exact_fn, ref, gen, count, dim):
        for pts in uniform(rng, 20, count, dim):
            assert sign(fn(*pts)) == sign(ref(*pts))

    def test_float32_inputs(self, rng, name, fn, exact_fn, ref, gen, count, dim):
        for pts in gen(rng, CASES[name] // 2):
            # keep coordinates away from zero so no product tail underflows
            pts = [np.asarray(p + 32.0, dtype=np.float32) for p in pts]
            det = fn(*pts)
            assert isinstance(det, np.float32)
            assert sign(det) == sign(ref(*pts))

    def test_swapping_two_points_flips_sign(self, rng, name, fn, exact_fn, ref, gen, count, dim):
        for pts in gen(rng, CASES[name] // 2):
            swapped = (pts[1], pts[0]) + tuple(pts[2:])
            assert sign(fn(*swapped)) == -sign(fn(*pts))

    def test_power_of_two_scaling_keeps_sign(self, rng, name, fn, exact_fn, ref, gen, count, dim):
        for pts in gen(rng, CASES[name] // 2):
            s = sign(fn(*pts))
            for k in (-20, 1, 30):
                assert sign(fn(*(p * 2.0 ** k for p in pts))) == s

    def test_repeated_calls_are_bit_identical(self, rng, name, fn, exact_fn, ref, gen, count, dim):
        for pts in gen(rng, 10):
            first, second = fn(*pts), fn(*pts)
            assert first.tobytes() == second.tobytes()

    def test_dekker_engine_gives_identical_results(self, rng, name, fn, exact_fn, ref, gen, count, dim):
        dekker = ExpansionArithmetic(FLOAT64, use_fma=False)
        for pts in gen(rng, CASES[name] // 2):
            assert fn(*pts, arithmetic=dekker).tobytes() == fn(*pts).tobytes()

    def test_every_stage_failing_still_gives_exact_signs(self, rng, name, fn, exact_fn, ref, gen, count, dim):
        # inflate the certification thresholds so each call runs to the end
        ar = ExpansionArithmetic(FLOAT64)
        huge = np.float64(1e200)
        ar.bounds = dataclasses.replace(
            ar.bounds, **{f'{name}_{k}': huge for k in 'abc'})
        cases = list(uniform(rng, 6, count, dim)) + list(grid_mixed(rng, 6, count, dim))
        cases += list(gen(rng, 6))
        with record_stages() as stats:
            for pts in cases:
                assert sign(fn(*pts, arithmetic=ar)) == sign(ref(*pts))
        assert stats[name].exact > 0


class TestInputTypes:

    def test_integers_are_promoted_to_float64(self):
        det = orient2d((0, 0), (1, 0), (0, 1))
        assert isinstance(det, np.float64)
        assert det == 1.0

    def test_mixed_precision_promotes(self):
        a = np.array([0.0, 0.0], dtype=np.float32)
        assert isinstance(orient2d(a, [1.0, 0.0], [0.0, 1.0]), np.float64)

    def test_explicit_engine_wins(self):
        det = orient2d((0.0, 0.0), (1.0, 0.0), (0.0, 1.0), arithmetic=arithmetic_for(FLOAT32))
        assert isinstance(det, np.float32)

    def test_half_precision_is_rejected(self):
        pts = [np.zeros(2, dtype=np.float16) for _ in range(3)]
        with pytest.raises(UnsupportedFloatTypeError):
            orient2d(*pts)

    def test_extra_coordinates_are_ignored(self):
        assert orient2d((0, 0, 9), (1, 0, -4), (0, 1, 2)) == 1.0
