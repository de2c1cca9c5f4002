import pytest

from ehapto.physics.quadrant import classify_quadrant, combine


class TestClassifyQuadrant:
    @pytest.mark.parametrize(
        "delta_p,w,quadrant,sigma_q,sigma_t",
        [
            (5e6, 200.0, 1, -1.0, 1.0),
            (-5e6, 200.0, 4, 1.0, 1.0),
            (5e6, -200.0, 2, -1.0, -1.0),
            (-5e6, -200.0, 3, 1.0, -1.0),
        ],
    )
    def test_table(self, delta_p, w, quadrant, sigma_q, sigma_t) -> None:
        signs = classify_quadrant(delta_p, w)
        assert signs.quadrant == quadrant
        assert signs.sigma_q == sigma_q
        assert signs.sigma_t == sigma_t

    @pytest.mark.parametrize(
        "delta_p,w,quadrant",
        [(0.0, 0.0, 1), (0.0, -1.0, 2), (-1.0, 0.0, 4), (-0.0, 1.0, 1)],
    )
    def test_zero_is_nonnegative(self, delta_p, w, quadrant) -> None:
        assert classify_quadrant(delta_p, w).quadrant == quadrant


class TestCombine:
    def test_quadrant_1(self) -> None:
        q_act, t_act = combine(10.0, 100.0, 1.0, 5.0, classify_quadrant(1.0, 1.0))
        assert q_act == pytest.approx(9.0)
        assert t_act == pytest.approx(105.0)

    def test_quadrant_3(self) -> None:
        q_act, t_act = combine(-10.0, 100.0, 1.0, 5.0, classify_quadrant(-1.0, -1.0))
        assert q_act == pytest.approx(-9.0)
        assert t_act == pytest.approx(95.0)
