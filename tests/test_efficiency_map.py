import numpy as np
import pytest

from ehapto.analysis.efficiency_map import (
    DEFAULT_DELTA_P,
    DEFAULT_FRAC_DISP,
    generate_efficiency_map,
    ratio_efficiency,
)
from ehapto.config.models import efficiency_map_parameters
from ehapto.physics.losses import evaluate_operating_point


@pytest.fixture(scope="module")
def default_map():
    return generate_efficiency_map(efficiency_map_parameters())


def test_ratio_efficiency() -> None:
    assert ratio_efficiency(0.0, 0.0) == 1.0
    assert ratio_efficiency(2.0, 4.0) == pytest.approx(0.5)
    assert ratio_efficiency(-4.0, 2.0) == pytest.approx(0.5)
    assert ratio_efficiency(3.0, 0.0) == 0.0


class TestDefaultGrid:
    def test_axes(self, default_map) -> None:
        assert default_map.shape == (50, 81)
        np.testing.assert_allclose(default_map.frac_disp, DEFAULT_FRAC_DISP)
        np.testing.assert_allclose(default_map.delta_p, DEFAULT_DELTA_P)
        assert default_map.delta_p[1] - default_map.delta_p[0] == pytest.approx(1e6)
        assert default_map.w == pytest.approx(3000.0 * 2 * np.pi / 60.0)

    def test_efficiencies_bounded(self, default_map) -> None:
        for field in ("volumetric_efficiency", "torque_efficiency", "total_efficiency"):
            grid = getattr(default_map, field)
            assert grid.shape == (50, 81)
            assert np.all(grid >= 0.0)
            assert np.all(grid <= 1.0)

    def test_total_is_product(self, default_map) -> None:
        np.testing.assert_allclose(
            default_map.total_efficiency,
            default_map.volumetric_efficiency * default_map.torque_efficiency,
        )

    def test_high_efficiency_region_exists(self, default_map) -> None:
        # full stroke at 20 MPa: roughly 0.98 volumetric and 0.88 torque
        assert np.max(default_map.total_efficiency) > 0.8

    def test_positive_speed_quadrants(self, default_map) -> None:
        assert set(np.unique(default_map.quadrant)) == {1, 4}
        assert np.all(default_map.quadrant[:, default_map.delta_p >= 0.0] == 1)

    def test_point_matches_operating_point(self, default_map) -> None:
        i, j = 45, 60
        pt = default_map.point(i, j)
        op = evaluate_operating_point(default_map.frac_disp[i], default_map.delta_p[j], default_map.w, efficiency_map_parameters())
        assert pt.quadrant == op.quadrant
        assert pt.q_act == pytest.approx(op.q_act)
        assert pt.t_act == pytest.approx(op.t_act)
        assert pt.volumetric_efficiency == pytest.approx(ratio_efficiency(op.q_ideal, op.q_act))
        assert pt.total_efficiency == pytest.approx(default_map.total_efficiency[i, j])

    def test_contour_grids(self, default_map) -> None:
        X, Y, Z = default_map.contour_grids()
        assert X.shape == Y.shape == Z.shape == (81, 50)
        assert Y[0, 0] == pytest.approx(-40.0)
        assert Y[-1, 0] == pytest.approx(40.0)
        assert Z[3, 7] == default_map.total_efficiency[7, 3]

    def test_contour_grids_rejects_scalar_field(self, default_map) -> None:
        with pytest.raises(ValueError):
            default_map.contour_grids("w")


class TestCustomGrid:
    def test_negative_speed_quadrants(self) -> None:
        m = generate_efficiency_map(efficiency_map_parameters(), [0.5, 1.0], [-1e7, 1e7], w=-300.0)
        assert m.quadrant[:, 0].tolist() == [3, 3]
        assert m.quadrant[:, 1].tolist() == [2, 2]

    def test_lossless_is_ideal_everywhere(self, pump_lossless) -> None:
        m = generate_efficiency_map(pump_lossless, np.linspace(-1.0, 1.0, 5), np.linspace(-1e7, 1e7, 5))
        np.testing.assert_array_equal(m.total_efficiency, np.ones((5, 5)))
        np.testing.assert_array_equal(m.q_loss, np.zeros((5, 5)))

    def test_scale_does_not_change_efficiency(self) -> None:
        f = [0.25, 0.8]
        dp = [-2e7, 5e6, 3e7]
        one = generate_efficiency_map(efficiency_map_parameters(scale=1.0), f, dp)
        many = generate_efficiency_map(efficiency_map_parameters(scale=28.0), f, dp)
        np.testing.assert_allclose(many.total_efficiency, one.total_efficiency, rtol=1e-12)
        np.testing.assert_allclose(many.q_act, 28.0 * one.q_act, rtol=1e-12)

    @pytest.mark.parametrize("f,dp", [([], [1e6]), ([0.5], [np.nan]), ([[0.5]], [1e6])])
    def test_invalid_axes(self, f, dp) -> None:
        with pytest.raises(ValueError):
            generate_efficiency_map(efficiency_map_parameters(), f, dp)
