import math

import numpy as np
import pytest

from ehapto.config.models import PumpMotorParameters
from ehapto.physics.losses import (
    evaluate_operating_point,
    flow_loss,
    flow_loss_terms,
    ideal_flow,
    ideal_torque,
    sign0,
    torque_loss,
)


def _with_scale(p: PumpMotorParameters, scale: float) -> PumpMotorParameters:
    return PumpMotorParameters(d=p.d, scale=scale, w=p.w, fluid=p.fluid, losses=p.losses)


class TestLossFormulas:
    def test_flow_loss_terms(self, pump_turbulent: PumpMotorParameters) -> None:
        p = pump_turbulent
        dp = 5e6
        d = p.d
        expected = (
            abs(d * p.losses.Cs * dp / p.fluid.mu)
            + abs(0.4 * d * p.w * dp / p.fluid.bulk_modulus)
            + abs(d ** (2 / 3) * p.losses.Cst * math.sqrt(2 * dp / p.fluid.rho))
        )
        assert flow_loss(0.4, dp, p.w, p) == pytest.approx(expected, rel=1e-12)

    def test_torque_loss(self, pump: PumpMotorParameters) -> None:
        p = pump
        dp = -8e6
        f = -0.3
        d = p.d
        c = p.losses
        expected = (
            abs(d * c.Cv * p.fluid.mu * p.w)
            + abs(d * dp * c.Cf)
            + abs(f * c.Ch * p.w**2 * p.fluid.rho * d ** (5 / 3) / 2)
        )
        assert torque_loss(f, dp, p.w, p) == pytest.approx(expected, rel=1e-12)

    def test_turbulent_term_uses_pressure_magnitude(self, pump_turbulent: PumpMotorParameters) -> None:
        pos = flow_loss_terms(4e6, 200.0, pump_turbulent)
        neg = flow_loss_terms(-4e6, 200.0, pump_turbulent)
        assert neg.turbulent == pytest.approx(pos.turbulent)
        assert pos.turbulent > 0.0

    def test_ideal_quantities(self, pump: PumpMotorParameters) -> None:
        assert ideal_flow(0.5, pump.w, pump) == pytest.approx(0.5 * pump.d * pump.w)
        assert ideal_torque(0.5, 1e7, pump) == pytest.approx(1e7 * pump.d * 0.5)

    def test_sign0(self) -> None:
        assert (sign0(2.0), sign0(-2.0), sign0(0.0)) == (1.0, -1.0, 0.0)


class TestLossProperties:
    def test_nonnegative(self, pump_turbulent: PumpMotorParameters) -> None:
        rng = np.random.default_rng(0)
        for f, dp, w in zip(rng.uniform(-2, 2, 200), rng.uniform(-5e7, 5e7, 200), rng.uniform(-400, 400, 200)):
            assert flow_loss(f, dp, w, pump_turbulent) >= 0.0
            assert torque_loss(f, dp, w, pump_turbulent) >= 0.0

    @pytest.mark.parametrize("f,dp,w", [(0.7, 1.2e7, 209.4), (-0.4, -3e6, 150.0), (0.2, 5e6, -300.0)])
    def test_scale_linearity(self, pump_turbulent: PumpMotorParameters, f, dp, w) -> None:
        base = _with_scale(pump_turbulent, 3.0)
        doubled = _with_scale(pump_turbulent, 6.0)
        a = evaluate_operating_point(f, dp, w, base)
        b = evaluate_operating_point(f, dp, w, doubled)
        assert b.q_ideal == 2.0 * a.q_ideal
        assert b.t_ideal == 2.0 * a.t_ideal
        assert b.q_loss == 2.0 * a.q_loss
        assert b.t_loss == 2.0 * a.t_loss


class TestOperatingPoint:
    def test_pumping_quadrant_1(self, pump: PumpMotorParameters) -> None:
        op = evaluate_operating_point(0.8, 1e7, pump.w, pump)
        assert op.quadrant == 1
        assert op.q_act == pytest.approx(op.q_ideal - op.q_loss)
        assert op.t_act == pytest.approx(op.t_ideal + op.t_loss)
        assert abs(op.q_act) < abs(op.q_ideal)

    def test_quadrant_4(self, pump: PumpMotorParameters) -> None:
        op = evaluate_operating_point(0.8, -1e7, pump.w, pump)
        assert op.quadrant == 4
        assert op.q_act == pytest.approx(op.q_ideal + op.q_loss)

    def test_continuity_in_pressure(self, pump_turbulent: PumpMotorParameters) -> None:
        eps = 1e-9
        hi = evaluate_operating_point(0.6, eps, pump_turbulent.w, pump_turbulent)
        lo = evaluate_operating_point(0.6, -eps, pump_turbulent.w, pump_turbulent)
        assert (hi.quadrant, lo.quadrant) == (1, 4)
        assert hi.q_act == pytest.approx(lo.q_act, rel=1e-6, abs=1e-12)
        assert hi.t_act == pytest.approx(lo.t_act, rel=1e-9)

    def test_flow_continuity_in_speed(self, pump_turbulent: PumpMotorParameters) -> None:
        eps = 1e-9
        hi = evaluate_operating_point(0.6, 5e6, eps, pump_turbulent)
        lo = evaluate_operating_point(0.6, 5e6, -eps, pump_turbulent)
        assert (hi.quadrant, lo.quadrant) == (1, 2)
        assert hi.q_act == pytest.approx(lo.q_act, rel=1e-6)

    def test_torque_continuity_in_speed_without_pressure(self, pump: PumpMotorParameters) -> None:
        eps = 1e-9
        hi = evaluate_operating_point(0.6, 0.0, eps, pump)
        lo = evaluate_operating_point(0.6, 0.0, -eps, pump)
        assert hi.t_act == pytest.approx(lo.t_act, abs=1e-9)

    def test_coulomb_friction_jump_at_zero_speed(self, pump: PumpMotorParameters) -> None:
        dp = 5e6
        hi = evaluate_operating_point(0.6, dp, 0.0, pump)
        lo = evaluate_operating_point(0.6, dp, -1e-12, pump)
        jump = hi.t_act - lo.t_act
        assert jump == pytest.approx(2.0 * pump.scale * abs(pump.d * dp * pump.losses.Cf), rel=1e-6)
