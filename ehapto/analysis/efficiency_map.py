"""Стационарная карта КПД насоса/мотора на сетке (frac_disp × ΔP).

Для каждой ячейки при фиксированных (w, Scale) считается рабочая точка той же
функцией `evaluate_operating_point`, что и во временном ряду, затем

    eta_vol = min(|Q_ideal|, |Q_act|) / max(|Q_ideal|, |Q_act|)
    eta_T   = min(|T_ideal|, |T_act|) / max(|T_ideal|, |T_act|)
    eta     = eta_vol * eta_T

Если и идеальная, и действительная величины равны нулю, КПД считается 1
(потерь нет, так как ничего не запрошено).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple
import logging

import numpy as np

from ehapto.config.models import PumpMotorParameters
from ehapto.core.types import Quadrant
from ehapto.core.units import MPA
from ehapto.core.validation import as_series
from ehapto.physics.losses import evaluate_operating_point

logger = logging.getLogger(__name__)

DEFAULT_FRAC_DISP = np.linspace(-1.0, 1.0, 50)
DEFAULT_DELTA_P = np.linspace(-40.0 * MPA, 40.0 * MPA, 81)   # шаг 1 МПа


def ratio_efficiency(ideal: float, actual: float) -> float:
    hi = max(abs(ideal), abs(actual))
    if hi == 0.0:
        return 1.0
    return min(abs(ideal), abs(actual)) / hi


@dataclass(frozen=True, slots=True)
class EfficiencyGridPoint:
    frac_disp: float
    delta_p: float
    quadrant: Quadrant
    q_ideal: float
    t_ideal: float
    q_loss: float
    t_loss: float
    q_act: float
    t_act: float
    volumetric_efficiency: float
    torque_efficiency: float

    @property
    def total_efficiency(self) -> float:
        return self.volumetric_efficiency * self.torque_efficiency


@dataclass(frozen=True, eq=False)
class EfficiencyMap:
    """Массивы формы (len(frac_disp), len(delta_p)); [i, j] <-> (frac_disp[i], delta_p[j])."""

    frac_disp: np.ndarray
    delta_p: np.ndarray
    w: float
    scale: float
    quadrant: np.ndarray
    q_ideal: np.ndarray
    t_ideal: np.ndarray
    q_loss: np.ndarray
    t_loss: np.ndarray
    q_act: np.ndarray
    t_act: np.ndarray
    volumetric_efficiency: np.ndarray
    torque_efficiency: np.ndarray

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.frac_disp.size, self.delta_p.size)

    @property
    def total_efficiency(self) -> np.ndarray:
        return self.volumetric_efficiency * self.torque_efficiency

    def point(self, i: int, j: int) -> EfficiencyGridPoint:
        return EfficiencyGridPoint(
            frac_disp=float(self.frac_disp[i]),
            delta_p=float(self.delta_p[j]),
            quadrant=int(self.quadrant[i, j]),
            q_ideal=float(self.q_ideal[i, j]),
            t_ideal=float(self.t_ideal[i, j]),
            q_loss=float(self.q_loss[i, j]),
            t_loss=float(self.t_loss[i, j]),
            q_act=float(self.q_act[i, j]),
            t_act=float(self.t_act[i, j]),
            volumetric_efficiency=float(self.volumetric_efficiency[i, j]),
            torque_efficiency=float(self.torque_efficiency[i, j]),
        )

    def contour_grids(self, field: str = "total_efficiency") -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """(X, Y, Z) для contour(): X = frac_disp, Y = ΔP в МПа, Z транспонирована."""

        Z = np.asarray(getattr(self, field))
        if Z.shape != self.shape:
            raise ValueError(f"{field} is not a grid field")
        X, Y = np.meshgrid(self.frac_disp, self.delta_p / MPA)
        return X, Y, Z.T


def generate_efficiency_map(
    params: PumpMotorParameters,
    frac_disp=None,
    delta_p=None,
    *,
    w: float | None = None,
) -> EfficiencyMap:
    f_axis = as_series(DEFAULT_FRAC_DISP if frac_disp is None else frac_disp, "frac_disp")
    dp_axis = as_series(DEFAULT_DELTA_P if delta_p is None else delta_p, "delta_p")
    w = float(params.w if w is None else w)

    shape = (f_axis.size, dp_axis.size)
    logger.debug("Efficiency map %dx%d at w=%.2f rad/s, scale=%.4g", shape[0], shape[1], w, params.scale)

    quadrant = np.zeros(shape, dtype=np.int8)
    grids = {
        name: np.zeros(shape, dtype=np.float64)
        for name in (
            "q_ideal",
            "t_ideal",
            "q_loss",
            "t_loss",
            "q_act",
            "t_act",
            "volumetric_efficiency",
            "torque_efficiency",
        )
    }

    for i, f in enumerate(f_axis):
        for j, dp in enumerate(dp_axis):
            op = evaluate_operating_point(f, dp, w, params)
            quadrant[i, j] = op.quadrant
            grids["q_ideal"][i, j] = op.q_ideal
            grids["t_ideal"][i, j] = op.t_ideal
            grids["q_loss"][i, j] = op.q_loss
            grids["t_loss"][i, j] = op.t_loss
            grids["q_act"][i, j] = op.q_act
            grids["t_act"][i, j] = op.t_act
            grids["volumetric_efficiency"][i, j] = ratio_efficiency(op.q_ideal, op.q_act)
            grids["torque_efficiency"][i, j] = ratio_efficiency(op.t_ideal, op.t_act)

    return EfficiencyMap(
        frac_disp=f_axis,
        delta_p=dp_axis,
        w=w,
        scale=params.scale,
        quadrant=quadrant,
        **grids,
    )
