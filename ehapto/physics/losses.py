"""Модель потерь аксиально-поршневого насоса/мотора.

Все функции чистые: зависят только от (frac_disp, ΔP, w) и неизменяемых
параметров. Одни и те же функции используются и в покомпонентном расчёте
временного ряда, и в карте КПД.

    Q_loss = S*|d*Cs*ΔP/mu| + S*|f*d*w*ΔP/B| + S*|d^(2/3)*Cst*sqrt(2|ΔP|/rho)|
    T_loss = S*(|d*Cv*mu*w| + |d*ΔP*Cf| + |f*Ch*w²*rho*d^(5/3)/2|)
    Q_ideal = f*d*w*S,  T_ideal = ΔP*d*f*S

Модули гарантируют неотрицательность потерь при любых знаках входов.
"""

from __future__ import annotations

from dataclasses import dataclass
import math

from ehapto.config.models import PumpMotorParameters
from ehapto.core.types import Quadrant

from .quadrant import classify_quadrant, combine


def sign0(x: float) -> float:
    return 1.0 if x > 0 else (-1.0 if x < 0 else 0.0)


@dataclass(frozen=True, slots=True)
class FlowLossTerms:
    """Слагаемые утечки при фиксированных (ΔP, w).

    compressibility_gain умножается на |frac_disp|; остальные от него не зависят.
    Решатель строит числитель и знаменатель из этих же слагаемых.
    """

    laminar: float
    compressibility_gain: float
    turbulent: float

    def total(self, frac_disp: float) -> float:
        return self.laminar + abs(float(frac_disp)) * self.compressibility_gain + self.turbulent


def flow_loss_terms(delta_p: float, w: float, params: PumpMotorParameters) -> FlowLossTerms:
    dp = float(delta_p)
    w = float(w)
    S = params.scale
    d = params.d
    fl = params.fluid
    c = params.losses

    laminar = S * abs(d * c.Cs * dp / fl.mu)
    compressibility_gain = S * abs(d * w * dp / fl.bulk_modulus)
    turbulent = S * abs(d ** (2.0 / 3.0) * c.Cst * math.sqrt(2.0 * abs(dp) / fl.rho))
    return FlowLossTerms(
        laminar=laminar,
        compressibility_gain=compressibility_gain,
        turbulent=turbulent,
    )


def flow_loss(frac_disp: float, delta_p: float, w: float, params: PumpMotorParameters) -> float:
    """Модуль потерь расхода Q_loss (м³/с)."""

    return flow_loss_terms(delta_p, w, params).total(frac_disp)


def torque_loss(frac_disp: float, delta_p: float, w: float, params: PumpMotorParameters) -> float:
    """Модуль потерь момента T_loss (Н·м)."""

    f = float(frac_disp)
    dp = float(delta_p)
    w = float(w)
    d = params.d
    fl = params.fluid
    c = params.losses

    viscous = abs(d * c.Cv * fl.mu * w)
    friction = abs(d * dp * c.Cf)
    churning = abs(f * c.Ch * w**2 * fl.rho * d ** (5.0 / 3.0) / 2.0)
    return params.scale * (viscous + friction + churning)


def ideal_flow(frac_disp: float, w: float, params: PumpMotorParameters) -> float:
    return float(frac_disp) * params.d * float(w) * params.scale


def ideal_torque(frac_disp: float, delta_p: float, params: PumpMotorParameters) -> float:
    return float(delta_p) * params.d * float(frac_disp) * params.scale


@dataclass(frozen=True, slots=True)
class OperatingPoint:
    frac_disp: float
    delta_p: float
    w: float
    quadrant: Quadrant
    q_ideal: float
    t_ideal: float
    q_loss: float
    t_loss: float
    q_act: float
    t_act: float


def evaluate_operating_point(
    frac_disp: float,
    delta_p: float,
    w: float,
    params: PumpMotorParameters,
) -> OperatingPoint:
    """Квадрант, потери и действительные расход/момент в одной рабочей точке."""

    signs = classify_quadrant(delta_p, w)
    q_ideal = ideal_flow(frac_disp, w, params)
    t_ideal = ideal_torque(frac_disp, delta_p, params)
    q_loss = flow_loss(frac_disp, delta_p, w, params)
    t_loss = torque_loss(frac_disp, delta_p, w, params)
    q_act, t_act = combine(q_ideal, t_ideal, q_loss, t_loss, signs)
    return OperatingPoint(
        frac_disp=float(frac_disp),
        delta_p=float(delta_p),
        w=float(w),
        quadrant=signs.quadrant,
        q_ideal=q_ideal,
        t_ideal=t_ideal,
        q_loss=q_loss,
        t_loss=t_loss,
        q_act=q_act,
        t_act=t_act,
    )
