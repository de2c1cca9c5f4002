"""Решение баланса расхода относительно fractional displacement.

Баланс:
    Q_cmd = w*d*S*f - sign(ΔP) * Q_loss(f)

Q_loss содержит слагаемое S*|f*d*w*ΔP/B|, линейное по |f|. При известном знаке f
уравнение линейно, поэтому решение двухветочное:

1. предполагаем f >= 0:  f = N / (w*d*S - sign(ΔP)*K);
2. если получилось f <= 0, пересчитываем при f < 0:  f = N / (w*d*S + sign(ΔP)*K)
   и принимаем результат без повторной проверки.

Здесь K = S*|d*w*ΔP/B|, N = Q_cmd + sign(ΔP)*(laminar + turbulent).
Если вторая ветвь нарушает своё предположение, результат помечается
consistent=False; невязку показывает reconstruct_flow().
"""

from __future__ import annotations

from dataclasses import dataclass
import math

from ehapto.config.models import PumpMotorParameters
from ehapto.core.errors import DomainError
from ehapto.core.types import SolveBranch

from .losses import flow_loss, flow_loss_terms, ideal_flow, sign0
from .quadrant import classify_quadrant


@dataclass(frozen=True, slots=True)
class DisplacementSolution:
    frac_disp: float
    branch: SolveBranch
    # False, если принятое значение противоречит знаку, предположенному ветвью
    consistent: bool

    @property
    def infeasible(self) -> bool:
        """|f| > 1: насос не обеспечивает расход без превышения полного рабочего объёма."""

        return abs(self.frac_disp) > 1.0


def _check_domain(q_cmd: float, delta_p: float, w: float) -> None:
    for name, value in (("q_cmd", q_cmd), ("delta_p", delta_p), ("w", w)):
        if not math.isfinite(value):
            raise DomainError(f"{name} must be finite, got {value}")
    if w == 0.0:
        raise DomainError("shaft speed w must be non-zero to solve for fractional displacement")


def solve_frac_disp(
    q_cmd: float,
    delta_p: float,
    params: PumpMotorParameters,
    *,
    w: float | None = None,
) -> DisplacementSolution:
    """Fractional displacement, обеспечивающий расход q_cmd при перепаде delta_p.

    w по умолчанию берётся из params.
    """

    q = float(q_cmd)
    dp = float(delta_p)
    w = float(params.w if w is None else w)
    _check_domain(q, dp, w)

    s = sign0(dp)
    terms = flow_loss_terms(dp, w, params)
    ideal_gain = w * params.d * params.scale

    numerator = q + s * terms.laminar + s * terms.turbulent

    denominator = ideal_gain - s * terms.compressibility_gain
    if denominator != 0.0:
        f = numerator / denominator
        if f > 0.0:
            return DisplacementSolution(frac_disp=f, branch="assumed_positive", consistent=True)

    denominator = ideal_gain + s * terms.compressibility_gain
    if denominator == 0.0:
        raise DomainError(
            f"degenerate flow balance at delta_p={dp}, w={w}: compressibility term cancels displacement"
        )
    f = numerator / denominator
    return DisplacementSolution(frac_disp=f, branch="fallback_negative", consistent=f <= 0.0)


def reconstruct_flow(
    frac_disp: float,
    delta_p: float,
    w: float,
    params: PumpMotorParameters,
) -> float:
    """Q_act_calc = Q_ideal + sigma_q * Q_loss: расход, восстановленный по решению."""

    signs = classify_quadrant(delta_p, w)
    return ideal_flow(frac_disp, w, params) + signs.sigma_q * flow_loss(frac_disp, delta_p, w, params)
