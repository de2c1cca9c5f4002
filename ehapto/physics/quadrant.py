"""Классификация рабочего квадранта насоса/мотора.

Квадрант задаётся знаками (ΔP, w); ноль считается неотрицательным.
Для каждого квадранта фиксированы знаки, с которыми потери входят
в действительные расход и момент:

    Q_act = Q_ideal + sigma_q * Q_loss
    T_act = T_ideal + sigma_t * T_loss

| квадрант | ΔP  | w   | sigma_q | sigma_t |
|----------|-----|-----|---------|---------|
| 1        | >=0 | >=0 | -1      | +1      |
| 4        | <0  | >=0 | +1      | +1      |
| 2        | >=0 | <0  | -1      | -1      |
| 3        | <0  | <0  | +1      | -1      |
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from ehapto.core.types import Quadrant


@dataclass(frozen=True, slots=True)
class QuadrantSigns:
    quadrant: Quadrant
    sigma_q: float
    sigma_t: float


_QUADRANTS: Dict[Tuple[bool, bool], QuadrantSigns] = {
    (True, True): QuadrantSigns(quadrant=1, sigma_q=-1.0, sigma_t=1.0),
    (False, True): QuadrantSigns(quadrant=4, sigma_q=1.0, sigma_t=1.0),
    (True, False): QuadrantSigns(quadrant=2, sigma_q=-1.0, sigma_t=-1.0),
    (False, False): QuadrantSigns(quadrant=3, sigma_q=1.0, sigma_t=-1.0),
}


def classify_quadrant(delta_p: float, w: float) -> QuadrantSigns:
    return _QUADRANTS[(float(delta_p) >= 0.0, float(w) >= 0.0)]


def combine(
    q_ideal: float,
    t_ideal: float,
    q_loss: float,
    t_loss: float,
    signs: QuadrantSigns,
) -> Tuple[float, float]:
    """Действительные (Q_act, T_act) из идеальных величин и модулей потерь."""

    q_act = float(q_ideal) + signs.sigma_q * float(q_loss)
    t_act = float(t_ideal) + signs.sigma_t * float(t_loss)
    return q_act, t_act
