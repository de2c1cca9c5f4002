"""Физика насоса/мотора: квадранты, потери, решение для fractional displacement."""

from __future__ import annotations

from .displacement import DisplacementSolution, reconstruct_flow, solve_frac_disp
from .losses import OperatingPoint, evaluate_operating_point, flow_loss, torque_loss
from .quadrant import QuadrantSigns, classify_quadrant

__all__ = [
    "QuadrantSigns",
    "classify_quadrant",
    "OperatingPoint",
    "evaluate_operating_point",
    "flow_loss",
    "torque_loss",
    "DisplacementSolution",
    "solve_frac_disp",
    "reconstruct_flow",
]
