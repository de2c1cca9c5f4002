"""Оценки размеров насоса и генератора по результатам прогона."""

from __future__ import annotations

import numpy as np

from ehapto.config.models import PumpMotorParameters
from ehapto.core.units import KW, REFERENCE_DISPLACEMENT_CC_REV
from ehapto.core.validation import as_series, ensure_positive


def scale_for_peak_flow(q_cmd, w: float, d: float) -> float:
    """Масштаб, при котором пиковый расход достигается при |frac_disp| = 1 без учёта потерь.

    Scale = max|Q| / (|w| * d)
    """

    q = as_series(q_cmd, "q_cmd")
    ensure_positive(abs(w), "|w|")
    ensure_positive(d, "d")
    return float(np.max(np.abs(q))) / (abs(float(w)) * float(d))


def scale_for_displacement(
    target_cc_rev: float,
    reference_cc_rev: float = REFERENCE_DISPLACEMENT_CC_REV,
) -> float:
    """Масштаб эталонной машины до заданного рабочего объёма (например, 3000 cc / 107 cc)."""

    ensure_positive(target_cc_rev, "target_cc_rev")
    ensure_positive(reference_cc_rev, "reference_cc_rev")
    return float(target_cc_rev) / float(reference_cc_rev)


def generator_rating_kw(p_out, p_shaft) -> float:
    """Номинал генератора: max(max|p_out|, max|w*T_act|), кВт."""

    p_out = as_series(p_out, "p_out")
    p_shaft = as_series(p_shaft, "p_shaft")
    return max(float(np.max(np.abs(p_out))), float(np.max(np.abs(p_shaft)))) / KW


def pump_size_cc(params: PumpMotorParameters) -> float:
    return params.scaled_displacement_cc_rev
