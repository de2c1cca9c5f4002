"""ehapto.core.units

Минимальный слой единиц измерения и удобных множителей.

Принцип: везде, где есть числа, должна быть явная единица (например, 35 * MPA).
"""

from __future__ import annotations

import math

# Base units (conceptual SI multipliers)
METER: float = 1.0
KILOGRAM: float = 1.0
SECOND: float = 1.0

# Derived units
NEWTON: float = KILOGRAM * METER / (SECOND**2)
PASCAL: float = NEWTON / (METER**2)
WATT: float = NEWTON * METER / SECOND

# Convenience multipliers
BAR: float = 1e5 * PASCAL
MPA: float = 1e6 * PASCAL
KW: float = 1e3 * WATT
CC: float = 1e-6 * (METER**3)

RPM_TO_RAD_S: float = 2.0 * math.pi / 60.0  # rpm -> rad/s


def cc_rev_to_m3_rad(displacement_cc_rev: float) -> float:
    """cc/rev -> m^3/rad."""

    return float(displacement_cc_rev) * CC / (2.0 * math.pi)


def m3_rad_to_cc_rev(displacement_m3_rad: float) -> float:
    """m^3/rad -> cc/rev."""

    return float(displacement_m3_rad) * (2.0 * math.pi) / CC


def rpm_to_rad_s(rpm: float) -> float:
    return float(rpm) * RPM_TO_RAD_S


def rad_s_to_rpm(w: float) -> float:
    return float(w) / RPM_TO_RAD_S


# Reference unit of the published loss coefficients (axial piston, 107 cc/rev)
REFERENCE_DISPLACEMENT_CC_REV: float = 107.0
