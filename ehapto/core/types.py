"""ehapto.core.types

Общие типы: метки квадрантов и ветвей решения.
"""

from __future__ import annotations

from typing import Literal

Quadrant = Literal[1, 2, 3, 4]

# Which algebraic branch of the displacement solve produced the value.
SolveBranch = Literal["assumed_positive", "fallback_negative"]

IntegrationRule = Literal["rectangle", "trapezoid"]
