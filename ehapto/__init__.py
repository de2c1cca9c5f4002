"""ehapto package.

Пакет не должен иметь побочных эффектов при импорте, поэтому здесь нет
eager-import'ов подмодулей.

Импортируй нужное напрямую:
- from ehapto.config import PumpMotorParameters, PTOConfig
- from ehapto.physics.displacement import solve_frac_disp
- from ehapto.analysis.aggregator import SampleAggregator
"""

from __future__ import annotations

__all__: list[str] = []
