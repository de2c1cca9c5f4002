"""Конфиги EHA PTO.

Параметры насоса/мотора, жидкости, привода и анализа лежат в
`ehapto.config.models`; загрузка из JSON в `ehapto.config.loader`.
"""

from __future__ import annotations

from .loader import config_from_mapping, load_config
from .models import (
    DEFAULT_PTO_CONFIG,
    MANUFACTURER_107CC,
    UW_MADISON_107CC,
    ActuatorConfig,
    AnalysisConfig,
    FluidConfig,
    LossCoefficients,
    PTOConfig,
    PumpMotorParameters,
    WaveConfig,
    efficiency_map_parameters,
)

__all__ = [
    "FluidConfig",
    "LossCoefficients",
    "PumpMotorParameters",
    "ActuatorConfig",
    "WaveConfig",
    "AnalysisConfig",
    "PTOConfig",
    "MANUFACTURER_107CC",
    "UW_MADISON_107CC",
    "DEFAULT_PTO_CONFIG",
    "efficiency_map_parameters",
    "config_from_mapping",
    "load_config",
]
