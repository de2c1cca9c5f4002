"""Загрузка PTOConfig из JSON.

Формат: вложенные объекты с именами полей dataclass'ов, например

    {
      "pump": {"scale": 28.0, "w": 209.44, "losses": {"Cst": 0.0}},
      "actuator": {"rod_area_m2": 0.26},
      "wave": {"wave_power_w_per_m": 52000.0},
      "analysis": {"window_start_s": 50.0}
    }

Отсутствующие поля берут значения по умолчанию; неизвестные ключи -> ValueError.
"""

from __future__ import annotations

from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Mapping
import json

from .models import (
    ActuatorConfig,
    AnalysisConfig,
    FluidConfig,
    LossCoefficients,
    PTOConfig,
    PumpMotorParameters,
    WaveConfig,
)


def _check_keys(cls: type, data: Mapping[str, Any], where: str) -> None:
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown keys in {where}: {sorted(unknown)}")


def _build(cls: type, data: Mapping[str, Any] | None, where: str) -> Any:
    data = dict(data or {})
    _check_keys(cls, data, where)
    return cls(**data)


def pump_from_mapping(data: Mapping[str, Any] | None) -> PumpMotorParameters:
    data = dict(data or {})
    _check_keys(PumpMotorParameters, data, "pump")
    fluid = _build(FluidConfig, data.pop("fluid", None), "pump.fluid")
    losses = _build(LossCoefficients, data.pop("losses", None), "pump.losses")
    return PumpMotorParameters(fluid=fluid, losses=losses, **data)


def config_from_mapping(data: Mapping[str, Any]) -> PTOConfig:
    _check_keys(PTOConfig, data, "config")
    wave_data = data.get("wave")
    return PTOConfig(
        pump=pump_from_mapping(data.get("pump")),
        actuator=_build(ActuatorConfig, data.get("actuator"), "actuator"),
        wave=None if wave_data is None else _build(WaveConfig, wave_data, "wave"),
        analysis=_build(AnalysisConfig, data.get("analysis"), "analysis"),
    )


def load_config(path: str | Path) -> PTOConfig:
    raw: Dict[str, Any] = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: top-level JSON value must be an object")
    return config_from_mapping(raw)
