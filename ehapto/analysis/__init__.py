"""Агрегация по временному ряду и карта КПД."""

from __future__ import annotations

from .aggregator import AggregationResult, SampleAggregator, SolvedSample, SolvedSeries
from .efficiency_map import EfficiencyGridPoint, EfficiencyMap, generate_efficiency_map
from .energy import EnergyAccumulator, EnergySummary

__all__ = [
    "SampleAggregator",
    "AggregationResult",
    "SolvedSample",
    "SolvedSeries",
    "EnergyAccumulator",
    "EnergySummary",
    "EfficiencyGridPoint",
    "EfficiencyMap",
    "generate_efficiency_map",
]
