"""Энергетический баланс по временному ряду.

Накопитель `EnergyAccumulator` неизменяемый: каждый отсчёт даёт новый
накопитель, поэтому интегрирование записывается как свёртка

    acc = functools.reduce(lambda a, s: a.add(s.time, s.p_in, s.p_out), samples, start)

Соглашение о знаках (как в симуляторе PTO): снятая с волны мощность даёт
отрицательные p_in и p_out. Разложение по знаку:

    a = -p_in, b = -p_out
    hydraulic_in  = max(a, 0)     hydraulic_out  = max(-a, 0)
    mechanical_in = max(-b, 0)    mechanical_out = max(b, 0)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

import numpy as np
from scipy.integrate import cumulative_trapezoid

from ehapto.core.types import IntegrationRule


def split_power(p_in, p_out):
    """(hydraulic_in, hydraulic_out, mechanical_in, mechanical_out); скаляры или массивы."""

    a = -np.asarray(p_in, dtype=np.float64)
    b = -np.asarray(p_out, dtype=np.float64)
    return (
        np.maximum(a, 0.0),
        np.maximum(-a, 0.0),
        np.maximum(-b, 0.0),
        np.maximum(b, 0.0),
    )


def split_efficiency(hydraulic_in, hydraulic_out, mechanical_in, mechanical_out):
    """(mechanical_out - hydraulic_out) / (hydraulic_in - mechanical_in); NaN при нулевом знаменателе."""

    num = np.asarray(mechanical_out, dtype=np.float64) - np.asarray(hydraulic_out, dtype=np.float64)
    den = np.asarray(hydraulic_in, dtype=np.float64) - np.asarray(mechanical_in, dtype=np.float64)
    out = np.full(np.broadcast(num, den).shape, np.nan)
    np.divide(num, den, out=out, where=den != 0.0)
    return out


def _as_powers(p_in: float, p_out: float) -> Tuple[float, ...]:
    h_in, h_out, m_in, m_out = split_power(p_in, p_out)
    return (float(p_in), float(p_out), float(h_in), float(h_out), float(m_in), float(m_out))


def _add(a: Tuple[float, ...], b: Tuple[float, ...]) -> Tuple[float, ...]:
    return tuple(x + y for x, y in zip(a, b))


_ZERO: Tuple[float, ...] = (0.0,) * 6


@dataclass(frozen=True, slots=True)
class EnergyAccumulator:
    """Бегущие интегралы мощности.

    Порядок величин в кортежах: (p_in, p_out, hydraulic_in, hydraulic_out,
    mechanical_in, mechanical_out).

    rectangle: вклад отсчёта i равен P_i*(t_i - t_{i-1}), для первого
    отсчёта используется initial_step (на равномерной сетке это sum(P)*dt).
    trapezoid: вклад шага равен (P_{i-1} + P_i)/2*(t_i - t_{i-1}).

    pre_window копит вклады отсчётов с t <= window_start.
    """

    rule: IntegrationRule
    window_start: float
    initial_step: float
    totals: Tuple[float, ...] = _ZERO
    pre_window: Tuple[float, ...] = _ZERO
    prev_time: Optional[float] = None
    prev_powers: Tuple[float, ...] = _ZERO
    count: int = 0

    @classmethod
    def start(cls, rule: IntegrationRule, window_start: float, initial_step: float) -> "EnergyAccumulator":
        return cls(rule=rule, window_start=float(window_start), initial_step=float(initial_step))

    def add(self, time: float, p_in: float, p_out: float) -> "EnergyAccumulator":
        t = float(time)
        powers = _as_powers(p_in, p_out)

        if self.prev_time is None:
            dt = self.initial_step
        else:
            dt = t - self.prev_time
            if dt <= 0.0:
                raise ValueError(f"time must be strictly increasing: {self.prev_time} -> {t}")

        if self.rule == "rectangle":
            contrib = tuple(p * dt for p in powers)
        elif self.prev_time is None:
            contrib = _ZERO
        else:
            contrib = tuple(0.5 * (p0 + p1) * dt for p0, p1 in zip(self.prev_powers, powers))

        pre_window = self.pre_window
        if t <= self.window_start:
            pre_window = _add(pre_window, contrib)

        return replace(
            self,
            totals=_add(self.totals, contrib),
            pre_window=pre_window,
            prev_time=t,
            prev_powers=powers,
            count=self.count + 1,
        )

    @property
    def work_in(self) -> float:
        return self.totals[0]

    @property
    def work_out(self) -> float:
        return self.totals[1]

    @property
    def window_work_in(self) -> float:
        return self.totals[0] - self.pre_window[0]

    @property
    def window_work_out(self) -> float:
        return self.totals[1] - self.pre_window[1]

    @property
    def hydraulic_in(self) -> float:
        return self.totals[2]

    @property
    def hydraulic_out(self) -> float:
        return self.totals[3]

    @property
    def mechanical_in(self) -> float:
        return self.totals[4]

    @property
    def mechanical_out(self) -> float:
        return self.totals[5]


def step_sizes(time: np.ndarray) -> np.ndarray:
    """Δt_i = t_i - t_{i-1}, Δt_0 = t_1 - t_0."""

    dt = np.diff(time)
    return np.concatenate(([dt[0]], dt))


def cumulative_work(power: np.ndarray, time: np.ndarray, rule: IntegrationRule) -> np.ndarray:
    """Накопленная работа -∫P dt (положительна при отборе энергии)."""

    power = np.asarray(power, dtype=np.float64)
    time = np.asarray(time, dtype=np.float64)
    if rule == "rectangle":
        return -np.cumsum(power * step_sizes(time))
    return -cumulative_trapezoid(power, time, initial=0.0)


def ratio(num: float, den: float) -> float:
    return float(num) / float(den) if den != 0.0 else float("nan")


@dataclass(frozen=True)
class EnergySummary:
    """Скалярные метрики прогона.

    work_in, work_out: интегралы p_in, p_out (знак симулятора, Дж).
    average_power_*: снятая/отданная мощность на окне [window_start_s, window_end_s],
    положительна при отборе энергии (Вт).
    capture_width_*: average_power / мощность волны на метр фронта (м);
    capture_width_ratio_*: capture_width / ширина устройства.
    """

    n_samples: int
    work_in: float
    work_out: float
    net_efficiency: float
    window_start_s: float
    window_end_s: float
    average_power_in: float
    average_power_out: float
    capture_width_in: Optional[float]
    capture_width_out: Optional[float]
    capture_width_ratio_in: Optional[float]
    capture_width_ratio_out: Optional[float]
    hydraulic_in: float
    hydraulic_out: float
    mechanical_in: float
    mechanical_out: float
    average_split_efficiency: float
    positive_power_fraction: float
    peak_power_in: float
    peak_power_out: float
    generator_rating_kw: float
    pump_size_cc: float
    infeasible_count: int
    residual_mismatch_count: int
