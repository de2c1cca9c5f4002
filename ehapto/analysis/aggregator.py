"""Покомпонентный расчёт EHA по временному ряду (force, velocity, time).

Для каждого отсчёта:
- Q_cmd = v*A_rod, ΔP = F/A_rod;
- квадрант -> fractional displacement -> потери -> Q_act_calc, T_act;
- мощность на валу w*T_act и разделение через КПД генератора;
- p_in = F*v, p_leak = |ΔP*Q_loss|, p_mech = w*T_loss.

После прохода энергия интегрируется свёрткой EnergyAccumulator и
собирается EnergySummary.

Каждый отсчёт считается независимо от остальных (`solve_sample` чистая
функция); последовательна только свёртка энергии.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from functools import reduce
from typing import Iterable, Iterator, List, Sequence
import logging

import numpy as np
import pandas as pd

from ehapto.config.models import PTOConfig
from ehapto.core.errors import InfeasibleDisplacementError, ResidualMismatchError
from ehapto.core.types import Quadrant, SolveBranch
from ehapto.core.validation import as_series, ensure_strictly_increasing
from ehapto.physics.displacement import solve_frac_disp
from ehapto.physics.losses import evaluate_operating_point
from ehapto.sizing import generator_rating_kw, pump_size_cc

from .energy import (
    EnergyAccumulator,
    EnergySummary,
    cumulative_work,
    ratio,
    split_efficiency,
    split_power,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Sample:
    time: float
    force: float
    velocity: float


@dataclass(frozen=True, slots=True)
class SolvedSample:
    time: float
    force: float
    velocity: float
    q_cmd: float
    delta_p: float
    frac_disp: float
    quadrant: Quadrant
    branch: SolveBranch
    q_loss: float
    t_loss: float
    q_ideal: float
    t_ideal: float
    q_act_calc: float
    residual: float
    t_act: float
    p_shaft: float
    p_out: float
    p_in: float
    p_leak: float
    p_mech: float
    p_electrical_loss: float
    infeasible: bool
    residual_mismatch: bool


def electrical_split(p_shaft: float, generator_efficiency: float) -> tuple[float, float]:
    """(p_out, p_electrical_loss) по мощности на валу.

    p_shaft < 0 (генерация): p_out = eta*p_shaft, потеря = -(1 - eta)*p_shaft.
    Иначе (двигательный режим): p_out = p_shaft/eta, потеря = (1/eta - 1)*p_shaft,
    т.е. энергия, которую генератор должен отдать в систему.
    """

    eta = float(generator_efficiency)
    if p_shaft < 0.0:
        return eta * p_shaft, -(1.0 - eta) * p_shaft
    return p_shaft / eta, (1.0 / eta - 1.0) * p_shaft


def solve_sample(sample: Sample, cfg: PTOConfig) -> SolvedSample:
    pump = cfg.pump
    analysis = cfg.analysis

    q_cmd = cfg.actuator.commanded_flow(sample.velocity)
    delta_p = cfg.actuator.pressure_differential(sample.force)

    solution = solve_frac_disp(q_cmd, delta_p, pump)
    op = evaluate_operating_point(solution.frac_disp, delta_p, pump.w, pump)

    residual = op.q_act - q_cmd
    tol = analysis.residual_rtol * max(abs(q_cmd), abs(op.q_ideal), op.q_loss) + analysis.residual_atol
    mismatch = (not solution.consistent) or abs(residual) > tol

    p_shaft = pump.w * op.t_act
    p_out, p_electrical_loss = electrical_split(p_shaft, analysis.generator_efficiency)

    return SolvedSample(
        time=float(sample.time),
        force=float(sample.force),
        velocity=float(sample.velocity),
        q_cmd=q_cmd,
        delta_p=delta_p,
        frac_disp=solution.frac_disp,
        quadrant=op.quadrant,
        branch=solution.branch,
        q_loss=op.q_loss,
        t_loss=op.t_loss,
        q_ideal=op.q_ideal,
        t_ideal=op.t_ideal,
        q_act_calc=op.q_act,
        residual=residual,
        t_act=op.t_act,
        p_shaft=p_shaft,
        p_out=p_out,
        p_in=float(sample.force) * float(sample.velocity),
        p_leak=abs(delta_p * op.q_loss),
        p_mech=pump.w * op.t_loss,
        p_electrical_loss=p_electrical_loss,
        infeasible=solution.infeasible,
        residual_mismatch=mismatch,
    )


class SolvedSeries(Sequence[SolvedSample]):
    """Упорядоченная по времени последовательность SolvedSample."""

    def __init__(self, samples: Iterable[SolvedSample]) -> None:
        self._samples: tuple[SolvedSample, ...] = tuple(samples)

    def __len__(self) -> int:
        return len(self._samples)

    def __getitem__(self, idx):
        return self._samples[idx]

    def __iter__(self) -> Iterator[SolvedSample]:
        return iter(self._samples)

    def column(self, name: str) -> np.ndarray:
        if name not in _COLUMNS:
            raise KeyError(f"Unknown SolvedSample field: {name}")
        return np.array([getattr(s, name) for s in self._samples])

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({name: self.column(name) for name in _COLUMNS})

    def __repr__(self) -> str:
        return f"SolvedSeries(n={len(self)})"


_COLUMNS: tuple[str, ...] = tuple(f.name for f in fields(SolvedSample))


@dataclass(frozen=True)
class AggregationResult:
    series: SolvedSeries
    summary: EnergySummary
    instantaneous_efficiency: np.ndarray
    cumulative_work_in: np.ndarray
    cumulative_work_out: np.ndarray

    @property
    def time(self) -> np.ndarray:
        return self.series.column("time")


class SampleAggregator:
    """Прогон EHA-модели по временному ряду и сбор метрик энергии/КПД."""

    def __init__(self, cfg: PTOConfig | None = None) -> None:
        self.cfg = cfg or PTOConfig()

    def build_samples(self, time, force, velocity) -> List[Sample]:
        t = as_series(time, "time")
        F = as_series(force, "force")
        v = as_series(velocity, "velocity")
        if not (t.shape == F.shape == v.shape):
            raise ValueError(
                f"time, force and velocity must have equal length; got {t.size}, {F.size}, {v.size}"
            )
        if t.size < 2:
            raise ValueError("at least two samples are required to integrate energy")
        ensure_strictly_increasing(t, "time")
        return [Sample(time=float(a), force=float(b), velocity=float(c)) for a, b, c in zip(t, F, v)]

    def solve(self, samples: Iterable[Sample]) -> SolvedSeries:
        strict = self.cfg.analysis.strict
        solved: List[SolvedSample] = []
        for sample in samples:
            s = solve_sample(sample, self.cfg)
            if strict and s.infeasible:
                raise InfeasibleDisplacementError(s.frac_disp, time=s.time)
            if strict and s.residual_mismatch:
                raise ResidualMismatchError(s.q_cmd, s.q_act_calc, time=s.time)
            solved.append(s)
        return SolvedSeries(solved)

    def _window_start(self, t0: float, t_end: float) -> float:
        start = self.cfg.analysis.window_start_s
        start = t0 if start is None else float(start)
        if not (t0 <= start < t_end):
            raise ValueError(f"window_start_s must be in [{t0}, {t_end}), got {start}")
        return start

    def summarize(self, series: SolvedSeries) -> EnergySummary:
        if len(series) < 2:
            raise ValueError("at least two solved samples are required to integrate energy")

        time = series.column("time")
        p_in = series.column("p_in")
        p_out = series.column("p_out")
        t0, t_end = float(time[0]), float(time[-1])
        window_start = self._window_start(t0, t_end)

        start = EnergyAccumulator.start(
            rule=self.cfg.analysis.integration,
            window_start=window_start,
            initial_step=float(time[1] - time[0]),
        )
        acc = reduce(lambda a, s: a.add(s.time, s.p_in, s.p_out), series, start)

        window = t_end - window_start
        average_power_in = -acc.window_work_in / window
        average_power_out = -acc.window_work_out / window

        wave = self.cfg.wave
        if wave is None:
            cw_in = cw_out = cwr_in = cwr_out = None
        else:
            cw_in = average_power_in / wave.wave_power_w_per_m
            cw_out = average_power_out / wave.wave_power_w_per_m
            cwr_in = cw_in / wave.device_width_m
            cwr_out = cw_out / wave.device_width_m

        infeasible_count = int(sum(s.infeasible for s in series))
        mismatch_count = int(sum(s.residual_mismatch for s in series))
        if infeasible_count:
            logger.warning(
                "%d of %d samples need |frac_disp| > 1 (max %.3f); pump/motor is undersized at scale %.4g",
                infeasible_count,
                len(series),
                float(np.max(np.abs(series.column("frac_disp")))),
                self.cfg.pump.scale,
            )
        if mismatch_count:
            logger.warning(
                "%d of %d samples failed the flow reconstruction check", mismatch_count, len(series)
            )

        return EnergySummary(
            n_samples=len(series),
            work_in=acc.work_in,
            work_out=acc.work_out,
            net_efficiency=ratio(acc.work_out, acc.work_in),
            window_start_s=window_start,
            window_end_s=t_end,
            average_power_in=average_power_in,
            average_power_out=average_power_out,
            capture_width_in=cw_in,
            capture_width_out=cw_out,
            capture_width_ratio_in=cwr_in,
            capture_width_ratio_out=cwr_out,
            hydraulic_in=acc.hydraulic_in,
            hydraulic_out=acc.hydraulic_out,
            mechanical_in=acc.mechanical_in,
            mechanical_out=acc.mechanical_out,
            average_split_efficiency=float(
                split_efficiency(acc.hydraulic_in, acc.hydraulic_out, acc.mechanical_in, acc.mechanical_out)
            ),
            positive_power_fraction=ratio(acc.hydraulic_in, acc.hydraulic_in + acc.hydraulic_out),
            peak_power_in=float(np.max(-p_in)),
            peak_power_out=float(np.max(-p_out)),
            generator_rating_kw=generator_rating_kw(p_out, series.column("p_shaft")),
            pump_size_cc=pump_size_cc(self.cfg.pump),
            infeasible_count=infeasible_count,
            residual_mismatch_count=mismatch_count,
        )

    def run(self, time, force, velocity) -> AggregationResult:
        samples = self.build_samples(time, force, velocity)
        logger.debug(
            "Solving %d samples: w=%.2f rad/s, scale=%.4g, rule=%s",
            len(samples),
            self.cfg.pump.w,
            self.cfg.pump.scale,
            self.cfg.analysis.integration,
        )
        series = self.solve(samples)
        summary = self.summarize(series)

        t = series.column("time")
        p_in = series.column("p_in")
        p_out = series.column("p_out")
        rule = self.cfg.analysis.integration
        return AggregationResult(
            series=series,
            summary=summary,
            instantaneous_efficiency=split_efficiency(*split_power(p_in, p_out)),
            cumulative_work_in=cumulative_work(p_in, t, rule),
            cumulative_work_out=cumulative_work(p_out, t, rule),
        )

    def __repr__(self) -> str:
        return f"SampleAggregator(scale={self.cfg.pump.scale}, w={self.cfg.pump.w})"
