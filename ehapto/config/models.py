"""Конфиги EHA PTO: жидкость, коэффициенты потерь, насос/мотор, привод, волна.

Все конфиги неизменяемые (frozen) и проверяют инварианты в __post_init__.

Единицы:
- давление: Па; расход: м³/с; рабочий объём: м³/рад;
- скорость вала: рад/с; мощность: Вт; время: с.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ehapto.core.types import IntegrationRule
from ehapto.core.units import (
    REFERENCE_DISPLACEMENT_CC_REV,
    cc_rev_to_m3_rad,
    m3_rad_to_cc_rev,
    rad_s_to_rpm,
    rpm_to_rad_s,
)
from ehapto.core.validation import ensure_finite, ensure_in_range, ensure_non_negative, ensure_positive


@dataclass(frozen=True)
class FluidConfig:
    mu: float = 32e-6 * 870.0       # Pa*s (32 cSt при 870 кг/м³)
    bulk_modulus: float = 1.7e9     # Pa; math.inf = несжимаемая жидкость
    rho: float = 870.0              # kg/m^3

    def __post_init__(self) -> None:
        ensure_positive(self.mu, "mu")
        ensure_positive(self.bulk_modulus, "bulk_modulus")
        ensure_positive(self.rho, "rho")


@dataclass(frozen=True)
class LossCoefficients:
    """Коэффициенты модели потерь аксиально-поршневой машины.

    Cf, Ch, Cv: момент (трение, гидродинамические потери, вязкое трение);
    Cs, Cst: расход (ламинарная и турбулентная утечка).
    """

    Cf: float = 53.7e-3
    Ch: float = 53.6
    Cv: float = 23.5e3
    Cs: float = 4.26e-9
    Cst: float = 0.0

    def __post_init__(self) -> None:
        for name in ("Cf", "Ch", "Cv", "Cs", "Cst"):
            ensure_non_negative(getattr(self, name), name)

    @classmethod
    def lossless(cls) -> "LossCoefficients":
        return cls(Cf=0.0, Ch=0.0, Cv=0.0, Cs=0.0, Cst=0.0)


# Variable displacement axial piston, 107 cc/rev (Pourmovahed et al. 1992b)
MANUFACTURER_107CC = LossCoefficients(Cf=53.7e-3, Ch=53.6, Cv=23.5e3, Cs=4.26e-9, Cst=0.0)
UW_MADISON_107CC = LossCoefficients(Cf=4.8e-3, Ch=0.0, Cv=153e3, Cs=1.04e-9, Cst=1.20e-5)


@dataclass(frozen=True)
class PumpMotorParameters:
    """Неизменяемый набор параметров насоса/мотора для одной оценки.

    d:
        Рабочий объём на единицу fractional displacement (м³/рад).
    scale:
        Безразмерный множитель размера относительно эталонной машины.
        Все потери масштабируются линейно.
    w:
        Угловая скорость вала (рад/с), постоянна в пределах оценки.
        w == 0 допустим здесь (карта КПД), но запрещён в решателе.
    """

    d: float = cc_rev_to_m3_rad(REFERENCE_DISPLACEMENT_CC_REV)
    scale: float = 1.0
    w: float = rpm_to_rad_s(2000.0)
    fluid: FluidConfig = field(default_factory=FluidConfig)
    losses: LossCoefficients = field(default_factory=LossCoefficients)

    def __post_init__(self) -> None:
        ensure_positive(self.d, "d")
        ensure_positive(self.scale, "scale")
        ensure_finite(self.w, "w")

    @classmethod
    def from_cc_rev(
        cls,
        displacement_cc_rev: float = REFERENCE_DISPLACEMENT_CC_REV,
        speed_rpm: float = 2000.0,
        *,
        scale: float = 1.0,
        fluid: FluidConfig | None = None,
        losses: LossCoefficients | None = None,
    ) -> "PumpMotorParameters":
        return cls(
            d=cc_rev_to_m3_rad(displacement_cc_rev),
            scale=float(scale),
            w=rpm_to_rad_s(speed_rpm),
            fluid=fluid or FluidConfig(),
            losses=losses or LossCoefficients(),
        )

    @property
    def displacement_cc_rev(self) -> float:
        return m3_rad_to_cc_rev(self.d)

    @property
    def scaled_displacement_cc_rev(self) -> float:
        """Размер насоса D*Scale (cc/rev)."""

        return self.displacement_cc_rev * self.scale

    @property
    def speed_rpm(self) -> float:
        return rad_s_to_rpm(self.w)


def _default_cap_area() -> float:
    # Параметры исходной модели OSWEC: (50 * 0.025)^2 / 4
    return (50 * 0.025) ** 2 / 4


@dataclass(frozen=True)
class ActuatorConfig:
    """Параметры гидроцилиндра (привод между поплавком и насосом).

    В ядро входит только rod_area_m2: Q = v*A_rod, ΔP = F/A_rod.
    Остальное переносится для вызывающего кода.
    """

    cap_area_m2: float = _default_cap_area()
    rod_area_m2: float = _default_cap_area() / 1.5
    cylinder_stroke_m: Optional[float] = None
    beta: float = 1.8e9
    valve_constant: float = 1e-3
    hose_volume_m3: float = _default_cap_area() * 5
    max_motor_speed_rpm: Optional[float] = None

    def __post_init__(self) -> None:
        ensure_positive(self.cap_area_m2, "cap_area_m2")
        ensure_positive(self.rod_area_m2, "rod_area_m2")
        ensure_positive(self.beta, "beta")
        ensure_non_negative(self.valve_constant, "valve_constant")
        ensure_non_negative(self.hose_volume_m3, "hose_volume_m3")
        if self.cylinder_stroke_m is not None:
            ensure_positive(self.cylinder_stroke_m, "cylinder_stroke_m")
        if self.max_motor_speed_rpm is not None:
            ensure_positive(self.max_motor_speed_rpm, "max_motor_speed_rpm")

    def commanded_flow(self, velocity: float) -> float:
        return float(velocity) * self.rod_area_m2

    def pressure_differential(self, force: float) -> float:
        return float(force) / self.rod_area_m2


@dataclass(frozen=True)
class WaveConfig:
    wave_power_w_per_m: float       # W/m, из внешнего волнового модуля
    device_width_m: float = 18.0    # ширина OSWEC

    def __post_init__(self) -> None:
        ensure_positive(self.wave_power_w_per_m, "wave_power_w_per_m")
        ensure_positive(self.device_width_m, "device_width_m")


@dataclass(frozen=True)
class AnalysisConfig:
    generator_efficiency: float = 0.9
    integration: IntegrationRule = "rectangle"
    # Начало окна усреднения (абсолютное время, с); None -> первый отсчёт.
    window_start_s: Optional[float] = None
    residual_rtol: float = 1e-9
    residual_atol: float = 1e-15    # m^3/s
    strict: bool = False

    def __post_init__(self) -> None:
        ensure_positive(self.generator_efficiency, "generator_efficiency")
        ensure_in_range(self.generator_efficiency, 0.0, 1.0, "generator_efficiency")
        if self.integration not in ("rectangle", "trapezoid"):
            raise ValueError(f"Unknown integration rule: {self.integration}")
        ensure_non_negative(self.residual_rtol, "residual_rtol")
        ensure_non_negative(self.residual_atol, "residual_atol")
        if self.window_start_s is not None:
            ensure_finite(self.window_start_s, "window_start_s")


@dataclass(frozen=True)
class PTOConfig:
    pump: PumpMotorParameters = field(default_factory=PumpMotorParameters)
    actuator: ActuatorConfig = field(default_factory=ActuatorConfig)
    wave: Optional[WaveConfig] = None
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)


def efficiency_map_parameters(scale: float = 1.0, speed_rpm: float = 3000.0) -> PumpMotorParameters:
    """Параметры для карты КПД (в исходных расчётах карта строилась при 3000 rpm)."""

    return PumpMotorParameters.from_cc_rev(REFERENCE_DISPLACEMENT_CC_REV, speed_rpm, scale=scale)


DEFAULT_PTO_CONFIG = PTOConfig()
