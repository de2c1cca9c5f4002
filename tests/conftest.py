"""Pytest configuration.

Goal: make `import ehapto` work reliably when running tests without installing
the package (editable install).

This repo uses a flat layout (ehapto/ at repo root). Some environments run
pytest with a working directory where repo root isn't on sys.path, leading to
`ModuleNotFoundError: ehapto`.

This conftest ensures repo root is on sys.path and provides shared parameter
bundles.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from ehapto.config.models import (  # noqa: E402
    MANUFACTURER_107CC,
    UW_MADISON_107CC,
    FluidConfig,
    LossCoefficients,
    PumpMotorParameters,
)


@pytest.fixture()
def pump() -> PumpMotorParameters:
    """107 cc/rev, 2000 rpm, manufacturer loss coefficients."""

    return PumpMotorParameters.from_cc_rev(107.0, 2000.0, scale=1.0, losses=MANUFACTURER_107CC)


@pytest.fixture()
def pump_turbulent() -> PumpMotorParameters:
    """Coefficients with a non-zero turbulent leakage term."""

    return PumpMotorParameters.from_cc_rev(107.0, 2000.0, scale=1.0, losses=UW_MADISON_107CC)


@pytest.fixture()
def pump_lossless() -> PumpMotorParameters:
    return PumpMotorParameters.from_cc_rev(
        107.0,
        2000.0,
        scale=1.0,
        losses=LossCoefficients.lossless(),
        fluid=FluidConfig(bulk_modulus=float("inf")),
    )
