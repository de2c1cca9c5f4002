#!/usr/bin/env python
"""
Run the EHA pump/motor loss model over a simulator time series.

Input CSV must have columns: time, force, velocity (SI units, PTO frame).

Usage:
    python scripts/run_eha_losses.py --input data/oswec_irregular.csv
    python scripts/run_eha_losses.py --input run.csv --config pto.json --window-start 50
    python scripts/run_eha_losses.py --input run.csv --scale 28 --wave-power 52000
"""

import sys
import argparse
import logging
from dataclasses import asdict, replace
from pathlib import Path

import pandas as pd

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from ehapto.analysis.aggregator import SampleAggregator
from ehapto.config import PTOConfig, WaveConfig, load_config

logger = logging.getLogger("run_eha_losses")


def parse_args():
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Estimate EHA pump/motor displacement, losses and net energy for a PTO time series",
    )
    parser.add_argument("--input", type=str, required=True, help="CSV with time, force, velocity columns")
    parser.add_argument("--config", type=str, default=None, help="JSON PTO config (default: built-in)")
    parser.add_argument("--scale", type=float, default=None, help="Override pump/motor scale factor")
    parser.add_argument("--window-start", type=float, default=None, help="Start of averaging window [s]")
    parser.add_argument("--wave-power", type=float, default=None, help="Incident wave power [W/m]")
    parser.add_argument("--device-width", type=float, default=18.0, help="Device reference width [m]")
    parser.add_argument(
        "--integration",
        choices=("rectangle", "trapezoid"),
        default=None,
        help="Integration rule for energy (default: from config)",
    )
    parser.add_argument("--strict", action="store_true", help="Abort on infeasible displacement")
    return parser.parse_args()


def build_config(args) -> PTOConfig:
    cfg = load_config(args.config) if args.config else PTOConfig()

    if args.scale is not None:
        cfg = replace(cfg, pump=replace(cfg.pump, scale=args.scale))

    analysis = cfg.analysis
    if args.window_start is not None:
        analysis = replace(analysis, window_start_s=args.window_start)
    if args.integration is not None:
        analysis = replace(analysis, integration=args.integration)
    if args.strict:
        analysis = replace(analysis, strict=True)
    cfg = replace(cfg, analysis=analysis)

    if args.wave_power is not None:
        cfg = replace(cfg, wave=WaveConfig(wave_power_w_per_m=args.wave_power, device_width_m=args.device_width))
    return cfg


def main():
    """Main entry point."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    args = parse_args()

    df = pd.read_csv(args.input)
    missing = {"time", "force", "velocity"} - set(df.columns)
    if missing:
        logger.error("Input %s is missing columns: %s", args.input, sorted(missing))
        sys.exit(1)

    try:
        cfg = build_config(args)
        result = SampleAggregator(cfg).run(df["time"], df["force"], df["velocity"])
    except ValueError as e:
        logger.error("%s", e)
        sys.exit(1)

    logger.info("Samples: %d, pump size %.0f cc/rev", result.summary.n_samples, result.summary.pump_size_cc)
    for key, value in asdict(result.summary).items():
        logger.info("  %-26s %s", key, value)


if __name__ == "__main__":
    main()
