#!/usr/bin/env python
"""
Plot the steady-state pump/motor efficiency map (fractional displacement × ΔP).

Usage:
    python scripts/plot_efficiency_map.py --scale 28 --rpm 3000 --out efficiency_map.png
"""

import sys
import argparse
import logging
from pathlib import Path

import matplotlib.pyplot as plt

sys.path.insert(0, str(Path(__file__).parent.parent))

from ehapto.analysis.efficiency_map import generate_efficiency_map
from ehapto.config import efficiency_map_parameters

logger = logging.getLogger("plot_efficiency_map")


def plot_map(emap, out_path: Path, field: str = "total_efficiency"):
    X, Y, Z = emap.contour_grids(field)

    fig, ax = plt.subplots(figsize=(8, 6))
    cs = ax.contour(X, Y, Z, levels=[0.25, 0.5, 0.75, 1.0])
    ax.clabel(cs, inline=True, fontsize=8)
    ax.set_xlabel("Fractional displacement")
    ax.set_ylabel(r"$\Delta$P [MPa]")
    ax.set_title(f"{field} (scale={emap.scale:.3g}, w={emap.w:.1f} rad/s)")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(out_path, dpi=160)
    plt.close(fig)


def main():
    logging.basicConfig(level=logging.INFO)
    ap = argparse.ArgumentParser()
    ap.add_argument("--scale", type=float, default=1.0)
    ap.add_argument("--rpm", type=float, default=3000.0)
    ap.add_argument("--field", type=str, default="total_efficiency")
    ap.add_argument("--out", type=str, default="efficiency_map.png")
    args = ap.parse_args()

    emap = generate_efficiency_map(efficiency_map_parameters(scale=args.scale, speed_rpm=args.rpm))
    out = Path(args.out)
    plot_map(emap, out, field=args.field)
    logger.info("Efficiency map written to %s", out.resolve())


if __name__ == "__main__":
    main()
