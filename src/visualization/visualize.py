"""Plotting utilities for vector/spray scenarios.

This module provides reusable Matplotlib helpers to visualize:
- state trajectories (D, S, I, Y) for treated vs untreated seasons
- spray days as vertical markers
- the per-plant relative yield curve X(t)

It can also be used as a script to build plots from a saved run folder
(treated.csv / untreated.csv / config.json), e.g.:
  python -m src.visualization.visualize --run-dir runs/scenario_...
"""

from __future__ import annotations

import argparse
import csv
import json
import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import matplotlib.pyplot as plt

from src.vectorspray.config import DEFAULTS, YieldCurveParams
from src.vectorspray.io import ensure_dir
from src.vectorspray.logging_utils import setup_logging
from src.vectorspray.scenario import ScenarioResult
from src.vectorspray.yield_curve import half_yield_time, relative_yield


PANEL_LABELS = {
    "D": "diseased hosts D(t)",
    "S": "virus-free vectors S(t)",
    "I": "infected vectors I(t)",
    "Y": "yield integral Y(t)",
}


def save_figure(fig: plt.Figure, path: Path | str, dpi: int = 150) -> Path:
    """Save a Matplotlib figure and ensure the parent directory exists."""
    path = Path(path)
    ensure_dir(path.parent)
    fig.tight_layout()
    fig.savefig(path, dpi=dpi, bbox_inches="tight")
    return path


def plot_curve_comparison(
    times_by_label: Mapping[str, np.ndarray],
    curves: Mapping[str, np.ndarray],
    title: Optional[str] = None,
    xlabel: str = "day",
    ylabel: str = "",
    ax: Optional[plt.Axes] = None,
) -> plt.Axes:
    """Plot multiple curves (each on its own time axis) for comparison."""
    ax = ax or plt.gca()
    for label, series in curves.items():
        if series is None:
            continue
        ax.plot(np.asarray(times_by_label[label]), np.asarray(series), label=label)
    if title:
        ax.set_title(title)
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    return ax


def mark_spray_days(ax: plt.Axes, spray_days: Sequence[float]) -> None:
    for i, day in enumerate(spray_days):
        # Label only the first line so the legend gets a single entry.
        ax.axvline(day, color="grey", ls=":", lw=1, label="spray" if i == 0 else None)


def plot_state_panels(
    trajectories: Mapping[str, Tuple[np.ndarray, np.ndarray]],
    spray_days: Sequence[float] = (),
    title: Optional[str] = None,
    figsize: Tuple[float, float] = (10, 7),
) -> plt.Figure:
    """Plot D, S, I, Y in a 2x2 grid, one line per labeled (times, states) pair."""
    fig, axes = plt.subplots(2, 2, figsize=figsize, sharex=True)
    axes = axes.ravel()
    times_by_label = {label: times for label, (times, _) in trajectories.items()}

    for col, (name, ylabel) in enumerate(PANEL_LABELS.items()):
        curves = {label: states[:, col] for label, (_, states) in trajectories.items()}
        ax = axes[col]
        plot_curve_comparison(times_by_label, curves, title=name, ylabel=ylabel, ax=ax)
        mark_spray_days(ax, spray_days)
        if col == 0:
            ax.legend(fontsize=8)

    if title:
        fig.suptitle(title)
    return fig


def plot_scenario(result: ScenarioResult, title: Optional[str] = None) -> plt.Figure:
    """Treated vs untreated state panels for a ScenarioResult."""
    trajectories = {
        f"treated (Y={result.yield_treated:.4f})": (result.treated.times, result.treated.states),
        f"untreated (Y={result.yield_untreated:.4f})": (result.untreated.times, result.untreated.states),
    }
    return plot_state_panels(trajectories, spray_days=result.program.days, title=title)


def plot_yield_curve(
    alpha: float,
    k: float,
    t_max: float = DEFAULTS.season_length,
    n_points: int = 301,
    ax: Optional[plt.Axes] = None,
) -> plt.Axes:
    """Plot X(t) with the half-yield day marked."""
    ax = ax or plt.gca()
    t = np.linspace(0.0, t_max, n_points)
    ax.plot(t, relative_yield(t, alpha, k), label=f"alpha={alpha:g}, k={k:g}")
    t_half = half_yield_time(alpha, k)
    if t_half <= t_max:
        ax.axvline(t_half, color="grey", ls="--", lw=1)
        ax.axhline(0.5, color="grey", ls="--", lw=1)
    ax.set_xlabel("day of infection")
    ax.set_ylabel("relative yield X(t)")
    ax.set_ylim(0.0, 1.0)
    ax.legend(fontsize=8)
    return ax


def save_scenario_figures(
    result: ScenarioResult,
    curve: YieldCurveParams,
    out_dir: Path | str,
    t_max: float = DEFAULTS.season_length,
    title: Optional[str] = None,
) -> List[Path]:
    """Write the state panels and yield curve figures to out_dir."""
    out_dir = ensure_dir(out_dir)
    paths = []

    fig = plot_scenario(result, title=title)
    paths.append(save_figure(fig, out_dir / "states.png"))
    plt.close(fig)

    fig, ax = plt.subplots(figsize=(5, 3.5))
    plot_yield_curve(curve.alpha, curve.k, t_max=t_max, ax=ax)
    paths.append(save_figure(fig, out_dir / "yield_curve.png"))
    plt.close(fig)
    return paths


def _load_trajectory_csv(path: Path) -> Tuple[np.ndarray, np.ndarray]:
    with path.open("r", newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    times = np.array([float(r["t"]) for r in rows])
    states = np.array([[float(r[c]) for c in PANEL_LABELS] for r in rows])
    return times, states


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Rebuild scenario figures from a run folder.")
    parser.add_argument("--run-dir", type=str, required=True)
    parser.add_argument("--out-dir", type=str, default=None)
    parser.add_argument("--title", type=str, default=None)
    parser.add_argument("--log-level", type=str, default="INFO")
    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    setup_logging(level=args.log_level)
    logger = logging.getLogger(__name__)

    run_dir = Path(args.run_dir)
    out_dir = Path(args.out_dir) if args.out_dir else run_dir / "figures"
    config: Dict[str, object] = {}
    config_path = run_dir / "config.json"
    if config_path.exists():
        config = json.loads(config_path.read_text(encoding="utf-8"))

    trajectories = {}
    for label in ("treated", "untreated"):
        path = run_dir / f"{label}.csv"
        if path.exists():
            trajectories[label] = _load_trajectory_csv(path)
    if not trajectories:
        logger.warning("No trajectory CSVs found under %s", run_dir)
        return

    spray_days = config.get("spray_days", [])
    fig = plot_state_panels(trajectories, spray_days=spray_days, title=args.title)
    path = save_figure(fig, out_dir / "states.png")
    plt.close(fig)
    logger.info("Wrote %s", path)


if __name__ == "__main__":
    main()
