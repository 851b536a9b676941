"""Treated vs untreated season for one vector/virus parameter set.

Simulates the season with the given spray schedule and without sprays,
then reports final relative yields and gross margins. Writes a run folder
with config.json, parameters.csv, treated.csv, untreated.csv and
summary.json under runs/ (plus figures with --save-plots).
Typical usage:
  python scripts/run_scenario.py --spray-days 14 21 28 --mortality 0.9 --save-plots
"""


from __future__ import annotations

import argparse
from datetime import datetime
import logging
import math
from pathlib import Path
import sys
import time
from typing import Optional, Sequence

from src.vectorspray.config import (
    DEFAULTS,
    EconomicParams,
    InitialState,
    VectorParams,
    YieldCurveParams,
    time_grid,
)
from src.vectorspray.cache import cache_exists, hash_config, load_cache, save_cache
from src.vectorspray.economics import break_even_spray_cost, scenario_economics
from src.vectorspray.errors import VectorSprayError
from src.vectorspray.io import ensure_dir, parameter_table, save_csv, save_json, save_trajectory_csv
from src.vectorspray.logging_utils import setup_logging
from src.vectorspray.scenario import run_scenarios
from src.vectorspray.simulate import SOLVER_METHODS
from src.vectorspray.spray import SprayProgram


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    # CLI options mirror the parameter structures in src.vectorspray.config.
    vp = VectorParams()
    curve = YieldCurveParams()
    init = InitialState()
    econ = EconomicParams()
    parser = argparse.ArgumentParser(description="Run a treated vs untreated spray scenario.")
    parser.add_argument("--a", type=float, default=vp.a)
    parser.add_argument("--delta", type=float, default=vp.delta)
    parser.add_argument("--lambda", dest="lam", type=float, default=vp.lam)
    parser.add_argument("--rho-plus", type=float, default=vp.rho_plus)
    parser.add_argument("--rho-minus", type=float, default=vp.rho_minus)
    parser.add_argument("--b", type=float, default=vp.b)
    parser.add_argument("--b-i", type=float, default=vp.b_i)
    parser.add_argument("--im", type=float, default=vp.IM)
    parser.add_argument("--alpha", type=float, default=curve.alpha)
    parser.add_argument("--k", type=float, default=curve.k)
    parser.add_argument("--d0", type=float, default=init.D0)
    parser.add_argument("--s0", type=float, default=init.S0)
    parser.add_argument("--i0", type=float, default=init.I0)
    parser.add_argument("--season-length", type=float, default=DEFAULTS.season_length)
    parser.add_argument("--dt", type=float, default=DEFAULTS.dt)
    parser.add_argument("--spray-days", type=float, nargs="*", default=list(DEFAULTS.spray_days))
    parser.add_argument("--mortality", type=float, default=DEFAULTS.mortality)
    parser.add_argument("--method", type=str, default=DEFAULTS.method, choices=SOLVER_METHODS)
    parser.add_argument("--rtol", type=float, default=DEFAULTS.rtol)
    parser.add_argument("--atol", type=float, default=DEFAULTS.atol)
    parser.add_argument("--market-value", type=float, default=econ.market_value)
    parser.add_argument("--spray-cost", type=float, default=econ.spray_cost)
    parser.add_argument("--fixed-cost", type=float, default=econ.fixed_cost)
    parser.add_argument("--parallel", action="store_true")
    parser.add_argument("--save-plots", action="store_true")
    parser.add_argument("--cache-dir", type=str, default="data/processed/scenarios")
    parser.add_argument("--no-cache", action="store_true")
    parser.add_argument("--out-dir", type=str, default=None)
    parser.add_argument("--log-level", type=str, default="INFO")
    parser.add_argument("--solver-log-level", type=str, default=None)
    parser.add_argument("--log-file", type=str, default=None)
    parser.add_argument("--no-log-file", action="store_true")
    parser.add_argument("--no-console-log", action="store_true")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_dir = Path(args.out_dir) if args.out_dir else DEFAULTS.runs_dir / f"scenario_{timestamp}"
    ensure_dir(out_dir)

    setup_logging(
        level=args.log_level,
        log_file=None if args.no_log_file else args.log_file,
        console=not args.no_console_log,
        run_dir=None if args.no_log_file else out_dir,
        solver_level=args.solver_log_level,
    )
    logger = logging.getLogger(__name__)

    logger.info("Scenario start")
    logger.info("Output dir: %s", out_dir)

    # Build and validate every input before any integration starts.
    try:
        params = VectorParams(
            a=args.a,
            delta=args.delta,
            lam=args.lam,
            rho_plus=args.rho_plus,
            rho_minus=args.rho_minus,
            b=args.b,
            b_i=args.b_i,
            IM=args.im,
        )
        curve = YieldCurveParams(alpha=args.alpha, k=args.k)
        initial_state = InitialState(D0=args.d0, S0=args.s0, I0=args.i0)
        econ = EconomicParams(
            market_value=args.market_value,
            spray_cost=args.spray_cost,
            fixed_cost=args.fixed_cost,
        )
        program = SprayProgram.from_days(sorted(args.spray_days), mortality=args.mortality)
        times = time_grid(args.season_length, args.dt)
        program.validate(float(times[0]), float(times[-1]))
    except VectorSprayError as exc:
        logger.error("Invalid scenario: %s", exc)
        return 2

    config = {
        "params": params.as_dict(),
        "curve": curve.as_dict(),
        "initial_state": initial_state.as_dict(),
        "season_length": args.season_length,
        "dt": args.dt,
        "spray_days": list(program.days),
        "mortality": program.mortality,
        "method": args.method,
        "rtol": args.rtol,
        "atol": args.atol,
    }
    save_json(out_dir / "config.json", {**config, "economics": econ.as_dict()})
    save_csv(out_dir / "parameters.csv", parameter_table(params, curve, initial_state, program))

    cache_key = hash_config(config)
    logger.info("Cache key: %s", cache_key)

    if not args.no_cache and cache_exists(args.cache_dir, cache_key):
        # Fast path: identical scenario already simulated.
        logger.info("Loading cached trajectories from %s", args.cache_dir)
        result, _ = load_cache(args.cache_dir, cache_key)
    else:
        start = time.perf_counter()
        try:
            result = run_scenarios(
                params,
                initial_state,
                times,
                program,
                curve=curve,
                parallel=args.parallel,
                method=args.method,
                rtol=args.rtol,
                atol=args.atol,
            )
        except VectorSprayError as exc:
            logger.error("Scenario failed: %s", exc)
            return 1
        logger.info("Simulated both seasons in %.3fs", time.perf_counter() - start)
        if not args.no_cache:
            save_cache(args.cache_dir, cache_key, result, config)

    save_trajectory_csv(out_dir / "treated.csv", result.treated)
    save_trajectory_csv(out_dir / "untreated.csv", result.untreated)

    summary = scenario_economics(result, econ)
    summary["yield_gain"] = result.yield_gain
    # Strict JSON has no Infinity; an empty schedule has no break-even cost.
    break_even = break_even_spray_cost(result, econ)
    summary["break_even_spray_cost"] = break_even if math.isfinite(break_even) else None
    save_json(out_dir / "summary.json", summary)

    logger.info(
        "Yield treated=%.4f untreated=%.4f | margin treated=%.2f untreated=%.2f benefit=%.2f",
        summary["yield_treated"],
        summary["yield_untreated"],
        summary["margin_treated"],
        summary["margin_untreated"],
        summary["spray_benefit"],
    )

    if args.save_plots:
        # Lazy import keeps matplotlib optional for headless batch runs.
        from src.visualization import visualize as viz

        paths = viz.save_scenario_figures(
            result, curve, out_dir / "figures", t_max=args.season_length
        )
        for path in paths:
            logger.info("Saved figure %s", path)

    logger.info("Scenario done")
    return 0


if __name__ == "__main__":
    sys.exit(main())
