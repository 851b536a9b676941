"""Aggregate scenario summaries across runs.

Scans runs/*/summary.json, adds run metadata (and optionally config values),
and writes a single summary CSV for comparing spray strategies.
Typical usage:
  python scripts/aggregate_runs.py --include-config
"""


from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Dict, List

from src.vectorspray.io import save_csv
from src.vectorspray.logging_utils import setup_logging


def _parse_args() -> argparse.Namespace:
    # CLI options control input/output paths and config inclusion.
    parser = argparse.ArgumentParser(description="Aggregate scenario summaries into one CSV.")
    parser.add_argument("--runs-dir", type=str, default="runs")
    parser.add_argument("--out", type=str, default="runs/summary.csv")
    parser.add_argument("--include-config", action="store_true")
    parser.add_argument("--log-level", type=str, default="INFO")
    parser.add_argument("--log-file", type=str, default=None)
    parser.add_argument("--no-log-file", action="store_true")
    parser.add_argument("--no-console-log", action="store_true")
    return parser.parse_args()


def _load_json(path: Path) -> Dict:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _flatten(prefix: str, payload: Dict) -> Dict[str, object]:
    """Flatten nested config sections into prefixed scalar columns."""
    flat: Dict[str, object] = {}
    for key, value in payload.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(f"{name}_", value))
        elif isinstance(value, list):
            flat[name] = " ".join(str(v) for v in value)
        else:
            flat[name] = value
    return flat


def main() -> None:
    args = _parse_args()
    runs_dir = Path(args.runs_dir)
    out_path = Path(args.out)

    log_file = None
    if not args.no_log_file:
        log_file = Path(args.log_file) if args.log_file else out_path.with_suffix(".log")
    setup_logging(level=args.log_level, log_file=log_file, console=not args.no_console_log)
    logger = logging.getLogger(__name__)

    logger.info("Aggregating summaries under %s", runs_dir)

    rows: List[Dict] = []
    for summary_path in sorted(runs_dir.glob("*/summary.json")):
        run_dir = summary_path.parent
        row = dict(_load_json(summary_path))
        row["run_dir"] = str(run_dir)
        if args.include_config:
            # Prefix config values to avoid name collisions.
            row.update(_flatten("cfg_", _load_json(run_dir / "config.json")))
        rows.append(row)

    if not rows:
        logger.warning("No summary.json files found under %s", runs_dir)
        return

    # Ensure output directory exists before writing.
    out_path.parent.mkdir(parents=True, exist_ok=True)
    save_csv(out_path, rows)
    logger.info("Wrote %d rows to %s", len(rows), out_path)


if __name__ == "__main__":
    main()
