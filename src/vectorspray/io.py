"""Run I/O helpers.

Small utilities to create output folders and persist configs, parameter
tables and trajectories as JSON and CSV. Used by scripts to standardize run
artifacts in runs/.
"""


from pathlib import Path
import json
import csv
from typing import Dict, Iterable, List, Optional, Union

from .config import InitialState, VectorParams, YieldCurveParams
from .simulate import Trajectory
from .spray import SprayProgram


# Human-readable descriptions for the parameter table.
PARAM_DESCRIPTIONS = {
    "a": "transmission rate (vector to host)",
    "delta": "vector death rate",
    "lam": "acquisition rate (host to vector)",
    "rho_plus": "vector preference for infected hosts",
    "rho_minus": "vector preference for uninfected hosts",
    "b": "vector birth rate on healthy hosts",
    "b_i": "vector birth rate on diseased hosts",
    "IM": "vector immigration rate",
    "alpha": "yield curve half-maximal-time parameter",
    "k": "yield curve shape exponent",
    "D0": "initial diseased proportion",
    "S0": "initial virus-free vector density",
    "I0": "initial infected vector density",
    "Y0": "initial yield integral",
    "mortality": "vector mortality per spray",
}


def ensure_dir(path: Union[Path, str]) -> Path:
    path = Path(path)
    # Create output folder if needed.
    path.mkdir(parents=True, exist_ok=True)
    return path


def save_json(path: Union[Path, str], payload: Dict) -> None:
    path = Path(path)
    with path.open("w", encoding="utf-8") as f:
        # Stable formatting helps diffs and reproducibility.
        json.dump(payload, f, indent=2, sort_keys=True)


def save_csv(path: Union[Path, str], rows: Iterable[Dict]) -> None:
    path = Path(path)
    rows = list(rows)
    if not rows:
        # Avoid creating empty CSVs.
        return
    with path.open("w", newline="", encoding="utf-8") as f:
        # Use keys from the first row as column order, then append new keys seen later.
        fieldnames = list(rows[0].keys())
        seen = set(fieldnames)
        for row in rows[1:]:
            for key in row.keys():
                if key not in seen:
                    fieldnames.append(key)
                    seen.add(key)
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)


def save_trajectory_csv(path: Union[Path, str], trajectory: Trajectory) -> None:
    """Write one row per sample with columns t, D, S, I, Y."""
    save_csv(path, trajectory.to_rows())


def parameter_table(
    params: VectorParams,
    curve: YieldCurveParams,
    initial_state: InitialState,
    program: Optional[SprayProgram] = None,
) -> List[Dict[str, object]]:
    """Rows of (group, name, value, description) describing a scenario."""
    groups = [
        ("vector", params.as_dict()),
        ("yield_curve", curve.as_dict()),
        ("initial_state", initial_state.as_dict()),
    ]
    if program is not None:
        groups.append(("spray", {"mortality": program.mortality}))

    rows: List[Dict[str, object]] = []
    for group, values in groups:
        for name, value in values.items():
            rows.append({
                "group": group,
                "name": name,
                "value": value,
                "description": PARAM_DESCRIPTIONS.get(name, ""),
            })
    if program is not None:
        rows.append({
            "group": "spray",
            "name": "days",
            "value": " ".join(f"{d:g}" for d in program.days),
            "description": "spray days since season start",
        })
    return rows
