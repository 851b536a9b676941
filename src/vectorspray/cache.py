"""Cache helpers for simulated scenarios.

Stores trajectories and config hashes so identical scenarios are not
re-integrated."""


from __future__ import annotations

from pathlib import Path
import hashlib
import json
from typing import Dict, Tuple

import numpy as np

from .scenario import ScenarioResult
from .simulate import Trajectory
from .spray import SprayProgram


def _stable_json(payload: Dict) -> str:
    """Serialize config deterministically for hashing."""
    return json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str)


def hash_config(payload: Dict, length: int = 12) -> str:
    """Create a short stable hash from a config dict."""
    raw = _stable_json(payload).encode("utf-8")
    # SHA-256 to avoid collisions; truncate for readable folder names.
    digest = hashlib.sha256(raw).hexdigest()
    return digest[:length]


def cache_paths(base_dir: Path | str, key: str) -> Tuple[Path, Path, Path]:
    """Return (dir, arrays_path, config_path) for a cache key."""
    base = Path(base_dir) / key
    arrays_path = base / "arrays.npz"
    config_path = base / "config.json"
    return base, arrays_path, config_path


def save_cache(base_dir: Path | str, key: str, result: ScenarioResult, config: Dict) -> None:
    """Persist both trajectories and the scenario config under a cache key."""
    cache_dir, arrays_path, config_path = cache_paths(base_dir, key)
    # Keep arrays and config together to preserve provenance.
    cache_dir.mkdir(parents=True, exist_ok=True)
    arrays = {}
    for label, traj in (("treated", result.treated), ("untreated", result.untreated)):
        arrays[f"{label}_times"] = traj.times
        arrays[f"{label}_states"] = traj.states
        arrays[f"{label}_pre_spray"] = traj.pre_spray_states
    np.savez_compressed(arrays_path, **arrays)
    payload = {
        "config": config,
        "spray_days": list(result.program.days),
        "mortality": result.program.mortality,
        "method": result.treated.method,
    }
    with config_path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, sort_keys=True, default=str)


def load_cache(base_dir: Path | str, key: str) -> Tuple[ScenarioResult, Dict]:
    """Rebuild a ScenarioResult and its config from a cache key."""
    _, arrays_path, config_path = cache_paths(base_dir, key)
    with np.load(arrays_path) as arrays, config_path.open("r", encoding="utf-8") as f:
        payload = json.load(f)
        program = SprayProgram(days=tuple(payload["spray_days"]), mortality=payload["mortality"])
        treated = Trajectory(
            times=arrays["treated_times"],
            states=arrays["treated_states"],
            spray_days=program.days,
            pre_spray_states=arrays["treated_pre_spray"],
            method=payload["method"],
        )
        untreated = Trajectory(
            times=arrays["untreated_times"],
            states=arrays["untreated_states"],
            pre_spray_states=arrays["untreated_pre_spray"],
            method=payload["method"],
        )
    result = ScenarioResult(treated=treated, untreated=untreated, program=program)
    return result, payload["config"]


def cache_exists(base_dir: Path | str, key: str) -> bool:
    """Check if the cache entry exists on disk."""
    _, arrays_path, config_path = cache_paths(base_dir, key)
    return arrays_path.exists() and config_path.exists()
