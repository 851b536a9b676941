"""Logging helpers for scenario scripts.

One call sets up console and run-folder logging for a scenario run. The
simulate module emits one DEBUG line per solver segment and per spray; its
level can be raised or lowered on its own so long sweeps stay readable
while a single run can still be traced in detail.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
RUN_LOG_NAME = "run.log"

# Logger carrying the per-segment and per-spray trace.
SOLVER_LOGGER = "src.vectorspray.simulate"

# Third-party loggers that flood DEBUG output (font lookup, image backends).
NOISY_LOGGERS = ("matplotlib", "PIL")


def _resolve_level(level: Union[str, int]) -> int:
    """Map a string (or numeric) level to a logging level constant."""
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


def _resolve_log_file(
    log_file: Optional[Union[str, Path]],
    run_dir: Optional[Union[str, Path]],
) -> Optional[Path]:
    """An explicit log_file wins; otherwise log to run.log inside run_dir."""
    if log_file:
        return Path(log_file)
    if run_dir:
        return Path(run_dir) / RUN_LOG_NAME
    return None


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    console: bool = True,
    run_dir: Optional[Union[str, Path]] = None,
    solver_level: Optional[str] = None,
) -> logging.Logger:
    """Configure root logging for a scenario run and return the root logger.

    Parameters
    ----------
    level:
        Root level for console and file handlers.
    log_file:
        Explicit log path; takes precedence over ``run_dir``.
    console:
        Attach a stderr handler.
    run_dir:
        Run folder; when given without ``log_file`` the log goes to
        ``run_dir/run.log``.
    solver_level:
        Level for the simulate module only (e.g. "DEBUG" to trace segments
        and sprays while the rest of the run logs at INFO).
    """
    root = logging.getLogger()
    resolved_level = _resolve_level(level)

    # Clear existing handlers to avoid duplicate logs in repeated runs.
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)
    handlers = []
    if console:
        handlers.append(logging.StreamHandler())

    path = _resolve_log_file(log_file, run_dir)
    if path is not None:
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))

    solver_resolved = _resolve_level(solver_level) if solver_level else None
    # Handlers must let the solver trace through when it is more verbose than root.
    handler_level = min(resolved_level, solver_resolved) if solver_resolved else resolved_level
    for handler in handlers:
        handler.setLevel(handler_level)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    root.setLevel(resolved_level)
    solver_logger = logging.getLogger(SOLVER_LOGGER)
    solver_logger.setLevel(solver_resolved if solver_resolved else logging.NOTSET)

    if handler_level < logging.INFO:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.INFO)

    return root
