"""Vector-borne plant virus spray scenarios.

Provides a small namespace that re-exports common helpers so notebooks and
scripts can import from src.vectorspray without deep module paths.
"""


# Re-export core helpers for convenience (plotting stays in src.visualization).
from .config import (  # noqa: F401
    DEFAULTS,
    EconomicParams,
    InitialState,
    VectorParams,
    YieldCurveParams,
    time_grid,
)
from .errors import (  # noqa: F401
    EventOutOfRangeError,
    InvalidParameterError,
    SolverDivergenceError,
    VectorSprayError,
)
from .yield_curve import relative_yield, half_yield_time  # noqa: F401
from .dynamics import vector_disease_rhs  # noqa: F401
from .spray import SprayProgram, apply_spray  # noqa: F401
from .simulate import Trajectory, simulate_vector_disease  # noqa: F401
from .scenario import ScenarioResult, compare_yields, run_scenarios  # noqa: F401
from .economics import gross_margin, scenario_economics, break_even_spray_cost  # noqa: F401
