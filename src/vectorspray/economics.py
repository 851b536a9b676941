"""Dollar outcomes of treated and untreated seasons.

Includes gross margins per strategy and the spray cost at which treating
stops paying off."""


from typing import Dict, Optional

from .config import EconomicParams
from .scenario import ScenarioResult


def gross_margin(final_yield: float, n_sprays: int, econ: Optional[EconomicParams] = None) -> float:
    econ = econ or EconomicParams()
    return float(final_yield * econ.market_value - n_sprays * econ.spray_cost - econ.fixed_cost)


def scenario_economics(result: ScenarioResult, econ: Optional[EconomicParams] = None) -> Dict[str, float]:
    """Summarize yields and margins for both strategies."""
    econ = econ or EconomicParams()
    n_sprays = result.program.n_sprays
    margin_treated = gross_margin(result.yield_treated, n_sprays, econ)
    margin_untreated = gross_margin(result.yield_untreated, 0, econ)
    return {
        "yield_treated": result.yield_treated,
        "yield_untreated": result.yield_untreated,
        "n_sprays": float(n_sprays),
        "margin_treated": margin_treated,
        "margin_untreated": margin_untreated,
        "spray_benefit": margin_treated - margin_untreated,
    }


def break_even_spray_cost(result: ScenarioResult, econ: Optional[EconomicParams] = None) -> float:
    """Cost per spray at which treated and untreated margins are equal."""
    econ = econ or EconomicParams()
    n_sprays = result.program.n_sprays
    # Without sprays the strategies coincide; any cost breaks even.
    if n_sprays == 0:
        return float("inf")
    return float(result.yield_gain * econ.market_value / n_sprays)
