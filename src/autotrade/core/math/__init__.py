"""
Core math modules для autotrade

Подбор номиналов (making change) и подсчёт стоимости сторон сделки.
"""

# Currency Solver
from autotrade.core.math.currency_solver import (
    METAL_UNITS,
    CurrencyUnit,
    SolverResult,
    count_holdings,
    currency_units,
    holdings_value,
    make_exact_change,
    max_affordable,
    solve,
)

# Valuation
from autotrade.core.math.valuation import PriceSnapshot, ValueAccumulator

__all__ = [
    # Currency Solver: Constants
    "METAL_UNITS",
    # Currency Solver: Types
    "CurrencyUnit",
    "SolverResult",
    # Currency Solver: Functions
    "count_holdings",
    "currency_units",
    "holdings_value",
    "make_exact_change",
    "max_affordable",
    "solve",
    # Valuation
    "PriceSnapshot",
    "ValueAccumulator",
]
