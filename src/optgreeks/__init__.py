# optgreeks — Black-Scholes-Merton prices and finite-difference Greeks
# Public API

# Data model
from .core import (
    CALL, PUT, DEFAULT_RATE,
    OptionContract, MarketState, StepSizes, InvalidInputError,
)

# Pricer
from .black_scholes import price

# Finite-difference Greeks
from .greeks import delta, gamma, vega, theta, quote

# Grid evaluation & tidy reshaping
from .grid import (
    COMPUTATIONS, TidyRecord,
    evaluate_grid, greek_surfaces,
    to_tidy, tidy_records, surfaces_to_tidy,
    underlying_range, weekly_maturities,
)

__all__ = [
    # Data model
    "CALL", "PUT", "DEFAULT_RATE",
    "OptionContract", "MarketState", "StepSizes", "InvalidInputError",
    # Pricer
    "price",
    # Greeks
    "delta", "gamma", "vega", "theta", "quote",
    # Grid
    "COMPUTATIONS", "TidyRecord",
    "evaluate_grid", "greek_surfaces",
    "to_tidy", "tidy_records", "surfaces_to_tidy",
    "underlying_range", "weekly_maturities",
]

__version__ = "0.1.0"
