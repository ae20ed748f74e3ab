from __future__ import annotations

import math
from dataclasses import dataclass

CALL = "call"
PUT  = "put"

# Long-term average Fed funds rate, used when no rate is supplied.
DEFAULT_RATE = 0.046

# Default forward-difference bumps: 1 cent, half a cent, 0.1% vol, one day.
DELTA_STEP = 0.01
GAMMA_STEP = 0.005
VEGA_STEP  = 0.001
THETA_STEP = 1.0 / 365.0


class InvalidInputError(ValueError):
    """Raised when a pricing input lies outside the model's domain."""


# ---------------------------------------------------------------------------
# Validation helpers shared by the pricer, Greeks and grid layers
# ---------------------------------------------------------------------------
def check_kind(kind: str) -> str:
    if kind not in (CALL, PUT):
        raise InvalidInputError(f"kind must be 'call' or 'put', got {kind!r}")
    return kind


def check_finite(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise InvalidInputError(f"{name} must be finite, got {value}")
    return value


def check_positive(name: str, value: float) -> float:
    value = check_finite(name, value)
    if value <= 0:
        raise InvalidInputError(f"{name} must be positive, got {value}")
    return value


def check_non_negative(name: str, value: float) -> float:
    value = check_finite(name, value)
    if value < 0:
        raise InvalidInputError(f"{name} must be non-negative, got {value}")
    return value


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class OptionContract:
    """What the contract *is* — strike and payoff direction.

    Parameters
    ----------
    K : float
        Strike price.
    kind : str
        ``"call"`` (default) or ``"put"``.
    """
    K: float
    kind: str = CALL

    def __post_init__(self):
        check_positive("K", self.K)
        check_kind(self.kind)


@dataclass(frozen=True)
class MarketState:
    """Underlying, volatility and rates at one point in time.

    Volatility is flat across strikes; that is a model assumption,
    not a market fact.
    """
    S: float
    sigma: float
    r: float = DEFAULT_RATE   # continuous risk-free
    d: float = 0.0            # continuous dividend yield

    def __post_init__(self):
        check_non_negative("S", self.S)
        check_non_negative("sigma", self.sigma)
        check_finite("r", self.r)
        check_finite("d", self.d)


@dataclass(frozen=True)
class StepSizes:
    """Forward-difference bump sizes for each Greek.

    ``delta`` and ``gamma`` are in currency units (1 and 0.5 cents),
    ``vega`` in absolute vol (0.1%), ``theta`` in years (one day).
    """
    delta: float = DELTA_STEP
    gamma: float = GAMMA_STEP
    vega: float = VEGA_STEP
    theta: float = THETA_STEP

    def __post_init__(self):
        for name in ("delta", "gamma", "vega", "theta"):
            check_positive(f"{name} step", getattr(self, name))

    def for_measure(self, measure: str) -> float:
        """Bump size for ``measure`` (one of the four Greek names)."""
        if measure not in ("delta", "gamma", "vega", "theta"):
            raise InvalidInputError(f"no step size for measure {measure!r}")
        return getattr(self, measure)
