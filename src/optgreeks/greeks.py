"""Finite-difference Greeks on the Black-Scholes-Merton pricer.

Every estimator re-prices with a single input bumped forward and
differences the results; no closed-form derivative is used.  Each one
accepts scalar or sequence ``S`` exactly as :func:`~optgreeks.black_scholes.price`
does, and all inputs other than the bumped one are held fixed.
"""

from __future__ import annotations

from .black_scholes import as_output, as_spots, price
from .core import (
    CALL, DEFAULT_RATE, DELTA_STEP, GAMMA_STEP, THETA_STEP, VEGA_STEP,
    MarketState, OptionContract, StepSizes, check_positive,
)

__all__ = [
    "delta",
    "gamma",
    "vega",
    "theta",
    "quote",
]


# ---------------------------------------------------------------------------
# Spot sensitivities
# ---------------------------------------------------------------------------

def delta(S, K: float, tau: float, sigma: float, *,
          r: float = DEFAULT_RATE, d: float = 0.0, kind: str = CALL,
          step: float = DELTA_STEP):
    """dPrice/dS by forward difference: ``(P(S+h) - P(S)) / h``."""
    h = check_positive("step", step)
    S = as_spots(S)
    p = price(S, K, tau, sigma, r=r, d=d, kind=kind)
    p_up = price(S + h, K, tau, sigma, r=r, d=d, kind=kind)
    return as_output((p_up - p) / h)


def gamma(S, K: float, tau: float, sigma: float, *,
          r: float = DEFAULT_RATE, d: float = 0.0, kind: str = CALL,
          step: float = GAMMA_STEP):
    """d2Price/dS2 by forward second difference.

    ``(P(S+2h) - 2 P(S+h) + P(S)) / h**2``
    """
    h = check_positive("step", step)
    S = as_spots(S)
    p = price(S, K, tau, sigma, r=r, d=d, kind=kind)
    p_up = price(S + h, K, tau, sigma, r=r, d=d, kind=kind)
    p_upup = price(S + h + h, K, tau, sigma, r=r, d=d, kind=kind)
    return as_output((p_upup - 2.0 * p_up + p) / (h * h))


# ---------------------------------------------------------------------------
# Vol and time sensitivities
# ---------------------------------------------------------------------------

def vega(S, K: float, tau: float, sigma: float, *,
         r: float = DEFAULT_RATE, d: float = 0.0, kind: str = CALL,
         step: float = VEGA_STEP):
    """dPrice/dSigma (absolute vol units) by forward difference."""
    h = check_positive("step", step)
    p = price(S, K, tau, sigma, r=r, d=d, kind=kind)
    p_up = price(S, K, tau, sigma + h, r=r, d=d, kind=kind)
    return as_output((p_up - p) / h)


def theta(S, K: float, tau: float, sigma: float, *,
          r: float = DEFAULT_RATE, d: float = 0.0, kind: str = CALL,
          step: float = THETA_STEP):
    """Value lost per year as maturity approaches: ``(P(tau) - P(tau+h)) / h``.

    At ``tau == 0`` the base price is the intrinsic payoff while the bumped
    price comes from the closed form, so theta jumps at the boundary.
    """
    h = check_positive("step", step)
    p = price(S, K, tau, sigma, r=r, d=d, kind=kind)
    p_later = price(S, K, tau + h, sigma, r=r, d=d, kind=kind)
    return as_output((p - p_later) / h)


# ---------------------------------------------------------------------------
# Single-point summary
# ---------------------------------------------------------------------------

def quote(contract: OptionContract, market: MarketState, tau: float,
          steps: StepSizes = StepSizes()) -> dict[str, float]:
    """Price and all four Greeks at one (S, tau) point.

    Returns
    -------
    dict[str, float]
        Keys: ``price``, ``delta``, ``gamma``, ``vega``, ``theta``.
    """
    args = (market.S, contract.K, tau, market.sigma)
    kw = dict(r=market.r, d=market.d, kind=contract.kind)
    return {
        "price": price(*args, **kw),
        "delta": delta(*args, step=steps.delta, **kw),
        "gamma": gamma(*args, step=steps.gamma, **kw),
        "vega": vega(*args, step=steps.vega, **kw),
        "theta": theta(*args, step=steps.theta, **kw),
    }
