# black_scholes.py
# Closed-form Black-Scholes-Merton price for European options.
# ``S`` may be a scalar or any sequence; sequences are priced pointwise
# and come back as an array of the same length and order.

from __future__ import annotations
import numpy as np
from scipy.stats import norm

from .core import (
    CALL, DEFAULT_RATE,
    check_finite, check_kind, check_non_negative, check_positive,
    InvalidInputError,
)

_N = norm.cdf   # vectorised standard-normal CDF


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------
def as_spots(S) -> np.ndarray:
    """Coerce ``S`` to a float array, rejecting negative or non-finite values."""
    S = np.asarray(S, dtype=float)
    if S.ndim > 1:
        raise InvalidInputError(f"S must be a scalar or 1-D sequence, got shape {S.shape}")
    if not np.all(np.isfinite(S)):
        raise InvalidInputError("S must be finite")
    if np.any(S < 0):
        raise InvalidInputError("S must be non-negative")
    return S


def as_output(values: np.ndarray):
    """Scalars in, ``float`` out; sequences in, ``np.ndarray`` out."""
    values = np.asarray(values, dtype=float)
    return float(values) if values.ndim == 0 else values


def _d1_d2(S, K, tau, r, d, sigma):
    """Compute d1, d2 arrays.  ``tau`` must be positive."""
    sig_sqrt_tau = sigma * np.sqrt(tau)
    d1 = (np.log(S / K) + (r - d + 0.5 * sigma * sigma) * tau) / sig_sqrt_tau
    d2 = d1 - sig_sqrt_tau
    return d1, d2


def _price(S: np.ndarray, K: float, tau: float, sigma: float,
           r: float, d: float, kind: str) -> np.ndarray:
    """Unchecked price; inputs already validated by the caller."""
    if tau == 0:
        # at maturity: intrinsic payoff, the closed form is undefined
        if kind == CALL:
            return np.maximum(S - K, 0.0)
        return np.maximum(K - S, 0.0)

    # sigma == 0 divides by zero in d1; the non-finite values propagate
    with np.errstate(divide="ignore", invalid="ignore"):
        d1, d2 = _d1_d2(S, K, tau, r, d, sigma)
        disc_r = np.exp(-r * tau)
        disc_d = np.exp(-d * tau)
        if kind == CALL:
            return S * disc_d * _N(d1) - K * disc_r * _N(d2)
        return K * disc_r * _N(-d2) - S * disc_d * _N(-d1)


# ---------------------------------------------------------------------------
# Public pricer
# ---------------------------------------------------------------------------
def price(S, K: float, tau: float, sigma: float, *,
          r: float = DEFAULT_RATE, d: float = 0.0, kind: str = CALL):
    """Black-Scholes-Merton price of a European call or put.

    Parameters
    ----------
    S : float or sequence of float
        Underlying price(s), non-negative.
    K : float
        Strike price, positive.
    tau : float
        Time to maturity in years, non-negative.  ``tau == 0`` returns the
        intrinsic payoff ``max(S - K, 0)`` / ``max(K - S, 0)``.
    sigma : float
        Flat volatility, non-negative.
    r : float
        Continuously-compounded risk-free rate (default 4.6%).
    d : float
        Continuous dividend yield (default 0).
    kind : str
        ``"call"`` (default) or ``"put"``.

    Returns
    -------
    float or np.ndarray
        ``float`` for scalar ``S``, otherwise an array aligned with ``S``.

    Raises
    ------
    InvalidInputError
        If ``K <= 0``, ``sigma < 0``, ``tau < 0`` or any ``S < 0``.
    """
    S = as_spots(S)
    K = check_positive("K", K)
    tau = check_non_negative("tau", tau)
    sigma = check_non_negative("sigma", sigma)
    r = check_finite("r", r)
    d = check_finite("d", d)
    check_kind(kind)
    return as_output(_price(S, K, tau, sigma, r, d, kind))
