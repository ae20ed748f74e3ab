"""Grid evaluation and long-form reshaping.

Drives the pricer or one of the finite-difference Greeks across every
(maturity, underlying) pair and turns the resulting 2-D array into a
tidy table that any plotting layer can group or facet on.
"""

from __future__ import annotations

import logging
from typing import Callable, NamedTuple, Union

import numpy as np
import pandas as pd

from . import greeks
from .black_scholes import as_spots, price
from .core import (
    CALL, DEFAULT_RATE, InvalidInputError, StepSizes, check_non_negative,
)

logger = logging.getLogger(__name__)

__all__ = [
    "COMPUTATIONS",
    "TidyRecord",
    "evaluate_grid",
    "greek_surfaces",
    "to_tidy",
    "tidy_records",
    "surfaces_to_tidy",
    "underlying_range",
    "weekly_maturities",
]

COMPUTATIONS: dict[str, Callable] = {
    "price": price,
    "delta": greeks.delta,
    "gamma": greeks.gamma,
    "vega": greeks.vega,
    "theta": greeks.theta,
}

TIDY_COLUMNS = ["maturity", "underlying", "value"]


class TidyRecord(NamedTuple):
    maturity: float
    underlying: float
    value: float


# ---------------------------------------------------------------------------
# Axes
# ---------------------------------------------------------------------------

def underlying_range(lo: float, hi: float, n: int) -> np.ndarray:
    """``n`` evenly spaced underlying prices from ``lo`` to ``hi`` inclusive."""
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        raise InvalidInputError(f"n must be an integer, got {n!r}")
    if n < 1:
        raise InvalidInputError(f"n must be at least 1, got {n}")
    lo = check_non_negative("lo", lo)
    hi = check_non_negative("hi", hi)
    if hi < lo:
        raise InvalidInputError(f"hi ({hi}) must not be below lo ({lo})")
    return np.linspace(lo, hi, int(n))


def weekly_maturities(weeks) -> np.ndarray:
    """Convert week counts to year fractions (52 weeks per year)."""
    weeks = np.asarray(weeks, dtype=float)
    if np.any(weeks < 0):
        raise InvalidInputError("weeks must be non-negative")
    return weeks / 52.0


# ---------------------------------------------------------------------------
# Grid evaluation
# ---------------------------------------------------------------------------

def _resolve(computation: Union[str, Callable]) -> Callable:
    if callable(computation):
        return computation
    try:
        return COMPUTATIONS[computation]
    except KeyError:
        raise InvalidInputError(
            f"computation must be one of {sorted(COMPUTATIONS)}, got {computation!r}"
        ) from None


def evaluate_grid(
    taus,
    S,
    K: float,
    sigma: float,
    *,
    r: float = DEFAULT_RATE,
    d: float = 0.0,
    kind: str = CALL,
    computation: Union[str, Callable] = "price",
    step: float | None = None,
) -> np.ndarray:
    """Evaluate ``computation`` on every (tau, S) pair.

    Parameters
    ----------
    taus : sequence of float, length M
        Times to maturity; row ``i`` corresponds to ``taus[i]``.
    S : sequence of float, length N
        Underlying prices; column ``j`` corresponds to ``S[j]``.
    computation : str or callable
        ``"price"``, ``"delta"``, ``"gamma"``, ``"vega"``, ``"theta"``, or a
        callable with the same ``(S, K, tau, sigma, *, r, d, kind)`` signature.
    step : float, optional
        Bump size forwarded to a Greek; ``None`` keeps its default.
        Passing a step with ``"price"`` raises :class:`InvalidInputError`.

    Returns
    -------
    np.ndarray, shape (M, N)

    Raises
    ------
    InvalidInputError
        If any tau is negative or any other input is invalid.  Nothing is
        returned for a partially evaluated grid.
    """
    func = _resolve(computation)
    taus = np.atleast_1d(np.asarray(taus, dtype=float))
    S = np.atleast_1d(as_spots(S))
    if taus.ndim != 1:
        raise InvalidInputError(f"taus must be 1-D, got shape {taus.shape}")
    for tau in taus:
        check_non_negative("tau", tau)

    kw = dict(r=r, d=d, kind=kind)
    if step is not None:
        if func is price:
            raise InvalidInputError("step does not apply to 'price'")
        kw["step"] = step

    logger.debug("evaluating %s on %d x %d grid", computation, len(taus), len(S))
    out = np.empty((len(taus), len(S)))
    # tau == 0 takes the intrinsic branch, so rows are priced one maturity at a time
    for i, tau in enumerate(taus):
        out[i, :] = func(S, K, float(tau), sigma, **kw)
    return out


def greek_surfaces(
    taus,
    S,
    K: float,
    sigma: float,
    *,
    r: float = DEFAULT_RATE,
    d: float = 0.0,
    kind: str = CALL,
    steps: StepSizes = StepSizes(),
) -> dict[str, np.ndarray]:
    """Price, delta, gamma, vega and theta over the same grid.

    Returns
    -------
    dict[str, np.ndarray]
        One (M, N) array per measure, keyed as in :data:`COMPUTATIONS`.
    """
    surfaces = {}
    for name in COMPUTATIONS:
        step = None if name == "price" else steps.for_measure(name)
        surfaces[name] = evaluate_grid(taus, S, K, sigma, r=r, d=d, kind=kind,
                                       computation=name, step=step)
    return surfaces


# ---------------------------------------------------------------------------
# Tidy reshaping
# ---------------------------------------------------------------------------

def _check_axes(grid, S, taus):
    grid = np.asarray(grid, dtype=float)
    S = np.atleast_1d(np.asarray(S, dtype=float))
    taus = np.atleast_1d(np.asarray(taus, dtype=float))
    if grid.shape != (len(taus), len(S)):
        raise InvalidInputError(
            f"grid shape {grid.shape} does not match (len(taus), len(S)) = "
            f"({len(taus)}, {len(S)})"
        )
    return grid, S, taus


def to_tidy(grid, S, taus) -> pd.DataFrame:
    """Long-form table with one row per grid cell.

    Columns are ``maturity``, ``underlying`` and ``value``; rows are emitted
    row-major (all underlyings for ``taus[0]`` first).
    """
    grid, S, taus = _check_axes(grid, S, taus)
    M, N = grid.shape
    return pd.DataFrame({
        "maturity": np.repeat(taus, N),
        "underlying": np.tile(S, M),
        "value": grid.ravel(),
    }, columns=TIDY_COLUMNS)


def tidy_records(grid, S, taus) -> list[TidyRecord]:
    """Same rows as :func:`to_tidy`, as plain named tuples."""
    frame = to_tidy(grid, S, taus)
    return [TidyRecord(*(float(x) for x in row))
            for row in frame.itertuples(index=False, name=None)]


def surfaces_to_tidy(surfaces: dict[str, np.ndarray], S, taus) -> pd.DataFrame:
    """Stack several measures into one table with an extra ``measure`` column."""
    frames = []
    for name, grid in surfaces.items():
        frame = to_tidy(grid, S, taus)
        frame.insert(0, "measure", name)
        frames.append(frame)
    if not frames:
        return pd.DataFrame(columns=["measure"] + TIDY_COLUMNS)
    return pd.concat(frames, ignore_index=True)
