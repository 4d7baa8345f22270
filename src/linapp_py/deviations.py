"""Conversion between levels and deviations from the steady state.

Two conventions are supported:

* **log-linear** -- ``d = ln(V / Vbar)`` and ``V = Vbar * exp(d)``;
* **linear** -- ``d = V - Vbar`` and ``V = Vbar + d``.

``V`` may be a single row or a panel with one observation per row; the
steady-state row ``Vbar`` is broadcast across rows.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

Array = np.ndarray


class LogDomainError(ValueError):
    """Raised when a log deviation is requested for a non-positive level."""


def _check_positive(array: Array, name: str) -> None:
    bad = ~(np.isfinite(array) & (array > 0.0))
    if np.any(bad):
        raise LogDomainError(
            f"{name} must be strictly positive and finite for log deviations; "
            f"found {int(np.sum(bad))} offending entries"
        )


def to_deviation(
    levels: Array | Sequence[float],
    steady_state: Array | Sequence[float],
    log_mode: bool,
) -> Array:
    """Express *levels* as deviations from *steady_state*.

    Parameters
    ----------
    levels : array_like, shape (n,) or (nobs, n)
        Variable levels, one observation per row.
    steady_state : array_like, shape (n,)
        Steady-state levels, broadcast over the rows of *levels*.
    log_mode : bool
        Use log deviations if True, additive deviations otherwise.

    Returns
    -------
    Array
        Deviations with the same shape as *levels*.

    Raises
    ------
    LogDomainError
        In log mode, if any entry of *levels* or *steady_state* is not
        strictly positive.
    """
    V = np.asarray(levels, dtype=float)
    Vbar = np.asarray(steady_state, dtype=float).reshape(-1)
    if not log_mode:
        return V - Vbar
    _check_positive(V, "levels")
    _check_positive(Vbar, "steady_state")
    return np.log(V / Vbar)


def from_deviation(
    deviations: Array | Sequence[float],
    steady_state: Array | Sequence[float],
    log_mode: bool,
) -> Array:
    """Recover levels from deviations about *steady_state*.

    Inverse of :func:`to_deviation`.  In log mode the anchor must be
    strictly positive; otherwise the anchor may be any real row.

    Raises
    ------
    LogDomainError
        In log mode, if *steady_state* has a non-positive entry, or if
        exponentiating the deviations overflows.
    """
    D = np.asarray(deviations, dtype=float)
    Vbar = np.asarray(steady_state, dtype=float).reshape(-1)
    if not log_mode:
        return Vbar + D
    _check_positive(Vbar, "steady_state")
    with np.errstate(over="ignore"):
        levels = Vbar * np.exp(D)
    if not np.all(np.isfinite(levels)):
        raise LogDomainError(
            "log deviations overflow to non-finite levels; "
            f"largest deviation is {float(np.max(D)):.6g}"
        )
    return levels
