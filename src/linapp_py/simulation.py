"""Simulation of a linearised model from its policy coefficients.

Given the linear law of motion in :class:`~linapp_py.coefficients.LinearPolicy`,
:func:`simulate_ssl` generates a history of state and control levels by
linearising the policy function about the steady state, as in Uhlig's
toolkit:

1. The first-period levels are converted to deviations from the steady
   state (log deviations or plain differences).
2. The one-step rule is applied recursively along the exogenous path.
3. The deviation panels are converted back to levels.

Optionally, Euler-equation errors are evaluated along the resulting path
(see :mod:`linapp_py.euler`).
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Sequence

import numpy as np

from .coefficients import LinearPolicy
from .deviations import from_deviation, to_deviation
from .euler import ResidualFunction, ShockNodes, euler_errors
from .options import SimulationOptions
from .transition import StepFunction, apply_step, linear_step

Array = np.ndarray

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationResult:
    """Result of :func:`simulate_ssl`.

    Attributes
    ----------
    X : ndarray, shape (nobs, n_x)
        State levels.  Row 0 is the initial condition.
    Y : ndarray, shape (nobs, n_y)
        Control levels; has zero columns for models without controls.
    E : ndarray, shape (nobs, n_x + n_y)
        Expected Euler residuals, all zero unless requested.
    """

    X: Array
    Y: Array
    E: Array


def simulate_ssl(
    policy: LinearPolicy,
    X0: Array | Sequence[float],
    Z: Array | Sequence[Sequence[float]],
    XYbar: Array | Sequence[float],
    *,
    options: SimulationOptions | None = None,
    step: StepFunction = linear_step,
    residual: ResidualFunction | None = None,
    param: Any = None,
    nodes: ShockNodes | None = None,
) -> SimulationResult:
    """Simulate state and control levels along an exogenous shock path.

    Parameters
    ----------
    policy : LinearPolicy
        Coefficients ``PP, QQ, UU, NN`` and, for models with jump
        variables, the :class:`~linapp_py.coefficients.ControlBlock`
        carrying ``Y0, RR, SS, VV``.
    X0 : array_like, shape (n_x,)
        State levels in the first period.
    Z : array_like, shape (nobs, n_z)
        Exogenous shock levels, one period per row.
    XYbar : array_like, shape (n_x + n_y,)
        Steady-state levels of X followed by Y.
    options : SimulationOptions or None
        Deviation convention and Euler-error switch.  Defaults to
        log-linear without Euler errors.
    step : StepFunction
        One-step rule advancing deviations; :func:`linear_step` by
        default.
    residual : callable or None
        Model residual function, required for Euler errors.
    param : any
        Parameters passed through to *residual*.
    nodes : ShockNodes or None
        Innovation support for the expectation, required for Euler errors.

    Returns
    -------
    SimulationResult
        Level panels ``X`` and ``Y`` and the Euler residual panel ``E``.

    Raises
    ------
    DimensionError
        If input shapes are inconsistent with the coefficients.
    ControlGroupError
        If the steady state implies controls that were not supplied, or
        the reverse.
    LogDomainError
        In log-linear mode, if initial or steady-state levels are not
        strictly positive.
    ValueError
        If Euler errors are requested without *residual* or *nodes*.
    """
    opts = options if options is not None else SimulationOptions()
    if opts.euler_errors and (residual is None or nodes is None):
        raise ValueError("Euler errors require both a residual function and nodes")

    X0 = np.asarray(X0, dtype=float).reshape(-1)
    Z = np.asarray(Z, dtype=float)
    XYbar = np.asarray(XYbar, dtype=float).reshape(-1)
    policy.check(X0, Z, XYbar)

    nobs = Z.shape[0]
    nx = policy.n_states
    ny = policy.n_controls
    Xbar = XYbar[:nx]
    Ybar = XYbar[nx:]
    logger.debug(
        "Simulating %d periods (nx=%d, ny=%d, nz=%d, log_linear=%s)",
        nobs,
        nx,
        ny,
        policy.n_shocks,
        opts.log_linear,
    )

    Xtil = np.zeros((nobs, nx), dtype=float)
    Ytil = np.zeros((nobs, ny), dtype=float)
    Xtil[0] = to_deviation(X0, Xbar, opts.log_linear)
    if policy.controls is not None:
        Ytil[0] = to_deviation(policy.controls.initial, Ybar, opts.log_linear)

    for t in range(nobs - 1):
        Xtil[t + 1], Ytil[t + 1] = apply_step(step, Xtil[t], Z[t + 1], policy)

    X = from_deviation(Xtil, Xbar, opts.log_linear)
    Y = from_deviation(Ytil, Ybar, opts.log_linear)
    # Keep the caller's first row exactly rather than its round trip.
    X[0] = X0
    if policy.controls is not None:
        Y[0] = policy.controls.initial

    if opts.euler_errors:
        E = euler_errors(
            policy,
            X,
            Y,
            Z,
            nodes,
            residual,
            param,
            log_linear=opts.log_linear,
            step=step,
            include_controls=opts.include_controls_in_residual,
        )
    else:
        E = np.zeros((nobs, nx + ny), dtype=float)

    return SimulationResult(X=X, Y=Y, E=E)
