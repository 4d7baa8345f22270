"""Euler-equation errors along a simulated path.

The accuracy of a linear approximation is judged by plugging the
simulated path back into the model's equilibrium conditions.  For each
period ``t`` the conditional expectation

.. math::

    E_t\\bigl[f(X_{t+2}, X_{t+1}, X_t, Z_{t+2}, Z_{t+1})\\bigr]

is approximated by a probability-weighted sum over a discrete set of
next-period shock realisations ``Z' = NN Z_{t+1} + \\epsilon_e``.  The
hypothesised ``X_{t+2}`` for node ``e`` is obtained by applying the
one-step rule at zero deviation and anchoring the resulting increment at
the known period ``t+1`` levels.

With the default argument layout the residual function receives
``[X'', X', X, Z', Z]``; with ``include_controls=True`` it receives
``[X'', X', X, Y', Y, Z', Z]`` instead.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Callable, Sequence

import numpy as np

from .coefficients import DimensionError, LinearPolicy
from .deviations import from_deviation
from .transition import StepFunction, apply_step, linear_step

Array = np.ndarray
ResidualFunction = Callable[[Array, Any], Array | Sequence[float]]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShockNodes:
    """Discrete support of next-period shock innovations.

    Attributes
    ----------
    eps : Array, shape (n_z, n_e)
        Column ``e`` is the innovation vector at node ``e``.
    phi : Array, shape (n_e,) or (n_z, n_e)
        Probabilities of the nodes.  In the two-dimensional form the
        weight of node ``e`` is the product of column ``e``.
    """

    eps: Array
    phi: Array

    def __post_init__(self) -> None:
        eps = np.asarray(self.eps, dtype=float)
        if eps.ndim == 1:
            eps = eps.reshape(1, -1)
        phi = np.asarray(self.phi, dtype=float)
        if eps.ndim != 2:
            raise DimensionError(f"eps must be (n_z, n_e), got shape {eps.shape}")
        if phi.ndim == 1:
            expected: tuple[int, ...] = (eps.shape[1],)
        else:
            expected = eps.shape
        if phi.shape != expected:
            raise DimensionError(
                f"phi must have shape {expected} to match eps, got {phi.shape}"
            )
        object.__setattr__(self, "eps", eps)
        object.__setattr__(self, "phi", phi)

    @property
    def n_nodes(self) -> int:
        return int(self.eps.shape[1])

    @property
    def weights(self) -> Array:
        """Probability attached to each node, shape ``(n_e,)``."""
        if self.phi.ndim == 1:
            return self.phi
        return np.prod(self.phi, axis=0)


def euler_errors(
    policy: LinearPolicy,
    X: Array,
    Y: Array,
    Z: Array,
    nodes: ShockNodes,
    residual: ResidualFunction,
    param: Any = None,
    *,
    log_linear: bool = True,
    step: StepFunction = linear_step,
    include_controls: bool = False,
) -> Array:
    """Compute the expected Euler residuals for every simulated period.

    Parameters
    ----------
    policy : LinearPolicy
        Coefficients used for the simulation; ``NN`` drives the shock
        expectation.
    X : Array, shape (nobs, n_x)
        Simulated state levels.
    Y : Array, shape (nobs, n_y)
        Simulated control levels (``n_y`` may be 0).
    Z : Array, shape (nobs, n_z)
        Shock path used for the simulation.
    nodes : ShockNodes
        Discrete innovation support and probabilities.
    residual : callable
        ``residual(theta, param)`` returning one value per equilibrium
        condition (``n_x + n_y`` in total).
    param : any
        Passed through to *residual* untouched.
    log_linear : bool
        Deviation convention used when anchoring at period ``t+1``.
    step : StepFunction
        One-step rule; the same one used for the recursion.
    include_controls : bool
        Insert ``Y'`` and ``Y`` into the residual argument vector.

    Returns
    -------
    Array, shape (nobs, n_x + n_y)
        Probability-weighted residuals.  The last row is zero because no
        period ``t+1`` exists for it.

    Raises
    ------
    DimensionError
        If the shock nodes do not match ``n_z`` or the residual function
        returns a vector of the wrong length.
    """
    nobs, nx = X.shape
    ny = Y.shape[1]
    nz = policy.n_shocks
    if nodes.eps.shape[0] != nz:
        raise DimensionError(
            f"eps has {nodes.eps.shape[0]} rows but the model has {nz} shocks"
        )

    weights = nodes.weights
    E = np.zeros((nobs, nx + ny), dtype=float)
    logger.debug(
        "Euler errors over %d periods and %d shock nodes", nobs - 1, nodes.n_nodes
    )

    # The increment is evaluated at zero deviation, so it does not depend on t.
    x_dev = np.zeros(nx, dtype=float)
    z_dev = np.zeros(nz, dtype=float)
    increments = [
        apply_step(step, x_dev, z_dev, policy) for _ in range(nodes.n_nodes)
    ]

    for t in range(nobs - 1):
        for e in range(nodes.n_nodes):
            Zp = policy.NN @ Z[t + 1] + nodes.eps[:, e]
            Xtil, Ytil = increments[e]
            Xp = from_deviation(Xtil, X[t + 1], log_linear)
            if include_controls:
                Yp = from_deviation(Ytil, Y[t + 1], log_linear)
                theta = np.concatenate([Xp, X[t + 1], X[t], Yp, Y[t + 1], Zp, Z[t + 1]])
            else:
                theta = np.concatenate([Xp, X[t + 1], X[t], Zp, Z[t + 1]])

            values = np.asarray(residual(theta, param), dtype=float).reshape(-1)
            if values.size != nx + ny:
                raise DimensionError(
                    f"residual returned {values.size} values, expected {nx + ny}"
                )
            E[t] += values * weights[e]

    return E


@dataclass(frozen=True)
class EulerErrorSummary:
    """Accuracy statistics of an Euler residual panel.

    Attributes
    ----------
    max_abs : Array, shape (n_eq,)
        Largest absolute residual of each equation.
    mean_abs : Array, shape (n_eq,)
        Mean absolute residual of each equation.
    log10_max : float
        ``log10`` of the overall largest absolute residual (``-inf`` when
        every residual is zero).
    """

    max_abs: Array
    mean_abs: Array
    log10_max: float


def summarize_euler_errors(E: Array) -> EulerErrorSummary:
    """Summarise the evaluated rows of an Euler residual panel.

    The last row is excluded since no expectation is formed for it.
    """
    E = np.asarray(E, dtype=float)
    if E.ndim != 2 or E.shape[0] < 2:
        raise DimensionError("E must have at least two observations")
    evaluated = np.abs(E[:-1])
    overall = float(np.max(evaluated)) if evaluated.size else 0.0
    with np.errstate(divide="ignore"):
        log10_max = float(np.log10(overall))
    return EulerErrorSummary(
        max_abs=np.max(evaluated, axis=0),
        mean_abs=np.mean(evaluated, axis=0),
        log10_max=log10_max,
    )
