"""Exogenous shock paths and discrete innovation grids.

:func:`simulate_exogenous` draws a vector AR(1) path for the shocks ``Z``
and :func:`gauss_hermite_nodes` builds a quadrature grid for the
expectation over next-period innovations used by the Euler-error
evaluator.
"""

from __future__ import annotations

from itertools import product
from typing import Sequence

import numpy as np
from scipy.special import roots_hermitenorm

from .coefficients import DimensionError
from .euler import ShockNodes

Array = np.ndarray


def _sigma_vector(sigma: float | Sequence[float] | Array, n_shocks: int) -> Array:
    sig = np.asarray(sigma, dtype=float).reshape(-1)
    if sig.size == 1:
        sig = np.full(n_shocks, float(sig[0]))
    if sig.size != n_shocks:
        raise DimensionError(f"Expected {n_shocks} shock scales, got {sig.size}")
    if np.any(sig < 0.0):
        raise ValueError("shock standard deviations must be non-negative")
    return sig


def simulate_exogenous(
    NN: Array,
    sigma: float | Sequence[float] | Array,
    nobs: int,
    *,
    seed: int = 0,
    z0: Array | Sequence[float] | None = None,
) -> Array:
    """Draw an exogenous shock path ``Z_t = NN Z_{t-1} + eps_t``.

    Parameters
    ----------
    NN : Array, shape (n_z, n_z)
        Autoregressive matrix.
    sigma : float or array_like, shape (n_z,)
        Standard deviations of the independent normal innovations.
    nobs : int
        Number of periods, including the initial one.
    seed : int
        Seed for ``numpy.random.default_rng``.
    z0 : array_like or None
        First-period shock levels (zeros by default).

    Returns
    -------
    Array, shape (nobs, n_z)
    """
    if nobs <= 0:
        raise ValueError("nobs must be positive")
    NN = np.atleast_2d(np.asarray(NN, dtype=float))
    n_z = NN.shape[0]
    if NN.shape != (n_z, n_z):
        raise DimensionError(f"NN must be square, got shape {NN.shape}")
    sig = _sigma_vector(sigma, n_z)

    Z = np.zeros((nobs, n_z), dtype=float)
    if z0 is not None:
        start = np.asarray(z0, dtype=float).reshape(-1)
        if start.size != n_z:
            raise DimensionError(f"z0 must have {n_z} entries, got {start.size}")
        Z[0] = start

    rng = np.random.default_rng(seed)
    innovations = rng.normal(0.0, 1.0, size=(nobs, n_z)) * sig
    for t in range(1, nobs):
        Z[t] = NN @ Z[t - 1] + innovations[t]
    return Z


def gauss_hermite_nodes(
    n: int, sigma: float | Sequence[float] | Array
) -> ShockNodes:
    """Tensor-product Gauss-Hermite grid for ``N(0, diag(sigma**2))``.

    Parameters
    ----------
    n : int
        Nodes per shock dimension.
    sigma : float or array_like, shape (n_z,)
        Innovation standard deviations; its length sets ``n_z``.

    Returns
    -------
    ShockNodes
        ``eps`` of shape ``(n_z, n**n_z)`` and one-dimensional joint
        probabilities summing to one.
    """
    if n <= 0:
        raise ValueError("n must be positive")
    sig = np.asarray(sigma, dtype=float).reshape(-1)
    sig = _sigma_vector(sig, sig.size)

    x, w = roots_hermitenorm(n)
    w = w / np.sum(w)

    points = list(product(range(n), repeat=sig.size))
    eps = np.array([[x[i] for i in idx] for idx in points], dtype=float).T
    phi = np.array([np.prod([w[i] for i in idx]) for idx in points], dtype=float)
    return ShockNodes(eps=eps * sig[:, None], phi=phi)
