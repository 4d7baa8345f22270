"""Brock-Mirman growth model with log utility and full depreciation.

With ``C + K' = e^z K^alpha`` and ``u(C) = ln C`` the optimal rules are
exactly log-linear about the steady state:

    ln(K'/Kbar) = alpha ln(K/Kbar) + z
    ln(C/Cbar)  = alpha ln(K/Kbar) + z

which makes the model a convenient example for the simulator and the
Euler-error evaluator.
"""

from __future__ import annotations

from typing import Mapping

import numpy as np

from .coefficients import ControlBlock, LinearPolicy

Array = np.ndarray


def brock_mirman_policy(
    alpha: float = 0.35, beta: float = 0.95, rho: float = 0.9
) -> tuple[LinearPolicy, Array]:
    """Return the exact log-linear policy and the steady state ``[Kbar, Cbar]``.

    The control block starts consumption at its steady-state level.
    """
    kbar = (alpha * beta) ** (1.0 / (1.0 - alpha))
    cbar = kbar**alpha - kbar
    policy = LinearPolicy(
        PP=[[alpha]],
        QQ=[[1.0]],
        UU=[0.0],
        NN=[[rho]],
        controls=ControlBlock(initial=[cbar], RR=[[alpha]], SS=[[1.0]], VV=[0.0]),
    )
    return policy, np.array([kbar, cbar])


def brock_mirman_residual(theta: Array, param: Mapping[str, float]) -> Array:
    """Euler equation and resource constraint.

    Expects the argument layout ``[K'', K', K, C', C, z', z]``, i.e. a
    simulation run with ``include_controls_in_residual=True``.  ``K'`` is
    the capital chosen in the period of ``C`` and ``z``.
    """
    alpha, beta = param["alpha"], param["beta"]
    _, kp, k, cp, c, zp, z = np.asarray(theta, dtype=float)
    euler = beta * alpha * np.exp(zp) * kp ** (alpha - 1.0) * c / cp - 1.0
    resource = c + kp - np.exp(z) * k**alpha
    return np.array([euler, resource], dtype=float)
