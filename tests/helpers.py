"""Shared test helpers for the linapp_py test suite.

Provides factory functions that build small, analytically tractable linear
policies used across many test modules, so the canonical fixtures live in a
single place.
"""

import numpy as np

from linapp_py.brock_mirman import brock_mirman_policy
from linapp_py.coefficients import ControlBlock, LinearPolicy


def make_scalar_policy(
    pp: float = 0.9, qq: float = 0.1, uu: float = 0.0, nn: float = 0.0
) -> LinearPolicy:
    """Build a one-state, one-shock policy without jump variables.

        X(t) = pp X(t-1) + qq Z(t) + uu

    Parameters
    ----------
    pp, qq, uu : float
        State-rule coefficients.
    nn : float
        Shock persistence (only relevant for Euler errors).

    Returns
    -------
    LinearPolicy
        A policy with ``n_controls == 0``.
    """
    return LinearPolicy(PP=[[pp]], QQ=[[qq]], UU=[uu], NN=[[nn]])


def make_brock_mirman(
    alpha: float = 0.35, beta: float = 0.95, rho: float = 0.9
) -> tuple[LinearPolicy, np.ndarray]:
    """Exact log-linear Brock-Mirman policy and steady state ``[Kbar, Cbar]``."""
    return brock_mirman_policy(alpha=alpha, beta=beta, rho=rho)


def make_two_state_policy() -> tuple[LinearPolicy, np.ndarray]:
    """Build a two-state, one-control, two-shock policy with positive levels."""
    policy = LinearPolicy(
        PP=[[0.8, 0.1], [0.0, 0.5]],
        QQ=[[0.2, 0.0], [0.1, 0.3]],
        UU=[0.0, 0.0],
        NN=[[0.9, 0.0], [0.0, 0.7]],
        controls=ControlBlock(
            initial=[2.0], RR=[[0.4, -0.2]], SS=[[0.5, 0.1]], VV=[0.0]
        ),
    )
    return policy, np.array([1.5, 3.0, 2.0])
