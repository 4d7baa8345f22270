"""linapp_py — Simulation of linearised DSGE models from policy coefficients.

This package simulates the time path of a dynamic model whose solution has
been approximated by a linear or log-linear policy function about its
deterministic steady state, in the notation of Uhlig's toolkit.  Given the
coefficient matrices ``PP, QQ, UU`` (and optionally ``RR, SS, VV``) and an
exogenous shock path, it produces level panels of the state and jump
variables and, on request, Euler-equation errors obtained by integrating
the model's residual function over a discrete shock distribution.

Key references:
    Uhlig (1999), in Computational Methods for the Study of Dynamic Economies.
    Judd (1992), JET 58(2), 410-452 (Euler-equation error accuracy checks).
"""

from .brock_mirman import brock_mirman_policy, brock_mirman_residual
from .coefficients import ControlBlock, ControlGroupError, DimensionError, LinearPolicy
from .deviations import LogDomainError, from_deviation, to_deviation
from .euler import EulerErrorSummary, ShockNodes, euler_errors, summarize_euler_errors
from .io import LinAppMatFile, load_linapp_mat, save_simulation_mat
from .options import SimulationOptions
from .serialization import load_policy, save_policy, save_simulation
from .shocks import gauss_hermite_nodes, simulate_exogenous
from .simulation import SimulationResult, simulate_ssl
from .transition import StepFunction, apply_step, linear_step
from .version import __version__

__all__ = [
    "__version__",
    "ControlBlock",
    "LinearPolicy",
    "SimulationOptions",
    "SimulationResult",
    "ShockNodes",
    "EulerErrorSummary",
    "LinAppMatFile",
    "StepFunction",
    "DimensionError",
    "ControlGroupError",
    "LogDomainError",
    "to_deviation",
    "from_deviation",
    "linear_step",
    "apply_step",
    "simulate_ssl",
    "brock_mirman_policy",
    "brock_mirman_residual",
    "euler_errors",
    "summarize_euler_errors",
    "simulate_exogenous",
    "gauss_hermite_nodes",
    "save_policy",
    "load_policy",
    "save_simulation",
    "load_linapp_mat",
    "save_simulation_mat",
]
