"""Run-time options for :func:`linapp_py.simulation.simulate_ssl`."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SimulationOptions:
    """Switches controlling a simulation run.

    Attributes
    ----------
    log_linear : bool
        If True (default) the X and Y variables are log-linearised, so
        deviations are ``ln(V / Vbar)``.  If False they are simply
        linearised and deviations are ``V - Vbar``.  Shocks are always
        treated in levels.
    euler_errors : bool
        Compute the Euler residual panel.  Off unless explicitly
        requested; when off the residual function is never called.
    include_controls_in_residual : bool
        Lay out the residual argument vector as
        ``[X'', X', X, Y', Y, Z', Z]`` instead of ``[X'', X', X, Z', Z]``.
    """

    log_linear: bool = True
    euler_errors: bool = False
    include_controls_in_residual: bool = False
