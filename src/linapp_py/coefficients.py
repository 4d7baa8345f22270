"""Linear policy-function coefficients in Uhlig's notation.

A model log-linearised (or linearised) about its steady state and solved
with Uhlig's toolkit, or any equivalent solver, yields a recursive law of
motion for the endogenous state deviations ``X`` and the jump-variable
deviations ``Y`` given the exogenous shocks ``Z``:

.. math::

    \\tilde{X}_{t} = PP\\,\\tilde{X}_{t-1} + QQ\\,Z_{t} + UU

    \\tilde{Y}_{t} = RR\\,\\tilde{X}_{t-1} + SS\\,Z_{t} + VV

    Z_{t} = NN\\,Z_{t-1} + \\epsilon_{t}

The jump-variable rule is optional: a model without controls supplies
only ``PP``, ``QQ``, and ``UU``.  The three control-rule matrices and
the initial control levels travel together in a :class:`ControlBlock` so
that they are either all present or all absent.

References
----------
Uhlig, H. (1999). "A toolkit for analysing nonlinear dynamic stochastic
    models easily." In *Computational Methods for the Study of Dynamic
    Economies*, Oxford University Press, 30-61.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

Array = np.ndarray


class DimensionError(ValueError):
    """Raised when array shapes are inconsistent with the coefficients."""


class ControlGroupError(ValueError):
    """Raised when the control group disagrees with the steady state.

    The number of controls inferred from the steady-state vector
    (``len(XYbar) - nx``) must be zero exactly when no
    :class:`ControlBlock` is supplied.
    """


def _to_1d(array: Array | Sequence[float], name: str) -> Array:
    out = np.asarray(array, dtype=float)
    if out.ndim > 2 or (out.ndim == 2 and min(out.shape) > 1):
        raise DimensionError(f"{name} must be a vector, got shape {out.shape}")
    return out.reshape(-1)


def _to_2d(array: Array | Sequence[Sequence[float]], name: str) -> Array:
    out = np.asarray(array, dtype=float)
    if out.ndim == 0:
        out = out.reshape(1, 1)
    if out.ndim != 2:
        raise DimensionError(f"{name} must be a matrix, got shape {out.shape}")
    return out


def _expect_shape(array: Array, shape: tuple[int, ...], name: str) -> None:
    if array.shape != shape:
        raise DimensionError(f"{name} must have shape {shape}, got {array.shape}")


@dataclass(frozen=True)
class ControlBlock:
    """Initial levels and decision-rule coefficients of the jump variables.

    Attributes
    ----------
    initial : Array, shape (n_y,)
        Control levels in the first period (``Y0``).
    RR : Array, shape (n_y, n_x)
        Coefficients of ``X(t-1)`` on ``Y(t)``.
    SS : Array, shape (n_y, n_z)
        Coefficients of ``Z(t)`` on ``Y(t)``.
    VV : Array, shape (n_y,)
        Constants of ``Y(t)``.
    """

    initial: Array
    RR: Array
    SS: Array
    VV: Array

    def __post_init__(self) -> None:
        object.__setattr__(self, "initial", _to_1d(self.initial, "Y0"))
        object.__setattr__(self, "RR", _to_2d(self.RR, "RR"))
        object.__setattr__(self, "SS", _to_2d(self.SS, "SS"))
        object.__setattr__(self, "VV", _to_1d(self.VV, "VV"))

    @property
    def n_controls(self) -> int:
        return int(self.RR.shape[0])


@dataclass(frozen=True)
class LinearPolicy:
    """Linear law of motion for states and, optionally, controls.

    Attributes
    ----------
    PP : Array, shape (n_x, n_x)
        Coefficients of ``X(t-1)`` on ``X(t)``.
    QQ : Array, shape (n_x, n_z)
        Coefficients of ``Z(t)`` on ``X(t)``.
    UU : Array, shape (n_x,)
        Constants of ``X(t)``.
    NN : Array, shape (n_z, n_z)
        Autoregressive matrix of the exogenous shocks.  Only used when
        computing Euler errors.
    controls : ControlBlock or None
        Jump-variable rule and initial levels; ``None`` for models
        without controls.
    """

    PP: Array
    QQ: Array
    UU: Array
    NN: Array
    controls: ControlBlock | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "PP", _to_2d(self.PP, "PP"))
        object.__setattr__(self, "QQ", _to_2d(self.QQ, "QQ"))
        object.__setattr__(self, "UU", _to_1d(self.UU, "UU"))
        object.__setattr__(self, "NN", _to_2d(self.NN, "NN"))

    @property
    def n_states(self) -> int:
        """Number of endogenous state variables."""
        return int(self.PP.shape[0])

    @property
    def n_shocks(self) -> int:
        """Number of exogenous shock variables."""
        return int(self.QQ.shape[1])

    @property
    def n_controls(self) -> int:
        """Number of jump variables (0 without a control block)."""
        return 0 if self.controls is None else self.controls.n_controls

    def check(self, X0: Array, Z: Array, XYbar: Array) -> None:
        """Verify that the simulation inputs agree with the coefficients.

        Parameters
        ----------
        X0 : Array, shape (n_x,)
            Initial state levels.
        Z : Array, shape (nobs, n_z)
            Exogenous shock path.
        XYbar : Array, shape (n_x + n_y,)
            Steady-state levels of X followed by Y.

        Raises
        ------
        DimensionError
            If any array has a shape incompatible with the coefficients.
        ControlGroupError
            If ``len(XYbar) - n_x`` does not match the control block.
        """
        nx = self.n_states
        nz = self.n_shocks

        _expect_shape(self.PP, (nx, nx), "PP")
        _expect_shape(self.QQ, (nx, nz), "QQ")
        _expect_shape(self.UU, (nx,), "UU")
        _expect_shape(self.NN, (nz, nz), "NN")
        _expect_shape(X0, (nx,), "X0")

        if Z.ndim != 2:
            raise DimensionError(f"Z must have shape (nobs, {nz}), got {Z.shape}")
        if Z.shape[1] != nz:
            raise DimensionError(
                f"Z has {Z.shape[1]} columns but QQ implies {nz} shocks"
            )
        if Z.shape[0] == 0:
            raise DimensionError("Z must contain at least one observation")

        if XYbar.size < nx:
            raise DimensionError(
                f"XYbar has {XYbar.size} entries, fewer than the {nx} states"
            )
        ny = XYbar.size - nx

        if self.controls is None:
            if ny > 0:
                raise ControlGroupError(
                    f"XYbar implies {ny} controls but no Y0, RR, SS, VV were given"
                )
            return
        if ny == 0:
            raise ControlGroupError(
                "Y0, RR, SS, VV were given but XYbar has no control entries"
            )

        block = self.controls
        _expect_shape(block.RR, (ny, nx), "RR")
        _expect_shape(block.SS, (ny, nz), "SS")
        _expect_shape(block.VV, (ny,), "VV")
        _expect_shape(block.initial, (ny,), "Y0")
