"""One-step transition of the linear law of motion.

The recursion and the Euler-error evaluator advance the model one period
at a time through a *step function* with the signature of
:class:`StepFunction`.  :func:`linear_step` is the standard rule; callers
may pass any callable with the same signature, e.g. to record calls or
to apply a nonlinear correction.
"""

from __future__ import annotations

from typing import Protocol

import numpy as np

from .coefficients import DimensionError, LinearPolicy

Array = np.ndarray


class StepFunction(Protocol):
    def __call__(
        self,
        x: Array,
        z: Array,
        PP: Array,
        QQ: Array,
        UU: Array,
        RR: Array | None = None,
        SS: Array | None = None,
        VV: Array | None = None,
    ) -> tuple[Array, Array | None]: ...


def linear_step(
    x: Array,
    z: Array,
    PP: Array,
    QQ: Array,
    UU: Array,
    RR: Array | None = None,
    SS: Array | None = None,
    VV: Array | None = None,
) -> tuple[Array, Array | None]:
    """Advance state (and control) deviations by one period.

    Computes::

        x' = PP x + QQ z + UU
        y' = RR x + SS z + VV

    Parameters
    ----------
    x : Array, shape (n_x,)
        Current state deviation.
    z : Array, shape (n_z,)
        Next-period shock level.
    PP, QQ, UU : Array
        State-rule coefficients.
    RR, SS, VV : Array or None
        Control-rule coefficients.  The control part is skipped when
        they are omitted.

    Returns
    -------
    x_next : Array, shape (n_x,)
        Next-period state deviation.
    y_next : Array or None, shape (n_y,)
        Next-period control deviation, or ``None`` without a control rule.
    """
    x_next = PP @ x + QQ @ z + UU
    if RR is None:
        return x_next, None
    y_next = RR @ x + SS @ z + VV
    return x_next, y_next


def apply_step(
    step: StepFunction, x: Array, z: Array, policy: LinearPolicy
) -> tuple[Array, Array]:
    """Call *step* for one observation and return flat result rows.

    The control-rule coefficients are passed only when *policy* carries a
    control block.  Results are flattened so that steps returning column
    vectors are accepted as well.  Without controls the second return
    value is an empty row.
    """
    x = np.asarray(x, dtype=float).reshape(-1)
    z = np.asarray(z, dtype=float).reshape(-1)

    block = policy.controls
    if block is None:
        x_next, _ = step(x, z, policy.PP, policy.QQ, policy.UU)
        y_row = np.zeros(0, dtype=float)
    else:
        x_next, y_next = step(
            x, z, policy.PP, policy.QQ, policy.UU, block.RR, block.SS, block.VV
        )
        if y_next is None:
            raise DimensionError("step returned no control deviation")
        y_row = np.asarray(y_next, dtype=float).reshape(-1)
        if y_row.size != policy.n_controls:
            raise DimensionError(
                f"step returned {y_row.size} controls, expected {policy.n_controls}"
            )

    x_row = np.asarray(x_next, dtype=float).reshape(-1)
    if x_row.size != policy.n_states:
        raise DimensionError(
            f"step returned {x_row.size} states, expected {policy.n_states}"
        )
    return x_row, y_row
