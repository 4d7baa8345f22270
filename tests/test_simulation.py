"""Tests for the panel recursion in ``simulate_ssl``.

The simulator converts the first-period levels to deviations, advances them
with the one-step rule along the shock path, and converts the deviation
panel back to levels.  The checks below cover the worked scalar example,
exactness of the first row, the steady state as a fixed point, the path
without jump variables, and the gating of Euler-error evaluation.
"""

import numpy as np
import pytest

from helpers import make_brock_mirman, make_scalar_policy, make_two_state_policy
from linapp_py.coefficients import ControlGroupError, DimensionError, LinearPolicy
from linapp_py.deviations import LogDomainError
from linapp_py.euler import ShockNodes
from linapp_py.options import SimulationOptions
from linapp_py.simulation import simulate_ssl
from linapp_py.transition import linear_step


def test_scalar_linear_example():
    """One state, no controls: X = 1 + [0, 0.005, 0.0025] in levels."""
    policy = make_scalar_policy(pp=0.9, qq=0.1, uu=0.0)
    result = simulate_ssl(
        policy,
        X0=[1.0],
        Z=[[0.0], [0.05], [-0.02]],
        XYbar=[1.0],
        options=SimulationOptions(log_linear=False),
    )

    assert result.X.shape == (3, 1)
    assert np.allclose(result.X[:, 0], [1.0, 1.005, 1.0025], atol=1e-14)
    assert result.Y.shape == (3, 0)
    assert np.array_equal(result.E, np.zeros((3, 1)))


def test_log_linear_example_scales_multiplicatively():
    policy = make_scalar_policy(pp=0.5, qq=1.0)
    result = simulate_ssl(policy, X0=[2.0], Z=[[0.0], [0.1], [0.0]], XYbar=[2.0])

    assert np.allclose(result.X[:, 0], [2.0, 2.0 * np.exp(0.1), 2.0 * np.exp(0.05)])


def test_first_row_equals_initial_levels_exactly():
    policy, xybar = make_two_state_policy()
    X0 = np.array([1.1, 3.3])
    Z = np.random.default_rng(0).normal(0.0, 0.01, size=(12, 2))

    for log_linear in (True, False):
        result = simulate_ssl(
            policy, X0, Z, xybar, options=SimulationOptions(log_linear=log_linear)
        )
        assert np.array_equal(result.X[0], X0)
        assert np.array_equal(result.Y[0], policy.controls.initial)
        assert result.X.shape == (12, 2)
        assert result.Y.shape == (12, 1)
        assert result.E.shape == (12, 3)


def test_steady_state_is_a_fixed_point_without_shocks():
    policy, xybar = make_two_state_policy()
    result = simulate_ssl(policy, X0=xybar[:2], Z=np.zeros((25, 2)), XYbar=xybar)

    assert np.allclose(result.X, np.tile(xybar[:2], (25, 1)))
    assert np.allclose(result.Y, np.tile(xybar[2:], (25, 1)))


def test_brock_mirman_path_matches_closed_form():
    """The log-linear Brock-Mirman rules are exact, so levels follow K' = a b e^z K^a."""
    alpha, beta = 0.35, 0.95
    policy, xybar = make_brock_mirman(alpha=alpha, beta=beta)
    Z = np.array([[0.0], [0.02], [-0.01], [0.03]])
    result = simulate_ssl(policy, X0=xybar[:1], Z=Z, XYbar=xybar)

    K = [xybar[0]]
    for t in range(1, 4):
        K.append(alpha * beta * np.exp(Z[t, 0]) * K[-1] ** alpha)
    assert np.allclose(result.X[:, 0], K, rtol=1e-12)

    C = (1.0 - alpha * beta) * np.exp(Z[1:, 0]) * np.array(K[:-1]) ** alpha
    assert np.allclose(result.Y[1:, 0], C, rtol=1e-12)


def test_no_control_path_passes_only_state_coefficients():
    calls: list[int] = []

    def recording_step(x, z, *coefficients):
        calls.append(len(coefficients))
        return linear_step(x, z, *coefficients)

    policy = make_scalar_policy()
    result = simulate_ssl(
        policy, X0=[1.0], Z=np.zeros((6, 1)), XYbar=[1.0], step=recording_step
    )

    assert calls == [3] * 5
    assert result.Y.shape == (6, 0)


def test_control_path_passes_all_coefficients():
    calls: list[int] = []

    def recording_step(x, z, *coefficients):
        calls.append(len(coefficients))
        return linear_step(x, z, *coefficients)

    policy, xybar = make_brock_mirman()
    simulate_ssl(policy, X0=xybar[:1], Z=np.zeros((4, 1)), XYbar=xybar, step=recording_step)
    assert calls == [6] * 3


def test_column_vector_step_results_are_accepted():
    def column_step(x, z, PP, QQ, UU):
        col = PP @ x.reshape(-1, 1) + QQ @ z.reshape(-1, 1) + UU.reshape(-1, 1)
        return col, None

    policy = make_scalar_policy(pp=0.9, qq=0.1)
    result = simulate_ssl(
        policy,
        X0=[1.0],
        Z=[[0.0], [0.05], [-0.02]],
        XYbar=[1.0],
        options=SimulationOptions(log_linear=False),
        step=column_step,
    )
    assert np.allclose(result.X[:, 0], [1.0, 1.005, 1.0025])


def test_single_observation_returns_initial_row():
    policy, xybar = make_brock_mirman()
    result = simulate_ssl(policy, X0=xybar[:1], Z=[[0.3]], XYbar=xybar)
    assert np.array_equal(result.X, xybar[None, :1])
    assert result.E.shape == (1, 2)


def test_euler_errors_are_skipped_by_default():
    calls = 0

    def counting_residual(theta, param):
        nonlocal calls
        calls += 1
        return np.zeros(2)

    policy, xybar = make_brock_mirman()
    nodes = ShockNodes(eps=[[-0.01, 0.01]], phi=[0.5, 0.5])
    result = simulate_ssl(
        policy,
        X0=xybar[:1],
        Z=np.zeros((10, 1)),
        XYbar=xybar,
        residual=counting_residual,
        nodes=nodes,
    )

    assert calls == 0
    assert np.array_equal(result.E, np.zeros((10, 2)))


def test_euler_errors_require_residual_and_nodes():
    policy, xybar = make_brock_mirman()
    with pytest.raises(ValueError, match="residual function and nodes"):
        simulate_ssl(
            policy,
            X0=xybar[:1],
            Z=np.zeros((3, 1)),
            XYbar=xybar,
            options=SimulationOptions(euler_errors=True),
        )


def test_missing_controls_fail_fast():
    policy = make_scalar_policy()
    with pytest.raises(ControlGroupError):
        simulate_ssl(policy, X0=[1.0], Z=np.zeros((3, 1)), XYbar=[1.0, 2.0])


def test_log_mode_rejects_non_positive_initial_levels():
    policy = make_scalar_policy()
    with pytest.raises(LogDomainError):
        simulate_ssl(policy, X0=[0.0], Z=np.zeros((3, 1)), XYbar=[1.0])


def test_step_failure_propagates():
    def failing_step(x, z, *coefficients):
        raise FloatingPointError("boom")

    policy = make_scalar_policy()
    with pytest.raises(FloatingPointError, match="boom"):
        simulate_ssl(
            policy, X0=[1.0], Z=np.zeros((3, 1)), XYbar=[1.0], step=failing_step
        )


def test_state_shock_matrix_with_wrong_row_count_fails_fast():
    policy = LinearPolicy(
        PP=[[0.5, 0.0], [0.0, 0.5]], QQ=[[1.0]], UU=[0.0, 0.0], NN=[[0.0]]
    )
    with pytest.raises(DimensionError, match="QQ"):
        simulate_ssl(
            policy,
            X0=[1.0, 1.0],
            Z=[[0.0], [0.1], [0.0]],
            XYbar=[1.0, 1.0],
            options=SimulationOptions(log_linear=False),
        )


def test_explosive_step_raises_instead_of_returning_infinite_levels():
    def explosive_step(x, z, *coefficients):
        return x + 1000.0, None

    policy = make_scalar_policy()
    with pytest.raises(LogDomainError, match="overflow"):
        simulate_ssl(
            policy, X0=[1.0], Z=np.zeros((3, 1)), XYbar=[1.0], step=explosive_step
        )
