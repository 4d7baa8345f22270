from __future__ import annotations

from importlib.util import module_from_spec, spec_from_file_location
import logging
from pathlib import Path
from typing import Annotated, Any, Optional, cast

import numpy as np
import typer

from .brock_mirman import brock_mirman_policy, brock_mirman_residual
from .euler import ResidualFunction, summarize_euler_errors
from .io import load_linapp_mat, save_simulation_mat
from .options import SimulationOptions
from .serialization import load_policy, save_policy, save_simulation
from .shocks import gauss_hermite_nodes, simulate_exogenous
from .simulation import simulate_ssl

app = typer.Typer(help="Simulate linearised DSGE models from Uhlig-style policy coefficients")

logger = logging.getLogger(__name__)


def _load_residual(
    module_file: str, symbol: str, param_symbol: str
) -> tuple[ResidualFunction, Any]:
    module_path = Path(module_file)
    if not module_path.exists():
        raise FileNotFoundError(f"Residual module not found: {module_path}")
    spec = spec_from_file_location(module_path.stem, module_path)
    if spec is None or spec.loader is None:
        raise RuntimeError(f"Could not load module from {module_path}")
    module = module_from_spec(spec)
    spec.loader.exec_module(module)
    func = getattr(module, symbol, None)
    if func is None or not callable(func):
        raise RuntimeError(
            f"Residual module {module_path} must define callable {symbol}(theta, param)"
        )
    logger.info("Loaded residual %s from %s", symbol, module_path)
    return cast(ResidualFunction, func), getattr(module, param_symbol, None)


@app.callback()
def main_options(
    verbose: Annotated[bool, typer.Option(help="Log progress at INFO level")] = False,
) -> None:
    logging.basicConfig(
        format="%(levelname)s %(name)s: %(message)s",
        level=logging.INFO if verbose else logging.WARNING,
    )


@app.command("demo")
def demo(
    alpha: Annotated[float, typer.Option(help="Capital share")] = 0.35,
    beta: Annotated[float, typer.Option(help="Discount factor")] = 0.95,
    rho: Annotated[float, typer.Option(help="Technology persistence")] = 0.9,
    sigma: Annotated[float, typer.Option(help="Technology shock std dev")] = 0.02,
    nobs: Annotated[int, typer.Option(help="Number of periods")] = 40,
    seed: Annotated[int, typer.Option(help="RNG seed")] = 0,
) -> None:
    policy, xybar = brock_mirman_policy(alpha, beta, rho)
    Z = simulate_exogenous(policy.NN, sigma, nobs, seed=seed)
    result = simulate_ssl(
        policy,
        X0=xybar[:1],
        Z=Z,
        XYbar=xybar,
        options=SimulationOptions(
            log_linear=True, euler_errors=True, include_controls_in_residual=True
        ),
        residual=brock_mirman_residual,
        param={"alpha": alpha, "beta": beta},
        nodes=gauss_hermite_nodes(5, sigma),
    )
    summary = summarize_euler_errors(result.E)

    typer.echo("steady state [k, c]:")
    typer.echo(str(xybar))
    typer.echo("first five capital levels:")
    typer.echo(str(result.X[:5, 0]))
    typer.echo("max abs Euler errors:")
    typer.echo(str(summary.max_abs))


@app.command("from-mat")
def from_mat_cmd(
    mat: Annotated[str, typer.Option(help="MATLAB file with PP, QQ, UU, NN, ...")],
    output: Annotated[str, typer.Option(help="Output policy JSON path")],
) -> None:
    loaded = load_linapp_mat(mat)
    save_policy(loaded.policy, output)
    typer.echo(f"Policy written to {output}")


@app.command("simulate")
def simulate_cmd(
    policy_path: Annotated[
        str, typer.Option("--policy", help="Path to saved policy JSON")
    ],
    output: Annotated[str, typer.Option(help="Output path (.json or .mat)")],
    xybar: Annotated[
        list[float], typer.Option(help="Steady-state levels of X then Y (repeat)")
    ],
    x0: Annotated[
        Optional[list[float]],
        typer.Option(help="Initial state levels (repeat); defaults to steady state"),
    ] = None,
    nobs: Annotated[int, typer.Option(help="Number of periods")] = 100,
    sigma: Annotated[float, typer.Option(help="Std dev of shock innovations")] = 0.01,
    seed: Annotated[int, typer.Option(help="RNG seed")] = 0,
    levels: Annotated[
        bool, typer.Option(help="Linearise in levels instead of logs")
    ] = False,
    residual: Annotated[
        Optional[str], typer.Option(help="Python module defining the residual function")
    ] = None,
    symbol: Annotated[str, typer.Option(help="Residual function symbol")] = "residual",
    param_symbol: Annotated[
        str, typer.Option(help="Module attribute passed as the residual parameters")
    ] = "PARAM",
    nodes: Annotated[int, typer.Option(help="Gauss-Hermite nodes per shock")] = 5,
    include_controls: Annotated[
        bool, typer.Option(help="Insert control levels into the residual arguments")
    ] = False,
) -> None:
    policy = load_policy(policy_path)
    XYbar = np.asarray(xybar, dtype=float)
    X0 = XYbar[: policy.n_states] if x0 is None else np.asarray(x0, dtype=float)
    Z = simulate_exogenous(policy.NN, sigma, nobs, seed=seed)

    options = SimulationOptions(
        log_linear=not levels,
        euler_errors=residual is not None,
        include_controls_in_residual=include_controls,
    )
    residual_fn = None
    param = None
    shock_nodes = None
    if residual is not None:
        residual_fn, param = _load_residual(residual, symbol, param_symbol)
        shock_nodes = gauss_hermite_nodes(nodes, np.full(policy.n_shocks, sigma))

    result = simulate_ssl(
        policy,
        X0=X0,
        Z=Z,
        XYbar=XYbar,
        options=options,
        residual=residual_fn,
        param=param,
        nodes=shock_nodes,
    )
    if Path(output).suffix == ".mat":
        save_simulation_mat(result, output)
    else:
        save_simulation(result, output)
    logger.info("Simulated %d periods", nobs)
    typer.echo(f"Simulation written to {output}")
    if residual is not None:
        summary = summarize_euler_errors(result.E)
        typer.echo(f"log10 max abs Euler error: {summary.log10_max:.4f}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
