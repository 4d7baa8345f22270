from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np
from scipy.io import loadmat, savemat

from ..coefficients import ControlBlock, ControlGroupError, LinearPolicy
from ..simulation import SimulationResult

Array = np.ndarray

_CONTROL_KEYS = ("Y0", "RR", "SS", "VV")


@dataclass(frozen=True)
class LinAppMatFile:
    policy: LinearPolicy
    X0: Array | None = None
    XYbar: Array | None = None


def load_linapp_mat(path: str | Path) -> LinAppMatFile:
    mat_path = Path(path)
    payload = loadmat(mat_path)

    missing = [key for key in ("PP", "QQ", "UU", "NN") if key not in payload]
    if missing:
        raise KeyError(f"{mat_path} is missing {', '.join(missing)}")

    present = [key for key in _CONTROL_KEYS if _has_values(payload, key)]
    block = None
    if present:
        if len(present) != len(_CONTROL_KEYS):
            absent = sorted(set(_CONTROL_KEYS) - set(present))
            raise ControlGroupError(
                f"{mat_path} has {', '.join(present)} but not {', '.join(absent)}"
            )
        block = ControlBlock(
            initial=_vector(payload["Y0"]),
            RR=np.asarray(payload["RR"], dtype=float),
            SS=np.asarray(payload["SS"], dtype=float),
            VV=_vector(payload["VV"]),
        )

    policy = LinearPolicy(
        PP=np.asarray(payload["PP"], dtype=float),
        QQ=np.asarray(payload["QQ"], dtype=float),
        UU=_vector(payload["UU"]),
        NN=np.asarray(payload["NN"], dtype=float),
        controls=block,
    )
    return LinAppMatFile(
        policy=policy,
        X0=_vector(payload["X0"]) if _has_values(payload, "X0") else None,
        XYbar=_vector(payload["XYbar"]) if _has_values(payload, "XYbar") else None,
    )


def save_simulation_mat(result: SimulationResult, path: str | Path) -> None:
    savemat(
        Path(path),
        {
            "X": np.asarray(result.X, dtype=float),
            "Y": np.asarray(result.Y, dtype=float),
            "E": np.asarray(result.E, dtype=float),
        },
    )


def _has_values(payload: dict[str, Any], key: str) -> bool:
    return key in payload and np.asarray(payload[key]).size > 0


def _vector(value: Any) -> Array:
    return np.asarray(value, dtype=float).reshape(-1)
