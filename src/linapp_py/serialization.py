from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import numpy as np

from .coefficients import ControlBlock, LinearPolicy
from .simulation import SimulationResult

Array = np.ndarray


def save_policy(policy: LinearPolicy, path: str | Path) -> None:
    target = Path(path)
    controls = None
    if policy.controls is not None:
        controls = {
            "initial": _to_list(policy.controls.initial),
            "RR": _to_list(policy.controls.RR),
            "SS": _to_list(policy.controls.SS),
            "VV": _to_list(policy.controls.VV),
        }
    payload = {
        "PP": _to_list(policy.PP),
        "QQ": _to_list(policy.QQ),
        "UU": _to_list(policy.UU),
        "NN": _to_list(policy.NN),
        "controls": controls,
    }
    target.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")


def load_policy(path: str | Path) -> LinearPolicy:
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    controls = payload.get("controls")
    block = None
    if controls is not None:
        block = ControlBlock(
            initial=_to_array(controls["initial"]),
            RR=_to_array(controls["RR"]),
            SS=_to_array(controls["SS"]),
            VV=_to_array(controls["VV"]),
        )
    return LinearPolicy(
        PP=_to_array(payload["PP"]),
        QQ=_to_array(payload["QQ"]),
        UU=_to_array(payload["UU"]),
        NN=_to_array(payload["NN"]),
        controls=block,
    )


def save_simulation(result: SimulationResult, path: str | Path) -> None:
    target = Path(path)
    payload = {
        "X": _to_list(result.X),
        "Y": _to_list(result.Y),
        "E": _to_list(result.E),
    }
    target.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")


def _to_list(array: Array | None) -> Any:
    if array is None:
        return None
    return np.asarray(array, dtype=float).tolist()


def _to_array(value: Any) -> Array:
    return np.asarray(value, dtype=float)
