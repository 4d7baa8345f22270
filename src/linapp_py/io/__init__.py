from .matlab import LinAppMatFile, load_linapp_mat, save_simulation_mat

__all__ = [
    "LinAppMatFile",
    "load_linapp_mat",
    "save_simulation_mat",
]
