from linapp_py.brock_mirman import brock_mirman_residual as residual

PARAM = {"alpha": 0.35, "beta": 0.95}

__all__ = ["PARAM", "residual"]
