"""Package‑wide constants: fixed sample sets, tolerances and probe offsets."""

from typing import Final

# Node‑exact comparisons use an absolute tolerance only.
DEFAULT_TOLERANCE: Final = 1e-12

# Sample counts exercised by the linear reproduction check.
DEFAULT_ORDERS: Final = (4,)

# Environment variable that pins the random seed for probe generation.
SEED_ENV_VAR: Final = "INTERP_CONTRACT_SEED"

# Three evenly spaced nodes used by the type and capability checks.
BASIC_POINTS: Final = (1.0, 2.0, 3.0)
BASIC_VALUES: Final = (10.0, 20.0, 30.0)

# Interior probe for the gated operations.
PROBE_POINT: Final = 1.2

# Non‑uniformly spaced nodes for the node‑matching check.
NODE_POINTS: Final = (1.0, 2.0, 2.3, 3.0, 8.0)
NODE_VALUES: Final = (50.0, 20.0, 30.0, 10.0, -20.0)

# Origin of the linear samples y = LINEAR_Y_OFFSET + (x - LINEAR_X_OFFSET).
LINEAR_X_OFFSET: Final = 4.0
LINEAR_Y_OFFSET: Final = 2.0

__all__ = [
    "DEFAULT_TOLERANCE",
    "DEFAULT_ORDERS",
    "SEED_ENV_VAR",
    "BASIC_POINTS",
    "BASIC_VALUES",
    "PROBE_POINT",
    "NODE_POINTS",
    "NODE_VALUES",
    "LINEAR_X_OFFSET",
    "LINEAR_Y_OFFSET",
]
