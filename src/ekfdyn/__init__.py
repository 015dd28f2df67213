"""
ekfdyn evaluates augmented orbit dynamics (state plus state transition
matrix) for extended Kalman filtering, implemented in JAX.
"""

from .constants import (
    R_EARTH,
    GM_EARTH,
    J2_EARTH,
    R_MOON,
    GM_MOON,
    J2_MOON,
    R_MARS,
    GM_MARS,
    J2_MARS,
)

from .config import set_dtype, get_dtype

from .force_models import (
    ForceModel,
    CentralBodyGravity,
    KinematicCoupling,
    partial_name,
    POSITION_AGENTS,
    VELOCITY_AGENTS,
    CARTESIAN_AGENTS,
)

from .dynamics import (
    DerivativeAssembler,
    DynamicsConfig,
    create_stm_dynamics,
    augment_state,
    split_state,
    stm_to_matrix,
    stm_from_matrix,
)

from .integrators import (
    StepResult,
    rk4_step,
    propagate,
)

from .estimation import (
    FilterState,
    FilterResult,
    ekf_predict,
    ekf_update,
)

__all__ = [
    # Constants
    "R_EARTH",
    "GM_EARTH",
    "J2_EARTH",
    "R_MOON",
    "GM_MOON",
    "J2_MOON",
    "R_MARS",
    "GM_MARS",
    "J2_MARS",
    # Config
    "set_dtype",
    "get_dtype",
    # Force models
    "ForceModel",
    "CentralBodyGravity",
    "KinematicCoupling",
    "partial_name",
    "POSITION_AGENTS",
    "VELOCITY_AGENTS",
    "CARTESIAN_AGENTS",
    # Dynamics
    "DerivativeAssembler",
    "DynamicsConfig",
    "create_stm_dynamics",
    "augment_state",
    "split_state",
    "stm_to_matrix",
    "stm_from_matrix",
    # Integrators
    "StepResult",
    "rk4_step",
    "propagate",
    # Estimation
    "FilterState",
    "FilterResult",
    "ekf_predict",
    "ekf_update",
]
