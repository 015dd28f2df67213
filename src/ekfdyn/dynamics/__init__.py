"""Augmented-state dynamics for STM propagation.

- :class:`DerivativeAssembler` -- sums force-model contributions and
  propagates the STM (``dPhi/dt = A @ Phi``)
- :func:`create_stm_dynamics` -- build an assembler from a
  :class:`DynamicsConfig`
- Layout helpers packing the STM row-major after the Cartesian state
"""

from .assembler import DerivativeAssembler
from .config import DynamicsConfig
from .factory import create_stm_dynamics
from .layout import (
    CARTESIAN_SIZE,
    augment_state,
    check_layout,
    split_state,
    state_size,
    stm_from_matrix,
    stm_to_matrix,
)

__all__ = [
    "DerivativeAssembler",
    "DynamicsConfig",
    "create_stm_dynamics",
    "CARTESIAN_SIZE",
    "augment_state",
    "check_layout",
    "split_state",
    "state_size",
    "stm_from_matrix",
    "stm_to_matrix",
]
