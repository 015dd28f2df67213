"""Force models contributing accelerations and partial derivatives.

Every model implements the :class:`ForceModel` contract:

- **Gravity**: central-body two-body attraction with J2
- **Kinematics**: identity coupling of position rates to velocity

Partials are addressed by name (``"dX wrt Y"``); a model returns zero
for any partial it does not implement, so independent models can be
summed by the derivative assembler without coordination.
"""

from ._base import (
    CARTESIAN_AGENTS,
    PARTIAL_SEPARATOR,
    POSITION_AGENTS,
    VELOCITY_AGENTS,
    ForceModel,
    partial_name,
)
from .gravity import CentralBodyGravity
from .kinematics import KinematicCoupling

__all__ = [
    # Contract
    "ForceModel",
    "partial_name",
    "PARTIAL_SEPARATOR",
    # Agent names
    "POSITION_AGENTS",
    "VELOCITY_AGENTS",
    "CARTESIAN_AGENTS",
    # Models
    "CentralBodyGravity",
    "KinematicCoupling",
]
