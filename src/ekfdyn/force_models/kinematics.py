"""Kinematic coupling between position and velocity agents.

The time-derivative of each position component is the matching velocity
component, so ``d(X)/d(dX) = 1`` and likewise for Y and Z.  Tracking the
full Cartesian agent list therefore needs this model alongside any
acceleration models to obtain the complete dynamics matrix.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from ekfdyn.config import get_dtype
from ekfdyn.force_models._base import (
    POSITION_AGENTS,
    VELOCITY_AGENTS,
    ForceModel,
    partial_name,
)

_KINEMATIC_PARTIALS = {
    partial_name(pos, vel): 1.0 for pos, vel in zip(POSITION_AGENTS, VELOCITY_AGENTS)
}


@dataclass(frozen=True)
class KinematicCoupling(ForceModel):
    """Identity coupling of position rates to velocity.

    Contributes no acceleration.

    Examples:
        ```python
        import jax.numpy as jnp
        from ekfdyn.force_models import CARTESIAN_AGENTS, KinematicCoupling
        A = KinematicCoupling().partials(jnp.zeros(6), CARTESIAN_AGENTS)
        A[0, 3]  # 1.0
        ```
    """

    def acceleration(self, state: ArrayLike) -> Array:
        return jnp.zeros(3, dtype=get_dtype())

    def partials_table(self, state: ArrayLike) -> Mapping[str, float]:
        return dict(_KINEMATIC_PARTIALS)
