"""Factory for augmented-state dynamics.

Composes the configured force models into a
:class:`~ekfdyn.dynamics.assembler.DerivativeAssembler`, which is a
``dynamics(t, state) -> derivative`` callable compatible with all
ekfdyn integrators.
"""

from __future__ import annotations

from collections.abc import Sequence

from ekfdyn.dynamics.assembler import DerivativeAssembler
from ekfdyn.dynamics.config import DynamicsConfig
from ekfdyn.force_models import ForceModel, KinematicCoupling


def create_stm_dynamics(
    config: DynamicsConfig | None = None,
    extra_models: Sequence[ForceModel] = (),
    debug: bool = False,
) -> DerivativeAssembler:
    """Create the augmented-state dynamics for *config*.

    Args:
        config: Dynamics configuration.  Defaults to Earth with J2 and
            the full Cartesian agent list.
        extra_models: Additional force models appended after the
            configured ones.
        debug: Enable the assembler's diagnostic logging.

    Returns:
        DerivativeAssembler: Callable ``dynamics(t, state) -> derivative``
        for states of length ``6 + N**2``.

    Examples:
        ```python
        import jax.numpy as jnp
        from ekfdyn.dynamics import augment_state, create_stm_dynamics
        from ekfdyn.integrators import rk4_step
        dynamics = create_stm_dynamics()
        s0 = augment_state(jnp.array([6878e3, 0.0, 0.0, 0.0, 7612.0, 0.0]), 6)
        result = rk4_step(dynamics, 0.0, s0, 60.0)
        ```
    """
    if config is None:
        config = DynamicsConfig.earth_j2()

    models: list[ForceModel] = [config.body]
    if config.include_kinematics:
        models.append(KinematicCoupling())
    models.extend(extra_models)

    return DerivativeAssembler(models, config.active_agents, debug=debug)
