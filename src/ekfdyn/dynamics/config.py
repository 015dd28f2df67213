"""Configuration dataclass for the STM dynamics factory.

:class:`DynamicsConfig` selects the central body, the tracked agents and
whether the kinematic position/velocity coupling is included.  The
configuration is static: it is read once by
:func:`~ekfdyn.dynamics.factory.create_stm_dynamics` and captured by the
returned assembler.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ekfdyn.force_models import CARTESIAN_AGENTS, POSITION_AGENTS, CentralBodyGravity


@dataclass(frozen=True)
class DynamicsConfig:
    """Configuration for augmented-state dynamics.

    Args:
        body: Central-body gravity model.  Defaults to Earth with J2.
        active_agents: Ordered agent names tracked by the STM.
        include_kinematics: Add the ``d(X)/d(dX) = 1`` coupling.  Only
            meaningful when velocity agents are tracked.

    Examples:
        ```python
        from ekfdyn.dynamics import DynamicsConfig
        config = DynamicsConfig.two_body()
        config.body.j2  # 0.0
        ```
    """

    body: CentralBodyGravity = field(default_factory=CentralBodyGravity.earth)
    active_agents: tuple[str, ...] = CARTESIAN_AGENTS
    include_kinematics: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.body, CentralBodyGravity):
            raise ValueError(
                f"body must be a CentralBodyGravity, got {type(self.body).__name__}"
            )
        # Lists become tuples so the config stays hashable
        object.__setattr__(self, "active_agents", tuple(self.active_agents))

    @staticmethod
    def two_body(body: CentralBodyGravity | None = None) -> DynamicsConfig:
        """Preset: point-mass gravity, full Cartesian STM.

        Args:
            body: Body whose radius and GM are used; its J2 is dropped.
                Defaults to Earth.

        Returns:
            DynamicsConfig: Two-body configuration.
        """
        if body is None:
            body = CentralBodyGravity.earth()
        return DynamicsConfig(
            body=CentralBodyGravity.point_mass(body.name, body.mu, body.radius),
        )

    @staticmethod
    def earth_j2() -> DynamicsConfig:
        """Preset: Earth with J2, full Cartesian STM."""
        return DynamicsConfig()

    @staticmethod
    def position_only(body: CentralBodyGravity | None = None) -> DynamicsConfig:
        """Preset: track only the position agents of *body* (3 x 3 STM).

        No velocity agents are tracked, so the kinematic coupling is
        left out.
        """
        if body is None:
            body = CentralBodyGravity.earth()
        return DynamicsConfig(
            body=body,
            active_agents=POSITION_AGENTS,
            include_kinematics=False,
        )
