"""Central-body gravity with the J2 oblateness perturbation.

Provides the two-body acceleration augmented with the first zonal
harmonic, together with the closed-form partial derivatives of the
acceleration with respect to position.  All inputs and outputs use SI
base units (metres, metres/second squared).

Only the position block of the partials is implemented.  Partials with
respect to velocity, the body radius, the gravitational parameter and J2
are always zero; the model abstains from them rather than approximating.

References:
    1. O. Montenbruck and E. Gill, *Satellite Orbits: Models, Methods
       and Applications*, 2012, p. 56-68.
    2. B. Tapley, B. Schutz and G. Born, *Statistical Orbit
       Determination*, 2004, Appendix F.
"""

from __future__ import annotations

from dataclasses import dataclass

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from ekfdyn.config import get_dtype
from ekfdyn.constants import (
    GM_EARTH,
    GM_MARS,
    GM_MOON,
    J2_EARTH,
    J2_MARS,
    J2_MOON,
    R_EARTH,
    R_MARS,
    R_MOON,
)
from ekfdyn.force_models._base import ForceModel

# Trailing constant of the J2 factor, by acceleration component
_J2_OFFSETS = {"x": 1.0, "y": 1.0, "z": 3.0}


def _position(state: ArrayLike) -> Array:
    return jnp.asarray(state, dtype=get_dtype())[:3]


@dataclass(frozen=True)
class CentralBodyGravity(ForceModel):
    """Gravitational attraction of a central body with J2.

    The default instance has all-zero parameters.  It is permitted but
    contributes nothing.

    Args:
        name: Body name, e.g. ``"Earth"``.
        radius: Reference (equatorial) radius [m].
        mu: Gravitational parameter [m^3/s^2].
        j2: Second-degree zonal harmonic [dimensionless].

    Raises:
        ValueError: If *radius* or *mu* is negative.

    Examples:
        ```python
        import jax.numpy as jnp
        from ekfdyn.force_models import CentralBodyGravity
        earth = CentralBodyGravity.earth()
        a = earth.acceleration(jnp.array([7000e3, 0.0, 0.0, 0.0, 7.5e3, 0.0]))
        ```
    """

    name: str = ""
    radius: float = 0.0
    mu: float = 0.0
    j2: float = 0.0

    def __post_init__(self) -> None:
        if self.radius < 0.0:
            raise ValueError(f"radius must be non-negative, got {self.radius}")
        if self.mu < 0.0:
            raise ValueError(f"mu must be non-negative, got {self.mu}")

    # ------------------------------------------------------------------
    # Presets
    # ------------------------------------------------------------------

    @classmethod
    def earth(cls) -> CentralBodyGravity:
        """Earth with GGM05S radius, GM and J2."""
        return cls("Earth", R_EARTH, GM_EARTH, J2_EARTH)

    @classmethod
    def moon(cls) -> CentralBodyGravity:
        """Moon with GRAIL J2."""
        return cls("Moon", R_MOON, GM_MOON, J2_MOON)

    @classmethod
    def mars(cls) -> CentralBodyGravity:
        """Mars with MRO J2."""
        return cls("Mars", R_MARS, GM_MARS, J2_MARS)

    @classmethod
    def point_mass(cls, name: str, mu: float, radius: float = 0.0) -> CentralBodyGravity:
        """Spherical body (``J2 = 0``)."""
        return cls(name, radius, mu, 0.0)

    # ------------------------------------------------------------------
    # Acceleration
    # ------------------------------------------------------------------

    def j2_factor(self, state: ArrayLike, component: str) -> Array:
        """Multiplicative J2 correction to the two-body acceleration.

        For the x and y components the factor is
        ``1 - 1.5 J2 (R/r)^2 (5 (z/r)^2 - 1)``; for z the trailing
        constant is 3.

        Args:
            state: Position or state vector (first 3 elements used).
            component: ``"x"``, ``"y"`` or ``"z"``.

        Returns:
            Scalar correction factor.

        Raises:
            ValueError: If *component* is not one of ``"x"``, ``"y"``, ``"z"``.
        """
        if component not in _J2_OFFSETS:
            raise ValueError(
                f"J2 factor component must be 'x', 'y', or 'z', got {component!r}"
            )
        r_vec = _position(state)
        r = jnp.linalg.norm(r_vec)
        return 1.0 - 1.5 * self.j2 * (self.radius / r) ** 2 * (
            5.0 * (r_vec[2] / r) ** 2 - _J2_OFFSETS[component]
        )

    def acceleration(self, state: ArrayLike) -> Array:
        """Two-body plus J2 acceleration.

        ``a_k = -mu * r_k / |r|^3 * j2_factor(r, k)``.  The origin is
        not guarded: ``|r| = 0`` yields non-finite values.

        Args:
            state: Position or state vector (first 3 elements used) [m].

        Returns:
            Acceleration [m/s^2], shape ``(3,)``.
        """
        r_vec = _position(state)
        r = jnp.linalg.norm(r_vec)
        factors = jnp.stack([self.j2_factor(r_vec, k) for k in ("x", "y", "z")])
        return -self.mu * r_vec / r**3 * factors

    # ------------------------------------------------------------------
    # Partials
    # ------------------------------------------------------------------

    def partials_table(self, state: ArrayLike) -> dict[str, Array]:
        """Closed-form partials of the acceleration w.r.t. position.

        Keys are ``"d{X,Y,Z} wrt {X,Y,Z}"``; the block is symmetric.

        Args:
            state: Position or state vector (first 3 elements used) [m].

        Returns:
            dict: Nine partials [1/s^2], built fresh for *state*.
        """
        r_vec = _position(state)
        x, y, z = r_vec[0], r_vec[1], r_vec[2]
        r = jnp.linalg.norm(r_vec)
        mu = self.mu
        j2 = self.j2

        r3 = r**3
        r5 = r**5
        R_r2 = (self.radius / r) ** 2
        Z_r2 = (z / r) ** 2

        def radial(c: float) -> Array:
            return 1.0 - 1.5 * j2 * R_r2 * (5.0 * Z_r2 - c)

        def cross(c: float) -> Array:
            return 1.0 - 2.5 * j2 * R_r2 * (7.0 * Z_r2 - c)

        dx_dy = 3.0 * mu * x * y / r5 * cross(1.0)
        dx_dz = 3.0 * mu * x * z / r5 * cross(3.0)
        dy_dz = 3.0 * mu * y * z / r5 * cross(3.0)

        return {
            "dX wrt X": -mu / r3 * radial(1.0) + 3.0 * mu * x**2 / r5 * cross(1.0),
            "dX wrt Y": dx_dy,
            "dX wrt Z": dx_dz,
            "dY wrt X": dx_dy,
            "dY wrt Y": -mu / r3 * radial(1.0) + 3.0 * mu * y**2 / r5 * cross(1.0),
            "dY wrt Z": dy_dz,
            "dZ wrt X": dx_dz,
            "dZ wrt Y": dy_dz,
            "dZ wrt Z": -mu / r3 * radial(3.0) + 3.0 * mu * z**2 / r5 * cross(5.0),
        }
