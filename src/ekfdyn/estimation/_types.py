"""Type definitions for the extended Kalman filter.

Both types are :class:`~typing.NamedTuple` instances and therefore JAX
pytrees, usable with ``jax.jit`` and ``jax.lax.scan``.
"""

from __future__ import annotations

from typing import NamedTuple

from jax import Array


class FilterState(NamedTuple):
    """State of a Kalman filter.

    Attributes:
        x: Cartesian state estimate ``[x, y, z, vx, vy, vz]``.
        P: Error covariance, shape ``(6, 6)``.
    """

    x: Array
    P: Array


class FilterResult(NamedTuple):
    """Result of a measurement update.

    Attributes:
        state: Updated :class:`FilterState`.
        innovation: Residual ``z - z_pred``, shape ``(m,)``.
        innovation_covariance: ``S = H P H^T + R``, shape ``(m, m)``.
        kalman_gain: ``K``, shape ``(6, m)``.
    """

    state: FilterState
    innovation: Array
    innovation_covariance: Array
    kalman_gain: Array
