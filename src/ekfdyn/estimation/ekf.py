"""Extended Kalman Filter time and measurement updates.

The time update integrates the augmented state (Cartesian state plus a
6 x 6 STM reset to the identity) through the derivative assembler, so
the covariance is mapped with the STM obtained from the force models'
analytic partials rather than from automatic differentiation.  The
measurement update takes an analytic measurement Jacobian in the same
spirit and uses the Joseph form for the covariance.
"""

from __future__ import annotations

from collections.abc import Callable

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from ekfdyn.config import get_dtype
from ekfdyn.dynamics import CARTESIAN_SIZE, DerivativeAssembler, augment_state, split_state
from ekfdyn.estimation._types import FilterResult, FilterState
from ekfdyn.force_models import CARTESIAN_AGENTS
from ekfdyn.integrators import rk4_step


def ekf_predict(
    filter_state: FilterState,
    dynamics: DerivativeAssembler,
    t: ArrayLike,
    dt: ArrayLike,
    Q: ArrayLike,
    n_steps: int = 1,
) -> FilterState:
    """Propagate the filter state from ``t`` to ``t + dt``.

    Args:
        filter_state: Current filter state ``(x, P)``.
        dynamics: Assembler tracking exactly the Cartesian agents
            ``("X", "Y", "Z", "dX", "dY", "dZ")``.
        t: Current time [s].
        dt: Prediction interval [s].
        Q: Process noise covariance, shape ``(6, 6)``.
        n_steps: Number of equal RK4 steps across the interval.

    Returns:
        FilterState: ``(x_pred, Phi P Phi^T + Q)``.

    Raises:
        ValueError: If the assembler does not track the Cartesian agents
            in canonical order, or *n_steps* is not positive.

    Examples:
        ```python
        import jax.numpy as jnp
        from ekfdyn.dynamics import create_stm_dynamics
        from ekfdyn.estimation import FilterState, ekf_predict
        dynamics = create_stm_dynamics()
        fs = FilterState(
            x=jnp.array([6878e3, 0.0, 0.0, 0.0, 7612.0, 0.0]), P=jnp.eye(6)
        )
        fs_pred = ekf_predict(fs, dynamics, 0.0, 60.0, jnp.zeros((6, 6)))
        ```
    """
    if dynamics.active_agents != CARTESIAN_AGENTS:
        raise ValueError(
            f"ekf_predict requires active agents {CARTESIAN_AGENTS}, "
            f"got {dynamics.active_agents}"
        )
    if n_steps < 1:
        raise ValueError(f"n_steps must be positive, got {n_steps}")

    dtype = get_dtype()
    P = jnp.asarray(filter_state.P, dtype=dtype)
    Q = jnp.asarray(Q, dtype=dtype)
    t = jnp.asarray(t, dtype=dtype)
    h = jnp.asarray(dt, dtype=dtype) / n_steps

    s0 = augment_state(filter_state.x, CARTESIAN_SIZE)

    def step(i, s):
        return rk4_step(dynamics, t + i * h, s, h).state

    s = jax.lax.fori_loop(0, n_steps, step, s0)
    r, v, Phi = split_state(s, CARTESIAN_SIZE)

    return FilterState(x=jnp.concatenate([r, v]), P=Phi @ P @ Phi.T + Q)


def ekf_update(
    filter_state: FilterState,
    z: ArrayLike,
    measurement_fn: Callable[[Array], tuple[Array, Array]],
    R: ArrayLike,
) -> FilterResult:
    """Incorporate a measurement into the filter state.

    Args:
        filter_state: Predicted filter state, typically from
            :func:`ekf_predict`.
        z: Measurement vector, shape ``(m,)``.
        measurement_fn: Model ``h(x) -> (z_pred, H)`` returning the
            predicted measurement and its Jacobian, shape ``(m, 6)``.
        R: Measurement noise covariance, shape ``(m, m)``.

    Returns:
        FilterResult: Updated state, innovation, innovation covariance
        and Kalman gain.
    """
    dtype = get_dtype()
    x = jnp.asarray(filter_state.x, dtype=dtype)
    P = jnp.asarray(filter_state.P, dtype=dtype)
    z = jnp.asarray(z, dtype=dtype)
    R = jnp.asarray(R, dtype=dtype)

    z_pred, H = measurement_fn(x)
    H = jnp.asarray(H, dtype=dtype)

    innovation = z - z_pred
    S = H @ P @ H.T + R

    # K = P H^T S^{-1}, solved as S K^T = H P with P symmetric
    K = jnp.linalg.solve(S, H @ P).T

    IKH = jnp.eye(x.shape[0], dtype=dtype) - K @ H
    P_upd = IKH @ P @ IKH.T + K @ R @ K.T

    return FilterResult(
        state=FilterState(x=x + K @ innovation, P=P_upd),
        innovation=innovation,
        innovation_covariance=S,
        kalman_gain=K,
    )


def position_measurement(x: Array) -> tuple[Array, Array]:
    """Direct position measurement model with its Jacobian ``[I 0]``."""
    H = jnp.concatenate(
        [jnp.eye(3, dtype=get_dtype()), jnp.zeros((3, 3), dtype=get_dtype())], axis=1
    )
    return x[:3], H
