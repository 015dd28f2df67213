"""Propagation to a sequence of requested output times.

Wraps :func:`~ekfdyn.integrators.rk4.rk4_step` in ``jax.lax.scan`` over
the output times.  Each interval is split into the smallest number of
equal RK4 sub-steps no longer than the nominal step, so every requested
time is hit exactly.
"""

from __future__ import annotations

from collections.abc import Callable

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from ekfdyn.config import get_dtype
from ekfdyn.integrators.rk4 import rk4_step


def propagate(
    dynamics: Callable[[ArrayLike, ArrayLike], Array],
    t0: ArrayLike,
    state0: ArrayLike,
    times: ArrayLike,
    dt: ArrayLike,
) -> Array:
    """Integrate *state0* from *t0* and sample it at *times*.

    Args:
        dynamics: Right-hand side ``f(t, x) -> dx/dt``.
        t0: Initial time [s].
        state0: Initial state vector.
        times: Output times [s], monotonic in the direction of
            integration.
        dt: Maximum sub-step magnitude [s].  Must be positive.

    Returns:
        jax.Array: States at *times*, shape ``(len(times), len(state0))``.

    Examples:
        ```python
        import jax.numpy as jnp
        from ekfdyn.dynamics import augment_state, create_stm_dynamics
        from ekfdyn.integrators import propagate
        dynamics = create_stm_dynamics()
        s0 = augment_state(jnp.array([6878e3, 0.0, 0.0, 0.0, 7612.0, 0.0]), 6)
        states = propagate(dynamics, 0.0, s0, jnp.array([60.0, 120.0]), 10.0)
        ```
    """
    dtype = get_dtype()
    t0 = jnp.asarray(t0, dtype=dtype)
    state0 = jnp.asarray(state0, dtype=dtype)
    times = jnp.atleast_1d(jnp.asarray(times, dtype=dtype))
    h_max = jnp.abs(jnp.asarray(dt, dtype=dtype))

    def advance(carry, t_next):
        t, x = carry
        span = t_next - t
        n_sub = jnp.maximum(jnp.ceil(jnp.abs(span) / h_max), 1.0).astype(jnp.int32)
        h = span / n_sub

        def sub_step(i, xi):
            return rk4_step(dynamics, t + i * h, xi, h).state

        x = jax.lax.fori_loop(0, n_sub, sub_step, x)
        return (t_next, x), x

    _, states = jax.lax.scan(advance, (t0, state0), times)
    return states
