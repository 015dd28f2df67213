"""Classic 4th-order Runge-Kutta integrator (RK4).

Fixed-step, four-stage explicit method with local truncation error
:math:`O(h^5)`.  The Butcher tableau is:

.. math::

    \\begin{array}{c|cccc}
    0   &     &     &     &   \\\\
    1/2 & 1/2 &     &     &   \\\\
    1/2 &  0  & 1/2 &     &   \\\\
    1   &  0  &  0  &  1  &   \\\\
    \\hline
        & 1/6 & 1/3 & 1/3 & 1/6
    \\end{array}
"""

from __future__ import annotations

from collections.abc import Callable

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from ekfdyn.config import get_dtype
from ekfdyn.integrators._types import StepResult


def rk4_step(
    dynamics: Callable[[ArrayLike, ArrayLike], Array],
    t: ArrayLike,
    state: ArrayLike,
    dt: ArrayLike,
) -> StepResult:
    """Advance *state* from ``t`` to ``t + dt`` with one RK4 step.

    Args:
        dynamics: Right-hand side ``f(t, x) -> dx/dt``, e.g. a
            :class:`~ekfdyn.dynamics.DerivativeAssembler`.
        t: Current time [s].
        state: Current state vector.
        dt: Timestep [s].  May be negative for backward integration.

    Returns:
        StepResult: State at ``t + dt`` and the step taken.

    Examples:
        ```python
        import jax.numpy as jnp
        from ekfdyn.integrators import rk4_step
        def harmonic(t, x):
            return jnp.array([x[1], -x[0]])
        result = rk4_step(harmonic, 0.0, jnp.array([1.0, 0.0]), 0.01)
        ```
    """
    dtype = get_dtype()
    t = jnp.asarray(t, dtype=dtype)
    state = jnp.asarray(state, dtype=dtype)
    dt = jnp.asarray(dt, dtype=dtype)

    k1 = dynamics(t, state)
    k2 = dynamics(t + 0.5 * dt, state + 0.5 * dt * k1)
    k3 = dynamics(t + 0.5 * dt, state + 0.5 * dt * k2)
    k4 = dynamics(t + dt, state + dt * k3)

    return StepResult(
        state=state + (dt / 6.0) * (k1 + 2.0 * k2 + 2.0 * k3 + k4),
        dt_used=dt,
    )
