"""Numerical ODE integrators consuming ``dynamics(t, x) -> dx``.

- :func:`rk4_step` -- classic 4th-order Runge-Kutta (fixed step)
- :func:`propagate` -- RK4 propagation sampled at requested times

Both accept any callable with the ``dynamics(t, x)`` signature, in
particular a :class:`~ekfdyn.dynamics.DerivativeAssembler` on an
augmented state.
"""

from ekfdyn.integrators._types import StepResult
from ekfdyn.integrators.propagate import propagate
from ekfdyn.integrators.rk4 import rk4_step

__all__ = [
    "StepResult",
    "rk4_step",
    "propagate",
]
