"""Abstract force model contract.

A force model contributes two things to the augmented dynamics:

- an acceleration on the spacecraft, shape ``(3,)``
- a table of named partial derivatives, keyed ``"<top> wrt <bottom>"``

Models know nothing about each other.  The derivative assembler sums
their accelerations and their ``(N, N)`` partials matrices over an
ordered list of active agents; a model that does not implement a
requested partial contributes exactly zero to that entry.
"""

from __future__ import annotations

import abc
from collections.abc import Mapping, Sequence

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from ekfdyn.config import get_dtype

PARTIAL_SEPARATOR = " wrt "

POSITION_AGENTS = ("X", "Y", "Z")
VELOCITY_AGENTS = ("dX", "dY", "dZ")
CARTESIAN_AGENTS = POSITION_AGENTS + VELOCITY_AGENTS


def partial_name(top: str, bottom: str) -> str:
    """Lookup key for the partial of agent *top* with respect to *bottom*.

    Examples:
        ```python
        partial_name("dX", "Y")  # 'dX wrt Y'
        ```
    """
    return f"{top}{PARTIAL_SEPARATOR}{bottom}"


class ForceModel(abc.ABC):
    """Capability interface shared by every force model.

    Subclasses implement :meth:`acceleration` and :meth:`partials_table`.
    The table is rebuilt on every call and never stored on the instance,
    so a single model may be evaluated from several contexts at once.
    """

    @abc.abstractmethod
    def acceleration(self, state: ArrayLike) -> Array:
        """Acceleration contribution for the current state.

        Args:
            state: Augmented state vector.  Only the Cartesian part
                ``[x, y, z, vx, vy, vz]`` is read.

        Returns:
            Acceleration [m/s^2], shape ``(3,)``.
        """

    @abc.abstractmethod
    def partials_table(self, state: ArrayLike) -> Mapping[str, ArrayLike]:
        """Every partial this model implements, evaluated at *state*.

        Returns:
            Mapping from :func:`partial_name` keys to scalar values.
        """

    def partial(self, state: ArrayLike, top: str, bottom: str) -> Array:
        """Single named partial, or ``0.0`` if this model abstains."""
        table = self.partials_table(state)
        return jnp.asarray(table.get(partial_name(top, bottom), 0.0), dtype=get_dtype())

    def partials(self, state: ArrayLike, active_agents: Sequence[str]) -> Array:
        """Partials contribution over the ordered active agents.

        Entry ``[i, j]`` holds the partial ``"agents[i] wrt agents[j]"``
        from a table built fresh for *state*; pairs this model does not
        implement are ``0.0``.

        Args:
            state: Augmented state vector.
            active_agents: Ordered agent names, length ``N``.

        Returns:
            Partials matrix, shape ``(N, N)``.
        """
        _float = get_dtype()
        n = len(active_agents)
        if n == 0:
            return jnp.zeros((0, 0), dtype=_float)

        table = self.partials_table(state)
        rows = [
            jnp.stack(
                [
                    jnp.asarray(table.get(partial_name(top, bottom), 0.0), dtype=_float)
                    for bottom in active_agents
                ]
            )
            for top in active_agents
        ]
        return jnp.stack(rows)
