"""Derivative of the augmented state for STM propagation.

:class:`DerivativeAssembler` is the right-hand side handed to an ODE
stepper.  It owns no physics: it sums the acceleration and partials
contributions of its force models, forms the dynamics matrix ``A``,
reads the STM out of the trailing block of the state and returns

.. math::

    \\dot{s} = [v,\\; a,\\; \\mathrm{vec}(A \\Phi)]

as a single flat vector with the layout of the input state.

Evaluation is a pure function of ``(state, active agents, models)`` and
is compatible with ``jax.jit``.  Layout errors are raised before any
computation; no partially written output is ever produced.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import jax
import jax.numpy as jnp
import numpy as np
from jax import Array
from jax.typing import ArrayLike

from ekfdyn.config import get_dtype
from ekfdyn.dynamics.layout import (
    CARTESIAN_SIZE,
    check_layout,
    state_size,
    stm_from_matrix,
    stm_to_matrix,
)
from ekfdyn.force_models import PARTIAL_SEPARATOR, ForceModel

logger = logging.getLogger(__name__)


def _validate_agents(active_agents: Sequence[str]) -> tuple[str, ...]:
    agents = tuple(active_agents)
    for agent in agents:
        if not isinstance(agent, str) or not agent:
            raise ValueError(f"Active agent names must be non-empty strings, got {agent!r}")
        if PARTIAL_SEPARATOR in agent:
            raise ValueError(
                f"Active agent name {agent!r} must not contain {PARTIAL_SEPARATOR!r}"
            )
    if len(set(agents)) != len(agents):
        duplicates = sorted({a for a in agents if agents.count(a) > 1})
        raise ValueError(f"Active agent names must be unique, duplicated: {duplicates}")
    return agents


def _log_matrices(t, A, stm, dstm) -> None:
    t = float(np.asarray(t))
    logger.debug("A at time %s:\n%s", t, np.asarray(A))
    logger.debug("STM at time %s:\n%s", t, np.asarray(stm))
    logger.debug("Derivative of STM at time %s:\n%s", t, np.asarray(dstm))


class DerivativeAssembler:
    """Right-hand side ``dynamics(t, state) -> derivative`` for STM propagation.

    The force models and active agents are fixed at construction and
    must not change during an integration run.  A default assembler
    (no models, no agents) is valid: it produces zero acceleration and
    an empty STM block on a 6-element state.

    Args:
        force_models: Ordered force models.  Instances may be shared
            with other configuration code; they are only read.
        active_agents: Ordered, unique agent names defining the rows and
            columns of ``A`` and the STM, e.g.
            ``("X", "Y", "Z", "dX", "dY", "dZ")``.
        debug: Log ``A``, the STM and its derivative at DEBUG level on
            every evaluation.  Results are unaffected.

    Raises:
        ValueError: If an agent name is empty, duplicated, or contains
            the ``" wrt "`` separator, or a model is not a
            :class:`ForceModel`.

    Examples:
        ```python
        import jax.numpy as jnp
        from ekfdyn.dynamics import DerivativeAssembler, augment_state
        from ekfdyn.force_models import (
            CARTESIAN_AGENTS, CentralBodyGravity, KinematicCoupling,
        )
        dynamics = DerivativeAssembler(
            [CentralBodyGravity.earth(), KinematicCoupling()], CARTESIAN_AGENTS
        )
        s0 = augment_state(jnp.array([7000e3, 0.0, 0.0, 0.0, 7.5e3, 0.0]), 6)
        ds = dynamics(0.0, s0)
        ```
    """

    def __init__(
        self,
        force_models: Sequence[ForceModel] = (),
        active_agents: Sequence[str] = (),
        debug: bool = False,
    ):
        for model in force_models:
            if not isinstance(model, ForceModel):
                raise ValueError(f"Expected a ForceModel, got {type(model).__name__}")
        self._force_models = tuple(force_models)
        self._active_agents = _validate_agents(active_agents)
        self.debug = debug
        logger.debug(
            "DerivativeAssembler with %d force model(s) and %d active agent(s)",
            len(self._force_models),
            len(self._active_agents),
        )

    def __repr__(self) -> str:
        return (
            f"DerivativeAssembler(force_models={list(self._force_models)!r}, "
            f"active_agents={self._active_agents!r})"
        )

    @property
    def force_models(self) -> tuple[ForceModel, ...]:
        return self._force_models

    @property
    def active_agents(self) -> tuple[str, ...]:
        return self._active_agents

    @property
    def n_agents(self) -> int:
        """Number of active agents ``N``."""
        return len(self._active_agents)

    @property
    def state_size(self) -> int:
        """Length ``6 + N**2`` of the augmented state."""
        return state_size(self.n_agents)

    def check_state(self, state: ArrayLike) -> Array:
        """Validate the layout of *state* and return it as an array.

        Call this once on the initial state before starting an
        integration loop; :meth:`evaluate` repeats the check on every
        call, which is free under ``jax.jit`` since shapes are static.

        Raises:
            ValueError: If *state* is not 1-D or its length is not
                ``6 + N**2``.
        """
        state = jnp.asarray(state, dtype=get_dtype())
        if state.ndim != 1:
            raise ValueError(f"State must be a 1-D vector, got shape {state.shape}")
        check_layout(state.shape[0], self.n_agents)
        return state

    # ------------------------------------------------------------------
    # Contributions
    # ------------------------------------------------------------------

    def acceleration(self, state: ArrayLike) -> Array:
        """Sum of the acceleration contributions of all force models.

        Returns:
            Acceleration [m/s^2], shape ``(3,)``.
        """
        accel = jnp.zeros(3, dtype=get_dtype())
        for model in self._force_models:
            accel = accel + model.acceleration(state)
        return accel

    def partials_matrix(self, state: ArrayLike) -> Array:
        """Dynamics matrix ``A`` summed over all force models.

        The contributions are accumulated as a flat length ``N**2``
        vector and reshaped row-major, ``A[i, j] = partials[j + i*N]``.

        Returns:
            Matrix of shape ``(N, N)``.
        """
        n = self.n_agents
        partials = jnp.zeros(n * n, dtype=get_dtype())
        for model in self._force_models:
            partials = partials + stm_from_matrix(model.partials(state, self._active_agents))
        return stm_to_matrix(partials, n)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def evaluate(self, state: ArrayLike, t: ArrayLike = 0.0) -> Array:
        """Time-derivative of the augmented state.

        Args:
            state: Augmented state of length ``6 + N**2``.
            t: Evaluation time [s].  Only reported in debug output; the
                force models here are time-invariant.

        Returns:
            jax.Array: ``[v, a, vec(A @ STM)]`` with the layout of *state*.

        Raises:
            ValueError: If the state layout does not match the agents.
        """
        state = self.check_state(state)
        n = self.n_agents

        accel = self.acceleration(state)
        A = self.partials_matrix(state)
        stm = stm_to_matrix(state[CARTESIAN_SIZE:], n)
        dstm = A @ stm

        if self.debug:
            jax.debug.callback(_log_matrices, jnp.asarray(t), A, stm, dstm)

        return jnp.concatenate([state[3:6], accel, stm_from_matrix(dstm)])

    def __call__(self, t: ArrayLike, state: ArrayLike) -> Array:
        """Integrator convention ``dynamics(t, state) -> derivative``."""
        return self.evaluate(state, t)
