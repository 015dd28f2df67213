"""Packing of the state transition matrix inside the augmented state.

The augmented state has length ``6 + N**2``: position ``[0:3]``,
velocity ``[3:6]`` and the N x N STM stored row-major from index 6, so
that ``state[6 + j + i*N] == STM[i, j]``.  These helpers are the only
place that indexing convention is written down.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from ekfdyn.config import get_dtype

CARTESIAN_SIZE = 6


def state_size(n_agents: int) -> int:
    """Length of the augmented state for *n_agents* tracked agents."""
    return CARTESIAN_SIZE + n_agents * n_agents


def check_layout(state_length: int, n_agents: int) -> None:
    """Validate that a state length matches the agent count.

    Args:
        state_length: Length of the augmented state vector.
        n_agents: Number of active agents ``N``.

    Raises:
        ValueError: If ``state_length != 6 + N**2``.
    """
    expected = state_size(n_agents)
    if state_length != expected:
        raise ValueError(
            f"State length {state_length} is inconsistent with {n_agents} active "
            f"agents: expected 6 + {n_agents}**2 = {expected}"
        )


def stm_to_matrix(flat: ArrayLike, n: int) -> Array:
    """Reshape a flat row-major STM block into an ``(n, n)`` matrix.

    ``M[i, j] = flat[j + i*n]``.

    Args:
        flat: STM block of length ``n**2``.
        n: Matrix dimension.

    Returns:
        jax.Array: Matrix of shape ``(n, n)``.

    Raises:
        ValueError: If ``len(flat) != n**2``.
    """
    flat = jnp.asarray(flat, dtype=get_dtype())
    if flat.shape != (n * n,):
        raise ValueError(f"STM block must have shape ({n * n},), got {flat.shape}")
    return flat.reshape((n, n))


def stm_from_matrix(matrix: ArrayLike) -> Array:
    """Flatten a square matrix into a row-major STM block.

    Inverse of :func:`stm_to_matrix`.

    Raises:
        ValueError: If *matrix* is not square.
    """
    matrix = jnp.asarray(matrix, dtype=get_dtype())
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValueError(f"STM must be a square matrix, got shape {matrix.shape}")
    return matrix.reshape(-1)


def augment_state(x: ArrayLike, n_agents: int, stm: ArrayLike | None = None) -> Array:
    """Build an augmented state from a Cartesian state and an initial STM.

    Args:
        x: Cartesian state ``[x, y, z, vx, vy, vz]`` [m, m/s].
        n_agents: Number of active agents ``N``.
        stm: Initial ``(N, N)`` STM.  Defaults to the identity.

    Returns:
        jax.Array: State of length ``6 + N**2``.

    Examples:
        ```python
        import jax.numpy as jnp
        from ekfdyn.dynamics import augment_state
        s0 = augment_state(jnp.array([7000e3, 0, 0, 0, 7.5e3, 0]), 6)
        s0.shape  # (42,)
        ```
    """
    _float = get_dtype()
    x = jnp.asarray(x, dtype=_float)
    if x.shape != (CARTESIAN_SIZE,):
        raise ValueError(f"Cartesian state must have shape (6,), got {x.shape}")
    if stm is None:
        stm = jnp.eye(n_agents, dtype=_float)
    stm = jnp.asarray(stm, dtype=_float)
    if stm.shape != (n_agents, n_agents):
        raise ValueError(
            f"Initial STM must have shape ({n_agents}, {n_agents}), got {stm.shape}"
        )
    return jnp.concatenate([x, stm_from_matrix(stm)])


def split_state(state: ArrayLike, n_agents: int) -> tuple[Array, Array, Array]:
    """Split an augmented state into position, velocity and STM matrix.

    Raises:
        ValueError: If the state length does not match *n_agents*.
    """
    state = jnp.asarray(state, dtype=get_dtype())
    check_layout(state.shape[0], n_agents)
    return state[:3], state[3:6], stm_to_matrix(state[CARTESIAN_SIZE:], n_agents)
