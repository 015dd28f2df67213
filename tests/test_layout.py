"""Tests for the STM packing helpers in ekfdyn.dynamics.layout."""

import jax.numpy as jnp
import pytest

from ekfdyn.dynamics import (
    CARTESIAN_SIZE,
    augment_state,
    check_layout,
    split_state,
    state_size,
    stm_from_matrix,
    stm_to_matrix,
)

_X0 = jnp.array([7000e3, 1.0, 2.0, 3.0, 7.5e3, 4.0])


class TestStateSize:
    @pytest.mark.parametrize("n,expected", [(0, 6), (1, 7), (3, 15), (6, 42), (7, 55)])
    def test_sizes(self, n, expected):
        assert state_size(n) == expected

    def test_cartesian_size(self):
        assert CARTESIAN_SIZE == 6


class TestCheckLayout:
    def test_consistent(self):
        check_layout(42, 6)
        check_layout(6, 0)

    @pytest.mark.parametrize("length,n", [(10, 6), (42, 5), (7, 0), (6, 1)])
    def test_inconsistent_raises(self, length, n):
        with pytest.raises(ValueError, match="inconsistent"):
            check_layout(length, n)


class TestStmToMatrix:
    def test_row_major(self):
        M = stm_to_matrix(jnp.array([1.0, 2.0, 3.0, 4.0]), 2)
        assert jnp.array_equal(M, jnp.array([[1.0, 2.0], [3.0, 4.0]]))

    def test_index_convention(self):
        """M[i, j] == flat[j + i*n] for every entry."""
        n = 4
        flat = jnp.arange(n * n, dtype=jnp.float64)
        M = stm_to_matrix(flat, n)
        for i in range(n):
            for j in range(n):
                assert float(M[i, j]) == float(flat[j + i * n])

    def test_wrong_length_raises(self):
        with pytest.raises(ValueError, match="shape"):
            stm_to_matrix(jnp.zeros(5), 2)

    def test_empty(self):
        assert stm_to_matrix(jnp.zeros(0), 0).shape == (0, 0)


class TestStmFromMatrix:
    def test_row_major(self):
        flat = stm_from_matrix(jnp.array([[1.0, 2.0], [3.0, 4.0]]))
        assert jnp.array_equal(flat, jnp.array([1.0, 2.0, 3.0, 4.0]))

    def test_inverse_of_to_matrix(self):
        M = jnp.arange(9.0).reshape(3, 3)
        assert jnp.array_equal(stm_to_matrix(stm_from_matrix(M), 3), M)

    @pytest.mark.parametrize("shape", [(2, 3), (4,), (2, 2, 2)])
    def test_non_square_raises(self, shape):
        with pytest.raises(ValueError, match="square"):
            stm_from_matrix(jnp.zeros(shape))


class TestAugmentState:
    def test_identity_default(self):
        s = augment_state(_X0, 6)
        assert s.shape == (42,)
        assert jnp.array_equal(s[:6], _X0)
        assert jnp.array_equal(stm_to_matrix(s[6:], 6), jnp.eye(6))

    def test_custom_stm_placement(self):
        """state[6 + j + i*N] holds STM[i, j]."""
        stm = jnp.array([[1.0, 2.0], [3.0, 4.0]])
        s = augment_state(_X0, 2, stm)
        for i in range(2):
            for j in range(2):
                assert float(s[6 + j + i * 2]) == float(stm[i, j])

    def test_no_agents(self):
        assert jnp.array_equal(augment_state(_X0, 0), _X0)

    def test_bad_cartesian_shape_raises(self):
        with pytest.raises(ValueError, match=r"\(6,\)"):
            augment_state(jnp.zeros(7), 2)

    def test_bad_stm_shape_raises(self):
        with pytest.raises(ValueError, match="Initial STM"):
            augment_state(_X0, 2, jnp.eye(3))


class TestSplitState:
    def test_split(self):
        stm = jnp.arange(9.0).reshape(3, 3)
        r, v, M = split_state(augment_state(_X0, 3, stm), 3)
        assert jnp.array_equal(r, _X0[:3])
        assert jnp.array_equal(v, _X0[3:])
        assert jnp.array_equal(M, stm)

    def test_mismatch_raises(self):
        with pytest.raises(ValueError, match="inconsistent"):
            split_state(augment_state(_X0, 3), 2)
