"""Tests for the ekfdyn.estimation module.

Tests cover:
- FilterState and FilterResult construction
- EKF time update using the assembler STM against autodiff
- Rejection of assemblers that do not track the Cartesian agents
- Measurement update with a position measurement
- A short sequential filter run with lax.scan
"""

import jax
import jax.numpy as jnp
import pytest

from ekfdyn.constants import GM_EARTH, R_EARTH
from ekfdyn.dynamics import DynamicsConfig, create_stm_dynamics
from ekfdyn.estimation import (
    FilterResult,
    FilterState,
    ekf_predict,
    ekf_update,
    position_measurement,
)
from ekfdyn.integrators import rk4_step

# ──────────────────────────────────────────────
# Helper functions
# ──────────────────────────────────────────────


def _leo_state() -> jnp.ndarray:
    sma = R_EARTH + 500e3
    v = float(jnp.sqrt(GM_EARTH / sma))
    return jnp.array([sma, 0.0, 0.0, 0.0, 0.6 * v, 0.8 * v])


def _initial_covariance() -> jnp.ndarray:
    return jnp.diag(jnp.array([100.0, 100.0, 100.0, 0.1, 0.1, 0.1]) ** 2)


# ──────────────────────────────────────────────
# Types
# ──────────────────────────────────────────────


class TestTypes:
    def test_filter_state(self):
        fs = FilterState(x=jnp.zeros(6), P=jnp.eye(6))
        assert fs.x.shape == (6,)
        assert fs.P.shape == (6, 6)

    def test_filter_result(self):
        fs = FilterState(x=jnp.zeros(6), P=jnp.eye(6))
        result = FilterResult(
            state=fs,
            innovation=jnp.zeros(3),
            innovation_covariance=jnp.eye(3),
            kalman_gain=jnp.zeros((6, 3)),
        )
        assert result.state is fs


# ──────────────────────────────────────────────
# Prediction
# ──────────────────────────────────────────────


class TestEkfPredict:
    def test_matches_autodiff_covariance(self):
        config = DynamicsConfig.earth_j2()
        body = config.body
        dyn = create_stm_dynamics(config)

        def f6(t, x):
            return jnp.concatenate([x[3:6], body.acceleration(x)])

        def flow(x):
            for i in range(4):
                x = rk4_step(f6, i * 15.0, x, 15.0).state
            return x

        x0 = _leo_state()
        P0 = _initial_covariance()
        Q = jnp.eye(6) * 1e-6

        pred = ekf_predict(FilterState(x=x0, P=P0), dyn, 0.0, 60.0, Q, n_steps=4)
        Phi = jax.jacfwd(flow)(x0)

        assert jnp.allclose(pred.x, flow(x0), rtol=1e-12)
        assert jnp.allclose(pred.P, Phi @ P0 @ Phi.T + Q, rtol=1e-7, atol=1e-6)

    def test_covariance_symmetric(self):
        dyn = create_stm_dynamics()
        pred = ekf_predict(
            FilterState(x=_leo_state(), P=_initial_covariance()),
            dyn,
            0.0,
            120.0,
            jnp.zeros((6, 6)),
            n_steps=6,
        )
        assert jnp.allclose(pred.P, pred.P.T, rtol=1e-10)

    def test_position_uncertainty_grows(self):
        dyn = create_stm_dynamics()
        P0 = _initial_covariance()
        pred = ekf_predict(
            FilterState(x=_leo_state(), P=P0), dyn, 0.0, 300.0, jnp.zeros((6, 6)), n_steps=30
        )
        assert float(jnp.trace(pred.P[:3, :3])) > float(jnp.trace(P0[:3, :3]))

    def test_requires_cartesian_agents(self):
        dyn = create_stm_dynamics(DynamicsConfig.position_only())
        with pytest.raises(ValueError, match="active agents"):
            ekf_predict(
                FilterState(x=_leo_state(), P=jnp.eye(6)), dyn, 0.0, 60.0, jnp.zeros((6, 6))
            )

    def test_invalid_steps_raises(self):
        with pytest.raises(ValueError, match="n_steps"):
            ekf_predict(
                FilterState(x=_leo_state(), P=jnp.eye(6)),
                create_stm_dynamics(),
                0.0,
                60.0,
                jnp.zeros((6, 6)),
                n_steps=0,
            )


# ──────────────────────────────────────────────
# Update
# ──────────────────────────────────────────────


class TestEkfUpdate:
    def test_position_measurement_model(self):
        z, H = position_measurement(_leo_state())
        assert jnp.array_equal(z, _leo_state()[:3])
        assert jnp.array_equal(H[:, :3], jnp.eye(3))
        assert jnp.array_equal(H[:, 3:], jnp.zeros((3, 3)))

    def test_update_shrinks_covariance(self):
        x = _leo_state()
        fs = FilterState(x=x, P=_initial_covariance())
        z = x[:3] + jnp.array([10.0, -5.0, 2.0])
        result = ekf_update(fs, z, position_measurement, jnp.eye(3) * 25.0)

        assert result.innovation.shape == (3,)
        assert result.kalman_gain.shape == (6, 3)
        assert jnp.allclose(result.innovation, jnp.array([10.0, -5.0, 2.0]), atol=1e-6)
        assert float(jnp.trace(result.state.P)) < float(jnp.trace(fs.P))
        # Estimate moves toward the measurement
        assert float(jnp.linalg.norm(result.state.x[:3] - z)) < float(
            jnp.linalg.norm(x[:3] - z)
        )


# ──────────────────────────────────────────────
# Sequential filtering
# ──────────────────────────────────────────────


class TestSequentialFilter:
    def test_scan(self):
        dyn = create_stm_dynamics()
        x_true = _leo_state()
        dt = 30.0
        Q = jnp.eye(6) * 1e-8
        R = jnp.eye(3) * 100.0

        truth = [x_true]
        for _ in range(5):
            x_true = rk4_step(dyn, 0.0, jnp.concatenate([x_true, jnp.eye(6).ravel()]), dt).state[:6]
            truth.append(x_true)
        measurements = jnp.stack([x[:3] for x in truth[1:]])

        def step(fs, z):
            fs = ekf_predict(fs, dyn, 0.0, dt, Q)
            result = ekf_update(fs, z, position_measurement, R)
            return result.state, result.innovation

        fs0 = FilterState(
            x=truth[0] + jnp.array([50.0, -50.0, 20.0, 0.0, 0.0, 0.0]),
            P=_initial_covariance(),
        )
        fs_final, innovations = jax.lax.scan(step, fs0, measurements)

        assert innovations.shape == (5, 3)
        err0 = float(jnp.linalg.norm(fs0.x[:3] - truth[0][:3]))
        err_final = float(jnp.linalg.norm(fs_final.x[:3] - truth[-1][:3]))
        assert err_final < err0
