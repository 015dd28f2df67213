import jax.numpy as jnp
import pytest

from ekfdyn.config import set_dtype


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Set float64 precision before every test.

    Tests that switch precision (test_config.py) restore it through this
    fixture on the next test.
    """
    set_dtype(jnp.float64)
