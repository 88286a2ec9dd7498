"""Shared fixtures for the GQEM test suite."""

import numpy as np
import pytest

from gqem_model import GQEM

# Parameters of the worked example in the model documentation.
REFERENCE_PARAMS = dict(
    theta_g=-0.12,
    theta_u=-1.54,
    theta_psi_o=-0.71,
    theta_psi_r=-0.86,
    theta_psi_u=1.26,
)

# Predictions for REFERENCE_PARAMS, rows gist / verbatim / gist+verbatim /
# unrelated, columns old / related / unrelated.
REFERENCE_PREDICTIONS = np.array(
    [
        [0.690462, 0.545336, 0.0359636],
        [0.575113, 0.425675, 0.093524],
        [0.694898, 0.551852, 0.0497793],
        [0.455457, 0.604619, 0.887783],
    ]
)


@pytest.fixture
def reference_model():
    return GQEM(**REFERENCE_PARAMS)


@pytest.fixture
def random_models():
    """A spread of parameter sets covering every quadrant."""
    rng = np.random.default_rng(6522)
    return [GQEM.from_array(rng.uniform(-np.pi, np.pi, size=5)) for _ in range(50)]


@pytest.fixture
def reference_params():
    return dict(REFERENCE_PARAMS)


@pytest.fixture
def reference_predictions():
    return REFERENCE_PREDICTIONS.copy()
