"""
Geometry of the GQEM model space.

Everything lives in a two-dimensional real Hilbert space. Judgment criteria
are orthonormal bases and probe representations are unit state vectors, each
described by a single angle measured from the verbatim basis. Response
probabilities follow the Born rule: the squared overlap between a state and a
basis vector.
"""

from __future__ import annotations

from typing import NamedTuple

import numpy as np


# -----------------------------------------------------------------------------
# Value types
# -----------------------------------------------------------------------------
class Basis(NamedTuple):
    """
    Orthonormal basis {|e>, |e_perp>} of the model space.

    Attributes:
        e: basis vector answering "yes" to the judgment.
        e_perp: orthogonal complement answering "no".
        angle: angle of `e` in radians, relative to the verbatim basis.
    """

    e: np.ndarray
    e_perp: np.ndarray
    angle: float


def _frozen(vec: np.ndarray) -> np.ndarray:
    vec.flags.writeable = False
    return vec


# -----------------------------------------------------------------------------
# Constructors
# -----------------------------------------------------------------------------
def unit_vector(theta: float) -> np.ndarray:
    """Return the read-only unit vector (cos θ, sin θ)."""
    return _frozen(np.array([np.cos(theta), np.sin(theta)], dtype=float))


def basis(theta: float) -> Basis:
    """
    Build the orthonormal basis whose first vector sits at angle theta.

    The complement is unit_vector(theta + pi/2) written as the quarter turn
    (-sin θ, cos θ), which keeps the pair exactly orthogonal in floating point.
    """
    theta = float(theta)
    e = unit_vector(theta)
    e_perp = _frozen(np.array([-e[1], e[0]], dtype=float))
    return Basis(e=e, e_perp=e_perp, angle=theta)


def angle_of(vec: np.ndarray) -> float:
    """Angle of a 2-D vector in radians, in (-pi, pi]."""
    vec = np.asarray(vec, dtype=float)
    return float(np.arctan2(vec[1], vec[0]))


# -----------------------------------------------------------------------------
# Measurement
# -----------------------------------------------------------------------------
def overlap_probability(state: np.ndarray, basis_vector: np.ndarray) -> float:
    """
    Born-rule probability of a "yes" answer along basis_vector.

    Args:
        state: unit state vector |psi> (2,)
        basis_vector: unit basis vector |v> (2,)
    Returns:
        |<v|psi>|^2, clipped into [0, 1] against rounding.
    """
    amplitude = float(np.dot(state, basis_vector))
    return float(np.clip(amplitude * amplitude, 0.0, 1.0))


def projection(state: np.ndarray, basis_vector: np.ndarray) -> np.ndarray:
    """Projected vector <v|psi> |v>, as drawn inside the unit circle."""
    basis_vector = np.asarray(basis_vector, dtype=float)
    return float(np.dot(state, basis_vector)) * basis_vector


def collapsed_state(state: np.ndarray, chi: Basis) -> np.ndarray:
    """
    State after a "no" answer along chi.e.

    In two dimensions the "no" eigenspace is spanned by chi.e_perp alone, so the
    post-measurement state is chi.e_perp, flipped if needed to keep the sign of
    the pre-measurement component along it.
    """
    if float(np.dot(state, chi.e_perp)) < 0.0:
        return _frozen(-chi.e_perp)
    return chi.e_perp
