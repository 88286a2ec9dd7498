"""
GQEM model object.

The Generalized Quantum Episodic Memory model (Trueblood & Hemmer, 2017) of
item recognition. Subjects study a word list and are then tested with old
words, new but semantically related words, and new unrelated words, under
four instructions:

    gist:            respond "yes" to semantically related words (G)
    verbatim:        respond "yes" to old (studied) words (V)
    gist + verbatim: respond "yes" to related and old words (G ∪ V)
    unrelated:       respond "yes" to unrelated words (U)

Each instruction is a basis and each word type is a state vector, all placed by
angles relative to the verbatim basis. Because the gist and verbatim bases are
neither identical nor orthogonal they are incompatible, and the model violates
the law of total probability and additivity the way people do.

Example:
    model = GQEM(theta_g=-0.12, theta_u=-1.54, theta_psi_o=-0.71,
                 theta_psi_r=-0.86, theta_psi_u=1.26)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Sequence

import numpy as np

from gqem_errors import InvalidParameter
from gqem_geometry import Basis, basis, unit_vector

PARAMETER_NAMES = ("theta_g", "theta_u", "theta_psi_o", "theta_psi_r", "theta_psi_u")
VERBATIM_ANGLE = 0.0


class WordType(Enum):
    """Probe types, in prediction-matrix column order."""

    OLD = "old"
    RELATED = "related"
    UNRELATED = "unrelated"


def _check_angle(name: str, value: object) -> float:
    try:
        angle = float(value)
    except (TypeError, ValueError):
        raise InvalidParameter(name, value) from None
    if not np.isfinite(angle):
        raise InvalidParameter(name, value)
    return angle


@dataclass(frozen=True, kw_only=True)
class GQEM:
    """
    Immutable GQEM parameterization.

    Attributes:
        theta_g: angle in radians between the verbatim and gist bases.
        theta_u: angle in radians between the verbatim and unrelated bases.
        theta_psi_o: angle between the verbatim basis and the old-word state.
        theta_psi_r: angle between the verbatim basis and the related-word state.
        theta_psi_u: angle between the verbatim basis and the unrelated-word state.

    Angles are unconstrained reals; no wrapping modulo 2*pi is applied.
    """

    theta_g: float
    theta_u: float
    theta_psi_o: float
    theta_psi_r: float
    theta_psi_u: float

    gist: Basis = field(init=False, repr=False, compare=False)
    verbatim: Basis = field(init=False, repr=False, compare=False)
    unrelated: Basis = field(init=False, repr=False, compare=False)
    psi_old: np.ndarray = field(init=False, repr=False, compare=False)
    psi_related: np.ndarray = field(init=False, repr=False, compare=False)
    psi_unrelated: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for name in PARAMETER_NAMES:
            object.__setattr__(self, name, _check_angle(name, getattr(self, name)))

        object.__setattr__(self, "gist", basis(self.theta_g))
        object.__setattr__(self, "verbatim", basis(VERBATIM_ANGLE))
        object.__setattr__(self, "unrelated", basis(self.theta_u))
        object.__setattr__(self, "psi_old", unit_vector(self.theta_psi_o))
        object.__setattr__(self, "psi_related", unit_vector(self.theta_psi_r))
        object.__setattr__(self, "psi_unrelated", unit_vector(self.theta_psi_u))

    # Alternate constructors ------------------------------------------------
    @classmethod
    def from_array(cls, values: Sequence[float]) -> "GQEM":
        """Build a model from a 5-vector ordered as PARAMETER_NAMES."""
        values = np.asarray(values, dtype=float).ravel()
        if values.shape[0] != len(PARAMETER_NAMES):
            raise ValueError(f"expected {len(PARAMETER_NAMES)} angles, got {values.shape[0]}")
        return cls(**dict(zip(PARAMETER_NAMES, values.tolist())))

    # Accessors -------------------------------------------------------------
    def params(self) -> Dict[str, float]:
        """Angles keyed by parameter name, in PARAMETER_NAMES order."""
        return {name: getattr(self, name) for name in PARAMETER_NAMES}

    def to_array(self) -> np.ndarray:
        return np.array([getattr(self, name) for name in PARAMETER_NAMES], dtype=float)

    def state(self, word_type: WordType) -> np.ndarray:
        """State vector triggered by a probe of the given word type."""
        word_type = WordType(word_type)
        if word_type is WordType.OLD:
            return self.psi_old
        if word_type is WordType.RELATED:
            return self.psi_related
        return self.psi_unrelated

    def basis_angles(self) -> Dict[str, float]:
        """Basis angles for plotting, relative to verbatim."""
        return {
            "gist": self.gist.angle,
            "verbatim": self.verbatim.angle,
            "unrelated": self.unrelated.angle,
        }

    def state_angles(self) -> Dict[str, float]:
        """State-vector angles for plotting, keyed by word type."""
        return {
            WordType.OLD.value: self.theta_psi_o,
            WordType.RELATED.value: self.theta_psi_r,
            WordType.UNRELATED.value: self.theta_psi_u,
        }
