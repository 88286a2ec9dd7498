"""
GQEM prediction engine.

Turns a GQEM model into the 4x3 matrix of "yes" probabilities:

                     old   related   unrelated
    gist             .      .         .
    verbatim         .      .         .
    gist+verbatim    .      .         .
    unrelated        .      .         .

Single judgments are one Born-rule projection. The compound gist+verbatim
judgment is evaluated sequentially: the first question is answered, and only
on the "no" path is the second question asked of the collapsed state. The
bases do not commute, so the order matters and P(G) + P(V) need not equal
P(G ∪ V).
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Tuple

import numpy as np

from gqem_geometry import Basis, collapsed_state, overlap_probability
from gqem_model import GQEM, WordType

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Conventions
# -----------------------------------------------------------------------------
class Instruction(Enum):
    """Instruction conditions, in prediction-matrix row order."""

    GIST = "gist"
    VERBATIM = "verbatim"
    GIST_OR_VERBATIM = "gist+verbatim"
    UNRELATED = "unrelated"


class JudgmentOrder(Enum):
    """Which question is answered first in the gist+verbatim judgment."""

    GIST_FIRST = "gist_first"
    VERBATIM_FIRST = "verbatim_first"


INSTRUCTIONS: Tuple[Instruction, ...] = tuple(Instruction)
WORD_TYPES: Tuple[WordType, ...] = tuple(WordType)
ROW_LABELS: Tuple[str, ...] = tuple(i.value for i in INSTRUCTIONS)
COLUMN_LABELS: Tuple[str, ...] = tuple(w.value for w in WORD_TYPES)
N_INSTRUCTIONS = len(INSTRUCTIONS)
N_WORD_TYPES = len(WORD_TYPES)
PREDICTION_SHAPE = (N_INSTRUCTIONS, N_WORD_TYPES)
DEFAULT_ORDER = JudgmentOrder.GIST_FIRST


# -----------------------------------------------------------------------------
# Judgments
# -----------------------------------------------------------------------------
def sequential_union(psi: np.ndarray, first: Basis, second: Basis) -> float:
    """
    Probability of "yes" to (first OR second), asking `first` before `second`.

    P = p1 + (1 - p1) * |<second|psi_no>|^2, where psi_no is psi collapsed onto
    the "no" eigenvector of `first`.
    """
    p_first = overlap_probability(psi, first.e)
    p_second = overlap_probability(collapsed_state(psi, first), second.e)
    return float(min(p_first + (1.0 - p_first) * p_second, 1.0))


def judgment_probability(
    model: GQEM,
    instruction: Instruction,
    word_type: WordType,
    order: JudgmentOrder = DEFAULT_ORDER,
) -> float:
    """
    Probability of a "yes" response for one (instruction, word type) cell.

    Args:
        model: GQEM parameterization.
        instruction: instruction condition (matrix row).
        word_type: probe type (matrix column).
        order: evaluation order of the compound gist+verbatim judgment.
    Returns:
        Probability in [0, 1].
    """
    instruction = Instruction(instruction)
    order = JudgmentOrder(order)
    psi = model.state(word_type)

    if instruction is Instruction.GIST:
        return overlap_probability(psi, model.gist.e)
    if instruction is Instruction.VERBATIM:
        return overlap_probability(psi, model.verbatim.e)
    if instruction is Instruction.UNRELATED:
        return overlap_probability(psi, model.unrelated.e)
    if order is JudgmentOrder.GIST_FIRST:
        return sequential_union(psi, model.gist, model.verbatim)
    return sequential_union(psi, model.verbatim, model.gist)


def compute_predictions(model: GQEM, order: JudgmentOrder = DEFAULT_ORDER) -> np.ndarray:
    """
    Matrix of "yes" probabilities, rows = ROW_LABELS, columns = COLUMN_LABELS.

    Every cell is computed independently from the model's angles.
    """
    order = JudgmentOrder(order)
    preds = np.empty(PREDICTION_SHAPE, dtype=float)
    for i, instruction in enumerate(INSTRUCTIONS):
        for j, word_type in enumerate(WORD_TYPES):
            preds[i, j] = judgment_probability(model, instruction, word_type, order)
    logger.debug("predictions for %r (order=%s):\n%s", model, order.value, preds)
    return preds


# -----------------------------------------------------------------------------
# Effects
# -----------------------------------------------------------------------------
def _row(instruction: Instruction) -> int:
    return INSTRUCTIONS.index(instruction)


def lotp_violation(preds: np.ndarray) -> np.ndarray:
    """
    P(G) + P(V) - P(G ∪ V) per word type.

    Classically this equals P(G ∩ V), which is zero for the disjoint gist and
    verbatim criteria; positive values are the violation seen in experiments.
    """
    preds = np.asarray(preds, dtype=float)
    return (
        preds[_row(Instruction.GIST)]
        + preds[_row(Instruction.VERBATIM)]
        - preds[_row(Instruction.GIST_OR_VERBATIM)]
    )


def additivity_total(preds: np.ndarray) -> np.ndarray:
    """P(G) + P(V) + P(U) per word type; above 1 means subadditive judgments."""
    preds = np.asarray(preds, dtype=float)
    return (
        preds[_row(Instruction.GIST)]
        + preds[_row(Instruction.VERBATIM)]
        + preds[_row(Instruction.UNRELATED)]
    )
