"""
Tests for the GQEM prediction engine.

Checks the reference predictions, the sequential gist+verbatim judgment, and
the LOTP / subadditivity effects the model exists to produce.
"""

import numpy as np
import pytest

from gqem_model import GQEM, WordType
from gqem_predict import (
    COLUMN_LABELS,
    PREDICTION_SHAPE,
    ROW_LABELS,
    Instruction,
    JudgmentOrder,
    additivity_total,
    compute_predictions,
    judgment_probability,
    lotp_violation,
)


# =============================================================================
# Layout
# =============================================================================

class TestLayout:
    """Test matrix shape and labels."""

    def test_labels(self):
        assert ROW_LABELS == ("gist", "verbatim", "gist+verbatim", "unrelated")
        assert COLUMN_LABELS == ("old", "related", "unrelated")

    def test_shape(self, reference_model):
        preds = compute_predictions(reference_model)
        assert preds.shape == PREDICTION_SHAPE == (4, 3)

    def test_cells_match_single_judgments(self, reference_model):
        preds = compute_predictions(reference_model)
        for i, instruction in enumerate(Instruction):
            for j, word_type in enumerate(WordType):
                assert preds[i, j] == judgment_probability(reference_model, instruction, word_type)


# =============================================================================
# Predictions
# =============================================================================

class TestPredictions:
    """Test the probability matrix."""

    def test_reference_predictions(self, reference_model, reference_predictions):
        preds = compute_predictions(reference_model)
        np.testing.assert_allclose(preds, reference_predictions, atol=1e-5)

    def test_single_judgments_are_squared_cosines(self, reference_model):
        assert judgment_probability(
            reference_model, Instruction.GIST, WordType.OLD
        ) == pytest.approx(np.cos(-0.71 + 0.12) ** 2)
        assert judgment_probability(
            reference_model, Instruction.VERBATIM, WordType.RELATED
        ) == pytest.approx(np.cos(-0.86) ** 2)
        assert judgment_probability(
            reference_model, Instruction.UNRELATED, WordType.UNRELATED
        ) == pytest.approx(np.cos(1.26 + 1.54) ** 2)

    def test_compound_judgment_formula(self, reference_model):
        p_gist = np.cos(-0.71 + 0.12) ** 2
        # "no" to gist leaves the state on the gist complement, at -0.12 + pi/2
        p_verbatim_after = np.cos(-0.12 + np.pi / 2) ** 2
        expected = p_gist + (1 - p_gist) * p_verbatim_after
        assert judgment_probability(
            reference_model, Instruction.GIST_OR_VERBATIM, WordType.OLD
        ) == pytest.approx(expected)

    def test_all_predictions_are_probabilities(self, random_models):
        for model in random_models:
            for order in JudgmentOrder:
                preds = compute_predictions(model, order)
                assert np.all(preds >= 0.0)
                assert np.all(preds <= 1.0)

    def test_compound_at_least_first_judgment(self, random_models):
        for model in random_models:
            preds = compute_predictions(model)
            assert np.all(preds[2] >= preds[0])

    def test_predictions_are_deterministic(self, reference_model):
        a = compute_predictions(reference_model)
        b = compute_predictions(reference_model)
        np.testing.assert_array_equal(a, b)

    @pytest.mark.parametrize("angles", [
        (0.0, -1.54, -0.71, -0.86, 1.26),
        (0.0, 2.0, 0.9, 0.15, -1.5),
        (0.0, 0.3, np.pi / 2, 0.0, -np.pi),
    ])
    def test_identical_gist_and_verbatim_bases(self, angles):
        model = GQEM.from_array(angles)
        for order in JudgmentOrder:
            preds = compute_predictions(model, order)
            np.testing.assert_array_equal(preds[2], preds[0])
            np.testing.assert_array_equal(preds[2], preds[1])

    def test_aligned_probe_is_always_endorsed(self):
        model = GQEM(theta_g=0.4, theta_u=0.0, theta_psi_o=0.0, theta_psi_r=0.4, theta_psi_u=0.0)
        assert judgment_probability(model, Instruction.VERBATIM, WordType.OLD) == 1.0
        assert judgment_probability(model, Instruction.GIST, WordType.RELATED) == pytest.approx(1.0)


# =============================================================================
# Judgment order
# =============================================================================

class TestJudgmentOrder:
    """Test the order convention of the gist+verbatim judgment."""

    def test_gist_first_is_default(self, reference_model):
        np.testing.assert_array_equal(
            compute_predictions(reference_model),
            compute_predictions(reference_model, JudgmentOrder.GIST_FIRST),
        )

    def test_order_accepts_value(self, reference_model):
        np.testing.assert_array_equal(
            compute_predictions(reference_model, "verbatim_first"),
            compute_predictions(reference_model, JudgmentOrder.VERBATIM_FIRST),
        )

    def test_order_changes_compound_judgment(self, reference_model):
        gist_first = compute_predictions(reference_model, JudgmentOrder.GIST_FIRST)
        verbatim_first = compute_predictions(reference_model, JudgmentOrder.VERBATIM_FIRST)
        # single judgments do not depend on order
        np.testing.assert_array_equal(gist_first[[0, 1, 3]], verbatim_first[[0, 1, 3]])
        assert gist_first[2, 0] == pytest.approx(0.694898, abs=1e-5)
        assert verbatim_first[2, 0] == pytest.approx(0.581202, abs=1e-5)

    def test_verbatim_first_formula(self, reference_model):
        p_verbatim = np.cos(-0.71) ** 2
        p_gist_after = np.sin(-0.12) ** 2
        expected = p_verbatim + (1 - p_verbatim) * p_gist_after
        assert judgment_probability(
            reference_model,
            Instruction.GIST_OR_VERBATIM,
            WordType.OLD,
            JudgmentOrder.VERBATIM_FIRST,
        ) == pytest.approx(expected)


# =============================================================================
# Effects
# =============================================================================

class TestEffects:
    """Test violations of classical probability."""

    def test_lotp_violation(self, reference_model):
        violation = lotp_violation(compute_predictions(reference_model))
        assert violation.shape == (3,)
        assert violation[0] > 0.5
        assert np.all(violation > 0)

    def test_lotp_gap_equals_gist_for_identical_bases(self):
        model = GQEM(theta_g=0.0, theta_u=1.0, theta_psi_o=0.3, theta_psi_r=0.6, theta_psi_u=1.2)
        preds = compute_predictions(model)
        np.testing.assert_allclose(lotp_violation(preds), preds[0])

    def test_subadditivity(self, reference_model):
        total = additivity_total(compute_predictions(reference_model))
        assert total[0] > 1.0
        assert total[0] == pytest.approx(0.690462 + 0.575113 + 0.455457, abs=1e-5)

    def test_effects_accept_plain_lists(self, reference_predictions):
        np.testing.assert_allclose(
            lotp_violation(reference_predictions.tolist()),
            lotp_violation(reference_predictions),
        )
