"""End-to-end integration tests.

This test module validates:
1. Model file + observation file + batch evaluation
2. Agreement between forward, backward, Viterbi and path scoring
"""

import math

import numpy as np
import pytest

import hmmrec as hr

MODEL_TEXT = """\
3 2
low mid high
up down
a:
0.5 0.3 0.2
0.2 0.6 0.2
0.1 0.3 0.6
b:
0.3 0.7
0.5 0.5
0.8 0.2
pi:
0.5 0.3 0.2
"""


class TestFilesToReports:
    """Test reading both file formats and evaluating every sequence."""

    def test_files_to_batch_reports(self, tmp_path):
        model_path = tmp_path / "market.hmm"
        obs_path = tmp_path / "days.obs"
        model_path.write_text(MODEL_TEXT)
        obs_path.write_text(
            hr.format_observations([["up", "up", "down"], ["down"], ["up", "sideways"]])
        )

        model = hr.load_model_file(model_path)
        sequences = hr.parse_observations_file(obs_path)
        config = hr.EvaluationConfig(max_workers=2)

        forward = hr.evaluate_forward_batch(model, sequences, config)
        backward = hr.evaluate_backward_batch(model, sequences, config)
        viterbi = hr.decode_batch(model, sequences, config)

        for report in (forward, backward, viterbi):
            assert len(report) == 3
            assert [o.ok for o in report] == [True, True, False]
            assert isinstance(report[2].error, hr.UnknownSymbolError)

        # Single symbol: sum_i pi_i * b_i(down)
        assert forward[1].result.probability == pytest.approx(0.5 * 0.7 + 0.3 * 0.5 + 0.2 * 0.2)
        assert backward[0].result.log_probability == pytest.approx(
            forward[0].result.log_probability, rel=1e-12
        )
        assert viterbi[0].result.probability <= forward[0].result.probability


class TestInferenceConsistency:
    """Test the algorithms agree with each other on random models."""

    def test_viterbi_path_scores_match(self, random_model, rng):
        model = random_model(4, 3)
        for _ in range(10):
            length = int(rng.integers(1, 12))
            sequence = [model.symbol_name(int(k)) for k in rng.integers(0, 3, size=length)]

            best = hr.decode(model, sequence)
            likelihood = hr.evaluate_forward(model, sequence)

            assert len(best.path) == length
            assert hr.score_path(model, best.path, sequence) == pytest.approx(
                best.log_probability, rel=1e-12
            )
            assert best.log_probability <= likelihood.log_probability + 1e-12

    def test_posteriors_sum_to_one(self, random_model, rng):
        model = random_model(3, 5)
        sequence = [model.symbol_name(int(k)) for k in rng.integers(0, 5, size=20)]
        gamma = hr.posterior_marginals(model, sequence)
        assert gamma.shape == (20, 3)
        assert np.allclose(gamma.sum(axis=1), 1.0)

    def test_long_sequence_stays_finite(self, two_state_model):
        """Log-space keeps very long sequences from underflowing."""
        sequence = ["A", "B"] * 2000
        result = hr.evaluate_forward(two_state_model, sequence)
        assert math.isfinite(result.log_probability)
        assert result.probability == 0.0
        assert math.isfinite(hr.decode(two_state_model, sequence).log_probability)
