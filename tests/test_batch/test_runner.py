"""Tests for the batch runner."""

import threading

import pytest

import hmmrec.batch.runner as runner_module
from hmmrec import (
    Algorithm,
    EmptySequenceError,
    EvaluationConfig,
    LikelihoodResult,
    SequenceTooLargeError,
    UnknownSymbolError,
    ViterbiResult,
    decode,
    decode_batch,
    evaluate_backward_batch,
    evaluate_forward,
    evaluate_forward_batch,
    run_batch,
)

SEQUENCES = [["A", "A"], ["A", "B", "B"], ["B"], ["A", "B", "A", "A"]]


def test_batch_forward_preserves_order(two_state_model):
    """Test one result per sequence, in input order."""
    report = evaluate_forward_batch(two_state_model, SEQUENCES)

    assert report.algorithm is Algorithm.FORWARD
    assert len(report) == len(SEQUENCES)
    assert report.n_failed == 0
    for i, (outcome, sequence) in enumerate(zip(report, SEQUENCES)):
        assert outcome.index == i
        assert outcome.ok
        assert outcome.sequence == tuple(sequence)
        assert isinstance(outcome.result, LikelihoodResult)
        assert outcome.result.log_probability == evaluate_forward(two_state_model, sequence).log_probability
    assert report[0].result.probability == pytest.approx(0.411)


def test_batch_backward_matches_forward(two_state_model):
    fwd = evaluate_forward_batch(two_state_model, SEQUENCES)
    bwd = evaluate_backward_batch(two_state_model, SEQUENCES)
    for f, b in zip(fwd.results, bwd.results):
        assert b.algorithm == "backward"
        assert b.probability == pytest.approx(f.probability, rel=1e-9)


def test_batch_decode(two_state_model):
    report = decode_batch(two_state_model, SEQUENCES)
    assert report.algorithm is Algorithm.VITERBI
    assert all(isinstance(r, ViterbiResult) for r in report.results)
    assert report[0].result.path == ("S0", "S0")


def test_batch_isolates_unknown_symbol(two_state_model):
    """Test a bad sequence fails alone; the others still produce results."""
    sequences = [["A", "A"], ["A", "Z"], ["B", "B"]]
    report = evaluate_forward_batch(two_state_model, sequences)

    assert [o.ok for o in report] == [True, False, True]
    assert report.n_failed == 1
    failed = report.failures[0]
    assert failed.index == 1
    assert failed.result is None
    assert isinstance(failed.error, UnknownSymbolError)
    assert failed.error.symbol == "Z"
    assert report.results[1] is None
    assert report.results[0].probability == pytest.approx(0.411)


def test_batch_isolates_empty_and_oversized(two_state_model):
    sequences = [[], ["A"] * 10, ["B"]]
    report = decode_batch(two_state_model, sequences, EvaluationConfig(max_trellis_cells=8))

    assert isinstance(report[0].error, EmptySequenceError)
    assert isinstance(report[1].error, SequenceTooLargeError)
    assert report[2].ok


def test_batch_failures_are_logged(two_state_model, monkeypatch):
    messages = []
    monkeypatch.setattr(
        runner_module.logger, "warning", lambda msg, *args: messages.append(msg % args)
    )
    evaluate_forward_batch(two_state_model, [["A"], ["Q"]])
    assert messages == ["sequence 1 failed: unknown symbol 'Q' at position 0"]


def test_batch_accepts_algorithm_names(two_state_model):
    report = run_batch(two_state_model, SEQUENCES, "viterbi")
    assert report.algorithm is Algorithm.VITERBI
    with pytest.raises(ValueError):
        run_batch(two_state_model, SEQUENCES, "baum-welch")


def test_batch_empty_input(two_state_model):
    report = run_batch(two_state_model, [], Algorithm.FORWARD)
    assert len(report) == 0
    assert report.results == []


def test_batch_threads_match_sequential(two_state_model, rng):
    """Test thread fan-out returns the same outcomes in the same order."""
    sequences = [
        [two_state_model.symbol_name(k) for k in rng.integers(0, 2, size=rng.integers(1, 30))]
        for _ in range(40)
    ]
    sequences[7] = ["A", "nope"]

    sequential = decode_batch(two_state_model, sequences)
    threaded = decode_batch(two_state_model, sequences, EvaluationConfig(max_workers=4))

    assert len(threaded) == len(sequential)
    for s, t in zip(sequential, threaded):
        assert s.index == t.index
        assert s.ok == t.ok
        if s.ok:
            assert s.result.path == t.result.path
            assert s.result.log_probability == t.result.log_probability
    assert not threaded[7].ok


def test_batch_uses_worker_threads(two_state_model, monkeypatch):
    seen = set()
    real = runner_module._DISPATCH[Algorithm.VITERBI]

    def spy(model, sequence, config):
        seen.add(threading.get_ident())
        return real(model, sequence, config)

    monkeypatch.setitem(runner_module._DISPATCH, Algorithm.VITERBI, spy)
    decode_batch(two_state_model, SEQUENCES * 5, EvaluationConfig(max_workers=3))
    assert threading.get_ident() not in seen


def test_batch_propagates_non_domain_errors(two_state_model, monkeypatch):
    """Test only HMMError is isolated; programming errors surface."""

    def boom(model, sequence, config):
        raise RuntimeError("boom")

    monkeypatch.setitem(runner_module._DISPATCH, Algorithm.FORWARD, boom)
    with pytest.raises(RuntimeError, match="boom"):
        evaluate_forward_batch(two_state_model, SEQUENCES)


def test_batch_does_not_mutate_model(two_state_model):
    before = two_state_model.transition.copy()
    decode_batch(two_state_model, SEQUENCES, EvaluationConfig(max_workers=2))
    assert (two_state_model.transition == before).all()


def test_decode_reference_matches_batch(two_state_model):
    report = decode_batch(two_state_model, SEQUENCES)
    for outcome, sequence in zip(report, SEQUENCES):
        assert outcome.result.path == decode(two_state_model, sequence).path
