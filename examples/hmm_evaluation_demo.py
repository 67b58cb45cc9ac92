"""Example: scoring and decoding observation sequences with hmmrec.

Builds the classic two-state weather model, evaluates a few sequences with the
forward and backward algorithms, decodes them with Viterbi and shows how a
batch reports a bad sequence without stopping.
"""

import hmmrec
from hmmrec import (
    EvaluationConfig,
    HiddenMarkovModel,
    decode,
    decode_batch,
    evaluate_backward,
    evaluate_forward,
    posterior_marginals,
)


def build_weather_model() -> HiddenMarkovModel:
    # Hidden weather, observed activity
    return HiddenMarkovModel(
        states=["Rainy", "Sunny"],
        symbols=["walk", "shop", "clean"],
        transition=[[0.7, 0.3], [0.4, 0.6]],
        emission=[[0.1, 0.4, 0.5], [0.6, 0.3, 0.1]],
        initial=[0.6, 0.4],
    )


def example_likelihood(model: HiddenMarkovModel) -> None:
    print("=" * 60)
    print("Example 1: Sequence likelihood (forward / backward)")
    print("=" * 60)

    sequence = ["walk", "shop", "clean"]
    fwd = evaluate_forward(model, sequence)
    bwd = evaluate_backward(model, sequence)

    print(f"Sequence:          {' '.join(sequence)}")
    print(f"Forward  P(O|M):   {fwd.probability:.6f}")
    print(f"Backward P(O|M):   {bwd.probability:.6f}")
    print(f"log P(O|M):        {fwd.log_probability:.6f}")

    gamma = posterior_marginals(model, sequence)
    print("Posterior state probabilities:")
    for t, symbol in enumerate(sequence):
        cells = ", ".join(
            f"P({state})={gamma[t, i]:.3f}" for i, state in enumerate(model.states)
        )
        print(f"  t={t} ({symbol}): {cells}")
    print()


def example_decoding(model: HiddenMarkovModel) -> None:
    print("=" * 60)
    print("Example 2: Most likely weather (Viterbi)")
    print("=" * 60)

    sequence = ["walk", "shop", "clean", "clean", "walk"]
    result = decode(model, sequence)
    print(f"Observations: {' '.join(sequence)}")
    print(f"Best path:    {' '.join(result.path)}")
    print(f"P(path, O):   {result.probability:.6g}")
    print()


def example_batch(model: HiddenMarkovModel) -> None:
    print("=" * 60)
    print("Example 3: Batch decoding with a bad sequence")
    print("=" * 60)

    sequences = [
        ["walk", "walk"],
        ["shop", "swim"],  # unknown symbol
        [],
        ["clean", "shop", "walk"],
    ]
    report = decode_batch(model, sequences, EvaluationConfig(max_workers=2))
    for outcome in report:
        if outcome.ok:
            print(f"  [{outcome.index}] {' '.join(outcome.result.path)}")
        else:
            print(f"  [{outcome.index}] error: {outcome.error}")
    print(f"Failed sequences: {report.n_failed} of {len(report)}")
    print()


if __name__ == "__main__":
    print(f"hmmrec {hmmrec.__version__}\n")
    weather = build_weather_model()
    example_likelihood(weather)
    example_decoding(weather)
    example_batch(weather)
    print("Done.")
