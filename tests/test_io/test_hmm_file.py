"""Tests for .hmm model file reading and writing."""

import numpy as np
import pytest

from hmmrec import HiddenMarkovModel, MalformedModelError, ModelFileError
from hmmrec.io import (
    dump_model_file,
    format_model,
    load_model_file,
    parse_model_file,
    parse_model_string,
)

MODEL_TEXT = """\
2 2 2
S0 S1
A B
a:
0.7 0.3
0.4 0.6
b:
0.9 0.1
0.2 0.8
pi:
0.6 0.4
"""


def test_parse_model_string():
    tables = parse_model_string(MODEL_TEXT)
    assert tables.states == ["S0", "S1"]
    assert tables.symbols == ["A", "B"]
    assert tables.transition == [[0.7, 0.3], [0.4, 0.6]]
    assert tables.emission == [[0.9, 0.1], [0.2, 0.8]]
    assert tables.initial == [0.6, 0.4]


def test_parse_model_without_length_and_with_blank_lines():
    text = "\n2 3\n\nhot cold\n  x y z  \n\na:\n0.5 0.5\n1 0\nb:\n0.2 0.3 0.5\n1 0 0\n\npi:\n1 0\n\n"
    tables = parse_model_string(text)
    model = HiddenMarkovModel.load(tables)
    assert model.states == ("hot", "cold")
    assert model.n_symbols == 3
    assert model.transition_prob(1, 0) == 1.0


def test_parse_model_header_case_insensitive():
    tables = parse_model_string(MODEL_TEXT.replace("a:", "A:").replace("pi:", "PI:"))
    assert tables.initial == [0.6, 0.4]


@pytest.mark.parametrize(
    "old, new, fragment",
    [
        ("2 2 2", "2", "size line"),
        ("2 2 2", "two 2", "expected numbers"),
        ("2 2 2", "0 2", "must be positive"),
        ("S0 S1", "S0", "expected 2 state names"),
        ("A B", "A B C", "expected 2 symbol names"),
        ("a:", "trans:", "expected section header 'a:'"),
        ("0.4 0.6\nb:", "0.4\nb:", "transition row 1 has 1 values"),
        ("0.2 0.8", "0.2 x", "expected numbers"),
        ("pi:\n0.6 0.4", "pi:\n0.6 0.4\nextra", "unexpected content"),
    ],
)
def test_parse_model_syntax_errors(old, new, fragment):
    with pytest.raises(ModelFileError, match=fragment):
        parse_model_string(MODEL_TEXT.replace(old, new, 1))


def test_parse_model_error_has_line_number():
    with pytest.raises(ModelFileError) as info:
        parse_model_string(MODEL_TEXT.replace("0.2 0.8", "0.2"))
    assert info.value.line == 9
    assert str(info.value).startswith("line 9:")


def test_parse_model_truncated():
    with pytest.raises(ModelFileError, match="unexpected end of file"):
        parse_model_string(MODEL_TEXT.split("pi:")[0])


def test_load_model_file(tmp_path):
    path = tmp_path / "weather.hmm"
    path.write_text(MODEL_TEXT)
    model = load_model_file(path)
    assert model.states == ("S0", "S1")
    assert np.allclose(model.emission, [[0.9, 0.1], [0.2, 0.8]])


def test_load_model_file_rejects_bad_tables(tmp_path):
    """Syntax is fine but a row does not sum to one."""
    path = tmp_path / "bad.hmm"
    path.write_text(MODEL_TEXT.replace("0.4 0.6", "0.4 0.5"))
    with pytest.raises(MalformedModelError):
        load_model_file(path)
    load_model_file(path, atol=0.2)


def test_parse_model_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        parse_model_file(tmp_path / "nope.hmm")


def test_format_model_round_trip(tmp_path, random_model):
    model = random_model(3, 4)
    path = tmp_path / "random.hmm"
    dump_model_file(model, path)
    back = load_model_file(path)

    assert back.states == model.states
    assert back.symbols == model.symbols
    assert np.array_equal(back.transition, model.transition)
    assert np.array_equal(back.emission, model.emission)
    assert np.array_equal(back.initial, model.initial)


def test_format_model_layout(two_state_model):
    assert format_model(two_state_model) == MODEL_TEXT.replace("2 2 2", "2 2")
