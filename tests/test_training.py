"""Tests for the Rich terminal driver."""

import io

import pytest
from rich.console import Console

from ngramlm import NGramModel, TokenKind
from ngramlm.training import (
    create_stats_table, evaluate_model_cli, generate_cli, interactive_demo,
    train_model_cli
)


@pytest.fixture
def out():
    return Console(file=io.StringIO(), width=120, force_terminal=False)


@pytest.fixture
def training_file(tmp_path):
    path = tmp_path / "train.txt"
    path.write_text("a b a b a c", encoding="utf-8")
    return path


def test_stats_table_flattens_orders(abac_model):
    table = create_stats_table(abac_model.training_stats)
    # n, num_tokens and four statistics for each of the two orders
    assert table.row_count == 10


def test_train_from_file(out, training_file):
    model = train_model_cli(n=2, file_path=str(training_file), out=out)

    assert model.is_trained
    assert model.token_kind == TokenKind.WORD
    assert model.prob('b', 'a') > 0
    assert "Training complete" in out.file.getvalue()


def test_train_brown_rejects_other_kinds(out):
    with pytest.raises(ValueError):
        train_model_cli(n=2, kind=TokenKind.CHARACTER, out=out)


def test_evaluate(out, training_file, tmp_path):
    model = train_model_cli(n=2, file_path=str(training_file), out=out)
    held_out = tmp_path / "held_out.txt"
    held_out.write_text("a b a c", encoding="utf-8")

    results = evaluate_model_cli(model, str(held_out), out=out)

    assert results['document'] == "held_out.txt"
    assert results['log_likelihood'] == model.log_likelihood(['a', 'b', 'a', 'c'])
    assert results['perplexity'] == model.perplexity(['a', 'b', 'a', 'c'])


def test_generate(out, abac_model):
    sentence = generate_cli(abac_model, 4, 8, out=out)

    assert sentence == abac_model.random_sentence(4, 8)
    assert "seed=4" in out.file.getvalue()


def test_generate_empty_model(out):
    model = NGramModel.from_tokens(['only'], n=3)

    assert generate_cli(model, 0, 5, out=out) is None
    assert "Cannot Generate" in out.file.getvalue()


def test_interactive_demo(out, abac_model, monkeypatch):
    answers = iter(["a", "quit"])
    monkeypatch.setattr("builtins.input", lambda *args: next(answers))

    interactive_demo(abac_model, out=out)

    text = out.file.getvalue()
    assert "Top predictions" in text
    assert "Goodbye" in text


def test_interactive_demo_keeps_training_case(out, monkeypatch):
    model = NGramModel.from_tokens(['A', 'B', 'A', 'B', 'A', 'C'], n=2)
    model.lowercase = False
    answers = iter(["A", "quit"])
    monkeypatch.setattr("builtins.input", lambda *args: next(answers))

    interactive_demo(model, out=out)

    text = out.file.getvalue()
    assert "Top predictions" in text
    assert "never seen" not in text
