"""Tests for documents and the tokenizer adapter (offline token kinds)."""

import pytest

from ngramlm import corpus
from ngramlm.corpus import CONTENT_TOKEN, Document, TokenKind, tokenize


class FakeStopwords:
    def words(self, language):
        assert language == 'english'
        return ['the', 'on', 'a']


def test_word_tokens():
    assert tokenize("Hello, World!") == ['hello', ',', 'world', '!']


def test_word_tokens_keep_case():
    assert tokenize("Hello World", lowercase=False) == ['Hello', 'World']


def test_character_tokens_collapse_whitespace():
    assert tokenize("Ab  c\n", TokenKind.CHARACTER) == ['a', 'b', ' ', 'c']


def test_function_word_tokens(monkeypatch):
    monkeypatch.setattr(corpus, 'ensure_nltk_data', lambda *names: None)
    monkeypatch.setattr(corpus, 'stopwords', FakeStopwords())

    tokens = tokenize("The cat sat on a mat", TokenKind.FUNCTION_WORD)
    assert tokens == ['the', CONTENT_TOKEN, CONTENT_TOKEN, 'on', 'a', CONTENT_TOKEN]


def test_pos_tokens_use_english_tagger(monkeypatch):
    requested = []
    monkeypatch.setattr(corpus, 'ensure_nltk_data', lambda *names: requested.extend(names))
    monkeypatch.setattr(corpus.nltk, 'pos_tag',
                        lambda words: [(w, 'NN' if w[0].isupper() else 'VB') for w in words])

    assert tokenize("Dogs bark", TokenKind.POS) == ['NN', 'VB']
    assert requested == ['averaged_perceptron_tagger_eng']
    assert corpus._NLTK_RESOURCES['averaged_perceptron_tagger_eng'] == \
        'taggers/averaged_perceptron_tagger_eng'


def test_unknown_kind():
    with pytest.raises(ValueError):
        tokenize("text", "bogus")


def test_document_from_path(tmp_path):
    path = tmp_path / "train.txt"
    path.write_text("the cat sat", encoding="utf-8")

    document = Document.from_path(path)

    assert document.text == "the cat sat"
    assert document.path == path
    assert document.metadata == {'name': 'train.txt'}


def test_token_kind_values():
    assert TokenKind("character") is TokenKind.CHARACTER
    assert {kind.value for kind in TokenKind} == {
        'word', 'character', 'pos', 'function_word'
    }
