"""Tests for n-gram counting and frequency-of-frequency statistics."""

import pytest

from ngramlm.counting import count_ngrams, count_of_counts, context_totals


class TestCountNgrams:

    def test_bigram_counts(self, abac_tokens):
        freqs = count_ngrams(abac_tokens, 2)

        assert set(freqs) == {('a',), ('b',)}
        assert freqs[('a',)] == {'b': 2, 'c': 1}
        assert freqs[('b',)] == {'a': 2}

    def test_unigrams_use_empty_context(self, abac_tokens):
        freqs = count_ngrams(abac_tokens, 1)

        assert list(freqs) == [()]
        assert freqs[()] == {'a': 3, 'b': 2, 'c': 1}

    def test_short_sequence_is_empty(self):
        assert count_ngrams(['a', 'b'], 3) == {}
        assert count_ngrams([], 1) == {}

    def test_exact_length_gives_one_ngram(self):
        freqs = count_ngrams(['a', 'b', 'c'], 3)
        assert freqs == {('a', 'b'): {'c': 1}}

    def test_no_zero_counts(self, passage_tokens):
        for order in range(1, 5):
            for words in count_ngrams(passage_tokens, order).values():
                assert all(count >= 1 for count in words.values())

    def test_contexts_are_structural(self):
        # A token containing a space must not collide with two tokens
        freqs = count_ngrams(['a b', 'c', 'x', 'a', 'b', 'c'], 3)

        assert freqs[('a b', 'c')] == {'x': 1}
        assert freqs[('a', 'b')] == {'c': 1}

    def test_invalid_order(self):
        with pytest.raises(ValueError):
            count_ngrams(['a'], 0)


class TestStatistics:

    def test_count_of_counts(self, abac_tokens):
        freqs = count_ngrams(abac_tokens, 2)
        assert count_of_counts(freqs) == {2: 2, 1: 1}

    def test_context_totals(self, abac_tokens):
        freqs = count_ngrams(abac_tokens, 2)
        assert context_totals(freqs) == {('a',): 3, ('b',): 2}
