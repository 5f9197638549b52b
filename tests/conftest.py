"""
Pytest Configuration and Shared Fixtures
========================================

Small corpora whose probabilities can be worked out by hand, plus a longer
passage for generation and invariant checks.
"""

import os
import sys

import pytest

_repo_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _repo_root not in sys.path:
    sys.path.insert(0, _repo_root)

from ngramlm import NGramModel  # noqa: E402


PASSAGE = """
the cat sat on the mat and the dog sat on the log . the cat saw the dog
and the dog saw the cat . a bird sat on the cat and the cat ran off the mat .
the dog ran after the cat and the bird flew over the log .
"""


@pytest.fixture
def abac_tokens():
    """Unigrams a:3 b:2 c:1, bigrams (a,b):2 (b,a):2 (a,c):1."""
    return ['a', 'b', 'a', 'b', 'a', 'c']


@pytest.fixture
def abac_model(abac_tokens):
    return NGramModel.from_tokens(abac_tokens, n=2)


@pytest.fixture
def passage_tokens():
    return PASSAGE.split()


@pytest.fixture
def trigram_model(passage_tokens):
    return NGramModel.from_tokens(passage_tokens, n=3)
