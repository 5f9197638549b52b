"""
N-gram Frequency Counting

This module slides a fixed-width window over a token sequence and
accumulates how often each token follows each context.
"""

import logging
from collections import Counter
from typing import Dict, Hashable, Sequence, Tuple

logger = logging.getLogger(__name__)

Context = Tuple[Hashable, ...]
FrequencyMap = Dict[Context, Counter]


def count_ngrams(tokens: Sequence[Hashable], order: int) -> FrequencyMap:
    """
    Count n-grams of a single order.
    
    Every window of ``order`` tokens is split into a context (the first
    ``order - 1`` tokens, as a tuple) and a target (the last token).
    
    Args:
        tokens: The ordered token sequence
        order: Window width (1 for unigrams, whose context is ``()``)
    
    Returns:
        Mapping of context -> Counter of following tokens. Empty when the
        sequence is shorter than ``order``.
    """
    if order < 1:
        raise ValueError("order must be at least 1")
    
    tokens = list(tokens)
    freqs: FrequencyMap = {}
    
    for i in range(len(tokens) - order + 1):
        ngram = tuple(tokens[i:i + order])
        context = ngram[:-1]
        word = ngram[-1]
        
        if context not in freqs:
            freqs[context] = Counter()
        freqs[context][word] += 1
    
    logger.debug("Counted %d contexts of order %d", len(freqs), order)
    return freqs


def count_of_counts(freqs: FrequencyMap) -> Counter:
    """
    Build frequency-of-frequencies statistics.
    
    Returns:
        Counter mapping r -> number of distinct (context, token) pairs
        that occurred exactly r times
    """
    result = Counter()
    for continuations in freqs.values():
        result.update(continuations.values())
    return result


def context_totals(freqs: FrequencyMap) -> Dict[Context, int]:
    """Total number of observations under each context."""
    return {context: sum(words.values()) for context, words in freqs.items()}
