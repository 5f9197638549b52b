"""
Seeded Sampling from an N-gram Model

Generation walks the top-order distribution with inverse-CDF selection.
Tokens and contexts are always visited in sorted order, so a given
(model, seed, count) produces the same output on every run and platform;
dictionary iteration order is never relied upon.

Tokens must therefore be mutually orderable (e.g. all strings).
"""

import logging
import random
from typing import Dict, Hashable, List, Sequence, Tuple

from .exceptions import EmptyModelError

logger = logging.getLogger(__name__)


def inverse_cdf(rand: float, weighted: Sequence[Tuple[Hashable, float]]) -> Hashable:
    """
    Select an item from a list of probabilities given a uniform random number.

    Probabilities are accumulated as stored, without renormalizing, and the
    first item whose running sum exceeds ``rand`` is returned. When the
    whole list sums to ``rand`` or less (smoothed tables keep back the mass
    reserved for lower orders) the last item is returned.

    Args:
        rand: A uniform random number in [0, 1)
        weighted: (item, probability) pairs in the order to accumulate them
    """
    if not weighted:
        raise ValueError("Cannot select from an empty distribution")

    cumulative = 0.0
    for item, prob in weighted:
        cumulative += prob
        if cumulative > rand:
            return item
    return weighted[-1][0]


class Sampler:
    """
    Generates token sequences from a trained NGramModel.

    The sampler only reads the model's tables. Sorted views of contexts and
    continuations are cached per sampler instance.
    """

    def __init__(self, model):
        self.n = model.n
        self.dist = model.top.dist
        totals = model.top.totals
        grand_total = sum(totals.values())
        self.contexts: List[Tuple[Tuple[Hashable, ...], float]] = [
            (context, totals[context] / grand_total) for context in sorted(self.dist)
        ]
        self._continuations: Dict[Tuple[Hashable, ...], List[Tuple[Hashable, float]]] = {}

    def select_context(self, rand: float) -> Tuple[Hashable, ...]:
        """Pick a context, weighted by how often it was seen in training."""
        return inverse_cdf(rand, self.contexts)

    def select_token(self, rand: float, context: Tuple[Hashable, ...]) -> Hashable:
        """Pick a continuation of an observed context."""
        if context not in self._continuations:
            words = self.dist[context]
            self._continuations[context] = [(word, words[word]) for word in sorted(words)]
        return inverse_cdf(rand, self._continuations[context])

    def generate(self, seed: int, count: int) -> List[Hashable]:
        """
        Generate ``count`` tokens.

        The window starts at a context drawn from the known contexts. Whenever
        the window reaches a context that was never observed, a fresh context
        is drawn the same way before the next token is sampled.

        Raises:
            EmptyModelError: If the model has no observed contexts
        """
        if not self.contexts:
            raise EmptyModelError("Cannot generate from a model trained on no n-grams")
        if count < 0:
            raise ValueError("count must be non-negative")

        rng = random.Random(seed)
        context = self.select_context(rng.random())
        generated = []

        for _ in range(count):
            if context not in self.dist:
                logger.debug("Unseen context %r, drawing a new one", context)
                context = self.select_context(rng.random())

            word = self.select_token(rng.random(), context)
            generated.append(word)

            if self.n > 1:
                context = (context + (word,))[1:]

        return generated
