"""
Absolute Discounting for N-gram Language Models

This module estimates the per-order discount and turns raw n-gram counts
into a fully materialized probability table that backs off to the next
lower order.

    P_AD(w|context) = max(c(context,w) - D, 0) / c(context)
                      + D / c(context) * |S(context)| * P_lower(w)

Where D is the discount of the order and S(context) is the set of distinct
tokens observed after the context.
"""

import logging
from typing import Callable, Dict, Hashable, Tuple

from .counting import FrequencyMap, Context, count_of_counts, context_totals

logger = logging.getLogger(__name__)

ProbabilityMap = Dict[Context, Dict[Hashable, float]]
LowerProb = Callable[[Tuple[Hashable, ...]], float]


# Upper bound on D; reached only when no n-gram occurs exactly twice
MAX_DISCOUNT = 0.99


def estimate_discount(freqs: FrequencyMap) -> float:
    """
    Calculate D = n1 / (n1 + 2 * n2).
    
    n1 and n2 are the number of distinct n-grams seen exactly once and
    exactly twice. Falls back to 0 when neither occurs and is clamped to
    MAX_DISCOUNT so that singletons keep some mass when n2 is zero.
    """
    freq_of_freq = count_of_counts(freqs)
    n1 = freq_of_freq.get(1, 0)
    n2 = freq_of_freq.get(2, 0)
    
    if n1 + n2 == 0:
        return 0.0
    return min(n1 / (n1 + 2 * n2), MAX_DISCOUNT)


class AbsoluteDiscounting:
    """
    Absolute discounting smoother for a single order.
    
    The discount is estimated once from the counts of this order and used
    for every context. Lower-order estimates are supplied as a callable
    taking an n-gram tuple, so the smoother never needs to know how the
    lower levels are stored.
    
    Attributes:
        freqs: Counts for this order
        totals: c(context) for every observed context
        discount: The discount D of this order
    """
    
    def __init__(self, freqs: FrequencyMap):
        self.freqs = freqs
        self.totals = context_totals(freqs)
        self.discount = estimate_discount(freqs)
    
    def smooth(self, count: int, context_count: int, num_types: int,
               lower: float) -> float:
        """Return the discounted probability with its share of backoff mass."""
        first_term = max(count - self.discount, 0) / context_count
        backoff_weight = (self.discount / context_count) * num_types
        return first_term + backoff_weight * lower
    
    def reserved_mass(self, context: Context) -> float:
        """
        Probability mass a context hands down to the lower order.
        
        Together with the discounted relative frequencies of its observed
        tokens this sums to one.
        """
        if context not in self.freqs:
            return 0.0
        return self.discount * len(self.freqs[context]) / self.totals[context]
    
    def discounted_mass(self, context: Context) -> float:
        """Sum of max(c - D, 0) / c(context) over the observed tokens."""
        if context not in self.freqs:
            return 0.0
        total = self.totals[context]
        return sum(max(count - self.discount, 0) / total
                   for count in self.freqs[context].values())
    
    def build(self, lower_prob: LowerProb) -> ProbabilityMap:
        """
        Materialize the smoothed distribution.
        
        Args:
            lower_prob: Called with ``(word,)``; the lower order resolves the
                bare token against its own top-order table
        
        Returns:
            Mapping of context -> {token: probability} covering every
            observed (context, token) pair
        """
        dist: ProbabilityMap = {}
        
        for context, continuations in self.freqs.items():
            total = self.totals[context]
            num_types = len(continuations)
            
            dist[context] = {
                word: self.smooth(count, total, num_types, lower_prob((word,)))
                for word, count in continuations.items()
            }
        
        logger.debug("Built %d distributions (D=%.4f)", len(dist), self.discount)
        return dist
