"""
N-gram Language Model Implementation

This module contains the NGramModel class, a chain of absolute-discounting
distributions from order N down to order 0. Each order is smoothed with the
finished distribution of the order below it; order 0 is a degenerate level
that assigns probability zero to everything.
"""

import logging
import math
from types import MappingProxyType
from typing import Callable, Dict, Hashable, List, Mapping, Optional, Sequence, Tuple

from .counting import Context, FrequencyMap, count_ngrams
from .smoothing import AbsoluteDiscounting, ProbabilityMap
from .corpus import Document, TokenKind, tokenize
from .sampling import Sampler

logger = logging.getLogger(__name__)

_NO_TOKEN = object()

ProgressCallback = Callable[[int, int, str], None]


class NGramLevel:
    """
    A single order of the model chain.

    Every level owns the level directly below it. Level 0 has no lower level
    and no table.

    Attributes:
        order: Width of the n-grams counted at this level
        lower: The (order - 1) level, None for level 0
        freqs: Raw counts, context -> Counter of tokens
        totals: c(context) for every observed context
        discount: Absolute discount D for this order
        dist: Smoothed probabilities, context -> {token: probability}
    """

    def __init__(self, order: int, lower: Optional['NGramLevel'] = None):
        self.order = order
        self.lower = lower
        self.freqs: FrequencyMap = {}
        self.totals: Dict[Context, int] = {}
        self.discount = 0.0
        self.dist: ProbabilityMap = {}
        self.smoother: Optional[AbsoluteDiscounting] = None
        self._view: Mapping = MappingProxyType({})

    def fit(self, tokens: Sequence[Hashable]) -> None:
        """Count and smooth this level. The lower level must be fitted first."""
        if self.order == 0:
            return

        self.smoother = AbsoluteDiscounting(count_ngrams(tokens, self.order))
        self.freqs = self.smoother.freqs
        self.totals = self.smoother.totals
        self.discount = self.smoother.discount
        self.dist = self.smoother.build(self.lower.prob)
        self._view = MappingProxyType({
            context: MappingProxyType(words) for context, words in self.dist.items()
        })

        logger.info("Order %d: %d contexts, %d n-grams, D=%.4f",
                    self.order, len(self.dist),
                    sum(len(words) for words in self.dist.values()), self.discount)

    def prob(self, ngram: Tuple[Hashable, ...]) -> float:
        """
        Probability of the last token of ``ngram`` given the rest.

        Returns 0 for unseen contexts, unseen continuations and always at
        level 0.
        """
        if self.order == 0:
            return 0.0

        context, word = tuple(ngram[:-1]), ngram[-1]
        return self.dist.get(context, {}).get(word, 0.0)

    def reserved_mass(self, context: Context) -> float:
        """Mass this level hands to the lower order for ``context``."""
        if self.smoother is None:
            return 0.0
        return self.smoother.reserved_mass(context)

    @property
    def view(self) -> Mapping:
        """Read-only view of the probability table."""
        return self._view


class NGramModel:
    """
    Absolute-discounting N-gram Language Model

    Trained once on a single token sequence, then read-only. Lookups never
    compute anything beyond a table access; all smoothing happens during
    training.

    Attributes:
        n: The order of the model (e.g., 2 for bigram, 3 for trigram)
        levels: Levels 0..n, ``levels[k]`` holds the order-k distribution
        is_trained: Whether ``train`` has run
        training_stats: Summary statistics gathered during training
    """

    def __init__(self, n: int = 3):
        """
        Initialize an untrained model.

        Args:
            n: Order of the model (default: 3 for trigram)
        """
        if n < 1:
            raise ValueError("n must be at least 1")

        self.n = n
        self.levels: List[NGramLevel] = [NGramLevel(0)]
        for k in range(1, n + 1):
            self.levels.append(NGramLevel(k, lower=self.levels[k - 1]))

        self.token_kind: Optional[TokenKind] = None
        self.lowercase = True
        self.is_trained = False
        self.training_stats: Dict = {}

    @classmethod
    def from_tokens(cls, tokens: Sequence[Hashable], n: int = 3) -> 'NGramModel':
        """Build and train a model in one step."""
        model = cls(n)
        model.train(tokens)
        return model

    @classmethod
    def from_document(cls, document: Document, n: int = 3,
                      kind: TokenKind = TokenKind.WORD,
                      lowercase: bool = True) -> 'NGramModel':
        """Tokenize a training document and train on its tokens."""
        model = cls(n)
        model.token_kind = kind
        model.lowercase = lowercase
        model.train(tokenize(document.text, kind, lowercase=lowercase))
        return model

    @property
    def top(self) -> NGramLevel:
        return self.levels[self.n]

    def order(self) -> int:
        """Return the value of N for this model."""
        return self.n

    def train(self, tokens: Sequence[Hashable],
              progress_callback: Optional[ProgressCallback] = None) -> Dict:
        """
        Train every level of the model on a token sequence.

        A sequence shorter than the model order leaves every level empty
        with a discount of zero.

        Args:
            tokens: The training token sequence
            progress_callback: Optional callback(current, total, stage)

        Returns:
            Dictionary of training statistics
        """
        if self.is_trained:
            raise RuntimeError("Model has already been trained")

        tokens = list(tokens)

        if len(tokens) < self.n:
            logger.warning("Training sequence has %d tokens, fewer than the model "
                           "order %d; the model is empty", len(tokens), self.n)
        else:
            for k in range(1, self.n + 1):
                if progress_callback:
                    progress_callback(k - 1, self.n, f"Smoothing order {k}")
                self.levels[k].fit(tokens)

        if progress_callback:
            progress_callback(self.n, self.n, "Complete")

        self.is_trained = True
        self.training_stats = {
            'n': self.n,
            'num_tokens': len(tokens),
        }
        for level in self.levels[1:]:
            self.training_stats[f'order_{level.order}'] = {
                'unique_contexts': len(level.freqs),
                'unique_ngrams': sum(len(words) for words in level.freqs.values()),
                'total_ngrams': sum(level.totals.values()),
                'discount': level.discount,
            }

        return self.training_stats

    def _check_trained(self) -> None:
        if not self.is_trained:
            raise RuntimeError("Model must be trained first")

    def _resolve(self, context, token) -> Tuple[Context, Hashable]:
        if token is _NO_TOKEN:
            ngram = tuple(context) if isinstance(context, (tuple, list)) else (context,)
            if not ngram:
                raise ValueError("An n-gram needs at least one token")
            context, token = ngram[:-1], ngram[-1]

        if not isinstance(context, (tuple, list)):
            context = (context,)
        context = tuple(context)
        if len(context) > self.n - 1:
            context = context[len(context) - (self.n - 1):]
        return context, token

    def prob(self, context, token=_NO_TOKEN) -> float:
        """
        Probability of ``token`` following ``context`` at the top order.

        Called with a single argument, the argument is treated as an n-gram:
        a bare token means the empty context, a tuple is split into its
        context and last token.

        Args:
            context: Preceding tokens (a tuple, a list or a single token);
                only the last n-1 are used
            token: The token to score

        Returns:
            The trained probability, or 0.0 if the context or the
            continuation was never observed
        """
        self._check_trained()
        context, token = self._resolve(context, token)
        return self.top.dist.get(context, {}).get(token, 0.0)

    def log_probability(self, context, token) -> float:
        """Natural log of ``prob(context, token)``, -inf for zero probability."""
        prob = self.prob(context, token)
        return math.log(prob) if prob > 0 else float('-inf')

    def kth_distribution(self, k: int) -> Mapping:
        """
        Return the read-only probability table for k-grams.

        Args:
            k: 0 <= k <= n; order 0 is always empty
        """
        if k < 0 or k > self.n:
            raise ValueError(f"k must be between 0 and {self.n}, got {k}")
        return self.levels[k].view

    def discount(self, k: int) -> float:
        """Absolute discount used for order k."""
        if k < 0 or k > self.n:
            raise ValueError(f"k must be between 0 and {self.n}, got {k}")
        return self.levels[k].discount

    def reserved_mass(self, context: Sequence[Hashable]) -> float:
        """Backoff mass the top order reserves for ``context``."""
        return self.top.reserved_mass(tuple(context))

    def log_likelihood(self, tokens: Sequence[Hashable]) -> float:
        """
        Calculate the log-likelihood of a token sequence.

        Sums ln P(token | context) over every n-wide window. A window with
        zero probability contributes -inf, so any unseen n-gram makes the
        whole sequence -inf.
        """
        self._check_trained()
        tokens = list(tokens)

        total = 0.0
        for i in range(self.n - 1, len(tokens)):
            context = tuple(tokens[i - self.n + 1:i])
            total += self.log_probability(context, tokens[i])
        return total

    def perplexity(self, tokens: Sequence[Hashable]) -> float:
        """
        Calculate perplexity of a token sequence.

        Perplexity = exp(-log_likelihood / len(tokens))

        Returns:
            Perplexity score (lower is better), inf if any n-gram is unseen
        """
        tokens = list(tokens)
        if not tokens:
            raise ValueError("Cannot compute perplexity of an empty sequence")
        return math.exp(-self.log_likelihood(tokens) / len(tokens))

    def score_document(self, document: Document) -> float:
        """Log-likelihood of a document, tokenized like the training data."""
        kind = self.token_kind or TokenKind.WORD
        return self.log_likelihood(tokenize(document.text, kind, lowercase=self.lowercase))

    def document_perplexity(self, document: Document) -> float:
        """Perplexity of a document, tokenized like the training data."""
        kind = self.token_kind or TokenKind.WORD
        return self.perplexity(tokenize(document.text, kind, lowercase=self.lowercase))

    def generate(self, seed: int, count: int) -> List[Hashable]:
        """
        Generate a random token sequence from the model.

        Args:
            seed: Random seed; the same seed always yields the same tokens
            count: Number of tokens to generate
        """
        self._check_trained()
        return Sampler(self).generate(seed, count)

    def random_sentence(self, seed: int, count: int) -> str:
        """Generate ``count`` tokens and join them into readable text."""
        tokens = self.generate(seed, count)
        separator = '' if self.token_kind == TokenKind.CHARACTER else ' '
        return separator.join(str(token) for token in tokens)

    def get_next_word_distribution(self, context: Sequence[Hashable],
                                   top_k: int = 10) -> List[Tuple[Hashable, float]]:
        """
        Get the observed continuations of a context.

        Args:
            context: Preceding tokens (a tuple, a list or a single token)
            top_k: Number of top tokens to return

        Returns:
            List of (token, probability) tuples, sorted by probability
            (descending) and then by token
        """
        self._check_trained()
        context, _ = self._resolve(context, None)
        words = self.top.dist.get(context, {})
        probs = sorted(words.items(), key=lambda item: (-item[1], item[0]))
        return probs[:top_k]

    def get_top_ngrams(self, k: Optional[int] = None,
                       top_k: int = 100) -> List[Tuple[Tuple[Hashable, ...], int]]:
        """Get the most frequent k-grams (default: the model order)."""
        k = self.n if k is None else k
        if k < 1 or k > self.n:
            raise ValueError(f"k must be between 1 and {self.n}, got {k}")

        ngrams = [
            (context + (word,), count)
            for context, words in self.levels[k].freqs.items()
            for word, count in words.items()
        ]
        ngrams.sort(key=lambda item: (-item[1], item[0]))
        return ngrams[:top_k]
