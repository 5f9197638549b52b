"""
N-gram Language Model Package

Recursively smoothed n-gram language models using absolute discounting,
with scoring, probability queries and seeded text generation.
"""

from .model import NGramModel, NGramLevel
from .corpus import Document, TokenKind, tokenize, load_brown_tokens
from .exceptions import EmptyModelError

__version__ = "0.1.0"
__all__ = [
    "NGramModel", "NGramLevel", "Document", "TokenKind", "tokenize",
    "load_brown_tokens", "EmptyModelError",
]
