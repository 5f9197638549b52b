"""
Corpus Loading and Tokenization

This module turns raw documents into the flat token sequences the language
model trains on. Word, character, part-of-speech and function-word token
streams are supported; the latter two rely on NLTK models and corpora that
are downloaded on first use.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import nltk
from nltk.corpus import brown, stopwords
from nltk.tokenize import wordpunct_tokenize

logger = logging.getLogger(__name__)

# Stands in for every non-function word in function-word token streams
CONTENT_TOKEN = "<content>"

_NLTK_RESOURCES = {
    'brown': 'corpora/brown',
    'stopwords': 'corpora/stopwords',
    'averaged_perceptron_tagger_eng': 'taggers/averaged_perceptron_tagger_eng',
}


class TokenKind(Enum):
    """Token units a model can be trained on."""
    WORD = "word"
    CHARACTER = "character"
    POS = "pos"
    FUNCTION_WORD = "function_word"


@dataclass
class Document:
    """Raw text plus whatever the caller knows about where it came from."""
    text: str
    path: Optional[Path] = None
    metadata: Dict = field(default_factory=dict)

    @classmethod
    def from_path(cls, path: Union[str, Path], encoding: str = "utf-8") -> 'Document':
        path = Path(path)
        text = path.read_text(encoding=encoding)
        return cls(text=text, path=path, metadata={'name': path.name})


def ensure_nltk_data(*names: str) -> None:
    """Download the named NLTK resources if they are not present."""
    for name in names:
        try:
            nltk.data.find(_NLTK_RESOURCES[name])
        except LookupError:
            logger.info("Downloading NLTK resource %s...", name)
            nltk.download(name, quiet=True)


def _words(text: str, lowercase: bool) -> List[str]:
    if lowercase:
        text = text.lower()
    return wordpunct_tokenize(text)


def tokenize(text: str, kind: TokenKind = TokenKind.WORD,
             lowercase: bool = True) -> List[str]:
    """
    Tokenize raw text into a flat token sequence.

    Args:
        text: Raw input text
        kind: Which token unit to produce
        lowercase: Whether to lowercase words and characters first

    Returns:
        List of tokens in document order
    """
    if kind == TokenKind.WORD:
        return _words(text, lowercase)

    if kind == TokenKind.CHARACTER:
        if lowercase:
            text = text.lower()
        return list(re.sub(r'\s+', ' ', text).strip())

    if kind == TokenKind.POS:
        ensure_nltk_data('averaged_perceptron_tagger_eng')
        # Tagging needs the original casing
        return [tag for _, tag in nltk.pos_tag(wordpunct_tokenize(text))]

    if kind == TokenKind.FUNCTION_WORD:
        ensure_nltk_data('stopwords')
        function_words = set(stopwords.words('english'))
        return [w if w in function_words else CONTENT_TOKEN
                for w in _words(text, lowercase=True)]

    raise ValueError(f"Unknown token kind: {kind}")


def load_brown_tokens(categories: Optional[List[str]] = None,
                      lowercase: bool = True) -> Tuple[List[str], dict]:
    """
    Load the Brown corpus as a single token sequence.

    Args:
        categories: Optional list of Brown corpus categories to load
                   (e.g., ['news', 'fiction', 'science_fiction'])
                   If None, loads all categories.
        lowercase: Whether to lowercase the text

    Returns:
        Tuple of (token list, corpus statistics dict)
    """
    ensure_nltk_data('brown')

    if categories:
        words = brown.words(categories=categories)
    else:
        words = brown.words()

    tokens = [w.lower() if lowercase else w for w in words]

    stats = {
        'num_tokens': len(tokens),
        'vocab_size': len(set(tokens)),
        'categories': categories or brown.categories()
    }

    return tokens, stats


def get_brown_categories() -> List[str]:
    """Return list of available Brown corpus categories."""
    ensure_nltk_data('brown')
    return brown.categories()
