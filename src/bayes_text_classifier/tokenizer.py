"""Default tokenizer turning raw text into a token-count ``Document``.

The classifier only needs a callable ``str -> Document``; this module
provides a simple bag-of-words implementation:

1. every Unicode punctuation character is replaced by a space,
2. runs of whitespace collapse to a single space,
3. the text is lowercased and split on spaces,
4. the resulting keywords are counted.

No stemming or stopword removal is performed; chi-square feature selection
discards uninformative words during training.
"""

from __future__ import annotations

import re
import unicodedata
from collections import Counter

from .models import Document

_WHITESPACE_RE = re.compile(r"\s+")


def _is_punctuation(char: str) -> bool:
    return unicodedata.category(char).startswith("P")


class TextTokenizer:
    """Bag-of-words tokenizer with punctuation stripping and lowercasing."""

    @staticmethod
    def preprocess(text: str) -> str:
        """Normalize *text*: punctuation to spaces, squeeze whitespace, lowercase."""
        stripped = "".join(" " if _is_punctuation(ch) else ch for ch in text)
        return _WHITESPACE_RE.sub(" ", stripped).strip().lower()

    @staticmethod
    def extract_keywords(text: str) -> list[str]:
        """Split preprocessed text into keywords, dropping empty strings."""
        return [word for word in text.split(" ") if word]

    @staticmethod
    def get_keyword_counts(keywords: list[str]) -> dict[str, int]:
        return dict(Counter(keywords))

    def tokenize(self, text: str) -> Document:
        """Convert raw *text* into an unlabeled ``Document``."""
        keywords = self.extract_keywords(self.preprocess(text))
        return Document(tokens=self.get_keyword_counts(keywords))

    def __call__(self, text: str) -> Document:
        return self.tokenize(text)


_default_tokenizer = TextTokenizer()


def tokenize(text: str) -> Document:
    """Tokenize *text* with the default ``TextTokenizer``."""
    return _default_tokenizer.tokenize(text)
