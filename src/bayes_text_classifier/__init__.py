"""Bayes Text Classifier -- multinomial Naive Bayes with chi-square feature selection."""

__version__ = "0.1.0"

from .errors import ClassifierError, InvalidPriorsError, NotTrainedError
from .features import (
    DEFAULT_CRITICAL_VALUE,
    chisquare,
    chisquare_score,
    extract_stats,
    select_features,
)
from .models import Document, FeatureStats, KnowledgeBase, Prediction
from .naive_bayes import NaiveBayes
from .ranking import to_ranked_predictions, top_predictions
from .tokenizer import TextTokenizer, tokenize

__all__ = [
    # Classifier
    "NaiveBayes",
    # Data models
    "Document",
    "FeatureStats",
    "KnowledgeBase",
    "Prediction",
    # Feature selection
    "DEFAULT_CRITICAL_VALUE",
    "extract_stats",
    "chisquare",
    "chisquare_score",
    "select_features",
    # Ranking
    "to_ranked_predictions",
    "top_predictions",
    # Tokenization
    "TextTokenizer",
    "tokenize",
    # Errors
    "ClassifierError",
    "NotTrainedError",
    "InvalidPriorsError",
]
