"""Data models shared by feature extraction, training and prediction."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Document:
    """One training or prediction example.

    ``category`` stays ``None`` until the caller assigns a label during
    preprocessing; ``tokens`` maps each normalized token to its number of
    occurrences in the example.
    """

    tokens: dict[str, int] = field(default_factory=dict)
    category: Optional[str] = None

    @property
    def is_labeled(self) -> bool:
        return self.category is not None

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "tokens": dict(self.tokens),
        }


@dataclass
class FeatureStats:
    """Counts gathered over a dataset for feature selection and training.

    Attributes:
        n: Total number of documents seen.
        category_counts: Number of documents per category.
        feature_category_joint_count: For every feature, the number of
            documents of each category that contain it.
    """

    n: int = 0
    category_counts: dict[str, int] = field(default_factory=dict)
    feature_category_joint_count: dict[str, dict[str, int]] = field(default_factory=dict)

    @property
    def categories(self) -> list[str]:
        """Known categories in lexicographic order."""
        return sorted(self.category_counts)

    @property
    def vocabulary_size(self) -> int:
        return len(self.feature_category_joint_count)

    def category_count(self, category: str) -> int:
        return self.category_counts.get(category, 0)

    def joint_count(self, feature: str, category: str) -> int:
        return self.feature_category_joint_count.get(feature, {}).get(category, 0)

    def document_frequency(self, feature: str) -> int:
        """Number of documents containing *feature*, across all categories."""
        return sum(self.feature_category_joint_count.get(feature, {}).values())

    def copy_with_features(self, features: Iterable[str]) -> "FeatureStats":
        """Return a new ``FeatureStats`` restricted to *features*.

        The receiver is left untouched so that the statistics before and
        after selection can both be inspected.
        """
        keep = set(features)
        return FeatureStats(
            n=self.n,
            category_counts=dict(self.category_counts),
            feature_category_joint_count={
                feature: dict(counts)
                for feature, counts in self.feature_category_joint_count.items()
                if feature in keep
            },
        )


@dataclass
class KnowledgeBase:
    """Trained Naive Bayes parameters; the only state ``predict`` needs.

    Attributes:
        n: Number of training documents.
        d: Vocabulary size after feature selection.
        c: Number of categories.
        log_priors: ``ln P(category)`` per category.
        log_likelihoods: ``ln P(feature | category)`` for every retained
            feature and every category.
    """

    n: int = 0
    d: int = 0
    c: int = 0
    log_priors: dict[str, float] = field(default_factory=dict)
    log_likelihoods: dict[str, dict[str, float]] = field(default_factory=dict)

    @property
    def categories(self) -> list[str]:
        """Known categories in lexicographic order (the prediction order)."""
        return sorted(self.log_priors)

    @property
    def vocabulary(self) -> set[str]:
        return set(self.log_likelihoods)

    def to_dict(self) -> dict:
        return {
            "n": self.n,
            "d": self.d,
            "c": self.c,
            "log_priors": dict(self.log_priors),
            "log_likelihoods": {
                feature: dict(per_category)
                for feature, per_category in self.log_likelihoods.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> "KnowledgeBase":
        return cls(
            n=int(data["n"]),
            d=int(data["d"]),
            c=int(data["c"]),
            log_priors={k: float(v) for k, v in data["log_priors"].items()},
            log_likelihoods={
                feature: {k: float(v) for k, v in per_category.items()}
                for feature, per_category in data["log_likelihoods"].items()
            },
        )


@dataclass(frozen=True)
class Prediction:
    """A candidate category with its unnormalized log-probability score."""

    category: str
    score: float

    @property
    def is_possible(self) -> bool:
        """False when the score is ``-inf`` (for example a zero prior)."""
        return self.score > -math.inf

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "score": self.score,
        }
