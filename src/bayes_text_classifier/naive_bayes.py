"""Multinomial Naive Bayes text classifier with chi-square feature selection.

Training tokenizes every example, counts document frequencies, keeps only
the features that pass a chi-square independence test, and estimates
Laplace-smoothed log likelihoods over the retained vocabulary. Prediction
adds, for every category, the log prior and the occurrence-weighted log
likelihoods of the known tokens in the input, and returns the category with
the highest score.

Example::

    classifier = NaiveBayes()
    classifier.train({
        "sports": ["the ball hit the goal", "a late goal"],
        "finance": ["stock prices fell", "bond yields rose"],
    })
    classifier.predict("what a goal")          # "sports"
    classifier.predict_ranked("bond market")   # [Prediction(...), ...]

    classifier.save("model.json")
    loaded = NaiveBayes.load("model.json")
"""

from __future__ import annotations

import json
import math
from collections.abc import Callable, Iterable, Mapping, Sequence
from pathlib import Path
from typing import Optional

from .errors import InvalidPriorsError, NotTrainedError
from .features import DEFAULT_CRITICAL_VALUE, extract_stats, select_features
from .models import Document, FeatureStats, KnowledgeBase, Prediction
from .ranking import to_ranked_predictions
from .tokenizer import tokenize

MODEL_FORMAT_VERSION = "1.0"

Tokenizer = Callable[[str], Document]


def _log(value: float) -> float:
    """Natural logarithm with ``ln(0) = -inf``."""
    if value == 0:
        return -math.inf
    return math.log(value)


# ---------------------------------------------------------------------------
# Parameter estimation
# ---------------------------------------------------------------------------

def _estimate_log_priors(stats: FeatureStats) -> dict[str, float]:
    log_priors: dict[str, float] = {}
    for category, count in stats.category_counts.items():
        # an empty category gets ln(0) = -inf
        log_priors[category] = math.log(count / stats.n) if count else -math.inf
    return log_priors


def _validate_log_priors(
    category_priors: Mapping[str, Optional[float]],
    stats: FeatureStats,
) -> dict[str, float]:
    """Check supplied priors against the observed categories and take logs.

    Raises:
        InvalidPriorsError: On a count mismatch, a missing category, or a
            value that is not a probability.
    """
    observed = stats.category_counts
    if len(category_priors) != len(observed):
        raise InvalidPriorsError(
            f"Invalid priors: expected a prior probability for each of the "
            f"{len(observed)} categories, got {len(category_priors)}"
        )

    missing = sorted(set(observed) - set(category_priors))
    if missing:
        raise InvalidPriorsError(f"Invalid priors: missing categories {missing}")

    log_priors: dict[str, float] = {}
    for category, probability in category_priors.items():
        if probability is None:
            raise InvalidPriorsError(f"Invalid priors: no prior probability for {category!r}")
        if math.isnan(probability) or not (0.0 <= probability <= 1.0):
            raise InvalidPriorsError(
                f"Invalid priors: prior probability for {category!r} must be "
                f"between 0 and 1, got {probability}"
            )
        log_priors[category] = _log(float(probability))
    return log_priors


def _estimate_log_likelihoods(
    stats: FeatureStats,
    categories: Iterable[str],
) -> dict[str, dict[str, float]]:
    """Add-one smoothed ``ln P(feature | category)`` for every pair.

    ``stats`` must already be restricted to the selected features.
    """
    categories = list(categories)
    vocab_size = stats.vocabulary_size

    # Total feature occurrences per category, the smoothing denominator
    occurrences: dict[str, int] = {
        category: sum(
            per_category.get(category, 0)
            for per_category in stats.feature_category_joint_count.values()
        )
        for category in categories
    }

    log_likelihoods: dict[str, dict[str, float]] = {}
    for feature in stats.feature_category_joint_count:
        log_likelihoods[feature] = {
            category: math.log(
                (stats.joint_count(feature, category) + 1.0)
                / (occurrences[category] + vocab_size)
            )
            for category in categories
        }
    return log_likelihoods


# ---------------------------------------------------------------------------
# Classifier
# ---------------------------------------------------------------------------

class NaiveBayes:
    """Multinomial Naive Bayes classifier over bag-of-words documents.

    Args:
        knowledge_base: Parameters of an already trained model. Leave as
            ``None`` to train a new one.
        chisquare_critical_value: Minimum chi-square score for a feature to
            survive selection. Defaults to 10.83 (p = 0.001).
        tokenizer: Callable turning raw text into a ``Document``.

    Raises:
        ValueError: If ``chisquare_critical_value`` is negative.
    """

    def __init__(
        self,
        knowledge_base: Optional[KnowledgeBase] = None,
        chisquare_critical_value: float = DEFAULT_CRITICAL_VALUE,
        tokenizer: Tokenizer = tokenize,
    ) -> None:
        self.chisquare_critical_value = chisquare_critical_value
        self._tokenizer = tokenizer
        self._knowledge_base = knowledge_base
        self.feature_scores: dict[str, float] = {}

    @property
    def chisquare_critical_value(self) -> float:
        return self._chisquare_critical_value

    @chisquare_critical_value.setter
    def chisquare_critical_value(self, value: float) -> None:
        if value < 0:
            raise ValueError("chisquare_critical_value must be non-negative")
        self._chisquare_critical_value = float(value)

    @property
    def knowledge_base(self) -> Optional[KnowledgeBase]:
        """Trained parameters, or ``None`` before training."""
        return self._knowledge_base

    @property
    def is_trained(self) -> bool:
        return self._knowledge_base is not None

    @property
    def categories(self) -> list[str]:
        if self._knowledge_base is None:
            return []
        return self._knowledge_base.categories

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------

    def train(
        self,
        dataset: Mapping[str, Sequence[str]],
        category_priors: Optional[Mapping[str, float]] = None,
    ) -> KnowledgeBase:
        """Train on raw example texts grouped by category.

        Categories listed with no examples are kept; their estimated prior
        is ``-inf``.

        Args:
            dataset: Mapping of category label to its example texts.
            category_priors: Optional prior probability for every category.
                Estimated from the category frequencies when omitted.

        Returns:
            The new knowledge base, which also replaces the current one.

        Raises:
            InvalidPriorsError: If *category_priors* does not hold exactly
                one probability in [0, 1] per category.
        """
        documents = self._preprocess_dataset(dataset)
        return self._fit(documents, list(dataset), category_priors)

    def train_documents(
        self,
        documents: Sequence[Document],
        category_priors: Optional[Mapping[str, float]] = None,
    ) -> KnowledgeBase:
        """Train on already tokenized, labeled documents."""
        return self._fit(documents, None, category_priors)

    def _preprocess_dataset(self, dataset: Mapping[str, Sequence[str]]) -> list[Document]:
        documents: list[Document] = []
        for category, examples in dataset.items():
            for text in examples:
                doc = self._tokenizer(text)
                doc.category = category
                documents.append(doc)
        return documents

    def _fit(
        self,
        documents: Sequence[Document],
        categories: Optional[Iterable[str]],
        category_priors: Optional[Mapping[str, float]],
    ) -> KnowledgeBase:
        stats = extract_stats(documents, categories)
        selected, scores = select_features(stats, self.chisquare_critical_value)

        if category_priors is None:
            log_priors = _estimate_log_priors(stats)
        else:
            log_priors = _validate_log_priors(category_priors, stats)

        knowledge_base = KnowledgeBase(
            n=stats.n,
            d=selected.vocabulary_size,
            c=len(log_priors),
            log_priors=log_priors,
            log_likelihoods=_estimate_log_likelihoods(selected, log_priors),
        )

        # Replace the model state in one step, only once everything succeeded
        self._knowledge_base = knowledge_base
        self.feature_scores = scores
        return knowledge_base

    # ------------------------------------------------------------------
    # Prediction
    # ------------------------------------------------------------------

    def _require_knowledge_base(self) -> KnowledgeBase:
        knowledge_base = self._knowledge_base
        if knowledge_base is None:
            raise NotTrainedError(
                "Knowledge base missing: train the classifier or load a model first."
            )
        return knowledge_base

    def predict_scores(self, text: str) -> dict[str, float]:
        """Unnormalized log-probability of *text* under every category.

        Tokens outside the trained vocabulary are ignored.

        Raises:
            NotTrainedError: If no knowledge base is present.
        """
        knowledge_base = self._require_knowledge_base()
        doc = self._tokenizer(text)

        known = [
            (knowledge_base.log_likelihoods[feature], occurrences)
            for feature, occurrences in doc.tokens.items()
            if feature in knowledge_base.log_likelihoods
        ]

        scores: dict[str, float] = {}
        for category in knowledge_base.categories:
            score = knowledge_base.log_priors[category]
            for log_likelihoods, occurrences in known:
                score += occurrences * log_likelihoods[category]
            scores[category] = score
        return scores

    def predict(self, text: str) -> Optional[str]:
        """Return the most likely category for *text*.

        Categories are compared in lexicographic order and the first one with
        the highest score wins ties. Returns ``None`` only for a model trained
        on an empty dataset.

        Raises:
            NotTrainedError: If no knowledge base is present.
        """
        scores = self.predict_scores(text)

        best_category: Optional[str] = None
        best_score = -math.inf
        for category in sorted(scores):
            if best_category is None or scores[category] > best_score:
                best_category = category
                best_score = scores[category]
        return best_category

    def predict_ranked(self, text: str, top_k: Optional[int] = None) -> list[Prediction]:
        """Return every category with its score, best first.

        Args:
            text: Raw input text.
            top_k: Keep only the first *top_k* predictions.

        Raises:
            NotTrainedError: If no knowledge base is present.
            ValueError: If *top_k* is negative.
        """
        if top_k is not None and top_k < 0:
            raise ValueError("top_k must be non-negative")
        ranked = to_ranked_predictions(self.predict_scores(text))
        return ranked if top_k is None else ranked[:top_k]

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        """Serialize the model state.

        Raises:
            NotTrainedError: If no knowledge base is present.
        """
        knowledge_base = self._require_knowledge_base()
        return {
            "version": MODEL_FORMAT_VERSION,
            "chisquare_critical_value": self.chisquare_critical_value,
            "knowledge_base": knowledge_base.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict, tokenizer: Tokenizer = tokenize) -> "NaiveBayes":
        """Rebuild a trained model from :meth:`to_dict` output.

        Raises:
            ValueError: If the data was written by an unsupported format version.
        """
        version = data.get("version")
        if version != MODEL_FORMAT_VERSION:
            raise ValueError(f"Unsupported model format version: {version!r}")
        return cls(
            knowledge_base=KnowledgeBase.from_dict(data["knowledge_base"]),
            chisquare_critical_value=data.get("chisquare_critical_value", DEFAULT_CRITICAL_VALUE),
            tokenizer=tokenizer,
        )

    def save(self, path: str | Path) -> None:
        """Save the trained model to a JSON file.

        Log values are written at full double precision; ``-inf`` priors are
        stored as ``-Infinity``.

        Raises:
            NotTrainedError: If no knowledge base is present.
        """
        model_data = self.to_dict()

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(model_data, f, indent=2)

    @classmethod
    def load(cls, path: str | Path, tokenizer: Tokenizer = tokenize) -> "NaiveBayes":
        """Load a model saved with :meth:`save`."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_dict(data, tokenizer=tokenizer)
