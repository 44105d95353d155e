"""Feature statistics and chi-square feature selection.

``extract_stats`` counts, over a labeled dataset, how many documents each
category has and how many documents of each category contain every feature.
``chisquare`` then runs a 2x2 independence test of every feature against
every category and keeps the features whose presence is significantly
associated with at least one category.

For a feature and a category the contingency table is::

                      category    other categories
    feature present      N11            N10
    feature absent       N01            N00

and the statistic is ``n (N11 N00 - N10 N01)^2`` divided by the product of
the four marginals. The default critical level, 10.83, is the chi-square
value for p = 0.001 with one degree of freedom.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Optional

from .models import Document, FeatureStats

DEFAULT_CRITICAL_VALUE = 10.83


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------

def extract_stats(
    dataset: Sequence[Document],
    categories: Optional[Iterable[str]] = None,
) -> FeatureStats:
    """Aggregate document and co-occurrence counts over *dataset*.

    Every document counts once towards ``n`` and its category, even when it
    has no tokens. Joint counts are document frequencies: a feature seen
    several times in one document adds one to its category's count.

    Args:
        dataset: Labeled documents.
        categories: Optional category names to register with a zero count
            before counting, so that labels without examples stay known.

    Returns:
        A new FeatureStats.

    Raises:
        ValueError: If a document has no category.
    """
    stats = FeatureStats()
    for category in categories or ():
        stats.category_counts.setdefault(category, 0)

    for doc in dataset:
        if doc.category is None:
            raise ValueError("Every document needs a category before extracting stats")
        category = doc.category

        stats.n += 1
        stats.category_counts[category] = stats.category_count(category) + 1

        for feature, occurrences in doc.tokens.items():
            if occurrences <= 0:
                continue
            per_category = stats.feature_category_joint_count.setdefault(feature, {})
            per_category[category] = per_category.get(category, 0) + 1

    return stats


# ---------------------------------------------------------------------------
# Chi-square selection
# ---------------------------------------------------------------------------

def chisquare_score(n11: int, n10: int, n01: int, n00: int) -> float:
    """Chi-square statistic of a 2x2 contingency table.

    When a marginal is zero the table carries no information about
    association (the numerator is zero too), and the score is 0.0.
    """
    denominator = (n11 + n01) * (n11 + n10) * (n10 + n00) * (n01 + n00)
    if denominator == 0:
        return 0.0
    n = n11 + n10 + n01 + n00
    return n * (n11 * n00 - n10 * n01) ** 2 / denominator


def chisquare(stats: FeatureStats, critical_level: float = DEFAULT_CRITICAL_VALUE) -> dict[str, float]:
    """Select the features that are dependent on at least one category.

    Args:
        stats: Statistics from :func:`extract_stats`.
        critical_level: Minimum chi-square score for a feature to be kept.

    Returns:
        Mapping of every selected feature to its highest chi-square score
        among the categories that reached *critical_level*.

    Raises:
        ValueError: If *critical_level* is negative.
    """
    if critical_level < 0:
        raise ValueError("critical_level must be non-negative")

    categories = stats.categories
    selected: dict[str, float] = {}

    for feature in stats.feature_category_joint_count:
        n1dot = stats.document_frequency(feature)
        n0dot = stats.n - n1dot

        for category in categories:
            n11 = stats.joint_count(feature, category)
            n01 = stats.category_count(category) - n11
            n00 = n0dot - n01
            n10 = n1dot - n11

            score = chisquare_score(n11, n10, n01, n00)
            if score >= critical_level and score > selected.get(feature, -1.0):
                selected[feature] = score

    return selected


def select_features(
    stats: FeatureStats,
    critical_level: float = DEFAULT_CRITICAL_VALUE,
) -> tuple[FeatureStats, dict[str, float]]:
    """Run chi-square selection and prune *stats* to the selected features.

    Returns:
        A ``(pruned_stats, scores)`` tuple. ``pruned_stats`` is a new object;
        *stats* is not modified.
    """
    scores = chisquare(stats, critical_level)
    return stats.copy_with_features(scores), scores
