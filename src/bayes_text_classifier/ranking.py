"""Ordering of per-category scores into ranked predictions."""

from __future__ import annotations

from collections.abc import Mapping

from .models import Prediction


def _rank_key(item: tuple[str, float]) -> tuple[float, str]:
    category, score = item
    return (-score, category)


def to_ranked_predictions(scores: Mapping[str, float]) -> list[Prediction]:
    """Sort category scores into predictions, highest score first.

    Categories with equal scores are ordered by name, so the result does not
    depend on the iteration order of *scores*.

    Example::

        >>> [p.category for p in to_ranked_predictions({"x": -1.0, "y": -0.2, "z": -5.0})]
        ['y', 'x', 'z']
    """
    return [
        Prediction(category=category, score=score)
        for category, score in sorted(scores.items(), key=_rank_key)
    ]


def top_predictions(scores: Mapping[str, float], k: int) -> list[Prediction]:
    """Return the *k* best predictions from *scores*.

    Raises:
        ValueError: If *k* is negative.
    """
    if k < 0:
        raise ValueError("k must be non-negative")
    return to_ranked_predictions(scores)[:k]
