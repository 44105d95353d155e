"""Exceptions raised on caller contract violations."""

from __future__ import annotations


class ClassifierError(Exception):
    """Base class for errors raised by the classifier."""


class NotTrainedError(ClassifierError, RuntimeError):
    """Raised when a model without a knowledge base is asked to predict or save."""


class InvalidPriorsError(ClassifierError, ValueError):
    """Raised when supplied category priors do not match the training data."""
