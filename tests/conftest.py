"""Shared test fixtures for bayes-text-classifier tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from bayes_text_classifier.naive_bayes import NaiveBayes

# Every sports example contains "ball" and "goal", every finance example
# "stock" and "bond"; all other words are spread across both categories or
# seen once, so only those four survive chi-square selection at 10.83.
SPORTS_DOCS = [
    "ball goal",
    "The ball hit the goal!",
    "goal, ball, goal",
    "a ball near the goal",
    "ball and goal",
    "goal after goal with the ball",
]

FINANCE_DOCS = [
    "stock bond",
    "The stock and the bond.",
    "bond; stock; bond",
    "a stock beat the bond",
    "stock then bond",
    "bond yields and stock prices",
]


@pytest.fixture
def sports_finance() -> dict[str, list[str]]:
    """Two well-separated categories, six examples each."""
    return {"sports": list(SPORTS_DOCS), "finance": list(FINANCE_DOCS)}


@pytest.fixture
def trained(sports_finance: dict[str, list[str]]) -> NaiveBayes:
    """A classifier trained on the sports/finance dataset."""
    classifier = NaiveBayes()
    classifier.train(sports_finance)
    return classifier


@pytest.fixture
def weak_dataset() -> dict[str, list[str]]:
    """Too small for any feature to pass the default critical value."""
    return {"a": ["x y", "x z", "y"], "b": ["x"]}


@pytest.fixture
def dataset_file(tmp_path: Path, sports_finance: dict[str, list[str]]) -> Path:
    """The sports/finance dataset written as a JSON file."""
    file = tmp_path / "dataset.json"
    file.write_text(json.dumps(sports_finance), encoding="utf-8")
    return file


@pytest.fixture
def dataset_dir(tmp_path: Path, sports_finance: dict[str, list[str]]) -> Path:
    """The sports/finance dataset as one text file per category."""
    directory = tmp_path / "datasets"
    directory.mkdir()
    for category, examples in sports_finance.items():
        (directory / f"{category}.txt").write_text("\n".join(examples) + "\n", encoding="utf-8")
    return directory
