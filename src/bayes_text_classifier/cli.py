"""Command-line interface for Bayes Text Classifier.

Provides ``train``, ``predict``, and ``info`` commands with rich terminal
output using the ``click`` and ``rich`` libraries.

Training data is either a JSON file mapping each category to a list of
example texts, or a directory holding one ``<category>.txt`` file per
category with one example per line.

Usage::

    bayes-text-classifier train datasets/ --output model.json
    bayes-text-classifier predict model.json "Which team scored the goal?"
    bayes-text-classifier predict model.json --file note.txt --top 3
    bayes-text-classifier info model.json
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .features import DEFAULT_CRITICAL_VALUE
from .models import KnowledgeBase, Prediction
from .naive_bayes import NaiveBayes

console = Console()


# ------------------------------------------------------------------
# Input helpers
# ------------------------------------------------------------------

def load_dataset(path: Path) -> dict[str, list[str]]:
    """Read a training dataset from a JSON file or a directory of text files.

    Raises:
        ValueError: If the file content is not a mapping of category to a
            list of strings, or the directory holds no ``.txt`` files.
    """
    if path.is_dir():
        files = sorted(path.glob("*.txt"))
        if not files:
            raise ValueError(f"No .txt files found in {path}")
        dataset: dict[str, list[str]] = {}
        for file in files:
            lines = file.read_text(encoding="utf-8").splitlines()
            dataset[file.stem] = [line.strip() for line in lines if line.strip()]
        return dataset

    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict) or not all(
        isinstance(examples, list) and all(isinstance(t, str) for t in examples)
        for examples in data.values()
    ):
        raise ValueError(f"{path} must map each category to a list of texts")
    return data


def _parse_priors(values: tuple[str, ...]) -> dict[str, float] | None:
    if not values:
        return None
    priors: dict[str, float] = {}
    for value in values:
        category, sep, probability = value.rpartition("=")
        if not sep or not category:
            raise click.BadParameter(f"expected CATEGORY=PROBABILITY, got {value!r}",
                                     param_hint="--prior")
        try:
            priors[category] = float(probability)
        except ValueError:
            raise click.BadParameter(f"{probability!r} is not a number",
                                     param_hint="--prior") from None
    return priors


# ------------------------------------------------------------------
# Commands
# ------------------------------------------------------------------

@click.group()
@click.version_option(package_name="bayes-text-classifier")
def main() -> None:
    """Bayes Text Classifier -- Naive Bayes with chi-square feature selection.

    Train a model from labeled example texts and classify new text.
    """
    pass


@main.command()
@click.argument("dataset", type=click.Path(exists=True, path_type=Path))
@click.option("--output", "-o", type=click.Path(path_type=Path), default=Path("model.json"),
              show_default=True, help="Where to save the trained model.")
@click.option("--critical-value", "-c", type=float, default=DEFAULT_CRITICAL_VALUE,
              show_default=True, help="Chi-square critical value for feature selection.")
@click.option("--prior", "-p", "priors", multiple=True, metavar="CATEGORY=P",
              help="Prior probability for a category (repeat for every category).")
def train(dataset: Path, output: Path, critical_value: float, priors: tuple[str, ...]) -> None:
    """Train a classifier and save it as JSON.

    Example: bayes-text-classifier train datasets/ --output model.json
    """
    category_priors = _parse_priors(priors)

    with console.status("[bold blue]Training classifier...", spinner="dots"):
        try:
            data = load_dataset(dataset)
            classifier = NaiveBayes(chisquare_critical_value=critical_value)
            knowledge_base = classifier.train(data, category_priors)
            classifier.save(output)
        except Exception as e:
            console.print(f"[bold red]Error:[/] {e}")
            sys.exit(1)

    _render_knowledge_base(knowledge_base, title=f"Trained model: {output}")
    console.print(
        f"[dim]{len(classifier.feature_scores)} features selected "
        f"at critical value {critical_value}[/]"
    )


@main.command()
@click.argument("model", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("text", required=False)
@click.option("--file", "-f", "text_file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              default=None, help="Read the text to classify from a file.")
@click.option("--top", "-k", type=click.IntRange(min=1), default=None,
              help="Show the K best categories with their scores.")
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
def predict(model: Path, text: str | None, text_file: Path | None, top: int | None, output: str) -> None:
    """Classify TEXT (or the content of --file) with a saved model.

    Example: bayes-text-classifier predict model.json "stocks and bonds" --top 2
    """
    if text_file is not None:
        text = text_file.read_text(encoding="utf-8")
    if text is None:
        raise click.UsageError("Provide TEXT or --file.")

    try:
        classifier = NaiveBayes.load(model)
        if top:
            predictions = classifier.predict_ranked(text, top_k=top)
        else:
            category = classifier.predict(text)
    except Exception as e:
        console.print(f"[bold red]Error:[/] {e}")
        sys.exit(1)

    if top:
        if output == "json":
            click.echo(json.dumps([p.to_dict() for p in predictions], indent=2))
        else:
            _render_predictions(predictions)
    elif output == "json":
        click.echo(json.dumps({"category": category}, indent=2))
    else:
        console.print(Text(str(category), style="bold green"))


@main.command()
@click.argument("model", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
def info(model: Path, output: str) -> None:
    """Show the dimensions and priors of a saved model.

    Example: bayes-text-classifier info model.json
    """
    try:
        classifier = NaiveBayes.load(model)
    except Exception as e:
        console.print(f"[bold red]Error:[/] {e}")
        sys.exit(1)

    knowledge_base = classifier.knowledge_base
    if output == "json":
        click.echo(json.dumps({
            "n": knowledge_base.n,
            "d": knowledge_base.d,
            "c": knowledge_base.c,
            "chisquare_critical_value": classifier.chisquare_critical_value,
            "log_priors": knowledge_base.log_priors,
        }, indent=2))
    else:
        _render_knowledge_base(knowledge_base, title=f"Model: {model.name}")


# ------------------------------------------------------------------
# Rich rendering helpers
# ------------------------------------------------------------------

def _render_knowledge_base(knowledge_base: KnowledgeBase, title: str) -> None:
    """Render model dimensions and the prior of every category."""
    console.print()
    console.print(Panel(
        f"Documents: {knowledge_base.n} | "
        f"Features: {knowledge_base.d} | "
        f"Categories: {knowledge_base.c}",
        title=title,
        border_style="blue",
    ))

    if knowledge_base.log_priors:
        table = Table(title="Category priors", show_lines=False)
        table.add_column("Category", style="cyan")
        table.add_column("Log prior", justify="right")
        for category in knowledge_base.categories:
            table.add_row(category, f"{knowledge_base.log_priors[category]:.4f}")
        console.print(table)
    console.print()


def _render_predictions(predictions: list[Prediction]) -> None:
    """Render ranked predictions as a rich table."""
    table = Table(title="Predictions", show_lines=False)
    table.add_column("#", justify="right", width=4)
    table.add_column("Category", style="cyan")
    table.add_column("Log score", justify="right")

    for i, prediction in enumerate(predictions, 1):
        style = "bold green" if i == 1 else ""
        table.add_row(str(i), Text(prediction.category, style=style), f"{prediction.score:.4f}")

    console.print(table)
    console.print()


if __name__ == "__main__":
    main()
