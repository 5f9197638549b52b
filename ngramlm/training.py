"""
Training Module with Rich Terminal UI

This module wraps model training, evaluation and generation with
progress bars and summary panels using the Rich library.
"""

import logging
from typing import Dict, List, Optional

from rich.console import Console
from rich.progress import (
    Progress, SpinnerColumn, TextColumn, BarColumn,
    TaskProgressColumn, TimeElapsedColumn
)
from rich.panel import Panel
from rich.table import Table
from rich import box

from .model import NGramModel
from .corpus import Document, TokenKind, tokenize, load_brown_tokens
from .exceptions import EmptyModelError

logger = logging.getLogger(__name__)

console = Console()


def _flatten(stats: Dict, prefix: str = "") -> Dict:
    flat = {}
    for key, value in stats.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, prefix=f"{name}_"))
        else:
            flat[name] = value
    return flat


def create_stats_table(stats: Dict) -> Table:
    """Create a Rich table displaying training statistics."""
    table = Table(box=box.ROUNDED, show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="green")
    table.add_column("Value", style="yellow", justify="right")

    for key, value in _flatten(stats).items():
        display_key = key.replace('_', ' ').title()

        if isinstance(value, float):
            display_value = f"{value:,.4f}"
        elif isinstance(value, int):
            display_value = f"{value:,}"
        elif isinstance(value, list):
            display_value = f"{len(value)} items"
        else:
            display_value = str(value)

        table.add_row(display_key, display_value)

    return table


def train_model_cli(
    n: int = 3,
    kind: TokenKind = TokenKind.WORD,
    file_path: Optional[str] = None,
    categories: Optional[List[str]] = None,
    lowercase: bool = True,
    out: Optional[Console] = None
) -> NGramModel:
    """
    Train an n-gram model with terminal output.

    Args:
        n: Order of the n-gram model
        kind: Token unit to model
        file_path: Training document; the Brown corpus is used when omitted
        categories: Brown corpus categories to use
        lowercase: Whether to lowercase the training text
        out: Console to print to (default: the module console)

    Returns:
        Trained NGramModel
    """
    out = out or console

    out.print()
    out.print(Panel.fit(
        "[bold blue]N-gram Language Model Training[/bold blue]",
        border_style="blue"
    ))
    out.print()

    config_table = Table(box=box.SIMPLE, show_header=False)
    config_table.add_column("Setting", style="cyan")
    config_table.add_column("Value", style="white")
    config_table.add_row("Model Order (n)", str(n))
    config_table.add_row("Token Kind", kind.value)
    if file_path:
        config_table.add_row("Training File", str(file_path))
    else:
        config_table.add_row("Categories", ", ".join(categories) if categories else "All")
    config_table.add_row("Lowercase", "yes" if lowercase else "no")

    out.print(Panel(config_table, title="[bold]Configuration[/bold]", border_style="green"))
    out.print()

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=out
    ) as progress:

        task = progress.add_task("[cyan]Loading corpus...", total=None)
        if file_path:
            document = Document.from_path(file_path)
            tokens = tokenize(document.text, kind, lowercase=lowercase)
        else:
            if kind != TokenKind.WORD:
                raise ValueError("The Brown corpus can only be used with word tokens")
            tokens, _ = load_brown_tokens(categories=categories, lowercase=lowercase)
        progress.update(task, completed=100, total=100)
        progress.remove_task(task)

        out.print(f"[green]✓[/green] Loaded {len(tokens):,} tokens")
        out.print()

        model = NGramModel(n=n)
        model.token_kind = kind
        model.lowercase = lowercase

        train_task = progress.add_task("[cyan]Training model...", total=n)

        def update_progress(current, total, stage=""):
            progress.update(train_task, completed=current, total=total,
                            description=f"[cyan]{stage}")

        stats = model.train(tokens, progress_callback=update_progress)

        progress.remove_task(train_task)

    out.print()
    out.print("[green]✓[/green] Training complete!")
    out.print()

    out.print(Panel(
        create_stats_table(stats),
        title="[bold]Training Statistics[/bold]",
        border_style="yellow"
    ))
    out.print()

    return model


def evaluate_model_cli(model: NGramModel, file_path: str,
                       out: Optional[Console] = None) -> Dict:
    """
    Score a held-out document with terminal output.

    Args:
        model: Trained NGramModel
        file_path: Path of the document to score
        out: Console to print to

    Returns:
        Dictionary of evaluation metrics
    """
    out = out or console
    document = Document.from_path(file_path)

    out.print()
    out.print(Panel.fit("[bold blue]Model Evaluation[/bold blue]", border_style="blue"))
    out.print()

    with out.status("[cyan]Computing perplexity..."):
        log_likelihood = model.score_document(document)
        perplexity = model.document_perplexity(document)

    results = {
        'document': document.path.name,
        'log_likelihood': log_likelihood,
        'perplexity': perplexity
    }

    out.print(Panel(
        create_stats_table(results),
        title="[bold]Evaluation Results[/bold]",
        border_style="green"
    ))

    return results


def generate_cli(model: NGramModel, seed: int, count: int,
                 out: Optional[Console] = None) -> Optional[str]:
    """Print a random sentence, or an error panel for an empty model."""
    out = out or console

    try:
        sentence = model.random_sentence(seed, count)
    except EmptyModelError as e:
        logger.error("Generation failed: %s", e)
        out.print(Panel(str(e), title="[bold red]Cannot Generate[/bold red]",
                        border_style="red"))
        return None

    out.print(Panel(sentence, title=f"[bold]Generated (seed={seed})[/bold]",
                    border_style="magenta"))
    return sentence


def interactive_demo(model: NGramModel, out: Optional[Console] = None):
    """Run an interactive demo of the model."""
    out = out or console

    out.print()
    out.print(Panel.fit(
        "[bold magenta]Interactive Demo[/bold magenta]\n"
        "Enter a word or phrase to see predictions.\n"
        "Type 'quit' to exit.",
        border_style="magenta"
    ))
    out.print()

    n = model.n
    kind = model.token_kind or TokenKind.WORD
    seed = 0

    while True:
        try:
            user_input = out.input("[bold cyan]Enter context:[/bold cyan] ")

            if user_input.lower() in ('quit', 'exit', 'q'):
                break

            words = tokenize(user_input, kind, lowercase=model.lowercase)
            context = tuple(words[-(n - 1):]) if n > 1 else ()

            predictions = model.get_next_word_distribution(context, top_k=10)

            out.print()
            out.print(f"[yellow]Context:[/yellow] {' '.join(map(str, context))}")

            if not predictions:
                out.print("[red]Context never seen in training[/red]")
            else:
                out.print("[yellow]Top predictions:[/yellow]")
                for i, (word, prob) in enumerate(predictions, 1):
                    bar_length = int(prob * 50)
                    bar = "█" * bar_length + "░" * (50 - bar_length)
                    out.print(f"  {i:2}. {str(word):15} {bar} {prob:.4f}")

            out.print()
            generate_cli(model, seed, 15, out=out)
            seed += 1
            out.print()

        except (KeyboardInterrupt, EOFError):
            break

    out.print("\n[yellow]Goodbye![/yellow]")
