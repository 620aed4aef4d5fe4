#!/usr/bin/env python3
"""
Model Statistics UI
===================
Rich-based rendering of a trained model for the ``stats`` command.

Usage:
    from markovnames.ui import render_stats

    render_stats(model, corpus_path, top=10)
"""

from pathlib import Path
from typing import Optional

from rich import box
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .model import NameModel


def _symbol_label(model: NameModel, symbol: str) -> Text:
    if symbol == model.END:
        return Text("<end>", style="dim italic")
    return Text(symbol, style="bold")


def build_summary(model: NameModel, corpus_path: Optional[Path] = None) -> Panel:
    """Render the headline numbers of a model."""
    stats = model.stats()

    table = Table(box=None, show_header=False, padding=(0, 1))
    table.add_column("Metric", style="dim")
    table.add_column("Value", justify="right")

    if corpus_path is not None:
        table.add_row("Corpus", str(corpus_path))
    table.add_row("Context length", str(stats.context_length))
    table.add_row("Unique names", f"{stats.names:,}")
    table.add_row("Contexts", f"{stats.contexts:,}")
    table.add_row("Transitions", f"{stats.transitions:,}")
    table.add_row("Mean branching", f"{stats.mean_branching:.2f}")

    return Panel(table, title="[bold]Model[/bold]", border_style="cyan", box=box.ROUNDED)


def build_distribution(model: NameModel, context: tuple, top: int = 10) -> Panel:
    """Render the next-character distribution of a single context."""
    table = Table(box=box.SIMPLE, padding=(0, 1))
    table.add_column("Next", width=6)
    table.add_column("Count", justify="right")
    table.add_column("Share", justify="right")

    frequencies = model.tables.get(context)
    if frequencies is not None:
        for symbol, count in frequencies.most_common(top):
            share = count / frequencies.total * 100
            table.add_row(_symbol_label(model, symbol), str(count), f"{share:.1f}%")

    title = f"[bold]After {''.join(context)!r}[/bold]"
    return Panel(table, title=title, border_style="yellow", box=box.ROUNDED)


def render_stats(model: NameModel,
                 corpus_path: Optional[Path] = None,
                 top: int = 10,
                 console: Optional[Console] = None):
    """Print model summary and the start-context distribution."""
    console = console or Console()
    console.print(Group(
        build_summary(model, corpus_path),
        build_distribution(model, model.initial_context(), top=top),
    ))
