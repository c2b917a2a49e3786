"""Plotting utilities for session energy results."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Sequence

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

if TYPE_CHECKING:
    from mimac.simulation.runner import SessionResult


def plot_energy_comparison(
    results: Sequence[SessionResult],
    title: str = "Energy per Protocol Session",
    figsize: tuple[float, float] = (8, 6),
) -> Figure:
    """Plot stacked energy bars, one bar per session.

    Each stack segment is one ledger breakdown category (state holds and
    packet transmissions).

    Args:
        results: Completed session results.
        title: Plot title.
        figsize: Figure size.

    Returns:
        Matplotlib figure.
    """
    fig, ax = plt.subplots(figsize=figsize)

    categories: list[str] = []
    for result in results:
        for category in result.ledger.breakdown:
            if category not in categories:
                categories.append(category)

    x = np.arange(len(results))
    bottom = np.zeros(len(results))
    colors = plt.cm.Set3(np.linspace(0, 1, max(len(categories), 1)))

    for category, color in zip(categories, colors):
        values = np.array([r.ledger.breakdown.get(category, 0.0) for r in results])
        ax.bar(x, values, bottom=bottom, label=category, color=color)
        bottom += values

    for xi, total in zip(x, bottom):
        ax.annotate(f"{total:.1f}", (xi, total), ha="center", va="bottom")

    ax.set_xticks(x)
    ax.set_xticklabels([r.variant for r in results])
    ax.set_ylabel("Energy (uJ)")
    ax.set_title(title)
    if categories:
        ax.legend(loc="upper left", bbox_to_anchor=(1.0, 1.0))
    fig.tight_layout()
    return fig


def save_figure(
    fig: Figure,
    path: str | Path,
    formats: list[str] | None = None,
    dpi: int = 300,
) -> list[Path]:
    """Save a figure in one or more formats.

    Args:
        fig: Matplotlib figure.
        path: Output path (extension is replaced per format).
        formats: Formats to save (default: ["png"]).
        dpi: Resolution for raster formats.

    Returns:
        Paths written.
    """
    if formats is None:
        formats = ["png"]

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    written = []
    for fmt in formats:
        out = path.with_suffix(f".{fmt}")
        fig.savefig(out, dpi=dpi, bbox_inches="tight")
        written.append(out)
    return written
