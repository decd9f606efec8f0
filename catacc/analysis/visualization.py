"""Visualization utilities for category accuracy results."""

from pathlib import Path
from typing import Literal, Optional, Sequence, Union

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

from catacc.analysis.analyzer import ClassReportRow, ConfusionMatrix
from catacc.utils import format_number


def _save(fig: plt.Figure, output_path: Optional[Union[str, Path]]) -> None:
    if output_path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output_path, dpi=150, bbox_inches="tight")


def plot_confusion_matrix(
    matrix: ConfusionMatrix,
    normalize: Optional[Literal["true", "pred", "all"]] = None,
    output_path: Optional[Union[str, Path]] = None,
    figsize: tuple[int, int] = (12, 10),
    cmap: str = "Blues",
    show_values: bool = True,
) -> plt.Figure:
    """
    Plot a confusion matrix as a seaborn heatmap.

    The heatmap keeps the matrix's own row and column keys, so it may be
    rectangular when some classes are only ever true or only ever predicted.

    Args:
        matrix: Confusion matrix to plot
        normalize: Normalization mode (None for raw counts):
            - "true": Normalize over true labels (rows)
            - "pred": Normalize over predictions (columns)
            - "all": Normalize over all observations
        output_path: Optional path to save the figure
        figsize: Figure size as (width, height)
        cmap: Colormap name
        show_values: Whether to show values in cells

    Returns:
        Matplotlib Figure object

    Raises:
        ValueError: If the matrix has no classes
    """
    if not matrix.rows or not matrix.columns:
        raise ValueError("Cannot plot an empty confusion matrix")

    if normalize:
        rates = matrix.normalized(normalize)
        cm_plot = np.array(
            [[rates[r][c] for c in matrix.columns] for r in matrix.rows],
            dtype=float,
        ).reshape(len(matrix.rows), len(matrix.columns))
    else:
        cm_plot = matrix.to_array()

    fig, ax = plt.subplots(figsize=figsize)

    fmt = ".2f" if normalize else "d"
    annot = show_values and max(len(matrix.rows), len(matrix.columns)) <= 15

    sns.heatmap(
        cm_plot,
        annot=annot,
        fmt=fmt if annot else "",
        cmap=cmap,
        xticklabels=[format_number(c) for c in matrix.columns],
        yticklabels=[format_number(r) for r in matrix.rows],
        ax=ax,
        cbar_kws={"shrink": 0.8},
    )

    ax.set_xlabel("Predicted", fontsize=12)
    ax.set_ylabel("True", fontsize=12)

    title = "Confusion Matrix"
    if normalize:
        title += f" (normalized: {normalize})"
    ax.set_title(title, fontsize=14)

    plt.xticks(rotation=45, ha="right")
    plt.yticks(rotation=0)
    plt.tight_layout()

    _save(fig, output_path)
    return fig


def plot_class_accuracy(
    rows: Sequence[ClassReportRow],
    output_path: Optional[Union[str, Path]] = None,
    figsize: tuple[int, int] = (12, 8),
    color: str = "steelblue",
) -> plt.Figure:
    """
    Plot per-class true positive rate as a horizontal bar chart.

    Bars follow the report order, highest rate at the top.

    Args:
        rows: Report rows from ``analyze``
        output_path: Optional path to save the figure
        figsize: Figure size as (width, height)
        color: Bar color

    Returns:
        Matplotlib Figure object
    """
    class_names = [row.true for row in rows]
    rates = [row.true_positive_rate for row in rows]

    fig, ax = plt.subplots(figsize=figsize)

    y_pos = np.arange(len(class_names))
    bars = ax.barh(y_pos, rates, color=color, alpha=0.8)

    if rates:
        mean_rate = np.mean(rates)
        ax.axvline(
            x=mean_rate,
            color="red",
            linestyle="--",
            linewidth=2,
            label=f"Mean: {mean_rate:.3f}",
        )
        ax.legend(loc="lower right")

    ax.set_yticks(y_pos)
    ax.set_yticklabels(class_names)
    ax.invert_yaxis()
    ax.set_xlabel("True Positive Rate", fontsize=12)
    ax.set_ylabel("Class", fontsize=12)
    ax.set_title("Accuracy by Category", fontsize=14)
    ax.set_xlim(0, 1.0)

    for bar, rate in zip(bars, rates):
        ax.text(
            min(rate + 0.01, 0.95),
            bar.get_y() + bar.get_height() / 2,
            f"{rate:.3f}",
            va="center",
            fontsize=8,
        )

    plt.tight_layout()

    _save(fig, output_path)
    return fig
