"""Per-category accuracy analysis for multi-class classifiers."""

import logging
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Literal, Optional, Tuple, Union

import numpy as np
import pandas as pd
from sklearn.metrics import confusion_matrix as sklearn_confusion_matrix

from catacc.analysis.report import DEFAULT_FILENAME, write_latex_report
from catacc.data.labels import LabelInput, as_label_vector, check_same_length
from catacc.utils import NOT_AVAILABLE, format_number, signif

logger = logging.getLogger(__name__)

Label = Union[int, float]

TOP_K = 5

RECORD_COLUMNS = (
    "true",
    "true_positive_rate",
    "positive_predictive_value",
    "frequency",
) + tuple(f"top_{rank}" for rank in range(1, TOP_K + 1))


@dataclass(frozen=True)
class ConfusionMatrix:
    """
    Cross-tabulation of true vs. predicted class counts.

    Rows are the sorted distinct true labels and columns the sorted distinct
    predicted labels; the two key sets may differ. ``counts[t][p]`` holds the
    number of observations of class ``t`` predicted as ``p`` and is zero-filled
    over all row/column pairs.
    """

    rows: Tuple[Label, ...]
    columns: Tuple[Label, ...]
    counts: Dict[Label, Dict[Label, int]]

    @classmethod
    def from_labels(cls, true: np.ndarray, predicted: np.ndarray) -> "ConfusionMatrix":
        """Tabulate two aligned label arrays."""
        if len(true) == 0:
            return cls(rows=(), columns=(), counts={})

        dtype = np.result_type(true, predicted)
        true = true.astype(dtype)
        predicted = predicted.astype(dtype)

        # sklearn only accepts discrete targets, so tabulate on integer codes
        labels = np.union1d(true, predicted)
        codes = np.arange(len(labels))
        with warnings.catch_warnings():
            # a 1x1 result is valid here
            warnings.filterwarnings("ignore", message="A single label was found")
            cm = sklearn_confusion_matrix(
                np.searchsorted(labels, true),
                np.searchsorted(labels, predicted),
                labels=codes,
            )

        index = {label: i for i, label in enumerate(labels.tolist())}
        rows = tuple(np.unique(true).tolist())
        columns = tuple(np.unique(predicted).tolist())
        counts = {
            r: {c: int(cm[index[r], index[c]]) for c in columns} for r in rows
        }
        return cls(rows=rows, columns=columns, counts=counts)

    def row_total(self, label: Label) -> int:
        """Number of ground-truth observations of a class."""
        return sum(self.counts[label].values())

    def column_total(self, label: Label) -> int:
        """Number of predictions of a class."""
        return sum(row[label] for row in self.counts.values())

    def normalized(
        self, mode: Literal["true", "pred", "all"] = "true"
    ) -> Dict[Label, Dict[Label, float]]:
        """
        Normalize the counts.

        Args:
            mode: Normalization mode:
                - "true": Normalize over true labels (rows sum to 1)
                - "pred": Normalize over predictions (columns sum to 1)
                - "all": Normalize over all observations (matrix sums to 1)

        Returns:
            Nested mapping with the same keys as ``counts``
        """
        if mode == "true":
            totals = {r: self.row_total(r) or 1 for r in self.rows}
            return {
                r: {c: n / totals[r] for c, n in row.items()}
                for r, row in self.counts.items()
            }
        elif mode == "pred":
            totals = {c: self.column_total(c) or 1 for c in self.columns}
            return {
                r: {c: n / totals[c] for c, n in row.items()}
                for r, row in self.counts.items()
            }
        elif mode == "all":
            total = sum(self.row_total(r) for r in self.rows) or 1
            return {
                r: {c: n / total for c, n in row.items()}
                for r, row in self.counts.items()
            }
        else:
            raise ValueError(f"Unknown normalize mode: {mode}")

    def to_array(self) -> np.ndarray:
        """Dense (rows x columns) count array in key order."""
        array = np.zeros((len(self.rows), len(self.columns)), dtype=int)
        for i, r in enumerate(self.rows):
            for j, c in enumerate(self.columns):
                array[i, j] = self.counts[r][c]
        return array


@dataclass(frozen=True)
class ClassReportRow:
    """
    Accuracy summary for one true class.

    ``None`` marks a structurally undefined value (the class was never
    predicted) and is rendered as "n/a".
    """

    true: str
    true_positive_rate: float
    positive_predictive_value: Optional[float]
    frequency: int
    top_mistaken: Tuple[Optional[str], ...] = (None,) * TOP_K

    def as_record(self) -> dict:
        """Return the nine report fields in column order with "n/a" sentinels."""
        record = {
            "true": self.true,
            "true_positive_rate": self.true_positive_rate,
            "positive_predictive_value": (
                NOT_AVAILABLE
                if self.positive_predictive_value is None
                else self.positive_predictive_value
            ),
            "frequency": self.frequency,
        }
        for rank, label in enumerate(self.top_mistaken, start=1):
            record[f"top_{rank}"] = NOT_AVAILABLE if label is None else label
        return record


class EvaluationAnalyzer:
    """
    Per-category accuracy analysis of classification results.

    Inputs are validated on construction; once they pass, no method raises
    on the data itself.

    Args:
        true: Ground-truth class codings
        predicted: Predicted class codings, aligned with ``true``

    Raises:
        InvalidInputKindError: If either vector is not numeric
        LengthMismatchError: If the vectors differ in length
    """

    def __init__(self, true: LabelInput, predicted: LabelInput):
        self.true = as_label_vector(true, "true")
        self.predicted = as_label_vector(predicted, "predicted")
        check_same_length(self.true, self.predicted)

        self._confusion_matrix: Optional[ConfusionMatrix] = None
        self._normalized: Dict[str, Dict[Label, Dict[Label, float]]] = {}

    @property
    def confusion_matrix(self) -> ConfusionMatrix:
        """Compute and cache the confusion matrix."""
        if self._confusion_matrix is None:
            self._confusion_matrix = ConfusionMatrix.from_labels(
                self.true, self.predicted
            )
            logger.debug(
                f"Built {len(self._confusion_matrix.rows)}x"
                f"{len(self._confusion_matrix.columns)} confusion matrix "
                f"from {len(self.true)} observations"
            )
        return self._confusion_matrix

    def get_normalized_confusion_matrix(
        self, normalize: Literal["true", "pred", "all"] = "true"
    ) -> Dict[Label, Dict[Label, float]]:
        """Return the confusion matrix normalized by rows, columns or total."""
        if normalize not in self._normalized:
            self._normalized[normalize] = self.confusion_matrix.normalized(normalize)
        return self._normalized[normalize]

    def top_mistaken_classes(
        self, label: Label, top_k: int = TOP_K
    ) -> Tuple[Optional[str], ...]:
        """
        Rank the classes a true class is most often mistaken for.

        Classes are ordered by descending row-normalized rate, ties by
        ascending class code. The class itself and classes it is never
        mistaken for are excluded.

        Args:
            label: True class code
            top_k: Number of ranks to return

        Returns:
            Tuple of ``top_k`` display labels padded with None. All None when
            the class is never predicted.
        """
        cm = self.confusion_matrix
        if label not in cm.counts:
            raise KeyError(f"Class {label} not found among true labels")
        if label not in cm.columns:
            return (None,) * top_k

        rates = self.get_normalized_confusion_matrix("true")[label]
        mistaken = [(c, rate) for c, rate in rates.items() if c != label and rate > 0]
        mistaken.sort(key=lambda item: item[1], reverse=True)

        ranked: List[Optional[str]] = [format_number(c) for c, _ in mistaken[:top_k]]
        return tuple(ranked + [None] * (top_k - len(ranked)))

    def get_per_class_rates(self) -> Dict[str, float]:
        """
        Compute per-class true positive rate (recall).

        Returns:
            Dictionary mapping display label to rate rounded to 3 significant
            digits, in class order. Classes never predicted map to 0.
        """
        cm = self.confusion_matrix
        by_row = self.get_normalized_confusion_matrix("true")

        rates = {}
        for label in cm.rows:
            if label in cm.columns:
                rates[format_number(label)] = signif(by_row[label][label], 3)
            else:
                rates[format_number(label)] = 0.0
        return rates

    def report(self) -> List[ClassReportRow]:
        """
        Build one report row per true class.

        Returns:
            Rows sorted by true positive rate descending; rows with equal
            rates keep ascending class order.
        """
        cm = self.confusion_matrix
        by_col = self.get_normalized_confusion_matrix("pred")
        rates = self.get_per_class_rates()

        rows = []
        for label in cm.rows:
            name = format_number(label)
            if label in cm.columns:
                ppv: Optional[float] = signif(by_col[label][label], 3)
            else:
                ppv = None
            rows.append(
                ClassReportRow(
                    true=name,
                    true_positive_rate=rates[name],
                    positive_predictive_value=ppv,
                    frequency=cm.row_total(label),
                    top_mistaken=self.top_mistaken_classes(label),
                )
            )

        rows.sort(key=lambda row: row.true_positive_rate, reverse=True)
        return rows


def analyze(true: LabelInput, predicted: LabelInput) -> List[ClassReportRow]:
    """Compute the per-category accuracy report for two aligned label vectors."""
    return EvaluationAnalyzer(true, predicted).report()


def to_dataframe(rows: List[ClassReportRow]) -> pd.DataFrame:
    """
    Convert report rows to a DataFrame.

    The frame has one column per report field, "n/a" sentinels for undefined
    values and a fresh 0..N-1 index.
    """
    return pd.DataFrame(
        [row.as_record() for row in rows], columns=list(RECORD_COLUMNS)
    )


def category_accuracy(
    true: LabelInput,
    predicted: LabelInput,
    latexfile: bool = False,
    filename: Union[str, Path] = DEFAULT_FILENAME,
) -> List[ClassReportRow]:
    """
    Check classification accuracy by category.

    Args:
        true: Ground-truth class codings
        predicted: Predicted class codings
        latexfile: Whether to also write the report as a LaTeX table
        filename: Output path for the LaTeX table

    Returns:
        Report rows sorted by true positive rate. The same rows are returned
        whether or not the table is written.
    """
    rows = analyze(true, predicted)
    if latexfile:
        write_latex_report(rows, filename)
    return rows
