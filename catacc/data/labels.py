"""Label vector validation and loading.

Ground-truth and predicted codings arrive as numeric vectors. Everything
downstream treats each value as a categorical key, so validation happens
once, up front, and nothing after it raises on the data itself.
"""

import logging
from pathlib import Path
from typing import Sequence, Tuple, Union

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

LabelInput = Union[Sequence[float], np.ndarray, pd.Series]

NUMERIC_KINDS = "iuf"


class InvalidInputKindError(TypeError):
    """Raised when a label vector is not numeric."""

    pass


class LengthMismatchError(ValueError):
    """Raised when the true and predicted vectors differ in length."""

    pass


def as_label_vector(values: LabelInput, name: str) -> np.ndarray:
    """
    Convert a label sequence into a validated 1-D numpy array.

    Args:
        values: Label codings as a sequence, numpy array or pandas Series
        name: Vector name used in error messages ("true" or "predicted")

    Returns:
        1-D numpy array of numeric labels

    Raises:
        InvalidInputKindError: If the values are not numeric, are not
            one-dimensional, or contain NaN/infinite entries
    """
    if isinstance(values, pd.Series):
        values = values.to_numpy()

    array = np.atleast_1d(np.asarray(values))

    if array.ndim != 1:
        raise InvalidInputKindError(
            f"{name} coding must be a one-dimensional vector, got shape {array.shape}"
        )

    if array.dtype.kind not in NUMERIC_KINDS:
        raise InvalidInputKindError(
            f"{name} coding is not numeric. "
            "Category accuracy currently requires numeric codings."
        )

    if array.dtype.kind == "f" and not np.isfinite(array).all():
        raise InvalidInputKindError(
            f"{name} coding contains missing or non-finite values. "
            "Category accuracy currently requires numeric codings."
        )

    # widen through the shortest repr so 0.1 as float32 stays 0.1
    if array.dtype.kind == "f" and array.dtype.itemsize < 8:
        array = array.astype(str).astype(np.float64)

    return array


def check_same_length(true: np.ndarray, predicted: np.ndarray) -> None:
    """Raise LengthMismatchError if the two label vectors are not aligned."""
    if len(true) != len(predicted):
        raise LengthMismatchError(
            f"Length mismatch: true={len(true)}, predicted={len(predicted)}"
        )


def load_label_vectors(
    path: Union[str, Path],
    true_column: str = "true",
    predicted_column: str = "predicted",
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Load true and predicted codings from a CSV file.

    Args:
        path: CSV file with one row per observation
        true_column: Column holding ground-truth codings
        predicted_column: Column holding predicted codings

    Returns:
        Validated (true, predicted) label arrays

    Raises:
        FileNotFoundError: If the file does not exist
        KeyError: If a requested column is missing
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Label file not found: {path}")

    df = pd.read_csv(path)
    logger.info(f"Loaded {len(df)} observations from {path}")

    for column in (true_column, predicted_column):
        if column not in df.columns:
            raise KeyError(
                f"Column '{column}' not found in {path}. "
                f"Available columns: {list(df.columns)}"
            )

    true = as_label_vector(df[true_column], "true")
    predicted = as_label_vector(df[predicted_column], "predicted")
    check_same_length(true, predicted)
    return true, predicted
