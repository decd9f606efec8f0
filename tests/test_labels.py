"""Tests for label vector validation and loading."""

import numpy as np
import pandas as pd
import pytest

from catacc.data import (
    InvalidInputKindError,
    LengthMismatchError,
    as_label_vector,
    check_same_length,
    load_label_vectors,
)


class TestAsLabelVector:
    """Tests for as_label_vector."""

    def test_list(self):
        """Should convert a list of numbers."""
        result = as_label_vector([1, 2, 3], "true")

        np.testing.assert_array_equal(result, [1, 2, 3])

    def test_series(self):
        """Should accept a pandas Series."""
        result = as_label_vector(pd.Series([1.0, 2.5]), "predicted")

        np.testing.assert_array_equal(result, [1.0, 2.5])

    def test_float32_widened_by_value(self):
        """Single-precision codes should keep their written values."""
        result = as_label_vector(np.array([0.1, 2.5], dtype=np.float32), "true")

        assert result.dtype == np.float64
        assert result.tolist() == [0.1, 2.5]

    def test_scalar_becomes_vector(self):
        """A single code should become a length-one vector."""
        assert as_label_vector(4, "true").shape == (1,)

    def test_strings_raise(self):
        """Should reject string codings and name the vector."""
        with pytest.raises(InvalidInputKindError, match="predicted coding is not numeric"):
            as_label_vector(["x", "y"], "predicted")

    def test_booleans_raise(self):
        """Booleans are not numeric codings."""
        with pytest.raises(InvalidInputKindError):
            as_label_vector(np.array([True, False]), "true")

    def test_mixed_objects_raise(self):
        """Should reject object arrays such as codes with None."""
        with pytest.raises(InvalidInputKindError):
            as_label_vector([1, None, 3], "true")

    def test_nan_raises(self):
        """Should reject missing values."""
        with pytest.raises(InvalidInputKindError, match="non-finite"):
            as_label_vector([1.0, np.nan], "true")

    def test_infinite_raises(self):
        """Should reject infinite values."""
        with pytest.raises(InvalidInputKindError, match="non-finite"):
            as_label_vector([1.0, np.inf], "predicted")

    def test_two_dimensional_raises(self):
        """Should reject matrices."""
        with pytest.raises(InvalidInputKindError, match="one-dimensional"):
            as_label_vector(np.zeros((2, 2)), "true")

    def test_error_is_type_error(self):
        """InvalidInputKindError should be catchable as TypeError."""
        with pytest.raises(TypeError):
            as_label_vector(["a"], "true")


class TestCheckSameLength:
    """Tests for check_same_length."""

    def test_equal_lengths(self):
        """Should pass for aligned vectors."""
        check_same_length(np.array([1, 2]), np.array([2, 1]))

    def test_mismatch_raises(self):
        """Should raise with both lengths in the message."""
        with pytest.raises(LengthMismatchError, match="true=2, predicted=1"):
            check_same_length(np.array([1, 2]), np.array([1]))

    def test_error_is_value_error(self):
        """LengthMismatchError should be catchable as ValueError."""
        with pytest.raises(ValueError):
            check_same_length(np.array([1]), np.array([]))


class TestLoadLabelVectors:
    """Tests for load_label_vectors."""

    @pytest.fixture
    def csv_path(self, tmp_path):
        """CSV with true and predicted columns."""
        path = tmp_path / "predictions.csv"
        pd.DataFrame(
            {"true": [1, 1, 2], "predicted": [1, 2, 2], "doc": ["a", "b", "c"]}
        ).to_csv(path, index=False)
        return path

    def test_loads_columns(self, csv_path):
        """Should return both columns as validated arrays."""
        true, predicted = load_label_vectors(csv_path)

        np.testing.assert_array_equal(true, [1, 1, 2])
        np.testing.assert_array_equal(predicted, [1, 2, 2])

    def test_custom_columns(self, tmp_path):
        """Should read the requested column names."""
        path = tmp_path / "coded.csv"
        pd.DataFrame({"coding": [3, 4], "ratio_match": [3, 3]}).to_csv(
            path, index=False
        )

        true, predicted = load_label_vectors(
            path, true_column="coding", predicted_column="ratio_match"
        )

        np.testing.assert_array_equal(predicted, [3, 3])

    def test_missing_column_raises(self, csv_path):
        """Should raise KeyError naming the missing column."""
        with pytest.raises(KeyError, match="label"):
            load_label_vectors(csv_path, predicted_column="label")

    def test_non_numeric_column_raises(self, csv_path):
        """Should validate the loaded columns."""
        with pytest.raises(InvalidInputKindError, match="predicted"):
            load_label_vectors(csv_path, predicted_column="doc")

    def test_missing_file_raises(self, tmp_path):
        """Should raise FileNotFoundError for a missing file."""
        with pytest.raises(FileNotFoundError, match="Label file not found"):
            load_label_vectors(tmp_path / "nope.csv")
