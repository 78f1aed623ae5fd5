"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_array: conversion, dtype coercion, object rejection
    - drop_non_finite: NaN/Inf removal
    - check_ndim / check_1d / check_2d: dimensionality checks
    - check_consistent_length: multi-array length matching
    - check_conf_level, check_non_negative, check_positive_int, check_choice
"""

import numpy as np
import pytest

from pyanalytics.core.exceptions import DimensionError, ValidationError
from pyanalytics.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_choice,
    check_conf_level,
    check_consistent_length,
    check_non_negative,
    check_positive_int,
    drop_non_finite,
)


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:
    """check_array converts to float64 ndarray and rejects non-numeric data."""

    def test_list_to_float_array(self):
        result = check_array([1, 2, 3], "x")
        assert result.dtype == np.float64
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_bool_promoted(self):
        result = check_array([True, False], "x")
        np.testing.assert_array_equal(result, [1.0, 0.0])

    def test_nested_list_to_2d(self):
        assert check_array([[1, 2], [3, 4]], "x").shape == (2, 2)

    def test_rejects_mixed_types(self):
        with pytest.raises(ValidationError, match="object dtype"):
            check_array([None, 1, 2.0], "x")

    def test_rejects_strings(self):
        with pytest.raises(ValidationError, match="non-numeric dtype"):
            check_array(["a", "b"], "x")

    def test_empty_array(self):
        assert check_array([], "x").shape == (0,)


class TestDropNonFinite:

    def test_removes_nan_and_inf(self):
        arr = np.array([1.0, np.nan, 2.0, np.inf, -np.inf, 3.0])
        np.testing.assert_array_equal(drop_non_finite(arr), [1.0, 2.0, 3.0])


# ═══════════════════════════════════════════════════════════════════════
# Dimensions
# ═══════════════════════════════════════════════════════════════════════


class TestDimensions:

    def test_1d_accepts_vector(self):
        check_1d(np.zeros(3), "x")

    def test_1d_rejects_matrix(self):
        with pytest.raises(DimensionError, match="expected 1D"):
            check_1d(np.zeros((2, 2)), "x")

    def test_2d_rejects_vector(self):
        with pytest.raises(DimensionError, match="expected 2D"):
            check_2d(np.zeros(3), "x")

    def test_consistent_length_ok(self):
        check_consistent_length([1, 2], [3, 4], names=("x", "y"))

    def test_consistent_length_mismatch(self):
        with pytest.raises(DimensionError, match="x=2, y=3"):
            check_consistent_length([1, 2], [3, 4, 5], names=("x", "y"))

    def test_names_count_mismatch(self):
        with pytest.raises(ValueError):
            check_consistent_length([1], [2], names=("x",))


# ═══════════════════════════════════════════════════════════════════════
# Scalar options
# ═══════════════════════════════════════════════════════════════════════


class TestScalarChecks:

    @pytest.mark.parametrize("level", [0.0, 1.0, -0.5, 1.5])
    def test_conf_level_out_of_range(self, level):
        with pytest.raises(ValidationError):
            check_conf_level(level)

    def test_conf_level_returns_float(self):
        assert check_conf_level(0.95) == 0.95

    def test_non_negative(self):
        with pytest.raises(ValidationError, match="non-negative"):
            check_non_negative(np.array([[1.0, -1.0]]), "table")

    @pytest.mark.parametrize("value", [0, -3, 2.5, True])
    def test_positive_int_rejects(self, value):
        with pytest.raises(ValidationError):
            check_positive_int(value, "k")

    def test_positive_int_accepts(self):
        assert check_positive_int(4, "k") == 4

    def test_choice(self):
        assert check_choice("SMA", ("SMA", "EMA"), "kind") == "SMA"
        with pytest.raises(ValidationError, match="kind must be one of"):
            check_choice("XMA", ("SMA", "EMA"), "kind")
