"""Tests for label recoding, row cleaning and predictor selection."""

import pytest
import numpy as np
import pandas as pd

from hepc_svm.feature_extraction import (
    CATEGORY_MAP,
    OUTCOME_CLASSES,
    UnmappedLabelError,
    clean_dataset,
    drop_incomplete_rows,
    recode_category,
    select_features,
)


class TestRecodeCategory:
    """Five raw levels collapse onto Blood / Hepatitis."""

    def test_mapping_is_exhaustive_over_raw_levels(self):
        assert set(CATEGORY_MAP.values()) == set(OUTCOME_CLASSES)
        assert len(CATEGORY_MAP) == 5

    def test_donor_levels_map_to_blood(self, hepc_frame):
        recoded = recode_category(hepc_frame)

        donors = hepc_frame["Category"].str.startswith("0")
        assert (recoded.loc[donors, "Category"] == "Blood").all()
        assert (recoded.loc[~donors, "Category"] == "Hepatitis").all()

    def test_result_is_two_level_categorical(self, hepc_frame):
        recoded = recode_category(hepc_frame)

        assert isinstance(recoded["Category"].dtype, pd.CategoricalDtype)
        assert list(recoded["Category"].cat.categories) == ["Blood", "Hepatitis"]

    def test_input_not_modified(self, hepc_frame):
        original = hepc_frame["Category"].copy()
        recode_category(hepc_frame)
        pd.testing.assert_series_equal(hepc_frame["Category"], original)

    def test_unexpected_value_raises(self, hepc_frame):
        hepc_frame.loc[5, "Category"] = "4=Unknown"

        with pytest.raises(UnmappedLabelError, match="4=Unknown"):
            recode_category(hepc_frame)

    def test_unmapped_error_is_value_error(self):
        assert issubclass(UnmappedLabelError, ValueError)

    def test_missing_label_stays_missing(self, hepc_frame):
        hepc_frame.loc[7, "Category"] = np.nan
        recoded = recode_category(hepc_frame)

        assert pd.isna(recoded.loc[7, "Category"])

    def test_missing_label_column_raises(self, hepc_frame):
        with pytest.raises(KeyError):
            recode_category(hepc_frame.drop(columns=["Category"]))


class TestCleanDataset:
    """After cleaning: two classes, no missing values anywhere."""

    def test_incomplete_rows_removed(self, hepc_frame):
        incomplete = hepc_frame.index[hepc_frame.isna().any(axis=1)]
        cleaned = clean_dataset(hepc_frame)

        assert len(incomplete) == 4
        assert cleaned.index.intersection(incomplete).empty
        assert len(cleaned) == len(hepc_frame) - 4
        assert not cleaned.isna().any().any()

    def test_exactly_two_label_values(self, hepc_frame):
        cleaned = clean_dataset(hepc_frame)

        assert cleaned["Category"].nunique() == 2
        assert set(cleaned["Category"]) == {"Blood", "Hepatitis"}

    def test_missing_label_row_dropped(self, hepc_frame):
        hepc_frame.loc[20, "Category"] = np.nan
        cleaned = clean_dataset(hepc_frame)

        assert 20 not in cleaned.index

    def test_single_class_raises(self, hepc_frame):
        donors_only = hepc_frame[hepc_frame["Category"].str.startswith("0")]

        with pytest.raises(ValueError, match="Expected 2 classes"):
            clean_dataset(donors_only)

    def test_drop_incomplete_rows_keeps_complete(self):
        df = pd.DataFrame({"a": [1.0, np.nan, 3.0], "b": ["x", "y", None]})
        assert list(drop_incomplete_rows(df).index) == [0]


class TestSelectFeatures:
    """Demographics dropped, blood tests kept."""

    def test_drops_demographics_and_label(self, hepc_frame):
        X, y = select_features(clean_dataset(hepc_frame))

        assert "Age" not in X.columns
        assert "Sex" not in X.columns
        assert "Category" not in X.columns
        assert list(X.columns) == ["ALB", "ALP", "ALT", "AST", "BIL", "CHE", "CHOL", "CREA", "GGT", "PROT"]
        assert len(y) == len(X)
        assert y.name == "Category"

    def test_missing_excluded_column_raises(self, hepc_frame):
        cleaned = clean_dataset(hepc_frame).drop(columns=["Age"])

        with pytest.raises(ValueError, match="Age"):
            select_features(cleaned)

    def test_non_numeric_feature_raises(self, hepc_frame):
        cleaned = clean_dataset(hepc_frame)

        with pytest.raises(ValueError, match="Sex"):
            select_features(cleaned, exclude=("Age",))
