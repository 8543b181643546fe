"""Label recoding, row cleaning and predictor selection."""

from hepc_svm.feature_extraction.labels import (
    BLOOD,
    CATEGORY_MAP,
    HEPATITIS,
    OUTCOME_CLASSES,
    UnmappedLabelError,
    clean_dataset,
    drop_incomplete_rows,
    recode_category,
)
from hepc_svm.feature_extraction.features import select_features

__all__ = [
    "BLOOD",
    "CATEGORY_MAP",
    "HEPATITIS",
    "OUTCOME_CLASSES",
    "UnmappedLabelError",
    "clean_dataset",
    "drop_incomplete_rows",
    "recode_category",
    "select_features",
]
