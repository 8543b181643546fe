"""Predictor selection for the HCV dataset.

The blood-test measurements are the predictors; the demographic covariates
are excluded from modelling.
"""

import logging
from typing import Sequence

import pandas as pd
from pandas.api.types import is_numeric_dtype

logger = logging.getLogger(__name__)


def select_features(
    df: pd.DataFrame,
    label_col: str = "Category",
    exclude: Sequence[str] = ("Age", "Sex"),
) -> tuple[pd.DataFrame, pd.Series]:
    """Split a cleaned dataset into predictors and target.

    Args:
        df: Cleaned dataset (no missing values).
        label_col: Name of the binary label column.
        exclude: Non-blood-test columns to drop.

    Returns:
        Tuple of (X, y): every remaining column as features, and the label.

    Raises:
        ValueError: If an excluded column or the label is missing, or a
            remaining feature column is not numeric.
    """
    missing = [c for c in [label_col, *exclude] if c not in df.columns]
    if missing:
        raise ValueError(f"Columns not found: {missing}")

    X = df.drop(columns=[label_col, *exclude])
    y = df[label_col]

    non_numeric = [c for c in X.columns if not is_numeric_dtype(X[c])]
    if non_numeric:
        raise ValueError(f"Non-numeric feature columns: {non_numeric}")

    logger.info(f"Selected {X.shape[1]} features: {list(X.columns)}")
    return X, y
