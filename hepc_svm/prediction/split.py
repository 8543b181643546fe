"""Stratified train/test splitting for the HCV classifier.

Uses stratified sampling on the binary label so both subsets keep the class
balance of the full dataset.
"""

import pandas as pd
from sklearn.model_selection import StratifiedShuffleSplit


def stratified_split(
    df: pd.DataFrame,
    target_col: str,
    train_size: float = 0.7,
    random_state: int = 1234,
) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Partition rows into train and test sets, stratified on the label.

    The two subsets are disjoint and together cover every row. In each
    subset, every class count differs from subset size times the class's
    overall proportion by less than one row. The same seed and input always
    give the same partition.

    Args:
        df: Cleaned dataset including the target column
        target_col: Name of the label column to stratify on
        train_size: Fraction of rows for the training set (default 0.7)
        random_state: Random seed for reproducibility

    Returns:
        Tuple of (train_df, test_df) DataFrames, rows kept in original order

    Raises:
        ValueError: If any class has fewer than two rows

    Example:
        >>> train_df, test_df = stratified_split(hepc, target_col="Category")
        >>> assert train_df.index.intersection(test_df.index).empty
    """
    counts = df[target_col].value_counts()
    counts = counts[counts > 0]
    if (counts < 2).any():
        raise ValueError(
            f"Each class needs at least 2 rows for a stratified split, got {counts.to_dict()}"
        )

    sss = StratifiedShuffleSplit(
        n_splits=1, train_size=train_size, random_state=random_state
    )
    labels = df[target_col].astype(str).to_numpy()
    train_idx, test_idx = next(sss.split(df, labels))

    train_df = df.iloc[sorted(train_idx)].copy()
    test_df = df.iloc[sorted(test_idx)].copy()

    return train_df, test_df
