"""Hepatitis C blood-test CSV loader.

Reads the HCV dataset (one row per blood donor or patient) into a pandas
DataFrame indexed by the row identifier in the first column.
"""

import logging
from pathlib import Path

import pandas as pd

logger = logging.getLogger(__name__)

LABEL_COLUMN = "Category"
DEMOGRAPHIC_COLUMNS = ["Age", "Sex"]

# Columns every downstream stage references by name
REQUIRED_COLUMNS = [LABEL_COLUMN, *DEMOGRAPHIC_COLUMNS]


def load_hepatitis_csv(
    path: Path,
    required_columns: list[str] | None = None,
) -> pd.DataFrame:
    """Load the HCV dataset from a comma-separated file.

    The first row is the header and the first column is used as the row
    index. Empty cells and the literal ``NA`` are read as missing values.

    Args:
        path: Path to the CSV file.
        required_columns: Columns that must be present. Defaults to
            REQUIRED_COLUMNS (label plus the demographic covariates).

    Returns:
        DataFrame with one row per sample.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If any required column is missing.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dataset not found: {path}")

    required_columns = REQUIRED_COLUMNS if required_columns is None else required_columns

    df = pd.read_csv(path, sep=",", header=0, index_col=0)

    missing = [c for c in required_columns if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns in {path.name}: {missing}")

    logger.info(f"Loaded {len(df):,} rows x {df.shape[1]} columns from {path.name}")

    n_missing = df.isna().sum()
    for column, count in n_missing[n_missing > 0].items():
        logger.debug(f"  {column}: {count} missing values")

    return df
