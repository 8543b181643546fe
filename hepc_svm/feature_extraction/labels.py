"""Binary outcome recoding for the HCV dataset.

The raw ``Category`` label has five levels: two blood-donor levels and three
disease stages. For binary classification these collapse to ``Blood`` and
``Hepatitis``. The mapping is exhaustive; an unknown level is an error
rather than being carried through unchanged.
"""

import logging

import pandas as pd

logger = logging.getLogger(__name__)

BLOOD = "Blood"
HEPATITIS = "Hepatitis"

# Level order matters: the first level is the default positive class
OUTCOME_CLASSES = [BLOOD, HEPATITIS]

CATEGORY_MAP = {
    "0=Blood Donor": BLOOD,
    "0s=suspect Blood Donor": BLOOD,
    "1=Hepatitis": HEPATITIS,
    "2=Fibrosis": HEPATITIS,
    "3=Cirrhosis": HEPATITIS,
}


class UnmappedLabelError(ValueError):
    """Raised when a label value has no entry in CATEGORY_MAP."""


def recode_category(df: pd.DataFrame, label_col: str = "Category") -> pd.DataFrame:
    """Collapse the five-level label into a two-level categorical.

    Missing labels stay missing so that drop_incomplete_rows removes them.

    Args:
        df: Dataset containing the raw label column.
        label_col: Name of the label column.

    Returns:
        Copy of df with label_col as a categorical over OUTCOME_CLASSES.

    Raises:
        KeyError: If label_col is not a column of df.
        UnmappedLabelError: If a non-null label is not in CATEGORY_MAP.
    """
    labels = df[label_col]
    stripped = labels.dropna().astype(str).str.strip()

    unknown = sorted(set(stripped) - set(CATEGORY_MAP))
    if unknown:
        raise UnmappedLabelError(
            f"Unexpected values in {label_col}: {unknown}. "
            f"Expected one of {list(CATEGORY_MAP)}"
        )

    # Rows with a missing label are absent from stripped and reindex to NaN
    recoded = stripped.map(CATEGORY_MAP).reindex(labels.index)

    out = df.copy()
    out[label_col] = pd.Categorical(recoded, categories=OUTCOME_CLASSES)

    logger.debug(f"Recoded {label_col}: {out[label_col].value_counts().to_dict()}")
    return out


def drop_incomplete_rows(df: pd.DataFrame) -> pd.DataFrame:
    """Remove every row with a missing value in any column.

    No imputation is performed.
    """
    complete = df.dropna(how="any")
    n_dropped = len(df) - len(complete)
    if n_dropped:
        logger.info(f"Dropped {n_dropped} rows with missing values ({len(complete)} remain)")
    return complete


def clean_dataset(df: pd.DataFrame, label_col: str = "Category") -> pd.DataFrame:
    """Recode the label then keep complete rows only.

    After cleaning the label has exactly the two OUTCOME_CLASSES levels and
    no column contains missing values.
    """
    cleaned = drop_incomplete_rows(recode_category(df, label_col=label_col))

    # nunique counts observed levels only
    n_classes = cleaned[label_col].nunique()
    if n_classes != len(OUTCOME_CLASSES):
        raise ValueError(
            f"Expected {len(OUTCOME_CLASSES)} classes in {label_col} after cleaning, "
            f"found {n_classes}"
        )
    return cleaned
