import pytest
import numpy as np
import pandas as pd
from pathlib import Path

from config.settings import Settings


# Path to the real HCV dataset (UCI "HCV data"), if present
REAL_HCV_PATH = Path("data/raw/hepatitisC_dataset.csv")

BIOMARKERS = ["ALB", "ALP", "ALT", "AST", "BIL", "CHE", "CHOL", "CREA", "GGT", "PROT"]

# Per-category row counts, shaped like the real dataset's imbalance
CATEGORY_COUNTS = {
    "0=Blood Donor": 150,
    "0s=suspect Blood Donor": 6,
    "1=Hepatitis": 16,
    "2=Fibrosis": 14,
    "3=Cirrhosis": 14,
}

# (mean, sd) for donors; disease rows shift liver enzymes up and CHE/ALB down
DONOR_PROFILE = {
    "ALB": (42.0, 5.0), "ALP": (68.0, 18.0), "ALT": (27.0, 10.0), "AST": (26.0, 6.0),
    "BIL": (8.0, 4.0), "CHE": (8.3, 1.6), "CHOL": (5.4, 1.0), "CREA": (78.0, 15.0),
    "GGT": (30.0, 15.0), "PROT": (72.0, 4.5),
}
DISEASE_SHIFT = {"AST": 60.0, "GGT": 90.0, "BIL": 25.0, "CHE": -3.0, "ALB": -6.0}


def _make_hepc_frame(seed: int = 42) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    rows = []
    for category, count in CATEGORY_COUNTS.items():
        disease = not category.startswith("0")
        for _ in range(count):
            row = {
                "Category": category,
                "Age": int(rng.integers(23, 78)),
                "Sex": "m" if rng.random() < 0.6 else "f",
            }
            for marker, (mean, sd) in DONOR_PROFILE.items():
                shift = DISEASE_SHIFT.get(marker, 0.0) if disease else 0.0
                row[marker] = round(float(abs(rng.normal(mean + shift, sd))), 1)
            rows.append(row)

    df = pd.DataFrame(rows)
    df.index = pd.RangeIndex(1, len(df) + 1)
    return df


@pytest.fixture
def hepc_frame() -> pd.DataFrame:
    """200 rows shaped like the HCV dataset, with a few missing values.

    Structure:
    - 156 blood-donor rows (150 donors + 6 suspect donors)
    - 44 disease rows (hepatitis, fibrosis, cirrhosis)
    - 4 rows with a missing biomarker (2 donor, 2 disease)
    """
    df = _make_hepc_frame()
    df.loc[3, "ALP"] = np.nan
    df.loc[10, "CHOL"] = np.nan
    df.loc[160, "ALP"] = np.nan
    df.loc[190, "PROT"] = np.nan
    return df


@pytest.fixture
def hepc_csv(hepc_frame: pd.DataFrame, tmp_path: Path) -> Path:
    """The synthetic dataset written as CSV with an unnamed index column."""
    path = tmp_path / "hepatitisC_dataset.csv"
    hepc_frame.to_csv(path, index=True, na_rep="NA")
    return path


@pytest.fixture
def test_settings(hepc_csv: Path, tmp_path: Path) -> Settings:
    """Settings pointing at the synthetic CSV with a small tuning budget."""
    return Settings(
        data_path=hepc_csv,
        output_dir=tmp_path / "outputs",
        cv_folds=3,
        tune_length=3,
        permutation_repeats=2,
    )


@pytest.fixture
def real_hcv_path() -> Path:
    """Path to real HCV data, skip if not present."""
    if not REAL_HCV_PATH.exists():
        pytest.skip(f"Real HCV data not found at {REAL_HCV_PATH}")
    return REAL_HCV_PATH
