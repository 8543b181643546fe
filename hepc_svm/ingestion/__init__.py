"""HCV dataset ingestion and inspection."""

from hepc_svm.ingestion.hepc_loader import (
    DEMOGRAPHIC_COLUMNS,
    LABEL_COLUMN,
    REQUIRED_COLUMNS,
    load_hepatitis_csv,
)
from hepc_svm.ingestion.summary import (
    class_distribution,
    generate_summary_report,
    summarize_dataset,
)

__all__ = [
    "DEMOGRAPHIC_COLUMNS",
    "LABEL_COLUMN",
    "REQUIRED_COLUMNS",
    "load_hepatitis_csv",
    "class_distribution",
    "generate_summary_report",
    "summarize_dataset",
]
