"""Structure and summary statistics of the raw dataset.

Used to inspect the table before modelling: column types, missing values
and the label distribution, written out as a markdown report.
"""

from pathlib import Path

import pandas as pd


def summarize_dataset(df: pd.DataFrame) -> pd.DataFrame:
    """Per-column summary of a DataFrame.

    Args:
        df: Raw dataset.

    Returns:
        DataFrame indexed by column name with dtype, non_null and missing
        counts; numeric columns also get min, q1, median, mean, q3 and max.
    """
    summary = pd.DataFrame({
        "dtype": df.dtypes.astype(str),
        "non_null": df.notna().sum(),
        "missing": df.isna().sum(),
    })

    numeric = df.select_dtypes(include="number")
    if not numeric.empty:
        stats = pd.DataFrame({
            "min": numeric.min(),
            "q1": numeric.quantile(0.25),
            "median": numeric.median(),
            "mean": numeric.mean(),
            "q3": numeric.quantile(0.75),
            "max": numeric.max(),
        })
        summary = summary.join(stats)

    return summary


def class_distribution(df: pd.DataFrame, label_col: str) -> pd.Series:
    """Count rows per label value, missing labels included."""
    return df[label_col].value_counts(dropna=False).sort_index()


def _format_value(value) -> str:
    if isinstance(value, float):
        return "" if pd.isna(value) else f"{value:.2f}"
    return str(value)


def generate_summary_report(
    df: pd.DataFrame,
    label_col: str,
    output_path: Path | None = None,
) -> str:
    """Generate a markdown report describing the raw dataset.

    Args:
        df: Raw dataset.
        label_col: Name of the label column.
        output_path: Optional path to write the report. If None, only returns string.

    Returns:
        The markdown report.
    """
    summary = summarize_dataset(df)
    counts = class_distribution(df, label_col)
    n_incomplete = int(df.isna().any(axis=1).sum())

    lines = [
        "# Dataset Summary",
        "",
        f"- Rows: {len(df)}",
        f"- Columns: {df.shape[1]}",
        f"- Rows with missing values: {n_incomplete}",
        "",
        "## Columns",
        "",
        "| Column | " + " | ".join(summary.columns) + " |",
        "|---|" + "---|" * len(summary.columns),
    ]
    for column, row in summary.iterrows():
        cells = " | ".join(_format_value(v) for v in row.values)
        lines.append(f"| {column} | {cells} |")

    lines += [
        "",
        f"## {label_col} Distribution",
        "",
        "| Value | Count |",
        "|---|---|",
    ]
    for value, count in counts.items():
        lines.append(f"| {value} | {count} |")

    report = "\n".join(lines) + "\n"

    if output_path is not None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(report)

    return report
