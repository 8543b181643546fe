"""Report figures: tuning curve, confusion matrix and variable importance."""

from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402
from sklearn.metrics import ConfusionMatrixDisplay  # noqa: E402


def _save(fig, output_path: Path) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(output_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return output_path


def plot_tuning_curve(tuning_results: pd.DataFrame, output_path: Path) -> Path:
    """Cross-validated ROC AUC against SVM cost (log2 axis)."""
    fig, ax = plt.subplots(figsize=(7.5, 4.5))
    ax.errorbar(
        tuning_results["C"],
        tuning_results["roc"],
        yerr=tuning_results["roc_sd"],
        marker="o",
        capsize=3,
    )
    ax.set_xscale("log", base=2)
    ax.set_xlabel("Cost")
    ax.set_ylabel("ROC (Cross-Validation)")
    ax.set_title("SVM tuning")
    ax.grid(alpha=0.3, linestyle="--")
    return _save(fig, output_path)


def plot_confusion_matrix(metrics: dict, output_path: Path) -> Path:
    """Test-set confusion matrix as a heatmap."""
    fig, ax = plt.subplots(figsize=(5, 4.5))
    ConfusionMatrixDisplay(
        np.asarray(metrics["confusion_matrix"]), display_labels=metrics["labels"]
    ).plot(ax=ax, cmap="Blues", colorbar=False)
    ax.set_title(f"Confusion matrix (accuracy={metrics['accuracy']:.3f})")
    return _save(fig, output_path)


def plot_variable_importance(importance: pd.DataFrame, output_path: Path) -> Path:
    """Horizontal bar chart of permutation importances, largest on top."""
    n = len(importance)
    fig, ax = plt.subplots(figsize=(7.5, max(3.0, 0.4 * n)))
    ax.barh(
        range(n),
        importance["importance"],
        xerr=importance["importance_sd"],
        color="steelblue",
        edgecolor="black",
        linewidth=0.5,
    )
    ax.set_yticks(range(n))
    ax.set_yticklabels(importance["feature"])
    ax.invert_yaxis()
    ax.set_xlabel("Mean AUC decrease")
    ax.set_title("Permutation importance")
    ax.grid(axis="x", alpha=0.3, linestyle="--")
    return _save(fig, output_path)
