"""Model evaluation and reporting for the HCV classifier.

Provides functions for scoring the held-out test set (confusion matrix,
accuracy with its exact binomial interval, Cohen's kappa, sensitivity,
specificity and predictive values) and generating a markdown evaluation
report.
"""

from pathlib import Path
from typing import Sequence, Union

import numpy as np
import pandas as pd
from scipy.stats import binomtest, chi2
from sklearn.metrics import cohen_kappa_score, confusion_matrix, roc_auc_score

from hepc_svm.feature_extraction.labels import OUTCOME_CLASSES
from hepc_svm.prediction.model import TrainedModel


def _safe_div(numerator: float, denominator: float) -> float:
    return float(numerator) / denominator if denominator else float("nan")


def _mcnemar_p_value(b: int, c: int) -> float:
    """McNemar's chi-squared test with continuity correction."""
    if b + c == 0:
        return float("nan")
    statistic = (abs(b - c) - 1) ** 2 / (b + c)
    return float(chi2.sf(statistic, df=1))


def confusion_statistics(
    y_true: Union[pd.Series, np.ndarray],
    y_pred: Union[pd.Series, np.ndarray],
    positive_class: str = OUTCOME_CLASSES[0],
    labels: Sequence[str] = OUTCOME_CLASSES,
) -> dict:
    """Compute a 2x2 confusion matrix and its derived statistics.

    Args:
        y_true: Reference labels
        y_pred: Predicted labels
        positive_class: Class treated as positive for sensitivity, PPV etc.
        labels: The two class labels

    Returns:
        Dictionary containing:
            - confusion_matrix: 2x2 array, rows = actual, columns = predicted,
              positive class first
            - labels: Class order used for the matrix
            - accuracy, accuracy_ci_lower, accuracy_ci_upper: Accuracy and its
              exact (Clopper-Pearson) 95% interval
            - no_information_rate: Share of the largest reference class
            - accuracy_p_value: One-sided binomial p-value of accuracy > NIR
            - kappa: Cohen's kappa
            - mcnemar_p_value: McNemar's test on the off-diagonal cells
            - sensitivity, specificity, ppv, npv
            - prevalence, detection_rate, detection_prevalence
            - balanced_accuracy
    """
    if positive_class not in labels:
        raise ValueError(f"positive_class {positive_class!r} not in labels {list(labels)}")
    if len(labels) != 2:
        raise ValueError(f"Expected two labels, got {list(labels)}")

    y_true = np.asarray(pd.Series(y_true).astype(str))
    y_pred = np.asarray(pd.Series(y_pred).astype(str))
    negative_class = next(c for c in labels if c != positive_class)
    order = [positive_class, negative_class]

    cm = confusion_matrix(y_true, y_pred, labels=order)
    tp, fn = int(cm[0, 0]), int(cm[0, 1])
    fp, tn = int(cm[1, 0]), int(cm[1, 1])
    n = tp + fn + fp + tn

    correct = tp + tn
    accuracy_ci = binomtest(correct, n).proportion_ci(confidence_level=0.95, method="exact")
    no_information_rate = max(tp + fn, fp + tn) / n

    sensitivity = _safe_div(tp, tp + fn)
    specificity = _safe_div(tn, tn + fp)

    return {
        "confusion_matrix": cm,
        "labels": order,
        "accuracy": correct / n,
        "accuracy_ci_lower": float(accuracy_ci.low),
        "accuracy_ci_upper": float(accuracy_ci.high),
        "no_information_rate": no_information_rate,
        "accuracy_p_value": float(
            binomtest(correct, n, p=no_information_rate, alternative="greater").pvalue
        ),
        "kappa": float(cohen_kappa_score(y_true, y_pred, labels=order)),
        "mcnemar_p_value": _mcnemar_p_value(fn, fp),
        "sensitivity": sensitivity,
        "specificity": specificity,
        "ppv": _safe_div(tp, tp + fp),
        "npv": _safe_div(tn, tn + fn),
        "prevalence": (tp + fn) / n,
        "detection_rate": tp / n,
        "detection_prevalence": (tp + fp) / n,
        "balanced_accuracy": (sensitivity + specificity) / 2,
    }


def evaluate_model(
    model: TrainedModel,
    X_test: Union[pd.DataFrame, np.ndarray],
    y_test: Union[pd.Series, np.ndarray],
    positive_class: str = OUTCOME_CLASSES[0],
) -> dict:
    """Evaluate a trained model on the held-out test set.

    Args:
        model: Trained model from train_svm()
        X_test: Test features
        y_test: Test labels, used only for scoring

    Returns:
        Dictionary with everything from confusion_statistics() plus:
            - predictions: Predicted label per test row
            - auroc: Test ROC AUC of the positive-class probability
            - n_test: Number of test rows
    """
    y_true = pd.Series(y_test).astype(str).to_numpy()
    y_pred = model.predict(X_test)

    index = X_test.index if isinstance(X_test, pd.DataFrame) else None
    predictions = pd.Series(y_pred, index=index, name="predicted")

    metrics = confusion_statistics(
        y_true, y_pred, positive_class=positive_class, labels=model.classes
    )

    positive_col = model.classes.index(positive_class)
    y_proba = model.predict_proba(X_test)[:, positive_col]
    metrics["auroc"] = float(roc_auc_score(y_true == positive_class, y_proba))
    metrics["predictions"] = predictions
    metrics["n_test"] = len(y_true)

    return metrics


def generate_evaluation_report(
    metrics: dict,
    feature_importance: pd.DataFrame,
    tuning_results: pd.DataFrame,
    output_path: Path,
) -> None:
    """Generate a markdown evaluation report.

    Creates a report with:
    - Cross-validated tuning results per candidate
    - Confusion matrix on the test set
    - Accuracy, kappa, sensitivity, specificity and predictive values
    - Permutation feature importance ranking

    Args:
        metrics: Dictionary of evaluation metrics from evaluate_model()
        feature_importance: DataFrame from permutation_feature_importance()
        tuning_results: TrainedModel.tuning_results
        output_path: Path to write the markdown report
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    tuning_rows = "\n".join(
        f"| {row['C']:g} | {row['gamma']:.5f} | {row['roc']:.4f} | "
        f"{row['sens']:.4f} | {row['spec']:.4f} | {row['roc_sd']:.4f} |"
        for _, row in tuning_results.iterrows()
    )
    tuning_table = f"""| C | gamma | ROC | Sens | Spec | ROC SD |
|---|---|---|---|---|---|
{tuning_rows}"""

    # Format confusion matrix
    cm = metrics["confusion_matrix"]
    pos, neg = metrics["labels"]
    cm_str = f"""| | Predicted {pos} | Predicted {neg} |
|---|---|---|
| **Actual {pos}** | {cm[0, 0]} | {cm[0, 1]} |
| **Actual {neg}** | {cm[1, 0]} | {cm[1, 1]} |"""

    feature_rows = "\n".join(
        f"| {i+1} | {row['feature']} | {row['importance']:.4f} | {row['importance_sd']:.4f} |"
        for i, row in feature_importance.reset_index(drop=True).iterrows()
    )
    features_table = f"""| Rank | Feature | Importance | SD |
|---|---|---|---|
{feature_rows}"""

    report = f"""# SVM Evaluation Report

## Cross-Validated Tuning

{tuning_table}

## Confusion Matrix

{cm_str}

Positive class: {pos}

## Test Statistics

| Metric | Value |
|---|---|
| **Accuracy** | {metrics['accuracy']:.4f} |
| **95% CI** | ({metrics['accuracy_ci_lower']:.4f}, {metrics['accuracy_ci_upper']:.4f}) |
| **No Information Rate** | {metrics['no_information_rate']:.4f} |
| **P-Value [Acc > NIR]** | {metrics['accuracy_p_value']:.3g} |
| **Kappa** | {metrics['kappa']:.4f} |
| **McNemar's Test P-Value** | {metrics['mcnemar_p_value']:.4f} |
| **Sensitivity** | {metrics['sensitivity']:.4f} |
| **Specificity** | {metrics['specificity']:.4f} |
| **Pos Pred Value** | {metrics['ppv']:.4f} |
| **Neg Pred Value** | {metrics['npv']:.4f} |
| **Prevalence** | {metrics['prevalence']:.4f} |
| **Detection Rate** | {metrics['detection_rate']:.4f} |
| **Detection Prevalence** | {metrics['detection_prevalence']:.4f} |
| **Balanced Accuracy** | {metrics['balanced_accuracy']:.4f} |
| **Test AUROC** | {metrics['auroc']:.4f} |

## Permutation Feature Importance

{features_table}
"""

    output_path.write_text(report)
