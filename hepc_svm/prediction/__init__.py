"""Prediction module for hepatitis C classification from blood tests.

This module provides functions for splitting, model training, evaluation,
feature importance and reporting for the binary Blood / Hepatitis outcome.

Data Splitting:
- Stratified 70/30 split preserving class balance

Model Training:
- Standardized radial-kernel SVM
- Cost tuned by stratified k-fold cross-validation on ROC AUC
- Model save/load with pickle

Evaluation:
- Confusion matrix with accuracy, kappa, sensitivity, specificity,
  predictive values and McNemar's test
- Permutation feature importance on class-probability AUC
- Markdown report and matplotlib figures
"""

from hepc_svm.prediction.split import (
    stratified_split,
)
from hepc_svm.prediction.model import (
    TrainedModel,
    build_pipeline,
    build_tuning_grid,
    estimate_rbf_gamma,
    train_svm,
    save_model,
    load_model,
)
from hepc_svm.prediction.evaluate import (
    confusion_statistics,
    evaluate_model,
    generate_evaluation_report,
)
from hepc_svm.prediction.importance import (
    class_probability_auc,
    permutation_feature_importance,
)

__all__ = [
    # Data splitting
    "stratified_split",
    # Model training and persistence
    "TrainedModel",
    "build_pipeline",
    "build_tuning_grid",
    "estimate_rbf_gamma",
    "train_svm",
    "save_model",
    "load_model",
    # Evaluation and reporting
    "confusion_statistics",
    "evaluate_model",
    "generate_evaluation_report",
    # Feature importance
    "class_probability_auc",
    "permutation_feature_importance",
]
