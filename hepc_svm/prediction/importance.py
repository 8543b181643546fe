"""Permutation feature importance for the HCV classifier.

Each feature's importance is the mean drop in ROC AUC of the predicted
probability for a reference class when that feature's values are shuffled
across rows. The estimate varies with the permutation seed.
"""

import logging
from typing import Callable, Union

import numpy as np
import pandas as pd
from sklearn.inspection import permutation_importance
from sklearn.metrics import roc_auc_score

from hepc_svm.feature_extraction.labels import HEPATITIS
from hepc_svm.prediction.model import TrainedModel

logger = logging.getLogger(__name__)


def class_probability_auc(reference_class: str) -> Callable:
    """Build a scorer: ROC AUC of the predicted probability for reference_class.

    The returned callable has the ``scorer(estimator, X, y)`` signature
    accepted by sklearn's permutation_importance.
    """

    def scorer(estimator, X, y) -> float:
        column = list(estimator.classes_).index(reference_class)
        proba = estimator.predict_proba(X)[:, column]
        return roc_auc_score(np.asarray(y) == reference_class, proba)

    return scorer


def permutation_feature_importance(
    model: TrainedModel,
    X: pd.DataFrame,
    y: Union[pd.Series, np.ndarray],
    reference_class: str = HEPATITIS,
    n_repeats: int = 5,
    random_state: int = 1234,
    n_jobs: int | None = None,
) -> pd.DataFrame:
    """Rank features by permutation importance.

    Args:
        model: Trained model from train_svm()
        X: Features to permute (the training subset)
        y: Labels matching X
        reference_class: Class whose probability the AUC is computed for
        n_repeats: Number of shuffles per feature
        random_state: Seed for the permutations
        n_jobs: Parallel jobs (None = serial)

    Returns:
        DataFrame with columns [feature, importance, importance_sd], sorted
        by importance descending
    """
    if reference_class not in model.classes:
        raise ValueError(f"reference_class {reference_class!r} not in {model.classes}")

    y_array = np.asarray(pd.Series(y).astype(str))
    result = permutation_importance(
        model.estimator,
        X,
        y_array,
        scoring=class_probability_auc(reference_class),
        n_repeats=n_repeats,
        random_state=random_state,
        n_jobs=n_jobs,
    )

    importance_df = pd.DataFrame({
        "feature": list(X.columns),
        "importance": result.importances_mean,
        "importance_sd": result.importances_std,
    })
    importance_df = importance_df.sort_values("importance", ascending=False).reset_index(drop=True)

    logger.info(
        f"Top features for {reference_class}: "
        + ", ".join(importance_df["feature"].head(3))
    )
    return importance_df
