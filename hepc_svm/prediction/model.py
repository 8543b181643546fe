"""SVM training and persistence for the HCV classifier.

Fits a standardized radial-kernel SVM whose cost is tuned by stratified
k-fold cross-validation on ROC AUC. The kernel width is fixed beforehand
from the spread of pairwise distances in the training data. Provides
save/load functionality for model persistence.
"""

import logging
import pickle
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

import numpy as np
import pandas as pd
from sklearn.metrics import make_scorer, recall_score
from sklearn.model_selection import GridSearchCV, StratifiedKFold
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import StandardScaler
from sklearn.svm import SVC

from hepc_svm.feature_extraction.labels import OUTCOME_CLASSES

logger = logging.getLogger(__name__)


@dataclass
class TrainedModel:
    """A fitted scaler+SVM pipeline together with its tuning record.

    Attributes:
        estimator: Pipeline refit on the full training set with the best
            parameters; reapplies the training standardization on predict.
        best_params: Winning ``C`` and ``gamma``.
        best_score: Mean out-of-fold ROC AUC of the winning configuration.
        tuning_results: One row per candidate with columns
            C, gamma, roc, sens, spec, roc_sd.
        feature_names: Predictor columns in training order.
        classes: Class labels in the estimator's order.
    """

    estimator: Pipeline
    best_params: dict[str, float]
    best_score: float
    tuning_results: pd.DataFrame
    feature_names: list[str] = field(default_factory=list)
    classes: list[str] = field(default_factory=list)

    def predict(self, X: Union[pd.DataFrame, np.ndarray]) -> np.ndarray:
        return self.estimator.predict(X)

    def predict_proba(self, X: Union[pd.DataFrame, np.ndarray]) -> np.ndarray:
        return self.estimator.predict_proba(X)


def estimate_rbf_gamma(
    X: Union[pd.DataFrame, np.ndarray],
    frac: float = 0.5,
    random_state: int = 1234,
) -> float:
    """Estimate a radial-kernel width from the training data.

    Draws ``floor(frac * n)`` random row pairs (with replacement) from the
    standardized data and computes their squared distances. The inverse of
    the 0.9 and 0.1 quantiles of the non-zero distances bound a sensible
    range for gamma; the midpoint of that range is returned.

    Args:
        X: Training features (n_samples, n_features)
        frac: Fraction of rows used to form pairs
        random_state: Random seed for pair sampling

    Returns:
        Kernel coefficient gamma for ``exp(-gamma * ||x - x'||^2)``
    """
    X_scaled = StandardScaler().fit_transform(np.asarray(X, dtype=float))
    n_rows = X_scaled.shape[0]
    n_pairs = max(int(np.floor(frac * n_rows)), 2)

    rng = np.random.default_rng(random_state)
    first = rng.integers(0, n_rows, size=n_pairs)
    second = rng.integers(0, n_rows, size=n_pairs)

    dist = np.sum((X_scaled[first] - X_scaled[second]) ** 2, axis=1)
    dist = dist[dist != 0]
    if dist.size == 0:
        raise ValueError("Cannot estimate kernel width: all sampled rows are identical")

    upper, lower = 1.0 / np.quantile(dist, [0.1, 0.9])
    return float((upper + lower) / 2.0)


def build_tuning_grid(
    X: Union[pd.DataFrame, np.ndarray],
    tune_length: int = 10,
    random_state: int = 1234,
) -> dict[str, list[float]]:
    """Candidate hyperparameters for the radial SVM.

    The kernel width is fixed by estimate_rbf_gamma; the cost takes
    ``tune_length`` values ``2 ** (i - 2)`` (0.25, 0.5, 1, ...).

    Returns:
        Parameter grid keyed by pipeline step parameter names
    """
    gamma = estimate_rbf_gamma(X, random_state=random_state)
    costs = [float(2.0 ** (i - 2)) for i in range(tune_length)]
    return {"svc__C": costs, "svc__gamma": [gamma]}


def build_pipeline(random_state: int = 1234) -> Pipeline:
    """Standardize features then fit a probability-calibrated RBF SVM."""
    return Pipeline([
        ("scaler", StandardScaler()),
        ("svc", SVC(kernel="rbf", probability=True, random_state=random_state)),
    ])


def _tuning_table(cv_results: dict[str, Any]) -> pd.DataFrame:
    return pd.DataFrame({
        "C": np.asarray(cv_results["param_svc__C"], dtype=float),
        "gamma": np.asarray(cv_results["param_svc__gamma"], dtype=float),
        "roc": cv_results["mean_test_roc"],
        "sens": cv_results["mean_test_sens"],
        "spec": cv_results["mean_test_spec"],
        "roc_sd": cv_results["std_test_roc"],
    })


def train_svm(
    X_train: Union[pd.DataFrame, np.ndarray],
    y_train: Union[pd.Series, np.ndarray],
    cv_folds: int = 10,
    tune_length: int = 10,
    positive_class: str = OUTCOME_CLASSES[0],
    random_state: int = 1234,
    n_jobs: int | None = None,
) -> TrainedModel:
    """Tune and fit the radial SVM on the training subset.

    Every candidate is scored by stratified k-fold cross-validation; the
    one with the highest mean ROC AUC is refit on the whole training set.
    Fold assignment depends only on random_state, so parallel fitting
    (n_jobs) gives the same result as serial fitting. Solver or fold
    failures are raised, not scored.

    Args:
        X_train: Training features (n_samples, n_features)
        y_train: Training labels (n_samples,)
        cv_folds: Number of cross-validation folds
        tune_length: Number of cost values to try
        positive_class: Class whose recall is reported as sensitivity
        random_state: Seed for the kernel-width estimate, fold assignment
            and probability calibration
        n_jobs: Parallel jobs for GridSearchCV (None = serial)

    Returns:
        TrainedModel holding the refit pipeline and the tuning table
    """
    y_array = np.asarray(pd.Series(y_train).astype(str))
    classes = sorted(np.unique(y_array).tolist())
    if len(classes) != 2:
        raise ValueError(f"Expected 2 classes in training labels, found {classes}")
    if positive_class not in classes:
        raise ValueError(f"positive_class {positive_class!r} not in training labels {classes}")
    negative_class = next(c for c in classes if c != positive_class)

    param_grid = build_tuning_grid(X_train, tune_length=tune_length, random_state=random_state)
    logger.info(
        f"Tuning {tune_length} candidates (gamma={param_grid['svc__gamma'][0]:.4f}) "
        f"with {cv_folds}-fold CV"
    )

    scoring = {
        "roc": "roc_auc",
        "sens": make_scorer(recall_score, pos_label=positive_class),
        "spec": make_scorer(recall_score, pos_label=negative_class),
    }

    search = GridSearchCV(
        build_pipeline(random_state=random_state),
        param_grid,
        scoring=scoring,
        refit="roc",
        cv=StratifiedKFold(n_splits=cv_folds, shuffle=True, random_state=random_state),
        n_jobs=n_jobs,
        error_score="raise",
    )
    search.fit(X_train, y_array)

    best_params = {
        "C": float(search.best_params_["svc__C"]),
        "gamma": float(search.best_params_["svc__gamma"]),
    }
    logger.info(
        f"Best: C={best_params['C']}, gamma={best_params['gamma']:.4f}, "
        f"CV ROC={search.best_score_:.4f}"
    )

    feature_names = list(X_train.columns) if isinstance(X_train, pd.DataFrame) else []

    return TrainedModel(
        estimator=search.best_estimator_,
        best_params=best_params,
        best_score=float(search.best_score_),
        tuning_results=_tuning_table(search.cv_results_),
        feature_names=feature_names,
        classes=[str(c) for c in search.best_estimator_.classes_],
    )


def save_model(model: TrainedModel, path: Path) -> None:
    """Save a trained model to disk in pickle format.

    Args:
        model: Trained model to save
        path: Path to save the model
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "wb") as f:
        pickle.dump(model, f)


def load_model(path: Path) -> TrainedModel:
    """Load a trained model from disk.

    Args:
        path: Path to the saved model

    Returns:
        Loaded model
    """
    with open(Path(path), "rb") as f:
        return pickle.load(f)
