"""Main pipeline orchestrator for hepatitis C classification.

Runs every stage of the analysis in order:
1. Loading: Read the HCV blood-test CSV
2. Summary: Write a dataset structure report
3. Cleaning: Recode the label to Blood / Hepatitis, drop incomplete rows,
   drop demographic covariates
4. Splitting: Stratified train/test split
5. Training: Tune and fit the standardized radial SVM
6. Evaluation: Confusion matrix and test statistics
7. Importance: Permutation feature importance, reports and figures
"""

import argparse
import logging
from pathlib import Path
from typing import Any

from config.settings import Settings
from hepc_svm.feature_extraction.features import select_features
from hepc_svm.feature_extraction.labels import clean_dataset
from hepc_svm.ingestion.hepc_loader import load_hepatitis_csv
from hepc_svm.ingestion.summary import generate_summary_report
from hepc_svm.prediction.evaluate import evaluate_model, generate_evaluation_report
from hepc_svm.prediction.importance import permutation_feature_importance
from hepc_svm.prediction.model import save_model, train_svm
from hepc_svm.prediction.plots import (
    plot_confusion_matrix,
    plot_tuning_curve,
    plot_variable_importance,
)
from hepc_svm.prediction.split import stratified_split


logger = logging.getLogger(__name__)


# Artifact paths, relative to the output directory
ARTIFACT_NAMES = {
    "summary_report": Path("reports/dataset_summary.md"),
    "model": Path("models/svm_radial.pkl"),
    "eval_report": Path("reports/evaluation_svm.md"),
    "tuning_plot": Path("figures/tuning_curve.png"),
    "confusion_plot": Path("figures/confusion_matrix.png"),
    "importance_plot": Path("figures/variable_importance.png"),
}


def default_paths(output_dir: Path) -> dict[str, Path]:
    """Artifact paths under output_dir."""
    return {key: Path(output_dir) / name for key, name in ARTIFACT_NAMES.items()}


def run_pipeline(
    settings: Settings,
    paths: dict[str, Path] | None = None,
) -> dict[str, Any]:
    """Run the complete HCV classification analysis.

    Every stochastic stage receives settings.seed explicitly. Any failure
    (missing file or column, unexpected label, solver error) propagates.

    Args:
        settings: Pipeline configuration settings
        paths: Override artifact paths (uses default_paths(settings.output_dir) if None)

    Returns:
        Dictionary containing:
            - n_raw, n_clean, n_train, n_test: Row counts per stage
            - feature_names: Predictor columns
            - best_params: Winning C and gamma
            - cv_roc: Mean cross-validated ROC AUC of the winner
            - metrics: Test-set evaluation metrics
            - importance: Permutation importance DataFrame
            - artifact_paths: Paths to generated artifacts
    """
    paths = paths or default_paths(settings.output_dir)
    label_col = settings.label_column

    # Stage 1: Loading
    logger.info("Stage 1: Loading dataset...")
    raw_df = load_hepatitis_csv(
        settings.data_path,
        required_columns=[label_col, *settings.excluded_columns],
    )

    # Stage 2: Summary
    logger.info("Stage 2: Writing dataset summary...")
    generate_summary_report(raw_df, label_col, output_path=paths["summary_report"])
    logger.info(f"  Report saved to {paths['summary_report']}")

    # Stage 3: Cleaning and predictor selection
    logger.info("Stage 3: Recoding labels and selecting features...")
    clean_df = clean_dataset(raw_df, label_col=label_col)
    logger.info(f"  {len(clean_df)} complete rows, classes: "
                f"{clean_df[label_col].value_counts().to_dict()}")

    X, y = select_features(clean_df, label_col=label_col, exclude=settings.excluded_columns)
    feature_cols = list(X.columns)
    model_df = X.assign(**{label_col: y})

    # Stage 4: Splitting
    logger.info("Stage 4: Stratified train/test split...")
    train_df, test_df = stratified_split(
        model_df,
        target_col=label_col,
        train_size=settings.train_fraction,
        random_state=settings.seed,
    )
    logger.info(f"  Split: train={len(train_df)}, test={len(test_df)}")

    X_train = train_df[feature_cols]
    y_train = train_df[label_col]
    X_test = test_df[feature_cols]
    y_test = test_df[label_col]

    # Stage 5: Training
    logger.info("Stage 5: Tuning and fitting radial SVM...")
    model = train_svm(
        X_train,
        y_train,
        cv_folds=settings.cv_folds,
        tune_length=settings.tune_length,
        positive_class=settings.positive_class,
        random_state=settings.seed,
        n_jobs=settings.n_jobs,
    )
    save_model(model, paths["model"])
    logger.info(f"  Model saved to {paths['model']}")

    # Stage 6: Evaluation
    logger.info("Stage 6: Evaluating on test set...")
    metrics = evaluate_model(model, X_test, y_test, positive_class=settings.positive_class)
    logger.info(
        f"  Accuracy: {metrics['accuracy']:.4f}, Kappa: {metrics['kappa']:.4f}, "
        f"Sensitivity: {metrics['sensitivity']:.4f}, Specificity: {metrics['specificity']:.4f}"
    )

    # Stage 7: Importance, reports and figures
    logger.info("Stage 7: Permutation importance and reporting...")
    importance = permutation_feature_importance(
        model,
        X_train,
        y_train,
        reference_class=settings.importance_class,
        n_repeats=settings.permutation_repeats,
        random_state=settings.seed,
        n_jobs=settings.n_jobs,
    )

    generate_evaluation_report(metrics, importance, model.tuning_results, paths["eval_report"])
    plot_tuning_curve(model.tuning_results, paths["tuning_plot"])
    plot_confusion_matrix(metrics, paths["confusion_plot"])
    plot_variable_importance(importance, paths["importance_plot"])
    logger.info(f"  Report saved to {paths['eval_report']}")

    return {
        "n_raw": len(raw_df),
        "n_clean": len(clean_df),
        "n_train": len(train_df),
        "n_test": len(test_df),
        "feature_names": feature_cols,
        "best_params": model.best_params,
        "cv_roc": model.best_score,
        "metrics": metrics,
        "importance": importance,
        "artifact_paths": paths,
    }


def main():
    """CLI entry point for the pipeline."""
    parser = argparse.ArgumentParser(
        description="Train and evaluate an SVM classifier on the hepatitis C dataset",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--data",
        "-d",
        type=Path,
        default=None,
        help="Path to the HCV CSV file (overrides DATA_PATH)",
    )
    parser.add_argument(
        "--output-dir",
        "-o",
        type=Path,
        default=None,
        help="Output directory for models, reports and figures",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for every stochastic stage (overrides SEED)",
    )
    parser.add_argument(
        "--n-jobs",
        type=int,
        default=None,
        help="Parallel jobs for cross-validation and permutation importance",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Load settings
    settings = Settings()

    # Override settings from CLI args
    updates = {}
    if args.data is not None:
        updates["data_path"] = args.data
    if args.output_dir is not None:
        updates["output_dir"] = args.output_dir
    if args.seed is not None:
        updates["seed"] = args.seed
    if args.n_jobs is not None:
        updates["n_jobs"] = args.n_jobs

    if updates:
        settings = settings.model_copy(update=updates)

    # Check input exists
    if not settings.data_path.exists():
        logger.error(f"Dataset not found: {settings.data_path}")
        return 1

    logger.info("Starting hepatitis C SVM pipeline...")
    result = run_pipeline(settings)

    metrics = result["metrics"]
    cm = metrics["confusion_matrix"]
    pos, neg = metrics["labels"]

    # Print summary
    print("\n" + "=" * 60)
    print("Pipeline Complete")
    print("=" * 60)
    print(f"Rows: {result['n_raw']} raw, {result['n_clean']} complete")
    print(f"Split: {result['n_train']} train, {result['n_test']} test")
    print(f"Best: C={result['best_params']['C']:g}, "
          f"gamma={result['best_params']['gamma']:.4f}, CV ROC={result['cv_roc']:.4f}")
    print(f"\nConfusion matrix (rows = actual, positive class = {pos}):")
    print(f"  {pos:>10}: {cm[0, 0]:4d} {cm[0, 1]:4d}")
    print(f"  {neg:>10}: {cm[1, 0]:4d} {cm[1, 1]:4d}")
    print(f"\n  Accuracy:    {metrics['accuracy']:.4f} "
          f"({metrics['accuracy_ci_lower']:.4f}, {metrics['accuracy_ci_upper']:.4f})")
    print(f"  Kappa:       {metrics['kappa']:.4f}")
    print(f"  Sensitivity: {metrics['sensitivity']:.4f}")
    print(f"  Specificity: {metrics['specificity']:.4f}")
    print("\nTop features:")
    for _, row in result["importance"].head(5).iterrows():
        print(f"  {row['feature']:<8} {row['importance']:.4f}")
    print(f"\nArtifacts written to {settings.output_dir}")

    return 0


if __name__ == "__main__":
    exit(main())
