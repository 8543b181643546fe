from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hepc_svm.feature_extraction.labels import OUTCOME_CLASSES


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Paths
    data_path: Path = Field(default=Path("data/raw/hepatitisC_dataset.csv"))
    output_dir: Path = Field(default=Path("outputs"))

    # Dataset schema
    label_column: str = Field(default="Category")
    excluded_columns: list[str] = Field(default=["Age", "Sex"])

    # Reproducibility
    seed: int = Field(default=1234)

    # Split / tuning
    train_fraction: float = Field(default=0.7)
    cv_folds: int = Field(default=10)
    tune_length: int = Field(default=10)
    n_jobs: int | None = Field(default=None)

    # Evaluation / importance
    positive_class: str = Field(default="Blood")
    importance_class: str = Field(default="Hepatitis")
    permutation_repeats: int = Field(default=5)

    @model_validator(mode="after")
    def _validate_modelling_config(self) -> "Settings":
        if not 0.0 < self.train_fraction < 1.0:
            raise ValueError(
                f"TRAIN_FRACTION must be between 0 and 1, got {self.train_fraction}"
            )
        if self.cv_folds < 2:
            raise ValueError(f"CV_FOLDS must be at least 2, got {self.cv_folds}")
        if self.tune_length < 1:
            raise ValueError(f"TUNE_LENGTH must be positive, got {self.tune_length}")
        if self.permutation_repeats < 1:
            raise ValueError(
                f"PERMUTATION_REPEATS must be positive, got {self.permutation_repeats}"
            )
        for name in ("positive_class", "importance_class"):
            value = getattr(self, name)
            if value not in OUTCOME_CLASSES:
                raise ValueError(
                    f"{name.upper()} must be one of {OUTCOME_CLASSES}, got {value!r}"
                )
        if self.positive_class == self.importance_class:
            raise ValueError(
                f"POSITIVE_CLASS and IMPORTANCE_CLASS must differ, both are "
                f"{self.positive_class!r}"
            )
        return self
