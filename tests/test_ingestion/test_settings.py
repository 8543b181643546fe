"""Tests for modelling configuration fields."""

import pytest
from pathlib import Path
from pydantic import ValidationError

from config.settings import Settings


@pytest.fixture(autouse=True)
def _isolate_from_dotenv(monkeypatch, tmp_path):
    """Prevent .env file from leaking into settings tests."""
    for name in ("SEED", "TRAIN_FRACTION", "CV_FOLDS", "POSITIVE_CLASS", "DATA_PATH"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)  # no .env in tmp_path


class TestSettingsDefaults:
    """Defaults reproduce the reference analysis configuration."""

    def test_defaults(self):
        s = Settings()
        assert s.seed == 1234
        assert s.train_fraction == 0.7
        assert s.cv_folds == 10
        assert s.tune_length == 10
        assert s.permutation_repeats == 5
        assert s.excluded_columns == ["Age", "Sex"]
        assert s.positive_class == "Blood"
        assert s.importance_class == "Hepatitis"

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("SEED", "7")
        monkeypatch.setenv("DATA_PATH", "elsewhere.csv")
        s = Settings()
        assert s.seed == 7
        assert s.data_path == Path("elsewhere.csv")


class TestSettingsValidation:
    """Invalid modelling parameters are rejected."""

    @pytest.mark.parametrize("fraction", [0.0, 1.0, 1.5])
    def test_train_fraction_out_of_range_raises(self, fraction):
        with pytest.raises(ValidationError, match="TRAIN_FRACTION"):
            Settings(train_fraction=fraction)

    def test_single_fold_raises(self):
        with pytest.raises(ValidationError, match="CV_FOLDS"):
            Settings(cv_folds=1)

    def test_unknown_positive_class_raises(self):
        with pytest.raises(ValidationError, match="POSITIVE_CLASS"):
            Settings(positive_class="Cirrhosis")

    def test_identical_classes_raise(self):
        with pytest.raises(ValidationError, match="must differ"):
            Settings(positive_class="Hepatitis", importance_class="Hepatitis")

    def test_model_copy_applies_cli_overrides(self):
        s = Settings().model_copy(update={"seed": 99})
        assert s.seed == 99
