from __future__ import annotations

import pickle
from pathlib import Path
from typing import Dict, Tuple

import numpy as np
import pandas as pd
from lightgbm import LGBMClassifier
from sklearn.ensemble import RandomForestClassifier
from sklearn.impute import SimpleImputer
from sklearn.linear_model import LogisticRegression
from sklearn.metrics import accuracy_score, log_loss, roc_auc_score
from sklearn.model_selection import train_test_split
from sklearn.pipeline import Pipeline, make_pipeline
from sklearn.preprocessing import StandardScaler

from bigten_pred.config import FileConfig, LogConfig, ModelConfig
from bigten_pred.utils import ensure_dir, setup_logger

logger = setup_logger("train", LogConfig.LOG_DIR / "train.log")

MODEL_TYPES = ("logistic", "rf", "lightgbm")


def feature_columns(df: pd.DataFrame) -> list[str]:
    """Return the home/away statistic columns used as model inputs."""
    return [c for c in df.columns if c.startswith(("Home_", "Away_"))]


def split_games(
    df: pd.DataFrame,
    test_size: float = ModelConfig.TEST_SIZE,
    random_state: int = ModelConfig.RANDOM_STATE,
    target: str = ModelConfig.TARGET_VARIABLE,
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Seeded train/test split, stratified on the outcome when possible."""
    counts = df[target].value_counts()
    stratify = df[target] if len(counts) > 1 and counts.min() >= 2 else None
    train_df, test_df = train_test_split(
        df, test_size=test_size, random_state=random_state, stratify=stratify
    )
    return train_df, test_df


def build_model(model_type: str = ModelConfig.DEFAULT_MODEL_TYPE) -> Pipeline:
    """Return an unfitted classifier pipeline with median imputation."""
    if model_type == "logistic":
        estimator = LogisticRegression(**ModelConfig.LOGISTIC_PARAMS)
        return make_pipeline(SimpleImputer(strategy="median"), StandardScaler(), estimator)
    if model_type == "rf":
        estimator = RandomForestClassifier(**ModelConfig.RF_PARAMS)
    elif model_type == "lightgbm":
        estimator = LGBMClassifier(**ModelConfig.LGBM_PARAMS)
    else:
        raise ValueError(f"Unknown model_type '{model_type}', expected one of {MODEL_TYPES}")
    return make_pipeline(SimpleImputer(strategy="median"), estimator)


def evaluate_model(model: Pipeline, X: pd.DataFrame, y: pd.Series) -> Dict[str, float]:
    """Accuracy, log-loss and ROC AUC on ``X``/``y``."""
    proba = model.predict_proba(X)[:, 1]
    preds = (proba >= 0.5).astype(int)
    metrics = {
        "accuracy": accuracy_score(y, preds),
        "log_loss": log_loss(y, proba, labels=[0, 1]),
        # AUC is undefined with a single class in the test set
        "roc_auc": roc_auc_score(y, proba) if y.nunique() > 1 else np.nan,
    }
    return metrics


def train_outcome_model(
    train_df: pd.DataFrame,
    test_df: pd.DataFrame,
    model_type: str = ModelConfig.DEFAULT_MODEL_TYPE,
    target: str = ModelConfig.TARGET_VARIABLE,
) -> Tuple[Pipeline, Dict[str, float], list[str]]:
    """Fit a home-win classifier and return the model, test metrics and features."""
    features = feature_columns(train_df)
    if not features:
        raise ValueError("No Home_/Away_ feature columns found")
    if train_df[target].nunique() < 2:
        raise ValueError("Training data needs both home wins and home losses")

    logger.info("Training %s model on %d games with %d features", model_type, len(train_df), len(features))
    model = build_model(model_type)
    model.fit(train_df[features], train_df[target])

    metrics = evaluate_model(model, test_df[features], test_df[target])
    logger.info("Evaluation metrics: %s", metrics)
    return model, metrics, features


def save_model(model, path: Path = FileConfig.MODEL_FILE) -> Path:
    """Pickle ``model`` to ``path`` and return the path."""
    path = Path(path)
    ensure_dir(path.parent)
    with open(path, "wb") as f:
        pickle.dump(model, f)
    logger.info("Saved model to %s", path)
    return path


def load_model(path: Path = FileConfig.MODEL_FILE):
    """Load a model written by :func:`save_model`."""
    with open(path, "rb") as f:
        return pickle.load(f)
