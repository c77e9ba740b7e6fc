from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

import pandas as pd

from bigten_pred.config import FileConfig, LogConfig, ModelConfig
from bigten_pred.models.train import MODEL_TYPES, save_model, split_games, train_outcome_model
from bigten_pred.utils import setup_logger

logger = setup_logger("train_outcome_model", LogConfig.LOG_DIR / "train_outcome_model.log")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fit a home-win classifier on the game feature table")
    parser.add_argument("--input", type=Path, default=FileConfig.GAME_TABLE_FILE, help="Game table CSV")
    parser.add_argument("--model-type", choices=MODEL_TYPES, default=ModelConfig.DEFAULT_MODEL_TYPE)
    parser.add_argument("--test-size", type=float, default=ModelConfig.TEST_SIZE)
    parser.add_argument("--random-state", type=int, default=ModelConfig.RANDOM_STATE)
    parser.add_argument("--model-path", type=Path, default=FileConfig.MODEL_FILE, help="Where to pickle the fitted model")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> dict:
    args = parse_args(argv)
    df = pd.read_csv(args.input)
    train_df, test_df = split_games(df, test_size=args.test_size, random_state=args.random_state)
    model, metrics, _ = train_outcome_model(train_df, test_df, model_type=args.model_type)
    save_model(model, args.model_path)
    for name, value in metrics.items():
        print(f"{name}: {value:.4f}")
    return metrics


if __name__ == "__main__":  # pragma: no cover
    main()
